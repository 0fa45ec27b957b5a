"""Move single objects between a session and the project's cache directory."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from projkit.cache import load_object, write_object
from projkit.errors import CacheError
from projkit.logging import get_logger
from projkit.security import sanitize_object_name
from projkit.session import Session

logger = get_logger(__name__, component="thaw")

_MISSING = object()


def thaw(session: Session, name: str) -> bool:
    """Load the cached object ``name`` into the session.

    A missing cache file only logs a warning and returns ``False``.
    """

    name = sanitize_object_name(name)
    try:
        value, path = load_object(session.layout, name)
    except FileNotFoundError:
        logger.warning(
            {
                "event": "cache_file_missing",
                "message": "Cached file does not exist.",
                "name": name,
            }
        )
        return False

    session.bind(name, value)
    logger.info(
        {
            "event": "object_thawed",
            "message": f"Loaded object {name} from cache.",
            "name": name,
            "path": str(path),
        }
    )
    return True


def freeze(session: Session, name: str, value: Any = _MISSING) -> Path:
    """Write ``value`` (default: the session's ``name``) to the cache."""

    name = sanitize_object_name(name)
    if value is _MISSING:
        try:
            value = session[name]
        except KeyError as exc:
            raise CacheError(
                f"Object {name} is not defined in the session",
                context={"name": name},
                cause=exc,
            ) from exc

    path = write_object(session.layout, name, value)
    logger.info({"event": "object_frozen", "name": name, "path": str(path)})
    return path


__all__ = ["freeze", "thaw"]
