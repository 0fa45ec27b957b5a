"""Request objects from the session, falling back to the cache.

``request`` answers "is this object available?" and makes it so if the cache
has it. ``request_all`` does the same for every session or cached name that
matches a regular expression.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from projkit.cache import list_cached
from projkit.errors import CacheError, PatternNotFoundError, wrap_error
from projkit.logging import get_logger, log_exception
from projkit.security import sanitize_object_name, sanitize_pattern
from projkit.session import Session
from projkit.thaw import thaw

Fallback = Callable[[], Any]

logger = get_logger(__name__, component="request")


def _run_fallback(session: Session, name: str, fallback: Fallback) -> None:
    value = fallback()
    if value is not None:
        session.bind(name, value)


def request(session: Session, name: str, fallback: Optional[Fallback] = None) -> bool:
    """Make ``name`` available in ``session`` if possible.

    Returns ``True`` when the object was already bound or has been thawed
    from the cache. Otherwise ``fallback`` (if any) is called exactly once,
    a non-``None`` result is bound under ``name``, and ``False`` is
    returned. A missing cache directory is created on the way.
    """

    name = sanitize_object_name(name)
    if name in session:
        logger.info(
            {
                "event": "object_in_session",
                "message": f"Object {name} from workspace.",
                "name": name,
            }
        )
        return True

    cache_dir = session.layout.cache_dir
    if cache_dir.is_dir():
        if name in list_cached(session.layout):
            return thaw(session, name)
        if fallback is not None:
            logger.info(
                {
                    "event": "object_missing",
                    "message": "Object is neither defined nor cached: evaluating fallback expression.",
                    "name": name,
                }
            )
            _run_fallback(session, name, fallback)
        else:
            logger.info(
                {
                    "event": "object_missing",
                    "message": "Object is neither defined nor cached.",
                    "name": name,
                }
            )
        return False

    logger.info(
        {
            "event": "object_missing",
            "message": "Object is neither defined nor cached: creating cache directory"
            + (" and evaluating fallback expression." if fallback is not None else "."),
            "name": name,
            "cache_dir": str(cache_dir),
        }
    )
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        error = wrap_error(
            exc,
            CacheError,
            message="Cache directory could not be created",
            context={"name": name, "cache_dir": str(cache_dir)},
        )
        log_exception(logger, error, event="cache_dir_create_failed")
        raise error from exc
    if fallback is not None:
        _run_fallback(session, name, fallback)
    return False


def request_all(session: Session, pattern: str) -> List[str]:
    """Request every session or cached name matching ``pattern``.

    Sha1 sidecar entries in the cache are never matched. Raises
    :class:`~projkit.errors.PatternNotFoundError` when nothing matches.
    Returns the requested names, session matches first.
    """

    regex = sanitize_pattern(pattern)
    in_session = [name for name in session.names() if regex.search(name)]
    in_cache = [
        name
        for name in list_cached(session.layout, include_sidecars=False)
        if regex.search(name)
    ]

    if not in_session and not in_cache:
        error = PatternNotFoundError(context={"pattern": regex.pattern})
        log_exception(logger, error, event="request_pattern_unmatched")
        raise error

    requested = list(dict.fromkeys(in_session + in_cache))
    for name in requested:
        request(session, name)
    return requested


__all__ = ["Fallback", "request", "request_all"]
