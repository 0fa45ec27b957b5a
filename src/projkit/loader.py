"""Source helper scripts from the project's ``lib`` directory into a session."""

from __future__ import annotations

from pathlib import Path
from typing import List

from projkit.errors import LibraryError, wrap_error
from projkit.logging import get_logger, log_exception
from projkit.security import sanitize_object_name
from projkit.session import Session

ALL = "all"

logger = get_logger(__name__, component="lib_loader")


def _lib_files(session: Session) -> List[Path]:
    layout = session.layout
    try:
        entries = sorted(layout.lib_dir.iterdir())
    except (FileNotFoundError, NotADirectoryError):
        return []
    return [path for path in entries if path.suffix == layout.lib_suffix]


def source_file(session: Session, path: Path) -> None:
    """Execute ``path`` with the session namespace as its globals.

    Functions the script defines therefore resolve free names against the
    live session, including objects thawed or rebound later. ``__name__``
    and ``__file__`` are only set while the script runs; ``__builtins__``
    stays, hidden from :meth:`Session.names`. A missing or
    unreadable file raises the underlying :class:`OSError` unchanged.
    """

    source = path.read_bytes()
    namespace = session.namespace
    added = [key for key in ("__name__", "__file__") if key not in namespace]
    namespace.setdefault("__name__", f"__lib_{path.stem}__")
    namespace.setdefault("__file__", str(path))
    try:
        exec(compile(source, str(path), "exec"), namespace)
    except Exception as exc:
        error = wrap_error(
            exc,
            LibraryError,
            message=f"Library script {path.name} failed",
            context={"path": str(path)},
        )
        log_exception(logger, error, event="lib_source_failed")
        raise error from exc
    finally:
        for key in added:
            namespace.pop(key, None)
    logger.info({"event": "lib_sourced", "path": str(path)})


def load_lib(session: Session, *names: str) -> List[Path]:
    """Source library scripts by name, or all of them.

    ``load_lib(session)`` and ``load_lib(session, "all")`` source every
    script in ``lib/``. Otherwise each name is looked up as
    ``lib/<name>.py`` and silently skipped when the file is missing.

    Returns the paths that were executed, in execution order.
    """

    layout = session.layout
    if not names or names == (ALL,):
        paths = _lib_files(session)
    else:
        paths = [
            layout.lib_dir / f"{sanitize_object_name(name)}{layout.lib_suffix}"
            for name in names
        ]

    executed = []
    for path in paths:
        try:
            source_file(session, path)
        except (FileNotFoundError, IsADirectoryError):
            logger.debug({"event": "lib_missing", "path": str(path)})
            continue
        executed.append(path)
    return executed


__all__ = ["ALL", "load_lib", "source_file"]
