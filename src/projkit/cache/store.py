"""On-disk object cache: one file per object, named after the object.

Objects live under ``<root>/cache/<name><suffix>``. DataFrames are written as
Parquet, everything else with :mod:`pickle`. The file name is the only
identity; nothing else is tracked.
"""

from __future__ import annotations

import os
import pickle
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

import pandas as pd

from projkit.config import ProjectLayout
from projkit.errors import CacheError, wrap_error
from projkit.logging import get_logger, log_exception
from projkit.security import sanitize_object_name

# Cached entries holding an expression hash rather than an object.
SHA1_SIDECAR_SUFFIX = "_expression_sha1"


logger = get_logger(__name__, component="object_cache")


@dataclass(frozen=True)
class CacheFormat:
    suffix: str
    reader: Callable[[Path], Any]
    writer: Callable[[Any, Path], None]
    accepts: Callable[[Any], bool]


def _read_pickle(path: Path) -> Any:
    with path.open("rb") as fh:
        return pickle.load(fh)


def _write_pickle(value: Any, path: Path) -> None:
    with path.open("wb") as fh:
        pickle.dump(value, fh, protocol=pickle.HIGHEST_PROTOCOL)


def _read_parquet(path: Path) -> pd.DataFrame:
    with path.open("rb") as fh:
        return pd.read_parquet(fh)


def _write_parquet(value: pd.DataFrame, path: Path) -> None:
    value.to_parquet(path)


# Lookup order when several formats hold the same name.
CACHE_FORMATS: Dict[str, CacheFormat] = {
    ".pkl": CacheFormat(".pkl", _read_pickle, _write_pickle, lambda value: True),
    ".parquet": CacheFormat(
        ".parquet",
        _read_parquet,
        _write_parquet,
        lambda value: isinstance(value, pd.DataFrame),
    ),
}


def is_sidecar(name: str) -> bool:
    return name.endswith(SHA1_SIDECAR_SUFFIX)


def _split_cached(path: Path) -> Optional[str]:
    """Return the object name of ``path`` or ``None`` if it is not a cache file."""

    for suffix in CACHE_FORMATS:
        if path.name.endswith(suffix) and len(path.name) > len(suffix):
            return path.name[: -len(suffix)]
    return None


def cache_candidates(layout: ProjectLayout, name: str) -> List[Path]:
    """Paths that may hold ``name``, in lookup order."""

    name = sanitize_object_name(name)
    return [layout.cache_dir / f"{name}{suffix}" for suffix in CACHE_FORMATS]


def _iter_cache_files(layout: ProjectLayout) -> Iterator[Path]:
    try:
        entries = sorted(layout.cache_dir.iterdir())
    except (FileNotFoundError, NotADirectoryError):
        return
    for entry in entries:
        if entry.is_file():
            yield entry


def list_cached(layout: ProjectLayout, *, include_sidecars: bool = True) -> List[str]:
    """Return cached object names with their extension stripped.

    A missing cache directory yields an empty list. Names are unique even
    when one object is stored in several formats.
    """

    names: List[str] = []
    for path in _iter_cache_files(layout):
        name = _split_cached(path)
        if name is None:
            continue
        if not include_sidecars and is_sidecar(name):
            continue
        if name not in names:
            names.append(name)
    return names


def read_object(path: Path) -> Any:
    """Deserialize the single object stored at ``path``.

    :class:`FileNotFoundError` propagates unchanged so callers can treat a
    missing file as a miss; any other failure is raised as
    :class:`~projkit.errors.CacheError`.
    """

    fmt = CACHE_FORMATS.get(path.suffix)
    if fmt is None:
        raise CacheError(
            "Unsupported cache file format",
            context={"path": str(path), "suffix": path.suffix},
        )
    try:
        return fmt.reader(path)
    except FileNotFoundError:
        raise
    except Exception as exc:
        error = wrap_error(
            exc,
            CacheError,
            message="Failed to read cached object",
            context={"path": str(path)},
        )
        log_exception(logger, error, event="cache_read_failed")
        raise error from exc


def load_object(layout: ProjectLayout, name: str) -> tuple[Any, Path]:
    """Return ``(value, path)`` for the first stored format of ``name``.

    Raises :class:`FileNotFoundError` when no format holds the name.
    """

    for path in cache_candidates(layout, name):
        try:
            return read_object(path), path
        except FileNotFoundError:
            continue
    raise FileNotFoundError(f"No cached object named {name!r} in {layout.cache_dir}")


def _formats_for(value: Any) -> List[CacheFormat]:
    """Formats to try for ``value``, most specific first; pickle is always last."""

    return [fmt for fmt in reversed(list(CACHE_FORMATS.values())) if fmt.accepts(value)]


def _write_atomic(fmt: CacheFormat, value: Any, target: Path) -> None:
    tmp = target.with_name(f"{target.name}.tmp")
    try:
        fmt.writer(value, tmp)
        os.replace(tmp, target)
    except BaseException:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        raise


def write_object(layout: ProjectLayout, name: str, value: Any) -> Path:
    """Persist ``value`` under ``name`` and return the written path.

    The file is written next to its target and moved into place, and any
    copy of ``name`` in another format is removed afterwards. A DataFrame
    that Parquet cannot represent (mixed-type object columns, for one) is
    pickled instead.
    """

    name = sanitize_object_name(name)
    try:
        layout.cache_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        error = wrap_error(
            exc,
            CacheError,
            message="Cache directory is not usable",
            context={"name": name, "cache_dir": str(layout.cache_dir)},
        )
        log_exception(logger, error, event="cache_write_failed")
        raise error from exc

    formats = _formats_for(value)
    for fmt in formats:
        target = layout.cache_dir / f"{name}{fmt.suffix}"
        try:
            _write_atomic(fmt, value, target)
        except Exception as exc:
            if fmt is not formats[-1]:
                logger.warning(
                    {
                        "event": "cache_format_fallback",
                        "name": name,
                        "suffix": fmt.suffix,
                        "reason": f"{type(exc).__name__}: {exc}",
                    }
                )
                continue
            error = wrap_error(
                exc,
                CacheError,
                message="Failed to write cached object",
                context={"name": name, "path": str(target)},
            )
            log_exception(logger, error, event="cache_write_failed")
            raise error from exc
        break

    for path in cache_candidates(layout, name):
        if path == target:
            continue
        try:
            path.unlink()
        except FileNotFoundError:
            pass
    return target


__all__ = [
    "CACHE_FORMATS",
    "CacheFormat",
    "SHA1_SIDECAR_SUFFIX",
    "cache_candidates",
    "is_sidecar",
    "list_cached",
    "load_object",
    "read_object",
    "write_object",
]
