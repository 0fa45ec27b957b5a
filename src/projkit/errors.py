"""Exceptions raised by projkit, each tagged with a stable :class:`ErrorCode`.

Every error carries a ``context`` mapping (object name, script or cache
path, pattern) so that :func:`projkit.logging.log_exception` can emit it as
one structured record.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Type


class ErrorCode(str, Enum):
    LIBRARY = "library"
    CACHE = "cache"
    LOOKUP = "lookup"
    VALIDATION = "validation"
    CONFIG = "config"
    UNKNOWN = "unknown"


def describe_exception(exc: BaseException, *, max_depth: int = 3) -> dict[str, Any]:
    """Describe ``exc`` and up to ``max_depth`` links of its ``__cause__`` chain.

    File errors keep their ``filename`` so a failed cache read names the file.
    """

    payload: dict[str, Any] = {"type": type(exc).__name__, "message": str(exc)}
    filename = getattr(exc, "filename", None)
    if filename is not None:
        payload["filename"] = str(filename)
    if max_depth > 0 and exc.__cause__ is not None and exc.__cause__ is not exc:
        payload["cause"] = describe_exception(exc.__cause__, max_depth=max_depth - 1)
    return payload


def _plain(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_plain(v) for v in value]
    return str(value)


def plain_context(context: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return ``context`` with paths and other objects turned into JSON values."""

    return {str(key): _plain(value) for key, value in (context or {}).items()}


class ProjkitError(Exception):
    """Base class for projkit errors."""

    default_message = "projkit operation failed"
    default_code = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ErrorCode | str | None = None,
        context: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.code = ErrorCode(code or self.default_code)
        self.context = dict(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def add_context(self, **context: Any) -> "ProjkitError":
        self.context.update({k: v for k, v in context.items() if v is not None})
        return self

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code.value,
            "type": type(self).__name__,
            "message": str(self),
        }
        if self.context:
            payload["context"] = plain_context(self.context)
        if self.cause is not None:
            payload["cause"] = describe_exception(self.cause)
        return payload


class LibraryError(ProjkitError):
    """A ``lib`` script could not be compiled or raised while running."""

    default_message = "Library script failed"
    default_code = ErrorCode.LIBRARY


class CacheError(ProjkitError):
    """A cached object could not be read or written."""

    default_message = "Cache operation failed"
    default_code = ErrorCode.CACHE


class PatternNotFoundError(ProjkitError, LookupError):
    default_message = "Pattern not matched in workspace or cache."
    default_code = ErrorCode.LOOKUP


class ValidationError(ProjkitError, ValueError):
    default_message = "Invalid name or pattern"
    default_code = ErrorCode.VALIDATION


class ConfigurationError(ProjkitError, ValueError):
    default_message = "Invalid project layout"
    default_code = ErrorCode.CONFIG


def wrap_error(
    exc: BaseException,
    error_cls: Type[ProjkitError] = ProjkitError,
    *,
    message: str,
    context: Mapping[str, Any] | None = None,
) -> ProjkitError:
    """Wrap ``exc`` in ``error_cls``; projkit errors only gain ``context``."""

    if isinstance(exc, ProjkitError):
        return exc.add_context(**dict(context or {}))
    return error_cls(message, context=context, cause=exc)


__all__ = [
    "CacheError",
    "ConfigurationError",
    "ErrorCode",
    "LibraryError",
    "PatternNotFoundError",
    "ProjkitError",
    "ValidationError",
    "describe_exception",
    "plain_context",
    "wrap_error",
]
