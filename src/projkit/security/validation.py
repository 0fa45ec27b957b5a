"""Input validation for names and patterns that end up touching the filesystem."""

from __future__ import annotations

import re
from typing import Any

from projkit.errors import ValidationError

# Object and library names become file base names under lib/ and cache/.
OBJECT_NAME_PATTERN = re.compile(r"^[^/\\\x00]+$")


class SanitizationError(ValidationError):
    """Raised when user supplied data fails validation."""

    def __init__(self, message: str, *, field: str | None = None, value: Any = None) -> None:
        context = {"field": field} if field else {}
        if value is not None:
            context["value"] = value
        super().__init__(message, context=context or None)


def sanitize_object_name(name: Any, *, field: str = "name") -> str:
    if not isinstance(name, str):
        raise SanitizationError("Name must be a string.", field=field, value=repr(name))
    if name in {"", ".", ".."} or not OBJECT_NAME_PATTERN.fullmatch(name):
        raise SanitizationError(
            "Name must be a non-empty file base name without path separators.",
            field=field,
            value=name,
        )
    return name


def sanitize_pattern(pattern: Any) -> re.Pattern[str]:
    """Compile ``pattern`` or raise :class:`SanitizationError`."""

    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise SanitizationError("Pattern must be a string.", field="pattern", value=repr(pattern))
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise SanitizationError(
            f"Pattern is not a valid regular expression: {exc}",
            field="pattern",
            value=pattern,
        ) from exc
