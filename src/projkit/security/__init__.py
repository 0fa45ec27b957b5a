"""Input validation shared by the loader and the cache helpers."""

from .validation import (
    OBJECT_NAME_PATTERN,
    SanitizationError,
    sanitize_object_name,
    sanitize_pattern,
)

__all__ = [
    "OBJECT_NAME_PATTERN",
    "SanitizationError",
    "sanitize_object_name",
    "sanitize_pattern",
]
