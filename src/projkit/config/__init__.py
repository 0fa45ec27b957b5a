"""Configuration helpers exposed under :mod:`projkit.config`."""

from .layout import (
    DEFAULT_CACHE_DIRNAME,
    DEFAULT_LIB_DIRNAME,
    DEFAULT_LIB_SUFFIX,
    ProjectLayout,
)
from .paths import expand_env_path

__all__ = [
    "DEFAULT_CACHE_DIRNAME",
    "DEFAULT_LIB_DIRNAME",
    "DEFAULT_LIB_SUFFIX",
    "ProjectLayout",
    "expand_env_path",
]
