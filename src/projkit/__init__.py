"""Helpers for interactive analysis projects: source ``lib`` scripts and
keep expensive objects in a ``cache`` directory between sessions."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from projkit.config import ProjectLayout
from projkit.errors import (
    CacheError,
    LibraryError,
    PatternNotFoundError,
    ProjkitError,
    ValidationError,
)
from projkit.loader import load_lib
from projkit.request import request, request_all
from projkit.session import Session
from projkit.thaw import freeze, thaw

try:
    __version__ = version("projkit")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.1.0"

__all__ = [
    "CacheError",
    "LibraryError",
    "PatternNotFoundError",
    "ProjectLayout",
    "ProjkitError",
    "Session",
    "ValidationError",
    "__version__",
    "freeze",
    "load_lib",
    "request",
    "request_all",
    "thaw",
]
