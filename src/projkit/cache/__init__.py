"""Cache utilities exposed under the :mod:`projkit.cache` namespace."""

from .store import (
    CACHE_FORMATS,
    SHA1_SIDECAR_SUFFIX,
    cache_candidates,
    is_sidecar,
    list_cached,
    load_object,
    read_object,
    write_object,
)

__all__ = [
    "CACHE_FORMATS",
    "SHA1_SIDECAR_SUFFIX",
    "cache_candidates",
    "is_sidecar",
    "list_cached",
    "load_object",
    "read_object",
    "write_object",
]
