"""Expansion of user-supplied project root paths."""

from __future__ import annotations

import os
import re
from pathlib import Path

from projkit.errors import ConfigurationError

_PLACEHOLDER_RE = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


def expand_env_path(raw: str | os.PathLike[str], *, field: str | None = None) -> Path:
    """Expand ``~`` and ``$VAR`` in ``raw``; unset variables are an error."""

    if not isinstance(raw, (str, os.PathLike)):
        raise TypeError("Path must be a string or path-like object.")
    expanded = os.path.expandvars(os.fspath(raw))
    unresolved = sorted({a or b for a, b in _PLACEHOLDER_RE.findall(expanded)})
    if unresolved:
        raise ConfigurationError(
            f"Unresolved environment variables in {field or 'path'}: {', '.join(unresolved)}",
            context={"field": field, "variables": unresolved},
        )
    return Path(expanded).expanduser()
