"""Directory layout of a project tree (``lib`` scripts and ``cache`` files)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from projkit.config.paths import expand_env_path
from projkit.errors import ConfigurationError

DEFAULT_LIB_DIRNAME = "lib"
DEFAULT_CACHE_DIRNAME = "cache"
DEFAULT_LIB_SUFFIX = ".py"


def _check_dirname(value: str, field_name: str) -> None:
    if not value or value in {".", ".."} or "/" in value or "\\" in value:
        raise ConfigurationError(
            f"{field_name} must be a single directory name.",
            context={"field": field_name, "value": value},
        )


@dataclass(frozen=True)
class ProjectLayout:
    """Where a project keeps its helper scripts and cached objects.

    ``root`` defaults to the working directory at construction time, so a
    layout keeps pointing at the same tree after a later ``os.chdir``.
    """

    root: Path = field(default_factory=Path.cwd)
    lib_dirname: str = DEFAULT_LIB_DIRNAME
    cache_dirname: str = DEFAULT_CACHE_DIRNAME
    lib_suffix: str = DEFAULT_LIB_SUFFIX

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", expand_env_path(self.root, field="root"))
        _check_dirname(self.lib_dirname, "lib_dirname")
        _check_dirname(self.cache_dirname, "cache_dirname")
        if not self.lib_suffix.startswith(".") or len(self.lib_suffix) < 2:
            raise ConfigurationError(
                "lib_suffix must look like '.py'.",
                context={"field": "lib_suffix", "value": self.lib_suffix},
            )

    @property
    def lib_dir(self) -> Path:
        return self.root / self.lib_dirname

    @property
    def cache_dir(self) -> Path:
        return self.root / self.cache_dirname

    @classmethod
    def from_root(cls, root: str | os.PathLike[str] | None = None, **overrides: str) -> "ProjectLayout":
        """Build a layout for ``root`` (the working directory when ``None``)."""

        if root is None:
            return cls(**overrides)
        return cls(root=expand_env_path(root, field="root"), **overrides)
