"""The session namespace that loaders and cache helpers read and mutate."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

from projkit.config import ProjectLayout


def is_public_name(name: str) -> bool:
    """Names starting with ``_`` are hidden from listings, like dunder globals."""

    return not name.startswith("_")


@dataclass
class Session:
    """An explicit object store plus the project layout it belongs to.

    ``namespace`` must be a real ``dict`` because ``lib`` scripts run with it
    as their globals; passing ``globals()`` from an interactive shell makes
    loaded helpers and thawed objects appear there.
    """

    namespace: Dict[str, Any] = field(default_factory=dict)
    layout: ProjectLayout = field(default_factory=ProjectLayout)

    def __post_init__(self) -> None:
        if not isinstance(self.namespace, dict):
            raise TypeError("Session namespace must be a dict.")

    @classmethod
    def for_root(
        cls,
        root: str | os.PathLike[str] | None = None,
        namespace: Dict[str, Any] | None = None,
    ) -> "Session":
        return cls(
            namespace=namespace if namespace is not None else {},
            layout=ProjectLayout.from_root(root),
        )

    def __contains__(self, name: object) -> bool:
        return name in self.namespace

    def __getitem__(self, name: str) -> Any:
        return self.namespace[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def bind(self, name: str, value: Any) -> None:
        self.namespace[name] = value

    def names(self) -> list[str]:
        """Return the public names bound in the session, in insertion order."""

        return [name for name in self.namespace if is_public_name(name)]

    def public_items(self) -> dict[str, Any]:
        return {name: self.namespace[name] for name in self.names()}


__all__ = ["Session", "is_public_name"]
