"""Aggregated output of a path compilation run."""

from types import MappingProxyType
from typing import Mapping

from ..validators.base import DiagnosticReport


class CompiledPaths:
    """Forward paths per root type and reverse paths per visited type.

    ``paths`` keeps every recorded path in insertion order. ``reversed_paths``
    keeps each path once, in first-seen order. An empty string stands for
    the root itself.
    """

    def __init__(self):
        self._paths: dict[str, list[str]] = {}
        self._reversed: dict[str, list[str]] = {}
        self.diagnostics = DiagnosticReport()

    def add_path(self, root: str, path: str) -> None:
        self._paths.setdefault(root, []).append(path)

    def add_reversed_path(self, entity_name: str, path: str) -> None:
        reversed_paths = self._reversed.setdefault(entity_name, [])
        if path not in reversed_paths:
            reversed_paths.append(path)

    def paths_for(self, root: str) -> tuple[str, ...]:
        return tuple(self._paths.get(root, ()))

    def reversed_paths_for(self, entity_name: str) -> tuple[str, ...]:
        return tuple(self._reversed.get(entity_name, ()))

    @property
    def paths(self) -> Mapping[str, tuple[str, ...]]:
        """Read-only view of the forward paths per root type."""
        return MappingProxyType({k: tuple(v) for k, v in self._paths.items()})

    @property
    def reversed_paths(self) -> Mapping[str, tuple[str, ...]]:
        """Read-only view of the reverse paths per visited type."""
        return MappingProxyType({k: tuple(v) for k, v in self._reversed.items()})

    @property
    def is_empty(self) -> bool:
        """True when no root was compiled."""
        return not self._paths and not self._reversed

    def to_dict(self) -> dict[str, dict[str, list[str]]]:
        """Serializable form, keyed the way the indexing pipeline reads it."""
        return {
            "paths": {k: list(v) for k, v in self._paths.items()},
            "reversedPaths": {k: list(v) for k, v in self._reversed.items()},
        }
