"""Memoized discovery of the relations declared on each entity type."""

import structlog

from ..errors import CompilationError, ErrorKind
from ..graph.relation_graph import RelationEdge, RelationGraph
from ..validators.base import DiagnosticReport

logger = structlog.get_logger(__name__)


class RelationDiscoverer:
    """Looks up outgoing relations per entity type, at most once per type.

    While discovering a type it records, for every ``(type, target)`` pair,
    the relation name leading from the type to the target. The compiler
    uses that index to find the relation that walks a followed edge back.
    """

    def __init__(self, graph: RelationGraph, diagnostics: DiagnosticReport | None = None):
        self.graph = graph
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticReport()
        self._related: dict[str, list[RelationEdge]] = {}
        self._reverse: dict[tuple[str, str], str] = {}

    def discover(self, entity_name: str) -> list[RelationEdge]:
        """Get the relations declared directly on ``entity_name``.

        Relations declared on a parent type are not included.

        Raises:
            CompilationError: If the entity type is not defined.
        """
        cached = self._related.get(entity_name)
        if cached is not None:
            return cached

        if not self.graph.has_entity(entity_name):
            raise CompilationError(
                f"Entity type '{entity_name}' is not defined",
                ErrorKind.UNKNOWN_ENTITY,
                entity=entity_name,
            )

        edges = self.graph.get_relations(entity_name)
        for edge in edges:
            self._index(edge)

        self._related[entity_name] = edges
        logger.debug("relations_discovered", entity=entity_name, count=len(edges))
        return edges

    def _index(self, edge: RelationEdge) -> None:
        key = (edge.source, edge.target)
        existing = self._reverse.get(key)
        if existing is None:
            self._reverse[key] = edge.name
            return

        # First declared relation wins
        logger.warning(
            "ambiguous_reverse_relation",
            entity=edge.source,
            target=edge.target,
            kept=existing,
            ignored=edge.name,
        )
        self.diagnostics.add_warning(
            code=ErrorKind.AMBIGUOUS_REVERSE_RELATION,
            message=(
                f"Several relations lead from '{edge.source}' to '{edge.target}'; "
                f"'{existing}' is used to walk back, '{edge.name}' is ignored"
            ),
            entity=edge.source,
            relation=edge.name,
            target=edge.target,
            kept=existing,
        )

    def reverse_name(self, from_type: str, to_type: str) -> str | None:
        """Get the relation name leading from ``from_type`` to ``to_type``, if discovered."""
        return self._reverse.get((from_type, to_type))

    def is_discovered(self, entity_name: str) -> bool:
        return entity_name in self._related

    def discovered_edges(self) -> list[RelationEdge]:
        """All relation edges discovered so far."""
        return [edge for edges in self._related.values() for edge in edges]
