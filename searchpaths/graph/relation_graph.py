"""RelationGraph wrapper around networkx for entity relation schemas."""

from dataclasses import dataclass, field
from typing import Any, Iterator

import networkx as nx

from ..policy import FollowPolicy
from .node_types import EdgeType, NodeType, RelationKind


@dataclass(frozen=True)
class RelationEdge:
    """A named, directed relation from one entity type to another."""

    source: str
    name: str
    target: str
    kind: RelationKind = RelationKind.HAS_ONE
    policy: FollowPolicy = field(default_factory=FollowPolicy)
    annotation: str | None = None


def _entity_id(name: str) -> str:
    return f"entity:{name}"


class RelationGraph:
    """A graph of entity types and the relations between them.

    Wraps a networkx MultiDiGraph, since two entity types may be connected
    by several relations. Relation edges keep their declaration order.
    """

    def __init__(self):
        """Initialize an empty relation graph."""
        self._graph = nx.MultiDiGraph()
        self._order = 0

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_entity(self, name: str, searchable: bool = False, **attrs: Any) -> str:
        """Add an entity type node to the graph.

        Args:
            name: The entity type name.
            searchable: Whether the type is a root candidate for scans.
            **attrs: Additional attributes for the node.

        Returns:
            The node ID.
        """
        node_id = _entity_id(name)
        self._graph.add_node(
            node_id,
            node_type=NodeType.ENTITY,
            name=name,
            searchable=searchable,
            **attrs,
        )
        return node_id

    def add_parent(self, entity_name: str, parent_name: str) -> None:
        """Declare that ``entity_name`` extends ``parent_name``."""
        self._graph.add_edge(
            _entity_id(entity_name),
            _entity_id(parent_name),
            key=f"extends:{parent_name}",
            edge_type=EdgeType.EXTENDS,
        )

    def add_relation(
        self,
        source: str,
        name: str,
        target: str,
        kind: RelationKind | str = RelationKind.HAS_ONE,
        policy: FollowPolicy | None = None,
        annotation: str | None = None,
    ) -> RelationEdge:
        """Add a relation edge declared on ``source``.

        Args:
            source: The declaring entity type.
            name: The relation (accessor) name.
            target: The related entity type.
            kind: The relation kind (has_many, belongs_to, etc.).
            policy: Structured follow policy of the edge.
            annotation: Free-form annotation text of the edge.

        Returns:
            The created RelationEdge.
        """
        try:
            kind = RelationKind(kind)
        except ValueError:
            kind = RelationKind.HAS_ONE

        edge = RelationEdge(
            source=source,
            name=name,
            target=target,
            kind=kind,
            policy=policy or FollowPolicy(),
            annotation=annotation,
        )
        self._graph.add_edge(
            _entity_id(source),
            _entity_id(target),
            key=f"relation:{name}",
            edge_type=EdgeType.RELATION,
            relation=edge,
            order=self._order,
        )
        self._order += 1
        return edge

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_entity(self, name: str) -> bool:
        """Check if an entity type is defined (not merely referenced)."""
        node_id = _entity_id(name)
        return (
            self._graph.has_node(node_id)
            and self._graph.nodes[node_id].get("node_type") == NodeType.ENTITY
        )

    def get_entity_names(self) -> list[str]:
        """Get all defined entity type names."""
        return [
            data["name"]
            for _, data in self._graph.nodes(data=True)
            if data.get("node_type") == NodeType.ENTITY
        ]

    def get_searchable_entity_names(self) -> list[str]:
        """Get entity type names flagged as searchable."""
        return [
            data["name"]
            for _, data in self._graph.nodes(data=True)
            if data.get("node_type") == NodeType.ENTITY and data.get("searchable")
        ]

    def get_relations(self, entity_name: str) -> list[RelationEdge]:
        """Get relations declared directly on an entity type, in declaration order."""
        node_id = _entity_id(entity_name)
        if not self._graph.has_node(node_id):
            return []

        edges = [
            (data["order"], data["relation"])
            for _, _, data in self._graph.out_edges(node_id, data=True)
            if data.get("edge_type") == EdgeType.RELATION
        ]
        edges.sort(key=lambda item: item[0])
        return [edge for _, edge in edges]

    def relations_between(self, source: str, target: str) -> list[RelationEdge]:
        """Get relations declared on ``source`` that lead to ``target``."""
        return [edge for edge in self.get_relations(source) if edge.target == target]

    def get_parents(self, entity_name: str) -> list[str]:
        """Get the direct parent types of an entity type."""
        node_id = _entity_id(entity_name)
        if not self._graph.has_node(node_id):
            return []
        return [
            target.replace("entity:", "", 1)
            for _, target, data in self._graph.out_edges(node_id, data=True)
            if data.get("edge_type") == EdgeType.EXTENDS
        ]

    def is_a(self, entity_name: str, other: str) -> bool:
        """Check whether ``entity_name`` is ``other`` or (transitively) extends it."""
        queue = [entity_name]
        visited: set[str] = set()

        while queue:
            current = queue.pop(0)
            if current == other:
                return True
            if current in visited:
                continue
            visited.add(current)
            queue.extend(p for p in self.get_parents(current) if p not in visited)

        return False

    def iter_relations(self) -> Iterator[RelationEdge]:
        """Iterate over all relation edges, grouped by declaring type."""
        for entity_name in self.get_entity_names():
            yield from self.get_relations(entity_name)

