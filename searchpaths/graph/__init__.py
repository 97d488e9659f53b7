"""Graph layer for representing entity schemas as networkx graphs."""

from .node_types import EdgeType, NodeType, RelationKind
from .relation_graph import RelationEdge, RelationGraph
from .builder import build_graph, relation_policy

__all__ = [
    "NodeType",
    "EdgeType",
    "RelationKind",
    "RelationEdge",
    "RelationGraph",
    "build_graph",
    "relation_policy",
]
