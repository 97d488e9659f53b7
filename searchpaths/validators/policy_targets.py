"""Checks for follow policies naming unknown entity types."""

from typing import Iterable

from ..errors import ErrorKind
from ..graph.relation_graph import RelationEdge, RelationGraph
from .base import DiagnosticReport


def check_policy_targets(
    graph: RelationGraph, edges: Iterable[RelationEdge] | None = None
) -> DiagnosticReport:
    """Warn about UNLESS directives naming a type the graph does not define.

    Such a directive can never match, so the relation is always followed.

    Args:
        graph: The relation graph.
        edges: Edges to check; defaults to every relation in the graph.

    Returns:
        DiagnosticReport with warnings for unknown type names.
    """
    result = DiagnosticReport()
    known = set(graph.get_entity_names())

    for edge in graph.iter_relations() if edges is None else edges:
        for type_name in edge.policy.unless:
            if type_name not in known:
                result.add_warning(
                    code=ErrorKind.UNKNOWN_POLICY_TYPE,
                    message=(
                        f"Relation '{edge.name}' is followed unless starting at "
                        f"'{type_name}', which is not a known entity type"
                    ),
                    entity=edge.source,
                    relation=edge.name,
                    type_name=type_name,
                )

    return result
