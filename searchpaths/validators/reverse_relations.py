"""Checks on how relations can be walked back."""

from ..errors import ErrorKind
from ..graph.relation_graph import RelationGraph
from .base import DiagnosticReport


def check_reverse_relations(graph: RelationGraph) -> DiagnosticReport:
    """Check that each relation target declares exactly one relation back.

    A target with no relation back to the source leaves reverse paths
    incomplete (error). A target with several relations back uses the
    first declared one (warning).

    Args:
        graph: The relation graph.

    Returns:
        DiagnosticReport with the problems found.
    """
    result = DiagnosticReport()

    for edge in graph.iter_relations():
        if not graph.has_entity(edge.target):
            continue  # Reported by reference integrity

        back = graph.relations_between(edge.target, edge.source)
        if not back:
            result.add_error(
                code=ErrorKind.MISSING_REVERSE_RELATION,
                message=f"'{edge.target}' has no relation back to '{edge.source}'",
                entity=edge.source,
                relation=edge.name,
                target=edge.target,
            )
        elif len(back) > 1:
            result.add_warning(
                code=ErrorKind.AMBIGUOUS_REVERSE_RELATION,
                message=(
                    f"'{edge.target}' has {len(back)} relations back to '{edge.source}'; "
                    f"'{back[0].name}' is used"
                ),
                entity=edge.target,
                relation=back[1].name,
                target=edge.source,
                kept=back[0].name,
            )

    return result
