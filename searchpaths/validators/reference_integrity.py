"""Reference integrity validator."""

from ..errors import ErrorKind
from ..graph.relation_graph import RelationGraph
from ..schema.models import SchemaModel
from .base import DiagnosticReport


def check_reference_integrity(schema: SchemaModel, graph: RelationGraph) -> DiagnosticReport:
    """Check that relation targets and parent types are defined.

    Args:
        schema: The parsed schema.
        graph: The relation graph.

    Returns:
        DiagnosticReport with errors for undefined references.
    """
    result = DiagnosticReport()

    for entity_name, entity in schema.entities.items():
        if entity.extends and not graph.has_entity(entity.extends):
            result.add_error(
                code=ErrorKind.UNDEFINED_PARENT,
                message=f"Entity '{entity_name}' extends undefined entity '{entity.extends}'",
                entity=entity_name,
                parent=entity.extends,
            )

        for rel in entity.relations:
            if not graph.has_entity(rel.target):
                result.add_error(
                    code=ErrorKind.UNDEFINED_TARGET,
                    message=f"Relation '{rel.name}' references undefined entity '{rel.target}'",
                    entity=entity_name,
                    relation=rel.name,
                    target=rel.target,
                )

    return result
