"""Builder for converting a SchemaModel to a RelationGraph."""

from ..policy import FollowPolicy, parse_policy
from ..schema.models import RelationSpec, SchemaModel
from .relation_graph import RelationGraph


def relation_policy(rel: RelationSpec) -> FollowPolicy:
    """Resolve the follow policy of a relation from its ``follow`` and ``doc`` fields."""
    return FollowPolicy.from_value(rel.follow).combine(parse_policy(rel.doc))


def build_graph(schema: SchemaModel) -> RelationGraph:
    """Build a RelationGraph from a SchemaModel.

    Args:
        schema: The parsed entity schema.

    Returns:
        A RelationGraph representing the schema.
    """
    graph = RelationGraph()

    # Add all entities first
    for entity_name, entity in schema.entities.items():
        graph.add_entity(
            entity_name,
            searchable=entity.searchable,
            description=entity.description,
        )

    # Add inheritance and relations (after all entities exist)
    for entity_name, entity in schema.entities.items():
        if entity.extends:
            graph.add_parent(entity_name, entity.extends)

        for rel in entity.relations:
            graph.add_relation(
                entity_name,
                rel.name,
                rel.target,
                rel.type,
                policy=relation_policy(rel),
                annotation=rel.doc,
            )

    return graph
