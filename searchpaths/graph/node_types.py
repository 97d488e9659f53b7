"""Node and edge type definitions for the relation graph."""

from enum import Enum


class NodeType(str, Enum):
    """Types of nodes in the relation graph."""

    ENTITY = "entity"


class EdgeType(str, Enum):
    """Types of edges in the relation graph."""

    RELATION = "relation"  # Entity -> Entity, named accessor
    EXTENDS = "extends"  # Entity -> parent Entity


class RelationKind(str, Enum):
    """Cardinality of a relation. Traversal treats all kinds alike."""

    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    BELONGS_TO = "belongs_to"
    BELONGS_TO_MANY = "belongs_to_many"
    MORPH_ONE = "morph_one"
    MORPH_MANY = "morph_many"
    MORPH_TO_MANY = "morph_to_many"
