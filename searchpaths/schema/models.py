"""Pydantic models for entity schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

RELATION_KINDS = (
    "has_one",
    "has_many",
    "belongs_to",
    "belongs_to_many",
    "morph_one",
    "morph_many",
    "morph_to_many",
)

RelationKindName = Literal[
    "has_one",
    "has_many",
    "belongs_to",
    "belongs_to_many",
    "morph_one",
    "morph_many",
    "morph_to_many",
]


class RelationSpec(BaseModel):
    """A relation declared on an entity."""

    name: str
    type: RelationKindName
    target: str
    follow: str | list[str] | dict[str, Any] | None = None
    doc: str | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_shorthand(cls, data: Any) -> Any:
        """Normalize shorthand syntax ({has_many: Comment} -> type/target)."""
        if not isinstance(data, dict) or ("type" in data and "target" in data):
            return data

        for kind in RELATION_KINDS:
            if kind in data:
                data = dict(data)
                data["type"] = kind
                data["target"] = data.pop(kind)
                break
        return data


class EntitySpec(BaseModel):
    """An entity type in the schema."""

    name: str = ""  # Will be set from the key
    searchable: bool = False
    extends: str | None = None
    relations: list[RelationSpec] = Field(default_factory=list)
    description: str | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_relations(cls, data: Any) -> Any:
        """Accept relations as a name -> spec mapping or as a list."""
        if not isinstance(data, dict):
            return data

        relations = data.get("relations")
        if relations is None:
            data["relations"] = []
        elif isinstance(relations, dict):
            normalized = []
            for name, rel in relations.items():
                if isinstance(rel, str):
                    # Bare target name means has_one
                    rel = {"type": "has_one", "target": rel}
                if isinstance(rel, dict):
                    rel = {**rel, "name": name}
                normalized.append(rel)
            data["relations"] = normalized

        return data


class SchemaModel(BaseModel):
    """Root model for a schema file."""

    entities: dict[str, EntitySpec] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_model(cls, data: Any) -> Any:
        """Set entity names from keys."""
        if not isinstance(data, dict):
            return data

        entities = data.get("entities")
        if entities is None:
            data["entities"] = {}
        elif isinstance(entities, dict):
            for name, entity_data in list(entities.items()):
                if entity_data is None:
                    entities[name] = entity_data = {}
                if isinstance(entity_data, dict):
                    entity_data["name"] = name

        return data

    def get_searchable_entity_names(self) -> list[str]:
        """Get names of entities flagged as searchable."""
        return [name for name, entity in self.entities.items() if entity.searchable]

    def merge(self, other: "SchemaModel") -> "SchemaModel":
        """Return a new schema containing the entities of both.

        Entities defined in ``other`` replace same-named entities in this one.
        """
        return SchemaModel(entities={**self.entities, **other.entities})
