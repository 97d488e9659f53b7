"""Schema layer for parsing and validating YAML entity schemas."""

from .errors import SchemaLoadError, SchemaValidationError
from .models import RELATION_KINDS, EntitySpec, RelationSpec, SchemaModel
from .loader import load_yaml, parse_schema, parse_schema_from_string, parse_schemas
from .scanner import find_schema_files

__all__ = [
    "SchemaLoadError",
    "SchemaValidationError",
    "RELATION_KINDS",
    "EntitySpec",
    "RelationSpec",
    "SchemaModel",
    "load_yaml",
    "parse_schema",
    "parse_schema_from_string",
    "parse_schemas",
    "find_schema_files",
]
