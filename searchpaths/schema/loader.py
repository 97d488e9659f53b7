"""Reading entity schema files.

A schema file is a YAML mapping with a single ``entities`` key. Empty files
are valid and declare no entities. Several files are merged in the order
given, so a directory scan can spread one schema over many files.
"""

from pathlib import Path
from typing import Any, Iterable

import structlog
import yaml
from pydantic import ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import SchemaModel

logger = structlog.get_logger(__name__)


def _schema_root(data: Any, path: str | None = None) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Schema root must be a mapping of 'entities', got {type(data).__name__}", path
        )
    return data


def load_yaml(path: str | Path) -> dict:
    """Read the raw mapping from a schema file.

    Raises:
        SchemaLoadError: If the path is missing, is not a regular file, or
            does not hold a YAML mapping.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"Schema file does not exist: {path}", str(path))
    if not path.is_file():
        raise SchemaLoadError(f"Schema path is not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Malformed YAML in schema: {e}", str(path)) from e
    except OSError as e:
        raise SchemaLoadError(f"Schema file is unreadable: {e}", str(path)) from e

    return _schema_root(data, str(path))


def parse_schema(path: str | Path) -> SchemaModel:
    """Read one schema file into a SchemaModel."""
    schema = _parse_schema_data(load_yaml(path))
    logger.debug("schema_loaded", path=str(path), entities=len(schema.entities))
    return schema


def parse_schema_from_string(yaml_string: str) -> SchemaModel:
    """Read schema YAML held in memory, as tests and embedding code do."""
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Malformed YAML in schema: {e}") from e

    return _parse_schema_data(_schema_root(data))


def parse_schemas(paths: Iterable[str | Path]) -> SchemaModel:
    """Read several schema files into one SchemaModel.

    Later files override same-named entities from earlier ones.
    """
    schema = SchemaModel()
    for path in paths:
        schema = schema.merge(parse_schema(path))
    return schema


def _parse_schema_data(data: dict) -> SchemaModel:
    try:
        return SchemaModel.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Entity schema has {len(errors)} invalid field(s)", errors
        ) from e
