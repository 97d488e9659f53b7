"""Directory scanning for schema files and searchable entities."""

from pathlib import Path
from typing import Iterable

import structlog

from .errors import SchemaLoadError

logger = structlog.get_logger(__name__)

SCHEMA_SUFFIXES = (".yaml", ".yml")


def find_schema_files(directories: Iterable[str | Path]) -> list[Path]:
    """Recursively find schema files under the given directories.

    Files are returned sorted per directory so that scans are deterministic.

    Raises:
        SchemaLoadError: If a directory does not exist.
    """
    files: list[Path] = []
    for directory in directories:
        directory = Path(directory)
        if not directory.is_dir():
            raise SchemaLoadError(f"Not a directory: {directory}", str(directory))

        found = sorted(
            p for p in directory.rglob("*") if p.is_file() and p.suffix in SCHEMA_SUFFIXES
        )
        logger.debug("schema_files_found", directory=str(directory), count=len(found))
        files.extend(found)
    return files

