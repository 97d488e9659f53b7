"""Validation runner that orchestrates all validators."""

from pathlib import Path
from typing import Iterable

from ..graph.builder import build_graph
from ..graph.relation_graph import RelationGraph
from ..schema.loader import parse_schemas
from ..schema.models import SchemaModel
from .base import DiagnosticReport
from .policy_targets import check_policy_targets
from .reference_integrity import check_reference_integrity
from .reverse_relations import check_reverse_relations


def run_validators(schema: SchemaModel, graph: RelationGraph) -> DiagnosticReport:
    """Run all validators on a schema.

    Args:
        schema: The parsed schema.
        graph: The relation graph.

    Returns:
        Combined DiagnosticReport from all validators.
    """
    result = DiagnosticReport()

    # Run reference integrity first (most fundamental)
    result.merge(check_reference_integrity(schema, graph))
    result.merge(check_reverse_relations(graph))
    result.merge(check_policy_targets(graph))

    return result


def validate_schema_files(paths: Iterable[str | Path]) -> DiagnosticReport:
    """Load and validate schema files.

    Raises:
        SchemaLoadError: If a file cannot be loaded.
        SchemaValidationError: If a file fails schema validation.
    """
    schema = parse_schemas(paths)
    return run_validators(schema, build_graph(schema))
