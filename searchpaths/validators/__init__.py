"""Validators for entity schemas and compiled paths."""

from .base import Diagnostic, DiagnosticReport, Severity
from .policy_targets import check_policy_targets
from .reference_integrity import check_reference_integrity
from .reverse_relations import check_reverse_relations
from .runner import run_validators, validate_schema_files

__all__ = [
    "Severity",
    "Diagnostic",
    "DiagnosticReport",
    "check_policy_targets",
    "check_reference_integrity",
    "check_reverse_relations",
    "run_validators",
    "validate_schema_files",
]
