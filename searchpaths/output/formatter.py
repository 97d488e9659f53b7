"""Output formatting for compiled paths and diagnostics."""

import json
from typing import Literal

from ..compiler.result import CompiledPaths
from ..validators.base import Diagnostic, DiagnosticReport, Severity


def format_paths(result: CompiledPaths, format: Literal["json", "text"] = "json") -> str:
    """Format compiled paths for output.

    The JSON form is the paths artifact read by the indexing pipeline.
    """
    if format == "text":
        return _format_paths_text(result)
    return json.dumps(result.to_dict(), indent=4)


def _format_paths_text(result: CompiledPaths) -> str:
    lines: list[str] = ["PATHS:"]
    for root, paths in result.paths.items():
        lines.append(f"  {root}:")
        for path in paths:
            lines.append(f"    {path or '(root)'}")

    lines.append("")
    lines.append("REVERSED PATHS:")
    for entity, paths in result.reversed_paths.items():
        lines.append(f"  {entity}:")
        for path in paths:
            lines.append(f"    {path or '(root)'}")

    return "\n".join(lines)


def format_diagnostics(
    report: DiagnosticReport,
    format: Literal["text", "json"] = "text",
    subject: str = "Check",
) -> str:
    """Format a diagnostic report for output.

    Args:
        report: The report to format.
        format: Output format ("text" or "json").
        subject: What produced the report, named in the text summary line.

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_diagnostics_json(report)
    return _format_diagnostics_text(report, subject)


def _format_diagnostics_text(report: DiagnosticReport, subject: str) -> str:
    """Format report as human-readable text."""
    lines: list[str] = []

    errors = report.errors
    warnings = report.warnings

    lines.append("ERRORS:")
    if errors:
        for issue in errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")

    lines.append("WARNINGS:")
    if warnings:
        for issue in warnings:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")
    if report.is_valid:
        if warnings:
            lines.append(f"{subject} passed with {len(warnings)} warning(s)")
        else:
            lines.append(f"{subject} passed")
    else:
        lines.append(f"{subject} failed: {len(errors)} error(s), {len(warnings)} warning(s)")

    return "\n".join(lines)


def _format_issue_text(issue: Diagnostic) -> str:
    """Format a single diagnostic as text."""
    location = ""
    if issue.entity:
        location = f"[{issue.entity}"
        if issue.relation:
            location += f".{issue.relation}"
        location += "] "

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code.value}: {location}{issue.message}"


def _format_diagnostics_json(report: DiagnosticReport) -> str:
    """Format report as JSON."""
    data = {
        "valid": report.is_valid,
        "error_count": len(report.errors),
        "warning_count": len(report.warnings),
        "issues": [
            {
                "code": issue.code.value,
                "message": issue.message,
                "severity": issue.severity.value,
                "entity": issue.entity,
                "relation": issue.relation,
                "details": issue.details,
            }
            for issue in report.issues
        ],
    }
    return json.dumps(data, indent=2)
