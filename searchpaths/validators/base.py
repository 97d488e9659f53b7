"""Diagnostics collected while validating schemas and compiling paths."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import ErrorKind


class Severity(str, Enum):
    """Severity level of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Diagnostic:
    """A single diagnostic."""

    code: ErrorKind
    message: str
    severity: Severity
    entity: str | None = None
    relation: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        location = ""
        if self.entity:
            location = f" [{self.entity}"
            if self.relation:
                location += f".{self.relation}"
            location += "]"
        return f"{self.severity.value.upper()}: {self.code.value}{location} - {self.message}"


@dataclass
class DiagnosticReport:
    """Diagnostics gathered over one validation or compilation run."""

    issues: list[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        """Get all error-level diagnostics."""
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        """Get all warning-level diagnostics."""
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def is_valid(self) -> bool:
        """Check if there are no errors."""
        return not self.has_errors

    def has_issue(self, code: ErrorKind, entity: str | None = None, relation: str | None = None) -> bool:
        """Check whether an equivalent diagnostic was already recorded."""
        return any(
            i.code == code and i.entity == entity and i.relation == relation
            for i in self.issues
        )

    def add_issue(self, issue: Diagnostic) -> None:
        """Add a diagnostic, skipping exact repeats."""
        if not self.has_issue(issue.code, issue.entity, issue.relation):
            self.issues.append(issue)

    def add_error(
        self,
        code: ErrorKind,
        message: str,
        entity: str | None = None,
        relation: str | None = None,
        **details: Any,
    ) -> None:
        """Add an error diagnostic."""
        self.add_issue(
            Diagnostic(
                code=code,
                message=message,
                severity=Severity.ERROR,
                entity=entity,
                relation=relation,
                details=details,
            )
        )

    def add_warning(
        self,
        code: ErrorKind,
        message: str,
        entity: str | None = None,
        relation: str | None = None,
        **details: Any,
    ) -> None:
        """Add a warning diagnostic."""
        self.add_issue(
            Diagnostic(
                code=code,
                message=message,
                severity=Severity.WARNING,
                entity=entity,
                relation=relation,
                details=details,
            )
        )

    def merge(self, other: "DiagnosticReport") -> None:
        """Merge another report into this one."""
        for issue in other.issues:
            self.add_issue(issue)
