"""Error kinds and exceptions raised during path compilation."""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of problems path compilation can report."""

    UNKNOWN_ENTITY = "UNKNOWN_ENTITY"
    NO_ROOT_PATH = "NO_ROOT_PATH"
    UNKNOWN_POLICY_TYPE = "UNKNOWN_POLICY_TYPE"
    MISSING_REVERSE_RELATION = "MISSING_REVERSE_RELATION"
    AMBIGUOUS_REVERSE_RELATION = "AMBIGUOUS_REVERSE_RELATION"
    UNDEFINED_TARGET = "UNDEFINED_TARGET"
    UNDEFINED_PARENT = "UNDEFINED_PARENT"


class CompilationError(Exception):
    """Raised when a root entity type cannot be compiled."""

    def __init__(self, message: str, kind: ErrorKind, entity: str | None = None):
        self.kind = kind
        self.entity = entity
        super().__init__(message)
