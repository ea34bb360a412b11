"""
Core data structures for the validation system.

Defines the fundamental types used throughout the validation package:
- Severity: Issue severity levels (INFO, WARNING, ERROR)
- ValidationError: Individual validation finding (field, message, code, severity)
- ValidationResult: Collection of errors with pass/fail status
- FloorPlanError: Base exception for the editor core
- ValidationFailed: Exception raised when a creation is rejected
- EntityNotFoundError: Exception raised when an unknown entity is updated
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Severity(Enum):
    """Validation issue severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationError:
    """A single validation finding.

    Attributes:
        field: Which aspect of the entity failed (e.g. "points", "width")
        message: Human-readable description
        code: Rule code (e.g. "ROOM_MIN_POINTS")
        severity: Issue severity
    """
    field: str
    message: str
    code: str
    severity: Severity = Severity.ERROR

    def format(self) -> str:
        return f"[{self.severity.name}] {self.code} field={self.field} :: {self.message}"

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Outcome of one validation call.

    A result is valid when it carries no errors; it is produced fresh for
    every check and never persisted.
    """
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> List[str]:
        return [e.code for e in self.errors]

    def has_code(self, code: str) -> bool:
        return any(e.code == code for e in self.errors)

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Merge another result into this one. Returns self for chaining."""
        self.errors.extend(other.errors)
        return self

    def report(self) -> str:
        """Multi-line report of all errors."""
        if not self.errors:
            return "Validation passed: No issues found"
        lines = [f"Validation FAILED: {len(self.errors)} issue(s)"]
        lines.extend(e.format() for e in self.errors)
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            'isValid': self.is_valid,
            'errors': [
                {
                    'field': e.field,
                    'message': e.message,
                    'code': e.code,
                    'severity': str(e.severity),
                }
                for e in self.errors
            ],
        }


class FloorPlanError(Exception):
    """Base class for editor core exceptions."""


class ValidationFailed(FloorPlanError):
    """Raised when an entity creation fails validation.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: ValidationResult, message: str = "Validation failed"):
        self.result = result
        super().__init__(f"{message}: {', '.join(result.codes)}")


class EntityNotFoundError(FloorPlanError, KeyError):
    """Raised when an update targets an id the manager does not own."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} with id {entity_id} not found")

    def __str__(self) -> str:
        return self.args[0]
