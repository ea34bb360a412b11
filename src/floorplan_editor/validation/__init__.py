"""
Validation package for the floor-plan editor.

Public API:
    - ValidationResult, ValidationError, Severity: Core result types
    - ValidationRule and the rule catalog in `rules`
    - ValidationManager: Rule evaluation with a `validation_error` signal
    - FloorPlanError, ValidationFailed, EntityNotFoundError: Exceptions
"""

from .core import (
    Severity,
    ValidationError,
    ValidationResult,
    FloorPlanError,
    ValidationFailed,
    EntityNotFoundError,
)
from .rules import ValidationRule, RULES
from .manager import ValidationManager

__all__ = [
    # Core types
    'Severity',
    'ValidationError',
    'ValidationResult',
    # Exceptions
    'FloorPlanError',
    'ValidationFailed',
    'EntityNotFoundError',
    # Rules
    'ValidationRule',
    'RULES',
    # Manager
    'ValidationManager',
]
