"""
Validation rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "ROOM_MIN_POINTS")
- Field: The entity aspect the rule checks
- Severity: Default severity
- Message template: Human-readable description with {placeholders}

Rules are organized by category:
- ROOM: Room polygon structure
- POINT: Single-vertex edits
- DOOR: Door placement, rotation and size
"""

from dataclasses import dataclass
from typing import Dict

from .core import Severity, ValidationError


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule."""
    code: str
    field: str
    message_template: str
    severity: Severity = Severity.ERROR

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def error(self, **kwargs) -> ValidationError:
        """Build a ValidationError from this rule."""
        return ValidationError(
            field=self.field,
            message=self.format_message(**kwargs),
            code=self.code,
            severity=self.severity,
        )


# =============================================================================
# ROOM RULES
# =============================================================================

ROOM_MIN_POINTS = ValidationRule(
    code="ROOM_MIN_POINTS",
    field="points",
    message_template="Room must have at least 3 points",
)

ROOM_MIN_AREA = ValidationRule(
    code="ROOM_MIN_AREA",
    field="area",
    message_template="Room area must be at least {min_area:g} square pixels",
)

ROOM_INTERSECTING_EDGES = ValidationRule(
    code="ROOM_INTERSECTING_EDGES",
    field="edges",
    message_template="Room edges must not intersect",
)


# =============================================================================
# POINT RULES
# =============================================================================

POINT_NOT_FOUND = ValidationRule(
    code="POINT_NOT_FOUND",
    field="point",
    message_template="Point not found in room",
)

POINT_MOVE_INTERSECTION = ValidationRule(
    code="POINT_MOVE_INTERSECTION",
    field="edges",
    message_template="Moving point would create intersecting edges",
)

POINT_INVALID_INDEX = ValidationRule(
    code="POINT_INVALID_INDEX",
    field="point",
    message_template="Point index {index} is outside 0..{count}",
)


# =============================================================================
# DOOR RULES
# =============================================================================

DOOR_NOT_ON_WALL = ValidationRule(
    code="DOOR_NOT_ON_WALL",
    field="position",
    message_template="Door must be placed on a room wall",
)

DOOR_INVALID_ROTATION = ValidationRule(
    code="DOOR_INVALID_ROTATION",
    field="rotation",
    message_template="Door must be rotated in 90-degree increments",
)

DOOR_INVALID_WIDTH = ValidationRule(
    code="DOOR_INVALID_WIDTH",
    field="width",
    message_template="Door width must be between {min:g} and {max:g} inches",
)

DOOR_INVALID_HEIGHT = ValidationRule(
    code="DOOR_INVALID_HEIGHT",
    field="height",
    message_template="Door height must be between {min:g} and {max:g} inches",
)


RULES: Dict[str, ValidationRule] = {
    rule.code: rule
    for rule in (
        ROOM_MIN_POINTS,
        ROOM_MIN_AREA,
        ROOM_INTERSECTING_EDGES,
        POINT_NOT_FOUND,
        POINT_MOVE_INTERSECTION,
        POINT_INVALID_INDEX,
        DOOR_NOT_ON_WALL,
        DOOR_INVALID_ROTATION,
        DOOR_INVALID_WIDTH,
        DOOR_INVALID_HEIGHT,
    )
}
