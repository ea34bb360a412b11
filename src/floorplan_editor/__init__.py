"""
Floor-plan editor core.

Interactive 2D floor-plan editing: room polygons, wall-anchored doors,
validation-gated edits and a device-agnostic gesture state machine.

Public API:
    - FloorPlanEditor: Composition root wiring every component together
    - Room, Door, SwingDirection: Entities
    - ValidationManager, ValidationResult, ValidationError: Rule evaluation
    - RoomManager, DoorManager: Entity collections
    - InteractionManager, InteractionMode: Input normalization
    - EditorSettings: Tunable limits
"""

from .config import EditorSettings, load_settings, save_settings
from .geometry import Point
from .models import Door, Room, SwingDirection
from .validation import (
    EntityNotFoundError,
    FloorPlanError,
    ValidationError,
    ValidationFailed,
    ValidationManager,
    ValidationResult,
)
from .managers import DoorManager, RoomManager
from .interaction import InteractionManager, InteractionMode
from .editor import FloorPlanEditor

__version__ = '0.1.0'

__all__ = [
    'EditorSettings',
    'load_settings',
    'save_settings',
    'Point',
    'Room',
    'Door',
    'SwingDirection',
    'ValidationManager',
    'ValidationResult',
    'ValidationError',
    'FloorPlanError',
    'ValidationFailed',
    'EntityNotFoundError',
    'RoomManager',
    'DoorManager',
    'InteractionManager',
    'InteractionMode',
    'FloorPlanEditor',
]
