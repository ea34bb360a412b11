"""
Door manager: authoritative collection of doors.

Doors are validated against a room's walls at creation and on explicit
update_door calls only. move_door applies a raw delta with no wall check.
"""

import logging
import uuid
from typing import Dict, Iterable, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from floorplan_editor.config import EditorSettings
from floorplan_editor.geometry import Point
from floorplan_editor.models import Door, Room, SwingDirection
from floorplan_editor.validation import (
    EntityNotFoundError,
    ValidationFailed,
    ValidationManager,
    ValidationResult,
)

logger = logging.getLogger(__name__)

PREVIEW_DOOR_ID = "preview"


class DoorManager(QObject):
    """Owns every door and mediates all changes to them."""

    door_added = pyqtSignal(object)  # Door
    door_removed = pyqtSignal(object)  # Door
    door_updated = pyqtSignal(object)  # Door
    selection_changed = pyqtSignal(object)  # Door or None
    hover_changed = pyqtSignal(object)  # Door or None
    preview_changed = pyqtSignal(object)  # Door or None

    def __init__(self, validator: ValidationManager,
                 settings: Optional[EditorSettings] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._validator = validator
        self.settings = settings or validator.settings
        self._doors: Dict[str, Door] = {}
        self._selected: Optional[Door] = None
        self._hovered: Optional[Door] = None
        self._preview: Optional[Door] = None

    # ---------------------------------------------------------------
    # Collection
    # ---------------------------------------------------------------

    def create_door(self, position: Point, room: Room) -> Door:
        """Create a door anchored on one of room's walls.

        Raises:
            ValidationFailed: If position is not on a wall of room
        """
        door = self._new_door(str(uuid.uuid4()), position)
        result = self._validator.validate_door_position(door, room)
        if not result.is_valid:
            logger.warning("Rejected door at (%.1f, %.1f) in %s", position.x, position.y, room.name)
            raise ValidationFailed(result, "Invalid door position")

        self._doors[door.id] = door
        logger.info("Created door %s in %s", door.id[:8], room.name)
        self.door_added.emit(door)
        return door

    def get_door(self, door_id: str) -> Optional[Door]:
        return self._doors.get(door_id)

    def get_doors(self) -> List[Door]:
        return list(self._doors.values())

    def delete_door(self, door: Door):
        if self._doors.pop(door.id, None) is None:
            return

        if self._selected is door:
            self._selected = None
            self.selection_changed.emit(None)
        if self._hovered is door:
            self._hovered = None
            self.hover_changed.emit(None)
        logger.info("Deleted door %s", door.id[:8])
        self.door_removed.emit(door)

    def load_doors(self, doors: Iterable[Door]):
        """Replace the collection with already-built doors (e.g. deserialized)."""
        self.clear()
        for door in doors:
            self._doors[door.id] = door
            self.door_added.emit(door)
        logger.info("Loaded %d door(s)", len(self._doors))

    def clear(self):
        for door in list(self._doors.values()):
            self.delete_door(door)
        self.clear_preview()

    # ---------------------------------------------------------------
    # Edits
    # ---------------------------------------------------------------

    def update_door(self, door: Door, room: Room) -> ValidationResult:
        """Copy the state of door onto the stored door with the same id.

        Wall placement is revalidated against room. The stored instance is
        kept so selection and handlers keep pointing at the live door.
        """
        self._require(door)
        result = self._validator.validate_door_position(door, room)
        if result.is_valid:
            stored = self._doors[door.id]
            stored.set_position(door.position)
            stored.set_angle(door.angle)
            stored.set_dimensions(door.width, door.height)
            stored.set_swing(door.swing_angle, door.swing_direction)
            self.door_updated.emit(stored)
        return result

    def move_door(self, door: Door, delta: Point):
        self._require(door)
        door.set_position(door.position + delta)
        self.door_updated.emit(door)

    def rotate_door(self, door: Door, angle: float) -> ValidationResult:
        self._require(door)
        result = self._validator.validate_door_rotation(door, angle)
        if result.is_valid:
            door.set_angle(angle)
            logger.debug("Rotated door %s to %.1f", door.id[:8], door.angle)
            self.door_updated.emit(door)
        return result

    def resize_door(self, door: Door, scale: float) -> ValidationResult:
        self._require(door)
        width = door.width * scale
        height = door.height * scale
        result = self._validator.validate_door_size(door, width, height)
        if result.is_valid:
            door.set_dimensions(width, height)
            self.door_updated.emit(door)
        return result

    def set_door_swing(self, door: Door, angle: float, direction: SwingDirection):
        self._require(door)
        door.set_swing(angle, direction)
        self.door_updated.emit(door)

    def toggle_door_swing(self, door: Door):
        self._require(door)
        door.toggle_swing_direction()
        self.door_updated.emit(door)

    # ---------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------

    def find_door_at_point(self, point: Point) -> Optional[Door]:
        for door in self._doors.values():
            if door.contains_point(point):
                return door
        return None

    # ---------------------------------------------------------------
    # Selection, hover and preview
    # ---------------------------------------------------------------

    def set_selected_door(self, door: Optional[Door]):
        if self._selected is not door:
            self._selected = door
            self.selection_changed.emit(door)

    def get_selected_door(self) -> Optional[Door]:
        return self._selected

    def clear_selection(self):
        if self._selected is not None:
            self._selected = None
            self.selection_changed.emit(None)

    def set_hovered_door(self, door: Optional[Door]):
        if self._hovered is not door:
            self._hovered = door
            self.hover_changed.emit(door)

    def get_hovered_door(self) -> Optional[Door]:
        return self._hovered

    def preview_door(self, position: Point):
        """Broadcast a transient door at position. It is never stored."""
        self._preview = self._new_door(PREVIEW_DOOR_ID, position)
        self.preview_changed.emit(self._preview)

    def get_preview(self) -> Optional[Door]:
        return self._preview

    def clear_preview(self):
        if self._preview is not None:
            self._preview = None
            self.preview_changed.emit(None)

    # ---------------------------------------------------------------
    # Internal
    # ---------------------------------------------------------------

    def _new_door(self, door_id: str, position: Point) -> Door:
        return Door(door_id, position,
                    width=self.settings.default_door_width,
                    height=self.settings.default_door_height)

    def _require(self, door: Door):
        if door.id not in self._doors:
            raise EntityNotFoundError("Door", door.id)
