"""
Validation manager.

Stateless rule evaluation for rooms, vertex edits and doors. Every check
returns a fresh ValidationResult and additionally emits `validation_error`
once per individual error so an external notifier can display it.

Checks:
- validate_room: ROOM_MIN_POINTS (short-circuits), ROOM_MIN_AREA,
  ROOM_INTERSECTING_EDGES
- validate_point_move: POINT_NOT_FOUND, POINT_MOVE_INTERSECTION
- validate_point_insert / validate_point_removal: vertex add/remove edits
- validate_door_position: DOOR_NOT_ON_WALL
- validate_door_rotation: DOOR_INVALID_ROTATION
- validate_door_size: DOOR_INVALID_WIDTH, DOOR_INVALID_HEIGHT
"""

import logging
import math
from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from floorplan_editor.config import EditorSettings
from floorplan_editor.geometry import Point, distance_to_segment, has_intersecting_edges, polygon_edges
from floorplan_editor.models import Door, Room

from . import rules
from .core import ValidationError, ValidationResult

logger = logging.getLogger(__name__)


class ValidationManager(QObject):
    """Evaluates geometric rules and reports each failure."""

    validation_error = pyqtSignal(object)  # Emitted with each ValidationError

    def __init__(self, settings: Optional[EditorSettings] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.settings = settings or EditorSettings()

    # ---------------------------------------------------------------
    # Rooms and vertices
    # ---------------------------------------------------------------

    def validate_room(self, room: Room) -> ValidationResult:
        points = room.points
        if len(points) < 3:
            return self._finish([rules.ROOM_MIN_POINTS.error()])

        errors = []
        if room.calculate_area() < self.settings.min_room_area:
            errors.append(rules.ROOM_MIN_AREA.error(min_area=self.settings.min_room_area))
        if has_intersecting_edges(points):
            errors.append(rules.ROOM_INTERSECTING_EDGES.error())
        return self._finish(errors)

    def validate_point_move(self, room: Room, old_point: Point, new_point: Point) -> ValidationResult:
        """Check that replacing old_point keeps the outline simple.

        Area and vertex count are not re-checked here.
        """
        points = room.points
        index = room.index_of(old_point)
        if index == -1:
            return self._finish([rules.POINT_NOT_FOUND.error()])

        points[index] = new_point
        if has_intersecting_edges(points):
            return self._finish([rules.POINT_MOVE_INTERSECTION.error()])
        return self._finish([])

    def validate_point_insert(self, room: Room, index: int, point: Point) -> ValidationResult:
        points = room.points
        if not 0 <= index <= len(points):
            return self._finish([rules.POINT_INVALID_INDEX.error(index=index, count=len(points))])

        points.insert(index, point)
        if has_intersecting_edges(points):
            return self._finish([rules.ROOM_INTERSECTING_EDGES.error()])
        return self._finish([])

    def validate_point_removal(self, room: Room, point: Point) -> ValidationResult:
        points = room.points
        index = room.index_of(point)
        if index == -1:
            return self._finish([rules.POINT_NOT_FOUND.error()])
        if len(points) - 1 < 3:
            return self._finish([rules.ROOM_MIN_POINTS.error()])

        del points[index]
        if has_intersecting_edges(points):
            return self._finish([rules.ROOM_INTERSECTING_EDGES.error()])
        return self._finish([])

    # ---------------------------------------------------------------
    # Doors
    # ---------------------------------------------------------------

    def validate_door_position(self, door: Door, room: Room) -> ValidationResult:
        """A door is on a wall when its anchor is within the snap threshold of any edge."""
        threshold = self.settings.wall_snap_threshold
        on_wall = any(
            distance_to_segment(door.position, start, end) <= threshold
            for start, end in polygon_edges(room.points)
        )
        if not on_wall:
            return self._finish([rules.DOOR_NOT_ON_WALL.error()])
        return self._finish([])

    def validate_door_rotation(self, door: Door, angle: float) -> ValidationResult:
        # fmod keeps the sign of angle, so -0.05 counts as aligned
        if abs(math.fmod(angle, 90)) > self.settings.rotation_epsilon:
            return self._finish([rules.DOOR_INVALID_ROTATION.error()])
        return self._finish([])

    def validate_door_size(self, door: Door, width: float, height: float) -> ValidationResult:
        s = self.settings
        errors = []
        if width < s.min_door_width or width > s.max_door_width:
            errors.append(rules.DOOR_INVALID_WIDTH.error(min=s.min_door_width, max=s.max_door_width))
        if height < s.min_door_height or height > s.max_door_height:
            errors.append(rules.DOOR_INVALID_HEIGHT.error(min=s.min_door_height, max=s.max_door_height))
        return self._finish(errors)

    # ---------------------------------------------------------------
    # Internal
    # ---------------------------------------------------------------

    def _finish(self, errors: List[ValidationError]) -> ValidationResult:
        for error in errors:
            logger.warning("Validation error: %s", error.format())
            self.validation_error.emit(error)
        return ValidationResult(errors=list(errors))
