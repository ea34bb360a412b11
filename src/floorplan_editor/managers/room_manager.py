"""
Room manager: authoritative collection of rooms.

Provides:
- Creation gated by ValidationManager.validate_room
- Validation-gated edits (compute into a temporary room, validate, commit)
- Selection, hover and drawing-preview state with set-if-changed semantics,
  including the picked and hovered vertex
- Hit-testing helpers for rooms and their vertices

Edits that fail validation commit nothing and emit nothing; the returned
ValidationResult (and the validator's `validation_error` signal) say why.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from PyQt5.QtCore import QObject, pyqtSignal

from floorplan_editor.config import EditorSettings
from floorplan_editor.geometry import Point, rotate_point, scale_point, snap_to_grid, translate_points
from floorplan_editor.models import Room
from floorplan_editor.validation import EntityNotFoundError, ValidationManager, ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomPoint:
    """A vertex together with the room that owns it."""
    room: Room
    point: Point


class RoomManager(QObject):
    """Owns every room and mediates all changes to them."""

    room_added = pyqtSignal(object)  # Room
    room_removed = pyqtSignal(object)  # Room
    room_updated = pyqtSignal(object)  # Room
    selection_changed = pyqtSignal(object)  # Room or None
    hover_changed = pyqtSignal(object)  # Room or None
    preview_changed = pyqtSignal(object)  # List[Point] or None
    point_selection_changed = pyqtSignal(object)  # Point or None
    point_hover_changed = pyqtSignal(object)  # Point or None

    def __init__(self, validator: ValidationManager,
                 settings: Optional[EditorSettings] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._validator = validator
        self.settings = settings or validator.settings
        self._rooms: Dict[str, Room] = {}
        self._selected: Optional[Room] = None
        self._hovered: Optional[Room] = None
        self._selected_point: Optional[Point] = None
        self._hovered_point: Optional[Point] = None
        self._preview: Optional[List[Point]] = None

    # ---------------------------------------------------------------
    # Collection
    # ---------------------------------------------------------------

    def create_room(self, points: Sequence[Point], name: Optional[str] = None) -> Optional[Room]:
        """Create and register a room.

        Returns:
            The new Room, or None when the outline fails validation.
        """
        room = Room(points, name=name)
        result = self._validator.validate_room(room)
        if not result.is_valid:
            logger.warning("Rejected room with %d points: %s", len(room.points), ", ".join(result.codes))
            return None

        self._rooms[room.id] = room
        logger.info("Created %s (area=%.1f)", room.name, room.calculate_area())
        self.room_added.emit(room)
        return room

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def get_rooms(self) -> List[Room]:
        return list(self._rooms.values())

    def delete_room(self, room: Room):
        if self._rooms.pop(room.id, None) is None:
            return

        if self._selected is room:
            self._selected = None
            self.selection_changed.emit(None)
            self.set_selected_point(None)
        if self._hovered is room:
            self._hovered = None
            self.hover_changed.emit(None)
        if self._hovered_point in room.points:
            self.set_hovered_point(None)
        logger.info("Deleted %s", room.name)
        self.room_removed.emit(room)

    def load_rooms(self, rooms: Iterable[Room]):
        """Replace the collection with already-built rooms (e.g. deserialized)."""
        self.clear()
        for room in rooms:
            self._rooms[room.id] = room
            self.room_added.emit(room)
        logger.info("Loaded %d room(s)", len(self._rooms))

    def clear(self):
        for room in list(self._rooms.values()):
            self.delete_room(room)
        self.clear_preview()

    # ---------------------------------------------------------------
    # Validation-gated edits
    # ---------------------------------------------------------------

    def update_room(self, room: Room) -> ValidationResult:
        """Copy the outline and name of room onto the stored room with the same id.

        The stored instance is kept, so references held by selection and
        handlers stay live. room itself is never registered.
        """
        self._require(room)
        result = self._validator.validate_room(room)
        if result.is_valid:
            stored = self._rooms[room.id]
            previous = stored.points
            stored.set_points(room.points)
            stored.set_name(room.name)
            self._outline_replaced(stored, previous)
        return result

    def update_room_point(self, room: Room, old_point: Point, new_point: Point) -> ValidationResult:
        self._require(room)
        result = self._validator.validate_point_move(room, old_point, new_point)
        if result.is_valid:
            room.update_point(old_point, new_point)
            # The picked vertex follows its own move
            if room is self._selected and self._selected_point == old_point:
                self.set_selected_point(new_point)
            if self._hovered_point == old_point:
                self.set_hovered_point(None)
            self.room_updated.emit(room)
        return result

    def update_room_points(self, room: Room, points: Sequence[Point]) -> ValidationResult:
        return self._commit_points(room, list(points))

    def move_point(self, room: Room, point: Point, delta: Point) -> ValidationResult:
        return self.update_room_point(room, point, point + delta)

    def move_room(self, room: Room, delta: Point) -> ValidationResult:
        return self._commit_points(room, translate_points(room.points, delta))

    def rotate_room(self, room: Room, angle: float) -> ValidationResult:
        """Rotate every vertex by angle degrees about the room's center."""
        center = room.get_center()
        return self._commit_points(room, [rotate_point(p, center, angle) for p in room.points])

    def resize_room(self, room: Room, scale: float) -> ValidationResult:
        """Scale every vertex about the room's center."""
        center = room.get_center()
        return self._commit_points(room, [scale_point(p, center, scale) for p in room.points])

    def insert_room_point(self, room: Room, index: int, point: Point) -> ValidationResult:
        self._require(room)
        result = self._validator.validate_point_insert(room, index, point)
        if result.is_valid:
            room.insert_point(index, point)
            self.room_updated.emit(room)
        return result

    def remove_room_point(self, room: Room, point: Point) -> ValidationResult:
        self._require(room)
        result = self._validator.validate_point_removal(room, point)
        if result.is_valid:
            room.remove_point(point)
            if room is self._selected and self._selected_point == point:
                self.set_selected_point(None)
            if self._hovered_point == point:
                self.set_hovered_point(None)
            self.room_updated.emit(room)
        return result

    def rename_room(self, room: Room, name: str):
        self._require(room)
        room.set_name(name)
        self.room_updated.emit(room)

    # ---------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------

    def find_room_at_point(self, point: Point) -> Optional[Room]:
        for room in self._rooms.values():
            if room.contains_point(point):
                return room
        return None

    def find_room_point_at_point(self, point: Point) -> Optional[RoomPoint]:
        threshold = self.settings.point_selection_threshold
        for room in self._rooms.values():
            closest = room.find_closest_point(point, threshold)
            if closest is not None:
                return RoomPoint(room, closest)
        return None

    def find_point_at_position(self, point: Point) -> Optional[Point]:
        hit = self.find_room_point_at_point(point)
        return hit.point if hit else None

    def get_room_center(self, room: Room) -> Point:
        return room.get_center()

    def snap_to_grid(self, point: Point) -> Point:
        return snap_to_grid(point, self.settings.grid_size).point

    # ---------------------------------------------------------------
    # Selection, hover and preview
    # ---------------------------------------------------------------

    def set_selected_room(self, room: Optional[Room]):
        if self._selected is not room:
            self._selected = room
            self.selection_changed.emit(room)
            self.set_selected_point(None)

    def get_selected_room(self) -> Optional[Room]:
        return self._selected

    def clear_selection(self):
        if self._selected is not None:
            self._selected = None
            self.selection_changed.emit(None)
        self.set_selected_point(None)

    def set_selected_point(self, point: Optional[Point]):
        """Pick a vertex of the selected room, or drop the pick with None."""
        if point is not None and (self._selected is None or point not in self._selected.points):
            raise EntityNotFoundError("Point", str(point))
        if self._selected_point != point:
            self._selected_point = point
            self.point_selection_changed.emit(point)

    def get_selected_point(self) -> Optional[Point]:
        return self._selected_point

    def set_hovered_room(self, room: Optional[Room]):
        if self._hovered is not room:
            self._hovered = room
            self.hover_changed.emit(room)

    def get_hovered_room(self) -> Optional[Room]:
        return self._hovered

    def set_hovered_point(self, point: Optional[Point]):
        if self._hovered_point != point:
            self._hovered_point = point
            self.point_hover_changed.emit(point)

    def get_hovered_point(self) -> Optional[Point]:
        return self._hovered_point

    def preview_room(self, points: Sequence[Point]):
        self._preview = list(points)
        self.preview_changed.emit(list(self._preview))

    def get_preview(self) -> Optional[List[Point]]:
        return list(self._preview) if self._preview is not None else None

    def clear_preview(self):
        if self._preview is not None:
            self._preview = None
            self.preview_changed.emit(None)

    # ---------------------------------------------------------------
    # Internal
    # ---------------------------------------------------------------

    def _require(self, room: Room):
        if room.id not in self._rooms:
            raise EntityNotFoundError("Room", room.id)

    def _commit_points(self, room: Room, points: List[Point]) -> ValidationResult:
        """Validate points on a temporary copy, then apply them to room."""
        self._require(room)
        candidate = Room(points, id=room.id, name=room.name)
        result = self._validator.validate_room(candidate)
        if result.is_valid:
            previous = room.points
            room.set_points(points)
            logger.debug("Updated %s", room.name)
            self._outline_replaced(room, previous)
        return result

    def _outline_replaced(self, room: Room, previous: List[Point]):
        """Drop vertex picks that belonged to the old outline, then notify."""
        if room is self._selected:
            self.set_selected_point(None)
        if self._hovered_point in previous:
            self.set_hovered_point(None)
        self.room_updated.emit(room)
