"""
Door model: a rotatable rectangle anchored to a point on a room wall.

The rectangle is width x height, centered on the anchor position in the
door's local frame, which is rotated by `angle` degrees. Swing settings are
cosmetic and never affect hit-testing.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, Tuple

from floorplan_editor.geometry import Point, normalize_angle

DEFAULT_DOOR_WIDTH = 32.0
DEFAULT_DOOR_HEIGHT = 80.0


class SwingDirection(Enum):
    """Side the door leaf swings toward."""
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> 'SwingDirection':
        return SwingDirection.RIGHT if self is SwingDirection.LEFT else SwingDirection.LEFT


class Door:
    """Door anchored at `position` and aligned to its wall by `angle`."""

    def __init__(self, id: str, position: Point,
                 width: float = DEFAULT_DOOR_WIDTH,
                 height: float = DEFAULT_DOOR_HEIGHT):
        self.id = id
        self._position = position
        self._angle = 0.0
        self._width = width
        self._height = height
        self._swing_angle = 0.0
        self._swing_direction = SwingDirection.LEFT

    def __repr__(self) -> str:
        return (f"Door(id={self.id!r}, position=({self._position.x}, {self._position.y}), "
                f"angle={self._angle})")

    # ---------------------------------------------------------------
    # Properties
    # ---------------------------------------------------------------

    @property
    def position(self) -> Point:
        return self._position

    def set_position(self, position: Point):
        self._position = position

    @property
    def angle(self) -> float:
        return self._angle

    def set_angle(self, angle: float):
        """Set the rotation, normalized to [0, 360)."""
        self._angle = normalize_angle(angle)

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def set_dimensions(self, width: float, height: float):
        self._width = width
        self._height = height

    @property
    def swing_angle(self) -> float:
        return self._swing_angle

    @property
    def swing_direction(self) -> SwingDirection:
        return self._swing_direction

    def set_swing(self, angle: float, direction: SwingDirection):
        self._swing_angle = angle
        self._swing_direction = direction

    def toggle_swing_direction(self):
        self._swing_direction = self._swing_direction.opposite()

    # ---------------------------------------------------------------
    # Geometry
    # ---------------------------------------------------------------

    def get_endpoints(self) -> Tuple[Point, Point]:
        """Ends of the door opening, +/- width/2 along the rotated x-axis."""
        rad = math.radians(self._angle)
        half = self._width / 2
        dx = half * math.cos(rad)
        dy = half * math.sin(rad)
        return (Point(self._position.x - dx, self._position.y - dy),
                Point(self._position.x + dx, self._position.y + dy))

    def to_local(self, point: Point) -> Point:
        """Transform a point into the door's rotated local frame."""
        dx = point.x - self._position.x
        dy = point.y - self._position.y
        rad = math.radians(self._angle)
        cos = math.cos(rad)
        sin = math.sin(rad)
        return Point(dx * cos + dy * sin, -dx * sin + dy * cos)

    def contains_point(self, point: Point) -> bool:
        local = self.to_local(point)
        half_w = self._width / 2
        half_h = self._height / 2
        return -half_w <= local.x <= half_w and -half_h <= local.y <= half_h

    # ---------------------------------------------------------------
    # Copy and serialization
    # ---------------------------------------------------------------

    def clone(self) -> 'Door':
        """Value copy that keeps the same id."""
        copy = Door(self.id, self._position, self._width, self._height)
        copy.set_angle(self._angle)
        copy.set_swing(self._swing_angle, self._swing_direction)
        return copy

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'position': self._position.to_dict(),
            'angle': self._angle,
            'width': self._width,
            'height': self._height,
            'swingAngle': self._swing_angle,
            'swingDirection': self._swing_direction.value,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Door':
        door = Door(data['id'], Point.from_dict(data['position']))
        if 'angle' in data:
            door.set_angle(data['angle'])
        door.set_dimensions(data.get('width', DEFAULT_DOOR_WIDTH),
                            data.get('height', DEFAULT_DOOR_HEIGHT))
        if 'swingAngle' in data:
            door.set_swing(data['swingAngle'], door.swing_direction)
        if 'swingDirection' in data:
            door.set_swing(door.swing_angle, SwingDirection(data['swingDirection']))
        return door
