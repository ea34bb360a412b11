"""
Room polygon model.

A Room is an ordered list of vertices. Vertex order defines the winding and
matters for area and edge computations. Derived values (center, bounds, area,
perimeter) are recomputed on every call, never cached.

A Room may transiently hold fewer than 3 vertices (drawing previews); whether
it is a valid room is decided by the validation layer, not by this class.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple

from floorplan_editor.geometry import (
    Bounds,
    Point,
    distance,
    polygon_edges,
    project_onto_segment,
)

DEFAULT_POINT_THRESHOLD = 10.0


class Room:
    """Ordered polygon representing a floor area."""

    def __init__(self, points: Iterable[Point], id: Optional[str] = None,
                 name: Optional[str] = None):
        self.id: str = id or str(uuid.uuid4())
        self._name: str = name or f"Room {self.id[:4]}"
        self._points: List[Point] = list(points)

    def __repr__(self) -> str:
        return f"Room(id={self.id!r}, name={self._name!r}, points={len(self._points)})"

    # ---------------------------------------------------------------
    # Name and vertices
    # ---------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    def set_name(self, name: str):
        self._name = name

    @property
    def points(self) -> List[Point]:
        """Copy of the vertex list."""
        return list(self._points)

    def set_points(self, points: Iterable[Point]):
        """Replace the whole vertex list."""
        self._points = list(points)

    def add_point(self, point: Point):
        self._points.append(point)

    def insert_point(self, index: int, point: Point):
        self._points.insert(index, point)

    def index_of(self, point: Point) -> int:
        """Index of the first vertex exactly equal to point, or -1."""
        try:
            return self._points.index(point)
        except ValueError:
            return -1

    def remove_point(self, point: Point) -> bool:
        """Remove the first vertex matching point. Returns False if absent."""
        index = self.index_of(point)
        if index == -1:
            return False
        del self._points[index]
        return True

    def update_point(self, old_point: Point, new_point: Point) -> bool:
        """Replace the first vertex matching old_point. Returns False if absent."""
        index = self.index_of(old_point)
        if index == -1:
            return False
        self._points[index] = new_point
        return True

    def edges(self) -> List[Tuple[Point, Point]]:
        """Walls of the room, including the closing edge."""
        return list(polygon_edges(self._points))

    # ---------------------------------------------------------------
    # Derived geometry
    # ---------------------------------------------------------------

    def get_center(self) -> Point:
        """Arithmetic mean of the vertices.

        This is not the area-weighted centroid; rotation and scaling about
        the center depend on the mean being used.
        """
        count = len(self._points)
        return Point(sum(p.x for p in self._points) / count,
                     sum(p.y for p in self._points) / count)

    def get_bounds(self) -> Bounds:
        xs = [p.x for p in self._points]
        ys = [p.y for p in self._points]
        return Bounds(min=Point(min(xs), min(ys)), max=Point(max(xs), max(ys)))

    def calculate_area(self) -> float:
        """Shoelace formula over the stored vertex order, as an absolute value."""
        area = 0.0
        for a, b in polygon_edges(self._points):
            area += a.x * b.y - b.x * a.y
        return abs(area / 2)

    def calculate_perimeter(self) -> float:
        return sum(distance(a, b) for a, b in polygon_edges(self._points))

    # ---------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------

    def contains_point(self, point: Point) -> bool:
        """Even-odd ray casting test."""
        inside = False
        pts = self._points
        j = len(pts) - 1
        for i in range(len(pts)):
            xi, yi = pts[i].x, pts[i].y
            xj, yj = pts[j].x, pts[j].y
            if (yi > point.y) != (yj > point.y):
                x_cross = (xj - xi) * (point.y - yi) / (yj - yi) + xi
                if point.x < x_cross:
                    inside = not inside
            j = i
        return inside

    def find_closest_point(self, point: Point,
                           threshold: float = DEFAULT_POINT_THRESHOLD) -> Optional[Point]:
        """Nearest vertex strictly within threshold, or None."""
        closest = None
        min_distance = threshold
        for p in self._points:
            d = distance(p, point)
            if d < min_distance:
                min_distance = d
                closest = p
        return closest

    def find_closest_edge(self, point: Point) -> Optional[Tuple[Point, Point, float]]:
        """Edge with the smallest clamped-projection distance to point.

        Returns:
            Tuple of (start, end, distance), or None for rooms with fewer
            than 2 vertices.
        """
        if len(self._points) < 2:
            return None

        best: Optional[Tuple[Point, Point, float]] = None
        for start, end in polygon_edges(self._points):
            projection, _ = project_onto_segment(point, start, end)
            d = distance(point, projection)
            if best is None or d < best[2]:
                best = (start, end, d)
        return best

    # ---------------------------------------------------------------
    # Copy and serialization
    # ---------------------------------------------------------------

    def clone(self) -> 'Room':
        """Deep copy with a fresh id."""
        return Room(self._points, name=f"{self._name} (copy)")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self._name,
            'points': [p.to_dict() for p in self._points],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Room':
        return Room(
            points=[Point.from_dict(p) for p in data.get('points', [])],
            id=data.get('id'),
            name=data.get('name'),
        )
