"""
Planar geometry helpers shared by the models, validators and handlers.

Provides:
- Point: immutable (x, y) value with exact coordinate equality
- Segment queries: clamped projection, point-to-segment distance
- Strict parametric segment intersection and polygon self-intersection
- Rotation/scaling about a center, angle normalization
- Grid snapping with a SnapResult describing what happened

All angles are in degrees unless a name says otherwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Sequence, Tuple


@dataclass(frozen=True)
class Point:
    """2D point. Equality is exact coordinate equality."""
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: 'Point') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Point':
        return Point(data['x'], data['y'])


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""
    min: Point
    max: Point

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y


@dataclass(frozen=True)
class SnapResult:
    """Outcome of a snapping query."""
    point: Point
    snapped: bool
    distance: float = 0.0


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def polygon_edges(points: Sequence[Point]) -> Iterator[Tuple[Point, Point]]:
    """Yield consecutive vertex pairs, including the closing edge."""
    count = len(points)
    for i in range(count):
        yield points[i], points[(i + 1) % count]


def project_onto_segment(p: Point, start: Point, end: Point) -> Tuple[Point, float]:
    """Project p onto segment start-end.

    Returns:
        Tuple of (projected point, parameter t clamped to [0, 1]).
        A zero-length segment projects everything onto start with t=0.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return start, 0.0

    t = ((p.x - start.x) * dx + (p.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return Point(start.x + t * dx, start.y + t * dy), t


def distance_to_segment(p: Point, start: Point, end: Point) -> float:
    """Shortest distance from p to the segment start-end."""
    projection, _ = project_onto_segment(p, start, end)
    return distance(p, projection)


def segments_intersect(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """Strict parametric intersection test.

    Two segments intersect iff both intersection parameters lie strictly
    inside (0, 1). Parallel (and collinear) segments never intersect.
    """
    det = (a2.x - a1.x) * (b2.y - b1.y) - (b2.x - b1.x) * (a2.y - a1.y)
    if det == 0:
        return False

    lam = ((b2.y - b1.y) * (b2.x - a1.x) + (b1.x - b2.x) * (b2.y - a1.y)) / det
    gamma = ((a1.y - a2.y) * (b2.x - a1.x) + (a2.x - a1.x) * (b2.y - a1.y)) / det

    return 0 < lam < 1 and 0 < gamma < 1


def has_intersecting_edges(points: Sequence[Point]) -> bool:
    """Check every pair of non-adjacent polygon edges for a crossing."""
    count = len(points)
    for i in range(count):
        a1 = points[i]
        a2 = points[(i + 1) % count]
        for j in range(i + 2, count):
            b1 = points[j]
            b2 = points[(j + 1) % count]
            if segments_intersect(a1, a2, b1, b2):
                return True
    return False


def normalize_angle(degrees: float) -> float:
    """Normalize an angle in degrees to [0, 360)."""
    normalized = degrees % 360
    # Float modulo can land exactly on 360 for tiny negative inputs
    return 0.0 if normalized >= 360 else normalized


def rotate_point(p: Point, center: Point, degrees: float) -> Point:
    """Rotate p about center by the given angle."""
    rad = math.radians(degrees)
    cos = math.cos(rad)
    sin = math.sin(rad)
    dx = p.x - center.x
    dy = p.y - center.y
    return Point(center.x + dx * cos - dy * sin,
                 center.y + dx * sin + dy * cos)


def scale_point(p: Point, center: Point, factor: float) -> Point:
    """Scale p away from (or toward) center."""
    return Point(center.x + (p.x - center.x) * factor,
                 center.y + (p.y - center.y) * factor)


def translate_points(points: Sequence[Point], delta: Point) -> List[Point]:
    return [p + delta for p in points]


def snap_to_grid(p: Point, grid_size: float) -> SnapResult:
    """Round both coordinates to the nearest multiple of grid_size.

    Halves round up (toward +inf), not to even.
    """
    snapped = Point(math.floor(p.x / grid_size + 0.5) * grid_size,
                    math.floor(p.y / grid_size + 0.5) * grid_size)
    moved = snapped != p
    return SnapResult(
        point=snapped,
        snapped=moved,
        distance=distance(p, snapped) if moved else 0.0,
    )
