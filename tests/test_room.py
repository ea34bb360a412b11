"""Tests for the Room model."""

import pytest

from floorplan_editor.geometry import Point
from floorplan_editor.models import Room

from helpers import square


class TestRoomMeasurements:
    """Tests for area, perimeter, center and bounds."""

    def test_square_area_and_perimeter(self):
        room = Room(square(100))
        assert room.calculate_area() == pytest.approx(10000.0)
        assert room.calculate_perimeter() == pytest.approx(400.0)

    @pytest.mark.parametrize("w,h", [(10, 20), (250, 40), (3.5, 7.25)])
    def test_rectangle_area_and_perimeter(self, w, h):
        room = Room([Point(0, 0), Point(w, 0), Point(w, h), Point(0, h)])
        assert room.calculate_area() == pytest.approx(w * h)
        assert room.calculate_perimeter() == pytest.approx(2 * (w + h))

    def test_winding_does_not_change_area(self):
        cw = Room(list(reversed(square(100))))
        assert cw.calculate_area() == pytest.approx(10000.0)

    def test_triangle_area(self):
        room = Room([Point(0, 0), Point(40, 0), Point(20, 30)])
        assert room.calculate_area() == pytest.approx(600.0)

    def test_center_is_vertex_mean(self):
        # Mean of the vertices, not the area centroid
        room = Room([Point(0, 0), Point(90, 0), Point(100, 0), Point(100, 100), Point(0, 100)])
        center = room.get_center()
        assert center.x == pytest.approx(58.0)
        assert center.y == pytest.approx(40.0)

    def test_bounds(self):
        room = Room([Point(10, 20), Point(110, 5), Point(60, 80)])
        bounds = room.get_bounds()
        assert bounds.min == Point(10, 5)
        assert bounds.max == Point(110, 80)
        assert bounds.width == 100
        assert bounds.height == 75


class TestRoomQueries:
    """Tests for containment and closest-feature queries."""

    def test_contains_point(self):
        room = Room(square(100))
        assert room.contains_point(Point(50, 50)) is True
        assert room.contains_point(Point(150, 50)) is False
        assert room.contains_point(Point(-1, 50)) is False

    def test_contains_point_concave(self):
        l_shape = Room([Point(0, 0), Point(200, 0), Point(200, 100),
                        Point(100, 100), Point(100, 200), Point(0, 200)])
        assert l_shape.contains_point(Point(50, 150)) is True
        assert l_shape.contains_point(Point(150, 150)) is False

    def test_find_closest_point_within_threshold(self):
        room = Room(square(100))
        assert room.find_closest_point(Point(3, 4)) == Point(0, 0)
        assert room.find_closest_point(Point(97, 98)) == Point(100, 100)

    def test_find_closest_point_outside_threshold(self):
        room = Room(square(100))
        assert room.find_closest_point(Point(50, 50)) is None

    def test_find_closest_point_threshold_is_strict(self):
        room = Room(square(100))
        assert room.find_closest_point(Point(3, 4), threshold=5) is None
        assert room.find_closest_point(Point(3, 4), threshold=5.01) == Point(0, 0)

    def test_find_closest_edge(self):
        room = Room(square(100))
        start, end, dist = room.find_closest_edge(Point(50, -3))
        assert (start, end) == (Point(0, 0), Point(100, 0))
        assert dist == pytest.approx(3.0)

    def test_find_closest_edge_uses_clamped_projection(self):
        room = Room(square(100))
        _, _, dist = room.find_closest_edge(Point(-3, -4))
        assert dist == pytest.approx(5.0)

    def test_find_closest_edge_needs_two_points(self):
        assert Room([Point(0, 0)]).find_closest_edge(Point(1, 1)) is None

    def test_edges_include_closing_edge(self):
        edges = Room(square(100)).edges()
        assert len(edges) == 4
        assert edges[-1] == (Point(0, 100), Point(0, 0))


class TestRoomEditing:
    """Tests for vertex edits and copies."""

    def test_points_returns_copy(self):
        room = Room(square(100))
        pts = room.points
        pts.append(Point(5, 5))
        assert len(room.points) == 4

    def test_update_point_exact_match(self):
        room = Room(square(100))
        assert room.update_point(Point(100, 0), Point(120, 0)) is True
        assert room.points[1] == Point(120, 0)

    def test_update_point_missing_is_noop(self):
        room = Room(square(100))
        assert room.update_point(Point(100.5, 0), Point(120, 0)) is False
        assert room.points == square(100)

    def test_remove_point(self):
        room = Room(square(100))
        assert room.remove_point(Point(0, 100)) is True
        assert room.points == square(100)[:3]
        assert room.remove_point(Point(0, 100)) is False

    def test_insert_point(self):
        room = Room(square(100))
        room.insert_point(1, Point(50, -10))
        assert room.points[1] == Point(50, -10)
        assert len(room.points) == 5

    def test_transient_room_below_three_points(self):
        room = Room([Point(0, 0)])
        room.add_point(Point(10, 0))
        assert len(room.points) == 2

    def test_default_name(self):
        room = Room(square(100))
        assert room.name == f"Room {room.id[:4]}"

    def test_clone_has_new_id(self):
        room = Room(square(100), name="Kitchen")
        copy = room.clone()
        assert copy.id != room.id
        assert copy.points == room.points
        assert copy.name == "Kitchen (copy)"

    def test_clone_is_independent(self):
        room = Room(square(100))
        copy = room.clone()
        copy.update_point(Point(0, 0), Point(-10, -10))
        assert room.points[0] == Point(0, 0)


class TestRoomSerialization:
    """Tests for to_dict / from_dict."""

    def test_round_trip(self):
        room = Room(square(100), name="Hall")
        restored = Room.from_dict(room.to_dict())
        assert restored.id == room.id
        assert restored.name == "Hall"
        assert restored.points == room.points

    def test_record_shape(self):
        data = Room([Point(1, 2), Point(3, 4), Point(5, 6)], id="r1", name="A").to_dict()
        assert data == {
            'id': 'r1',
            'name': 'A',
            'points': [{'x': 1, 'y': 2}, {'x': 3, 'y': 4}, {'x': 5, 'y': 6}],
        }

    def test_from_dict_without_name(self):
        room = Room.from_dict({'id': 'abcdef', 'points': [{'x': 0, 'y': 0}]})
        assert room.name == "Room abcd"
