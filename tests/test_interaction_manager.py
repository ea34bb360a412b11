"""Tests for the InteractionManager gesture state machine."""

import math

import pytest

from floorplan_editor.geometry import Point
from floorplan_editor.interaction import (
    FixedSurface,
    InteractionManager,
    InteractionMode,
    KeyInput,
    KeyKind,
    ModeAware,
    Modifiers,
    MouseButton,
    Rect,
    TouchInput,
    TouchKind,
    WheelInput,
)

from helpers import RecordingHandler, click, drag, pointer, watch


class ModeRecordingHandler(RecordingHandler, ModeAware):

    def __init__(self):
        super().__init__()
        self.modes = []

    def set_mode(self, mode):
        self.modes.append(mode)


@pytest.fixture
def manager(surface):
    m = InteractionManager(surface)
    m.enable()
    return m


@pytest.fixture
def handler(manager):
    h = RecordingHandler()
    manager.add_handler(h)
    return h


def touch(kind, *points, t=0.0):
    return TouchInput(TouchKind(kind), [Point(x, y) for x, y in points], t)


class TestLifecycle:

    def test_starts_disabled(self, surface):
        manager = InteractionManager(surface)
        handler = RecordingHandler()
        manager.add_handler(handler)
        click(manager, 10, 10)
        assert handler.events == []
        assert manager.enabled is False

    def test_disable_ignores_input(self, manager, handler):
        manager.disable()
        manager.handle_key(KeyInput(KeyKind.DOWN, "a"))
        assert handler.events == []

    def test_add_handler_requires_interface(self, manager):
        with pytest.raises(TypeError):
            manager.add_handler(object())

    def test_add_handler_ignores_duplicates(self, manager, handler):
        manager.add_handler(handler)
        assert manager.handlers == [handler]

    def test_remove_handler(self, manager, handler):
        manager.remove_handler(handler)
        click(manager, 10, 10)
        assert handler.events == []

    def test_destroy(self, manager, handler):
        modes = watch(manager.mode_changed)
        manager.destroy()
        assert manager.enabled is False
        assert manager.handlers == []
        manager.set_mode(InteractionMode.DRAW)
        assert len(modes) == 0


class TestPointer:

    def test_drag_life_cycle(self, manager, handler):
        drag(manager, (100, 0), (110, 0))
        assert handler.types == ['dragStart', 'drag', 'dragEnd']
        assert handler.events[1].delta == Point(10, 0)
        assert handler.events[1].start_point == Point(100, 0)

    def test_delta_is_cumulative(self, manager, handler):
        manager.handle_pointer(pointer("down", 0, 0))
        manager.handle_pointer(pointer("move", 5, 0))
        manager.handle_pointer(pointer("move", 12, 3))
        assert handler.events[-1].delta == Point(12, 3)

    def test_surface_offset(self, handler):
        manager = InteractionManager(FixedSurface(Rect(10, 20, 800, 600)))
        manager.enable()
        manager.add_handler(handler)
        manager.handle_pointer(pointer("down", 110, 20))
        assert handler.events[0].point == Point(100, 0)

    def test_click_selects(self, manager, handler):
        click(manager, 40, 40)
        assert handler.types == ['dragStart', 'dragEnd', 'select']
        assert handler.events[-1].point == Point(40, 40)

    def test_long_drag_does_not_select(self, manager, handler):
        drag(manager, (0, 0), (50, 0))
        assert 'select' not in handler.types

    def test_draw_mode_press_selects(self, manager, handler):
        manager.set_mode(InteractionMode.DRAW)
        click(manager, 30, 40)
        assert handler.types == ['select']
        assert manager.get_state().is_drawing is False

    def test_draw_mode_moves_hover_while_pressed(self, manager, handler):
        manager.set_mode(InteractionMode.DRAW)
        manager.handle_pointer(pointer("down", 0, 0))
        assert manager.get_state().is_drawing is True
        manager.handle_pointer(pointer("move", 5, 5))
        assert handler.types == ['select', 'hover']

    def test_hover_without_gesture(self, manager, handler):
        manager.handle_pointer(pointer("move", 5, 6))
        assert handler.types == ['hover']
        assert handler.events[0].point == Point(5, 6)

    def test_right_button_rotates_in_select_mode(self, manager, handler):
        drag(manager, (100, 100), (100, 150), MouseButton.SECONDARY)
        assert handler.types == ['rotateStart', 'rotate', 'rotateEnd']
        assert handler.events[1].angle == pytest.approx(90.0)
        assert handler.events[1].center == Point(100, 100)

    def test_right_button_ignored_outside_select_mode(self, manager, handler):
        manager.set_mode(InteractionMode.DOOR)
        drag(manager, (100, 100), (100, 150), MouseButton.SECONDARY)
        assert handler.types == ['hover']

    def test_second_press_during_gesture_is_ignored(self, manager, handler):
        manager.handle_pointer(pointer("down", 0, 0))
        manager.handle_pointer(pointer("down", 50, 50, MouseButton.SECONDARY))
        manager.handle_pointer(pointer("down", 60, 60))
        assert handler.types == ['dragStart']
        assert manager.get_state().start_point == Point(0, 0)

    def test_state_reset_after_release(self, manager, handler):
        drag(manager, (0, 0), (10, 0))
        state = manager.get_state()
        assert not state.is_active
        assert state.start_point is None
        assert state.current_point is None

    def test_state_changed_signal(self, manager, handler):
        states = watch(manager.state_changed)
        drag(manager, (0, 0), (10, 0))
        assert [s.is_dragging for s in states.values] == [True, False]


class TestResize:

    def test_scale_relative_to_center(self, manager, handler):
        assert manager.begin_resize(Point(100, 0), Point(0, 0)) is True
        manager.handle_pointer(pointer("move", 200, 0))
        manager.handle_pointer(pointer("up", 200, 0))
        assert handler.types == ['resizeStart', 'resize', 'resizeEnd']
        assert handler.events[1].scale == pytest.approx(2.0)

    def test_zero_start_distance(self, manager, handler):
        manager.begin_resize(Point(0, 0), Point(0, 0))
        manager.handle_pointer(pointer("move", 50, 0))
        assert handler.events[-1].scale == 1.0

    def test_refused_while_dragging(self, manager, handler):
        manager.handle_pointer(pointer("down", 0, 0))
        assert manager.begin_resize(Point(10, 0), Point(0, 0)) is False


class TestWheelAndKeys:

    def test_ctrl_wheel_pinches(self, manager, handler):
        manager.handle_wheel(WheelInput(50, 60, 10, Modifiers(ctrl=True)))
        gesture = handler.events[0]
        assert gesture.type.value == 'pinch'
        assert gesture.scale == pytest.approx(0.9)
        assert gesture.delta_scale == pytest.approx(0.9)
        assert gesture.center == Point(50, 60)

    def test_plain_wheel_ignored(self, manager, handler):
        manager.handle_wheel(WheelInput(50, 60, 10))
        assert handler.events == []

    def test_keys_broadcast_to_all_handlers(self, manager, handler):
        other = RecordingHandler()
        manager.add_handler(other)
        manager.set_mode(InteractionMode.DOOR)

        manager.handle_key(KeyInput(KeyKind.DOWN, "r", Modifiers(shift=True)))
        manager.handle_key(KeyInput(KeyKind.UP, "r"))

        for h in (handler, other):
            assert h.types == ['keyDown', 'keyUp']
        assert handler.events[0].key == "r"
        assert handler.events[0].shift is True


class TestTouch:

    def test_two_finger_pinch(self, manager, handler):
        manager.handle_touch(touch("start", (100, 100), (200, 200)))
        manager.handle_touch(touch("move", (50, 50), (250, 250)))

        gesture = handler.events[-1]
        assert gesture.scale == pytest.approx(2.0)
        assert gesture.rotation == pytest.approx(0.0)
        assert gesture.center == Point(150, 150)

    def test_pinch_rotation_and_steps(self, manager, handler):
        manager.handle_touch(touch("start", (0, 0), (100, 0)))
        manager.handle_touch(touch("move", (0, 0), (0, 150)))
        manager.handle_touch(touch("move", (0, 0), (0, 300)))

        first, second = handler.events
        assert first.rotation == pytest.approx(90.0)
        assert first.scale == pytest.approx(1.5)
        assert second.scale == pytest.approx(3.0)
        assert second.delta_scale == pytest.approx(2.0)
        assert second.delta_rotation == pytest.approx(0.0)

    def test_second_finger_ends_drag(self, manager, handler):
        manager.handle_touch(touch("start", (0, 0)))
        manager.handle_touch(touch("start", (0, 0), (100, 0)))
        assert handler.types == ['dragStart', 'dragEnd']
        assert not manager.get_state().is_active

    def test_tap_selects(self, manager, handler):
        manager.handle_touch(touch("start", (20, 30), t=1000))
        manager.handle_touch(touch("end", t=1100))
        assert handler.types == ['dragStart', 'dragEnd', 'select']
        assert handler.events[-1].point == Point(20, 30)

    def test_long_press_is_not_a_tap(self, manager, handler):
        manager.handle_touch(touch("start", (20, 30), t=1000))
        manager.handle_touch(touch("end", t=1500))
        assert 'select' not in handler.types

    def test_double_tap_is_two_selects(self, manager, handler):
        for start in (1000, 1250):
            manager.handle_touch(touch("start", (20, 30), t=start))
            manager.handle_touch(touch("end", t=start + 50))
        assert handler.types.count('select') == 2

    def test_single_finger_drag(self, manager, handler):
        manager.handle_touch(touch("start", (0, 0), t=0))
        manager.handle_touch(touch("move", (30, 40), t=50))
        manager.handle_touch(touch("end", t=400))
        assert handler.types == ['dragStart', 'drag', 'dragEnd']
        assert handler.events[1].delta == Point(30, 40)

    def test_draw_mode_tap(self, manager, handler):
        manager.set_mode(InteractionMode.DRAW)
        manager.handle_touch(touch("start", (5, 5), t=0))
        manager.handle_touch(touch("end", t=100))
        assert handler.types == ['select']


class TestModes:

    def test_set_mode_notifies_mode_aware_handlers(self, manager, handler):
        aware = ModeRecordingHandler()
        manager.add_handler(aware)
        modes = watch(manager.mode_changed)

        manager.set_mode(InteractionMode.DRAW)

        assert aware.modes == [InteractionMode.DRAW]
        assert modes.values == [InteractionMode.DRAW]
        assert manager.get_mode() is InteractionMode.DRAW

    def test_get_state_is_a_copy(self, manager):
        state = manager.get_state()
        state.mode = InteractionMode.DOOR
        state.is_dragging = True
        assert manager.get_mode() is InteractionMode.SELECT
        assert manager.get_state().is_dragging is False

    def test_rotation_angle_uses_degrees(self, manager, handler):
        drag(manager, (0, 0), (10, 10), MouseButton.SECONDARY)
        assert handler.events[1].angle == pytest.approx(math.degrees(math.atan2(10, 10)))
