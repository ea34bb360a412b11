"""
Interaction manager: the gesture state machine.

Turns raw pointer, touch, wheel and key input into abstract events and
broadcasts each one to every registered handler. Only one gesture
(drawing press, drag, resize or rotate) can be active at a time; a
pointer-down that arrives while one is active is ignored.

Transitions:
- Primary down: draw mode -> select (press held as a drawing press);
  other modes -> dragStart
- Secondary down in select mode -> rotateStart
- Move: continuation of the active gesture, else hover
- Up: the matching *End event; a short press-release outside draw mode
  also produces a select (click)
- Ctrl+wheel: pinch with scale 1 - delta_y * wheel_zoom_factor
- One finger: same drag life cycle; a short touch is a tap (select)
- Two fingers: pinch with scale and rotation relative to the start
"""

import logging
import math
from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from floorplan_editor.config import EditorSettings
from floorplan_editor.geometry import Point, distance

from .events import (
    DragEvent,
    EventType,
    GestureEvent,
    GestureType,
    HoverEvent,
    InteractionHandler,
    InteractionMode,
    InteractionState,
    KeyboardEvent,
    KeyInput,
    ModeAware,
    MouseButton,
    PointerInput,
    PointerKind,
    ResizeEvent,
    RotateEvent,
    SelectEvent,
    Surface,
    TouchInput,
    TouchKind,
    WheelInput,
)

logger = logging.getLogger(__name__)


def _angle_from(center: Point, point: Point) -> float:
    return math.degrees(math.atan2(point.y - center.y, point.x - center.x))


class InteractionManager(QObject):
    """Normalizes input into abstract events for InteractionHandlers."""

    mode_changed = pyqtSignal(object)  # InteractionMode
    state_changed = pyqtSignal(object)  # InteractionState (copy)

    def __init__(self, surface: Surface, settings: Optional[EditorSettings] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.surface = surface
        self.settings = settings or EditorSettings()
        self._handlers: List[InteractionHandler] = []
        self._enabled = False
        self._state = InteractionState()

        self._resize_center: Optional[Point] = None

        # Touch tracking; timestamps in milliseconds
        self._touch_start_time = 0.0
        self._last_tap_time: Optional[float] = None
        self._pinch_active = False
        self._pinch_start_distance = 0.0
        self._pinch_start_angle = 0.0
        self._pinch_last_scale = 1.0
        self._pinch_last_rotation = 0.0

    # ---------------------------------------------------------------
    # Life cycle and handlers
    # ---------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False

    def destroy(self):
        """Disable input and drop all handlers and signal connections."""
        self.disable()
        self._handlers.clear()
        for signal in (self.mode_changed, self.state_changed):
            try:
                signal.disconnect()
            except TypeError:
                # Nothing was connected
                pass

    def add_handler(self, handler: InteractionHandler):
        if not isinstance(handler, InteractionHandler):
            raise TypeError(f"{type(handler).__name__} is not an InteractionHandler")
        if handler in self._handlers:
            return
        self._handlers.append(handler)
        if isinstance(handler, ModeAware):
            logger.debug("Registered mode-aware handler %s", type(handler).__name__)

    def remove_handler(self, handler: InteractionHandler):
        if handler in self._handlers:
            self._handlers.remove(handler)

    @property
    def handlers(self) -> List[InteractionHandler]:
        return list(self._handlers)

    # ---------------------------------------------------------------
    # Mode and state
    # ---------------------------------------------------------------

    def set_mode(self, mode: InteractionMode):
        logger.debug("Interaction mode -> %s", mode.value)
        self._state.mode = mode
        self.mode_changed.emit(mode)
        for handler in list(self._handlers):
            if isinstance(handler, ModeAware):
                handler.set_mode(mode)
        self._emit_state()

    def get_mode(self) -> InteractionMode:
        return self._state.mode

    def get_state(self) -> InteractionState:
        return self._state.copy()

    def bind_managers(self, room_manager, door_manager):
        """Mirror manager selection and hover into the interaction state."""
        room_manager.selection_changed.connect(lambda room: self._mirror('selected_room', room))
        room_manager.hover_changed.connect(lambda room: self._mirror('hovered_room', room))
        room_manager.point_selection_changed.connect(self.set_selected_point)
        room_manager.point_hover_changed.connect(self.set_hovered_point)
        door_manager.selection_changed.connect(lambda door: self._mirror('selected_door', door))
        door_manager.hover_changed.connect(lambda door: self._mirror('hovered_door', door))

    def set_selected_point(self, point: Optional[Point]):
        self._mirror('selected_point', point)

    def set_hovered_point(self, point: Optional[Point]):
        self._mirror('hovered_point', point)

    # ---------------------------------------------------------------
    # Pointer input
    # ---------------------------------------------------------------

    def handle_pointer(self, event: PointerInput):
        if not self._enabled:
            return

        point = self.surface.to_local(event.client_x, event.client_y)
        if event.kind is PointerKind.DOWN:
            self._pointer_down(point, event)
        elif event.kind is PointerKind.MOVE:
            self._pointer_move(point, event)
        elif event.kind is PointerKind.UP:
            self._pointer_up(point, event)

    def _pointer_down(self, point: Point, event: PointerInput):
        if self._state.is_active:
            return

        mode = self._state.mode
        if event.button is MouseButton.PRIMARY:
            self._begin(point)
            if mode is InteractionMode.DRAW:
                self._state.is_drawing = True
                self._notify('on_select', SelectEvent(point=point, source=event))
            else:
                self._state.is_dragging = True
                self._notify('on_drag', DragEvent(EventType.DRAG_START, point, point, source=event))
        elif event.button is MouseButton.SECONDARY and mode is InteractionMode.SELECT:
            self._begin(point)
            self._state.is_rotating = True
            self._notify('on_rotate', RotateEvent(EventType.ROTATE_START, point, 0.0, point, source=event))
        else:
            return
        self._emit_state()

    def _pointer_move(self, point: Point, event: PointerInput):
        self._state.current_point = point
        if self._state.is_dragging:
            self._drag(event)
        elif self._state.is_resizing:
            self._resize(event)
        elif self._state.is_rotating:
            self._rotate(event)
        else:
            self._notify('on_hover', HoverEvent(point=point, source=event))

    def _pointer_up(self, point: Point, event: PointerInput):
        state = self._state
        if not state.is_active:
            return

        state.current_point = point
        start = state.start_point
        if state.is_dragging:
            self._end_drag(event)
            if distance(start, point) <= self.settings.click_threshold:
                self._notify('on_select', SelectEvent(point=point, source=event))
        elif state.is_resizing:
            self._end_resize(event)
        elif state.is_rotating:
            self._end_rotate(event)
        self._finish()

    # ---------------------------------------------------------------
    # Programmatic resize
    # ---------------------------------------------------------------

    def begin_resize(self, point: Point, center: Point) -> bool:
        """Start a resize gesture about center (e.g. from a resize handle).

        point is in surface coordinates. Subsequent pointer moves emit
        resize events and the next pointer-up ends the gesture.

        Returns:
            False if input is disabled or another gesture is active.
        """
        if not self._enabled or self._state.is_active:
            return False

        self._begin(point)
        self._state.is_resizing = True
        self._resize_center = center
        self._notify('on_resize', ResizeEvent(EventType.RESIZE_START, point, 1.0, center))
        self._emit_state()
        return True

    # ---------------------------------------------------------------
    # Wheel and keyboard
    # ---------------------------------------------------------------

    def handle_wheel(self, event: WheelInput):
        if not self._enabled or not event.modifiers.ctrl:
            return

        scale = 1 - event.delta_y * self.settings.wheel_zoom_factor
        center = self.surface.to_local(event.client_x, event.client_y)
        self._notify('on_gesture', GestureEvent(
            type=GestureType.PINCH,
            scale=scale,
            center=center,
            delta_scale=scale,
        ))

    def handle_key(self, event: KeyInput):
        if not self._enabled:
            return
        self._notify('on_keyboard', KeyboardEvent(event.kind, event.key, event.modifiers, source=event))

    # ---------------------------------------------------------------
    # Touch input
    # ---------------------------------------------------------------

    def handle_touch(self, event: TouchInput):
        if not self._enabled:
            return

        touches = [self.surface.to_local(t.x, t.y) for t in event.touches]
        if event.kind is TouchKind.START:
            self._touch_start(touches, event)
        elif event.kind is TouchKind.MOVE:
            self._touch_move(touches, event)
        elif event.kind is TouchKind.END:
            self._touch_end(touches, event)

    def _touch_start(self, touches: List[Point], event: TouchInput):
        if len(touches) == 1 and not self._state.is_active and not self._pinch_active:
            self._touch_start_time = event.timestamp
            if (self._last_tap_time is not None
                    and event.timestamp - self._last_tap_time < self.settings.double_tap_delay_ms):
                # Double taps go down the same select path as single taps
                logger.debug("Double tap at (%.1f, %.1f)", touches[0].x, touches[0].y)

            point = touches[0]
            self._begin(point)
            if self._state.mode is InteractionMode.DRAW:
                self._state.is_drawing = True
            else:
                self._state.is_dragging = True
                self._notify('on_drag', DragEvent(EventType.DRAG_START, point, point, source=event))
            self._emit_state()
        elif len(touches) == 2:
            if self._state.is_dragging:
                self._end_drag(event)
            self._finish()
            self._start_pinch(touches)

    def _touch_move(self, touches: List[Point], event: TouchInput):
        if len(touches) == 2 and self._pinch_active:
            self._move_pinch(touches)
        elif len(touches) == 1 and not self._pinch_active:
            self._state.current_point = touches[0]
            if self._state.is_dragging:
                self._drag(event)
            elif self._state.is_drawing:
                self._notify('on_hover', HoverEvent(point=touches[0], source=event))

    def _touch_end(self, touches: List[Point], event: TouchInput):
        if len(touches) < 2:
            self._pinch_start_distance = 0.0
            self._pinch_start_angle = 0.0
        if touches:
            return
        if self._pinch_active:
            self._pinch_active = False
            return
        if not self._state.is_active:
            return

        point = self._state.current_point
        is_tap = event.timestamp - self._touch_start_time < self.settings.tap_max_duration_ms
        if self._state.is_dragging:
            self._end_drag(event)
        if is_tap:
            self._last_tap_time = event.timestamp
            self._notify('on_select', SelectEvent(point=point, source=event))
        self._finish()

    def _start_pinch(self, touches: List[Point]):
        first, second = touches
        self._pinch_active = True
        self._pinch_start_distance = distance(first, second)
        self._pinch_start_angle = _angle_from(first, second)
        self._pinch_last_scale = 1.0
        self._pinch_last_rotation = 0.0

    def _move_pinch(self, touches: List[Point]):
        if self._pinch_start_distance == 0:
            return

        first, second = touches
        scale = distance(first, second) / self._pinch_start_distance
        rotation = _angle_from(first, second) - self._pinch_start_angle
        center = Point((first.x + second.x) / 2, (first.y + second.y) / 2)

        gesture = GestureEvent(
            type=GestureType.PINCH,
            scale=scale,
            rotation=rotation,
            center=center,
            delta_scale=scale / self._pinch_last_scale if self._pinch_last_scale else 1.0,
            delta_rotation=rotation - self._pinch_last_rotation,
        )
        self._pinch_last_scale = scale
        self._pinch_last_rotation = rotation
        self._notify('on_gesture', gesture)

    # ---------------------------------------------------------------
    # Continuations and endings
    # ---------------------------------------------------------------

    def _drag(self, source):
        start = self._state.start_point
        current = self._state.current_point
        if start is None or current is None:
            return
        self._notify('on_drag', DragEvent(EventType.DRAG, current, start, current - start, source=source))

    def _resize(self, source):
        start = self._state.start_point
        current = self._state.current_point
        center = self._resize_center or start
        start_distance = distance(start, center)
        scale = distance(current, center) / start_distance if start_distance else 1.0
        self._notify('on_resize', ResizeEvent(EventType.RESIZE, current, scale, center, source=source))

    def _rotate(self, source):
        start = self._state.start_point
        current = self._state.current_point
        center = start
        angle = _angle_from(center, current) - _angle_from(center, start)
        self._notify('on_rotate', RotateEvent(EventType.ROTATE, current, angle, center, source=source))

    def _end_drag(self, source):
        start = self._state.start_point
        current = self._state.current_point or start
        self._notify('on_drag', DragEvent(EventType.DRAG_END, current, start, current - start, source=source))

    def _end_resize(self, source):
        center = self._resize_center or self._state.start_point
        self._notify('on_resize', ResizeEvent(EventType.RESIZE_END, self._state.current_point, 1.0,
                                              center, source=source))

    def _end_rotate(self, source):
        self._notify('on_rotate', RotateEvent(EventType.ROTATE_END, self._state.current_point, 0.0,
                                              self._state.start_point, source=source))

    # ---------------------------------------------------------------
    # Internal
    # ---------------------------------------------------------------

    def _begin(self, point: Point):
        self._state.start_point = point
        self._state.current_point = point

    def _finish(self):
        state = self._state
        was_active = state.is_active
        state.is_drawing = False
        state.is_dragging = False
        state.is_resizing = False
        state.is_rotating = False
        state.start_point = None
        state.current_point = None
        self._resize_center = None
        if was_active:
            self._emit_state()

    def _mirror(self, attr: str, value):
        if getattr(self._state, attr) is not value:
            setattr(self._state, attr, value)
            self._emit_state()

    def _emit_state(self):
        self.state_changed.emit(self._state.copy())

    def _notify(self, method: str, event):
        """Broadcast event to every handler, without short-circuiting."""
        for handler in list(self._handlers):
            getattr(handler, method)(event)
