"""
Room interaction handler.

Draw mode: each select places a vertex; once `points_per_room` vertices are
collected the room is created and selected. Hovering shows a live preview,
completing a rectangle when drawing quadrilaterals.

Select mode: a select picks a vertex (priority) or a room. Dragging moves
the picked vertex or the whole room; rotate and resize gestures act on the
selected room about its center.

The picked and hovered vertex live on the RoomManager, which drops them
whenever the outline they belong to is replaced.

Keys: Delete/Backspace delete the selected room (a picked vertex selects its
room too), Escape cancels selection and drawing, `r` rotates the selected
room 90 degrees.
"""

import logging
from typing import List, Optional

from floorplan_editor.geometry import ORIGIN, Point
from floorplan_editor.managers import RoomManager
from floorplan_editor.models import Room

from .events import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_ESCAPE,
    KEY_ROTATE,
    DragEvent,
    EventType,
    GestureEvent,
    GestureType,
    HoverEvent,
    InteractionHandler,
    InteractionMode,
    KeyboardEvent,
    KeyKind,
    ModeAware,
    ResizeEvent,
    RotateEvent,
    SelectEvent,
)

logger = logging.getLogger(__name__)


def rectangle_preview(points: List[Point]) -> List[Point]:
    """Complete a partial quadrilateral into a closed rectangle preview.

    Two points are treated as opposite corners; with three points the fourth
    corner is placed at (p1.x, p3.y). Other counts are returned unchanged.
    """
    if len(points) == 2:
        p1, p2 = points
        return [p1, Point(p2.x, p1.y), p2, Point(p1.x, p2.y)]
    if len(points) == 3:
        p1, _, p3 = points
        return list(points) + [Point(p1.x, p3.y)]
    return list(points)


class RoomInteractionHandler(InteractionHandler, ModeAware):
    """Translates abstract events into RoomManager calls."""

    def __init__(self, room_manager: RoomManager):
        self.room_manager = room_manager
        self.mode = InteractionMode.SELECT

        self._selected_room: Optional[Room] = None
        self._drawing = False
        self._drawing_points: List[Point] = []

        # Last cumulative gesture values already applied
        self._applied_delta = ORIGIN
        self._applied_angle = 0.0
        self._applied_scale = 1.0

        room_manager.selection_changed.connect(self._on_selection_changed)
        room_manager.room_removed.connect(self._on_room_removed)

    @property
    def selected_room(self) -> Optional[Room]:
        return self._selected_room

    @property
    def selected_point(self) -> Optional[Point]:
        return self.room_manager.get_selected_point()

    @property
    def drawing_points(self) -> List[Point]:
        return list(self._drawing_points)

    # ---------------------------------------------------------------
    # Manager notifications
    # ---------------------------------------------------------------

    def _on_selection_changed(self, room: Optional[Room]):
        self._selected_room = room

    def _on_room_removed(self, room: Room):
        if room is self._selected_room:
            self._selected_room = None

    # ---------------------------------------------------------------
    # Mode
    # ---------------------------------------------------------------

    def set_mode(self, mode: InteractionMode):
        self.mode = mode
        if mode is InteractionMode.DRAW:
            self.start_drawing()
        else:
            self.stop_drawing()

    def start_drawing(self):
        logger.debug("Room drawing started")
        self._drawing = True
        self._drawing_points = []
        self.room_manager.clear_selection()

    def stop_drawing(self):
        if self._drawing:
            logger.debug("Room drawing stopped")
        self._drawing = False
        self._drawing_points = []
        self.room_manager.clear_preview()

    # ---------------------------------------------------------------
    # Gestures
    # ---------------------------------------------------------------

    def on_drag(self, event: DragEvent):
        if event.type is not EventType.DRAG:
            self._applied_delta = ORIGIN
            return
        if self.mode is not InteractionMode.SELECT or self._selected_room is None:
            return

        step = event.delta - self._applied_delta
        self._applied_delta = event.delta
        if step == ORIGIN:
            return

        room = self._selected_room
        point = self.room_manager.get_selected_point()
        if point is not None:
            self.room_manager.move_point(room, point, step)
        else:
            self.room_manager.move_room(room, step)

    def on_rotate(self, event: RotateEvent):
        if event.type is not EventType.ROTATE:
            self._applied_angle = 0.0
            return
        if self.mode is not InteractionMode.SELECT or self._selected_room is None:
            return

        step = event.angle - self._applied_angle
        self._applied_angle = event.angle
        if step:
            self.room_manager.rotate_room(self._selected_room, step)

    def on_resize(self, event: ResizeEvent):
        if event.type is not EventType.RESIZE:
            self._applied_scale = 1.0
            return
        if self.mode is not InteractionMode.SELECT or self._selected_room is None:
            return

        if event.scale == 0 or self._applied_scale == 0:
            return
        step = event.scale / self._applied_scale
        self._applied_scale = event.scale
        if step != 1.0:
            self.room_manager.resize_room(self._selected_room, step)

    def on_gesture(self, event: GestureEvent):
        if self.mode is not InteractionMode.SELECT or self._selected_room is None:
            return
        if event.type is GestureType.PINCH and event.delta_scale > 0 and event.delta_scale != 1.0:
            self.room_manager.resize_room(self._selected_room, event.delta_scale)

    # ---------------------------------------------------------------
    # Select and hover
    # ---------------------------------------------------------------

    def on_select(self, event: SelectEvent):
        if self.mode is InteractionMode.DRAW:
            self._add_drawing_point(event.point)
            return
        if self.mode is not InteractionMode.SELECT:
            return

        if event.target is not None:
            # Another handler picked something under the pointer
            self.room_manager.clear_selection()
            return

        hit = self.room_manager.find_room_point_at_point(event.point)
        if hit is not None:
            self.room_manager.set_selected_room(hit.room)
            self.room_manager.set_selected_point(hit.point)
            event.target = hit
            return

        room = self.room_manager.find_room_at_point(event.point)
        self.room_manager.set_selected_room(room)
        self.room_manager.set_selected_point(None)
        if room is not None:
            event.target = room

    def on_hover(self, event: HoverEvent):
        if self.mode is InteractionMode.DRAW:
            if self._drawing:
                self._preview_with(event.point)
            return
        if self.mode is not InteractionMode.SELECT:
            return

        point = self.room_manager.find_point_at_position(event.point)
        if point is not None:
            self.room_manager.set_hovered_point(point)
            return
        self.room_manager.set_hovered_point(None)
        self.room_manager.set_hovered_room(self.room_manager.find_room_at_point(event.point))

    def _add_drawing_point(self, point: Point):
        self._drawing_points.append(point)
        if len(self._drawing_points) < self.room_manager.settings.points_per_room:
            return

        room = self.room_manager.create_room(self._drawing_points)
        if room is not None:
            self.room_manager.set_selected_room(room)
        self._drawing_points = []
        self.room_manager.clear_preview()

    def _preview_with(self, hover_point: Point):
        points = self._drawing_points + [hover_point]
        if self.room_manager.settings.points_per_room == 4:
            points = rectangle_preview(points)
        self.room_manager.preview_room(points)

    # ---------------------------------------------------------------
    # Keyboard
    # ---------------------------------------------------------------

    def on_keyboard(self, event: KeyboardEvent):
        if event.type is not KeyKind.DOWN:
            return

        if event.key in (KEY_DELETE, KEY_BACKSPACE):
            self._delete_selection()
        elif event.key == KEY_ESCAPE:
            self.room_manager.clear_selection()
            self._selected_room = None
            self._drawing_points = []
            self.room_manager.clear_preview()
        elif event.key == KEY_ROTATE and self._selected_room is not None:
            self.room_manager.rotate_room(self._selected_room, 90)

    def _delete_selection(self):
        room = self._selected_room
        if room is not None:
            self.room_manager.delete_room(room)
