"""
Door interaction handler.

Door mode: a select inside a room places a door there; hovering over a room
shows a placement preview.

Select mode: a select picks the door under the pointer. Drags move the
selected door without re-checking its wall, rotate gestures turn it in
quarter turns and resize gestures scale it.

Keys: Delete/Backspace delete, Escape cancels, `r` rotates 90 degrees,
space flips the swing direction.
"""

import logging
from typing import Optional

from floorplan_editor.geometry import ORIGIN
from floorplan_editor.managers import DoorManager, RoomManager
from floorplan_editor.models import Door
from floorplan_editor.validation import ValidationFailed

from .events import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_ESCAPE,
    KEY_ROTATE,
    KEY_SPACE,
    DragEvent,
    EventType,
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


class DoorInteractionHandler(InteractionHandler, ModeAware):
    """Translates abstract events into DoorManager calls."""

    def __init__(self, door_manager: DoorManager, room_manager: RoomManager):
        self.door_manager = door_manager
        self.room_manager = room_manager
        self.mode = InteractionMode.SELECT

        self._selected_door: Optional[Door] = None
        self._placing = False

        self._applied_delta = ORIGIN
        self._applied_scale = 1.0
        self._rotate_base: Optional[float] = None
        self._rotate_quarters = 0

        door_manager.selection_changed.connect(self._on_selection_changed)
        door_manager.door_removed.connect(self._on_door_removed)

    @property
    def selected_door(self) -> Optional[Door]:
        return self._selected_door

    @property
    def placing(self) -> bool:
        return self._placing

    def _on_selection_changed(self, door: Optional[Door]):
        self._selected_door = door

    def _on_door_removed(self, door: Door):
        if door is self._selected_door:
            self._selected_door = None

    # ---------------------------------------------------------------
    # Mode
    # ---------------------------------------------------------------

    def set_mode(self, mode: InteractionMode):
        self.mode = mode
        if mode is InteractionMode.DOOR:
            self.start_placing()
        else:
            self.stop_placing()

    def start_placing(self):
        logger.debug("Door placement started")
        self._placing = True
        self.door_manager.clear_selection()

    def stop_placing(self):
        self._placing = False
        self.door_manager.clear_preview()

    # ---------------------------------------------------------------
    # Gestures
    # ---------------------------------------------------------------

    def on_drag(self, event: DragEvent):
        if event.type is not EventType.DRAG:
            self._applied_delta = ORIGIN
            return
        if self.mode is not InteractionMode.SELECT or self._selected_door is None:
            return

        step = event.delta - self._applied_delta
        self._applied_delta = event.delta
        if step != ORIGIN:
            self.door_manager.move_door(self._selected_door, step)

    def on_rotate(self, event: RotateEvent):
        """Turn the selected door by whole quarter turns of the gesture angle."""
        if event.type is not EventType.ROTATE:
            self._rotate_base = None
            self._rotate_quarters = 0
            return
        if self.mode is not InteractionMode.SELECT or self._selected_door is None:
            return

        if self._rotate_base is None:
            self._rotate_base = self._selected_door.angle
        quarters = round(event.angle / 90)
        if quarters != self._rotate_quarters:
            self._rotate_quarters = quarters
            self.door_manager.rotate_door(self._selected_door, self._rotate_base + quarters * 90)

    def on_resize(self, event: ResizeEvent):
        if event.type is not EventType.RESIZE:
            self._applied_scale = 1.0
            return
        if self.mode is not InteractionMode.SELECT or self._selected_door is None:
            return
        if event.scale == 0 or self._applied_scale == 0:
            return

        step = event.scale / self._applied_scale
        self._applied_scale = event.scale
        if step != 1.0:
            self.door_manager.resize_door(self._selected_door, step)

    # ---------------------------------------------------------------
    # Select and hover
    # ---------------------------------------------------------------

    def on_select(self, event: SelectEvent):
        if self.mode is InteractionMode.DOOR:
            self._place_door(event)
            return
        if self.mode is not InteractionMode.SELECT:
            return

        if event.target is not None:
            self.door_manager.clear_selection()
            return

        door = self.door_manager.find_door_at_point(event.point)
        self.door_manager.set_selected_door(door)
        if door is not None:
            event.target = door

    def _place_door(self, event: SelectEvent):
        room = self.room_manager.find_room_at_point(event.point)
        if room is None:
            return

        try:
            door = self.door_manager.create_door(event.point, room)
        except ValidationFailed as e:
            logger.warning("Door not placed: %s", e)
            return
        self.door_manager.set_selected_door(door)
        event.target = door

    def on_hover(self, event: HoverEvent):
        if self.mode is InteractionMode.DOOR:
            if self.room_manager.find_room_at_point(event.point) is not None:
                self.door_manager.preview_door(event.point)
            else:
                self.door_manager.clear_preview()
            return
        if self.mode is InteractionMode.SELECT:
            self.door_manager.set_hovered_door(self.door_manager.find_door_at_point(event.point))

    # ---------------------------------------------------------------
    # Keyboard
    # ---------------------------------------------------------------

    def on_keyboard(self, event: KeyboardEvent):
        if event.type is not KeyKind.DOWN:
            return

        door = self._selected_door
        if event.key in (KEY_DELETE, KEY_BACKSPACE):
            if door is not None:
                self.door_manager.delete_door(door)
        elif event.key == KEY_ESCAPE:
            self.door_manager.clear_selection()
            self._selected_door = None
            self.door_manager.clear_preview()
        elif event.key == KEY_ROTATE and door is not None:
            self.door_manager.rotate_door(door, door.angle + 90)
        elif event.key == KEY_SPACE and door is not None:
            self.door_manager.toggle_door_swing(door)
