"""
Interaction layer: the gesture state machine and the handlers that turn
abstract events into room and door edits.
"""

from .events import (
    InteractionMode,
    InteractionState,
    InteractionHandler,
    ModeAware,
    Modifiers,
    MouseButton,
    PointerKind,
    PointerInput,
    TouchKind,
    TouchInput,
    WheelInput,
    KeyKind,
    KeyInput,
    Rect,
    Surface,
    FixedSurface,
    EventType,
    GestureType,
    DragEvent,
    RotateEvent,
    ResizeEvent,
    SelectEvent,
    HoverEvent,
    KeyboardEvent,
    GestureEvent,
)
from .manager import InteractionManager
from .room_handler import RoomInteractionHandler
from .door_handler import DoorInteractionHandler

__all__ = [
    # Mode and state
    'InteractionMode',
    'InteractionState',
    'InteractionHandler',
    'ModeAware',
    # Raw input
    'Modifiers',
    'MouseButton',
    'PointerKind',
    'PointerInput',
    'TouchKind',
    'TouchInput',
    'WheelInput',
    'KeyKind',
    'KeyInput',
    'Rect',
    'Surface',
    'FixedSurface',
    # Abstract events
    'EventType',
    'GestureType',
    'DragEvent',
    'RotateEvent',
    'ResizeEvent',
    'SelectEvent',
    'HoverEvent',
    'KeyboardEvent',
    'GestureEvent',
    # Components
    'InteractionManager',
    'RoomInteractionHandler',
    'DoorInteractionHandler',
]
