"""
Interaction event types.

Provides:
- Raw input records delivered by an input source (pointer, touch, wheel, key)
- Surface: maps client coordinates to surface-local coordinates
- Abstract events produced by InteractionManager (drag, rotate, resize,
  select, hover, keyboard, gesture)
- InteractionState: transient gesture state owned by InteractionManager
- InteractionHandler base class and the ModeAware capability
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, List, Optional

from floorplan_editor.geometry import ORIGIN, Point


class InteractionMode(Enum):
    """High-level interaction intent."""
    SELECT = "select"
    DRAW = "draw"
    DOOR = "door"


# Key names follow the DOM `KeyboardEvent.key` convention
KEY_DELETE = "Delete"
KEY_BACKSPACE = "Backspace"
KEY_ESCAPE = "Escape"
KEY_SPACE = " "
KEY_ROTATE = "r"


# ---------------------------------------------------------------
# Raw input
# ---------------------------------------------------------------

@dataclass(frozen=True)
class Modifiers:
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    meta: bool = False


NO_MODIFIERS = Modifiers()


class MouseButton(Enum):
    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


class PointerKind(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


class TouchKind(Enum):
    START = "start"
    MOVE = "move"
    END = "end"


class KeyKind(Enum):
    DOWN = "keyDown"
    UP = "keyUp"


@dataclass(frozen=True)
class PointerInput:
    """Mouse/pen input in client coordinates. timestamp is in milliseconds."""
    kind: PointerKind
    client_x: float
    client_y: float
    button: MouseButton = MouseButton.PRIMARY
    modifiers: Modifiers = NO_MODIFIERS
    timestamp: float = 0.0


@dataclass(frozen=True)
class TouchInput:
    """Touch input.

    `touches` lists the client positions of the fingers still on the surface
    after this event, so an END with no remaining fingers has an empty list.
    """
    kind: TouchKind
    touches: List[Point] = field(default_factory=list)
    timestamp: float = 0.0


@dataclass(frozen=True)
class WheelInput:
    client_x: float
    client_y: float
    delta_y: float
    modifiers: Modifiers = NO_MODIFIERS


@dataclass(frozen=True)
class KeyInput:
    kind: KeyKind
    key: str
    modifiers: Modifiers = NO_MODIFIERS


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float


class Surface(ABC):
    """Pointer/touch-capable area the editor draws on."""

    @abstractmethod
    def bounding_rect(self) -> Rect:
        """Surface rectangle in client coordinates."""

    def to_local(self, client_x: float, client_y: float) -> Point:
        rect = self.bounding_rect()
        return Point(client_x - rect.left, client_y - rect.top)


class FixedSurface(Surface):
    """Surface with a constant rectangle (headless use and tests)."""

    def __init__(self, rect: Optional[Rect] = None):
        self._rect = rect or Rect(0, 0, 0, 0)

    def bounding_rect(self) -> Rect:
        return self._rect


# ---------------------------------------------------------------
# Abstract events
# ---------------------------------------------------------------

class EventType(Enum):
    DRAG_START = "dragStart"
    DRAG = "drag"
    DRAG_END = "dragEnd"
    ROTATE_START = "rotateStart"
    ROTATE = "rotate"
    ROTATE_END = "rotateEnd"
    RESIZE_START = "resizeStart"
    RESIZE = "resize"
    RESIZE_END = "resizeEnd"
    SELECT = "select"
    HOVER = "hover"


class GestureType(Enum):
    PINCH = "pinch"


@dataclass
class DragEvent:
    """Drag life-cycle event. delta is cumulative from start_point."""
    type: EventType
    point: Point
    start_point: Point
    delta: Point = ORIGIN
    source: Any = None


@dataclass
class RotateEvent:
    """Rotate life-cycle event. angle is cumulative degrees since the start."""
    type: EventType
    point: Point
    angle: float
    center: Point
    source: Any = None


@dataclass
class ResizeEvent:
    """Resize life-cycle event. scale is cumulative since the start."""
    type: EventType
    point: Point
    scale: float
    center: Point
    source: Any = None


@dataclass
class SelectEvent:
    """A tap, click or draw-mode press.

    target starts as None; the first handler that claims the event (e.g. by
    selecting a door under the point) stores what it picked so later
    handlers can leave the event alone.
    """
    point: Point
    target: Any = None
    source: Any = None
    type: EventType = EventType.SELECT


@dataclass
class HoverEvent:
    point: Point
    target: Any = None
    source: Any = None
    type: EventType = EventType.HOVER


@dataclass
class KeyboardEvent:
    type: KeyKind
    key: str
    modifiers: Modifiers = NO_MODIFIERS
    source: Any = None

    @property
    def ctrl(self) -> bool:
        return self.modifiers.ctrl

    @property
    def shift(self) -> bool:
        return self.modifiers.shift

    @property
    def alt(self) -> bool:
        return self.modifiers.alt

    @property
    def meta(self) -> bool:
        return self.modifiers.meta


@dataclass
class GestureEvent:
    """Multi-finger or ctrl+wheel gesture.

    scale and rotation are measured from the start of the gesture;
    delta_scale and delta_rotation are the change since the previous event
    of the same gesture (equal to scale/rotation for one-shot wheel pinches).
    """
    type: GestureType
    scale: float = 1.0
    rotation: float = 0.0
    center: Optional[Point] = None
    delta_scale: float = 1.0
    delta_rotation: float = 0.0


# ---------------------------------------------------------------
# State and handler interfaces
# ---------------------------------------------------------------

@dataclass
class InteractionState:
    """Transient gesture state. At most one gesture flag is set at a time."""
    mode: InteractionMode = InteractionMode.SELECT
    is_drawing: bool = False
    is_dragging: bool = False
    is_resizing: bool = False
    is_rotating: bool = False
    start_point: Optional[Point] = None
    current_point: Optional[Point] = None
    selected_room: Any = None
    selected_door: Any = None
    selected_point: Optional[Point] = None
    hovered_room: Any = None
    hovered_door: Any = None
    hovered_point: Optional[Point] = None

    @property
    def is_active(self) -> bool:
        return self.is_drawing or self.is_dragging or self.is_resizing or self.is_rotating

    def copy(self) -> 'InteractionState':
        return replace(self)


class InteractionHandler:
    """Receiver of abstract interaction events.

    Every method is a no-op; subclasses override what they care about.
    Events are broadcast to all registered handlers.
    """

    def on_drag(self, event: DragEvent):
        pass

    def on_rotate(self, event: RotateEvent):
        pass

    def on_resize(self, event: ResizeEvent):
        pass

    def on_select(self, event: SelectEvent):
        pass

    def on_hover(self, event: HoverEvent):
        pass

    def on_keyboard(self, event: KeyboardEvent):
        pass

    def on_gesture(self, event: GestureEvent):
        pass


class ModeAware(ABC):
    """Capability of handlers that reset per-mode state on mode switches."""

    @abstractmethod
    def set_mode(self, mode: InteractionMode):
        """Called by InteractionManager whenever the mode is set."""
