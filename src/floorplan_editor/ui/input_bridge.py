"""
Qt input bridge.

Translates Qt mouse, wheel, touch and key events on a widget into the editor's
raw input records and feeds them to an InteractionManager.

Provides:
- WidgetSurface: a Surface backed by a QWidget's on-screen rectangle
- translate_mouse_event / translate_wheel_event / translate_touch_event /
  translate_key_event: Qt event -> raw input record (or None)
- QtInputBridge: event filter wiring a widget to an InteractionManager
"""

import logging
from typing import Optional

from PyQt5.QtCore import QEvent, QObject, QPoint, Qt
from PyQt5.QtGui import QKeyEvent, QMouseEvent, QTouchEvent, QWheelEvent
from PyQt5.QtWidgets import QWidget

from floorplan_editor.geometry import Point
from floorplan_editor.interaction import (
    InteractionManager,
    KeyInput,
    KeyKind,
    Modifiers,
    MouseButton,
    PointerInput,
    PointerKind,
    Rect,
    Surface,
    TouchInput,
    TouchKind,
    WheelInput,
)
from floorplan_editor.interaction.events import KEY_BACKSPACE, KEY_DELETE, KEY_ESCAPE, KEY_SPACE

logger = logging.getLogger(__name__)

# Qt reports wheel rotation in eighths of a degree
WHEEL_UNITS_PER_DEGREE = 8

_POINTER_KINDS = {
    QEvent.MouseButtonPress: PointerKind.DOWN,
    QEvent.MouseMove: PointerKind.MOVE,
    QEvent.MouseButtonRelease: PointerKind.UP,
}

_BUTTONS = {
    Qt.LeftButton: MouseButton.PRIMARY,
    Qt.MiddleButton: MouseButton.MIDDLE,
    Qt.RightButton: MouseButton.SECONDARY,
}

_NAMED_KEYS = {
    Qt.Key_Delete: KEY_DELETE,
    Qt.Key_Backspace: KEY_BACKSPACE,
    Qt.Key_Escape: KEY_ESCAPE,
    Qt.Key_Space: KEY_SPACE,
}


class WidgetSurface(Surface):
    """Surface whose rectangle is the widget's area in global coordinates."""

    def __init__(self, widget: QWidget):
        self.widget = widget

    def bounding_rect(self) -> Rect:
        origin = self.widget.mapToGlobal(QPoint(0, 0))
        return Rect(origin.x(), origin.y(), self.widget.width(), self.widget.height())


def translate_modifiers(modifiers) -> Modifiers:
    return Modifiers(
        ctrl=bool(modifiers & Qt.ControlModifier),
        shift=bool(modifiers & Qt.ShiftModifier),
        alt=bool(modifiers & Qt.AltModifier),
        meta=bool(modifiers & Qt.MetaModifier),
    )


def translate_mouse_event(event: QMouseEvent) -> Optional[PointerInput]:
    kind = _POINTER_KINDS.get(event.type())
    if kind is None:
        return None
    pos = event.screenPos()
    return PointerInput(
        kind=kind,
        client_x=pos.x(),
        client_y=pos.y(),
        button=_BUTTONS.get(event.button(), MouseButton.PRIMARY),
        modifiers=translate_modifiers(event.modifiers()),
        timestamp=float(event.timestamp()),
    )


def translate_wheel_event(event: QWheelEvent) -> WheelInput:
    """Qt's angle delta grows when scrolling up; the editor's delta_y grows scrolling down."""
    pos = event.globalPosF()
    return WheelInput(
        client_x=pos.x(),
        client_y=pos.y(),
        delta_y=-event.angleDelta().y() / WHEEL_UNITS_PER_DEGREE,
        modifiers=translate_modifiers(event.modifiers()),
    )


def translate_touch_event(event: QTouchEvent) -> Optional[TouchInput]:
    points = event.touchPoints()
    states = {p.state() for p in points}
    remaining = [
        Point(p.screenPos().x(), p.screenPos().y())
        for p in points
        if p.state() != Qt.TouchPointReleased
    ]

    etype = event.type()
    if etype in (QEvent.TouchEnd, QEvent.TouchCancel):
        return TouchInput(TouchKind.END, [], float(event.timestamp()))
    if etype == QEvent.TouchBegin or Qt.TouchPointPressed in states:
        kind = TouchKind.START
    elif Qt.TouchPointReleased in states:
        kind = TouchKind.END
    elif etype == QEvent.TouchUpdate:
        kind = TouchKind.MOVE
    else:
        return None
    return TouchInput(kind, remaining, float(event.timestamp()))


def translate_key_event(event: QKeyEvent) -> Optional[KeyInput]:
    if event.type() == QEvent.KeyPress:
        kind = KeyKind.DOWN
    elif event.type() == QEvent.KeyRelease:
        kind = KeyKind.UP
    else:
        return None
    if event.isAutoRepeat() and kind is KeyKind.UP:
        return None

    key = _NAMED_KEYS.get(event.key(), event.text())
    if not key:
        return None
    return KeyInput(kind, key, translate_modifiers(event.modifiers()))


class QtInputBridge(QObject):
    """Event filter feeding a widget's input to an InteractionManager."""

    def __init__(self, manager: InteractionManager, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.manager = manager
        self._widget: Optional[QWidget] = None

    def install(self, widget: QWidget):
        """Start filtering widget's events."""
        if self._widget is not None:
            self.uninstall()
        widget.setMouseTracking(True)
        widget.setAttribute(Qt.WA_AcceptTouchEvents, True)
        widget.setFocusPolicy(Qt.StrongFocus)
        widget.installEventFilter(self)
        self._widget = widget
        logger.debug("Input bridge installed on %s", type(widget).__name__)

    def uninstall(self):
        if self._widget is not None:
            self._widget.removeEventFilter(self)
            self._widget = None

    def eventFilter(self, obj, event) -> bool:
        etype = event.type()

        if etype in _POINTER_KINDS:
            raw = translate_mouse_event(event)
            if raw is not None:
                self.manager.handle_pointer(raw)
            return False

        if etype == QEvent.Wheel:
            raw = translate_wheel_event(event)
            self.manager.handle_wheel(raw)
            # ctrl+wheel is a pinch, not a scroll
            return raw.modifiers.ctrl

        if etype in (QEvent.TouchBegin, QEvent.TouchUpdate, QEvent.TouchEnd, QEvent.TouchCancel):
            raw = translate_touch_event(event)
            if raw is not None:
                self.manager.handle_touch(raw)
            event.accept()
            return True

        if etype in (QEvent.KeyPress, QEvent.KeyRelease):
            raw = translate_key_event(event)
            if raw is not None:
                self.manager.handle_key(raw)
            return False

        return super().eventFilter(obj, event)
