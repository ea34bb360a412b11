"""Tests for translating Qt events into raw editor input."""

import os

import pytest
from PyQt5.QtCore import QEvent, QPoint, QPointF, Qt
from PyQt5.QtGui import QKeyEvent, QMouseEvent, QWheelEvent
from PyQt5.QtWidgets import QApplication, QWidget

from floorplan_editor.interaction import (
    InteractionManager,
    KeyKind,
    MouseButton,
    PointerKind,
)
from floorplan_editor.ui import (
    QtInputBridge,
    WidgetSurface,
    translate_key_event,
    translate_modifiers,
    translate_mouse_event,
    translate_wheel_event,
)

from helpers import RecordingHandler


def mouse(etype, x, y, button=Qt.LeftButton, modifiers=Qt.NoModifier):
    local = QPointF(x - 10, y - 10)
    return QMouseEvent(etype, local, local, QPointF(x, y), button, button, modifiers)


def wheel(angle_y, modifiers=Qt.NoModifier):
    return QWheelEvent(QPointF(5, 5), QPointF(40, 60), QPoint(0, 0), QPoint(0, angle_y),
                       Qt.NoButton, modifiers, Qt.NoScrollPhase, False)


class TestTranslation:

    def test_modifiers(self):
        mods = translate_modifiers(Qt.ControlModifier | Qt.ShiftModifier)
        assert (mods.ctrl, mods.shift, mods.alt, mods.meta) == (True, True, False, False)

    def test_named_key(self):
        raw = translate_key_event(QKeyEvent(QEvent.KeyPress, Qt.Key_Delete, Qt.NoModifier))
        assert raw.kind is KeyKind.DOWN
        assert raw.key == "Delete"

    def test_text_key(self):
        raw = translate_key_event(QKeyEvent(QEvent.KeyRelease, Qt.Key_R, Qt.ShiftModifier, "r"))
        assert raw.kind is KeyKind.UP
        assert raw.key == "r"
        assert raw.modifiers.shift is True

    def test_space(self):
        raw = translate_key_event(QKeyEvent(QEvent.KeyPress, Qt.Key_Space, Qt.NoModifier, " "))
        assert raw.key == " "

    def test_auto_repeat_release_is_dropped(self):
        event = QKeyEvent(QEvent.KeyRelease, Qt.Key_R, Qt.NoModifier, "r", True)
        assert translate_key_event(event) is None

    def test_key_without_text_is_dropped(self):
        assert translate_key_event(QKeyEvent(QEvent.KeyPress, Qt.Key_Shift, Qt.ShiftModifier)) is None

    @pytest.mark.parametrize("etype,kind", [
        (QEvent.MouseButtonPress, PointerKind.DOWN),
        (QEvent.MouseMove, PointerKind.MOVE),
        (QEvent.MouseButtonRelease, PointerKind.UP),
    ])
    def test_mouse_kinds(self, etype, kind):
        raw = translate_mouse_event(mouse(etype, 110, 120))
        assert raw.kind is kind
        assert (raw.client_x, raw.client_y) == (110, 120)

    def test_mouse_buttons(self):
        raw = translate_mouse_event(mouse(QEvent.MouseButtonPress, 0, 0, Qt.RightButton))
        assert raw.button is MouseButton.SECONDARY

    def test_wheel_direction(self):
        raw = translate_wheel_event(wheel(120, Qt.ControlModifier))
        assert raw.delta_y == -15
        assert raw.modifiers.ctrl is True
        assert (raw.client_x, raw.client_y) == (40, 60)


class TestBridge:

    @pytest.fixture
    def manager(self, surface):
        manager = InteractionManager(surface)
        manager.enable()
        return manager

    @pytest.fixture
    def handler(self, manager):
        handler = RecordingHandler()
        manager.add_handler(handler)
        return handler

    def test_mouse_is_forwarded(self, manager, handler):
        bridge = QtInputBridge(manager)
        assert bridge.eventFilter(None, mouse(QEvent.MouseButtonPress, 30, 40)) is False
        assert handler.types == ['dragStart']

    def test_key_is_forwarded(self, manager, handler):
        bridge = QtInputBridge(manager)
        bridge.eventFilter(None, QKeyEvent(QEvent.KeyPress, Qt.Key_Escape, Qt.NoModifier))
        assert handler.events[0].key == "Escape"

    def test_ctrl_wheel_is_consumed(self, manager, handler):
        bridge = QtInputBridge(manager)
        assert bridge.eventFilter(None, wheel(120, Qt.ControlModifier)) is True
        assert handler.events[0].scale == pytest.approx(1.15)

    def test_plain_wheel_passes_through(self, manager, handler):
        bridge = QtInputBridge(manager)
        assert bridge.eventFilter(None, wheel(120)) is False
        assert handler.events == []


class TestWidgetSurface:

    @pytest.fixture(scope="class")
    def app(self):
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        return QApplication.instance() or QApplication([])

    def test_install_on_widget(self, app):
        widget = QWidget()
        widget.resize(300, 200)
        manager = InteractionManager(WidgetSurface(widget))
        bridge = QtInputBridge(manager)

        bridge.install(widget)

        rect = manager.surface.bounding_rect()
        assert (rect.width, rect.height) == (300, 200)
        assert widget.hasMouseTracking() is True

        bridge.uninstall()
        widget.deleteLater()
