"""Test helpers: signal recorders, recording handlers and input builders."""

from floorplan_editor.geometry import Point
from floorplan_editor.interaction import (
    InteractionHandler,
    MouseButton,
    PointerInput,
    PointerKind,
)


class Recorder:
    """Collects every value emitted by the signals it is connected to."""

    def __init__(self):
        self.values = []

    def record(self, value):
        self.values.append(value)

    def __len__(self):
        return len(self.values)

    @property
    def last(self):
        return self.values[-1]


class RecordingHandler(InteractionHandler):
    """Interaction handler that stores every event it receives."""

    def __init__(self):
        self.events = []

    def on_drag(self, event):
        self.events.append(event)

    def on_rotate(self, event):
        self.events.append(event)

    def on_resize(self, event):
        self.events.append(event)

    def on_select(self, event):
        self.events.append(event)

    def on_hover(self, event):
        self.events.append(event)

    def on_keyboard(self, event):
        self.events.append(event)

    def on_gesture(self, event):
        self.events.append(event)

    @property
    def types(self):
        return [e.type.value for e in self.events]


def pointer(kind, x, y, button=MouseButton.PRIMARY, **kwargs):
    return PointerInput(PointerKind(kind), x, y, button=button, **kwargs)


def click(manager, x, y, button=MouseButton.PRIMARY):
    manager.handle_pointer(pointer("down", x, y, button))
    manager.handle_pointer(pointer("up", x, y, button))


def drag(manager, start, end, button=MouseButton.PRIMARY):
    manager.handle_pointer(pointer("down", start[0], start[1], button))
    manager.handle_pointer(pointer("move", end[0], end[1], button))
    manager.handle_pointer(pointer("up", end[0], end[1], button))


def square(size=100, origin=(0, 0)):
    ox, oy = origin
    return [Point(ox, oy), Point(ox + size, oy), Point(ox + size, oy + size), Point(ox, oy + size)]


def watch(signal):
    """Connect a fresh Recorder to signal and return it."""
    rec = Recorder()
    signal.connect(rec.record)
    return rec
