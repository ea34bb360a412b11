"""Shared fixtures for the floor-plan editor tests."""

import pytest

from floorplan_editor.config import EditorSettings
from floorplan_editor.editor import FloorPlanEditor
from floorplan_editor.interaction import FixedSurface, Rect
from floorplan_editor.managers import DoorManager, RoomManager
from floorplan_editor.validation import ValidationManager


@pytest.fixture
def settings():
    return EditorSettings()


@pytest.fixture
def validator(settings):
    return ValidationManager(settings)


@pytest.fixture
def room_manager(validator):
    return RoomManager(validator)


@pytest.fixture
def door_manager(validator):
    return DoorManager(validator)


@pytest.fixture
def surface():
    return FixedSurface(Rect(0, 0, 800, 600))


@pytest.fixture
def editor(surface):
    ed = FloorPlanEditor(surface=surface)
    ed.enable()
    yield ed
    ed.destroy()
