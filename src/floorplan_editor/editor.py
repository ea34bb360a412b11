"""
Floor-plan editor composition root.

Builds the validator, both entity managers, the interaction manager and both
interaction handlers, wiring them together by constructor injection.

Provides:
- Mode switching
- JSON-shaped plan snapshots (to_dict / load_dict)
- Plan metrics for status displays
"""

import logging
from typing import Any, Dict, Optional

from floorplan_editor.config import EditorSettings
from floorplan_editor.interaction import (
    DoorInteractionHandler,
    FixedSurface,
    InteractionManager,
    InteractionMode,
    RoomInteractionHandler,
    Surface,
)
from floorplan_editor.managers import DoorManager, RoomManager
from floorplan_editor.models import Door, Room
from floorplan_editor.validation import FloorPlanError, ValidationManager

logger = logging.getLogger(__name__)

PLAN_VERSION = '1.0'


class FloorPlanEditor:
    """Owns one instance of every editor core component."""

    def __init__(self, settings: Optional[EditorSettings] = None,
                 surface: Optional[Surface] = None):
        self.settings = settings or EditorSettings()
        self.validator = ValidationManager(self.settings)
        self.room_manager = RoomManager(self.validator, self.settings)
        self.door_manager = DoorManager(self.validator, self.settings)
        self.interaction = InteractionManager(surface or FixedSurface(), self.settings)

        self.door_handler = DoorInteractionHandler(self.door_manager, self.room_manager)
        self.room_handler = RoomInteractionHandler(self.room_manager)
        # Doors get first pick of a select so a door inside a room wins over the room
        self.interaction.add_handler(self.door_handler)
        self.interaction.add_handler(self.room_handler)
        self.interaction.bind_managers(self.room_manager, self.door_manager)

    # ---------------------------------------------------------------
    # Mode
    # ---------------------------------------------------------------

    def set_mode(self, mode: InteractionMode):
        self.interaction.set_mode(mode)

    def get_mode(self) -> InteractionMode:
        return self.interaction.get_mode()

    def enable(self):
        self.interaction.enable()

    def disable(self):
        self.interaction.disable()

    # ---------------------------------------------------------------
    # Snapshots
    # ---------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': PLAN_VERSION,
            'rooms': [room.to_dict() for room in self.room_manager.get_rooms()],
            'doors': [door.to_dict() for door in self.door_manager.get_doors()],
        }

    def load_dict(self, data: Dict[str, Any]):
        """Replace the whole plan with a snapshot produced by to_dict.

        Raises:
            FloorPlanError: If the snapshot is not a plan record
        """
        if not isinstance(data, dict) or 'rooms' not in data:
            raise FloorPlanError("Plan data must be an object with a 'rooms' list")

        version = data.get('version', PLAN_VERSION)
        if version != PLAN_VERSION:
            logger.warning(f"Loading plan version {version} (expected {PLAN_VERSION})")

        try:
            rooms = [Room.from_dict(r) for r in data['rooms']]
            doors = [Door.from_dict(d) for d in data.get('doors', [])]
        except (KeyError, TypeError, ValueError) as e:
            raise FloorPlanError(f"Malformed plan data: {e}") from e

        self.room_manager.load_rooms(rooms)
        self.door_manager.load_doors(doors)

    # ---------------------------------------------------------------
    # Metrics
    # ---------------------------------------------------------------

    def get_plan_metrics(self) -> Dict[str, Any]:
        """Get summary metrics for the current plan."""
        rooms = self.room_manager.get_rooms()
        metrics = {
            'room_count': len(rooms),
            'door_count': len(self.door_manager.get_doors()),
            'total_area': 0.0,
            'total_perimeter': 0.0,
            'largest_room': None,
        }

        largest_area = -1.0
        for room in rooms:
            area = room.calculate_area()
            metrics['total_area'] += area
            metrics['total_perimeter'] += room.calculate_perimeter()
            if area > largest_area:
                largest_area = area
                metrics['largest_room'] = room.name

        return metrics

    # ---------------------------------------------------------------
    # History
    # ---------------------------------------------------------------

    def undo(self) -> bool:
        logger.info("Undo is not available")
        return False

    def redo(self) -> bool:
        logger.info("Redo is not available")
        return False

    def destroy(self):
        self.interaction.destroy()
