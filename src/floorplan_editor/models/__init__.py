"""
Floor-plan entities: Room polygons and wall-anchored Doors.
"""

from .room import Room
from .door import Door, SwingDirection, DEFAULT_DOOR_WIDTH, DEFAULT_DOOR_HEIGHT

__all__ = [
    'Room',
    'Door',
    'SwingDirection',
    'DEFAULT_DOOR_WIDTH',
    'DEFAULT_DOOR_HEIGHT',
]
