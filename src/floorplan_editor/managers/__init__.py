"""
Entity managers: the single owners of the room and door collections.
"""

from .room_manager import RoomManager, RoomPoint
from .door_manager import DoorManager, PREVIEW_DOOR_ID

__all__ = [
    'RoomManager',
    'RoomPoint',
    'DoorManager',
    'PREVIEW_DOOR_ID',
]
