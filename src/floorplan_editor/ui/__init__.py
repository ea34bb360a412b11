"""
Qt integration for the floor-plan editor core.
"""

from .input_bridge import (
    QtInputBridge,
    WidgetSurface,
    translate_key_event,
    translate_modifiers,
    translate_mouse_event,
    translate_touch_event,
    translate_wheel_event,
)

__all__ = [
    'QtInputBridge',
    'WidgetSurface',
    'translate_key_event',
    'translate_modifiers',
    'translate_mouse_event',
    'translate_touch_event',
    'translate_wheel_event',
]
