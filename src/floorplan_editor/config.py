"""
Editor settings and their persistence.

EditorSettings holds every tunable limit used by validation, hit-testing and
gesture recognition. Settings are saved as JSON under
~/.config/floorplan_editor/settings.json.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


@dataclass
class EditorSettings:
    """
    Tunable constants for the editor core.

    Attributes:
        min_room_area: Smallest accepted room area (square pixels)
        min_door_width / max_door_width: Accepted door width range (inches)
        min_door_height / max_door_height: Accepted door height range (inches)
        wall_snap_threshold: Max distance from a wall for a door anchor (pixels)
        rotation_epsilon: Tolerance when checking 90-degree door rotations
        point_selection_threshold: Vertex hit-test radius (pixels)
        grid_size: Snapping grid spacing (pixels)
        tap_max_duration_ms: Longest touch still recognized as a tap
        double_tap_delay_ms: Window for a second tap to follow the first
        wheel_zoom_factor: Scale change per unit of ctrl+wheel delta
        click_threshold: Max pointer travel for a press-release to count as a click
        points_per_room: Vertices collected by the drawing flow before creation
        default_door_width / default_door_height: Size of newly created doors
    """

    # Validation limits
    min_room_area: float = 100.0
    min_door_width: float = 24.0
    max_door_width: float = 48.0
    min_door_height: float = 72.0
    max_door_height: float = 96.0
    wall_snap_threshold: float = 5.0
    rotation_epsilon: float = 0.1

    # Hit-testing and snapping
    point_selection_threshold: float = 10.0
    grid_size: float = 20.0

    # Gesture recognition
    tap_max_duration_ms: float = 200.0
    double_tap_delay_ms: float = 300.0
    wheel_zoom_factor: float = 0.01
    click_threshold: float = 3.0

    # Drawing and placement
    points_per_room: int = 4
    default_door_width: float = 32.0
    default_door_height: float = 80.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'EditorSettings':
        """Create settings from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(EditorSettings)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.debug("Ignoring unknown settings keys: %s", ", ".join(unknown))
        return EditorSettings(**{k: v for k, v in data.items() if k in known})


def get_config_dir() -> Path:
    """
    Get the directory holding editor settings.

    Returns:
        Path to ~/.config/floorplan_editor/ (created if missing).
    """
    config_dir = Path.home() / ".config" / "floorplan_editor"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def save_settings(settings: EditorSettings, file_path: Optional[Path] = None) -> Path:
    """
    Save settings as JSON.

    Args:
        settings: Settings to write
        file_path: Destination; defaults to the user config directory

    Returns:
        Path to the saved file

    Raises:
        OSError: If the file cannot be written
    """
    if file_path is None:
        file_path = get_config_dir() / SETTINGS_FILENAME

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2)

    logger.info("Saved editor settings to %s", file_path)
    return file_path


def load_settings_from_path(file_path: Path) -> EditorSettings:
    """
    Load settings from a specific JSON file.

    Missing or malformed files fall back to the defaults.
    """
    if not file_path.exists():
        return EditorSettings()

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return EditorSettings.from_dict(data)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Invalid settings file {file_path}: {e}; using defaults")
        return EditorSettings()


def load_settings() -> EditorSettings:
    """Load settings from the user config directory."""
    return load_settings_from_path(get_config_dir() / SETTINGS_FILENAME)
