"""
Style settings handling for setli.

Keeps the current StyleSettings and builds the renderer keys they own.
"""

import logging
import threading
from typing import Any, Dict

from .models import DEFAULT_STYLE, StyleSettings

logger = logging.getLogger(__name__)

# Keys written into the remote text element when style settings are applied
OWNED_STYLE_KEYS = ("scene_name", "color", "font", "outline", "outline_size", "outline_color")


def get_default() -> StyleSettings:
    """Return the built-in style settings."""
    return DEFAULT_STYLE


def hex_to_obs_color(value: str) -> int:
    """
    Convert a web color into the renderer's packed integer.

    The renderer stores colors little-endian, so "#RRGGBB" becomes 0xBBGGRR.

    Args:
        value: Color string like "#1a2b3c" (leading '#' optional)

    Returns:
        Packed color integer

    Raises:
        ValueError: If the string is not six hex digits
    """
    digits = value[1:] if value.startswith("#") else value
    if len(digits) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {value!r}")
    red, green, blue = digits[0:2], digits[2:4], digits[4:6]
    return int(f"{blue}{green}{red}", 16)


def build_style_overrides(settings: StyleSettings, font_size: int) -> Dict[str, Any]:
    """
    Build the remote element keys owned by the style settings.

    Args:
        settings: Style settings to express
        font_size: Fixed size placed in the nested font descriptor

    Returns:
        Mapping of owned keys to merge into the element settings
    """
    return {
        "scene_name": settings.target_scene,
        "color": settings.font_color,
        "font": {"face": settings.font_family, "size": font_size},
        "outline": settings.outline_enabled,
        "outline_size": settings.outline_width,
        "outline_color": settings.outline_color,
    }


class StyleStore:
    """Holds the single current StyleSettings value behind a lock."""

    def __init__(self, initial: StyleSettings = DEFAULT_STYLE):
        self._current = initial
        self._lock = threading.Lock()

    def get(self) -> StyleSettings:
        with self._lock:
            return self._current

    def replace(self, new: StyleSettings) -> None:
        """Store new settings; visible to the next synchronization pass."""
        with self._lock:
            self._current = new
        logger.info(
            "Style settings replaced (element: %s, scene: %s)",
            new.target_text_element,
            new.target_scene,
        )
