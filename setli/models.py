"""
Data models for setli.

Defines typed dataclasses for the entities shared between components.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Song:
    """Song entry in the set list."""

    id: int  # len + 1 at insertion time, not unique after deletions
    title: str
    artist: str = ""


@dataclass(frozen=True)
class StyleSettings:
    """How the remote text element should look. Replaced wholesale, never edited."""

    target_scene: str
    target_text_element: str
    font_family: str
    font_color: int  # Packed BBGGRR as the renderer expects
    outline_enabled: bool
    outline_width: int
    outline_color: int
    line_break_count: int


DEFAULT_STYLE = StyleSettings(
    target_scene="シーン",
    target_text_element="setli",
    font_family="Arial",
    font_color=0,
    outline_enabled=True,
    outline_width=1,
    outline_color=0,
    line_break_count=1,
)


@dataclass
class ConnectionInfo:
    """Where the current renderer session points. The password is never kept."""

    host: str
    port: int
    url: Optional[str] = None
