"""
Synchronization engine for setli.

Pushes the set list and style settings into the remote text element with a
read-merge-write round trip that only touches the keys setli owns.
"""

import logging
from typing import Any, Dict, List, Mapping

from .errors import MalformedRemoteSettingsError, SetliError
from .models import StyleSettings
from .state import AppState
from .style import build_style_overrides

DEFAULT_FONT_SIZE = 300


def format_display_text(titles: List[str], line_break_count: int) -> str:
    """
    Join titles with line_break_count newlines between each pair.

    A count of 0 concatenates the titles directly.
    """
    return ("\n" * line_break_count).join(titles)


def merge_owned_keys(current: Any, overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Copy the fetched settings and overwrite only the owned keys.

    Args:
        current: Settings object fetched from the renderer
        overrides: Owned keys and their new values

    Returns:
        New mapping; keys not in overrides keep their fetched values

    Raises:
        MalformedRemoteSettingsError: If current is not a mapping
    """
    if not isinstance(current, Mapping):
        raise MalformedRemoteSettingsError(
            f"Expected element settings mapping, got {type(current).__name__}"
        )
    merged = dict(current)
    merged.update(overrides)
    return merged


class SyncEngine:
    """Keeps the remote text element consistent with the local state."""

    def __init__(self, state: AppState, font_size: int = DEFAULT_FONT_SIZE):
        """
        Initialize SyncEngine.

        Args:
            state: Shared application state
            font_size: Size written into the font descriptor when applying styles
        """
        self.state = state
        self.font_size = font_size
        self.logger = logging.getLogger(__name__)

    def sync_display(self) -> str:
        """
        Write the current set list into the target text element.

        Returns:
            The display text that was pushed

        Raises:
            NotConnectedError: No renderer session; nothing is sent
            RemoteFetchError, MalformedRemoteSettingsError, RemoteWriteError
        """
        snapshot = self.state.snapshot()
        element = snapshot.style.target_text_element
        display_text = format_display_text(snapshot.titles, snapshot.style.line_break_count)

        connection = self.state.connection
        current = connection.get_element_settings(element, handle=snapshot.handle)
        merged = merge_owned_keys(current, {"text": display_text})
        connection.set_element_settings(element, merged, handle=snapshot.handle)

        self.logger.info("Synced %d songs to %s", len(snapshot.titles), element)
        return display_text

    def try_sync_display(self) -> Dict[str, Any]:
        """
        Run sync_display and report the outcome instead of raising.

        Returns:
            {"synced": bool, "error": Optional[str]}
        """
        try:
            self.sync_display()
        except SetliError as e:
            self.logger.warning("Display sync skipped: %s", e)
            return {"synced": False, "error": str(e)}
        return {"synced": True, "error": None}

    def apply_style_settings(self, new: StyleSettings) -> str:
        """
        Merge new style settings into the element, store them, then resync.

        The stored settings change only after the renderer accepted the write.

        Returns:
            The display text pushed by the follow-up sync

        Raises:
            NotConnectedError: No renderer session; stored settings unchanged
            RemoteFetchError, MalformedRemoteSettingsError, RemoteWriteError
        """
        connection = self.state.connection
        handle = connection.current()
        element = new.target_text_element

        current = connection.get_element_settings(element, handle=handle)
        merged = merge_owned_keys(current, build_style_overrides(new, self.font_size))
        connection.set_element_settings(element, merged, handle=handle)

        self.state.style.replace(new)
        return self.sync_display()
