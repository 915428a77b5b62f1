"""
Shared application state for setli.

Composes the renderer connection, the song list and the style settings. Each
has its own lock; they are always taken one at a time in the order
connection, songs, style, and never across a network call.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from .async_runner import AsyncRunner
from .models import StyleSettings
from .renderer import ClientFactory, RendererConnection
from .song_list import SongList
from .style import StyleStore, get_default

logger = logging.getLogger(__name__)


@dataclass
class SyncSnapshot:
    """Everything one synchronization pass needs, taken under the guards."""

    handle: Any
    titles: List[str]
    style: StyleSettings


class AppState:
    """Process-lifetime state shared by all callers."""

    def __init__(
        self,
        runner: Optional[AsyncRunner] = None,
        client_factory: Optional[ClientFactory] = None,
        initial_style: Optional[StyleSettings] = None,
    ):
        self.runner = runner or AsyncRunner()
        self.connection = RendererConnection(self.runner, client_factory=client_factory)
        self.songs = SongList()
        self.style = StyleStore(initial_style or get_default())

    def snapshot(self) -> SyncSnapshot:
        """
        Capture the connection handle, titles and style settings.

        Raises:
            NotConnectedError: If there is no renderer session
        """
        handle = self.connection.current()
        titles = self.songs.titles()
        style = self.style.get()
        logger.debug(
            "Snapshot: %d songs, element %s, line breaks %d",
            len(titles),
            style.target_text_element,
            style.line_break_count,
        )
        return SyncSnapshot(handle=handle, titles=titles, style=style)

    def shutdown(self) -> None:
        self.connection.close()
        self.runner.stop()
