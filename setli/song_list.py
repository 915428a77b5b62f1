"""
Song list management for setli.

Holds the ordered set list in memory. Order is display order.
"""

import logging
import threading
from typing import List

from .errors import IndexOutOfBoundsError
from .models import Song


class SongList:
    """Ordered, lock-guarded collection of songs."""

    def __init__(self):
        self._songs: List[Song] = []
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    def list(self) -> List[Song]:
        """Return a snapshot copy of the songs in display order."""
        with self._lock:
            return list(self._songs)

    def titles(self) -> List[str]:
        """Return the song titles in display order."""
        with self._lock:
            return [song.title for song in self._songs]

    def append(self, title: str) -> bool:
        """
        Append a song to the end of the list.

        The id is the list length after insertion. Ids are not renumbered when
        songs are removed, so they can repeat; callers address rows by position.

        Args:
            title: Song title (any string, including empty)

        Returns:
            Always True
        """
        with self._lock:
            song = Song(id=len(self._songs) + 1, title=title, artist="")
            self._songs.append(song)
            length = len(self._songs)

        self.logger.info("Added song %r (ID: %s, list length: %s)", title, song.id, length)
        return True

    def remove(self, index: int) -> Song:
        """
        Remove the song at a zero-based position.

        Later songs shift left and keep their ids.

        Raises:
            IndexOutOfBoundsError: If index is negative or >= the list length
        """
        with self._lock:
            length = len(self._songs)
            if index < 0 or index >= length:
                raise IndexOutOfBoundsError(index, length)
            song = self._songs.pop(index)

        self.logger.info("Removed song %r at position %s", song.title, index)
        return song

    def __len__(self) -> int:
        with self._lock:
            return len(self._songs)
