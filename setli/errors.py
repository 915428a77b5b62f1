"""
Exceptions raised by setli components.

The HTTP layer maps each of these onto a status code; nothing here is retried.
"""


class SetliError(Exception):
    """Base class for all setli failures."""

    pass


class NotConnectedError(SetliError):
    """Raised when an operation needs a renderer session and none exists."""

    pass


class ConnectionFailedError(SetliError):
    """Raised when a control-protocol session cannot be established."""

    pass


class RemoteFetchError(SetliError):
    """Raised when the renderer refuses or fails to return element settings."""

    pass


class RemoteWriteError(SetliError):
    """Raised when pushing merged element settings to the renderer fails."""

    pass


class MalformedRemoteSettingsError(SetliError):
    """Raised when fetched element settings are not a keyed mapping."""

    pass


class IndexOutOfBoundsError(SetliError, IndexError):
    """Raised when removing a song at a position the list does not have."""

    def __init__(self, index: int, length: int):
        super().__init__(f"Index {index} out of range for song list of length {length}")
        self.index = index
        self.length = length


class FontEnumerationError(SetliError):
    """Raised when the host font subsystem cannot list families."""

    pass
