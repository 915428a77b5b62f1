"""
Renderer connection for setli.

Owns at most one control-protocol session (obs-websocket v5 through
simpleobsws) and performs the element settings round trips on it.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

import simpleobsws

from .async_runner import AsyncRunner
from .errors import ConnectionFailedError, NotConnectedError, RemoteFetchError, RemoteWriteError
from .models import ConnectionInfo

# Builds a control-protocol client from (url, password); called on the loop thread
ClientFactory = Callable[[str, str], Any]


def build_url(host: str, port: int) -> str:
    """Websocket url for a host and port; bare IPv6 hosts are bracketed."""
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"ws://{host}:{port}"


def default_client_factory(url: str, password: str) -> simpleobsws.WebSocketClient:
    return simpleobsws.WebSocketClient(url=url, password=password)


class RendererConnection:
    """Holds the single live renderer session and replaces it on reconnect."""

    def __init__(self, runner: AsyncRunner, client_factory: Optional[ClientFactory] = None):
        """
        Initialize RendererConnection.

        Args:
            runner: AsyncRunner whose loop the client lives on
            client_factory: Builds a client for a url/password (defaults to simpleobsws)
        """
        self.runner = runner
        self._client_factory = client_factory or default_client_factory
        self._client = None
        self._info: Optional[ConnectionInfo] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def connect(self, host: str, port: int, password: str) -> bool:
        """
        Open a session and make it the current one.

        On failure the previous session, if any, stays current.

        Returns:
            True if the new session is established
        """
        url = build_url(host, port)
        self.logger.info("Connecting to renderer at %s", url)

        try:
            client = self.runner.run(self._open(url, password))
        except ConnectionFailedError as e:
            self.logger.error("Renderer connection failed: %s", e)
            return False
        except Exception as e:
            self.logger.error("Renderer connection to %s failed: %s", url, e, exc_info=True)
            return False

        with self._lock:
            previous = self._client
            self._client = client
            self._info = ConnectionInfo(host=host, port=port, url=url)

        if previous is not None:
            self.logger.info("Replacing previous renderer session")
            self.runner.run(self._disconnect_quietly(previous))

        self.logger.info("Connected to renderer at %s", url)
        return True

    async def _open(self, url: str, password: str):
        client = self._client_factory(url, password)
        await client.connect()
        if not await client.wait_until_identified():
            await self._disconnect_quietly(client)
            raise ConnectionFailedError(
                f"Renderer at {url} did not accept identification (bad password or protocol version)"
            )
        return client

    async def _disconnect_quietly(self, client) -> None:
        try:
            await client.disconnect()
        except Exception as e:
            self.logger.warning("Error disconnecting renderer session: %s", e)

    def current(self):
        """
        Return the live session handle.

        Raises:
            NotConnectedError: If no session has been established
        """
        with self._lock:
            client = self._client
        if client is None:
            raise NotConnectedError("Not connected to the renderer")
        return client

    def is_connected(self) -> bool:
        with self._lock:
            return self._client is not None

    def info(self) -> Optional[ConnectionInfo]:
        """Host and port of the current session, or None."""
        with self._lock:
            return self._info

    def close(self) -> None:
        """Disconnect the current session. Used at shutdown only."""
        with self._lock:
            client = self._client
            self._client = None
            self._info = None
        if client is not None and self.runner.is_running():
            self.runner.run(self._disconnect_quietly(client))
            self.logger.info("Renderer session closed")

    # =========================================================================
    # Element settings
    # =========================================================================

    def get_element_settings(self, name: str, handle=None) -> Any:
        """
        Fetch the settings object of a named text element.

        Args:
            name: Element (input) name
            handle: Session to use (defaults to the current one)

        Returns:
            The element's settings as returned by the renderer (normally a dict)

        Raises:
            NotConnectedError: If no handle is given and none is current
            RemoteFetchError: If the request fails or is refused
        """
        client = handle if handle is not None else self.current()
        request = simpleobsws.Request("GetInputSettings", {"inputName": name})

        try:
            response = self.runner.run(client.call(request))
        except Exception as e:
            self.logger.error("Error fetching settings for %s: %s", name, e, exc_info=True)
            raise RemoteFetchError(f"Failed to fetch settings for {name}: {e}") from e

        if not response.ok():
            status = response.requestStatus
            self.logger.error(
                "Renderer refused settings fetch for %s: %s %s", name, status.code, status.comment
            )
            raise RemoteFetchError(
                f"Failed to fetch settings for {name}: {status.code} {status.comment}"
            )

        return (response.responseData or {}).get("inputSettings")

    def set_element_settings(self, name: str, settings: Dict[str, Any], handle=None) -> None:
        """
        Push a full settings object to a named text element.

        Raises:
            NotConnectedError: If no handle is given and none is current
            RemoteWriteError: If the request fails or is refused
        """
        client = handle if handle is not None else self.current()
        request = simpleobsws.Request(
            "SetInputSettings", {"inputName": name, "inputSettings": settings}
        )

        try:
            response = self.runner.run(client.call(request))
        except Exception as e:
            self.logger.error("Failed to set settings for %s: %s", name, e, exc_info=True)
            raise RemoteWriteError(f"Failed to set settings for {name}: {e}") from e

        if not response.ok():
            status = response.requestStatus
            self.logger.error(
                "Renderer refused settings for %s: %s %s", name, status.code, status.comment
            )
            raise RemoteWriteError(
                f"Failed to set settings for {name}: {status.code} {status.comment}"
            )
