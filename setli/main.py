"""
Main entry point for setli.

Initializes all components and starts the server.
"""

import argparse
import logging
from typing import Optional

import uvicorn

from .async_runner import AsyncRunner
from .config_manager import ConfigManager
from .renderer import ClientFactory
from .state import AppState
from .sync import DEFAULT_FONT_SIZE, SyncEngine
from .web.server import create_app

logger = logging.getLogger(__name__)


class SetliServer:
    """Main server class that wires all components together."""

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        logger.info("Initializing setli server...")

        self.config_manager = config_manager or ConfigManager()

        self.runner = AsyncRunner()
        self.runner.start()

        self.state = AppState(runner=self.runner, client_factory=client_factory)
        self.sync_engine = SyncEngine(
            self.state,
            font_size=self.config_manager.get_int("font_size", DEFAULT_FONT_SIZE),
        )

        self.web_app = create_app(self.state, self.sync_engine, self.config_manager)

        self.uvicorn_server = None

        logger.info("setli server initialized")

    def auto_connect(self) -> bool:
        """Connect with the configured renderer credentials."""
        host = self.config_manager.get("obs_host", "localhost")
        port = self.config_manager.get_int("obs_port", 4455)
        password = self.config_manager.get("obs_password", "")
        return self.state.connection.connect(host, port, password)

    def run(self):
        """Start the server."""
        if self.config_manager.get_bool("auto_connect", False):
            if not self.auto_connect():
                logger.warning("Auto-connect failed; connect from the web UI instead")

        host = self.config_manager.get("web_host", "127.0.0.1")
        port = self.config_manager.get_int("web_port", 8000)

        logger.info("=" * 60)
        logger.info("setli is running!")
        logger.info("API: http://%s:%s/api", host, port)
        logger.info("=" * 60)

        config = uvicorn.Config(self.web_app, host=host, port=port, log_level="info")
        self.uvicorn_server = uvicorn.Server(config)
        self.uvicorn_server.run()

    def stop(self):
        """Stop all components."""
        logger.info("Stopping setli server...")

        if self.uvicorn_server:
            self.uvicorn_server.should_exit = True

        self.state.shutdown()

        logger.info("setli server stopped")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="setli - set list display for live streams")
    parser.add_argument("--host", help="Address for the web server to bind")
    parser.add_argument("--port", type=int, help="Port for the web server")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    args = parser.parse_args()

    config_manager = ConfigManager()
    if args.host:
        config_manager.set("web_host", args.host)
    if args.port:
        config_manager.set("web_port", args.port)
    if args.log_level:
        config_manager.set("log_level", args.log_level.upper())

    logging.basicConfig(
        level=config_manager.get("log_level", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    server = SetliServer(config_manager)
    try:
        server.run()
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()


if __name__ == "__main__":
    main()
