"""
Background asyncio loop for setli.

The control-protocol client is asyncio-based while callers (HTTP worker
threads) are synchronous. AsyncRunner owns one event loop on a daemon thread
and lets callers block until a coroutine finishes on it. A runner runs at
most one loop in its lifetime; once stopped it cannot be restarted, since
clients created on the old loop are bound to it.
"""

import asyncio
import logging
import threading
from typing import Any, Awaitable, Optional

logger = logging.getLogger(__name__)


class AsyncRunner:
    """Runs coroutines on a dedicated event loop thread."""

    def __init__(self):
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._started = threading.Event()
        self._lock = threading.Lock()
        self._stopped = False

    def start(self) -> None:
        """
        Start the loop thread if it is not already running.

        Safe to call from several threads at once; only one loop is created.

        Raises:
            RuntimeError: If the runner has been stopped
        """
        with self._lock:
            if self._stopped:
                raise RuntimeError("AsyncRunner has been stopped")
            if self._thread is not None:
                return

            loop = asyncio.new_event_loop()
            self._loop = loop
            self._started.clear()

            def run_loop():
                asyncio.set_event_loop(loop)
                loop.call_soon(self._started.set)
                loop.run_forever()
                loop.close()

            self._thread = threading.Thread(target=run_loop, daemon=True, name="RendererLoop")
            self._thread.start()
            self._started.wait()

        logger.info("Renderer event loop started")

    def run(self, coro: Awaitable[Any]) -> Any:
        """
        Run a coroutine on the loop and wait for its result.

        Starts the loop on first use. Exceptions raised by the coroutine
        propagate to the caller. No timeout is applied here; the transport's
        own timeouts bound the wait.

        Raises:
            RuntimeError: If the runner has been stopped
        """
        try:
            self.start()
        except RuntimeError:
            # Never scheduled; close it so it is not reported as unawaited
            if asyncio.iscoroutine(coro):
                coro.close()
            raise
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        return future.result()

    def is_running(self) -> bool:
        with self._lock:
            return bool(self._thread and self._thread.is_alive())

    def stop(self) -> None:
        """Stop the loop and join its thread. The runner cannot be reused."""
        with self._lock:
            self._stopped = True
            thread, loop = self._thread, self._loop
            self._thread = None

        if thread is None or not thread.is_alive():
            return

        logger.info("Stopping renderer event loop...")
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=2.0)
        if thread.is_alive():
            logger.warning("Renderer event loop thread did not stop within timeout")
