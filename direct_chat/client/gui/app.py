"""Bridge between the desktop GUI thread and the session controller's event loop."""
from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from typing import Callable, Coroutine, Optional

from .. import api
from ..config import LOG_FILE_NAME, resolve_backend_url, request_timeout
from ..controller import SessionController
from ..models import Conversation
from ..session import SessionState
from ..storage import store_server_url
from ...shared.logging_config import configure_logging

logger = configure_logging("direct_chat_client", LOG_FILE_NAME)


class ChatBridge:
    """Runs a SessionController on its own event loop thread.

    The GUI never touches the session state directly: actions are submitted to
    the loop, and state changes come back through the listener passed to
    ``subscribe`` (called on the loop thread).
    """

    def __init__(self, base_url: Optional[str] = None, controller: Optional[SessionController] = None):
        self.base_url = resolve_backend_url(base_url)
        self.controller = controller or SessionController(api.connect(self.base_url, timeout=request_timeout()))
        self.loop = asyncio.new_event_loop()
        self._thread: Optional[threading.Thread] = None

    def set_base_url(self, url: str) -> None:
        """Point a not yet started bridge at another backend."""
        if self._thread is not None:
            raise RuntimeError("Cannot change the backend after the session started")
        self.base_url = resolve_backend_url(url)
        store_server_url(self.base_url)
        self.controller = SessionController(api.connect(self.base_url, timeout=request_timeout()))

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self.loop.run_forever, name="chat-session", daemon=True)
        self._thread.start()
        logger.info("GUI_SESSION_START backend=%s", self.base_url)

    def stop(self) -> None:
        if self._thread is None:
            return
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout=5)
        self._thread = None

    def subscribe(self, listener: Callable[[SessionState], None]) -> Callable[[], None]:
        return self.controller.subscribe(listener)

    @property
    def state(self) -> SessionState:
        return self.controller.state

    def _submit(self, coro: Coroutine) -> Future:
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        future.add_done_callback(self._log_failure)
        return future

    @staticmethod
    def _log_failure(future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("GUI_ACTION_FAIL error=%r", error, exc_info=error)

    def bootstrap(self) -> Future:
        return self._submit(self.controller.bootstrap())

    def select_conversation(self, conversation: Conversation) -> Future:
        return self._submit(self.controller.select_conversation(conversation))

    def submit(self) -> Future:
        return self._submit(self.controller.submit())

    def set_compose(self, text: str) -> None:
        self.loop.call_soon_threadsafe(self.controller.set_compose, text)


__all__ = ["ChatBridge"]
