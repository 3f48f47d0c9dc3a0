"""Client configuration values."""
import os
from typing import Optional

from .storage import get_server_url
from ..shared.logging_config import configure_logging

DEFAULT_BACKEND_URL = "http://localhost:8000"
BACKEND_URL_ENV = "CHAT_BACKEND_URL"
REQUEST_TIMEOUT_ENV = "CHAT_REQUEST_TIMEOUT"
LOG_FILE_NAME = "client.log"
MESSAGE_PAGE_SIZE = 100

logger = configure_logging("direct_chat_client", LOG_FILE_NAME)

# (username, display name); the first participant is the signed-in user.
DEMO_PARTICIPANTS = (
    ("alice", "Alice Johnson"),
    ("bob", "Bob Smith"),
)


def resolve_backend_url(explicit: Optional[str] = None) -> str:
    """Pick the backend URL: explicit value, environment, stored value, default."""
    for candidate in (explicit, os.environ.get(BACKEND_URL_ENV), get_server_url()):
        if candidate and candidate.strip():
            return candidate.strip().rstrip("/")
    return DEFAULT_BACKEND_URL


def request_timeout() -> Optional[float]:
    """Seconds before a backend call gives up; None waits forever."""
    raw = os.environ.get(REQUEST_TIMEOUT_ENV)
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        timeout = 0.0
    if not timeout > 0:
        logger.warning("CONFIG_IGNORED %s=%r expected a positive number of seconds", REQUEST_TIMEOUT_ENV, raw)
        return None
    return timeout
