"""Error taxonomy for the chat client."""
from typing import Optional


class ChatClientError(Exception):
    """Base class for every failure the client reports as a result."""


class TransportError(ChatClientError):
    """The backend could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(ChatClientError):
    """The backend answered, but not with the JSON the client expects."""


class SessionStateError(ChatClientError):
    """An operation was invoked while the session was in the wrong state."""
