"""HTTP API client for the chat backend."""
import asyncio
from typing import Any, List, Optional

import requests

from .errors import MalformedResponseError, TransportError
from .models import Conversation, Identifier, Message, MessageRequest, User


class APIClient:
    """Blocking client for the backend's JSON endpoints."""

    def __init__(self, base_url: str, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = requests.request(
                method, url, headers={"Content-Type": "application/json"}, timeout=self.timeout, **kwargs
            )
            resp.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise TransportError(f"{method} {path} failed with status {status}", status_code=status) from exc
        except requests.RequestException as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponseError(f"{method} {path} did not return JSON") from exc

    def _list(self, method: str, path: str, **kwargs: Any) -> List[Any]:
        data = self._request(method, path, **kwargs)
        if not isinstance(data, list):
            raise MalformedResponseError(f"{method} {path} did not return a list")
        return data

    def create_user(self, username: str, display_name: str) -> User:
        data = self._request("POST", "/users", json={"username": username, "display_name": display_name})
        return User.from_dict(data)

    def create_direct_conversation(self, user_a: Identifier, user_b: Identifier) -> Conversation:
        payload = {"type": "direct", "participant_ids": [user_a, user_b]}
        return Conversation.from_dict(self._request("POST", "/conversations", json=payload))

    def list_conversations(self, user_id: Identifier) -> List[Conversation]:
        data = self._list("GET", "/conversations", params={"user_id": user_id})
        return [Conversation.from_dict(c) for c in data]

    def list_messages(self, conversation_id: Identifier, limit: int) -> List[Message]:
        data = self._list("GET", "/messages", params={"conversation_id": conversation_id, "limit": limit})
        return [Message.from_dict(m) for m in data]

    def send_message(self, request: MessageRequest) -> Message:
        return Message.from_dict(self._request("POST", "/messages", json=request.to_payload()))


class AsyncAPIClient:
    """Awaitable facade over APIClient.

    Each call runs in a worker thread, so every request is a suspension point
    for the event loop and other actions keep running while it is in flight.
    """

    def __init__(self, client: APIClient):
        self.client = client

    async def create_user(self, username: str, display_name: str) -> User:
        return await asyncio.to_thread(self.client.create_user, username, display_name)

    async def create_direct_conversation(self, user_a: Identifier, user_b: Identifier) -> Conversation:
        return await asyncio.to_thread(self.client.create_direct_conversation, user_a, user_b)

    async def list_conversations(self, user_id: Identifier) -> List[Conversation]:
        return await asyncio.to_thread(self.client.list_conversations, user_id)

    async def list_messages(self, conversation_id: Identifier, limit: int) -> List[Message]:
        return await asyncio.to_thread(self.client.list_messages, conversation_id, limit)

    async def send_message(self, request: MessageRequest) -> Message:
        return await asyncio.to_thread(self.client.send_message, request)


def connect(base_url: str, timeout: Optional[float] = None) -> AsyncAPIClient:
    return AsyncAPIClient(APIClient(base_url, timeout=timeout))
