"""Client-side records for users, conversations and messages."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .errors import MalformedResponseError

Identifier = Union[int, str]


def _require(data: Any, kind: str, *keys: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected a {kind} object, got {type(data).__name__}")
    missing = [key for key in keys if key not in data]
    if missing:
        raise MalformedResponseError(f"{kind} is missing field(s): {', '.join(missing)}")
    return data


@dataclass(frozen=True)
class User:
    id: Identifier
    username: str
    display_name: str
    avatar_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        data = _require(data, "User", "id", "username", "display_name")
        return cls(
            id=data["id"],
            username=data["username"],
            display_name=data["display_name"],
            avatar_url=data.get("avatar_url"),
        )


@dataclass(frozen=True)
class Conversation:
    id: Identifier
    type: str
    participant_ids: Tuple[Identifier, ...] = field(default_factory=tuple)
    name: Optional[str] = None
    last_message_preview: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Conversation":
        data = _require(data, "Conversation", "id", "type", "participant_ids")
        if not isinstance(data["participant_ids"], list):
            raise MalformedResponseError("Conversation participant_ids must be a list")
        return cls(
            id=data["id"],
            type=data["type"],
            participant_ids=tuple(data["participant_ids"]),
            name=data.get("name"),
            last_message_preview=data.get("last_message_preview"),
        )


@dataclass(frozen=True)
class Message:
    id: Identifier
    conversation_id: Identifier
    sender_id: Identifier
    content: str
    type: str
    created_at: str

    @classmethod
    def from_dict(cls, data: Any) -> "Message":
        data = _require(data, "Message", "id", "conversation_id", "sender_id", "content", "type", "created_at")
        return cls(
            id=data["id"],
            conversation_id=data["conversation_id"],
            sender_id=data["sender_id"],
            content=data["content"],
            type=data["type"],
            created_at=data["created_at"],
        )


@dataclass(frozen=True)
class MessageRequest:
    conversation_id: Identifier
    sender_id: Identifier
    content: str
    type: str = "text"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "conversation_id": self.conversation_id,
            "sender_id": self.sender_id,
            "content": self.content,
            "type": self.type,
        }
