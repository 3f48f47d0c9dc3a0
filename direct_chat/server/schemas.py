"""Pydantic schemas for request and response bodies."""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..shared.utils import clean_text


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    avatar_url: Optional[str] = None

    @field_validator("username", "display_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        cleaned = clean_text(value)
        if cleaned is None:
            raise ValueError("must not be blank")
        return cleaned


class UserOut(BaseModel):
    id: int
    username: str
    display_name: str
    avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ConversationCreate(BaseModel):
    type: Literal["direct"] = "direct"
    name: Optional[str] = None
    participant_ids: List[int]

    @field_validator("participant_ids")
    @classmethod
    def _two_distinct_participants(cls, value: List[int]) -> List[int]:
        if len(value) != 2 or value[0] == value[1]:
            raise ValueError("a direct conversation needs exactly two distinct participants")
        return value


class ConversationOut(BaseModel):
    id: int
    type: str
    name: Optional[str] = None
    participant_ids: List[int]
    last_message_preview: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class MessageCreate(BaseModel):
    conversation_id: int
    sender_id: int
    content: str
    type: str = "text"

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        cleaned = clean_text(value)
        if cleaned is None:
            raise ValueError("content must not be blank")
        return cleaned


class MessageOut(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
