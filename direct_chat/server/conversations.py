"""Conversation routes: get-or-create direct conversations and per-user listing."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from . import schemas
from .config import LOG_FILE_NAME, PREVIEW_LENGTH
from .database import get_db
from .models import Conversation, ConversationParticipant, Message
from .users import get_user_or_404
from ..shared.logging_config import configure_logging
from ..shared.utils import truncate

router = APIRouter(prefix="/conversations", tags=["conversations"])
logger = configure_logging("direct_chat_server", LOG_FILE_NAME)


def _find_direct(db: Session, user_a: int, user_b: int) -> Optional[Conversation]:
    candidates = (
        db.query(Conversation)
        .join(ConversationParticipant)
        .filter(Conversation.type == "direct", ConversationParticipant.user_id == user_a)
        .all()
    )
    for conversation in candidates:
        if set(conversation.participant_ids) == {user_a, user_b}:
            return conversation
    return None


def _last_message_preview(db: Session, conversation: Conversation) -> Optional[str]:
    last = (
        db.query(Message)
        .filter(Message.conversation_id == conversation.id)
        .order_by(Message.id.desc())
        .first()
    )
    if last is None:
        return None
    return truncate(last.content, PREVIEW_LENGTH)


def to_schema(db: Session, conversation: Conversation) -> schemas.ConversationOut:
    return schemas.ConversationOut(
        id=conversation.id,
        type=conversation.type,
        name=conversation.name,
        participant_ids=conversation.participant_ids,
        last_message_preview=_last_message_preview(db, conversation),
    )


@router.post("", response_model=schemas.ConversationOut, status_code=status.HTTP_201_CREATED)
def create_conversation(payload: schemas.ConversationCreate, response: Response, db: Session = Depends(get_db)):
    user_a, user_b = payload.participant_ids
    get_user_or_404(db, user_a)
    get_user_or_404(db, user_b)

    existing = _find_direct(db, user_a, user_b)
    if existing:
        logger.info("CONVERSATION_EXISTS conversation_id=%s participants=%s,%s", existing.id, user_a, user_b)
        response.status_code = status.HTTP_200_OK
        return to_schema(db, existing)

    conversation = Conversation(type=payload.type, name=payload.name)
    conversation.participants = [
        ConversationParticipant(user_id=user_id, position=position)
        for position, user_id in enumerate(payload.participant_ids)
    ]
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    logger.info("CONVERSATION_CREATED conversation_id=%s participants=%s,%s", conversation.id, user_a, user_b)
    return to_schema(db, conversation)


@router.get("", response_model=List[schemas.ConversationOut])
def list_conversations(user_id: int, db: Session = Depends(get_db)):
    get_user_or_404(db, user_id)
    conversations = (
        db.query(Conversation)
        .join(ConversationParticipant)
        .filter(ConversationParticipant.user_id == user_id)
        .order_by(Conversation.last_activity_at.desc(), Conversation.id.desc())
        .all()
    )
    return [to_schema(db, c) for c in conversations]
