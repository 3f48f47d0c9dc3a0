"""Message routes."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from . import schemas
from .config import DEFAULT_MESSAGE_PAGE, LOG_FILE_NAME, MAX_MESSAGE_PAGE
from .database import get_db
from .models import Conversation, Message, utcnow
from .users import get_user_or_404
from ..shared.logging_config import configure_logging

router = APIRouter(prefix="/messages", tags=["messages"])
logger = configure_logging("direct_chat_server", LOG_FILE_NAME)


def _get_conversation(db: Session, conversation_id: int) -> Conversation:
    conversation = db.get(Conversation, conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation


@router.post("", response_model=schemas.MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(payload: schemas.MessageCreate, db: Session = Depends(get_db)):
    conversation = _get_conversation(db, payload.conversation_id)
    sender = get_user_or_404(db, payload.sender_id)
    if sender.id not in conversation.participant_ids:
        logger.warning(
            "MESSAGE_REJECTED sender_id=%s conversation_id=%s reason=not_participant",
            sender.id,
            conversation.id,
        )
        raise HTTPException(status_code=403, detail="Sender is not a participant of this conversation")

    message = Message(
        conversation_id=conversation.id,
        sender_id=sender.id,
        content=payload.content,
        type=payload.type,
        created_at=utcnow(),
    )
    db.add(message)
    conversation.last_activity_at = message.created_at
    db.commit()
    db.refresh(message)
    logger.info(
        "MESSAGE_SENT sender_id=%s conversation_id=%s message_id=%s",
        sender.id,
        conversation.id,
        message.id,
    )
    return message


@router.get("", response_model=List[schemas.MessageOut])
def list_messages(
    conversation_id: int,
    limit: int = Query(DEFAULT_MESSAGE_PAGE, ge=1, le=MAX_MESSAGE_PAGE),
    db: Session = Depends(get_db),
):
    _get_conversation(db, conversation_id)
    newest_first = (
        db.query(Message)
        .filter(Message.conversation_id == conversation_id)
        .order_by(Message.id.desc())
        .limit(limit)
        .all()
    )
    return list(reversed(newest_first))
