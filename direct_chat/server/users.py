"""User creation and listing routes."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from . import schemas
from .config import LOG_FILE_NAME
from .database import get_db
from .models import User
from ..shared.logging_config import configure_logging

router = APIRouter(prefix="/users", tags=["users"])
logger = configure_logging("direct_chat_server", LOG_FILE_NAME)


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=schemas.UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: schemas.UserCreate, response: Response, db: Session = Depends(get_db)):
    existing = db.query(User).filter(User.username == payload.username).first()
    if existing:
        logger.info("USER_EXISTS username=%s user_id=%s", existing.username, existing.id)
        response.status_code = status.HTTP_200_OK
        return existing

    user = User(username=payload.username, display_name=payload.display_name, avatar_url=payload.avatar_url)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("USER_CREATED username=%s user_id=%s", user.username, user.id)
    return user


@router.get("", response_model=List[schemas.UserOut])
def list_users(db: Session = Depends(get_db)):
    return db.query(User).order_by(User.id).all()
