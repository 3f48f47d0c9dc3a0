"""Presentation helpers shared by the console and desktop clients."""
from datetime import datetime
from typing import Iterable, Optional

from .models import Conversation, User

# Tailwind 500 shades: indigo, blue, emerald, fuchsia, rose, amber.
AVATAR_COLORS = ("#6366f1", "#3b82f6", "#10b981", "#d946ef", "#f43f5e", "#f59e0b")
NO_MESSAGES = "No messages yet"


def initials(name: Optional[str]) -> str:
    """Up to two upper-case initials, or "?" when there is no name."""
    if not name:
        return "?"
    letters = "".join(part[0] for part in name.split(" ") if part)
    return letters[:2].upper() or "?"


def avatar_color(name: Optional[str]) -> str:
    code = ord(name[0]) if name else 0
    return AVATAR_COLORS[code % len(AVATAR_COLORS)]


def peer_of(users: Iterable[User], me: Optional[User]) -> Optional[User]:
    return next((u for u in users if me is None or u.id != me.id), None)


def conversation_title(conversation: Optional[Conversation], users: Iterable[User], me: Optional[User]) -> str:
    if conversation is not None and conversation.name:
        return conversation.name
    peer = peer_of(users, me)
    if peer is None:
        return "..."
    return peer.display_name


def preview_text(conversation: Conversation) -> str:
    return conversation.last_message_preview or NO_MESSAGES


def format_time(created_at: str, fmt: str = "%H:%M:%S") -> str:
    try:
        return datetime.fromisoformat(created_at).strftime(fmt)
    except ValueError:
        return created_at
