"""Caches for the conversation list and the active message thread.

Both caches live inside the session state. A response is applied only if the
request it answers is still the latest one for its context; otherwise it is
dropped without touching the state.
"""
from typing import List

from . import session
from .config import LOG_FILE_NAME, MESSAGE_PAGE_SIZE
from .models import Conversation, Identifier, Message
from .result import Result, attempt
from .session import SessionStore
from ..shared.logging_config import configure_logging

logger = configure_logging("direct_chat_client", LOG_FILE_NAME)


class ConversationListCache:
    """Sidebar summaries for the signed-in user, replaced wholesale on refresh."""

    def __init__(self, backend):
        self.backend = backend

    async def refresh(self, store: SessionStore, user_id: Identifier) -> "Result[List[Conversation]]":
        store.commit(session.conversations_requested(store.state))
        token = store.state.conversations_token
        result = await attempt(self.backend.list_conversations(user_id))
        if not result.ok:
            logger.warning("CONVERSATIONS_REFRESH_FAIL user_id=%s error=%s", user_id, result.error)
            return result
        if not store.commit(session.conversations_refreshed(store.state, token, result.value)):
            logger.info("CONVERSATIONS_REFRESH_DISCARDED user_id=%s token=%s", user_id, token)
            return result
        logger.info("CONVERSATIONS_REFRESHED user_id=%s count=%s", user_id, len(result.value))
        return result


class MessageThreadCache:
    """Messages of the active conversation, oldest first, capped at ``page_size``."""

    def __init__(self, backend, page_size: int = MESSAGE_PAGE_SIZE):
        self.backend = backend
        self.page_size = page_size

    def select(self, store: SessionStore, conversation: Conversation) -> int:
        """Activate ``conversation`` and return the generation its load must carry."""
        store.commit(session.conversation_selected(store.state, conversation))
        return store.state.thread_generation

    async def load(
        self, store: SessionStore, conversation_id: Identifier, generation: int
    ) -> "Result[List[Message]]":
        result = await attempt(self.backend.list_messages(conversation_id, self.page_size))
        if result.ok:
            applied = store.commit(session.thread_loaded(store.state, generation, conversation_id, result.value))
        else:
            applied = store.commit(session.thread_load_failed(store.state, generation, conversation_id, result.error))
        if not applied:
            logger.info("THREAD_LOAD_DISCARDED conversation_id=%s generation=%s", conversation_id, generation)
        elif result.ok:
            logger.info("THREAD_LOADED conversation_id=%s count=%s", conversation_id, len(result.value))
        else:
            logger.warning("THREAD_LOAD_FAIL conversation_id=%s error=%s", conversation_id, result.error)
        return result
