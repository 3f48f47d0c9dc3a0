"""Send pipeline: submit, append the confirmed message, refresh previews."""
from typing import Optional

from . import session
from .caches import ConversationListCache
from .config import LOG_FILE_NAME
from .models import Message, MessageRequest
from .result import Result, attempt
from .session import SessionStore
from ..shared.logging_config import configure_logging
from ..shared.utils import clean_text

logger = configure_logging("direct_chat_client", LOG_FILE_NAME)


class SendPipeline:
    def __init__(self, backend, conversation_list: ConversationListCache):
        self.backend = backend
        self.conversation_list = conversation_list

    async def send(self, store: SessionStore, text: str) -> "Optional[Result[Message]]":
        """Send ``text`` to the active conversation as the signed-in user.

        Returns None without touching anything when the text is blank or there
        is no active conversation or user. On failure the compose text is kept
        so the user can retry.
        """
        state = store.state
        content = clean_text(text)
        if content is None or state.active_conversation is None or state.me is None:
            return None

        me = state.me
        generation = state.thread_generation
        request = MessageRequest(
            conversation_id=state.active_conversation.id,
            sender_id=me.id,
            content=content,
            type="text",
        )
        result = await attempt(self.backend.send_message(request))
        if not result.ok:
            logger.warning("MESSAGE_SEND_FAIL conversation_id=%s error=%s", request.conversation_id, result.error)
            store.commit(session.error_recorded(store.state, result.error))
            return result

        message = result.value
        if not store.commit(session.message_appended(store.state, generation, request.conversation_id, message)):
            logger.info(
                "MESSAGE_APPEND_DISCARDED conversation_id=%s message_id=%s", request.conversation_id, message.id
            )
        store.commit(session.compose_changed(session.error_cleared(store.state), ""))
        logger.info("MESSAGE_SENT conversation_id=%s message_id=%s", request.conversation_id, message.id)

        refreshed = await self.conversation_list.refresh(store, me.id)
        if not refreshed.ok:
            store.commit(session.error_recorded(store.state, refreshed.error))
        return result
