"""Resolvers that make sure the demo identities and their conversation exist."""
from .config import LOG_FILE_NAME
from .models import Conversation, Identifier, User
from .result import Result, attempt
from ..shared.logging_config import configure_logging

logger = configure_logging("direct_chat_client", LOG_FILE_NAME)


class IdentityResolver:
    """Creates (or gets back) a user by username.

    Deduplication by username is the backend's job; this always sends a create.
    """

    def __init__(self, backend):
        self.backend = backend

    async def ensure_user(self, username: str, display_name: str) -> "Result[User]":
        result = await attempt(self.backend.create_user(username, display_name))
        if result.ok:
            logger.info("USER_RESOLVED username=%s user_id=%s", username, result.value.id)
        else:
            logger.warning("USER_RESOLVE_FAIL username=%s error=%s", username, result.error)
        return result


class ConversationResolver:
    def __init__(self, backend):
        self.backend = backend

    async def ensure_direct_convo(self, user_a: Identifier, user_b: Identifier) -> "Result[Conversation]":
        result = await attempt(self.backend.create_direct_conversation(user_a, user_b))
        if result.ok:
            logger.info("CONVERSATION_RESOLVED conversation_id=%s participants=%s,%s", result.value.id, user_a, user_b)
        else:
            logger.warning("CONVERSATION_RESOLVE_FAIL participants=%s,%s error=%s", user_a, user_b, result.error)
        return result
