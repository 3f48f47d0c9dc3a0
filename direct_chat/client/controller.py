"""Session controller: bootstrap sequencing and user actions."""
import asyncio
from typing import Callable, List, Optional, Sequence, Tuple

from . import session
from .caches import ConversationListCache, MessageThreadCache
from .config import DEMO_PARTICIPANTS, LOG_FILE_NAME, MESSAGE_PAGE_SIZE
from .errors import SessionStateError
from .models import Conversation, Message
from .resolvers import ConversationResolver, IdentityResolver
from .result import Failure, Result
from .send import SendPipeline
from .session import BootstrapStatus, SessionState, SessionStore
from ..shared.logging_config import configure_logging

logger = configure_logging("direct_chat_client", LOG_FILE_NAME)


class SessionController:
    """Owns the session and drives every component against it.

    ``backend`` is anything with the awaitable methods of ``AsyncAPIClient``.
    """

    def __init__(
        self,
        backend,
        participants: Sequence[Tuple[str, str]] = DEMO_PARTICIPANTS,
        page_size: int = MESSAGE_PAGE_SIZE,
        store: Optional[SessionStore] = None,
    ):
        if len(participants) != 2:
            raise ValueError("Bootstrap needs exactly two participants")
        self.participants = tuple(participants)
        self.store = store or SessionStore()
        self.identities = IdentityResolver(backend)
        self.conversation_resolver = ConversationResolver(backend)
        self.conversation_list = ConversationListCache(backend)
        self.thread = MessageThreadCache(backend, page_size=page_size)
        self.sender = SendPipeline(backend, self.conversation_list)
        self._thread_load: Optional[asyncio.Task] = None

    @property
    def state(self) -> SessionState:
        return self.store.state

    def subscribe(self, listener: Callable[[SessionState], None]) -> Callable[[], None]:
        return self.store.subscribe(listener)

    async def bootstrap(self) -> "Result[Conversation]":
        """Resolve both participants and their conversation, then become ready.

        Allowed from ``uninitialized`` and, as the only retry, from ``failed``.
        """
        status = self.state.bootstrap
        if status in (BootstrapStatus.BOOTSTRAPPING, BootstrapStatus.READY):
            return Failure(SessionStateError(f"Cannot bootstrap while {status.value}"))

        self.store.commit(session.bootstrap_started(self.state))
        logger.info("BOOTSTRAP_START participants=%s", ",".join(u for u, _ in self.participants))

        users: List = []
        for username, display_name in self.participants:
            resolved = await self.identities.ensure_user(username, display_name)
            if not resolved.ok:
                return self._fail_bootstrap(resolved)
            users.append(resolved.value)
        me, peer = users
        self.store.commit(session.identities_resolved(self.state, me, users))

        convo = await self.conversation_resolver.ensure_direct_convo(me.id, peer.id)
        if not convo.ok:
            return self._fail_bootstrap(convo)

        self._start_thread_load(convo.value)

        refreshed = await self.conversation_list.refresh(self.store, me.id)
        if not refreshed.ok:
            failure = self._fail_bootstrap(refreshed)
            await self.wait_for_thread()
            return failure

        self.store.commit(session.bootstrap_succeeded(self.state))
        logger.info("BOOTSTRAP_READY user_id=%s conversation_id=%s", me.id, convo.value.id)
        await self.wait_for_thread()
        return convo

    def _fail_bootstrap(self, failure: Failure) -> Failure:
        self.store.commit(session.bootstrap_failed(self.state, failure.error))
        logger.error("BOOTSTRAP_FAIL error=%s", failure.error)
        return failure

    def _start_thread_load(self, conversation: Conversation) -> None:
        generation = self.thread.select(self.store, conversation)
        self._thread_load = asyncio.ensure_future(self.thread.load(self.store, conversation.id, generation))

    async def wait_for_thread(self) -> None:
        """Wait for the most recently started thread load, if any."""
        if self._thread_load is not None:
            await self._thread_load

    async def select_conversation(self, conversation: Conversation) -> "Optional[Result[List[Message]]]":
        """Make ``conversation`` active and load its thread.

        A no-op returning None unless the session is ready. The load result is
        returned even when a newer selection made it stale.
        """
        if not self.state.is_ready:
            return None
        generation = self.thread.select(self.store, conversation)
        logger.info("CONVERSATION_SELECTED conversation_id=%s generation=%s", conversation.id, generation)
        load = asyncio.ensure_future(self.thread.load(self.store, conversation.id, generation))
        self._thread_load = load
        result = await load
        if result.ok and self.state.active_conversation_id == conversation.id:
            self.store.commit(session.error_cleared(self.state))
        return result

    def set_compose(self, text: str) -> None:
        self.store.commit(session.compose_changed(self.state, text))

    async def submit(self) -> "Optional[Result[Message]]":
        """Send the current compose text; None when there was nothing to send."""
        if not self.state.is_ready:
            return None
        return await self.sender.send(self.store, self.state.compose_text)

    async def refresh_conversations(self) -> "Optional[Result[List[Conversation]]]":
        if not self.state.is_ready or self.state.me is None:
            return None
        result = await self.conversation_list.refresh(self.store, self.state.me.id)
        if not result.ok:
            self.store.commit(session.error_recorded(self.state, result.error))
        return result
