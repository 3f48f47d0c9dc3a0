"""Session state and the pure transitions that produce new states.

The state is a frozen dataclass. Every transition takes the current state and
returns a new one; a transition that has nothing to apply returns the state it
was given, which lets callers tell a discarded result from an applied one.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .errors import ChatClientError
from .models import Conversation, Identifier, Message, User


class BootstrapStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    BOOTSTRAPPING = "bootstrapping"
    READY = "ready"
    FAILED = "failed"


class ThreadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    bootstrap: BootstrapStatus = BootstrapStatus.UNINITIALIZED
    bootstrap_error: Optional[ChatClientError] = None
    me: Optional[User] = None
    users: Tuple[User, ...] = ()
    conversations: Tuple[Conversation, ...] = ()
    conversations_token: int = 0
    active_conversation: Optional[Conversation] = None
    messages: Tuple[Message, ...] = ()
    thread_status: ThreadStatus = ThreadStatus.IDLE
    thread_generation: int = 0
    compose_text: str = ""
    last_error: Optional[ChatClientError] = None

    @property
    def active_conversation_id(self) -> Optional[Identifier]:
        if self.active_conversation is None:
            return None
        return self.active_conversation.id

    @property
    def is_ready(self) -> bool:
        return self.bootstrap is BootstrapStatus.READY


# Bootstrap


def bootstrap_started(state: SessionState) -> SessionState:
    return replace(state, bootstrap=BootstrapStatus.BOOTSTRAPPING, bootstrap_error=None)


def identities_resolved(state: SessionState, me: User, users: Sequence[User]) -> SessionState:
    return replace(state, me=me, users=tuple(users))


def bootstrap_succeeded(state: SessionState) -> SessionState:
    return replace(state, bootstrap=BootstrapStatus.READY)


def bootstrap_failed(state: SessionState, error: ChatClientError) -> SessionState:
    return replace(state, bootstrap=BootstrapStatus.FAILED, bootstrap_error=error)


# Message thread


def conversation_selected(state: SessionState, conversation: Conversation) -> SessionState:
    """Make ``conversation`` active and drop the previous thread entirely."""
    return replace(
        state,
        active_conversation=conversation,
        messages=(),
        thread_status=ThreadStatus.LOADING,
        thread_generation=state.thread_generation + 1,
    )


def is_current_thread(state: SessionState, generation: int, conversation_id: Identifier) -> bool:
    return state.thread_generation == generation and state.active_conversation_id == conversation_id


def thread_loaded(
    state: SessionState, generation: int, conversation_id: Identifier, messages: Sequence[Message]
) -> SessionState:
    """Install a loaded page, keeping messages confirmed while it was in flight."""
    if not is_current_thread(state, generation, conversation_id):
        return state
    loaded_ids = {m.id for m in messages}
    pending = tuple(m for m in state.messages if m.id not in loaded_ids)
    return replace(state, messages=tuple(messages) + pending, thread_status=ThreadStatus.LOADED)


def thread_load_failed(
    state: SessionState, generation: int, conversation_id: Identifier, error: ChatClientError
) -> SessionState:
    if not is_current_thread(state, generation, conversation_id):
        return state
    return replace(state, thread_status=ThreadStatus.FAILED, last_error=error)


def message_appended(
    state: SessionState, generation: int, conversation_id: Identifier, message: Message
) -> SessionState:
    if not is_current_thread(state, generation, conversation_id):
        return state
    if any(m.id == message.id for m in state.messages):
        return state
    return replace(state, messages=state.messages + (message,))


# Conversation list


def conversations_requested(state: SessionState) -> SessionState:
    return replace(state, conversations_token=state.conversations_token + 1)


def conversations_refreshed(state: SessionState, token: int, conversations: Sequence[Conversation]) -> SessionState:
    if state.conversations_token != token:
        return state
    return replace(state, conversations=tuple(conversations))


# Compose and errors


def compose_changed(state: SessionState, text: str) -> SessionState:
    if state.compose_text == text:
        return state
    return replace(state, compose_text=text)


def error_recorded(state: SessionState, error: ChatClientError) -> SessionState:
    return replace(state, last_error=error)


def error_cleared(state: SessionState) -> SessionState:
    if state.last_error is None:
        return state
    return replace(state, last_error=None)


Listener = Callable[[SessionState], None]


class SessionStore:
    """Single owner of the session state.

    Components read ``state`` and hand new states to ``commit``; listeners are
    told about every state that actually changed.
    """

    def __init__(self, state: Optional[SessionState] = None):
        self.state = state or SessionState()
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def commit(self, new_state: SessionState) -> bool:
        """Install ``new_state``; returns False when it is the current state."""
        if new_state is self.state:
            return False
        self.state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return True
