from direct_chat.client import session
from direct_chat.client.errors import TransportError
from direct_chat.client.models import Conversation, Message, User
from direct_chat.client.session import BootstrapStatus, SessionState, SessionStore, ThreadStatus

ALICE = User(id=1, username="alice", display_name="Alice Johnson")
CONVO_A = Conversation(id=10, type="direct", participant_ids=(1, 2))
CONVO_B = Conversation(id=11, type="direct", participant_ids=(1, 3))


def message(id, conversation_id=10, content="hi"):
    return Message(id=id, conversation_id=conversation_id, sender_id=1, content=content, type="text", created_at="")


def test_transitions_return_new_states():
    state = SessionState()
    started = session.bootstrap_started(state)
    assert started is not state
    assert state.bootstrap is BootstrapStatus.UNINITIALIZED
    assert started.bootstrap is BootstrapStatus.BOOTSTRAPPING


def test_bootstrap_failure_carries_error():
    error = TransportError("down")
    state = session.bootstrap_failed(session.bootstrap_started(SessionState()), error)
    assert state.bootstrap is BootstrapStatus.FAILED
    assert state.bootstrap_error is error
    assert session.bootstrap_started(state).bootstrap_error is None


def test_selecting_a_conversation_drops_previous_thread():
    state = session.conversation_selected(SessionState(), CONVO_A)
    state = session.thread_loaded(state, state.thread_generation, CONVO_A.id, [message(1)])
    assert state.thread_status is ThreadStatus.LOADED

    switched = session.conversation_selected(state, CONVO_B)

    assert switched.messages == ()
    assert switched.thread_status is ThreadStatus.LOADING
    assert switched.thread_generation == state.thread_generation + 1
    assert switched.active_conversation_id == CONVO_B.id


def test_stale_thread_results_are_ignored():
    state = session.conversation_selected(SessionState(), CONVO_A)
    stale_generation = state.thread_generation
    state = session.conversation_selected(state, CONVO_B)

    assert session.thread_loaded(state, stale_generation, CONVO_A.id, [message(1)]) is state
    assert session.thread_load_failed(state, stale_generation, CONVO_A.id, TransportError("x")) is state


def test_reselecting_same_conversation_invalidates_older_load():
    state = session.conversation_selected(SessionState(), CONVO_A)
    first = state.thread_generation
    state = session.conversation_selected(state, CONVO_A)
    assert session.thread_loaded(state, first, CONVO_A.id, [message(1)]) is state


def test_message_appended_only_to_matching_active_conversation():
    state = session.conversation_selected(SessionState(), CONVO_A)
    generation = state.thread_generation
    state = session.thread_loaded(state, generation, CONVO_A.id, [message(1)])

    appended = session.message_appended(state, generation, CONVO_A.id, message(2))
    assert [m.id for m in appended.messages] == [1, 2]
    assert session.message_appended(state, generation, CONVO_B.id, message(3, conversation_id=CONVO_B.id)) is state


def test_message_appended_ignores_reloaded_thread_and_duplicates():
    state = session.conversation_selected(SessionState(), CONVO_A)
    issued = state.thread_generation
    state = session.thread_loaded(state, issued, CONVO_A.id, [message(1)])

    assert session.message_appended(state, issued, CONVO_A.id, message(1)) is state
    reloaded = session.conversation_selected(state, CONVO_A)
    assert session.message_appended(reloaded, issued, CONVO_A.id, message(2)) is reloaded


def test_thread_loaded_keeps_messages_confirmed_while_loading():
    state = session.conversation_selected(SessionState(), CONVO_A)
    generation = state.thread_generation
    state = session.message_appended(state, generation, CONVO_A.id, message(3))

    stale_page = session.thread_loaded(state, generation, CONVO_A.id, [message(1), message(2)])
    assert [m.id for m in stale_page.messages] == [1, 2, 3]
    fresh_page = session.thread_loaded(state, generation, CONVO_A.id, [message(1), message(3)])
    assert [m.id for m in fresh_page.messages] == [1, 3]


def test_conversation_refresh_uses_latest_token():
    state = session.conversations_requested(SessionState())
    older = state.conversations_token
    state = session.conversations_requested(state)

    assert session.conversations_refreshed(state, older, [CONVO_A]) is state
    refreshed = session.conversations_refreshed(state, state.conversations_token, [CONVO_B, CONVO_A])
    assert refreshed.conversations == (CONVO_B, CONVO_A)


def test_compose_changed_is_noop_for_same_text():
    state = session.compose_changed(SessionState(), "draft")
    assert session.compose_changed(state, "draft") is state


def test_store_notifies_listeners_only_on_change():
    store = SessionStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)

    assert store.commit(session.identities_resolved(store.state, ALICE, [ALICE])) is True
    assert store.commit(store.state) is False
    unsubscribe()
    store.commit(session.compose_changed(store.state, "x"))

    assert len(seen) == 1
    assert seen[0].me == ALICE
