import asyncio
import itertools
import os
import tempfile
from dataclasses import replace
from datetime import datetime, timedelta

import pytest

# Must be set before any direct_chat module is imported.
_TMP = tempfile.mkdtemp(prefix="direct_chat_tests_")
os.environ.setdefault("DIRECT_CHAT_LOG_DIR", _TMP)
os.environ.setdefault("DIRECT_CHAT_DATABASE_URL", f"sqlite:///{os.path.join(_TMP, 'test.db')}")
os.environ.setdefault("DIRECT_CHAT_CLIENT_STATE", os.path.join(_TMP, "client_state.json"))

from direct_chat.client.errors import TransportError  # noqa: E402
from direct_chat.client.models import Conversation, Message, User  # noqa: E402


class FakeBackend:
    """In-memory backend with get-or-create semantics.

    Every call is recorded in ``calls`` as ``(method, key)``. ``hold`` returns
    an event the matching call waits on before answering, and ``fail`` makes a
    method raise instead of answering.
    """

    def __init__(self):
        self.users = {}
        self.conversations = []
        self.messages = {}
        self.activity = {}
        self.calls = []
        self.failures = {}
        self.gates = {}
        self._ids = itertools.count(1)
        self._clock = itertools.count()
        self._epoch = datetime(2024, 5, 1, 12, 0, 0)

    def hold(self, method, key=None):
        event = asyncio.Event()
        self.gates[(method, key)] = event
        return event

    def fail(self, method, error=None):
        self.failures[method] = error or TransportError("backend unreachable")

    def calls_to(self, method):
        return [key for name, key in self.calls if name == method]

    async def _enter(self, method, key=None):
        self.calls.append((method, key))
        gate = self.gates.get((method, key))
        if gate is not None:
            await gate.wait()
        else:
            await asyncio.sleep(0)
        error = self.failures.get(method)
        if error is not None:
            raise error

    def add_conversation(self, *participant_ids, name=None):
        convo = Conversation(id=next(self._ids), type="direct", participant_ids=tuple(participant_ids), name=name)
        self.conversations.append(convo)
        self.messages[convo.id] = []
        self.activity[convo.id] = next(self._clock)
        return convo

    def add_message(self, conversation_id, sender_id, content):
        tick = next(self._clock)
        message = Message(
            id=next(self._ids),
            conversation_id=conversation_id,
            sender_id=sender_id,
            content=content,
            type="text",
            created_at=(self._epoch + timedelta(seconds=tick)).isoformat(),
        )
        self.messages[conversation_id].append(message)
        self.activity[conversation_id] = tick
        return message

    async def create_user(self, username, display_name):
        await self._enter("create_user", username)
        if username not in self.users:
            self.users[username] = User(id=next(self._ids), username=username, display_name=display_name)
        return self.users[username]

    async def create_direct_conversation(self, user_a, user_b):
        await self._enter("create_direct_conversation", (user_a, user_b))
        for convo in self.conversations:
            if convo.type == "direct" and set(convo.participant_ids) == {user_a, user_b}:
                return convo
        return self.add_conversation(user_a, user_b)

    async def list_conversations(self, user_id):
        await self._enter("list_conversations", user_id)
        mine = [c for c in self.conversations if user_id in c.participant_ids]
        mine.sort(key=lambda c: self.activity[c.id], reverse=True)
        result = []
        for convo in mine:
            thread = self.messages[convo.id]
            preview = thread[-1].content if thread else None
            result.append(replace(convo, last_message_preview=preview))
        return result

    async def list_messages(self, conversation_id, limit):
        await self._enter("list_messages", conversation_id)
        return list(self.messages[conversation_id][-limit:])

    async def send_message(self, request):
        await self._enter("send_message", request.conversation_id)
        convo = next(c for c in self.conversations if c.id == request.conversation_id)
        if request.sender_id not in convo.participant_ids:
            raise TransportError("POST /messages failed with status 403", status_code=403)
        return self.add_message(request.conversation_id, request.sender_id, request.content)


@pytest.fixture
def backend():
    return FakeBackend()
