import pytest

from direct_chat.client import api
from direct_chat.client.controller import SessionController
from direct_chat.client.session import BootstrapStatus


@pytest.fixture
def backend_url(client, monkeypatch):
    """Route the client's HTTP calls into the in-process reference backend."""

    def request(method, url, **kwargs):
        return client.request(method, url, **kwargs)

    monkeypatch.setattr(api.requests, "request", request)
    return "http://testserver"


@pytest.mark.asyncio
async def test_bootstrap_and_send_against_reference_backend(backend_url):
    controller = SessionController(api.connect(backend_url))

    convo = await controller.bootstrap()
    assert convo.ok
    assert controller.state.bootstrap is BootstrapStatus.READY
    alice, bob = controller.state.users
    assert convo.value.participant_ids == (alice.id, bob.id)

    controller.set_compose("hello")
    sent = await controller.submit()

    assert sent.ok
    assert controller.state.messages[-1].content == "hello"
    assert controller.state.compose_text == ""
    assert controller.state.conversations[0].last_message_preview == "hello"


@pytest.mark.asyncio
async def test_second_session_reuses_identities_and_conversation(backend_url):
    first = SessionController(api.connect(backend_url))
    second = SessionController(api.connect(backend_url))

    one = await first.bootstrap()
    first.set_compose("kept on the server")
    await first.submit()
    two = await second.bootstrap()

    assert two.value.id == one.value.id
    assert second.state.me == first.state.me
    assert [m.content for m in second.state.messages] == ["kept on the server"]
