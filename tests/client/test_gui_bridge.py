import logging

import pytest

from direct_chat.client.controller import SessionController
from direct_chat.client.gui.app import ChatBridge
from direct_chat.client.session import BootstrapStatus


def test_bridge_runs_controller_on_its_own_loop(backend):
    bridge = ChatBridge(base_url="http://backend.test", controller=SessionController(backend))
    seen = []
    bridge.subscribe(seen.append)
    bridge.start()
    try:
        assert bridge.bootstrap().result(timeout=5).ok
        bridge.set_compose("hi from the gui")
        result = bridge.submit().result(timeout=5)
    finally:
        bridge.stop()

    assert result.ok
    assert bridge.state.bootstrap is BootstrapStatus.READY
    assert bridge.state.messages[-1].content == "hi from the gui"
    assert any(s.compose_text == "hi from the gui" for s in seen)


def test_backend_cannot_change_after_start(backend):
    bridge = ChatBridge(base_url="http://backend.test", controller=SessionController(backend))
    bridge.start()
    try:
        with pytest.raises(RuntimeError):
            bridge.set_base_url("http://other.test")
    finally:
        bridge.stop()


def test_unexpected_errors_are_logged(backend, caplog):
    backend.fail("create_user", RuntimeError("boom"))
    bridge = ChatBridge(base_url="http://backend.test", controller=SessionController(backend))
    bridge.start()
    try:
        with caplog.at_level(logging.ERROR, logger="direct_chat_client"):
            future = bridge.bootstrap()
            with pytest.raises(RuntimeError, match="boom"):
                future.result(timeout=5)
    finally:
        bridge.stop()

    assert any("GUI_ACTION_FAIL" in record.getMessage() for record in caplog.records)
