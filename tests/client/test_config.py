import pytest

from direct_chat.client import config, storage


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    monkeypatch.setattr(storage, "STORAGE_FILE", tmp_path / "state.json")
    monkeypatch.delenv(config.BACKEND_URL_ENV, raising=False)
    monkeypatch.delenv(config.REQUEST_TIMEOUT_ENV, raising=False)


def test_default_backend_url():
    assert config.resolve_backend_url() == "http://localhost:8000"


def test_backend_url_precedence(monkeypatch):
    storage.store_server_url("http://stored:8000/")
    assert config.resolve_backend_url() == "http://stored:8000"

    monkeypatch.setenv(config.BACKEND_URL_ENV, "http://env:9000")
    assert config.resolve_backend_url() == "http://env:9000"
    assert config.resolve_backend_url(" http://explicit:1/ ") == "http://explicit:1"


def test_blank_values_are_skipped(monkeypatch):
    monkeypatch.setenv(config.BACKEND_URL_ENV, "   ")
    assert config.resolve_backend_url("") == config.DEFAULT_BACKEND_URL


def test_request_timeout(monkeypatch):
    assert config.request_timeout() is None
    monkeypatch.setenv(config.REQUEST_TIMEOUT_ENV, "2.5")
    assert config.request_timeout() == 2.5


def test_storage_round_trips_other_keys():
    storage.save_state({"other": 1})
    storage.store_server_url("http://x")
    assert storage.load_state() == {"other": 1, "server_url": "http://x"}


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_unusable_request_timeout_is_ignored(monkeypatch, raw):
    monkeypatch.setenv(config.REQUEST_TIMEOUT_ENV, raw)
    assert config.request_timeout() is None
