"""Local client storage for the last backend URL used."""
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

STORAGE_FILE = Path(os.environ.get("DIRECT_CHAT_CLIENT_STATE", Path.home() / ".direct_chat_client.json"))


def load_state() -> Dict[str, Any]:
    if STORAGE_FILE.exists():
        with STORAGE_FILE.open("r", encoding="utf-8") as f:
            return json.load(f)
    return {}


def save_state(data: Dict[str, Any]) -> None:
    STORAGE_FILE.parent.mkdir(parents=True, exist_ok=True)
    with STORAGE_FILE.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def store_server_url(url: str) -> None:
    state = load_state()
    state["server_url"] = url.rstrip("/")
    save_state(state)


def get_server_url() -> Optional[str]:
    return load_state().get("server_url")
