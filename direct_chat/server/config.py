"""Server configuration values."""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATABASE_URL = os.environ.get("DIRECT_CHAT_DATABASE_URL", f"sqlite:///{BASE_DIR / 'direct_chat.db'}")
LOG_FILE_NAME = "server.log"
PREVIEW_LENGTH = 80
DEFAULT_MESSAGE_PAGE = 100
MAX_MESSAGE_PAGE = 500
