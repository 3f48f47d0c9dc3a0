"""FastAPI application entrypoint for the reference chat backend."""
import uvicorn
from fastapi import FastAPI

from . import conversations, messages, users
from .config import LOG_FILE_NAME
from .database import Base, engine
from ..shared.logging_config import configure_logging

logger = configure_logging("direct_chat_server", LOG_FILE_NAME)

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Direct Chat Backend", version="1.0.0")
app.include_router(users.router)
app.include_router(conversations.router)
app.include_router(messages.router)


@app.get("/")
def root():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("direct_chat.server.main:app", host="0.0.0.0", port=8000, reload=False)
