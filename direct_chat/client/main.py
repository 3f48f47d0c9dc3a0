"""Console client for the direct chat demo."""
import asyncio
import sys
from typing import Optional

from . import api
from .config import DEFAULT_BACKEND_URL, resolve_backend_url, request_timeout
from .controller import SessionController
from .formatting import conversation_title, format_time, preview_text
from .result import Failure
from .session import SessionState
from .storage import store_server_url


class ConsoleChat:
    """Interactive console front end driving a SessionController."""

    def __init__(self, controller: SessionController):
        self.controller = controller

    async def ask(self, prompt: str) -> str:
        return await asyncio.to_thread(input, prompt)

    def title(self, state: SessionState) -> str:
        return conversation_title(state.active_conversation, state.users, state.me)

    def print_thread(self) -> None:
        state = self.controller.state
        print(f"\n=== {self.title(state)} ===")
        if not state.messages:
            print("No messages yet.")
        for msg in state.messages:
            direction = "(you)" if state.me and msg.sender_id == state.me.id else self.title(state)
            timestamp = format_time(msg.created_at, "%H:%M")
            print(f"[{timestamp}] {direction}: {msg.content}")

    def print_conversations(self) -> None:
        state = self.controller.state
        for index, convo in enumerate(state.conversations, start=1):
            marker = "*" if convo.id == state.active_conversation_id else " "
            name = conversation_title(convo, state.users, state.me)
            print(f"{marker} {index}. {name} - {preview_text(convo)}")

    async def send(self) -> None:
        self.controller.set_compose(await self.ask("Message: "))
        result = await self.controller.submit()
        if result is None:
            print("Nothing to send.")
        elif isinstance(result, Failure):
            print(f"Failed to send message: {result.error}")
        else:
            self.print_thread()

    async def refresh(self) -> None:
        state = self.controller.state
        if state.active_conversation is not None:
            loaded = await self.controller.select_conversation(state.active_conversation)
            if isinstance(loaded, Failure):
                print(f"Could not fetch messages: {loaded.error}")
        listed = await self.controller.refresh_conversations()
        if isinstance(listed, Failure):
            print(f"Could not fetch conversations: {listed.error}")
        self.print_thread()

    async def choose_conversation(self) -> None:
        self.print_conversations()
        choice = (await self.ask("Open chat #: ")).strip()
        conversations = self.controller.state.conversations
        if not choice.isdigit() or not 1 <= int(choice) <= len(conversations):
            print("No such chat.")
            return
        loaded = await self.controller.select_conversation(conversations[int(choice) - 1])
        if isinstance(loaded, Failure):
            print(f"Could not fetch messages: {loaded.error}")
        self.print_thread()

    async def run(self) -> int:
        result = await self.controller.bootstrap()
        if isinstance(result, Failure):
            print(f"Could not start the chat: {result.error}")
            return 1
        me = self.controller.state.me
        print(f"Welcome, {me.display_name} ({me.username})!")
        self.print_thread()

        while True:
            print("\nChat commands: [s]end, [r]efresh, [c]hats, [q]uit")
            cmd = (await self.ask("> ")).strip().lower()
            if cmd == "q":
                return 0
            if cmd == "s":
                await self.send()
            if cmd == "r":
                await self.refresh()
            if cmd == "c":
                await self.choose_conversation()


def main(argv: Optional[list] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    print("Direct Chat Client")
    server_url = argv[0] if argv else input(f"Backend URL [{resolve_backend_url()}]: ").strip()
    server_url = resolve_backend_url(server_url or None)
    if server_url != DEFAULT_BACKEND_URL:
        store_server_url(server_url)
    controller = SessionController(api.connect(server_url, timeout=request_timeout()))
    return asyncio.run(ConsoleChat(controller).run())


if __name__ == "__main__":
    sys.exit(main())
