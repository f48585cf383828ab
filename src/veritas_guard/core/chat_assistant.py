"""
Module for the Veritas Assistant chat.

A ChatSession owns an append-only list of messages for one language. Switching
the language discards every prior turn and reseeds the list with a localized
greeting. Endpoint failures become a placeholder model message; the session
itself never enters an error state.
"""

import asyncio
import logging
import time
import uuid
from enum import Enum
from typing import List, Optional, Union

import typer
from rich.panel import Panel

from .config_loader import CONFIG
from .gemini_client import GeminiClient, GeminiClientError, create_gemini_client
from .localization import resolve_language, t
from .prompt_builder import build_chat_config
from .schemas import ChatConfig, ChatMessage, ChatRole, Language
from .utils import console

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _message(role: ChatRole, text: str) -> ChatMessage:
    return ChatMessage(id=uuid.uuid4().hex, role=role, text=text, timestamp=_now_ms())


class ChatSession:
    """A single conversation with the assistant."""

    def __init__(
        self, client: GeminiClient, language: Union[str, Language] = Language.EN
    ):
        self.client = client
        self.language = resolve_language(language)
        self.state = SessionState.UNINITIALIZED
        self.config: Optional[ChatConfig] = None
        self._messages: List[ChatMessage] = []
        # Successful exchanges only; replayed to the endpoint on each turn.
        self._history: List[ChatMessage] = []
        self._pending = False
        # Bumped on every reseed; replies to an earlier generation are dropped.
        self._generation = 0

    @property
    def messages(self) -> List[ChatMessage]:
        """All messages shown to the user, oldest first."""
        self._ensure_active()
        return list(self._messages)

    @property
    def is_busy(self) -> bool:
        return self._pending

    def _ensure_active(self) -> None:
        if self.state == SessionState.UNINITIALIZED:
            self.reset()

    def reset(self, language: Union[str, Language, None] = None) -> None:
        """Discards all turns and reseeds the session with a greeting."""
        if language is not None:
            self.language = resolve_language(language)
        self.config = build_chat_config(self.language)
        self._messages = [_message(ChatRole.MODEL, t(self.language, "chat_welcome"))]
        self._history = []
        self._generation += 1
        self.state = SessionState.ACTIVE
        logger.info("Chat session seeded (language=%s)", self.language.value)

    def set_language(self, language: Union[str, Language]) -> None:
        """Switches language; a change reseeds the session."""
        lang = resolve_language(language)
        if self.state == SessionState.ACTIVE and lang == self.language:
            return
        self.reset(lang)

    async def send(self, text: str) -> Optional[ChatMessage]:
        """
        Sends a user message and records the reply.

        Args:
            text (str): The user's message.

        Returns:
            Optional[ChatMessage]: The model reply or the localized error
            placeholder. None if text is blank, another send is in flight, or
            the session was reseeded before the reply arrived.
        """
        self._ensure_active()
        if not text or not text.strip():
            return None
        if self._pending:
            logger.warning("Chat send ignored: a previous message is still pending.")
            return None

        generation = self._generation
        language = self.language
        user_message = _message(ChatRole.USER, text)
        self._messages.append(user_message)
        self._pending = True
        succeeded = False
        try:
            reply_text = await self.client.send_chat(
                self.config, list(self._history), text
            )
            reply = _message(ChatRole.MODEL, reply_text)
            succeeded = True
        except GeminiClientError as e:
            logger.error(f"Chat turn failed: {e}")
            reply = _message(ChatRole.MODEL, t(language, "chat_error"))
        finally:
            self._pending = False

        if generation != self._generation:
            logger.info("Chat reply discarded: session reseeded while it was pending.")
            return None
        if succeeded:
            self._history.extend([user_message, reply])
        self._messages.append(reply)
        return reply


# --- Typer CLI Application ---


chat_app = typer.Typer()


def _print_message(message: ChatMessage) -> None:
    if message.role == ChatRole.MODEL:
        console.print(Panel(message.text, title="Veritas Assistant", border_style="cyan"))
    else:
        console.print(f"[bold blue]You:[/bold blue] {message.text}")


@chat_app.command("start")
def start_chat(
    lang: str = typer.Option(
        CONFIG.default_language.value, "--lang", "-l", help="Conversation language (en or ru)."
    ),
):
    """
    Starts an interactive chat with the media-literacy assistant.
    Type '/lang <code>' to switch language or '/exit' to quit.
    """
    session = ChatSession(create_gemini_client(), lang)
    asyncio.run(_chat_loop(session))


async def _chat_loop(session: ChatSession) -> None:
    # The SDK's async transport is bound to the loop it was first used on.
    for message in session.messages:
        _print_message(message)

    while True:
        try:
            text = await asyncio.to_thread(typer.prompt, "", prompt_suffix="> ")
        except (EOFError, typer.Abort):
            break
        command = text.strip()
        if command in ("/exit", "/quit"):
            break
        if command.startswith("/lang"):
            previous = session.language
            session.set_language(command[len("/lang"):].strip())
            if session.language != previous:
                for message in session.messages:
                    _print_message(message)
            continue
        with console.status("[bold cyan]Thinking...[/bold cyan]"):
            reply = await session.send(text)
        if reply:
            _print_message(reply)
