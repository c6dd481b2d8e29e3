"""Main Textual chat application.

Holds the conversation, forwards user actions to the ChatSession and
re-renders from the results.
"""

import asyncio
import logging
from typing import Any

from rich.markup import escape
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input

from ..errors import LLMChatError, ProviderError, TranscriptIOError
from ..llm.models import ChatMessage
from ..session import ChatSession
from .config import APP_TITLE, ERROR_TIMEOUT, SAVE_STATUS_TIMEOUT
from .screens import SaveTitleScreen, SettingsScreen
from .styles import APP_CSS
from .widgets import ChatHistoryWidget, MessageInput, StatusBar

logger = logging.getLogger(__name__)


class ChatApp(App):
    """Textual TUI for chatting with an LLM provider."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("tab", "toggle_settings", "Settings", priority=True),
        Binding("ctrl+s", "save_chat", "Save Chat", priority=True),
        Binding("ctrl+t", "save_chat_titled", "Save As"),
    ]

    def __init__(self, session: ChatSession) -> None:
        super().__init__()
        self.session = session
        self.messages: list[ChatMessage] = []
        self._sending = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield ChatHistoryWidget(id="chat-history")
        yield MessageInput(id="message-input")
        yield StatusBar(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.theme = "catppuccin-mocha"
        self._refresh_config()
        self.query_one("#message-input", MessageInput).focus()

    def _refresh_config(self) -> None:
        config = self.session.get_config()
        self.sub_title = f"{config.provider.value} - {config.model}"
        history = self.query_one("#chat-history", ChatHistoryWidget)
        history.border_subtitle = (
            f"System prompt: {escape(config.system_prompt)}" if config.system_prompt else ""
        )
        self.query_one("#status-bar", StatusBar).show_config(config)

    @property
    def on_chat_view(self) -> bool:
        return len(self.screen_stack) == 1

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle message submission from the chat input."""
        if event.input.id != "message-input":
            return
        text = event.value
        if not text.strip():
            return
        if self._sending:
            self.notify("Assistant is still responding", severity="warning", timeout=2)
            return

        message_input = self.query_one("#message-input", MessageInput)
        message_input.add_to_history(text)
        message_input.value = ""

        user_message = ChatMessage.user(text)
        self.messages.append(user_message)
        history = self.query_one("#chat-history", ChatHistoryWidget)
        history.add_message(user_message)
        history.set_thinking(True)

        self._sending = True
        self._send(list(self.messages))

    @work(exclusive=True, group="send")
    async def _send(self, conversation: list[ChatMessage]) -> None:
        """Ask the provider for a reply as a background async worker."""
        history = self.query_one("#chat-history", ChatHistoryWidget)
        try:
            reply = await self.session.send_message(conversation)
        except ProviderError as e:
            self.notify(escape(str(e)), title="Error", severity="error", timeout=ERROR_TIMEOUT)
        except asyncio.CancelledError:
            self.notify("Cancelled", severity="warning", timeout=2)
            raise
        else:
            assistant_message = ChatMessage.assistant(reply)
            self.messages.append(assistant_message)
            history.add_message(assistant_message)
        finally:
            self._sending = False
            history.set_thinking(False)

    def action_toggle_settings(self) -> None:
        """Open the settings view, or apply it when already open."""
        if isinstance(self.screen, SettingsScreen):
            self.screen.action_apply()
        elif self.on_chat_view:
            self.push_screen(SettingsScreen(self.session.get_config()), self._apply_settings)

    def _apply_settings(self, values: dict[str, Any] | None) -> None:
        if values is None:
            return
        try:
            self.session.update_config(**values)
        except (LLMChatError, ValueError) as e:
            logger.error("Settings rejected: %s", e)
            self.notify(f"Settings not applied: {escape(str(e))}", severity="error", timeout=ERROR_TIMEOUT)
            return
        self._refresh_config()
        self.notify("Settings saved", timeout=2)

    def action_save_chat(self) -> None:
        """Save the conversation without a title."""
        if isinstance(self.screen, SettingsScreen):
            self.screen.action_apply()
        elif self.on_chat_view:
            self._save(None)

    def action_save_chat_titled(self) -> None:
        """Ask for a title, then save the conversation."""
        if not self.on_chat_view:
            return
        if not self.messages:
            self.notify("No messages to save", timeout=SAVE_STATUS_TIMEOUT)
            return

        def _on_title(title: str | None) -> None:
            if title is not None:
                self._save(title or None)

        self.push_screen(SaveTitleScreen(), _on_title)

    def _save(self, title: str | None) -> None:
        if not self.messages:
            self.notify("No messages to save", timeout=SAVE_STATUS_TIMEOUT)
            return
        try:
            path = self.session.save_transcript(self.messages, title)
        except TranscriptIOError as e:
            self.notify(f"Error saving chat: {escape(str(e))}", severity="error", timeout=ERROR_TIMEOUT)
            return
        self.notify(f"Chat saved to: {escape(str(path))}", timeout=SAVE_STATUS_TIMEOUT)


async def run_chat_tui(session: ChatSession) -> None:
    """Run the Textual TUI, closing the session's provider clients on exit."""
    app = ChatApp(session)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await session.aclose()
