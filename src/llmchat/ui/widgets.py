"""Custom Textual widgets for the chat shell.

Hides widget implementation details:
- Input history management
- Chat message rendering
- Status bar formatting
"""

from textual.containers import Vertical, VerticalScroll
from textual.widgets import Input, Static

from ..config import ProviderConfig
from ..llm.models import ChatMessage
from .config import (
    EMPTY_CHAT_HINT,
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    ROLE_LABELS,
    THINKING_TEXT,
)


class MessageInput(Input):
    """Single-line message input with history support.

    Use Up/Down arrow keys to navigate through previously sent messages.
    Multi-line pastes are converted to single line (newlines become spaces).
    """

    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("placeholder", INPUT_PLACEHOLDER)
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_paste(self, event) -> None:
        from textual.events import Paste

        if isinstance(event, Paste) and event.text:
            self.insert_text_at_cursor(" ".join(event.text.split()))
            event.prevent_default()
            event.stop()

    def _on_key(self, event) -> None:
        if event.key == "up":
            if self._history:
                if self._history_index == -1:
                    self._current_input = self.value
                    self._history_index = len(self._history) - 1
                elif self._history_index > 0:
                    self._history_index -= 1
                self.value = self._history[self._history_index]
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()
        elif event.key == "down":
            if self._history_index != -1:
                if self._history_index < len(self._history) - 1:
                    self._history_index += 1
                    self.value = self._history[self._history_index]
                else:
                    self._history_index = -1
                    self.value = self._current_input
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()

    def add_to_history(self, text: str) -> None:
        """Remember a sent message."""
        if text and (not self._history or self._history[-1] != text):
            self._history.append(text)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self._current_input = ""


class MessageView(Vertical):
    """One message: a role label above the raw content."""

    def __init__(self, message: ChatMessage, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.message = message
        self.add_class(f"-{message.role}")

    def compose(self):
        yield Static(f"{ROLE_LABELS[self.message.role]}:", classes="message-role")
        yield Static(self.message.content, markup=False, classes="message-content")


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history with a thinking indicator."""

    BORDER_TITLE = "Chat"

    def compose(self):
        yield Static(EMPTY_CHAT_HINT, id="empty-hint")
        yield Static(THINKING_TEXT, id="thinking")

    def on_mount(self) -> None:
        self.query_one("#thinking", Static).display = False

    def add_message(self, message: ChatMessage) -> None:
        """Append a message above the thinking indicator."""
        self.query_one("#empty-hint", Static).display = False
        self.mount(MessageView(message), before=self.query_one("#thinking", Static))
        self.scroll_end(animate=False)

    def set_thinking(self, thinking: bool) -> None:
        self.query_one("#thinking", Static).display = thinking
        if thinking:
            self.scroll_end(animate=False)

    def clear_history(self) -> None:
        self.query(MessageView).remove()
        self.query_one("#empty-hint", Static).display = True

    @property
    def message_count(self) -> int:
        return len(self.query(MessageView))


class StatusBar(Static):
    """Current provider settings plus key hints."""

    HINTS = (
        "Press [bold green]Tab[/] to toggle settings | "
        "[bold red]Ctrl+S[/] to save chat | "
        "[bold red]Ctrl+C[/] to exit"
    )

    def show_config(self, config: ProviderConfig) -> None:
        self.update(
            f"Provider: [cyan]{config.provider.value}[/] | "
            f"Model: [cyan]{config.model}[/] | "
            f"Temp: [cyan]{config.temperature}[/] | "
            f"Max Tokens: [cyan]{config.max_tokens}[/]\n"
            f"{self.HINTS}"
        )
