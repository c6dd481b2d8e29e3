"""Screens for the chat shell.

This module hides the design decisions about:
- How the settings form is laid out and navigated
- How the save dialog asks for a title
- Keyboard shortcuts inside each screen

Screens never talk to the session directly. They dismiss with the values
the user entered and the app applies them.
"""

from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Input, Label, Select, Static

from ..config import ProviderConfig, SaveFormat
from ..llm.registry import ProviderKind, models_for
from .config import API_KEY_FROM_ENV


def _options(values: tuple[str, ...] | list[str]) -> list[tuple[str, str]]:
    return [(value, value) for value in values]


class SettingsScreen(Screen[dict[str, Any] | None]):
    """Full-screen settings form.

    Dismisses with the raw field values (temperature and max tokens as the
    typed strings) or None when cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__()
        self._config = config

    def compose(self) -> ComposeResult:
        config = self._config
        with VerticalScroll(id="settings-form"):
            yield Static("LLM Settings", id="settings-title")

            yield Label("Provider:", classes="field-label")
            yield Select(
                _options([kind.value for kind in ProviderKind]),
                value=config.provider.value,
                allow_blank=False,
                id="provider",
            )

            yield Label("Model:", classes="field-label")
            yield Select(
                _options(models_for(config.provider)),
                value=config.model,
                allow_blank=False,
                id="model",
            )

            yield Label("API Key:", classes="field-label")
            yield Input(
                value=config.api_key or "",
                password=True,
                placeholder=f"Enter API key (or leave blank: {API_KEY_FROM_ENV.lower()})",
                id="api_key",
            )

            yield Label("Temperature:", classes="field-label")
            yield Input(
                value=str(config.temperature),
                placeholder="Enter temperature (0.0-1.0)",
                id="temperature",
            )

            yield Label("Max Tokens:", classes="field-label")
            yield Input(
                value=str(config.max_tokens),
                placeholder="Enter max output tokens",
                id="max_tokens",
            )

            yield Label("System Prompt:", classes="field-label")
            yield Input(
                value=config.system_prompt or "",
                placeholder="Enter system prompt",
                id="system_prompt",
            )

            yield Label("Save Format:", classes="field-label")
            yield Select(
                _options([fmt.value for fmt in SaveFormat]),
                value=config.save_format.value,
                allow_blank=False,
                id="save_format",
            )

            with Horizontal(id="settings-buttons"):
                yield Button("Save", id="settings-save", variant="success")
                yield Button("Cancel", id="settings-cancel", variant="error")

            yield Static(
                "Enter moves to the next field. Tab or Ctrl+S saves, Escape cancels.",
                id="settings-hint",
            )

    def on_mount(self) -> None:
        self.query_one("#provider", Select).focus()

    def on_select_changed(self, event: Select.Changed) -> None:
        """Keep the model list in step with the selected provider."""
        if event.select.id != "provider" or event.value is Select.BLANK:
            return
        models = models_for(str(event.value))
        model_select = self.query_one("#model", Select)
        current = model_select.value
        model_select.set_options(_options(models))
        model_select.value = current if current in models else models[0]

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.focus_next()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "settings-save":
            self.action_apply()
        elif event.button.id == "settings-cancel":
            self.action_cancel()

    def values(self) -> dict[str, Any]:
        """Current form values, keyed by config field."""
        return {
            "provider": self.query_one("#provider", Select).value,
            "model": self.query_one("#model", Select).value,
            "api_key": self.query_one("#api_key", Input).value,
            "temperature": self.query_one("#temperature", Input).value,
            "max_tokens": self.query_one("#max_tokens", Input).value,
            "system_prompt": self.query_one("#system_prompt", Input).value,
            "save_format": self.query_one("#save_format", Select).value,
        }

    def action_apply(self) -> None:
        self.dismiss(self.values())

    def action_cancel(self) -> None:
        self.dismiss(None)


class SaveTitleScreen(ModalScreen[str | None]):
    """Modal dialog asking for an optional transcript title.

    Dismisses with the title ("" for none) or None when cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="save-dialog"):
            yield Static("Save Chat", id="save-title")
            yield Input(placeholder="Title (optional)", id="save-title-input")
            with Horizontal(id="save-buttons"):
                yield Button("Save", id="btn-save", variant="success")
                yield Button("Cancel", id="btn-cancel", variant="error")

    def on_mount(self) -> None:
        self.query_one("#save-title-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value.strip())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            self.dismiss(self.query_one("#save-title-input", Input).value.strip())
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
