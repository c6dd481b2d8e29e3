"""Error types raised by the chat core.

Every failure the UI shell has to display is one of these. Vendor SDK
exceptions and raw filesystem errors are wrapped at the module boundary
that produced them.
"""

from pathlib import Path


class LLMChatError(Exception):
    """Base class for all llmchat errors."""


class ProviderError(LLMChatError):
    """A provider call failed (network, authentication or request validation)."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"Failed to get response from {provider}: {message}")


class TranscriptIOError(LLMChatError, OSError):
    """Reading or writing a transcript file failed."""

    def __init__(self, path: str | Path, message: str, action: str = "save"):
        self.path = Path(path)
        self.message = message
        self.action = action
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"Failed to {self.action} chat {self.path}: {self.message}"


class ConfigValidationError(LLMChatError, ValueError):
    """A numeric config field received input that cannot be used.

    The config layer catches this and falls back to the field's default,
    so it never reaches the UI shell on its own.
    """

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for {field}: {value!r}")
