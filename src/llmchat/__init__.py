"""
LLMChat: a terminal chat client for several LLM providers.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .config import ProviderConfig, SaveFormat, default_config
from .errors import ConfigValidationError, LLMChatError, ProviderError, TranscriptIOError
from .llm import ChatMessage, ProviderKind
from .session import ChatSession
from .transcript import TranscriptPersister

__all__ = [
    "ChatMessage",
    "ChatSession",
    "ConfigValidationError",
    "LLMChatError",
    "ProviderConfig",
    "ProviderError",
    "ProviderKind",
    "SaveFormat",
    "TranscriptIOError",
    "TranscriptPersister",
    "default_config",
]
