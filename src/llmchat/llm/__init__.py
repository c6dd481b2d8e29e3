from .base import ProviderClient
from .factory import PROVIDER_CLIENTS, create_llm_provider
from .models import ChatMessage, Conversation
from .providers import AnthropicClient, DeepSeekClient, GeminiClient, OpenAIClient
from .registry import AVAILABLE_MODELS, ProviderKind, default_model, models_for, normalize_model

__all__ = [
    "AVAILABLE_MODELS",
    "PROVIDER_CLIENTS",
    "AnthropicClient",
    "ChatMessage",
    "Conversation",
    "DeepSeekClient",
    "GeminiClient",
    "OpenAIClient",
    "ProviderClient",
    "ProviderKind",
    "create_llm_provider",
    "default_model",
    "models_for",
    "normalize_model",
]
