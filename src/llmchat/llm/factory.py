from typing import Any

from .base import ProviderClient
from .providers import AnthropicClient, DeepSeekClient, GeminiClient, OpenAIClient
from .registry import ProviderKind

# Dispatch table from provider tag to client class
PROVIDER_CLIENTS: dict[ProviderKind, type] = {
    ProviderKind.ANTHROPIC: AnthropicClient,
    ProviderKind.OPENAI: OpenAIClient,
    ProviderKind.DEEPSEEK: DeepSeekClient,
    ProviderKind.GEMINI: GeminiClient,
}


def create_llm_provider(provider: ProviderKind | str, **config: Any) -> ProviderClient:
    """Create a provider client instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type ('anthropic', 'openai', 'deepseek', 'gemini')
        **config: Client configuration
            - api_key: str (required)
            - model: str
            - temperature: float
            - max_tokens: int
            plus any client-specific keyword (base_url, organization, ...)

    Returns:
        Initialized provider client

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> client = create_llm_provider(
        ...     "anthropic",
        ...     api_key="sk-ant-...",
        ...     model="claude-3-5-haiku-20241022"
        ... )
    """
    try:
        kind = ProviderKind(provider.lower() if isinstance(provider, str) else provider)
    except ValueError:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(repr(k.value) for k in ProviderKind)}"
        ) from None

    if not config.get("api_key"):
        raise TypeError(f"{kind.value} provider requires 'api_key' in config")

    return PROVIDER_CLIENTS[kind](**config)
