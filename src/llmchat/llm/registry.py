"""Provider and model registry.

Static lookup table of the models each provider offers in the settings
view. The first entry of each list is that provider's default model.
"""

from enum import Enum


class ProviderKind(str, Enum):
    """Supported LLM providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    DEEPSEEK = "deepseek"
    GEMINI = "gemini"

    def __str__(self) -> str:
        return self.value


AVAILABLE_MODELS: dict[ProviderKind, tuple[str, ...]] = {
    ProviderKind.ANTHROPIC: (
        "claude-3-7-sonnet-20250219",
        "claude-3-5-haiku-20241022",
        "claude-3-5-sonnet-20241022",
        "claude-3-5-sonnet-20240620",
        "claude-3-opus-20240229",
        "claude-3-sonnet-20240229",
        "claude-3-haiku-20240307",
    ),
    ProviderKind.OPENAI: (
        "gpt-4-turbo",
        "gpt-4o",
        "gpt-4",
        "gpt-3.5-turbo",
    ),
    ProviderKind.DEEPSEEK: (
        "deepseek-chat",
        "deepseek-reasoner",
    ),
    ProviderKind.GEMINI: (
        "gemini-2.5-flash",
        "gemini-2.5-pro",
    ),
}


def models_for(provider: ProviderKind | str) -> tuple[str, ...]:
    """Return the ordered model list for a provider.

    Raises:
        ValueError: If the provider is unknown
    """
    return AVAILABLE_MODELS[ProviderKind(provider)]


def default_model(provider: ProviderKind | str) -> str:
    """Return the first listed model of a provider."""
    return models_for(provider)[0]


def normalize_model(provider: ProviderKind | str, model: str | None) -> str:
    """Keep ``model`` if the provider offers it, else use the provider's default."""
    models = models_for(provider)
    if model in models:
        return model
    return models[0]
