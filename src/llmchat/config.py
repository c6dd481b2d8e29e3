"""Provider configuration model and setting resolution.

Hides how a ProviderConfig is validated, how loose user input (the
settings view hands over raw strings) is coerced, and where settings that
were left blank are looked up.
"""

import logging
import math
import os
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import ConfigValidationError
from .llm.registry import ProviderKind, normalize_model

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PROVIDER = ProviderKind.ANTHROPIC
DEFAULT_MODEL = "claude-3-opus-20240229"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
DEFAULT_SYSTEM_PROMPT = "You are a helpful AI assistant."
DEFAULT_SAVE_DIRECTORY = Path("./chats")

SAVE_DIRECTORY_ENV = "CHAT_SAVE_DIRECTORY"
SAVE_FORMAT_ENV = "CHAT_SAVE_FORMAT"

API_KEY_ENV_VARS: dict[ProviderKind, str] = {
    ProviderKind.ANTHROPIC: "ANTHROPIC_API_KEY",
    ProviderKind.OPENAI: "OPENAI_API_KEY",
    ProviderKind.DEEPSEEK: "DEEPSEEK_API_KEY",
    ProviderKind.GEMINI: "GEMINI_API_KEY",
}

# Fields the network binding depends on. Changing any other field never
# rebuilds the provider client.
BINDING_FIELDS = ("provider", "model", "api_key", "temperature", "max_tokens")

# Optional fields where an explicit None (or blank string) means "unset".
NULLABLE_FIELDS = ("api_key", "system_prompt", "save_directory")


class SaveFormat(str, Enum):
    """On-disk transcript encodings."""

    JSON = "json"
    MARKDOWN = "markdown"

    @classmethod
    def parse(cls, value: Any) -> "SaveFormat":
        """Return the matching format, or JSON for anything unrecognized."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.JSON


def parse_temperature(value: Any) -> float:
    """Parse a sampling temperature.

    Raises:
        ConfigValidationError: If the value is not a finite, non-negative number
    """
    if isinstance(value, bool):
        raise ConfigValidationError("temperature", value)
    try:
        temperature = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ConfigValidationError("temperature", value) from None
    if not math.isfinite(temperature) or temperature < 0:
        raise ConfigValidationError("temperature", value)
    return temperature


def parse_max_tokens(value: Any) -> int:
    """Parse a maximum output token count.

    Raises:
        ConfigValidationError: If the value is not a positive whole number
    """
    if isinstance(value, bool):
        raise ConfigValidationError("max_tokens", value)
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigValidationError("max_tokens", value)
        value = int(value)
    try:
        max_tokens = int(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ConfigValidationError("max_tokens", value) from None
    if max_tokens <= 0:
        raise ConfigValidationError("max_tokens", value)
    return max_tokens


def resolve_setting(explicit: T | None, env_var: str, default: T) -> T | str:
    """Resolve a setting from its ordered sources.

    Order: the explicit value, then the environment variable, then the
    default. Empty strings count as unset.
    """
    if explicit is not None and explicit != "":
        return explicit
    from_env = os.getenv(env_var)
    if from_env:
        return from_env
    return default


class ProviderConfig(BaseModel):
    """Complete configuration of a chat session.

    Instances are immutable; updates go through ``merged`` which always
    builds a fresh, independently validated object.
    """

    model_config = ConfigDict(frozen=True)

    provider: ProviderKind = Field(default=DEFAULT_PROVIDER, description="LLM provider")
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier offered by the provider")
    api_key: str | None = Field(
        default=None,
        repr=False,
        description="Explicit credential; falls back to the provider's env variable",
    )
    temperature: float = Field(default=DEFAULT_TEMPERATURE, description="Sampling temperature")
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, description="Maximum output tokens")
    system_prompt: str | None = Field(default=DEFAULT_SYSTEM_PROMPT)
    save_directory: Path | None = Field(
        default=None,
        description="Transcript directory; falls back to CHAT_SAVE_DIRECTORY, then ./chats",
    )
    save_format: SaveFormat = Field(default=SaveFormat.JSON)

    @model_validator(mode="before")
    @classmethod
    def _normalize_model(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        provider = data.get("provider", DEFAULT_PROVIDER)
        try:
            kind = ProviderKind(provider)
        except ValueError:
            return data  # field validation reports the bad provider
        model = data.get("model", DEFAULT_MODEL)
        normalized = normalize_model(kind, model)
        if normalized != model:
            logger.info("Model %r not offered by %s, using %s", model, kind.value, normalized)
        return {**data, "model": normalized}

    @field_validator("temperature", mode="before")
    @classmethod
    def _coerce_temperature(cls, value: Any) -> float:
        try:
            return parse_temperature(value)
        except ConfigValidationError as e:
            logger.warning("%s, using %s", e, DEFAULT_TEMPERATURE)
            return DEFAULT_TEMPERATURE

    @field_validator("max_tokens", mode="before")
    @classmethod
    def _coerce_max_tokens(cls, value: Any) -> int:
        try:
            return parse_max_tokens(value)
        except ConfigValidationError as e:
            logger.warning("%s, using %s", e, DEFAULT_MAX_TOKENS)
            return DEFAULT_MAX_TOKENS

    @field_validator("save_format", mode="before")
    @classmethod
    def _coerce_save_format(cls, value: Any) -> SaveFormat:
        return SaveFormat.parse(value)

    @field_validator("api_key", "system_prompt", "save_directory", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def merged(self, changes: dict[str, Any]) -> "ProviderConfig":
        """Return a new config with ``changes`` applied over this one.

        Raises:
            TypeError: If ``changes`` names a field that does not exist
            pydantic.ValidationError: If the provider is unknown
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise TypeError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        return type(self).model_validate({**self.model_dump(), **changes})

    def binding_key(self) -> tuple[Any, ...]:
        """Values the provider binding is built from."""
        return tuple(getattr(self, name) for name in BINDING_FIELDS)

    def resolve_api_key(self) -> str | None:
        """Explicit key, else the provider's environment variable, else None."""
        return resolve_setting(self.api_key, API_KEY_ENV_VARS[self.provider], None)

    def resolve_save_directory(self) -> Path:
        """Explicit directory, else CHAT_SAVE_DIRECTORY, else ./chats."""
        return Path(resolve_setting(self.save_directory, SAVE_DIRECTORY_ENV, DEFAULT_SAVE_DIRECTORY))


def needs_rebind(old: ProviderConfig, new: ProviderConfig) -> bool:
    """Whether moving from ``old`` to ``new`` requires a new provider client."""
    return old.binding_key() != new.binding_key()


def default_config(**overrides: Any) -> ProviderConfig:
    """Build the start-up configuration.

    Save directory and format come from ``CHAT_SAVE_DIRECTORY`` and
    ``CHAT_SAVE_FORMAT`` when set; ``overrides`` win over both.
    """
    base: dict[str, Any] = {
        "save_directory": os.getenv(SAVE_DIRECTORY_ENV) or None,
        "save_format": SaveFormat.parse(os.getenv(SAVE_FORMAT_ENV)),
    }
    base.update({k: v for k, v in overrides.items() if v is not None})
    return ProviderConfig.model_validate(base)
