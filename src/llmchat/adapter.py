"""Provider client adapter.

Hides how a ProviderConfig turns into a live vendor client, how the
configured system prompt is injected into a call, and how vendor failures
are reported. Callers only ever see ``str`` replies or ProviderError.
"""

import logging
from dataclasses import dataclass

from .config import API_KEY_ENV_VARS, ProviderConfig
from .errors import ProviderError
from .llm import ChatMessage, Conversation, ProviderClient, ProviderKind, create_llm_provider

logger = logging.getLogger(__name__)


def with_system_prompt(conversation: Conversation, system_prompt: str | None) -> list[ChatMessage]:
    """Return the messages to send for one call.

    The system prompt is prepended only when it is set and the conversation
    has no system message of its own. The input sequence is left untouched.
    """
    messages = list(conversation)
    if system_prompt and not any(msg.role == "system" for msg in messages):
        messages.insert(0, ChatMessage.system(system_prompt))
    return messages


@dataclass(frozen=True, eq=False)
class ProviderBinding:
    """A provider tag bound to the vendor client built for one config.

    ``client`` is None when no credential could be resolved; every call
    then fails with ProviderError instead of reaching the network.
    """

    provider: ProviderKind
    model: str
    temperature: float
    max_tokens: int
    client: ProviderClient | None

    async def complete(self, conversation: Conversation, config: ProviderConfig) -> str:
        """Send ``conversation`` with ``config``'s system prompt.

        Raises:
            ProviderError: On any failure talking to the provider
        """
        if self.client is None:
            raise ProviderError(
                self.provider.value,
                f"no API key configured (set it in settings or {API_KEY_ENV_VARS[self.provider]})",
            )

        messages = with_system_prompt(conversation, config.system_prompt)
        logger.debug(
            "Sending %d message(s) to %s/%s", len(messages), self.provider.value, self.model
        )
        try:
            return await self.client.complete(messages)
        except ProviderError:
            raise
        except Exception as e:
            logger.error("Error calling %s: %s", self.provider.value, e)
            raise ProviderError(self.provider.value, str(e) or type(e).__name__) from e

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()


def bind(config: ProviderConfig) -> ProviderBinding:
    """Build the provider binding for ``config``.

    The credential is resolved here, once: explicit value, then the
    provider's environment variable.

    Raises:
        ProviderError: If the vendor SDK rejects the client settings
    """
    api_key = config.resolve_api_key()
    client = None
    if api_key:
        try:
            client = create_llm_provider(
                config.provider,
                api_key=api_key,
                model=config.model,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
            )
        except Exception as e:
            raise ProviderError(config.provider.value, str(e)) from e
    else:
        logger.warning("No API key for %s, requests will fail until one is set", config.provider.value)

    logger.info(
        "Bound %s/%s (temperature=%s, max_tokens=%s)",
        config.provider.value, config.model, config.temperature, config.max_tokens,
    )
    return ProviderBinding(
        provider=config.provider,
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        client=client,
    )


async def complete(conversation: Conversation, config: ProviderConfig) -> str:
    """One-shot completion: bind ``config``, send, and release the client.

    Raises:
        ProviderError: On any failure talking to the provider
    """
    binding = bind(config)
    try:
        return await binding.complete(conversation, config)
    finally:
        await binding.close()
