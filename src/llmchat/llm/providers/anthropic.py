"""Anthropic Claude provider client.

Uses the official Anthropic Python SDK for async chat completions.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

from typing import Any

from anthropic import AsyncAnthropic

from ..models import ChatMessage


class AnthropicClient:
    """Anthropic Claude provider client.

    Hidden design decisions:
    - Anthropic API client initialization
    - Message format conversion (system messages go into ``system``)
    - Joining of content blocks into one reply
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-opus-20240229",
        temperature: float = 0.7,
        max_tokens: int = 1000,
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize Anthropic client.

        Args:
            api_key: Anthropic API key
            model: Model every request is sent to
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (required by the API)
            base_url: Optional custom API base URL
            **client_kwargs: Additional kwargs for AsyncAnthropic client
        """
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, messages: list[ChatMessage]) -> str:
        # Anthropic takes the system prompt out of band
        system_parts = []
        anthropic_messages = []

        for msg in messages:
            if msg.role == "system":
                system_parts.append(msg.content)
            else:
                anthropic_messages.append({
                    "role": msg.role,
                    "content": msg.content
                })

        request_params: dict[str, Any] = {
            "model": self._model,
            "messages": anthropic_messages,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

        if system_parts:
            request_params["system"] = "\n\n".join(system_parts)

        response = await self._client.messages.create(**request_params)

        # Handle multiple content blocks
        content = ""
        for block in response.content:
            if hasattr(block, "text"):
                content += block.text

        return content

    async def close(self) -> None:
        await self._client.close()
