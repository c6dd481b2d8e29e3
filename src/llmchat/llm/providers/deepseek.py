from typing import Any

from openai import AsyncOpenAI

from ..models import ChatMessage


class DeepSeekClient:
    """DeepSeek provider client using the OpenAI-compatible API.

    Hidden design decisions:
    - DeepSeek API client initialization (via OpenAI SDK)
    - Message format conversion
    """

    def __init__(
        self,
        api_key: str,
        model: str = "deepseek-chat",
        temperature: float = 0.7,
        max_tokens: int | None = None,
        base_url: str = "https://api.deepseek.com",
        **client_kwargs: Any
    ):
        """Initialize DeepSeek client.

        Args:
            api_key: DeepSeek API key
            model: 'deepseek-chat' or 'deepseek-reasoner'
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            base_url: DeepSeek API base URL (default: https://api.deepseek.com)
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, messages: list[ChatMessage]) -> str:
        deepseek_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        request_params: dict[str, Any] = {
            "model": self._model,
            "messages": deepseek_messages,
            "temperature": self._temperature,
        }
        if self._max_tokens is not None:
            request_params["max_tokens"] = self._max_tokens

        completion = await self._client.chat.completions.create(**request_params)
        return completion.choices[0].message.content or ""

    async def close(self) -> None:
        """Close the DeepSeek client.

        Note: Uses the OpenAI SDK's async client for cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        await self._client.close()
