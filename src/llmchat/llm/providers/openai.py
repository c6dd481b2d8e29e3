from typing import Any

from openai import AsyncOpenAI

from ..models import ChatMessage


class OpenAIClient:
    """OpenAI provider client.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4-turbo",
        temperature: float = 0.7,
        max_tokens: int | None = None,
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Model every request is sent to
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (None leaves it to the API)
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, messages: list[ChatMessage]) -> str:
        openai_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        # Only include max_tokens if set
        request_params: dict[str, Any] = {
            "model": self._model,
            "messages": openai_messages,
            "temperature": self._temperature,
        }
        if self._max_tokens is not None:
            request_params["max_tokens"] = self._max_tokens

        completion = await self._client.chat.completions.create(**request_params)
        return completion.choices[0].message.content or ""

    async def close(self) -> None:
        await self._client.close()
