from typing import Protocol, runtime_checkable

from .models import ChatMessage


@runtime_checkable
class ProviderClient(Protocol):
    """Completion capability of a single vendor SDK.

    This module hides the design decision of which LLM provider is used.
    A client is bound at construction to one model, temperature and output
    limit; implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request/response format conversion (system message handling)

    Clients raise whatever their SDK raises. Wrapping into ProviderError
    happens once, in the adapter.
    """

    async def complete(self, messages: list[ChatMessage]) -> str:
        """Send the conversation and return the completion text.

        Args:
            messages: Conversation history, system messages included

        Returns:
            Generated text content
        """
        ...

    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
