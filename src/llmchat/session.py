"""Chat session service.

Owns the live ProviderConfig and the provider binding built from it. The
conversation itself belongs to the caller and is passed in on every call.

Config updates issued while a send is in flight take effect for the next
send; the in-flight call finishes on the binding it started with. Bindings
replaced that way are closed once their last call returns. Idle bindings
are closed as soon as they are replaced.
"""

import asyncio
import logging
from collections import Counter
from pathlib import Path
from typing import Any

from .adapter import ProviderBinding, bind
from .config import NULLABLE_FIELDS, ProviderConfig, default_config, needs_rebind
from .llm.models import Conversation
from .transcript import TranscriptPersister

logger = logging.getLogger(__name__)


class ChatSession:
    """Config, provider binding and persistence for one chat.

    Supports async context manager protocol for proper resource cleanup:
        async with ChatSession(config) as session:
            reply = await session.send_message(messages)
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        persister: TranscriptPersister | None = None,
    ) -> None:
        self._config = config if config is not None else default_config()
        self._binding = bind(self._config)
        self._persister = persister or TranscriptPersister()
        self._in_flight: Counter[int] = Counter()
        self._retired: list[ProviderBinding] = []
        self._closing: set[asyncio.Task] = set()

    def get_config(self) -> ProviderConfig:
        """Return a snapshot of the live config."""
        return self._config.model_copy(deep=True)

    @property
    def binding(self) -> ProviderBinding:
        """The binding the next send will use."""
        return self._binding

    def update_config(self, **fields: Any) -> None:
        """Merge the given fields over the live config.

        Only fields passed explicitly change. ``None`` clears the optional
        fields (api_key, system_prompt, save_directory) and is ignored for the
        rest. Invalid temperature or max_tokens input falls back to the
        defaults. The provider binding is rebuilt only when a field it
        depends on changed.

        Raises:
            TypeError: If a field name is unknown
            pydantic.ValidationError: If the provider is unknown
            ProviderError: If the provider SDK rejects the new settings
        """
        changes = {
            name: value for name, value in fields.items()
            if value is not None or name in NULLABLE_FIELDS
        }
        new_config = self._config.merged(changes)

        if needs_rebind(self._config, new_config):
            binding = bind(new_config)
            self._retire(self._binding)
            self._binding = binding

        self._config = new_config
        logger.info(
            "Config updated: %s/%s, temperature=%s, max_tokens=%s, format=%s",
            new_config.provider.value,
            new_config.model,
            new_config.temperature,
            new_config.max_tokens,
            new_config.save_format.value,
        )

    async def send_message(self, conversation: Conversation) -> str:
        """Send the conversation and return the assistant reply.

        The caller appends the user message before calling and the reply
        after it returns; ``conversation`` is never modified here.

        Raises:
            ProviderError: On any failure talking to the provider
        """
        binding = self._binding
        config = self._config
        self._in_flight[id(binding)] += 1
        try:
            return await binding.complete(conversation, config)
        finally:
            self._in_flight[id(binding)] -= 1
            if not self._in_flight[id(binding)]:
                del self._in_flight[id(binding)]
            await self._close_idle_retired()

    def save_transcript(self, conversation: Conversation, title: str | None = None) -> Path:
        """Persist the conversation under the live config.

        Raises:
            TranscriptIOError: On any filesystem failure
        """
        return self._persister.save(conversation, self._config, title)

    async def aclose(self) -> None:
        """Close the current and all retired provider clients."""
        if self._closing:
            await asyncio.wait(list(self._closing))
        bindings = [*self._retired, self._binding]
        self._retired = []
        for binding in bindings:
            await self._close(binding)

    async def __aenter__(self) -> "ChatSession":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    def _retire(self, binding: ProviderBinding) -> None:
        if self._in_flight[id(binding)]:
            self._retired.append(binding)
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to close on; aclose picks it up
            self._retired.append(binding)
            return
        task = loop.create_task(self._close_quietly(binding))
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)

    async def _close_idle_retired(self) -> None:
        idle = [b for b in self._retired if not self._in_flight[id(b)]]
        self._retired = [b for b in self._retired if self._in_flight[id(b)]]
        for binding in idle:
            await self._close_quietly(binding)

    async def _close_quietly(self, binding: ProviderBinding) -> None:
        try:
            await self._close(binding)
        except Exception as e:
            logger.warning("Error closing retired %s client: %s", binding.provider.value, e)

    @staticmethod
    async def _close(binding: ProviderBinding) -> None:
        try:
            await binding.close()
        except RuntimeError as e:
            # Harmless httpx/anyio race when the loop is already shutting down
            if "Event loop is closed" not in str(e):
                raise
