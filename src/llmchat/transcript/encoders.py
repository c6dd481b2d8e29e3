"""Transcript encoders.

This module hides the on-disk layout of each transcript format. Adding a
format means adding an encoder here and registering it in ``ENCODERS``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from ..config import ProviderConfig, SaveFormat
from ..llm.models import ChatMessage, Conversation
from .models import Transcript

ROLE_TITLES = {
    "system": "System",
    "user": "User",
    "assistant": "Assistant",
}


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def display_timestamp(moment: datetime) -> str:
    """Local, human readable time for document headings."""
    return moment.astimezone().strftime("%Y-%m-%d %H:%M:%S")


class TranscriptEncoder(ABC):
    """Serializes a conversation plus its originating config."""

    format: SaveFormat
    extension: str

    @abstractmethod
    def encode(self, conversation: Conversation, config: ProviderConfig, saved_at: datetime) -> str:
        """Return the full file content."""


class JsonTranscriptEncoder(TranscriptEncoder):
    format = SaveFormat.JSON
    extension = "json"

    def encode(self, conversation: Conversation, config: ProviderConfig, saved_at: datetime) -> str:
        transcript = Transcript(
            timestamp=iso_timestamp(saved_at),
            model=config.model,
            provider=config.provider.value,
            messages=list(conversation),
        )
        return transcript.model_dump_json(indent=2)


class MarkdownTranscriptEncoder(TranscriptEncoder):
    format = SaveFormat.MARKDOWN
    extension = "md"

    def encode(self, conversation: Conversation, config: ProviderConfig, saved_at: datetime) -> str:
        lines = [
            f"# Chat - {display_timestamp(saved_at)}\n\n",
            f"**Model**: {config.model} ({config.provider.value})\n\n",
            "---\n\n",
        ]
        for msg in self._ordered(conversation):
            lines.append(f"## {ROLE_TITLES[msg.role]}\n\n{msg.content}\n\n---\n\n")
        return "".join(lines)

    @staticmethod
    def _ordered(conversation: Conversation) -> list[ChatMessage]:
        # System sections lead; everything else keeps conversation order
        system = [msg for msg in conversation if msg.role == "system"]
        rest = [msg for msg in conversation if msg.role != "system"]
        return system + rest


ENCODERS: dict[SaveFormat, TranscriptEncoder] = {
    SaveFormat.JSON: JsonTranscriptEncoder(),
    SaveFormat.MARKDOWN: MarkdownTranscriptEncoder(),
}


def get_encoder(save_format: object) -> TranscriptEncoder:
    """Encoder for ``save_format``; JSON for anything unrecognized or missing."""
    return ENCODERS[SaveFormat.parse(save_format)]
