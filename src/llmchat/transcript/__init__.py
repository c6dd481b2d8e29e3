"""Transcript persistence module.

Serializes a conversation plus the config it was held under into a
write-once JSON or Markdown file.
"""

from .encoders import (
    ENCODERS,
    JsonTranscriptEncoder,
    MarkdownTranscriptEncoder,
    TranscriptEncoder,
    get_encoder,
)
from .models import Transcript
from .persister import TranscriptPersister, load_transcript, slugify, transcript_filename

__all__ = [
    "ENCODERS",
    "JsonTranscriptEncoder",
    "MarkdownTranscriptEncoder",
    "Transcript",
    "TranscriptEncoder",
    "TranscriptPersister",
    "get_encoder",
    "load_transcript",
    "slugify",
    "transcript_filename",
]
