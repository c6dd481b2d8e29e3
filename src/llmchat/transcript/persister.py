"""Transcript persistence.

Writes one file per save into the resolved save directory. Files are
write-once: a save never replaces an existing transcript.
"""

import logging
import re
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

from ..config import ProviderConfig
from ..errors import TranscriptIOError
from ..llm.models import Conversation
from .encoders import get_encoder, iso_timestamp
from .models import Transcript

logger = logging.getLogger(__name__)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]")


def slugify(title: str) -> str:
    """Lower-case ``title`` and replace every character outside [a-z0-9] with '-'."""
    return _NON_SLUG_CHARS.sub("-", title.lower())


def transcript_filename(saved_at: datetime, extension: str, title: str | None = None) -> str:
    """Build ``<timestamp>[-<slug>]-chat.<extension>``.

    ':' and '.' in the ISO timestamp become '-' so the name is portable.
    """
    stamp = iso_timestamp(saved_at).replace(":", "-").replace(".", "-")
    slug = f"-{slugify(title)}" if title else ""
    return f"{stamp}{slug}-chat.{extension}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TranscriptPersister:
    """Saves conversations as JSON or Markdown transcripts."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock

    def save(
        self,
        conversation: Conversation,
        config: ProviderConfig,
        title: str | None = None,
    ) -> Path:
        """Write ``conversation`` to a new transcript file.

        Args:
            conversation: Messages to persist, in order
            config: Live config; decides directory, format, provider and model
            title: Optional title, slugified into the filename

        Returns:
            Path of the written file

        Raises:
            TranscriptIOError: On any filesystem failure
        """
        encoder = get_encoder(config.save_format)
        directory = config.resolve_save_directory()
        saved_at = self._clock()
        path = directory / transcript_filename(saved_at, encoder.extension, title)

        try:
            directory.mkdir(parents=True, exist_ok=True)
            # Two saves in the same millisecond must not collide
            while path.exists():
                saved_at += timedelta(milliseconds=1)
                path = directory / transcript_filename(saved_at, encoder.extension, title)
            content = encoder.encode(conversation, config, saved_at)
            _atomic_write(path, content)
        except OSError as e:
            logger.error("Error saving chat to %s: %s", path, e)
            raise TranscriptIOError(path, e.strerror or str(e)) from e

        logger.info("Saved %d message(s) to %s", len(conversation), path)
        return path


def _atomic_write(path: Path, content: str) -> None:
    """Write ``content`` to a temp file beside ``path``, then rename it into place."""
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_text(content, encoding="utf-8")
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def load_transcript(path: str | Path) -> Transcript:
    """Read a JSON transcript back.

    Raises:
        TranscriptIOError: If the file cannot be read or is not UTF-8 text
        pydantic.ValidationError: If the file is not a JSON transcript
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TranscriptIOError(path, e.strerror or str(e), action="read") from e
    except UnicodeDecodeError as e:
        raise TranscriptIOError(path, "not UTF-8 text", action="read") from e
    return Transcript.model_validate_json(raw)
