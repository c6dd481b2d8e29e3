"""Unit tests for the transcript module."""
import json
import os
import stat
import tempfile
from datetime import datetime, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from llmchat.config import ProviderConfig, SaveFormat
from llmchat.errors import TranscriptIOError
from llmchat.llm import ChatMessage, ProviderKind
from llmchat.transcript import (
    JsonTranscriptEncoder,
    MarkdownTranscriptEncoder,
    TranscriptPersister,
    get_encoder,
    load_transcript,
    slugify,
    transcript_filename,
)
from llmchat.transcript.encoders import iso_timestamp

SAVED_AT = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)

messages_strategy = st.lists(
    st.builds(
        ChatMessage,
        role=st.sampled_from(["user", "assistant", "system"]),
        content=st.text(),
    ),
    max_size=8,
)


@pytest.fixture
def persister():
    """Persister with a fixed clock."""
    return TranscriptPersister(clock=lambda: SAVED_AT)


@pytest.fixture
def conversation():
    return [ChatMessage.user("Hi"), ChatMessage.assistant("Hello")]


def _config(save_dir, save_format=SaveFormat.JSON):
    return ProviderConfig(save_directory=save_dir, save_format=save_format)


class TestFilenames:
    """Tests for slugify and transcript_filename."""

    def test_slugify(self):
        """Test that non alphanumerics become dashes."""
        assert slugify("Demo") == "demo"
        assert slugify("My Chat: v2!") == "my-chat--v2-"

    @given(st.text())
    def test_slug_characters(self, title: str):
        """Property test: slugs only contain lower-case letters, digits and '-'."""
        assert all(c in "abcdefghijklmnopqrstuvwxyz0123456789-" for c in slugify(title))

    def test_iso_timestamp(self):
        """Test millisecond UTC timestamps."""
        assert iso_timestamp(SAVED_AT) == "2024-01-02T03:04:05.678Z"

    def test_filename_without_title(self):
        """Test the untitled filename."""
        assert transcript_filename(SAVED_AT, "json") == "2024-01-02T03-04-05-678Z-chat.json"

    def test_filename_with_title(self):
        """Test that the title slug sits between timestamp and suffix."""
        assert transcript_filename(SAVED_AT, "md", "Demo") == "2024-01-02T03-04-05-678Z-demo-chat.md"


class TestEncoders:
    """Tests for encoder selection."""

    def test_get_encoder(self):
        """Test format lookup."""
        assert isinstance(get_encoder(SaveFormat.MARKDOWN), MarkdownTranscriptEncoder)
        assert isinstance(get_encoder("json"), JsonTranscriptEncoder)

    @pytest.mark.parametrize("value", [None, "", "xml"])
    def test_unknown_format_is_json(self, value):
        """Test that missing or unknown formats are written as JSON."""
        assert isinstance(get_encoder(value), JsonTranscriptEncoder)


class TestJsonTranscript:
    """Tests for JSON transcripts."""

    def test_save_json(self, persister, conversation, save_dir):
        """Test the JSON document layout."""
        path = persister.save(conversation, _config(save_dir))

        assert path == save_dir / "2024-01-02T03-04-05-678Z-chat.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert list(data) == ["timestamp", "model", "provider", "messages"]
        assert data["timestamp"] == "2024-01-02T03:04:05.678Z"
        assert data["model"] == "claude-3-opus-20240229"
        assert data["provider"] == "anthropic"
        assert data["messages"] == [
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello"},
        ]

    def test_load_transcript(self, persister, conversation, save_dir):
        """Test that a saved JSON transcript reads back."""
        path = persister.save(conversation, _config(save_dir))
        transcript = load_transcript(path)

        assert transcript.messages == conversation
        assert transcript.provider == "anthropic"

    @given(messages_strategy, st.sampled_from(list(ProviderKind)))
    def test_round_trip(self, messages: list[ChatMessage], provider: ProviderKind):
        """Property test: any saved conversation reads back unchanged."""
        with tempfile.TemporaryDirectory() as directory:
            config = ProviderConfig(provider=provider, save_directory=directory)
            transcript = load_transcript(TranscriptPersister().save(messages, config))

        assert transcript.messages == messages
        assert transcript.provider == provider.value
        assert transcript.model == config.model

    def test_load_missing_file(self, tmp_path):
        """Test that a missing file raises TranscriptIOError."""
        with pytest.raises(TranscriptIOError, match="Failed to read chat"):
            load_transcript(tmp_path / "missing.json")

    def test_load_non_transcript(self, tmp_path):
        """Test that other JSON fails validation."""
        path = tmp_path / "other.json"
        path.write_text('{"hello": "world"}', encoding="utf-8")

        with pytest.raises(ValidationError):
            load_transcript(path)

    def test_load_non_utf8_file(self, tmp_path):
        """Test that undecodable bytes raise TranscriptIOError."""
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"timestamp": "\xff\xfe"}')

        with pytest.raises(TranscriptIOError, match="not UTF-8 text"):
            load_transcript(path)


class TestMarkdownTranscript:
    """Tests for Markdown transcripts."""

    def test_save_markdown_with_title(self, persister, conversation, save_dir):
        """Test a titled Markdown save."""
        path = persister.save(conversation, _config(save_dir, SaveFormat.MARKDOWN), "Demo")

        assert path.name.endswith("-demo-chat.md")
        content = path.read_text(encoding="utf-8")
        assert content.startswith("# Chat - ")
        assert "**Model**: claude-3-opus-20240229 (anthropic)" in content
        assert content.index("## User\n\nHi") < content.index("## Assistant\n\nHello")

    def test_system_sections_first(self, persister, save_dir):
        """Test that system messages lead the document."""
        conversation = [
            ChatMessage.user("Hi"),
            ChatMessage.system("Be brief."),
            ChatMessage.assistant("Hello"),
        ]
        path = persister.save(conversation, _config(save_dir, SaveFormat.MARKDOWN))
        content = path.read_text(encoding="utf-8")

        assert content.index("## System") < content.index("## User") < content.index("## Assistant")


class TestPersister:
    """Tests for TranscriptPersister file handling."""

    def test_creates_missing_directory(self, persister, conversation, tmp_path):
        """Test that nested save directories are created."""
        target = tmp_path / "a" / "b"
        path = persister.save(conversation, _config(target))

        assert path.parent == target
        assert path.exists()

    def test_no_overwrite_on_collision(self, persister, conversation, save_dir):
        """Test that two saves in the same millisecond produce two files."""
        first = persister.save(conversation, _config(save_dir))
        second = persister.save(conversation, _config(save_dir))

        assert first != second
        assert second.name == "2024-01-02T03-04-05-679Z-chat.json"
        assert first.exists() and second.exists()

    def test_no_temp_files_left(self, persister, conversation, save_dir):
        """Test that only the transcript remains after a save."""
        path = persister.save(conversation, _config(save_dir))
        assert list(save_dir.iterdir()) == [path]

    def test_file_mode_follows_umask(self, persister, conversation, save_dir):
        """Test that transcripts get the usual permissions, not owner-only."""
        previous = os.umask(0o022)
        try:
            path = persister.save(conversation, _config(save_dir))
        finally:
            os.umask(previous)

        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_unwritable_directory(self, persister, conversation, tmp_path):
        """Test that filesystem errors surface as TranscriptIOError."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(TranscriptIOError, match="Failed to save chat") as exc_info:
            persister.save(conversation, _config(blocker))

        assert isinstance(exc_info.value, OSError)

    def test_uses_environment_directory(self, clean_env, monkeypatch, persister, conversation, tmp_path):
        """Test that CHAT_SAVE_DIRECTORY is used when no directory is configured."""
        monkeypatch.setenv("CHAT_SAVE_DIRECTORY", str(tmp_path / "env-chats"))
        path = persister.save(conversation, ProviderConfig())

        assert path.parent == tmp_path / "env-chats"

    def test_default_directory(self, clean_env, persister, conversation):
        """Test that ./chats is used when nothing is configured."""
        path = persister.save(conversation, ProviderConfig())

        assert (clean_env / "chats" / path.name).exists()
