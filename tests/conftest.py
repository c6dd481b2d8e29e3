"""Pytest configuration and shared fixtures."""
import asyncio
import os

import pytest

from llmchat.config import API_KEY_ENV_VARS, SAVE_DIRECTORY_ENV, SAVE_FORMAT_ENV
from llmchat.llm import ProviderKind, factory


class FakeClient:
    """In-memory provider client that records every call."""

    def __init__(self, api_key, model, temperature, max_tokens=None, **kwargs):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.kwargs = kwargs
        self.calls = []
        self.closed = False
        self.reply = "Hello from fake"
        self.error = None
        self.close_error = None
        self.gate: asyncio.Event | None = None

    async def complete(self, messages):
        self.calls.append(list(messages))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self):
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {kind.value: os.getenv(var) for kind, var in API_KEY_ENV_VARS.items()}


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Unset every variable llmchat reads and run inside a temp directory."""
    for var in [*API_KEY_ENV_VARS.values(), SAVE_DIRECTORY_ENV, SAVE_FORMAT_ENV]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_clients(monkeypatch, clean_env):
    """Route every provider to FakeClient; returns the clients in creation order."""
    created = []

    def make(**config):
        client = FakeClient(**config)
        created.append(client)
        return client

    for kind in ProviderKind:
        monkeypatch.setitem(factory.PROVIDER_CLIENTS, kind, make)
    return created


@pytest.fixture
def save_dir(tmp_path):
    """Directory transcripts are written to."""
    return tmp_path / "chats"
