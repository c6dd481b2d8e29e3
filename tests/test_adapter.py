"""Unit tests for the provider adapter."""
import pytest

from llmchat import adapter
from llmchat.adapter import ProviderBinding, bind, with_system_prompt
from llmchat.config import ProviderConfig
from llmchat.errors import ProviderError
from llmchat.llm import ChatMessage, ProviderKind, factory


class TestSystemPrompt:
    """Tests for with_system_prompt."""

    def test_prompt_prepended(self):
        """Test that the configured prompt leads the request."""
        conversation = (ChatMessage.user("Hi"),)
        messages = with_system_prompt(conversation, "Be brief.")

        assert messages == [ChatMessage.system("Be brief."), ChatMessage.user("Hi")]
        assert conversation == (ChatMessage.user("Hi"),)

    def test_input_list_not_modified(self):
        """Test that the caller's list is left as it was."""
        conversation = [ChatMessage.user("Hi")]
        with_system_prompt(conversation, "Be brief.")

        assert conversation == [ChatMessage.user("Hi")]

    def test_existing_system_message_wins(self):
        """Test that a conversation with its own system message is sent as-is."""
        conversation = [ChatMessage.user("Hi"), ChatMessage.system("Talk like a pirate.")]
        assert with_system_prompt(conversation, "Be brief.") == conversation

    @pytest.mark.parametrize("prompt", [None, ""])
    def test_no_prompt(self, prompt):
        """Test that an unset prompt adds nothing."""
        conversation = [ChatMessage.user("Hi")]
        assert with_system_prompt(conversation, prompt) == conversation


class TestBind:
    """Tests for bind."""

    def test_bind_uses_config(self, fake_clients):
        """Test that the client is built from the config values."""
        config = ProviderConfig(
            provider="openai", model="gpt-4o", api_key="sk-test", temperature=0.2, max_tokens=64
        )
        binding = bind(config)

        assert binding.provider == ProviderKind.OPENAI
        assert binding.model == "gpt-4o"
        client = fake_clients[0]
        assert binding.client is client
        assert (client.api_key, client.model, client.temperature, client.max_tokens) == (
            "sk-test", "gpt-4o", 0.2, 64
        )

    def test_bind_reads_environment_key(self, fake_clients, monkeypatch):
        """Test that a blank key falls back to the provider's variable."""
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-env")
        bind(ProviderConfig(provider="deepseek"))

        assert fake_clients[0].api_key == "sk-env"

    def test_bind_without_key(self, fake_clients):
        """Test that no credential gives a binding without client."""
        binding = bind(ProviderConfig())

        assert binding.client is None
        assert fake_clients == []

    def test_sdk_construction_error_wrapped(self, clean_env, monkeypatch):
        """Test that SDK constructor failures surface as ProviderError."""
        def broken(**config):
            raise ValueError("bad base url")

        monkeypatch.setitem(factory.PROVIDER_CLIENTS, ProviderKind.ANTHROPIC, broken)

        with pytest.raises(ProviderError, match="bad base url"):
            bind(ProviderConfig(api_key="sk-test"))


class TestBindingComplete:
    """Tests for ProviderBinding.complete."""

    @pytest.mark.asyncio
    async def test_complete_returns_reply(self, fake_clients):
        """Test a successful call with the system prompt prepended."""
        config = ProviderConfig(api_key="sk-test", system_prompt="Be brief.")
        binding = bind(config)

        reply = await binding.complete([ChatMessage.user("Hi")], config)

        assert reply == "Hello from fake"
        assert fake_clients[0].calls == [
            [ChatMessage.system("Be brief."), ChatMessage.user("Hi")]
        ]

    @pytest.mark.asyncio
    async def test_missing_key_fails_every_call(self, clean_env):
        """Test that a binding without client raises ProviderError."""
        config = ProviderConfig(provider="gemini")
        binding = bind(config)

        with pytest.raises(ProviderError) as exc_info:
            await binding.complete([ChatMessage.user("Hi")], config)

        assert exc_info.value.provider == "gemini"
        assert "GEMINI_API_KEY" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_vendor_error_wrapped(self, fake_clients):
        """Test that vendor exceptions become ProviderError with the vendor message."""
        config = ProviderConfig(api_key="sk-test")
        binding = bind(config)
        original = RuntimeError("rate limited")
        fake_clients[0].error = original

        with pytest.raises(ProviderError) as exc_info:
            await binding.complete([ChatMessage.user("Hi")], config)

        assert str(exc_info.value) == "Failed to get response from anthropic: rate limited"
        assert exc_info.value.__cause__ is original

    @pytest.mark.asyncio
    async def test_empty_vendor_message_uses_type_name(self, fake_clients):
        """Test that a message-less exception still produces a readable error."""
        config = ProviderConfig(api_key="sk-test")
        binding = bind(config)
        fake_clients[0].error = TimeoutError()

        with pytest.raises(ProviderError, match="TimeoutError"):
            await binding.complete([ChatMessage.user("Hi")], config)

    @pytest.mark.asyncio
    async def test_close(self, fake_clients):
        """Test that closing the binding closes its client."""
        binding = bind(ProviderConfig(api_key="sk-test"))
        await binding.close()

        assert fake_clients[0].closed

    @pytest.mark.asyncio
    async def test_close_without_client(self):
        """Test that a client-less binding closes quietly."""
        binding = ProviderBinding(ProviderKind.OPENAI, "gpt-4o", 0.7, 1000, None)
        await binding.close()


class TestOneShotComplete:
    """Tests for the module level complete helper."""

    @pytest.mark.asyncio
    async def test_complete_closes_client(self, fake_clients):
        """Test that a one-shot call releases its client."""
        config = ProviderConfig(api_key="sk-test")
        reply = await adapter.complete([ChatMessage.user("Hi")], config)

        assert reply == "Hello from fake"
        assert fake_clients[0].closed

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_complete_real_api(self, api_keys):
        """Integration test: real Anthropic call (requires API key)."""
        if not api_keys["anthropic"]:
            pytest.skip("ANTHROPIC_API_KEY not set")

        config = ProviderConfig(
            api_key=api_keys["anthropic"],
            model="claude-3-5-haiku-20241022",
            max_tokens=32,
        )
        reply = await adapter.complete([ChatMessage.user("Reply with the word: pong")], config)

        assert isinstance(reply, str)
        assert len(reply) > 0
