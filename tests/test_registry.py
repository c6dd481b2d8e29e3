"""Unit tests for the provider and model registry."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from llmchat.llm import AVAILABLE_MODELS, ProviderKind, default_model, models_for, normalize_model


class TestProviderKind:
    """Tests for ProviderKind enum."""

    def test_providers_exist(self):
        """Test that all providers are defined."""
        assert ProviderKind.ANTHROPIC == "anthropic"
        assert ProviderKind.OPENAI == "openai"
        assert ProviderKind.DEEPSEEK == "deepseek"
        assert ProviderKind.GEMINI == "gemini"

    def test_str_is_value(self):
        """Test that providers print as their tag."""
        assert str(ProviderKind.GEMINI) == "gemini"

    @given(st.text())
    def test_provider_validation(self, name: str):
        """Property test: only known tags create a provider."""
        if name in {kind.value for kind in ProviderKind}:
            assert ProviderKind(name).value == name
        else:
            with pytest.raises(ValueError):
                ProviderKind(name)


class TestModelLists:
    """Tests for the model lists."""

    def test_every_provider_has_models(self):
        """Test that each provider offers at least one model."""
        for kind in ProviderKind:
            assert len(AVAILABLE_MODELS[kind]) > 0

    def test_default_is_first_listed(self):
        """Test that the default model is the first entry."""
        assert default_model(ProviderKind.OPENAI) == "gpt-4-turbo"
        assert default_model("deepseek") == "deepseek-chat"
        assert default_model("gemini") == "gemini-2.5-flash"

    def test_startup_model_is_offered(self):
        """Test that the start-up default model is in the Anthropic list."""
        assert "claude-3-opus-20240229" in models_for("anthropic")

    def test_unknown_provider_fails(self):
        """Test that listing models of an unknown provider fails."""
        with pytest.raises(ValueError):
            models_for("mistral")


class TestNormalizeModel:
    """Tests for normalize_model."""

    def test_offered_model_kept(self):
        """Test that an offered model is returned unchanged."""
        assert normalize_model("openai", "gpt-4o") == "gpt-4o"

    def test_missing_model_uses_default(self):
        """Test that no model means the provider default."""
        assert normalize_model("anthropic", None) == "claude-3-7-sonnet-20250219"

    def test_foreign_model_uses_default(self):
        """Test that another provider's model is replaced."""
        assert normalize_model("gemini", "gpt-4o") == "gemini-2.5-flash"

    @given(st.sampled_from(list(ProviderKind)), st.text())
    def test_result_always_offered(self, provider: ProviderKind, model: str):
        """Property test: the normalized model is always offered by the provider."""
        result = normalize_model(provider, model)

        assert result in models_for(provider)
        if model in models_for(provider):
            assert result == model
