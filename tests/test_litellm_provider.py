"""Tests for the LiteLLM backend and the provider factory."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from chronomate.config.schema import Config
from chronomate.errors import ProviderCallError
from chronomate.providers.factory import create_provider
from chronomate.providers.litellm_provider import LiteLLMProvider


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestLiteLLMProvider:
    @pytest.mark.asyncio
    async def test_complete_sends_single_user_message(self, monkeypatch):
        mock = AsyncMock(return_value=_completion('{"text": "hi"}'))
        monkeypatch.setattr("chronomate.providers.litellm_provider.acompletion", mock)
        provider = LiteLLMProvider(api_key="g-key", max_tokens=64, temperature=0.2, timeout=5.0)

        result = await provider.complete("hello")

        assert result == '{"text": "hi"}'
        kwargs = mock.await_args.kwargs
        assert kwargs["model"] == "gemini/gemini-1.5-flash"
        assert kwargs["messages"] == [{"role": "user", "content": "hello"}]
        assert kwargs["max_tokens"] == 64
        assert kwargs["temperature"] == 0.2
        assert kwargs["timeout"] == 5.0
        assert kwargs["api_key"] == "g-key"
        assert "api_base" not in kwargs

    @pytest.mark.asyncio
    async def test_openrouter_prefix(self, monkeypatch):
        mock = AsyncMock(return_value=_completion("ok"))
        monkeypatch.setattr("chronomate.providers.litellm_provider.acompletion", mock)
        provider = LiteLLMProvider(
            api_key="r-key",
            api_base="https://openrouter.ai/api/v1",
            default_model="google/gemini-flash-1.5",
        )

        await provider.complete("hello")

        assert mock.await_args.kwargs["model"] == "openrouter/google/gemini-flash-1.5"

    @pytest.mark.asyncio
    async def test_none_content_is_empty_string(self, monkeypatch):
        monkeypatch.setattr(
            "chronomate.providers.litellm_provider.acompletion",
            AsyncMock(return_value=_completion(None)),
        )

        assert await LiteLLMProvider(api_key="k").complete("hello") == ""

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self, monkeypatch):
        monkeypatch.setattr(
            "chronomate.providers.litellm_provider.acompletion",
            AsyncMock(side_effect=TimeoutError("took too long")),
        )

        with pytest.raises(ProviderCallError, match="took too long"):
            await LiteLLMProvider(api_key="k").complete("hello")

    @pytest.mark.asyncio
    async def test_malformed_response_is_wrapped(self, monkeypatch):
        monkeypatch.setattr(
            "chronomate.providers.litellm_provider.acompletion",
            AsyncMock(return_value=SimpleNamespace(choices=[])),
        )

        with pytest.raises(ProviderCallError):
            await LiteLLMProvider(api_key="k").complete("hello")


class TestCreateProvider:
    def test_no_key_means_no_backend(self):
        assert create_provider(Config()) is None

    def test_settings_are_passed_through(self):
        config = Config()
        config.providers.gemini.api_key = "g-key"
        config.assistant.model = "gemini/gemini-1.5-pro"
        config.assistant.timeout = 12.0

        provider = create_provider(config)

        assert isinstance(provider, LiteLLMProvider)
        assert provider.get_default_model() == "gemini/gemini-1.5-pro"
        assert provider.api_key == "g-key"
        assert provider.timeout == 12.0
