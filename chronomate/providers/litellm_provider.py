"""LiteLLM provider implementation for multi-provider support."""

from typing import Any

import litellm
from litellm import acompletion
from loguru import logger

from chronomate.errors import ProviderCallError
from chronomate.providers.base import TextCompleter


class LiteLLMProvider(TextCompleter):
    """
    Text completion through LiteLLM.

    Supports Gemini, OpenAI, OpenRouter and the other providers LiteLLM routes
    to, selected by the model prefix (e.g. ``gemini/gemini-1.5-flash``).
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        default_model: str = "gemini/gemini-1.5-flash",
        max_tokens: int = 1024,
        temperature: float = 0.7,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.api_base = api_base
        self.default_model = default_model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

        # Disable LiteLLM logging noise
        litellm.suppress_debug_info = True
        litellm.drop_params = True

    def _resolve_model(self, model: str) -> str:
        """Route through OpenRouter when its endpoint is configured."""
        if self.api_base and "openrouter" in self.api_base and not model.startswith("openrouter/"):
            return f"openrouter/{model}"
        return model

    async def complete(self, prompt: str) -> str:
        """
        Send a single-turn completion request.

        Args:
            prompt: Full prompt text, sent as the user message.

        Returns:
            The response text (may be empty).

        Raises:
            ProviderCallError: On any transport, auth or model failure.
        """
        model = self._resolve_model(self.default_model)
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "timeout": self.timeout,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.api_base:
            kwargs["api_base"] = self.api_base

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            logger.debug(f"LiteLLM call to {model} failed: {e}")
            raise ProviderCallError(f"Error calling {model}: {e}") from e

        return self._parse_response(response)

    @staticmethod
    def _parse_response(response: Any) -> str:
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise ProviderCallError(f"Malformed completion response: {e}") from e
        return content or ""

    def get_default_model(self) -> str:
        """Get the default model."""
        return self.default_model
