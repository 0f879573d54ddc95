"""Generative backend abstraction module."""

from chronomate.providers.base import TextCompleter
from chronomate.providers.factory import create_provider
from chronomate.providers.litellm_provider import LiteLLMProvider

__all__ = ["LiteLLMProvider", "TextCompleter", "create_provider"]
