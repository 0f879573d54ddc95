"""Provider factory for creating the generative backend from configuration."""

from loguru import logger

from chronomate.config.schema import Config
from chronomate.providers.base import TextCompleter
from chronomate.providers.litellm_provider import LiteLLMProvider


def create_provider(config: Config) -> TextCompleter | None:
    """
    Create the generative backend, if one is configured.

    Args:
        config: The chronomate configuration.

    Returns:
        A provider instance, or None when no API key is set (the assistant
        then answers from templates only).
    """
    api_key = config.get_api_key()
    if not api_key:
        logger.info("No generative backend configured, using templated responses")
        return None

    settings = config.assistant
    return LiteLLMProvider(
        api_key=api_key,
        api_base=config.get_api_base(),
        default_model=settings.model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
        timeout=settings.timeout,
    )
