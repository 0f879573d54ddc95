"""Generative backend interface."""

from abc import ABC, abstractmethod


class TextCompleter(ABC):
    """
    Abstract base for generative text backends.

    The assistant only needs one capability: send a prompt, get text back.
    Implementations raise ProviderCallError when the call fails.
    """

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Return the backend's completion for ``prompt``."""
        pass

    @abstractmethod
    def get_default_model(self) -> str:
        """Get the default model for this backend."""
        pass
