"""Configuration schema using Pydantic."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AssistantConfig(BaseModel):
    """Conversational assistant configuration."""
    user_name: str = "User"
    default_mood: str = "neutral"
    model: str = "gemini/gemini-1.5-flash"
    max_tokens: int = Field(default=1024, ge=1, le=32768)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    timeout: float = Field(default=30.0, gt=0, description="Seconds before a backend call is abandoned")
    history_limit: int = Field(default=20, ge=1, le=200, description="Conversation turns kept for prompting")


class ProviderConfig(BaseModel):
    """Generative backend credentials."""
    api_key: str = ""
    api_base: str | None = None


class ProvidersConfig(BaseModel):
    """Configuration for generative backends."""
    model_config = ConfigDict(extra="ignore")

    gemini: ProviderConfig = Field(default_factory=ProviderConfig)
    openai: ProviderConfig = Field(default_factory=ProviderConfig)
    openrouter: ProviderConfig = Field(default_factory=ProviderConfig)


class StoreConfig(BaseModel):
    """Local store configuration."""
    data_dir: str = "~/.chronomate/data"


class Config(BaseSettings):
    """Root configuration for chronomate."""
    model_config = SettingsConfigDict(
        env_prefix="CHRONOMATE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    assistant: AssistantConfig = Field(default_factory=AssistantConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    @property
    def data_path(self) -> Path:
        """Get expanded store directory."""
        return Path(self.store.data_dir).expanduser()

    def get_api_key(self) -> str | None:
        """Get API key in priority order: OpenRouter > Gemini > OpenAI."""
        return (
            self.providers.openrouter.api_key or
            self.providers.gemini.api_key or
            self.providers.openai.api_key or
            None
        )

    def get_api_base(self) -> str | None:
        """Get API base URL if using OpenRouter or a custom endpoint."""
        if self.providers.openrouter.api_key:
            return self.providers.openrouter.api_base or "https://openrouter.ai/api/v1"
        if self.providers.gemini.api_key:
            return self.providers.gemini.api_base
        return self.providers.openai.api_base
