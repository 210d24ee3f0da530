"""settings for the agent router, loaded with pydantic-settings.

values come from environment variables and an optional .env file in the
working directory. the router itself never reads settings; the CLI and the
api server turn them into an AgentManager and a text generator.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """router settings.

    attributes:
        anthropic_api_key: key used when llm_provider is "anthropic"
        openai_api_key: key used when llm_provider is "openai"
        llm_provider: provider that rewrites agent drafts; unset keeps the
            deterministic rule-based responses
        llm_model: model override (provider default if not set)
        llm_temperature: sampling temperature passed to the provider
        llm_max_file_chars: per-file character limit when quoting app files
        log_level: logging level (DEBUG, INFO, WARNING, ERROR)
        history_limit: conversation turns kept per router
        session_timeout: idle seconds before an api session expires
        cors_origins: origins allowed to call the api server
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    anthropic_api_key: str | None = None
    openai_api_key: str | None = None

    # response generation
    llm_provider: str | None = Field(default=None, alias="LLM_PROVIDER")
    llm_model: str | None = Field(default=None, alias="LLM_MODEL")
    llm_temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    llm_max_file_chars: int = Field(default=4000, ge=0)

    # router
    log_level: str = Field(default="WARNING", alias="VIBE_AGENTS_LOG_LEVEL")
    history_limit: int = Field(default=50, ge=1, alias="VIBE_AGENTS_HISTORY_LIMIT")

    # api server
    session_timeout: int = Field(default=3600, ge=60)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @property
    def generation_enabled(self) -> bool:
        """whether agent drafts are rewritten by a model."""
        return bool(self.llm_provider)

    def get_api_key_for_provider(self, provider: str) -> str | None:
        """get the configured api key for a provider, or None."""
        return {
            "anthropic": self.anthropic_api_key,
            "openai": self.openai_api_key,
        }.get(provider)

    def client_config(self) -> dict:
        """provider sampling options derived from settings."""
        config = {}
        if self.llm_temperature is not None:
            config["temperature"] = self.llm_temperature
        return config


@lru_cache
def get_settings() -> Settings:
    """get the cached settings instance.

    call get_settings.cache_clear() to reload.
    """
    return Settings()
