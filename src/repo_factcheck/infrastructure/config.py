"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file).

    ``openai_api_key`` is required: constructing ``Settings`` without it
    raises a ``ValidationError`` at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: SecretStr
    openai_model: str = "gpt-4o-mini"
    github_token: SecretStr | None = None

    # Repository context caps
    max_tree_entries: int = Field(default=500, gt=0)
    max_files_to_fetch: int = Field(default=6, gt=0)
    max_file_chars: int = Field(default=8000, gt=0)
    max_context_tokens: int = Field(default=100_000, gt=0)

    # Remote calls
    request_timeout_s: float = Field(default=30.0, gt=0)
    retry_max_attempts: int = Field(default=3, ge=1)
    retry_base_delay_s: float = Field(default=2.0, ge=0)

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
