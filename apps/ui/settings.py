from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UiSettings(BaseSettings):
    """Settings for the dashboard and the terminal monitor."""

    api_base_url: str = Field(
        default="http://localhost:8000", validation_alias=AliasChoices("api_base_url", "API_BASE_URL")
    )
    poll_interval_seconds: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("poll_interval_seconds", "POLL_INTERVAL_SECONDS"),
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        validation_alias=AliasChoices("request_timeout_seconds", "REQUEST_TIMEOUT_SECONDS"),
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="", extra="ignore")
