import logging
import os
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_QUOTE_PROVIDER_URL = "https://query1.finance.yahoo.com/v7/finance/quote"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

_KNOWN_QUOTE_ENV_KEYS = {
    "QUOTE_PROVIDER_URL",
    "QUOTE_TIMEOUT_SECONDS",
    "QUOTE_USER_AGENT",
    "QUOTE_LIVE_ENABLED",
}


def _warn_unknown_prefixed_env(prefix: str, known_keys: set[str]) -> None:
    unknown = sorted(key for key in os.environ if key.startswith(prefix) and key not in known_keys)
    if unknown:
        logger.warning("Unknown %s env vars ignored: %s", prefix, ", ".join(unknown))


class Settings(BaseSettings):
    """Quote service settings sourced from environment variables."""

    quote_provider_url: str = Field(
        default=DEFAULT_QUOTE_PROVIDER_URL,
        validation_alias=AliasChoices("quote_provider_url", "QUOTE_PROVIDER_URL"),
    )
    quote_timeout_seconds: float = Field(
        default=3.0,
        gt=0,
        validation_alias=AliasChoices("quote_timeout_seconds", "QUOTE_TIMEOUT_SECONDS"),
    )
    quote_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=AliasChoices("quote_user_agent", "QUOTE_USER_AGENT"),
    )
    live_quotes_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices("quote_live_enabled", "QUOTE_LIVE_ENABLED", "live_quotes_enabled"),
    )
    api_host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("api_host", "API_HOST"))
    api_port: int = Field(default=8000, ge=1, le=65535, validation_alias=AliasChoices("api_port", "API_PORT"))

    @field_validator("quote_provider_url")
    @classmethod
    def _strip_provider_url(cls, value: str) -> str:
        url = value.strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"QUOTE_PROVIDER_URL must be an http(s) URL: {value!r}")
        return url

    @model_validator(mode="after")
    def _warn_unknown(self) -> "Settings":
        if not self.live_quotes_enabled:
            logger.warning("QUOTE_LIVE_ENABLED=false; every quote will be simulated")
        _warn_unknown_prefixed_env("QUOTE_", _KNOWN_QUOTE_ENV_KEYS)
        return self

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Cached accessor so we only load settings once per process."""
    return Settings()
