"""Environment-based configuration using pydantic-settings.

Example:
    >>> from reqbridge.settings import get_settings
    >>> settings = get_settings()
    >>> settings.grace_period
    5.0

    # Or with environment variables:
    # REQBRIDGE_URL_TIMEOUT=30
    # REQBRIDGE_WAIT_SLICE=0.5
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_URL_TIMEOUT: float = 15.0
DEFAULT_GRACE_PERIOD: float = 5.0
DEFAULT_WAIT_SLICE: float = 1.0


class ReqbridgeSettings(BaseSettings):
    """Executor configuration.

    Loads from environment variables with the REQBRIDGE_ prefix and from
    a `.env` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="REQBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    url_timeout: PositiveFloat = Field(
        default=DEFAULT_URL_TIMEOUT,
        description="Transport timeout for requests sent from a raw URL string",
    )
    grace_period: PositiveFloat = Field(
        default=DEFAULT_GRACE_PERIOD,
        description="Extra wait beyond the request timeout before a blocking call gives up",
    )
    wait_slice: PositiveFloat = Field(
        default=DEFAULT_WAIT_SLICE,
        description="How long a blocking call runs the event loop between deadline checks",
    )
    follow_redirects: bool = True
    verify_ssl: bool = True


@lru_cache(maxsize=1)
def get_settings() -> ReqbridgeSettings:
    """Get the global settings instance (cached)."""
    return ReqbridgeSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    The next get_settings() call reloads configuration from the environment.
    """
    get_settings.cache_clear()
