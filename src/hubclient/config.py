"""Configuration management with pydantic-settings for hubclient.

Loads transport defaults (base URL, timeouts, headers) and logging options
from HUBCLIENT_* environment variables and an optional .env file. The
resulting config is frozen and safe to share between clients.

References:
- Pydantic Settings: https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

import logging
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("hubclient.config")

__all__ = [
    "DEFAULT_API_VERSION",
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "get_config",
    "reset_config",
]

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"


class ClientConfig(BaseSettings):
    """Configuration for the GitHub REST client.

    Loads from (in order of precedence):
    1. Environment variables prefixed with HUBCLIENT_ (highest priority)
    2. .env file in the working directory
    3. Default values (lowest priority)

    Attributes:
        base_url: API root every resource path is joined onto
        token: Optional token sent as a Bearer Authorization header
        user_agent: User-Agent header value
        api_version: X-GitHub-Api-Version header value
        connect_timeout: Connection establishment timeout (seconds)
        read_timeout: Read timeout for API responses (seconds)
        write_timeout: Write timeout for request bodies (seconds)
        pool_timeout: Pool acquisition timeout (seconds)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json for production, text for development)
    """

    model_config = SettingsConfigDict(
        env_prefix="HUBCLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        validate_default=True,
        frozen=True,
        extra="ignore",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API root URL, e.g. https://github.example.com/api/v3 for Enterprise",
    )

    token: SecretStr | None = Field(
        default=None,
        description="Token passed through as 'Authorization: Bearer <token>'",
    )

    user_agent: str = Field(default="hubclient/0.3", min_length=1)

    api_version: str = Field(default=DEFAULT_API_VERSION, min_length=1)

    connect_timeout: float = Field(default=5.0, gt=0.0)
    read_timeout: float = Field(default=30.0, gt=0.0)
    write_timeout: float = Field(default=5.0, gt=0.0)
    pool_timeout: float = Field(default=5.0, gt=0.0)

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    log_format: str = Field(
        default="json",
        pattern="^(json|text)$",
        description="Log format: json (production), text (development)",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so paths can be appended with a leading slash."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v!r}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("log_format", mode="before")
    @classmethod
    def lower_log_format(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache(maxsize=1)
def get_config() -> ClientConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return
    the cached instance.

    Returns:
        ClientConfig singleton instance.

    Raises:
        ValidationError: If configuration values are invalid.

    Example:
        >>> config = get_config()
        >>> config.base_url
        'https://api.github.com'
        >>> get_config() is config
        True
    """
    return ClientConfig()


def reset_config() -> None:
    """Reset configuration singleton for testing.

    Warning:
        Only use in test code. Production code should not reset config.
    """
    get_config.cache_clear()
