"""
Settings for hashed-store.

Environment-driven configuration for logging and for the GitLab backends that
ship with the package. The store engine itself takes no configuration.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HashedStoreSettings(BaseSettings):
    """Hashed store settings.

    Every field can be overridden with an environment variable carrying the
    ``HASHED_STORE_`` prefix, e.g. ``HASHED_STORE_GITLAB_URL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="HASHED_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="simple")

    # GitLab Backend Configuration
    gitlab_url: str = Field(default="https://gl.mathhub.info")
    gitlab_token: Optional[SecretStr] = Field(default=None)
    gitlab_per_page: int = Field(default=100, ge=1, le=100)
    gitlab_max_pages: int = Field(default=10, ge=1)
    request_timeout: float = Field(default=30.0, gt=0)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the log level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        """Validate the log format name."""
        log_format = value.lower()
        if log_format not in {"simple", "detailed", "json"}:
            raise ValueError(f"Invalid log format: {value}")
        return log_format

    @field_validator("gitlab_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def get_gitlab_token(self) -> Optional[str]:
        """Get the plain GitLab token, if one is configured."""
        if self.gitlab_token is None:
            return None
        return self.gitlab_token.get_secret_value() or None


@lru_cache()
def get_settings() -> HashedStoreSettings:
    """Get cached settings instance."""
    return HashedStoreSettings()
