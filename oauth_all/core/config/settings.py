"""Package settings.

Uses Pydantic Settings for automatic env var loading. Every field can be
overridden with an ``OAUTH_ALL_`` prefixed environment variable, e.g.::

    OAUTH_ALL_LOG_LEVEL=DEBUG
    OAUTH_ALL_DEFAULT_SIGNATURE_METHOD=PLAINTEXT
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults applied to every new request context."""

    model_config = SettingsConfigDict(
        env_prefix="OAUTH_ALL_",
        case_sensitive=True,
        extra="ignore",
    )

    LOG_LEVEL: str = Field("INFO", description="Level for the oauth_all logger")
    LOG_FORMAT: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Format string for the default stream handler",
    )

    DEFAULT_REQUEST_METHOD: str = Field("GET", description="HTTP method when none is given")
    DEFAULT_SIGNATURE_METHOD: str = Field(
        "HMAC-SHA1", description="Signature method when none is given"
    )
    NONCE_LENGTH: int = Field(16, ge=8, le=64, description="Characters per generated nonce")

    @field_validator("DEFAULT_REQUEST_METHOD")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()
