"""Configuration module for oauth-all.

Usage:
    from oauth_all.core.config import settings

    nonce_length = settings.NONCE_LENGTH
"""

from oauth_all.core.config.settings import Settings

__all__ = [
    "Settings",
    "settings",
]

# Singleton settings instance
settings = Settings()
