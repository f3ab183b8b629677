"""Shared exceptions module."""

from typing import Optional


class OAuthAllException(Exception):
    """Base exception for oauth-all."""

    def __init__(self, message: Optional[str] = "oauth-all error"):
        """Create a new OAuthAllException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)
