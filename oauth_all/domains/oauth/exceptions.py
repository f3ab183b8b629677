"""OAuth domain exceptions.

Every failure of the signing engine surfaces as one of these. Callers can
catch at the granularity they need, e.g. ``except OAuthError`` for anything
raised by a request context, or ``except MissingParameterError`` to prompt
for the absent credentials.
"""

from typing import Iterable, Optional

from oauth_all.core.exceptions import OAuthAllException

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class OAuthError(OAuthAllException):
    """Base exception for all OAuth errors."""

    def __init__(self, message: str = "OAuth error"):
        """Initialize with message."""
        super().__init__(message)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class OAuthConfigurationError(OAuthError):
    """No protocol configuration for the version, bad RSA key file, or missing URL."""

    def __init__(self, message: str = "OAuth configuration error"):
        """Initialize with message."""
        super().__init__(message)


# ---------------------------------------------------------------------------
# Request selection
# ---------------------------------------------------------------------------


class UnsupportedRequestTypeError(OAuthError):
    """Request type has no configuration row for this version or grant type."""

    def __init__(self, request_type: str, message: Optional[str] = None):
        """Initialize with the offending request type."""
        self.request_type = request_type
        super().__init__(message or f"Request {request_type!r} not supported")


class MissingParameterError(OAuthError):
    """One or more required parameters are absent from the context."""

    def __init__(self, parameters: Iterable[str]):
        """Initialize with every missing parameter name."""
        self.parameters = list(parameters)
        self.parameter = self.parameters[0] if self.parameters else None
        names = ", ".join(f"'{name}'" for name in self.parameters)
        noun = "parameter" if len(self.parameters) == 1 else "parameters"
        super().__init__(f"Missing required {noun} {names}")


# ---------------------------------------------------------------------------
# Signing
# ---------------------------------------------------------------------------


class SigningError(OAuthError):
    """Unknown signature method or a key that cannot sign."""

    def __init__(self, method: str, message: Optional[str] = None):
        """Initialize with the signature method name."""
        self.method = method
        super().__init__(
            message or f"Unable to load {method} signature plugin. Check signature_method"
        )


# ---------------------------------------------------------------------------
# Provider responses
# ---------------------------------------------------------------------------


class MalformedResponseError(OAuthError):
    """Response body is not a parameter string (usually an error page)."""

    def __init__(self, body: str):
        """Initialize with the raw body."""
        self.body = body
        super().__init__(f"Provider sent error message {body!r}")


class ProviderResponseError(OAuthError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str):
        """Initialize with status code and response text."""
        self.status_code = status_code
        self.body = body
        super().__init__(f"Provider returned HTTP {status_code}: {body}")
