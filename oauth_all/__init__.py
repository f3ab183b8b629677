"""oauth-all: OAuth 1.0 / 1.0A / 2.0 request signing.

Usage::

    from oauth_all import RequestContext

    ctx = RequestContext(
        consumer_key="key",
        consumer_secret="secret",
        request_token_url="https://provider.example/oauth/request_token",
    )
    header = ctx.request("request_token").to_header()
"""

from oauth_all.domains.oauth.exceptions import (
    MalformedResponseError,
    MissingParameterError,
    OAuthConfigurationError,
    OAuthError,
    ProviderResponseError,
    SigningError,
    UnsupportedRequestTypeError,
)
from oauth_all.domains.oauth.request_context import RequestContext, detect_version
from oauth_all.domains.oauth.types import OAuthVersion, SignatureMethod

__version__ = "0.7.0"

__all__ = [
    "MalformedResponseError",
    "MissingParameterError",
    "OAuthConfigurationError",
    "OAuthError",
    "OAuthVersion",
    "ProviderResponseError",
    "RequestContext",
    "SignatureMethod",
    "SigningError",
    "UnsupportedRequestTypeError",
    "detect_version",
]
