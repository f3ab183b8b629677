"""Static protocol configuration table.

Maps each OAuth version to the request types it supports and, per request
type, the parameters that must be present (``required_params``), the
parameters that make up the canonical set (``api_params``) and the ones sent
only when set (``optional_params``). Names are context field names; OAuth 1.x
serialization adds the ``oauth_`` prefix.

The table is validated when this module is imported.
"""

from typing import Optional

from oauth_all.domains.oauth.types import OAuthVersion, RequestTypeConfig, VersionConfig

_REQUEST_TOKEN_1X = RequestTypeConfig(
    required_params=("consumer_key", "signature_method"),
    api_params=("consumer_key", "signature_method", "signature", "timestamp", "nonce", "callback"),
    optional_params=("version",),
)

_AUTHORIZATION_1X = RequestTypeConfig(
    required_params=("token",),
    api_params=("token",),
    optional_params=("callback",),
)

_PROTECTED_RESOURCE_1X = RequestTypeConfig(
    required_params=("consumer_key", "signature_method", "token", "token_secret"),
    api_params=("consumer_key", "signature_method", "signature", "token", "timestamp", "nonce"),
    optional_params=("version",),
)

_AUTHORIZATION_2X = RequestTypeConfig(
    required_params=("type", "client_id"),
    api_params=("type", "client_id"),
    optional_params=("state", "scope", "immediate", "redirect_uri"),
)

PROTOCOL_CONFIG: dict[OAuthVersion, VersionConfig] = {
    OAuthVersion.V1_0: VersionConfig(
        sign_message=True,
        request_types={
            "request_token": _REQUEST_TOKEN_1X,
            "authorization": _AUTHORIZATION_1X,
            "access_token": RequestTypeConfig(
                required_params=("consumer_key", "signature_method", "token"),
                api_params=(
                    "consumer_key",
                    "signature_method",
                    "signature",
                    "token",
                    "timestamp",
                    "nonce",
                ),
                optional_params=("version",),
            ),
            "protected_resource": _PROTECTED_RESOURCE_1X,
        },
    ),
    OAuthVersion.V1_0A: VersionConfig(
        sign_message=True,
        request_types={
            "request_token": _REQUEST_TOKEN_1X,
            "authorization": _AUTHORIZATION_1X,
            "access_token": RequestTypeConfig(
                required_params=("consumer_key", "signature_method", "token", "verifier"),
                api_params=(
                    "consumer_key",
                    "signature_method",
                    "signature",
                    "token",
                    "timestamp",
                    "nonce",
                    "verifier",
                ),
                optional_params=("version",),
            ),
            "protected_resource": _PROTECTED_RESOURCE_1X,
        },
    ),
    OAuthVersion.V2_0: VersionConfig(
        sign_message=False,
        # Not scoped by grant type: valid whichever flow issued the tokens.
        request_types={
            "protected_resource": RequestTypeConfig(
                required_params=("access_token",),
                api_params=("access_token",),
            ),
            "refresh_token": RequestTypeConfig(
                required_params=("client_id", "refresh_token"),
                api_params=("client_id", "refresh_token"),
                optional_params=("client_secret", "format", "scope"),
            ),
        },
        grant_types={
            "web_server": {
                "authorization": _AUTHORIZATION_2X,
                "access_token": RequestTypeConfig(
                    required_params=("type", "client_id", "code"),
                    api_params=("type", "client_id", "code"),
                    optional_params=("format", "client_secret", "redirect_uri"),
                ),
            },
            "user_agent": {
                "authorization": _AUTHORIZATION_2X,
            },
        },
    ),
}


def get_version_config(version: OAuthVersion) -> Optional[VersionConfig]:
    """Return the table section for ``version``, or None when there is none."""
    return PROTOCOL_CONFIG.get(version)


def resolve_request_config(
    version: OAuthVersion, request_type: str, grant_type: Optional[str] = None
) -> Optional[RequestTypeConfig]:
    """Look up the parameter lists for a request type.

    Version-scoped request types win; otherwise the type is looked up under
    ``grant_type``. Returns None when neither has it.
    """
    section = PROTOCOL_CONFIG.get(version)
    if section is None or not request_type:
        return None
    if request_type in section.request_types:
        return section.request_types[request_type]
    if grant_type is None:
        return None
    return section.grant_types.get(grant_type, {}).get(request_type)


def _validate_table() -> None:
    missing = [version for version in OAuthVersion if version not in PROTOCOL_CONFIG]
    if missing:
        raise RuntimeError(f"Protocol config has no section for {missing}")
    for version, section in PROTOCOL_CONFIG.items():
        if section.sign_message != version.is_oauth1:
            raise RuntimeError(f"sign_message for {version.value} contradicts the protocol")


_validate_table()
