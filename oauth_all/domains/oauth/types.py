"""Value types for the OAuth domain.

These live in a separate module to avoid circular imports between the
config table, the signature strategies and the request context.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

# Required parameters that feed the signing key instead of being sent.
SIGNING_ONLY_PARAMS = frozenset({"token_secret"})


class OAuthVersion(str, Enum):
    """Protocol variants supported by a request context."""

    V1_0 = "1.0"
    V1_0A = "1.0A"
    V2_0 = "2.0"

    @classmethod
    def parse(cls, value: "str | OAuthVersion") -> Optional["OAuthVersion"]:
        """Parse ``1.0``, ``1_0``, ``1.0a`` style names. Returns None when unknown."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().replace("_", ".").upper()
        try:
            return cls(normalized)
        except ValueError:
            return None

    @property
    def is_oauth1(self) -> bool:
        return self is not OAuthVersion.V2_0


class SignatureMethod(str, Enum):
    """Signature methods, valued by their OAuth wire names."""

    HMAC_SHA1 = "HMAC-SHA1"
    RSA_SHA1 = "RSA-SHA1"
    PLAINTEXT = "PLAINTEXT"


class RequestTypeConfig(BaseModel):
    """Parameter lists for one request type."""

    model_config = ConfigDict(frozen=True)

    required_params: tuple[str, ...] = ()
    api_params: tuple[str, ...] = ()
    optional_params: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _required_params_are_sent(self) -> "RequestTypeConfig":
        sent = set(self.api_params) | set(self.optional_params) | SIGNING_ONLY_PARAMS
        unsent = [name for name in self.required_params if name not in sent]
        if unsent:
            raise ValueError(f"Required params never sent: {unsent}")
        return self


class VersionConfig(BaseModel):
    """Everything the config table knows about one protocol version.

    ``request_types`` are looked up by name alone. ``grant_types`` (2.0 only)
    scope further request types under the context's grant type.
    """

    model_config = ConfigDict(frozen=True)

    sign_message: bool = False
    request_types: dict[str, RequestTypeConfig] = {}
    grant_types: dict[str, dict[str, RequestTypeConfig]] = {}

    @model_validator(mode="after")
    def _has_request_types(self) -> "VersionConfig":
        if not self.request_types and not any(self.grant_types.values()):
            raise ValueError("Version config defines no request types")
        return self

    def request_type_names(self) -> set[str]:
        names = set(self.request_types)
        for scoped in self.grant_types.values():
            names.update(scoped)
        return names
