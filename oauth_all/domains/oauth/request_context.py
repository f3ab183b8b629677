"""OAuth request context.

A :class:`RequestContext` is created once per OAuth flow and mutated in place
as the flow advances::

    ctx = RequestContext(
        consumer_key="key",
        consumer_secret="secret",
        request_token_url="https://provider.example/oauth/request_token",
        access_token_url="https://provider.example/oauth/access_token",
    )
    ctx.request("request_token")
    # ... send ctx.to_header() to request_token_url, then:
    ctx.response().from_post_body(body)
    ctx.request("access_token", verifier=verifier)

The protocol version (1.0, 1.0A or 2.0) is detected from the credentials at
construction time and never changes afterwards. Which parameters are required
and sent for each request type comes from
:mod:`oauth_all.domains.oauth.protocol_config`.

Contexts are not thread-safe. Use one per in-flight flow.
"""

import os
import secrets
import string
import time
from typing import Any, Iterable, Mapping, Optional

from oauth_all.adapters.signing.rsa import RsaSigningKey
from oauth_all.core.config import settings
from oauth_all.core.logging import ContextualLogger
from oauth_all.core.logging import logger as default_logger
from oauth_all.domains.oauth.encoding import (
    normalize_parameters,
    parse_post_body,
    percent_encode,
    render_parameters,
    strip_query,
)
from oauth_all.domains.oauth.exceptions import (
    MissingParameterError,
    OAuthConfigurationError,
    UnsupportedRequestTypeError,
)
from oauth_all.domains.oauth.protocol_config import get_version_config, resolve_request_config
from oauth_all.domains.oauth.signature import get_signature_strategy, normalize_method_name
from oauth_all.domains.oauth.types import OAuthVersion, RequestTypeConfig

OAUTH_PREFIX = "oauth_"
NONCE_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase

_EMPTY_REQUEST_CONFIG = RequestTypeConfig()


def detect_version(fields: Mapping[str, Any]) -> Optional[OAuthVersion]:
    """Work out the protocol version from a bag of credential fields.

    An explicit ``module_version`` wins. Otherwise a consumer key and secret
    mean 1.0 (1.0A when a ``verifier`` is also present), and a client id plus
    a grant type (``type`` or ``grant_type``) mean 2.0.

    Returns:
        The detected version, or None when the fields match no version.

    Raises:
        OAuthConfigurationError: If ``module_version`` names an unknown version.
    """
    explicit = fields.get("module_version")
    if explicit:
        version = OAuthVersion.parse(explicit)
        if version is None:
            raise OAuthConfigurationError(f"Unknown module_version {explicit!r}")
        return version

    if fields.get("consumer_key") and fields.get("consumer_secret"):
        return OAuthVersion.V1_0A if fields.get("verifier") else OAuthVersion.V1_0

    if fields.get("client_id") and (fields.get("type") or fields.get("grant_type")):
        return OAuthVersion.V2_0

    return None


def generate_nonce(length: Optional[int] = None) -> str:
    """Random string over ``[0-9a-zA-Z]``, ``settings.NONCE_LENGTH`` long by default."""
    length = length or settings.NONCE_LENGTH
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


class RequestContext:
    """Credentials, tokens and protocol state for one OAuth flow.

    Field state is a plain mapping keyed by OAuth parameter names without the
    ``oauth_`` prefix (``consumer_key``, ``token``, ``verifier``, ...), plus
    transport fields (``request_method``, ``<request_type>_url``). Extra
    parameters added with :meth:`put_extra` are kept apart and are signed and
    serialized alongside the protocol parameters.
    """

    def __init__(self, *, logger: Optional[ContextualLogger] = None, **fields: Any) -> None:
        """Create a context.

        Args:
            logger: Logger to narrow with the context's version. Defaults to the
                package logger.
            **fields: Credentials, URLs and options. ``module_version`` forces
                a version; ``extra_params`` seeds the extra parameters;
                ``signature_key_file`` names the PEM key for RSA-SHA1.

        Raises:
            OAuthConfigurationError: If no version matches the fields or the
                RSA key cannot be loaded.
        """
        extra_params = fields.pop("extra_params", None) or {}

        self._fields: dict[str, Any] = dict(fields)
        self._extra: dict[str, Any] = dict(extra_params)
        self._current_request_type = ""

        if not self._fields.get("request_method"):
            self._fields["request_method"] = settings.DEFAULT_REQUEST_METHOD
        if not self._fields.get("signature_method"):
            self._fields["signature_method"] = settings.DEFAULT_SIGNATURE_METHOD

        version = detect_version(self._fields)
        config = get_version_config(version) if version is not None else None
        if config is None:
            raise OAuthConfigurationError(
                "No protocol configuration matches these credentials. "
                "Check params or pass module_version"
            )
        self._version = version
        self._config = config
        self._fields.pop("module_version", None)

        if version is OAuthVersion.V2_0 and not self._fields.get("type"):
            self._fields["type"] = self._fields.get("grant_type")

        self._logger = (logger or default_logger).with_context(oauth_version=version.value)

        if normalize_method_name(self.signature_method) == "RSA_SHA1":
            self._load_signature_key()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(version={self._version.value!r}, "
            f"request_type={self._current_request_type!r})"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def request(self, request_type: str, **fields: Any) -> "RequestContext":
        """Select a request type, merge ``fields``, validate and sign.

        Raises:
            UnsupportedRequestTypeError: If the type is not configured for this
                version (and grant type, under 2.0).
            MissingParameterError: If required parameters are absent.
        """
        if self._resolve_request_config(request_type) is None:
            raise UnsupportedRequestTypeError(request_type)

        self._current_request_type = request_type
        if fields:
            self.from_hash(fields)

        self.check()
        self.preload()
        self._logger.debug(
            f"Prepared {request_type} request", extra={"context": {"request_type": request_type}}
        )
        return self

    def response(self) -> "RequestContext":
        """Forget the current token pair before the provider's answer is merged in."""
        self._fields.pop("token", None)
        self._fields.pop("token_secret", None)
        return self

    def check(self) -> None:
        """Raise MissingParameterError naming every absent required parameter."""
        missing = [name for name in self.required_params if self._fields.get(name) is None]
        if missing:
            raise MissingParameterError(missing)

    def preload(self) -> None:
        """Stamp a fresh timestamp and nonce, and sign when the version requires it."""
        self._fields["timestamp"] = int(time.time())
        self._fields["nonce"] = generate_nonce()
        if self.sign_message:
            self.sign()

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign(self, key: Any = None) -> "RequestContext":
        """Compute the signature with the configured method and store it.

        Args:
            key: Overrides :attr:`signature_key` for this call.

        Raises:
            SigningError: If the method is unknown or the key cannot sign.
        """
        strategy = get_signature_strategy(self.signature_method)
        if key is None:
            key = self.signature_key
        base_string = self.signature_base_string if strategy.uses_base_string else ""
        self._fields["signature"] = strategy.sign(base_string, key)
        self._logger.debug(
            f"Signed with {strategy.method.value}: {base_string}",
            extra={"context": {"request_type": self._current_request_type}},
        )
        return self

    @property
    def signature_key(self) -> Any:
        """Supplied key object (RSA), else ``encode(consumer_secret)&encode(token_secret)``."""
        key = self._fields.get("signature_key")
        if key is not None:
            return key
        token_secret = self._fields.get("token_secret")
        return f"{percent_encode(self._fields.get('consumer_secret'))}&" + (
            percent_encode(token_secret) if token_secret else ""
        )

    @property
    def normalized_request_url(self) -> str:
        return strip_query(self._require_url())

    @property
    def normalized_message_parameters(self) -> str:
        return normalize_parameters(self.parameters(delete=("signature",)))

    @property
    def signature_base_string(self) -> str:
        return "&".join(
            percent_encode(part)
            for part in (
                self.request_method.upper(),
                self.normalized_request_url,
                self.normalized_message_parameters,
            )
        )

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def parameters(
        self,
        *,
        delete: Iterable[str] = (),
        add: Iterable[str] = (),
        extra_only: bool = False,
        no_extra: bool = False,
    ) -> dict[str, Any]:
        """Canonical parameter set for the current request type.

        Under 1.x every api param is present (empty when unset) and prefixed
        with ``oauth_``; under 2.0 names are sent as they are. Optional params
        are included only when truthy. Extra parameters are merged last.

        Args:
            delete: Field names to leave out (e.g. ``signature``).
            add: Further field names to include under 2.0.
            extra_only: Return only the extra parameters.
            no_extra: Leave the extra parameters out.
        """
        params: dict[str, Any] = {}
        if not extra_only:
            skipped = set(delete)
            config = self.request_config
            names = list(config.api_params)
            names += [name for name in config.optional_params if self._fields.get(name)]
            if self._version is OAuthVersion.V2_0:
                names += list(add)
            prefix = OAUTH_PREFIX if self._version.is_oauth1 else ""
            for name in names:
                if name in skipped:
                    continue
                value = self._fields.get(name)
                params[f"{prefix}{name}"] = "" if value is None else value
        if not no_extra:
            params.update(self._extra)
        return params

    def params(self, *, quote_char: str = "", **options: Any) -> list[str]:
        """Sorted, encoded ``name=value`` strings; options as for :meth:`parameters`."""
        return render_parameters(self.parameters(**options), quote_char=quote_char)

    def from_hash(self, values: Mapping[str, Any]) -> "RequestContext":
        """Merge external parameters into the field state.

        Under 1.x the ``oauth_`` prefix is stripped, so ``oauth_token`` lands
        in ``token``. Under 2.0 names are stored as they are.
        """
        strip_prefix = self._version.is_oauth1
        for name, value in values.items():
            if strip_prefix and name.startswith(OAUTH_PREFIX):
                name = name[len(OAUTH_PREFIX):]
            self._fields[name] = value
        return self

    def to_hash(self) -> dict[str, Any]:
        return self.parameters()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_header(self, realm: Optional[str] = None, separator: str = ", ") -> str:
        """Authorization header value.

        1.x: ``OAuth realm="...", oauth_consumer_key="...", ...`` without the
        extra parameters. 2.0: ``OAuth <access_token>``; ``realm`` is ignored.

        Raises:
            MissingParameterError: Under 2.0, if there is no access token yet.
        """
        if self._version.is_oauth1:
            realm_part = f'realm="{realm}"{separator}' if realm is not None else ""
            return "OAuth " + realm_part + separator.join(
                self.params(quote_char='"', no_extra=True)
            )

        access_token = self._fields.get("access_token")
        if not access_token:
            raise MissingParameterError(["access_token"])
        return f"OAuth {access_token}"

    def to_url(self, extra_only: bool = False) -> str:
        """Current request type's URL, query replaced by the parameter string.

        Raises:
            OAuthConfigurationError: If no URL is configured for the request type.
        """
        url = strip_query(self._require_url())
        query = normalize_parameters(self.parameters(extra_only=extra_only))
        return f"{url}?{query}" if query else url

    def to_post_body(self) -> str:
        """Form-encoded body; empty for GET requests."""
        if self.request_method.upper() == "GET":
            return ""
        if self._version.is_oauth1:
            return normalize_parameters(self.parameters())
        return normalize_parameters(self.parameters(no_extra=True))

    def from_post_body(self, body: str) -> "RequestContext":
        """Merge a ``name=value&...`` provider response into the field state.

        Raises:
            MalformedResponseError: If the body contains whitespace, which means
                the provider sent an error page rather than parameters.
        """
        return self.from_hash(parse_post_body(body))

    # ------------------------------------------------------------------
    # Extra parameters
    # ------------------------------------------------------------------

    def put_extra(self, **params: Any) -> "RequestContext":
        self._extra.update(params)
        return self

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self._extra)

    def clean_extra(self) -> "RequestContext":
        self._extra = {}
        return self

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    @property
    def logger(self) -> ContextualLogger:
        return self._logger

    @property
    def version(self) -> OAuthVersion:
        return self._version

    @property
    def request_type(self) -> str:
        return self._current_request_type

    @property
    def grant_type(self) -> Optional[str]:
        return self._fields.get("type")

    @property
    def sign_message(self) -> bool:
        return self._config.sign_message

    @property
    def request_config(self) -> RequestTypeConfig:
        return self._resolve_request_config(self._current_request_type) or _EMPTY_REQUEST_CONFIG

    @property
    def required_params(self) -> tuple[str, ...]:
        return self.request_config.required_params

    @property
    def api_params(self) -> tuple[str, ...]:
        return self.request_config.api_params

    @property
    def optional_params(self) -> tuple[str, ...]:
        return self.request_config.optional_params

    @property
    def request_method(self) -> str:
        return self._fields["request_method"]

    @request_method.setter
    def request_method(self, value: str) -> None:
        self._fields["request_method"] = value

    @property
    def signature_method(self) -> str:
        return self._fields.get("signature_method") or ""

    @signature_method.setter
    def signature_method(self, value: str) -> None:
        self._fields["signature_method"] = value

    @property
    def signature(self) -> Optional[str]:
        return self._fields.get("signature")

    @property
    def timestamp(self) -> Optional[int]:
        return self._fields.get("timestamp")

    @property
    def nonce(self) -> Optional[str]:
        return self._fields.get("nonce")

    @property
    def token(self) -> Optional[str]:
        """The access token under 2.0, the (request or access) token under 1.x."""
        if self._version is OAuthVersion.V2_0:
            return self._fields.get("access_token")
        return self._fields.get("token")

    @property
    def token_secret(self) -> Optional[str]:
        return self._fields.get("token_secret")

    @property
    def access_token(self) -> Optional[str]:
        return self._fields.get("access_token")

    @property
    def refresh_token(self) -> str:
        return self._fields.get("refresh_token") or ""

    @property
    def expires(self) -> int:
        return self._fields.get("expires") or 0

    @property
    def scope(self) -> str:
        return self._fields.get("scope") or ""

    @property
    def url(self) -> Optional[str]:
        return self._fields.get(f"{self._current_request_type}_url")

    @property
    def protected_resource_url(self) -> Optional[str]:
        return self._fields.get("protected_resource_url")

    @protected_resource_url.setter
    def protected_resource_url(self, value: str) -> None:
        self._fields["protected_resource_url"] = value

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve_request_config(self, request_type: str) -> Optional[RequestTypeConfig]:
        return resolve_request_config(self._version, request_type, self.grant_type)

    def _require_url(self) -> str:
        url = self.url
        if not url:
            raise OAuthConfigurationError(
                f"Can't load {self._current_request_type or 'unselected'} request URL"
            )
        return url

    def _load_signature_key(self) -> None:
        """Load the RSA key from ``signature_key_file`` unless a key object was given."""
        if self._fields.get("signature_key") is not None:
            return

        path = self._fields.get("signature_key_file")
        if not path or not os.path.isfile(path):
            raise OAuthConfigurationError(
                "Param 'signature_key_file' is null or file doesn't exist"
            )

        password = self._fields.get("signature_key_password")
        if isinstance(password, str):
            password = password.encode("utf-8")

        try:
            key = RsaSigningKey.from_pem_file(path, password=password)
        except (OSError, ValueError, TypeError) as e:
            raise OAuthConfigurationError(f"Unable to load RSA key from {path}: {e}") from e

        self._fields["signature_key"] = key
        self._logger.debug(f"Loaded RSA signing key from {path}")
