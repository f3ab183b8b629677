"""Signature strategies and the process-wide strategy registry.

Strategies are resolved by the context's ``signature_method`` string. The
name is normalized (runs of non-word characters become ``_``, case ignored),
so ``HMAC-SHA1``, ``hmac_sha1`` and ``Hmac SHA1`` all select the same one.
"""

import base64
import hashlib
import hmac
import re
import threading
from typing import Any

from oauth_all.core.logging import logger
from oauth_all.core.protocols.signing import SigningKey
from oauth_all.domains.oauth.exceptions import SigningError
from oauth_all.domains.oauth.protocols import SignatureStrategy
from oauth_all.domains.oauth.types import SignatureMethod

registry_logger = logger.with_prefix("SignatureStrategyRegistry: ").with_context(
    component="signature_registry"
)


class HmacSha1Signature:
    """base64(HMAC-SHA1(key, base_string))."""

    method = SignatureMethod.HMAC_SHA1
    uses_base_string = True

    def sign(self, base_string: str, key: Any) -> str:
        if not isinstance(key, str):
            raise SigningError(
                self.method.value,
                f"{self.method.value} needs a secret string key, got {type(key).__name__}",
            )
        digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
        return base64.b64encode(digest).decode("ascii")


class RsaSha1Signature:
    """base64 of the key's RSA signature over the base string."""

    method = SignatureMethod.RSA_SHA1
    uses_base_string = True

    def sign(self, base_string: str, key: Any) -> str:
        if not isinstance(key, SigningKey):
            raise SigningError(
                self.method.value,
                "signature_key must be an RSA key object that can sign(message)",
            )
        return base64.b64encode(key.sign(base_string.encode("utf-8"))).decode("ascii")


class PlaintextSignature:
    """The signing key itself, unencoded."""

    method = SignatureMethod.PLAINTEXT
    uses_base_string = False

    def sign(self, base_string: str, key: Any) -> str:
        return key


_STRATEGY_CLASSES: dict[SignatureMethod, type] = {
    SignatureMethod.HMAC_SHA1: HmacSha1Signature,
    SignatureMethod.RSA_SHA1: RsaSha1Signature,
    SignatureMethod.PLAINTEXT: PlaintextSignature,
}


def normalize_method_name(name: "str | None") -> str:
    """``HMAC-SHA1`` -> ``HMAC_SHA1``: non-word runs become ``_``, upper-cased."""
    return re.sub(r"\W+", "_", name or "").strip("_").upper()


def parse_signature_method(name: "str | SignatureMethod | None") -> SignatureMethod:
    """Map a signature method name onto the closed set of supported methods.

    Raises:
        SigningError: If the name does not match a supported method.
    """
    if isinstance(name, SignatureMethod):
        return name
    normalized = normalize_method_name(name)
    try:
        return SignatureMethod[normalized]
    except KeyError:
        raise SigningError(normalized or repr(name)) from None


class SignatureStrategyRegistry:
    """Lazily instantiated strategies, shared process-wide.

    Entries are only ever added, each under the lock, so concurrent first use
    of a method creates a single instance. Lookups after that are dict reads.
    """

    def __init__(self) -> None:
        self._strategies: dict[SignatureMethod, SignatureStrategy] = {}
        self._lock = threading.Lock()

    def get(self, name: "str | SignatureMethod | None") -> SignatureStrategy:
        """Get the strategy for a signature method name.

        Raises:
            SigningError: If no strategy exists for the name.
        """
        method = parse_signature_method(name)
        strategy = self._strategies.get(method)
        if strategy is not None:
            return strategy
        with self._lock:
            strategy = self._strategies.get(method)
            if strategy is None:
                strategy = _STRATEGY_CLASSES[method]()
                self._strategies[method] = strategy
                registry_logger.debug(f"Loaded {method.value} strategy")
        return strategy

    def loaded(self) -> list[SignatureMethod]:
        """Methods whose strategies have been instantiated so far."""
        return list(self._strategies)


signature_strategies = SignatureStrategyRegistry()


def get_signature_strategy(name: "str | SignatureMethod | None") -> SignatureStrategy:
    """Resolve a strategy from the shared registry."""
    return signature_strategies.get(name)
