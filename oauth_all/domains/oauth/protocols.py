"""Protocols for OAuth domain dependencies."""

from typing import Any, Protocol

from oauth_all.domains.oauth.types import SignatureMethod


class SignatureStrategy(Protocol):
    """One signature algorithm: consumes a base string and a key, returns the signature."""

    method: SignatureMethod
    # False when the signature ignores the base string, so no URL is needed.
    uses_base_string: bool

    def sign(self, base_string: str, key: Any) -> str:
        """Sign ``base_string`` with ``key``.

        ``key`` is the composed secret string for HMAC-SHA1 and PLAINTEXT, and a
        :class:`~oauth_all.core.protocols.signing.SigningKey` for RSA-SHA1.
        """
        ...
