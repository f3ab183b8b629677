"""Signing key adapters."""

from oauth_all.adapters.signing.fake import FakeSigningKey
from oauth_all.adapters.signing.rsa import RsaSigningKey

__all__ = [
    "FakeSigningKey",
    "RsaSigningKey",
]
