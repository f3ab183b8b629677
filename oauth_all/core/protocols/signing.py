"""Asymmetric signing key protocol.

Defines the structural typing contract for key objects that sign a byte
string. Uses :class:`typing.Protocol` so implementations don't need to
inherit.

Usage::

    from oauth_all.core.protocols.signing import SigningKey


    def sign_base_string(key: SigningKey, base_string: str) -> bytes:
        return key.sign(base_string.encode("utf-8"))
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SigningKey(Protocol):
    """Private key able to produce a raw signature over a message."""

    def sign(self, message: bytes) -> bytes:
        """Sign ``message`` and return the raw signature bytes."""
        ...
