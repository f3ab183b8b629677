"""Fake signing key for testing.

Produces a predictable signature without real crypto. Records calls for
assertions.
"""

from __future__ import annotations


class FakeSigningKey:
    """Test implementation of SigningKey.

    Usage::

        fake = FakeSigningKey()
        assert fake.sign(b"base") == b"signed:base"
        assert fake.messages == [b"base"]
    """

    def __init__(self, prefix: bytes = b"signed:") -> None:
        self._prefix = prefix
        self._messages: list[bytes] = []

    @property
    def messages(self) -> list[bytes]:
        return list(self._messages)

    def sign(self, message: bytes) -> bytes:
        self._messages.append(message)
        return self._prefix + message
