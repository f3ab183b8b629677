"""Core protocols for dependency injection.

Domain-specific protocols live in their respective domains/ directories. This
module keeps cross-cutting infrastructure protocols only.
"""

from oauth_all.core.protocols.signing import SigningKey

__all__ = [
    "SigningKey",
]
