"""Root conftest for pytest configuration and shared fixtures.

Loaded before the colocated test packages under oauth_all/, making its
fixtures available to every test module.
"""

import os

import pytest

# ---------------------------------------------------------------------------
# Environment variables: must be set before any oauth_all module import
# Uses setdefault so real env vars are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("OAUTH_ALL_LOG_LEVEL", "DEBUG")
os.environ.setdefault("OAUTH_ALL_NONCE_LENGTH", "16")


# ---------------------------------------------------------------------------
# Signing keys
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def rsa_private_key():
    """A throwaway 2048-bit RSA private key."""
    from cryptography.hazmat.primitives.asymmetric import rsa

    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def rsa_key_file(tmp_path, rsa_private_key):
    """Path to an unencrypted PEM file holding ``rsa_private_key``."""
    from cryptography.hazmat.primitives import serialization

    pem = rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    path = tmp_path / "private_key.pem"
    path.write_bytes(pem)
    return path


@pytest.fixture
def fake_signing_key():
    """Fake SigningKey that records signed messages."""
    from oauth_all.adapters.signing.fake import FakeSigningKey

    return FakeSigningKey()
