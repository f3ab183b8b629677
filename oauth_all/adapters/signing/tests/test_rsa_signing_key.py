"""Unit tests for the RSA signing key adapter."""

import pytest
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding

from oauth_all.adapters.signing.rsa import RsaSigningKey
from oauth_all.core.protocols.signing import SigningKey


def test_satisfies_protocol(rsa_private_key):
    assert isinstance(RsaSigningKey(rsa_private_key), SigningKey)


def test_signature_verifies_with_public_key(rsa_key_file):
    key = RsaSigningKey.from_pem_file(rsa_key_file)
    signature = key.sign(b"GET&https%3A%2F%2Fapi.example&a%3D1")
    key.public_key.verify(
        signature, b"GET&https%3A%2F%2Fapi.example&a%3D1", padding.PKCS1v15(), hashes.SHA1()
    )
    with pytest.raises(InvalidSignature):
        key.public_key.verify(signature, b"tampered", padding.PKCS1v15(), hashes.SHA1())


def test_signature_is_deterministic(rsa_private_key):
    key = RsaSigningKey(rsa_private_key)
    assert key.sign(b"message") == key.sign(b"message")


def test_encrypted_pem_needs_password(tmp_path, rsa_private_key):
    pem = rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.BestAvailableEncryption(b"hunter2"),
    )
    path = tmp_path / "encrypted.pem"
    path.write_bytes(pem)

    with pytest.raises(TypeError):
        RsaSigningKey.from_pem_file(path)
    assert RsaSigningKey.from_pem_file(path, password=b"hunter2").sign(b"x")


def test_non_rsa_key_rejected():
    ec_key = ec.generate_private_key(ec.SECP256R1())
    pem = ec_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    with pytest.raises(ValueError):
        RsaSigningKey.from_pem(pem)


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        RsaSigningKey.from_pem_file(tmp_path / "nope.pem")
