"""RSA private key adapter backed by ``cryptography``."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa


class RsaSigningKey:
    """Sign messages with RSASSA-PKCS1-v1_5 over SHA-1, as RSA-SHA1 requires."""

    def __init__(self, private_key: rsa.RSAPrivateKey) -> None:
        self._private_key = private_key

    @classmethod
    def from_pem(cls, pem: bytes, password: Optional[bytes] = None) -> "RsaSigningKey":
        """Load a PEM-encoded RSA private key.

        Raises:
            ValueError: If the data is not a PEM RSA private key.
        """
        key = serialization.load_pem_private_key(pem, password=password)
        if not isinstance(key, rsa.RSAPrivateKey):
            raise ValueError(f"Expected an RSA private key, got {type(key).__name__}")
        return cls(key)

    @classmethod
    def from_pem_file(
        cls, path: Union[str, Path], password: Optional[bytes] = None
    ) -> "RsaSigningKey":
        """Read and load a PEM file.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the contents are not a PEM RSA private key.
        """
        return cls.from_pem(Path(path).read_bytes(), password=password)

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self._private_key.public_key()

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message, padding.PKCS1v15(), hashes.SHA1())
