"""RSA key generation and loading from base64 or PEM text."""
from __future__ import annotations

import base64
import binascii

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from cert_toolkit.errors import InvalidKeyError, MalformedInputError
from cert_toolkit.keys.derivation import derive_rsa_public_key
from cert_toolkit.keys.loading import rsa_private_key_from_info
from cert_toolkit.keys.material import (
    RSA_PUBLIC_EXPONENT,
    KeyAlgorithm,
    KeyPair,
    RSAPrivateKey,
    RSAPublicKey,
)
from cert_toolkit.pem.codec import PemKind, PrivateKeyInfo, decode_pem, expect_pem


def generate_rsa_key_pair(key_size: int = 2048) -> KeyPair:
    """Generate an RSA key pair with public exponent 65537.

    Parameters
    ----------
    key_size:
        Modulus size in bits. Must be at least 2048.

    Raises
    ------
    ValueError
        If ``key_size`` is less than 2048.
    """
    if key_size < 2048:
        raise ValueError(f"key_size must be at least 2048 bits, got {key_size}")
    key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=key_size)
    private_key = RSAPrivateKey.from_cryptography(key)
    return KeyPair(private_key=private_key, public_key=derive_rsa_public_key(private_key))


def load_rsa_public_key(text: bytes | str) -> RSAPublicKey:
    """Load an RSA public key from a ``PUBLIC KEY`` PEM block or bare base64 DER.

    Raises
    ------
    MalformedInputError
        If the input does not decode to a public key.
    InvalidKeyError
        If the public key is not an RSA key.
    """
    data = text.encode("utf-8") if isinstance(text, str) else text
    try:
        if b"-----BEGIN" in data:
            key = serialization.load_pem_public_key(data)
        else:
            key = serialization.load_der_public_key(_b64decode(data))
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise MalformedInputError("Input does not hold a valid public key") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise InvalidKeyError(f"Expected an RSA public key, got {type(key).__name__}")
    return RSAPublicKey.from_cryptography(key)


def load_rsa_private_key(text: bytes | str) -> RSAPrivateKey:
    """Load an RSA private key from a PEM block or bare base64 DER.

    Raises
    ------
    MalformedInputError
        If the input does not decode to a private key.
    InvalidKeyError
        If the private key is not an RSA key.
    """
    pem_object = decode_pem(text)
    if pem_object is None:
        data = text.encode("utf-8") if isinstance(text, str) else text
        info = PrivateKeyInfo(
            der=_b64decode(data), label="PRIVATE KEY", algorithm=KeyAlgorithm.RSA
        )
    else:
        info = expect_pem(pem_object, PemKind.PRIVATE_KEY)
    return rsa_private_key_from_info(info)


def _b64decode(data: bytes) -> bytes:
    try:
        return base64.b64decode(b"".join(data.split()), validate=True)
    except binascii.Error as exc:
        raise MalformedInputError("Input is not valid base64") from exc
