"""RSA and EC key values, public key derivation and key generation."""
from __future__ import annotations

from cert_toolkit.keys.material import (
    RSA_PUBLIC_EXPONENT,
    ECPrivateKey,
    ECPublicKey,
    KeyAlgorithm,
    KeyPair,
    PrivateKey,
    PublicKey,
    RSAPrivateKey,
    RSAPublicKey,
)
from cert_toolkit.keys.loading import (
    ec_private_key_from_info,
    private_key_from_info,
    rsa_private_key_from_info,
)
from cert_toolkit.keys.derivation import (
    derive_ec_public_key,
    derive_public_key,
    derive_rsa_public_key,
    parse_ec_key_pair_from_pem,
    parse_key_pair_from_pem,
    parse_rsa_key_pair_from_pem,
)
from cert_toolkit.keys.generation import (
    generate_rsa_key_pair,
    load_rsa_private_key,
    load_rsa_public_key,
)

__all__ = [
    "ECPrivateKey",
    "ECPublicKey",
    "KeyAlgorithm",
    "KeyPair",
    "PrivateKey",
    "PublicKey",
    "RSAPrivateKey",
    "RSAPublicKey",
    "RSA_PUBLIC_EXPONENT",
    "derive_ec_public_key",
    "derive_public_key",
    "derive_rsa_public_key",
    "ec_private_key_from_info",
    "generate_rsa_key_pair",
    "load_rsa_private_key",
    "load_rsa_public_key",
    "parse_ec_key_pair_from_pem",
    "parse_key_pair_from_pem",
    "parse_rsa_key_pair_from_pem",
    "private_key_from_info",
    "rsa_private_key_from_info",
]
