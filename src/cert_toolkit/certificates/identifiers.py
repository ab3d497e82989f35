"""Subject and authority key identifiers for derived public keys.

Both identifiers are the SHA-1 hash of the subjectPublicKey bit string
(RFC 5280 section 4.2.1.2, method 1), computed by ``cryptography``.
"""
from __future__ import annotations

from typing import Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import CertificateIssuerPublicKeyTypes

from cert_toolkit.errors import UnsupportedCurveError
from cert_toolkit.keys.material import ECPublicKey, RSAPublicKey

KeyLike = Union[RSAPublicKey, ECPublicKey, CertificateIssuerPublicKeyTypes]


def subject_key_identifier(public_key: KeyLike) -> x509.SubjectKeyIdentifier:
    """Return the SubjectKeyIdentifier extension value for *public_key*."""
    return x509.SubjectKeyIdentifier.from_public_key(_as_cryptography(public_key))


def authority_key_identifier(public_key: KeyLike) -> x509.AuthorityKeyIdentifier:
    """Return the AuthorityKeyIdentifier extension value for an issuer key."""
    return x509.AuthorityKeyIdentifier.from_issuer_public_key(_as_cryptography(public_key))


def _as_cryptography(public_key: KeyLike) -> CertificateIssuerPublicKeyTypes:
    if isinstance(public_key, RSAPublicKey):
        return public_key.to_cryptography()
    if isinstance(public_key, ECPublicKey):
        try:
            return serialization.load_pem_public_key(public_key.to_pem())
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise UnsupportedCurveError(
                "Key identifiers need a named curve supported by cryptography"
            ) from exc
    return public_key
