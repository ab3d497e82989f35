"""Turn decoded PEM private keys into key values.

RSA keys are decoded with ``cryptography``. EC keys are decoded with
``ecdsa`` because it accepts both named-curve and explicit domain
parameters, which ``cryptography`` refuses.
"""
from __future__ import annotations

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from ecdsa import SigningKey
from ecdsa.curves import UnknownCurveError
from ecdsa.der import UnexpectedDER
from ecdsa.errors import MalformedPointError

from cert_toolkit.errors import InvalidKeyError, MalformedInputError, UnsupportedCurveError
from cert_toolkit.keys.material import ECPrivateKey, KeyAlgorithm, PrivateKey, RSAPrivateKey
from cert_toolkit.pem.codec import PrivateKeyInfo

_EC_CURVE_ENCODINGS = ("named_curve", "explicit")


def rsa_private_key_from_info(info: PrivateKeyInfo) -> RSAPrivateKey:
    """Decode an RSA private key (PKCS#8 or PKCS#1).

    Raises
    ------
    InvalidKeyError
        If the key is not an RSA key.
    MalformedInputError
        If the DER payload does not decode.
    """
    if info.algorithm is not KeyAlgorithm.RSA:
        raise InvalidKeyError(f"Expected an RSA private key, got {_describe(info)}")
    try:
        key = serialization.load_der_private_key(info.der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise MalformedInputError("RSA private key could not be decoded") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise InvalidKeyError(f"Expected an RSA private key, got {type(key).__name__}")
    return RSAPrivateKey.from_cryptography(key)


def ec_private_key_from_info(info: PrivateKeyInfo) -> ECPrivateKey:
    """Decode an EC private key (SEC 1 or PKCS#8, named or explicit curve).

    Raises
    ------
    InvalidKeyError
        If the key is not an EC key or its scalar is out of range.
    UnsupportedCurveError
        If the curve is unknown or not over a prime field.
    MalformedInputError
        If the DER payload does not decode.
    """
    if info.algorithm is not KeyAlgorithm.EC:
        raise InvalidKeyError(f"Expected an EC private key, got {_describe(info)}")
    try:
        signing_key = SigningKey.from_der(info.der, valid_curve_encodings=_EC_CURVE_ENCODINGS)
    except UnknownCurveError as exc:
        raise UnsupportedCurveError(str(exc)) from exc
    except MalformedPointError as exc:
        raise InvalidKeyError(str(exc)) from exc
    except (UnexpectedDER, ValueError) as exc:
        raise MalformedInputError("EC private key could not be decoded") from exc
    return ECPrivateKey.from_signing_key(signing_key)


def private_key_from_info(info: PrivateKeyInfo) -> PrivateKey:
    """Decode *info* according to its algorithm."""
    if info.algorithm is KeyAlgorithm.RSA:
        return rsa_private_key_from_info(info)
    if info.algorithm is KeyAlgorithm.EC:
        return ec_private_key_from_info(info)
    raise InvalidKeyError(f"Unsupported private key algorithm in {info.label!r} block")


def _describe(info: PrivateKeyInfo) -> str:
    if info.algorithm is None:
        return "an unsupported key algorithm"
    return f"an {info.algorithm.value} key"
