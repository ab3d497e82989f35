"""Public key reconstruction from private keys.

RSA public keys are rebuilt from the modulus and the fixed exponent 65537;
the exponent is never recovered from key material, so the result is only
correct for keys generated with that exponent. EC public keys are computed
as ``Q = d*G`` and carry named-curve parameters when the private key's
domain matches a standard curve.
"""
from __future__ import annotations

import logging

from cert_toolkit.curves.arithmetic import generator_has_order, multiply_generator
from cert_toolkit.curves.catalog import (
    CurveDomainParameters,
    NamedCurveParameters,
    default_catalog,
)
from cert_toolkit.curves.identifier import CurveIdentifier
from cert_toolkit.errors import InvalidKeyError, MalformedInputError, MissingKeyError
from cert_toolkit.keys.loading import (
    ec_private_key_from_info,
    private_key_from_info,
    rsa_private_key_from_info,
)
from cert_toolkit.keys.material import (
    RSA_PUBLIC_EXPONENT,
    ECPrivateKey,
    ECPublicKey,
    KeyPair,
    PrivateKey,
    PublicKey,
    RSAPrivateKey,
    RSAPublicKey,
)
from cert_toolkit.pem.codec import PemKind, decode_pem, expect_pem, read_pem

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------


def derive_rsa_public_key(private_key: RSAPrivateKey) -> RSAPublicKey:
    """Return ``(N, 65537)`` for an RSA private key with modulus ``N``.

    Raises
    ------
    InvalidKeyError
        If the modulus is absent, zero or negative.
    """
    modulus = private_key.modulus
    if modulus is None or modulus <= 0:
        raise InvalidKeyError("RSA private key has no positive modulus")
    return RSAPublicKey(modulus=modulus, public_exponent=RSA_PUBLIC_EXPONENT)


def derive_ec_public_key(
    private_key: ECPrivateKey,
    identifier: CurveIdentifier | None = None,
) -> ECPublicKey:
    """Compute the public point ``Q = d*G`` of an EC private key.

    Parameters
    ----------
    private_key:
        Scalar ``d`` and the domain parameters of its curve.
    identifier:
        Curve identifier used to name the output parameters. Defaults to
        one over the default catalog.

    Returns
    -------
    ECPublicKey
        ``Q`` with named parameters if the domain is a standard curve,
        otherwise with the private key's explicit parameters.

    Raises
    ------
    InvalidKeyError
        If ``d`` is not in ``[1, n)`` or the domain parameters are malformed.
    """
    parameters = private_key.parameters
    _validate_domain(parameters)

    scalar = private_key.private_value
    if not 1 <= scalar < parameters.order:
        raise InvalidKeyError("EC private scalar must be in the range [1, n)")

    if identifier is None:
        identifier = CurveIdentifier(default_catalog())
    resolved = identifier.match(parameters)
    # n*G = O is checked only for parameters outside the catalog.
    named = isinstance(resolved, NamedCurveParameters)
    if not named and not generator_has_order(resolved):
        raise InvalidKeyError("EC group order does not match the order of the generator")

    x, y = multiply_generator(resolved, scalar)
    logger.debug("Derived EC public key on %s", getattr(resolved, "name", "explicit curve"))
    return ECPublicKey(x=x, y=y, parameters=resolved)


def derive_public_key(private_key: PrivateKey) -> PublicKey:
    """Derive the public key of an RSA or EC private key."""
    if isinstance(private_key, RSAPrivateKey):
        return derive_rsa_public_key(private_key)
    if isinstance(private_key, ECPrivateKey):
        return derive_ec_public_key(private_key)
    raise InvalidKeyError(f"Unsupported private key type {type(private_key).__name__}")


def _validate_domain(parameters: CurveDomainParameters) -> None:
    if parameters.p <= 3:
        raise InvalidKeyError("EC field prime must be greater than 3")
    if parameters.order <= 1:
        raise InvalidKeyError("EC group order must be greater than 1")
    if parameters.cofactor < 1:
        raise InvalidKeyError("EC cofactor must be positive")
    gx, gy = parameters.generator
    if not (0 <= gx < parameters.p and 0 <= gy < parameters.p):
        raise InvalidKeyError("EC generator coordinates are outside the field")
    if not parameters.contains_point(gx, gy):
        raise InvalidKeyError("EC generator is not on the declared curve")


# ---------------------------------------------------------------------------
# PEM entry points
# ---------------------------------------------------------------------------


def parse_ec_key_pair_from_pem(
    text: bytes | str,
    identifier: CurveIdentifier | None = None,
) -> KeyPair:
    """Read an EC private key from PEM and derive its public key.

    Raises
    ------
    MalformedInputError
        If *text* holds no PEM block or the block is not a private key.
    InvalidKeyError
        If the private key is not an EC key, or is invalid.
    UnsupportedCurveError
        If the key's curve cannot be represented.
    """
    info = expect_pem(read_pem(text), PemKind.PRIVATE_KEY)
    private_key = ec_private_key_from_info(info)
    return KeyPair(
        private_key=private_key,
        public_key=derive_ec_public_key(private_key, identifier),
    )


def parse_rsa_key_pair_from_pem(text: bytes | str) -> KeyPair:
    """Read an RSA private key from PEM and derive its public key.

    Only correct for keys generated with public exponent 65537.

    Raises
    ------
    MissingKeyError
        If *text* holds no PEM block at all.
    MalformedInputError
        If the block is not a private key.
    InvalidKeyError
        If the private key is not an RSA key.
    """
    pem_object = decode_pem(text)
    if pem_object is None:
        raise MissingKeyError("missing PEM-encoded private key")
    info = expect_pem(pem_object, PemKind.PRIVATE_KEY)
    private_key = rsa_private_key_from_info(info)
    return KeyPair(private_key=private_key, public_key=derive_rsa_public_key(private_key))


def parse_key_pair_from_pem(text: bytes | str) -> KeyPair:
    """Read an RSA or EC private key from PEM and derive its public key."""
    pem_object = decode_pem(text)
    if pem_object is None:
        raise MalformedInputError("Input does not contain a PEM block")
    private_key = private_key_from_info(expect_pem(pem_object, PemKind.PRIVATE_KEY))
    return KeyPair(private_key=private_key, public_key=derive_public_key(private_key))
