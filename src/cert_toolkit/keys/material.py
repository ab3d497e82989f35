"""Immutable RSA and EC key values.

These dataclasses hold the numbers the derivation logic works on. They are
built in one step from caller input (or from ``cryptography`` / ``ecdsa``
key objects) and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from ecdsa import SigningKey, VerifyingKey, ellipticcurve
from ecdsa.der import topem
from ecdsa.errors import MalformedPointError

from cert_toolkit.algorithms import KeyAlgorithm
from cert_toolkit.curves.catalog import (
    CurveDomainParameters,
    NamedCurveCatalog,
    NamedCurveParameters,
    default_catalog,
)
from cert_toolkit.errors import InvalidKeyError, UnsupportedCurveError

RSA_PUBLIC_EXPONENT = 65537


# ---------------------------------------------------------------------------
# RSA
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RSAPrivateKey:
    """RSA private key material.

    Parameters
    ----------
    modulus:
        The modulus ``N``; None when the source did not provide one.
    private_exponent:
        The private exponent ``d``.
    encoded:
        PKCS#8 DER encoding of the full key, when known.
    """

    modulus: Optional[int]
    private_exponent: Optional[int] = field(default=None, repr=False)
    encoded: bytes = field(default=b"", repr=False, compare=False)

    @property
    def algorithm(self) -> KeyAlgorithm:
        return KeyAlgorithm.RSA

    @classmethod
    def from_cryptography(cls, key: rsa.RSAPrivateKey) -> "RSAPrivateKey":
        """Capture the numbers and PKCS#8 encoding of a ``cryptography`` key."""
        numbers = key.private_numbers()
        encoded = key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls(
            modulus=numbers.public_numbers.n,
            private_exponent=numbers.d,
            encoded=encoded,
        )

    def to_pem(self) -> bytes:
        """Return the key as an unencrypted ``PRIVATE KEY`` PEM block.

        Raises
        ------
        InvalidKeyError
            If the key was built from bare numbers with no encoded form.
        """
        if not self.encoded:
            raise InvalidKeyError("RSA private key has no encoded form to serialize")
        return topem(self.encoded, "PRIVATE KEY")


@dataclass(frozen=True)
class RSAPublicKey:
    """RSA public key ``(N, e)``."""

    modulus: int
    public_exponent: int = RSA_PUBLIC_EXPONENT

    @property
    def algorithm(self) -> KeyAlgorithm:
        return KeyAlgorithm.RSA

    @classmethod
    def from_cryptography(cls, key: rsa.RSAPublicKey) -> "RSAPublicKey":
        numbers = key.public_numbers()
        return cls(modulus=numbers.n, public_exponent=numbers.e)

    def to_cryptography(self) -> rsa.RSAPublicKey:
        return rsa.RSAPublicNumbers(self.public_exponent, self.modulus).public_key()

    def to_pem(self) -> bytes:
        """Return the key as a SubjectPublicKeyInfo ``PUBLIC KEY`` PEM block."""
        return self.to_cryptography().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )


# ---------------------------------------------------------------------------
# EC
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ECPrivateKey:
    """EC private scalar together with its curve domain parameters."""

    private_value: int = field(repr=False)
    parameters: CurveDomainParameters

    @property
    def algorithm(self) -> KeyAlgorithm:
        return KeyAlgorithm.EC

    @classmethod
    def from_signing_key(cls, signing_key: SigningKey) -> "ECPrivateKey":
        """Capture the scalar and explicit domain of an ``ecdsa`` signing key."""
        return cls(
            private_value=signing_key.privkey.secret_multiplier,
            parameters=CurveDomainParameters.from_ecdsa_curve(signing_key.curve),
        )

    @classmethod
    def from_cryptography(
        cls,
        key: ec.EllipticCurvePrivateKey,
        catalog: NamedCurveCatalog | None = None,
    ) -> "ECPrivateKey":
        """Capture a ``cryptography`` EC key, resolving its curve by name.

        Raises
        ------
        UnsupportedCurveError
            If the key's curve is not in the catalog (for example a binary
            field curve).
        """
        if catalog is None:
            catalog = default_catalog()
        try:
            parameters = catalog.get(key.curve.name)
        except KeyError as exc:
            raise UnsupportedCurveError(
                f"Curve {key.curve.name!r} is not a supported prime-field curve"
            ) from exc
        return cls(
            private_value=key.private_numbers().private_value,
            parameters=parameters,
        )

    def to_pem(self) -> bytes:
        """Return the key as an ``EC PRIVATE KEY`` PEM block.

        Named curves are written by OID; anything else with explicit
        domain parameters.
        """
        parameters = default_catalog().lookup(self.parameters) or self.parameters
        try:
            signing_key = SigningKey.from_secret_exponent(
                self.private_value, curve=parameters.to_ecdsa_curve()
            )
        except MalformedPointError as exc:
            raise InvalidKeyError(str(exc)) from exc
        return signing_key.to_pem()


@dataclass(frozen=True)
class ECPublicKey:
    """EC public point ``Q`` with named or explicit domain parameters."""

    x: int
    y: int
    parameters: CurveDomainParameters

    @property
    def algorithm(self) -> KeyAlgorithm:
        return KeyAlgorithm.EC

    @property
    def point(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def curve_name(self) -> str | None:
        """Canonical curve name, or None for explicit parameters."""
        if isinstance(self.parameters, NamedCurveParameters):
            return self.parameters.name
        return None

    def to_pem(self) -> bytes:
        """Return the key as a SubjectPublicKeyInfo ``PUBLIC KEY`` PEM block."""
        if not self.parameters.contains_point(self.x, self.y):
            raise InvalidKeyError("EC public point is not on the declared curve")
        curve = self.parameters.to_ecdsa_curve()
        point = ellipticcurve.Point(curve.curve, self.x, self.y)
        try:
            verifying_key = VerifyingKey.from_public_point(point, curve=curve)
        except MalformedPointError as exc:
            raise InvalidKeyError(str(exc)) from exc
        return verifying_key.to_pem()


PrivateKey = Union[RSAPrivateKey, ECPrivateKey]
PublicKey = Union[RSAPublicKey, ECPublicKey]


@dataclass(frozen=True)
class KeyPair:
    """A private key and the public key derived from it."""

    private_key: PrivateKey
    public_key: PublicKey

    @property
    def algorithm(self) -> KeyAlgorithm:
        return self.private_key.algorithm
