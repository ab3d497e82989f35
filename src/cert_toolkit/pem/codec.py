"""PEM codec — classify, decode and encode PEM blocks.

:func:`decode_pem` finds the first PEM block in its input and turns it into
one of four object kinds: a private key, an X.509 certificate, a CRL or a
certification request. Certificates, CRLs and CSRs are parsed with
``cryptography``. Private keys are kept as DER together with the key
algorithm, which is read from the PEM label or from the PKCS#8
AlgorithmIdentifier; turning them into key values is the job of
:mod:`cert_toolkit.keys.loading`.

Three outcomes are kept apart:

- no PEM block at all: :func:`decode_pem` returns ``None``;
- a block of another kind than the caller wants: :func:`expect_pem` raises
  :class:`~cert_toolkit.errors.UnexpectedPemObjectError`;
- a decoded object of the requested kind.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from ecdsa import der as ecdsa_der

from cert_toolkit.errors import MalformedInputError, UnexpectedPemObjectError
from cert_toolkit.algorithms import KeyAlgorithm

_PEM_BLOCK = re.compile(
    rb"-----BEGIN (?P<label>[A-Z0-9 ]+)-----(?P<body>.*?)-----END (?P=label)-----",
    re.DOTALL,
)

_RSA_ENCRYPTION_OID = (1, 2, 840, 113549, 1, 1, 1)
_EC_PUBLIC_KEY_OID = (1, 2, 840, 10045, 2, 1)

_KEY_ALGORITHM_OIDS: dict[tuple[int, ...], KeyAlgorithm] = {
    _RSA_ENCRYPTION_OID: KeyAlgorithm.RSA,
    _EC_PUBLIC_KEY_OID: KeyAlgorithm.EC,
}

# Labels whose algorithm is implied; PKCS#8 "PRIVATE KEY" is read from the DER.
_PRIVATE_KEY_LABELS: dict[str, Optional[KeyAlgorithm]] = {
    "PRIVATE KEY": None,
    "RSA PRIVATE KEY": KeyAlgorithm.RSA,
    "EC PRIVATE KEY": KeyAlgorithm.EC,
}
_CERTIFICATE_LABELS = frozenset({"CERTIFICATE", "X509 CERTIFICATE"})
_CRL_LABELS = frozenset({"X509 CRL"})
_CSR_LABELS = frozenset({"CERTIFICATE REQUEST", "NEW CERTIFICATE REQUEST"})
# Written ahead of the key by "openssl ecparam -genkey"; not an object of its own.
_SKIPPED_LABELS = frozenset({"EC PARAMETERS"})


class PemKind(str, Enum):
    """Kinds of object a PEM block can decode to."""

    PRIVATE_KEY = "private key"
    CERTIFICATE = "certificate"
    CRL = "crl"
    CERTIFICATION_REQUEST = "certification request"


# ---------------------------------------------------------------------------
# PEM objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PrivateKeyInfo:
    """An undecoded private key.

    Parameters
    ----------
    der:
        DER payload of the PEM block.
    label:
        The PEM label (``PRIVATE KEY``, ``RSA PRIVATE KEY``, ``EC PRIVATE KEY``).
    algorithm:
        Key algorithm, or None for algorithms the toolkit does not handle.
    """

    der: bytes = field(repr=False)
    label: str
    algorithm: Optional[KeyAlgorithm]

    @property
    def kind(self) -> PemKind:
        return PemKind.PRIVATE_KEY

    def to_pem(self) -> bytes:
        return ecdsa_der.topem(self.der, self.label)


@dataclass(frozen=True)
class CertificateHolder:
    """A decoded X.509 certificate."""

    certificate: x509.Certificate

    @property
    def kind(self) -> PemKind:
        return PemKind.CERTIFICATE

    def to_pem(self) -> bytes:
        return self.certificate.public_bytes(serialization.Encoding.PEM)


@dataclass(frozen=True)
class CRLHolder:
    """A decoded X.509 certificate revocation list."""

    crl: x509.CertificateRevocationList

    @property
    def kind(self) -> PemKind:
        return PemKind.CRL

    def to_pem(self) -> bytes:
        return self.crl.public_bytes(serialization.Encoding.PEM)


@dataclass(frozen=True)
class CertificationRequest:
    """A decoded PKCS#10 certification request."""

    request: x509.CertificateSigningRequest

    @property
    def kind(self) -> PemKind:
        return PemKind.CERTIFICATION_REQUEST

    def to_pem(self) -> bytes:
        return self.request.public_bytes(serialization.Encoding.PEM)


PemObject = Union[PrivateKeyInfo, CertificateHolder, CRLHolder, CertificationRequest]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_pem(data: bytes | str) -> PemObject | None:
    """Decode the first PEM block in *data*.

    ``EC PARAMETERS`` blocks are skipped, so the key that follows them in
    ``openssl ecparam -genkey`` output is decoded.

    Parameters
    ----------
    data:
        PEM text, as bytes or str. Text around the block is ignored.

    Returns
    -------
    PemObject | None
        The decoded object, or None if *data* contains no PEM block.

    Raises
    ------
    MalformedInputError
        If a block is present but its label is unsupported or its payload
        does not decode, or if the only blocks are ``EC PARAMETERS``.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    match = None
    skipped = False
    for candidate in _PEM_BLOCK.finditer(data):
        if candidate.group("label").decode("ascii") in _SKIPPED_LABELS:
            skipped = True
            continue
        match = candidate
        break
    if match is None:
        if skipped:
            raise MalformedInputError("PEM input holds EC PARAMETERS but no object")
        return None

    label = match.group("label").decode("ascii")
    try:
        payload = ecdsa_der.unpem(match.group("body"))
    except ValueError as exc:
        raise MalformedInputError(
            f"PEM block {label!r} has an invalid base64 payload"
        ) from exc
    if not payload:
        raise MalformedInputError(f"PEM block {label!r} is empty")

    return _classify(label, payload)


def read_pem(data: bytes | str) -> PemObject:
    """Decode the first PEM block in *data*, failing if there is none.

    Raises
    ------
    MalformedInputError
        If *data* contains no PEM block or the block does not decode.
    """
    pem_object = decode_pem(data)
    if pem_object is None:
        raise MalformedInputError("Input does not contain a PEM block")
    return pem_object


def expect_pem(pem_object: PemObject, kind: PemKind) -> PemObject:
    """Return *pem_object* if it is of *kind*.

    Raises
    ------
    UnexpectedPemObjectError
        If the object is of another kind.
    """
    if pem_object.kind is not kind:
        raise UnexpectedPemObjectError(kind.value, pem_object.kind.value)
    return pem_object


def encode_pem(pem_object: PemObject) -> bytes:
    """Serialize *pem_object* back to a PEM block."""
    return pem_object.to_pem()


def _classify(label: str, payload: bytes) -> PemObject:
    if label in _PRIVATE_KEY_LABELS:
        algorithm = _PRIVATE_KEY_LABELS[label]
        if algorithm is None:
            algorithm = _pkcs8_algorithm(payload)
        return PrivateKeyInfo(der=payload, label=label, algorithm=algorithm)

    try:
        if label in _CERTIFICATE_LABELS:
            return CertificateHolder(x509.load_der_x509_certificate(payload))
        if label in _CRL_LABELS:
            return CRLHolder(x509.load_der_x509_crl(payload))
        if label in _CSR_LABELS:
            return CertificationRequest(x509.load_der_x509_csr(payload))
    except ValueError as exc:
        raise MalformedInputError(
            f"PEM block {label!r} does not hold a valid DER structure"
        ) from exc

    raise MalformedInputError(f"Unsupported PEM block label {label!r}")


def _pkcs8_algorithm(payload: bytes) -> KeyAlgorithm | None:
    """Read the key algorithm OID from a PKCS#8 PrivateKeyInfo."""
    try:
        body, _ = ecdsa_der.remove_sequence(payload)
        _, body = ecdsa_der.remove_integer(body)
        algorithm_identifier, _ = ecdsa_der.remove_sequence(body)
        oid, _ = ecdsa_der.remove_object(algorithm_identifier)
    except ecdsa_der.UnexpectedDER as exc:
        raise MalformedInputError("PRIVATE KEY block is not a PKCS#8 structure") from exc
    return _KEY_ALGORITHM_OIDS.get(oid)
