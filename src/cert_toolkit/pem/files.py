"""Read and write PEM files.

Typed readers return the decoded ``cryptography`` object (or key value)
and raise :class:`~cert_toolkit.errors.UnexpectedPemObjectError` when the
file holds a different kind of object.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from cryptography import x509

from cert_toolkit.keys.loading import private_key_from_info
from cert_toolkit.keys.material import PrivateKey
from cert_toolkit.pem.codec import (
    CertificateHolder,
    CertificationRequest,
    CRLHolder,
    PemKind,
    PemObject,
    encode_pem,
    expect_pem,
    read_pem,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ---------------------------------------------------------------------------
# Generic
# ---------------------------------------------------------------------------


def read_pem_file(path: PathLike) -> PemObject:
    """Decode the first PEM block in the file at *path*.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    MalformedInputError
        If the file holds no decodable PEM block.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"PEM file does not exist: {path}")
    return read_pem(path.read_bytes())


def write_pem_file(pem_object: PemObject, path: PathLike) -> None:
    """Write *pem_object* to *path*, creating parent directories."""
    _write(encode_pem(pem_object), Path(path))


def _write(data: bytes, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info("Wrote %d bytes of PEM to %s", len(data), path)


# ---------------------------------------------------------------------------
# Typed readers
# ---------------------------------------------------------------------------


def read_certificate(path: PathLike) -> x509.Certificate:
    return expect_pem(read_pem_file(path), PemKind.CERTIFICATE).certificate


def read_crl(path: PathLike) -> x509.CertificateRevocationList:
    return expect_pem(read_pem_file(path), PemKind.CRL).crl


def read_csr(path: PathLike) -> x509.CertificateSigningRequest:
    return expect_pem(read_pem_file(path), PemKind.CERTIFICATION_REQUEST).request


def read_private_key(path: PathLike) -> PrivateKey:
    """Read an RSA or EC private key value from *path*."""
    return private_key_from_info(expect_pem(read_pem_file(path), PemKind.PRIVATE_KEY))


def certificate_from_pem(text: bytes | str) -> x509.Certificate:
    """Decode a PEM certificate held in memory."""
    return expect_pem(read_pem(text), PemKind.CERTIFICATE).certificate


def csr_from_pem(text: bytes | str) -> x509.CertificateSigningRequest:
    """Decode a PEM certification request held in memory."""
    return expect_pem(read_pem(text), PemKind.CERTIFICATION_REQUEST).request


# ---------------------------------------------------------------------------
# Typed writers
# ---------------------------------------------------------------------------


def write_certificate(certificate: x509.Certificate, path: PathLike) -> None:
    write_pem_file(CertificateHolder(certificate), path)


def write_crl(crl: x509.CertificateRevocationList, path: PathLike) -> None:
    write_pem_file(CRLHolder(crl), path)


def write_csr(request: x509.CertificateSigningRequest, path: PathLike) -> None:
    write_pem_file(CertificationRequest(request), path)


def write_private_key(private_key: PrivateKey, path: PathLike) -> None:
    """Write an unencrypted private key PEM block to *path*."""
    _write(private_key.to_pem(), Path(path))
