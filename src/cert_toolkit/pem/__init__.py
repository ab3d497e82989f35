"""PEM codec for keys, certificates, CRLs and certification requests.

File helpers live in :mod:`cert_toolkit.pem.files`.
"""
from __future__ import annotations

from cert_toolkit.pem.codec import (
    CertificateHolder,
    CertificationRequest,
    CRLHolder,
    PemKind,
    PemObject,
    PrivateKeyInfo,
    decode_pem,
    encode_pem,
    expect_pem,
    read_pem,
)

__all__ = [
    "CRLHolder",
    "CertificateHolder",
    "CertificationRequest",
    "PemKind",
    "PemObject",
    "PrivateKeyInfo",
    "decode_pem",
    "encode_pem",
    "expect_pem",
    "read_pem",
]
