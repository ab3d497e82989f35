"""cert-toolkit — PEM key material toolkit with public key reconstruction.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import cert_toolkit
>>> cert_toolkit.__version__
'0.1.0'

Quick start
-----------
::

    from cert_toolkit import parse_ec_key_pair_from_pem, match_named_curve

    key_pair = parse_ec_key_pair_from_pem(pem_text)
    key_pair.public_key.curve_name      # "secp256r1"
    key_pair.public_key.to_pem()
"""
from __future__ import annotations

__version__: str = "0.1.0"

from cert_toolkit.algorithms import KeyAlgorithm
from cert_toolkit.errors import (
    InvalidKeyError,
    KeyMaterialError,
    MalformedInputError,
    MissingKeyError,
    UnexpectedPemObjectError,
    UnsupportedCurveError,
)

# ------------------------------------------------------------------
# Curves
# ------------------------------------------------------------------
from cert_toolkit.curves import (
    CurveDomainParameters,
    CurveIdentifier,
    NamedCurveCatalog,
    NamedCurveParameters,
    default_catalog,
    match_named_curve,
)

# ------------------------------------------------------------------
# Keys
# ------------------------------------------------------------------
from cert_toolkit.keys import (
    RSA_PUBLIC_EXPONENT,
    ECPrivateKey,
    ECPublicKey,
    KeyPair,
    RSAPrivateKey,
    RSAPublicKey,
    derive_ec_public_key,
    derive_public_key,
    derive_rsa_public_key,
    generate_rsa_key_pair,
    load_rsa_private_key,
    load_rsa_public_key,
    parse_ec_key_pair_from_pem,
    parse_key_pair_from_pem,
    parse_rsa_key_pair_from_pem,
)

# ------------------------------------------------------------------
# PEM
# ------------------------------------------------------------------
from cert_toolkit.pem import (
    CertificateHolder,
    CertificationRequest,
    CRLHolder,
    PemKind,
    PrivateKeyInfo,
    decode_pem,
    encode_pem,
    expect_pem,
    read_pem,
)
from cert_toolkit.pem.files import (
    certificate_from_pem,
    csr_from_pem,
    read_certificate,
    read_crl,
    read_csr,
    read_pem_file,
    read_private_key,
    write_certificate,
    write_crl,
    write_csr,
    write_pem_file,
    write_private_key,
)

# ------------------------------------------------------------------
# Certificates
# ------------------------------------------------------------------
from cert_toolkit.certificates import authority_key_identifier, subject_key_identifier

__all__ = [
    "__version__",
    # errors
    "InvalidKeyError",
    "KeyMaterialError",
    "MalformedInputError",
    "MissingKeyError",
    "UnexpectedPemObjectError",
    "UnsupportedCurveError",
    # curves
    "CurveDomainParameters",
    "CurveIdentifier",
    "NamedCurveCatalog",
    "NamedCurveParameters",
    "default_catalog",
    "match_named_curve",
    # keys
    "ECPrivateKey",
    "ECPublicKey",
    "KeyAlgorithm",
    "KeyPair",
    "RSAPrivateKey",
    "RSAPublicKey",
    "RSA_PUBLIC_EXPONENT",
    "derive_ec_public_key",
    "derive_public_key",
    "derive_rsa_public_key",
    "generate_rsa_key_pair",
    "load_rsa_private_key",
    "load_rsa_public_key",
    "parse_ec_key_pair_from_pem",
    "parse_key_pair_from_pem",
    "parse_rsa_key_pair_from_pem",
    # pem
    "CRLHolder",
    "CertificateHolder",
    "CertificationRequest",
    "PemKind",
    "PrivateKeyInfo",
    "certificate_from_pem",
    "csr_from_pem",
    "decode_pem",
    "encode_pem",
    "expect_pem",
    "read_certificate",
    "read_crl",
    "read_csr",
    "read_pem",
    "read_pem_file",
    "read_private_key",
    "write_certificate",
    "write_crl",
    "write_csr",
    "write_pem_file",
    "write_private_key",
    # certificates
    "authority_key_identifier",
    "subject_key_identifier",
]
