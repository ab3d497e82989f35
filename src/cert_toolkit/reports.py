"""Pydantic models describing keys and PEM objects for JSON output."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from cert_toolkit.curves.catalog import CurveDomainParameters, NamedCurveParameters
from cert_toolkit.keys.material import ECPublicKey, PublicKey
from cert_toolkit.pem.codec import (
    CertificateHolder,
    CertificationRequest,
    CRLHolder,
    PemObject,
    PrivateKeyInfo,
)


class CurveReport(BaseModel):
    """Domain parameters of an EC curve, numbers as hex strings."""

    name: Optional[str] = None
    oid: Optional[str] = None
    aliases: list[str] = Field(default_factory=list)
    field_bits: int
    order: str
    cofactor: int

    @classmethod
    def from_parameters(cls, parameters: CurveDomainParameters) -> "CurveReport":
        named = isinstance(parameters, NamedCurveParameters)
        return cls(
            name=parameters.name if named else None,
            oid=parameters.oid if named else None,
            aliases=list(parameters.aliases) if named else [],
            field_bits=parameters.p.bit_length(),
            order=hex(parameters.order),
            cofactor=parameters.cofactor,
        )


class PublicKeyReport(BaseModel):
    """A derived public key."""

    algorithm: str
    modulus_bits: Optional[int] = None
    public_exponent: Optional[int] = None
    curve: Optional[CurveReport] = None
    x: Optional[str] = None
    y: Optional[str] = None
    pem: str

    @classmethod
    def from_public_key(cls, public_key: PublicKey) -> "PublicKeyReport":
        pem = public_key.to_pem().decode("ascii")
        if isinstance(public_key, ECPublicKey):
            return cls(
                algorithm=public_key.algorithm.value,
                curve=CurveReport.from_parameters(public_key.parameters),
                x=hex(public_key.x),
                y=hex(public_key.y),
                pem=pem,
            )
        return cls(
            algorithm=public_key.algorithm.value,
            modulus_bits=public_key.modulus.bit_length(),
            public_exponent=public_key.public_exponent,
            pem=pem,
        )


class PemObjectReport(BaseModel):
    """Kind and a short summary of a decoded PEM object."""

    kind: str
    details: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_pem_object(cls, pem_object: PemObject) -> "PemObjectReport":
        return cls(kind=pem_object.kind.value, details=_details(pem_object))


def _details(pem_object: PemObject) -> dict[str, str]:
    if isinstance(pem_object, PrivateKeyInfo):
        algorithm = pem_object.algorithm.value if pem_object.algorithm else "unsupported"
        return {"label": pem_object.label, "algorithm": algorithm}
    if isinstance(pem_object, CertificateHolder):
        cert = pem_object.certificate
        return {
            "subject": cert.subject.rfc4514_string(),
            "issuer": cert.issuer.rfc4514_string(),
            "serial_number": str(cert.serial_number),
            "not_after": cert.not_valid_after_utc.isoformat(),
        }
    if isinstance(pem_object, CRLHolder):
        crl = pem_object.crl
        next_update = crl.next_update_utc
        return {
            "issuer": crl.issuer.rfc4514_string(),
            "revoked": str(len(crl)),
            "next_update": next_update.isoformat() if next_update else "",
        }
    if isinstance(pem_object, CertificationRequest):
        request = pem_object.request
        return {
            "subject": request.subject.rfc4514_string(),
            "signature_valid": str(request.is_signature_valid).lower(),
        }
    return {}
