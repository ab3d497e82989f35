"""Tests for cert_toolkit.keys.derivation — public key reconstruction."""
from __future__ import annotations

import dataclasses
import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.x509.oid import NameOID
from ecdsa import NIST256p, SigningKey, der
from ecdsa import curves as ecdsa_curves
from ecdsa import ellipticcurve

from cert_toolkit.curves.catalog import (
    CurveDomainParameters,
    NamedCurveCatalog,
    NamedCurveParameters,
)
from cert_toolkit.curves.identifier import CurveIdentifier
from cert_toolkit.errors import (
    InvalidKeyError,
    MalformedInputError,
    MissingKeyError,
    UnexpectedPemObjectError,
    UnsupportedCurveError,
)
from cert_toolkit.keys.derivation import (
    derive_ec_public_key,
    derive_public_key,
    derive_rsa_public_key,
    parse_ec_key_pair_from_pem,
    parse_key_pair_from_pem,
    parse_rsa_key_pair_from_pem,
)
from cert_toolkit.keys.material import ECPrivateKey, ECPublicKey, RSAPrivateKey, RSAPublicKey
from cert_toolkit.pem.codec import decode_pem, encode_pem


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="module")
def ec_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture()
def p256() -> CurveDomainParameters:
    return CurveDomainParameters.from_ecdsa_curve(NIST256p)


@pytest.fixture(scope="module")
def custom_curve() -> ecdsa_curves.Curve:
    """P-256 arithmetic with 2G as generator; absent from any registry."""
    doubled = NIST256p.generator * 2
    generator = ellipticcurve.PointJacobi(
        NIST256p.curve, doubled.x(), doubled.y(), 1, NIST256p.order, generator=True
    )
    return ecdsa_curves.Curve("custom", NIST256p.curve, generator, None)


def _private_pem(key, private_format: serialization.PrivateFormat) -> bytes:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=private_format,
        encryption_algorithm=serialization.NoEncryption(),
    )


def _self_signed_pem(key: ec.EllipticCurvePrivateKey) -> bytes:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "derivation-test")])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM)


def _ec_private_key_der(private_value: bytes, curve_oid: tuple[int, ...]) -> bytes:
    return der.encode_sequence(
        der.encode_integer(1),
        der.encode_octet_string(private_value),
        der.encode_constructed(0, der.encode_oid(*curve_oid)),
    )


# ---------------------------------------------------------------------------
# derive_rsa_public_key
# ---------------------------------------------------------------------------


class TestDeriveRSAPublicKey:
    def test_small_modulus(self) -> None:
        public_key = derive_rsa_public_key(RSAPrivateKey(modulus=3233))
        assert public_key == RSAPublicKey(modulus=3233, public_exponent=65537)

    def test_matches_generated_key(self, rsa_key: rsa.RSAPrivateKey) -> None:
        public_key = derive_rsa_public_key(RSAPrivateKey.from_cryptography(rsa_key))
        numbers = rsa_key.public_key().public_numbers()
        assert public_key.modulus == numbers.n
        assert public_key.public_exponent == numbers.e

    def test_exponent_is_not_recovered_from_key(self) -> None:
        # Textbook key N=3233 was built with e=17; the derivation still
        # reports 65537, so it is only valid for keys generated with 65537.
        public_key = derive_rsa_public_key(
            RSAPrivateKey(modulus=3233, private_exponent=2753)
        )
        assert public_key.public_exponent == 65537
        assert public_key.public_exponent != 17

    @pytest.mark.parametrize("modulus", [None, 0, -3233])
    def test_invalid_modulus(self, modulus: int | None) -> None:
        with pytest.raises(InvalidKeyError):
            derive_rsa_public_key(RSAPrivateKey(modulus=modulus))


# ---------------------------------------------------------------------------
# derive_ec_public_key
# ---------------------------------------------------------------------------


class TestDeriveECPublicKey:
    def test_p256_scalar_seven(self, p256: CurveDomainParameters) -> None:
        public_key = derive_ec_public_key(ECPrivateKey(private_value=7, parameters=p256))
        expected = NIST256p.generator * 7
        assert public_key.point == (expected.x(), expected.y())
        assert public_key.curve_name == "secp256r1"
        assert isinstance(public_key.parameters, NamedCurveParameters)

    def test_matches_cryptography(self, ec_key: ec.EllipticCurvePrivateKey) -> None:
        public_key = derive_ec_public_key(ECPrivateKey.from_cryptography(ec_key))
        numbers = ec_key.public_key().public_numbers()
        assert public_key.point == (numbers.x, numbers.y)

    def test_point_is_on_curve(self, p256: CurveDomainParameters) -> None:
        public_key = derive_ec_public_key(
            ECPrivateKey(private_value=p256.order - 1, parameters=p256)
        )
        assert p256.contains_point(*public_key.point)

    @pytest.mark.parametrize("offset", [0, 1, 1000])
    def test_scalar_at_or_above_order(
        self, p256: CurveDomainParameters, offset: int
    ) -> None:
        key = ECPrivateKey(private_value=p256.order + offset, parameters=p256)
        with pytest.raises(InvalidKeyError):
            derive_ec_public_key(key)

    @pytest.mark.parametrize("scalar", [0, -1])
    def test_non_positive_scalar(self, p256: CurveDomainParameters, scalar: int) -> None:
        with pytest.raises(InvalidKeyError):
            derive_ec_public_key(ECPrivateKey(private_value=scalar, parameters=p256))

    def test_generator_off_curve(self, p256: CurveDomainParameters) -> None:
        params = dataclasses.replace(p256, gy=(p256.gy + 1) % p256.p)
        with pytest.raises(InvalidKeyError):
            derive_ec_public_key(ECPrivateKey(private_value=7, parameters=params))

    def test_generator_outside_field(self, p256: CurveDomainParameters) -> None:
        params = dataclasses.replace(p256, gx=p256.gx + p256.p)
        with pytest.raises(InvalidKeyError):
            derive_ec_public_key(ECPrivateKey(private_value=7, parameters=params))

    @pytest.mark.parametrize("delta", [2, -2])
    def test_order_is_not_generator_order(
        self, p256: CurveDomainParameters, delta: int
    ) -> None:
        params = dataclasses.replace(p256, order=p256.order + delta)
        with pytest.raises(InvalidKeyError, match="order"):
            derive_ec_public_key(ECPrivateKey(private_value=7, parameters=params))

    @pytest.mark.parametrize(
        "changes",
        [{"p": 3}, {"order": 1}, {"cofactor": 0}],
    )
    def test_malformed_domain(self, p256: CurveDomainParameters, changes: dict) -> None:
        params = dataclasses.replace(p256, **changes)
        with pytest.raises(InvalidKeyError):
            derive_ec_public_key(ECPrivateKey(private_value=1, parameters=params))

    def test_unknown_curve_keeps_explicit_parameters(
        self, custom_curve: ecdsa_curves.Curve
    ) -> None:
        params = CurveDomainParameters.from_ecdsa_curve(custom_curve)
        public_key = derive_ec_public_key(ECPrivateKey(private_value=5, parameters=params))
        expected = custom_curve.generator * 5
        assert public_key.parameters is params
        assert public_key.curve_name is None
        assert public_key.point == (expected.x(), expected.y())

    def test_injected_identifier(self, p256: CurveDomainParameters) -> None:
        identifier = CurveIdentifier(NamedCurveCatalog([]))
        public_key = derive_ec_public_key(
            ECPrivateKey(private_value=7, parameters=p256), identifier
        )
        expected = NIST256p.generator * 7
        assert public_key.parameters is p256
        assert public_key.point == (expected.x(), expected.y())


class TestDerivePublicKey:
    def test_dispatches_rsa(self) -> None:
        assert derive_public_key(RSAPrivateKey(modulus=3233)) == RSAPublicKey(modulus=3233)

    def test_dispatches_ec(self, p256: CurveDomainParameters) -> None:
        public_key = derive_public_key(ECPrivateKey(private_value=3, parameters=p256))
        assert isinstance(public_key, ECPublicKey)

    def test_rejects_other_types(self) -> None:
        with pytest.raises(InvalidKeyError):
            derive_public_key("not a key")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# parse_ec_key_pair_from_pem
# ---------------------------------------------------------------------------


class TestParseECKeyPair:
    @pytest.mark.parametrize(
        "private_format",
        [serialization.PrivateFormat.TraditionalOpenSSL, serialization.PrivateFormat.PKCS8],
    )
    def test_cryptography_pem(
        self,
        ec_key: ec.EllipticCurvePrivateKey,
        private_format: serialization.PrivateFormat,
    ) -> None:
        pair = parse_ec_key_pair_from_pem(_private_pem(ec_key, private_format))
        numbers = ec_key.private_numbers()
        assert pair.private_key.private_value == numbers.private_value
        assert pair.public_key.point == (numbers.public_numbers.x, numbers.public_numbers.y)
        assert pair.public_key.curve_name == "secp256r1"

    def test_accepts_str(self, ec_key: ec.EllipticCurvePrivateKey) -> None:
        text = _private_pem(ec_key, serialization.PrivateFormat.PKCS8).decode("ascii")
        pair = parse_ec_key_pair_from_pem(text)
        assert pair.private_key.private_value == ec_key.private_numbers().private_value

    def test_ecparam_genkey_output(self, ec_key: ec.EllipticCurvePrivateKey) -> None:
        parameters = der.topem(der.encode_oid(1, 2, 840, 10045, 3, 1, 7), "EC PARAMETERS")
        pem = parameters + _private_pem(
            ec_key, serialization.PrivateFormat.TraditionalOpenSSL
        )
        pair = parse_ec_key_pair_from_pem(pem)
        assert pair.private_key.private_value == ec_key.private_numbers().private_value
        assert pair.public_key.curve_name == "secp256r1"

    def test_explicit_parameters_are_named_on_output(self) -> None:
        pem = SigningKey.from_secret_exponent(7, curve=NIST256p).to_pem(
            curve_parameters_encoding="explicit"
        )
        pair = parse_ec_key_pair_from_pem(pem)
        expected = NIST256p.generator * 7
        assert pair.public_key.curve_name == "secp256r1"
        assert pair.public_key.point == (expected.x(), expected.y())

    def test_unknown_explicit_curve_round_trips(
        self, custom_curve: ecdsa_curves.Curve
    ) -> None:
        pem = SigningKey.from_secret_exponent(5, curve=custom_curve).to_pem(
            curve_parameters_encoding="explicit"
        )
        pair = parse_ec_key_pair_from_pem(pem)
        assert pair.public_key.curve_name is None
        assert pair.public_key.parameters.generator == (
            custom_curve.generator.x(),
            custom_curve.generator.y(),
        )

        again = parse_ec_key_pair_from_pem(pair.private_key.to_pem())
        assert again.private_key.private_value == 5
        assert again.public_key.point == pair.public_key.point

    def test_round_trip_through_codec(self, ec_key: ec.EllipticCurvePrivateKey) -> None:
        original = _private_pem(ec_key, serialization.PrivateFormat.TraditionalOpenSSL)
        pair = parse_ec_key_pair_from_pem(encode_pem(decode_pem(original)))
        assert pair.private_key.private_value == ec_key.private_numbers().private_value

    def test_round_trip_through_private_key_pem(
        self, ec_key: ec.EllipticCurvePrivateKey
    ) -> None:
        pair = parse_ec_key_pair_from_pem(
            _private_pem(ec_key, serialization.PrivateFormat.PKCS8)
        )
        again = parse_ec_key_pair_from_pem(pair.private_key.to_pem())
        assert again == pair

    def test_not_a_pem_block(self) -> None:
        with pytest.raises(MalformedInputError):
            parse_ec_key_pair_from_pem("not a pem block")

    def test_certificate_is_not_a_private_key(
        self, ec_key: ec.EllipticCurvePrivateKey
    ) -> None:
        with pytest.raises(UnexpectedPemObjectError):
            parse_ec_key_pair_from_pem(_self_signed_pem(ec_key))

    def test_rsa_key_is_rejected(self, rsa_key: rsa.RSAPrivateKey) -> None:
        with pytest.raises(InvalidKeyError):
            parse_ec_key_pair_from_pem(
                _private_pem(rsa_key, serialization.PrivateFormat.PKCS8)
            )

    def test_ed25519_key_is_rejected(self) -> None:
        pem = _private_pem(
            ed25519.Ed25519PrivateKey.generate(), serialization.PrivateFormat.PKCS8
        )
        with pytest.raises(InvalidKeyError):
            parse_ec_key_pair_from_pem(pem)

    def test_unknown_named_curve(self) -> None:
        # sect163k1 is a binary-field curve
        body = _ec_private_key_der(b"\x01" * 21, (1, 3, 132, 0, 1))
        with pytest.raises(UnsupportedCurveError):
            parse_ec_key_pair_from_pem(der.topem(body, "EC PRIVATE KEY"))

    def test_zero_scalar_in_pem(self) -> None:
        body = _ec_private_key_der(b"\x00" * 32, (1, 2, 840, 10045, 3, 1, 7))
        with pytest.raises(InvalidKeyError):
            parse_ec_key_pair_from_pem(der.topem(body, "EC PRIVATE KEY"))

    def test_garbage_payload(self) -> None:
        pem = der.topem(b"\x30\x03\x02\x01\x05", "EC PRIVATE KEY")
        with pytest.raises(MalformedInputError):
            parse_ec_key_pair_from_pem(pem)


# ---------------------------------------------------------------------------
# parse_rsa_key_pair_from_pem
# ---------------------------------------------------------------------------


class TestParseRSAKeyPair:
    @pytest.mark.parametrize(
        "private_format",
        [serialization.PrivateFormat.TraditionalOpenSSL, serialization.PrivateFormat.PKCS8],
    )
    def test_cryptography_pem(
        self,
        rsa_key: rsa.RSAPrivateKey,
        private_format: serialization.PrivateFormat,
    ) -> None:
        pair = parse_rsa_key_pair_from_pem(_private_pem(rsa_key, private_format))
        modulus = rsa_key.public_key().public_numbers().n
        assert pair.private_key.modulus == modulus
        assert pair.public_key == RSAPublicKey(modulus=modulus, public_exponent=65537)

    @pytest.mark.parametrize("text", ["not a pem block", ""])
    def test_missing_pem_object(self, text: str) -> None:
        with pytest.raises(MissingKeyError):
            parse_rsa_key_pair_from_pem(text)

    def test_certificate_is_not_a_private_key(
        self, ec_key: ec.EllipticCurvePrivateKey
    ) -> None:
        with pytest.raises(UnexpectedPemObjectError):
            parse_rsa_key_pair_from_pem(_self_signed_pem(ec_key))

    def test_ec_key_is_rejected(self, ec_key: ec.EllipticCurvePrivateKey) -> None:
        with pytest.raises(InvalidKeyError):
            parse_rsa_key_pair_from_pem(
                _private_pem(ec_key, serialization.PrivateFormat.TraditionalOpenSSL)
            )

    def test_garbage_payload(self) -> None:
        pem = der.topem(b"\x30\x03\x02\x01\x05", "RSA PRIVATE KEY")
        with pytest.raises(MalformedInputError):
            parse_rsa_key_pair_from_pem(pem)


class TestParseKeyPair:
    def test_rsa(self, rsa_key: rsa.RSAPrivateKey) -> None:
        pair = parse_key_pair_from_pem(
            _private_pem(rsa_key, serialization.PrivateFormat.PKCS8)
        )
        assert isinstance(pair.public_key, RSAPublicKey)

    def test_ec(self, ec_key: ec.EllipticCurvePrivateKey) -> None:
        pair = parse_key_pair_from_pem(
            _private_pem(ec_key, serialization.PrivateFormat.PKCS8)
        )
        assert isinstance(pair.public_key, ECPublicKey)

    def test_not_a_pem_block(self) -> None:
        with pytest.raises(MalformedInputError):
            parse_key_pair_from_pem("not a pem block")
