"""Generator scalar multiplication ``Q = d*G``.

Named curves that the ``cryptography`` backend supports are multiplied by
OpenSSL. Everything else (explicit parameters, registry curves OpenSSL
does not ship) falls back to ``ecdsa``'s Jacobian point arithmetic, which
is not constant-time.
"""
from __future__ import annotations

import logging

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec
from ecdsa import ellipticcurve

from cert_toolkit.curves.catalog import CurveDomainParameters, NamedCurveParameters
from cert_toolkit.errors import InvalidKeyError

logger = logging.getLogger(__name__)


def multiply_generator(params: CurveDomainParameters, scalar: int) -> tuple[int, int]:
    """Return the affine coordinates of ``scalar * G``.

    The caller is responsible for range-checking *scalar* and validating
    *params*.

    Raises
    ------
    InvalidKeyError
        If the product is the point at infinity.
    """
    if isinstance(params, NamedCurveParameters) and params.oid:
        point = _multiply_with_openssl(params, scalar)
        if point is not None:
            return point
    return _multiply_with_ecdsa(params, scalar)


def _openssl_curve(params: NamedCurveParameters) -> ec.EllipticCurve | None:
    try:
        curve_class = ec.get_curve_for_oid(x509.ObjectIdentifier(params.oid))
    except LookupError:
        return None
    return curve_class()


def _multiply_with_openssl(
    params: NamedCurveParameters, scalar: int
) -> tuple[int, int] | None:
    curve = _openssl_curve(params)
    if curve is None:
        logger.debug("cryptography has no curve class for %s", params.name)
        return None
    try:
        private_key = ec.derive_private_key(scalar, curve)
    except UnsupportedAlgorithm:
        logger.debug("OpenSSL backend does not support %s", params.name)
        return None
    numbers = private_key.public_key().public_numbers()
    return numbers.x, numbers.y


def _multiply_with_ecdsa(params: CurveDomainParameters, scalar: int) -> tuple[int, int]:
    curve_fp = ellipticcurve.CurveFp(params.p, params.a, params.b, params.cofactor)
    generator = ellipticcurve.PointJacobi(curve_fp, params.gx, params.gy, 1, params.order)
    point = generator * scalar
    if point == ellipticcurve.INFINITY:
        raise InvalidKeyError("Scalar multiplication produced the point at infinity")
    return point.x(), point.y()


def generator_has_order(params: CurveDomainParameters) -> bool:
    """Return True if ``n*G`` is the point at infinity for the declared order ``n``."""
    curve_fp = ellipticcurve.CurveFp(params.p, params.a, params.b, params.cofactor)
    # No order on the point, so the scalar is not reduced before multiplying.
    generator = ellipticcurve.PointJacobi(curve_fp, params.gx, params.gy, 1)
    return generator * params.order == ellipticcurve.INFINITY
