"""Elliptic-curve domain parameters and the named-curve catalog.

Domain parameters are modelled as immutable values over plain integers so
that they can be compared, hashed and used as lookup keys. The catalog is
built once from the curve registry shipped with the ``ecdsa`` package and
is never mutated afterwards; callers pass it around by reference.

Only prime-field short Weierstrass curves (``y^2 = x^3 + ax + b mod p``)
are represented. Edwards curves in the registry are skipped.
"""
from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Tuple

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import ec
from ecdsa import curves as ecdsa_curves
from ecdsa import ellipticcurve

from cert_toolkit.errors import UnsupportedCurveError

DomainKey = Tuple[int, int, int, int, int, int, int]

# FIPS 186 names for the NIST prime curves, keyed by SEC name.
_FIPS_NAMES: dict[str, str] = {
    "secp192r1": "P-192",
    "secp224r1": "P-224",
    "secp256r1": "P-256",
    "secp384r1": "P-384",
    "secp521r1": "P-521",
}


@dataclass(frozen=True)
class CurveDomainParameters:
    """Explicit domain parameters of a prime-field Weierstrass curve.

    Parameters
    ----------
    p:
        Field prime.
    a, b:
        Curve equation coefficients, reduced modulo *p* on construction.
    gx, gy:
        Affine coordinates of the generator point ``G``.
    order:
        Order ``n`` of the generator.
    cofactor:
        Cofactor ``h``; explicit encodings that omit it are read as 1.
    """

    p: int
    a: int
    b: int
    gx: int
    gy: int
    order: int
    cofactor: int = 1

    def __post_init__(self) -> None:
        if self.p > 0:
            object.__setattr__(self, "a", self.a % self.p)
            object.__setattr__(self, "b", self.b % self.p)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_ecdsa_curve(cls, curve: ecdsa_curves.Curve) -> "CurveDomainParameters":
        """Extract explicit parameters from an ``ecdsa`` curve object.

        Raises
        ------
        UnsupportedCurveError
            If the curve is not a prime-field Weierstrass curve.
        """
        curve_fp = curve.curve
        if not isinstance(curve_fp, ellipticcurve.CurveFp):
            raise UnsupportedCurveError(
                f"Curve {curve.name!r} is not a short Weierstrass curve over a prime field"
            )
        generator = curve.generator
        return cls(
            p=curve_fp.p(),
            a=curve_fp.a(),
            b=curve_fp.b(),
            gx=generator.x(),
            gy=generator.y(),
            order=curve.order,
            cofactor=curve_fp.cofactor() or 1,
        )

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    @property
    def generator(self) -> tuple[int, int]:
        return self.gx, self.gy

    def domain_key(self) -> DomainKey:
        """Return the tuple ``(n, h, p, a, b, Gx, Gy)`` identifying this domain."""
        return (self.order, self.cofactor, self.p, self.a, self.b, self.gx, self.gy)

    def same_domain(self, other: "CurveDomainParameters") -> bool:
        """Return True if *other* has equal order, cofactor, curve and generator."""
        return self.domain_key() == other.domain_key()

    def contains_point(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` satisfies the curve equation."""
        return (y * y - (x * x * x + self.a * x + self.b)) % self.p == 0

    def as_explicit(self) -> "CurveDomainParameters":
        """Return these parameters as a plain (unnamed) value."""
        return CurveDomainParameters(
            p=self.p,
            a=self.a,
            b=self.b,
            gx=self.gx,
            gy=self.gy,
            order=self.order,
            cofactor=self.cofactor,
        )

    # ------------------------------------------------------------------
    # Interop
    # ------------------------------------------------------------------

    def to_ecdsa_curve(self) -> ecdsa_curves.Curve:
        """Build an ``ecdsa`` curve object that serializes as explicit parameters."""
        curve_fp = ellipticcurve.CurveFp(self.p, self.a, self.b, self.cofactor)
        generator = ellipticcurve.PointJacobi(
            curve_fp, self.gx, self.gy, 1, self.order, generator=True
        )
        return ecdsa_curves.Curve("explicit", curve_fp, generator, None)


@dataclass(frozen=True)
class NamedCurveParameters(CurveDomainParameters):
    """Domain parameters carrying the registry name of a standard curve.

    Parameters
    ----------
    name:
        Canonical curve name (``secp256r1``, ``brainpoolP256r1``, ...).
    oid:
        Dotted object identifier of the named curve.
    aliases:
        Other names the same curve is known by (``P-256``, ``prime256v1``, ...).
    """

    name: str = ""
    oid: str = ""
    aliases: tuple[str, ...] = ()
    ecdsa_curve: Optional[ecdsa_curves.Curve] = field(
        default=None, repr=False, compare=False
    )

    def to_ecdsa_curve(self) -> ecdsa_curves.Curve:
        """Return the registry curve so that it serializes as a named curve."""
        if self.ecdsa_curve is not None:
            return self.ecdsa_curve
        return super().to_ecdsa_curve()


class NamedCurveCatalog:
    """Immutable, ordered catalog of named curves.

    Entries are indexed by :meth:`CurveDomainParameters.domain_key`. When two
    entries share the same domain, the first one in catalog order wins.

    Parameters
    ----------
    entries:
        The named curves, in lookup priority order.
    """

    def __init__(self, entries: Iterable[NamedCurveParameters]) -> None:
        self._entries: tuple[NamedCurveParameters, ...] = tuple(entries)
        self._by_domain: dict[DomainKey, NamedCurveParameters] = {}
        self._by_name: dict[str, NamedCurveParameters] = {}
        for entry in self._entries:
            self._by_domain.setdefault(entry.domain_key(), entry)
            for label in (entry.name, *entry.aliases):
                self._by_name.setdefault(label.lower(), entry)

    @classmethod
    def from_ecdsa_registry(
        cls, registry: Iterable[ecdsa_curves.Curve] | None = None
    ) -> "NamedCurveCatalog":
        """Build a catalog from the ``ecdsa`` curve registry.

        Parameters
        ----------
        registry:
            Curves to include. Defaults to ``ecdsa.curves.curves``.
        """
        source = ecdsa_curves.curves if registry is None else registry
        return cls(
            _named_entry(curve)
            for curve in source
            if isinstance(curve.curve, ellipticcurve.CurveFp)
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, params: CurveDomainParameters) -> NamedCurveParameters | None:
        """Return the named entry with exactly the same domain, or None."""
        return self._by_domain.get(params.domain_key())

    def get(self, name: str) -> NamedCurveParameters:
        """Return the entry known by *name* (canonical name or alias).

        Raises
        ------
        KeyError
            If no entry carries that name.
        """
        try:
            return self._by_name[name.lower()]
        except KeyError:
            raise KeyError(f"Unknown named curve {name!r}") from None

    def names(self) -> list[str]:
        """Return the canonical names in catalog order."""
        return [entry.name for entry in self._entries]

    def __iter__(self) -> Iterator[NamedCurveParameters]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@functools.lru_cache(maxsize=None)
def default_catalog() -> NamedCurveCatalog:
    """Return the process-wide catalog built from the ``ecdsa`` registry."""
    return NamedCurveCatalog.from_ecdsa_registry()


def _canonical_name(curve: ecdsa_curves.Curve) -> str:
    """Prefer the name ``cryptography`` uses for the OID, then the OpenSSL name."""
    if curve.oid:
        dotted = ".".join(str(part) for part in curve.oid)
        try:
            return ec.get_curve_for_oid(x509.ObjectIdentifier(dotted)).name
        except LookupError:
            pass
    return curve.openssl_name or curve.name


def _named_entry(curve: ecdsa_curves.Curve) -> NamedCurveParameters:
    explicit = CurveDomainParameters.from_ecdsa_curve(curve)
    name = _canonical_name(curve)
    aliases: list[str] = []
    for alias in (_FIPS_NAMES.get(name), curve.openssl_name, curve.name):
        if alias and alias != name and alias not in aliases:
            aliases.append(alias)
    return NamedCurveParameters(
        p=explicit.p,
        a=explicit.a,
        b=explicit.b,
        gx=explicit.gx,
        gy=explicit.gy,
        order=explicit.order,
        cofactor=explicit.cofactor,
        name=name,
        oid=".".join(str(part) for part in curve.oid) if curve.oid else "",
        aliases=tuple(aliases),
        ecdsa_curve=curve,
    )
