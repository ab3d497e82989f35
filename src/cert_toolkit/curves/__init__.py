"""Elliptic-curve domain parameters, named-curve identification and arithmetic."""
from __future__ import annotations

from cert_toolkit.curves.arithmetic import generator_has_order, multiply_generator
from cert_toolkit.curves.catalog import (
    CurveDomainParameters,
    NamedCurveCatalog,
    NamedCurveParameters,
    default_catalog,
)
from cert_toolkit.curves.identifier import CurveIdentifier, match_named_curve

__all__ = [
    "CurveDomainParameters",
    "CurveIdentifier",
    "NamedCurveCatalog",
    "NamedCurveParameters",
    "default_catalog",
    "generator_has_order",
    "match_named_curve",
    "multiply_generator",
]
