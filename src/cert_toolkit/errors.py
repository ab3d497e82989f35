"""Typed failures raised by cert-toolkit.

Every error raised from the key derivation, curve identification and PEM
codec layers derives from :class:`KeyMaterialError`, so callers can catch
the whole family in one place. Errors are never retried internally: the
same input always produces the same failure.
"""
from __future__ import annotations


class KeyMaterialError(Exception):
    """Base class for all cert-toolkit errors."""


class MalformedInputError(KeyMaterialError):
    """Raised when PEM text does not decode to a recognizable object."""


class UnexpectedPemObjectError(MalformedInputError):
    """Raised when a PEM block decodes to a different kind than requested."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a {expected} PEM object, got {actual}")


class MissingKeyError(KeyMaterialError):
    """Raised when decoding produced no key object at all."""


class InvalidKeyError(KeyMaterialError):
    """Raised when key material is present but semantically invalid."""


class UnsupportedCurveError(KeyMaterialError):
    """Raised when domain parameters describe a curve the backend cannot use."""


__all__ = [
    "InvalidKeyError",
    "KeyMaterialError",
    "MalformedInputError",
    "MissingKeyError",
    "UnexpectedPemObjectError",
    "UnsupportedCurveError",
]
