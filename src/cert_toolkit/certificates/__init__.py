"""X.509 helpers for derived keys."""
from __future__ import annotations

from cert_toolkit.certificates.identifiers import (
    authority_key_identifier,
    subject_key_identifier,
)

__all__ = ["authority_key_identifier", "subject_key_identifier"]
