"""Key algorithm tags shared by the PEM codec and the key values."""
from __future__ import annotations

from enum import Enum


class KeyAlgorithm(str, Enum):
    """Asymmetric key algorithms handled by the toolkit."""

    RSA = "RSA"
    EC = "EC"
