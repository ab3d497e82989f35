#!/usr/bin/env python3
"""Example: Quickstart

Reads an EC private key from PEM, derives its public key and shows which
named curve the key uses.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install cert-toolkit
"""
from __future__ import annotations

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

import cert_toolkit
from cert_toolkit import parse_ec_key_pair_from_pem, subject_key_identifier


def main() -> None:
    print(f"cert-toolkit version: {cert_toolkit.__version__}")

    # Step 1: Produce a private key PEM to work with
    key = ec.generate_private_key(ec.SECP384R1())
    pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    )

    # Step 2: Derive the public key
    key_pair = parse_ec_key_pair_from_pem(pem)
    print(f"Curve: {key_pair.public_key.curve_name}")
    print(f"Q.x:   {key_pair.public_key.x:#x}")

    # Step 3: Compare against the key's own public point
    numbers = key.public_key().public_numbers()
    print(f"Matches cryptography: {key_pair.public_key.point == (numbers.x, numbers.y)}")

    # Step 4: Subject key identifier and public PEM
    ski = subject_key_identifier(key_pair.public_key)
    print(f"SKI: {ski.digest.hex()}")
    print(key_pair.public_key.to_pem().decode("ascii"))


if __name__ == "__main__":
    main()
