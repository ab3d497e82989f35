#!/usr/bin/env python3
"""Example: Explicit domain parameters

A key written with explicit curve parameters is still recognised as a
named curve when its parameters match one. Parameters that match nothing
are kept as they are.

Usage:
    python examples/02_explicit_curve.py

Requirements:
    pip install cert-toolkit
"""
from __future__ import annotations

from ecdsa import BRAINPOOLP256r1, SigningKey

from cert_toolkit import CurveDomainParameters, match_named_curve, parse_ec_key_pair_from_pem


def main() -> None:
    # Step 1: Explicit parameters for brainpoolP256r1
    signing_key = SigningKey.generate(curve=BRAINPOOLP256r1)
    pem = signing_key.to_pem(curve_parameters_encoding="explicit")

    key_pair = parse_ec_key_pair_from_pem(pem)
    print(f"Identified curve: {key_pair.public_key.curve_name}")

    # Step 2: Same parameters with the cofactor changed match nothing
    params = CurveDomainParameters.from_ecdsa_curve(BRAINPOOLP256r1)
    altered = CurveDomainParameters(
        p=params.p,
        a=params.a,
        b=params.b,
        gx=params.gx,
        gy=params.gy,
        order=params.order,
        cofactor=2,
    )
    matched = match_named_curve(altered)
    print(f"Altered parameters returned unchanged: {matched is altered}")


if __name__ == "__main__":
    main()
