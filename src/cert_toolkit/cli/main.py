"""CLI entry point for cert-toolkit.

Invoked as::

    cert-toolkit [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m cert_toolkit.cli.main

Commands
--------
version   Show version information
inspect   Show what a PEM file contains
derive    Derive the public key of a private key file
curve     Identify the named curve of an EC private key file
genrsa    Generate an RSA private key
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cert_toolkit.errors import KeyMaterialError

console = Console()


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    sys.exit(1)


# ------------------------------------------------------------------
# Root group
# ------------------------------------------------------------------


@click.group()
@click.version_option(package_name="cert-toolkit")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level for library diagnostics.",
)
def cli(log_level: str) -> None:
    """Read PEM key material and reconstruct public keys."""
    logging.basicConfig(level=getattr(logging, log_level.upper()))


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from cert_toolkit import __version__

    console.print(f"[bold]cert-toolkit[/bold] v{__version__}")


# ------------------------------------------------------------------
# inspect
# ------------------------------------------------------------------


@cli.command(name="inspect")
@click.argument("pem_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Emit a JSON report.")
def inspect_command(pem_file: str, as_json: bool) -> None:
    """Show the kind and a summary of the first PEM block in PEM_FILE."""
    from cert_toolkit.pem.files import read_pem_file
    from cert_toolkit.reports import PemObjectReport

    try:
        pem_object = read_pem_file(pem_file)
    except KeyMaterialError as exc:
        _fail(exc)

    report = PemObjectReport.from_pem_object(pem_object)
    if as_json:
        click.echo(report.model_dump_json(indent=2))
        return

    table = Table(title=f"{Path(pem_file).name}: {report.kind}", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in report.details.items():
        table.add_row(key, escape(value))
    console.print(table)


# ------------------------------------------------------------------
# derive
# ------------------------------------------------------------------


@cli.command(name="derive")
@click.argument("key_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice(["auto", "rsa", "ec"]),
    default="auto",
    show_default=True,
    help="Expected private key algorithm.",
)
@click.option(
    "--out",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the public key PEM to this file path.",
)
@click.option("--json", "as_json", is_flag=True, help="Emit a JSON report.")
def derive_command(key_file: str, algorithm: str, out: str | None, as_json: bool) -> None:
    """Derive the public key of the private key in KEY_FILE.

    RSA public keys always use exponent 65537.
    """
    from cert_toolkit.keys.derivation import (
        parse_ec_key_pair_from_pem,
        parse_key_pair_from_pem,
        parse_rsa_key_pair_from_pem,
    )
    from cert_toolkit.reports import PublicKeyReport

    parsers = {
        "auto": parse_key_pair_from_pem,
        "rsa": parse_rsa_key_pair_from_pem,
        "ec": parse_ec_key_pair_from_pem,
    }
    try:
        key_pair = parsers[algorithm](Path(key_file).read_bytes())
        public_pem = key_pair.public_key.to_pem()
        report = PublicKeyReport.from_public_key(key_pair.public_key) if as_json else None
    except KeyMaterialError as exc:
        _fail(exc)

    if out:
        try:
            Path(out).write_bytes(public_pem)
        except OSError as exc:
            _fail(exc)
        console.print(f"[green]Wrote[/green] {key_pair.algorithm.value} public key to {out}")
    elif report is not None:
        click.echo(report.model_dump_json(indent=2))
    else:
        click.echo(public_pem.decode("ascii"), nl=False)


# ------------------------------------------------------------------
# curve
# ------------------------------------------------------------------


@cli.command(name="curve")
@click.argument("key_file", type=click.Path(exists=True, dir_okay=False))
def curve_command(key_file: str) -> None:
    """Identify the named curve of the EC private key in KEY_FILE."""
    from cert_toolkit.keys.derivation import parse_ec_key_pair_from_pem
    from cert_toolkit.reports import CurveReport

    try:
        key_pair = parse_ec_key_pair_from_pem(Path(key_file).read_bytes())
    except KeyMaterialError as exc:
        _fail(exc)

    report = CurveReport.from_parameters(key_pair.public_key.parameters)
    if report.name is None:
        console.print("[yellow]No named curve matches; explicit parameters.[/yellow]")
    else:
        console.print(f"Curve: [bold]{report.name}[/bold]")
        if report.aliases:
            console.print(f"  Aliases: {', '.join(report.aliases)}")
        console.print(f"  OID:     {report.oid}")
    console.print(f"  Field:   {report.field_bits} bits")
    console.print(f"  Order:   {report.order}")
    console.print(f"  Cofactor: {report.cofactor}")


# ------------------------------------------------------------------
# genrsa
# ------------------------------------------------------------------


@cli.command(name="genrsa")
@click.argument("out", type=click.Path(dir_okay=False))
@click.option(
    "--key-size",
    type=int,
    default=2048,
    show_default=True,
    help="RSA modulus size in bits.",
)
@click.option(
    "--public-out",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the public key PEM to this file path.",
)
def genrsa_command(out: str, key_size: int, public_out: str | None) -> None:
    """Generate an RSA private key (exponent 65537) and write it to OUT."""
    from cert_toolkit.keys.generation import generate_rsa_key_pair
    from cert_toolkit.pem.files import write_private_key

    try:
        key_pair = generate_rsa_key_pair(key_size=key_size)
    except ValueError as exc:
        _fail(exc)

    try:
        write_private_key(key_pair.private_key, out)
        if public_out:
            Path(public_out).write_bytes(key_pair.public_key.to_pem())
    except OSError as exc:
        _fail(exc)

    console.print(f"[green]Generated[/green] {key_size}-bit RSA key at {out}")
    if public_out:
        console.print(f"  Public key: {public_out}")


if __name__ == "__main__":
    cli()
