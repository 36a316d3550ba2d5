"""CLI for cleaning an iptables-save dump with configurable selectors."""
from __future__ import annotations

from pathlib import Path

import typer

from ..model import FilterParams
from .common import configure_logging, run

app = typer.Typer(help="Filter chains and rules out of an iptables-save dump")


@app.command()
def main(
    input_path: Path = typer.Option(
        ..., "--input", exists=True, readable=True, dir_okay=False, help="Path to iptables-save file"
    ),
    output_path: Path | None = typer.Option(None, "--output", dir_okay=False, help="Output file (defaults to stdout)"),
    chains: str = typer.Option("", help="Comma-separated chains to keep (e.g. INPUT,OUTPUT); empty keeps all"),
    tables: str = typer.Option("", help="Comma-separated tables to keep (e.g. filter,nat); empty keeps all"),
    exclude: str = typer.Option("", help="Comma-separated chain prefixes / rule substrings to drop"),
    stats: bool = typer.Option(False, "--stats", help="Print kept/dropped counts to stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose)
    params = FilterParams.from_csv(tables=tables, chains=chains, exclude=exclude)
    run(input_path, output_path, params, show_stats=stats)
