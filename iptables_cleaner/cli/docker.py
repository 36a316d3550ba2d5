"""CLI that strips Docker and Kubernetes chains from the filter table."""
from __future__ import annotations

from pathlib import Path

import typer

from ..model import FilterParams
from .common import configure_logging, run

app = typer.Typer(help="Remove DOCKER*/KUBE* chains and FORWARD from an iptables-save filter table")


@app.command()
def main(
    input_path: Path = typer.Option(
        ..., "--input", exists=True, readable=True, dir_okay=False, help="Path to iptables-save file"
    ),
    output_path: Path | None = typer.Option(None, "--output", dir_okay=False, help="Output file (defaults to stdout)"),
    stats: bool = typer.Option(False, "--stats", help="Print kept/dropped counts to stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose)
    run(input_path, output_path, FilterParams.docker_defaults(), show_stats=stats)
