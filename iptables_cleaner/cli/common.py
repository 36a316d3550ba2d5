"""Helpers shared by the cleaner command line tools."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table as RichTable

from ..cleaner import RuleCleaner, TableStats
from ..model import FilterParams
from ..parser import ParserError
from ..serializer import SerializerError

console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("iptables_cleaner")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=console, show_time=False, show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def run(input_path: Path, output_path: Optional[Path], params: FilterParams, show_stats: bool) -> None:
    """Parse, filter, and write; exit with status 1 on any I/O failure."""
    try:
        cleaner = RuleCleaner.from_file(input_path)
        if output_path is None:
            cleaner.write(typer.get_binary_stream("stdout"), params)
        else:
            with output_path.open("wb") as sink:
                cleaner.write(sink, params)
    except (ParserError, SerializerError, OSError) as exc:
        console.print(f"Error: {exc}", style="red", markup=False)
        raise typer.Exit(code=1)
    if show_stats:
        console.print(_stats_table(cleaner.stats(params)))


def _stats_table(stats: list[TableStats]) -> RichTable:
    table = RichTable(title="Cleaned tables")
    for column in ("Table", "Chains kept", "Chains dropped", "Rules kept", "Rules dropped"):
        table.add_column(column)
    for row in stats:
        table.add_row(
            row.table,
            str(row.chains_kept),
            str(row.chains_dropped),
            str(row.rules_kept),
            str(row.rules_dropped),
        )
    return table
