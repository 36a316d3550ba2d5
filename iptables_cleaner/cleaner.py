"""High-level orchestration across parser, filter, and serializer layers."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List

from .filtering import filter_tables
from .model import FilterParams, TableSet
from .parser import read_iptables_file, read_iptables_stream
from .serializer import write_restore


@dataclass
class TableStats:
    table: str
    chains_kept: int
    chains_dropped: int
    rules_kept: int
    rules_dropped: int


class RuleCleaner:
    """Bundle parsing, filtering, and restore-format output for one dump."""

    def __init__(self, tables: TableSet):
        self.tables = tables

    @classmethod
    def from_file(cls, path: Path) -> "RuleCleaner":
        return cls(read_iptables_file(path))

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "RuleCleaner":
        return cls(read_iptables_stream(stream))

    @property
    def warnings(self) -> List[str]:
        return self.tables.warnings

    def clean(self, params: FilterParams) -> TableSet:
        return filter_tables(self.tables, params)

    def write(self, stream: BinaryIO, params: FilterParams) -> TableSet:
        cleaned = self.clean(params)
        write_restore(stream, cleaned)
        return cleaned

    def stats(self, params: FilterParams) -> List[TableStats]:
        """Kept and dropped counts for every table the parameters select."""
        cleaned = self.clean(params)
        return [_table_stats(self.tables[name], cleaned[name]) for name in cleaned]


def clean_stream(source: BinaryIO, sink: BinaryIO, params: FilterParams) -> TableSet:
    return RuleCleaner.from_stream(source).write(sink, params)


def _table_stats(before, after) -> TableStats:
    return TableStats(
        table=after.name,
        chains_kept=len(after.chains),
        chains_dropped=len(before.chains) - len(after.chains),
        rules_kept=len(after.rules),
        rules_dropped=len(before.rules) - len(after.rules),
    )
