"""iptables cleaner public API surface."""

from .cleaner import RuleCleaner, TableStats, clean_stream
from .filtering import filter_tables
from .model import Chain, FilterParams, Rule, Table, TableSet
from .parser import ParserError, parse_iptables_save, read_iptables_file, read_iptables_stream
from .serializer import SerializerError, render_restore, write_restore

__all__ = [
    "RuleCleaner",
    "TableStats",
    "clean_stream",
    "filter_tables",
    "Chain",
    "FilterParams",
    "Rule",
    "Table",
    "TableSet",
    "ParserError",
    "parse_iptables_save",
    "read_iptables_file",
    "read_iptables_stream",
    "SerializerError",
    "render_restore",
    "write_restore",
]
