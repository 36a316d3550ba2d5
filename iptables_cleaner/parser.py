"""iptables-save parser."""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional

from .model import Chain, Rule, Table, TableSet

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


class ParserError(RuntimeError):
    pass


def read_iptables_file(path: Path) -> TableSet:
    """Load a file containing iptables-save contents."""
    with path.open("rb") as stream:
        return read_iptables_stream(stream)


def read_iptables_stream(stream: BinaryIO) -> TableSet:
    """Parse iptables-save output from a readable byte stream."""
    try:
        data = stream.read()
    except OSError as exc:
        raise ParserError(f"error reading input: {exc}") from exc
    return parse_iptables_save(data.decode(ENCODING, ENCODING_ERRORS))


def parse_iptables_save(text: str) -> TableSet:
    result = TableSet()
    current_table: Optional[Table] = None

    for lineno, raw_line in enumerate(io.StringIO(text), start=1):
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("*"):
            current_table = Table(name=line[1:])
            result.add(current_table)
            continue
        if line.startswith(":"):
            if current_table is None:
                logger.debug("Line %d: chain outside of a table, dropped", lineno)
                continue
            chain = _parse_chain_def(line, lineno, result)
            if chain:
                current_table.add_chain(chain)
            continue
        if line.startswith("-"):
            if current_table is None:
                logger.debug("Line %d: rule outside of a table, dropped", lineno)
                continue
            rule = Rule.from_line(line)
            if rule is None:
                _warn(result, f"Line {lineno}: skipping malformed rule line: {line}")
                continue
            current_table.add_rule(rule)
            continue
        if line.startswith("#"):
            continue
        if line.startswith("COMMIT"):
            current_table = None
            continue
        logger.debug("Line %d: unsupported line ignored: %s", lineno, line)

    return result


def _parse_chain_def(line: str, lineno: int, result: TableSet) -> Optional[Chain]:
    # Format: :CHAIN POLICY [packet:byte]
    fields = line[1:].split()
    if len(fields) < 3:
        _warn(result, f"Line {lineno}: skipping malformed chain definition: {line}")
        return None
    name, policy, counters = fields[:3]
    return Chain(name=name, policy=policy, counters=counters)


def _warn(result: TableSet, message: str) -> None:
    logger.warning(message)
    result.append_warning(message)
