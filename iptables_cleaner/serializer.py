"""iptables-restore writer."""
from __future__ import annotations

from typing import BinaryIO, List

from .model import TableSet
from .parser import ENCODING, ENCODING_ERRORS


class SerializerError(RuntimeError):
    pass


def render_restore(tables: TableSet) -> str:
    lines: List[str] = []
    for table in tables.tables():
        lines.append(f"*{table.name}")
        lines.extend(chain.to_line() for chain in table.chains)
        lines.extend(rule.raw_text for rule in table.rules)
        lines.append("COMMIT")
        lines.append("")
    return "".join(f"{line}\n" for line in lines)


def write_restore(stream: BinaryIO, tables: TableSet) -> None:
    """Write ``tables`` to ``stream`` in a single forward pass."""
    try:
        payload = render_restore(tables).encode(ENCODING, ENCODING_ERRORS)
    except UnicodeEncodeError as exc:
        raise SerializerError(f"error encoding output: {exc}") from exc
    try:
        stream.write(payload)
        stream.flush()
    except OSError as exc:
        raise SerializerError(f"error writing output: {exc}") from exc
