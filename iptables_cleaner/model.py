"""Data structures shared by the parser, filter, and serializer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional

ALWAYS_EXCLUDED_CHAINS: FrozenSet[str] = frozenset({"FORWARD"})

DOCKER_TABLES: FrozenSet[str] = frozenset({"filter"})
DOCKER_EXCLUDE_PATTERNS: FrozenSet[str] = frozenset({"DOCKER", "KUBE"})


@dataclass
class Chain:
    name: str
    policy: str
    counters: str

    @property
    def builtin(self) -> bool:
        return self.policy != "-"

    def to_line(self) -> str:
        return f":{self.name} {self.policy} {self.counters}"


@dataclass
class Rule:
    chain: str
    raw_text: str

    @classmethod
    def from_line(cls, line: str) -> Optional["Rule"]:
        """Build a rule from a ``-A CHAIN ...`` line, or None if it has no chain token."""
        tokens = line.split()
        if len(tokens) < 2:
            return None
        return cls(chain=tokens[1], raw_text=line)


@dataclass
class Table:
    name: str
    chains: List[Chain] = field(default_factory=list)
    rules: List[Rule] = field(default_factory=list)

    def add_chain(self, chain: Chain) -> None:
        self.chains.append(chain)

    def add_rule(self, rule: Rule) -> None:
        self.rules.append(rule)

    def chain_names(self) -> List[str]:
        return [chain.name for chain in self.chains]

    @property
    def is_empty(self) -> bool:
        return not self.chains and not self.rules


class TableSet:
    """Tables keyed by name, iterated in the order they were first seen."""

    def __init__(self, tables: Iterable[Table] = (), warnings: Optional[List[str]] = None):
        self._tables: Dict[str, Table] = {}
        self.warnings: List[str] = list(warnings) if warnings else []
        for table in tables:
            self.add(table)

    def add(self, table: Table) -> None:
        # A repeated header replaces the earlier table but keeps its slot.
        self._tables[table.name] = table

    def append_warning(self, message: str) -> None:
        self.warnings.append(message)

    def get(self, name: str) -> Optional[Table]:
        return self._tables.get(name)

    def names(self) -> List[str]:
        return list(self._tables)

    def tables(self) -> List[Table]:
        return list(self._tables.values())

    def __getitem__(self, name: str) -> Table:
        return self._tables[name]

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"TableSet({self.names()!r})"


@dataclass(frozen=True)
class FilterParams:
    tables: FrozenSet[str] = frozenset()
    chains: FrozenSet[str] = frozenset()
    exclude_patterns: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        # An empty pattern is a prefix of every name, so blanks are never kept.
        object.__setattr__(self, "tables", _clean_names(self.tables))
        object.__setattr__(self, "chains", _clean_names(self.chains))
        object.__setattr__(self, "exclude_patterns", _clean_names(self.exclude_patterns))

    @classmethod
    def from_csv(
        cls,
        tables: Optional[str] = None,
        chains: Optional[str] = None,
        exclude: Optional[str] = None,
    ) -> "FilterParams":
        return cls(
            tables=parse_name_list(tables),
            chains=parse_name_list(chains),
            exclude_patterns=parse_name_list(exclude),
        )

    @classmethod
    def docker_defaults(cls) -> "FilterParams":
        """Strip Docker and Kubernetes chains from the filter table."""
        return cls(tables=DOCKER_TABLES, exclude_patterns=DOCKER_EXCLUDE_PATTERNS)

    def selects_table(self, name: str) -> bool:
        return not self.tables or name in self.tables

    def selects_chain(self, name: str) -> bool:
        return not self.chains or name in self.chains


def parse_name_list(text: Optional[str]) -> FrozenSet[str]:
    if not text:
        return frozenset()
    return _clean_names(text.split(","))


def _clean_names(values: Iterable[str]) -> FrozenSet[str]:
    return frozenset(value.strip() for value in values if value.strip())
