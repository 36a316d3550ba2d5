"""Chain and rule selection over a parsed rule set."""
from __future__ import annotations

import logging

from .model import ALWAYS_EXCLUDED_CHAINS, Chain, FilterParams, Rule, Table, TableSet

logger = logging.getLogger(__name__)


def filter_tables(tables: TableSet, params: FilterParams) -> TableSet:
    """Return a new rule set holding only what ``params`` keeps.

    Selected tables are always emitted, even when every chain and rule in
    them was dropped.
    """
    result = TableSet(warnings=tables.warnings)
    for table in tables.tables():
        if not params.selects_table(table.name):
            logger.debug("Skipping table %s", table.name)
            continue
        result.add(filter_table(table, params))
    return result


def filter_table(table: Table, params: FilterParams) -> Table:
    kept = Table(name=table.name)
    for chain in table.chains:
        if chain_excluded(chain.name, params):
            logger.debug("Dropping chain %s/%s", table.name, chain.name)
            continue
        kept.add_chain(Chain(name=chain.name, policy=chain.policy, counters=chain.counters))
    for rule in table.rules:
        if rule_excluded(rule, params):
            logger.debug("Dropping rule in %s: %s", table.name, rule.raw_text)
            continue
        kept.add_rule(Rule(chain=rule.chain, raw_text=rule.raw_text))
    return kept


def chain_excluded(name: str, params: FilterParams) -> bool:
    if name in ALWAYS_EXCLUDED_CHAINS:
        return True
    if any(name.startswith(pattern) for pattern in params.exclude_patterns):
        return True
    return not params.selects_chain(name)


def rule_excluded(rule: Rule, params: FilterParams) -> bool:
    # Unlike chains, a rule also goes when a pattern appears anywhere in its
    # text, e.g. "-A INPUT -j DOCKER-USER".
    if chain_excluded(rule.chain, params):
        return True
    return any(pattern in rule.raw_text for pattern in params.exclude_patterns)
