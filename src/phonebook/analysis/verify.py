"""Structural invariant checks for the phonebook tables."""

from __future__ import annotations

from typing import List, Union

from phonebook.contracts.error import InvariantError
from phonebook.core.chaining import SeparateChainingHashTable
from phonebook.core.open_addressing import _EMPTY, _Entry, OpenAddressingHashTable
from phonebook.core.primes import is_ladder_prime
from phonebook.core.probes import utf16_order

Table = Union[OpenAddressingHashTable, SeparateChainingHashTable]


def _open_problems(table: OpenAddressingHashTable) -> List[str]:
    problems: List[str] = []
    slots = table._table  # pylint: disable=protected-access
    live = sum(1 for slot in slots if isinstance(slot, _Entry))
    used = sum(1 for slot in slots if slot is not _EMPTY)
    fill = table._fill  # pylint: disable=protected-access
    if live != table.size():
        problems.append(f"size() is {table.size()} but {live} slots are occupied")
    if not table.soft and used != live:
        problems.append(f"hard-delete table holds {used - live} tombstones")
    if fill != used:
        problems.append(f"fill {fill} but {used} slots are occupied or tombstones")
    if fill > table.capacity() // 2 + 1:
        problems.append(f"fill {fill} above {table.capacity() // 2 + 1}")
    for idx, slot in enumerate(slots):
        if isinstance(slot, _Entry) and table.get(slot.key).value is None:
            problems.append(f"key {slot.key!r} at slot {idx} is unreachable from slot {table.home(slot.key)}")
    return problems


def _chain_problems(table: SeparateChainingHashTable) -> List[str]:
    problems: List[str] = []
    buckets = table._buckets  # pylint: disable=protected-access
    live = sum(len(chain) for chain in buckets)
    if live != table.size():
        problems.append(f"size() is {table.size()} but chains hold {live} entries")
    for bucket, chain in enumerate(buckets):
        for entry in chain:
            home = table.bucket_of(entry.key)
            if home != bucket:
                problems.append(f"key {entry.key!r} sits in bucket {bucket}, expected {home}")
    return problems


def table_problems(table: Table) -> List[str]:
    if isinstance(table, OpenAddressingHashTable):
        problems = _open_problems(table)
    elif isinstance(table, SeparateChainingHashTable):
        problems = _chain_problems(table)
    else:
        raise TypeError(f"Unsupported table type: {type(table)!r}")
    if not is_ladder_prime(table.capacity()):
        problems.insert(0, f"capacity {table.capacity()} is not on the prime ladder")
    return problems


def verify_table(table: Table) -> None:
    """Raise :class:`InvariantError` listing every broken invariant."""

    problems = table_problems(table)
    if problems:
        raise InvariantError("; ".join(problems), hint=repr(table))


def ordered_violations(table: OpenAddressingHashTable) -> List[str]:
    """List keys preceded on their own probe path by a larger key.

    Empty for an ordered-linear table built by puts alone; tombstones are
    skipped.
    """

    slots = table._table  # pylint: disable=protected-access
    violations: List[str] = []
    for idx, slot in enumerate(slots):
        if not isinstance(slot, _Entry):
            continue
        for _, pos, other in table.probe_sequence(slot.key):
            if pos == idx:
                break
            if isinstance(other, _Entry) and utf16_order(other.key) > utf16_order(slot.key):
                violations.append(f"{other.key!r} at slot {pos} precedes {slot.key!r} at slot {idx}")
    return violations


__all__ = ["ordered_violations", "table_problems", "verify_table"]
