from __future__ import annotations

import pytest

from phonebook.analysis.verify import ordered_violations, table_problems, verify_table
from phonebook.contracts.error import InvariantError
from phonebook.core.chaining import SeparateChainingHashTable
from phonebook.core.open_addressing import _Entry, linear_probing_table, ordered_linear_probing_table

Entries = tuple[tuple[str, str], ...]


def test_healthy_tables_pass(phonebook_entries: Entries) -> None:
    linear = linear_probing_table()
    chaining = SeparateChainingHashTable()
    for key, value in phonebook_entries:
        linear.put(key, value)
        chaining.put(key, value)
    assert table_problems(linear) == []
    assert table_problems(chaining) == []
    verify_table(linear)
    verify_table(chaining)


def test_detects_unreachable_entry(phonebook_entries: Entries) -> None:
    table = linear_probing_table()
    for key, value in phonebook_entries:
        table.put(key, value)
    # Clearing Arnold's slot by hand cuts Jessie off from her home slot.
    table._table[1] = table._table[0]
    problems = table_problems(table)
    assert any("size()" in problem for problem in problems)
    assert any("'Jessie'" in problem for problem in problems)
    with pytest.raises(InvariantError):
        verify_table(table)


def test_detects_misplaced_chain_entry() -> None:
    table = SeparateChainingHashTable()
    table.put("Arnold", "894-59-0011")
    entry = table._buckets[1].pop()
    table._buckets[3].append(entry)
    assert table_problems(table) == ["key 'Arnold' sits in bucket 3, expected 1"]


def test_ordered_violations_flags_unsorted_path() -> None:
    table = ordered_linear_probing_table()
    table.put("h", "H")
    table.put("v", "V")
    assert ordered_violations(table) == []
    # Swap by hand so 'v' precedes 'h' on the shared path.
    table._table[6], table._table[0] = _Entry("v", "V"), _Entry("h", "H")
    assert ordered_violations(table) == ["'v' at slot 6 precedes 'h' at slot 0"]


def test_rejects_unknown_table() -> None:
    with pytest.raises(TypeError):
        table_problems(object())  # type: ignore[arg-type]
