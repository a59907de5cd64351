from __future__ import annotations

import pytest

from phonebook.analysis.verify import verify_table
from phonebook.contracts.error import PrimeExhaustionError
from phonebook.core.chaining import SeparateChainingHashTable
from phonebook.core.primes import MAX_CAPACITY, PrimeSizer

Entries = tuple[tuple[str, str], ...]


def _filled(entries: Entries) -> SeparateChainingHashTable:
    table = SeparateChainingHashTable()
    for key, value in entries:
        table.put(key, value)
    return table


def test_probe_counts(phonebook_entries: Entries) -> None:
    table = SeparateChainingHashTable()
    assert [table.put(k, v).probes for k, v in phonebook_entries] == [1, 1, 1, 1]

    assert table.get("Arnold") == ("894-59-0011", 1)
    assert table.get("Tiffany").probes == 1
    # Jessie is chained behind Arnold.
    assert table.get("Jessie") == ("705-12-7500", 2)
    assert table.get("Mary").probes == 1

    # A miss pays for every node plus the end of the chain.
    assert table.get("Jerry") == (None, 2)
    assert table.remove("Jerry") == (None, 2)
    assert table.remove("Jerry").value is None

    assert table.remove("Arnold") == ("894-59-0011", 1)
    assert table.remove("Tiffany").probes == 1
    assert table.remove("Jessie").probes == 1
    assert table.remove("Mary").probes == 1
    assert table.size() == 0


def test_distinct_and_colliding_buckets() -> None:
    table = SeparateChainingHashTable()
    distinct = {"Henry": "893-393-5689", "Esther": "894-59-0011", "Arnold": "894-59-0012", "Tiffany": "894-59-0013"}
    assert len({table.bucket_of(key) for key in distinct}) == 4
    for key, value in distinct.items():
        assert table.put(key, value).probes == 1
    for key, value in distinct.items():
        assert table.get(key) == (value, 1)

    # Hien shares Esther's bucket; the put is still one probe.
    assert table.bucket_of("Hien") == table.bucket_of("Esther")
    assert table.put("Hien", "893-59-0011").probes == 1
    assert table.get("Hien") == ("893-59-0011", 2)
    assert table.bucket_of("Patrick") == table.bucket_of("Esther")
    assert table.get("Patrick").probes >= 2
    assert table.get("Patrick") == (None, 3)


def test_empty_bucket_costs_one_probe() -> None:
    table = SeparateChainingHashTable()
    table.put("Henry", "893-393-5689")
    assert table.get("Zeus") == (None, 1)


def test_enlarge_and_shrink_follow_the_ladder(phonebook_entries: Entries) -> None:
    table = _filled(phonebook_entries)
    assert table.capacity() == 7
    table.put("DeAndre", "888-1212-3340")
    assert table.capacity() == 7
    assert table.load_factor() == pytest.approx(5 / 7)

    table.enlarge()
    assert table.capacity() == 13
    table.enlarge()
    assert table.capacity() == 23
    table.shrink()
    assert table.capacity() == 13
    table.shrink()
    assert table.capacity() == 7
    table.shrink()
    assert table.capacity() == 7

    assert table.size() == 5
    for key, value in phonebook_entries:
        assert table.get(key).value == value
    verify_table(table)


def test_enlarge_between_puts_then_remove() -> None:
    table = SeparateChainingHashTable()
    assert table.put("Henry", "893-393-5689") == ("893-393-5689", 1)
    for name in ("Esther", "Hien", "Patrick"):
        table.put(name, "893-59-0011")
    assert table.size() == 4
    assert table.get(None) == (None, 0)
    assert table.get("Hien") == ("893-59-0011", 2)
    assert table.get("Long") == (None, 4)

    for name in ("Albus", "Charlina", "Severus", "Hermoine", "Ne-Yo", "Y"):
        table.enlarge()
        table.put(name, "893-59-0011")
    assert table.capacity() == 317
    assert table.remove("Y").value == "893-59-0011"
    assert table.remove("Esther").value == "893-59-0011"
    assert table.size() == 8
    verify_table(table)


def test_duplicate_keys_are_appended_and_removed_together() -> None:
    table = SeparateChainingHashTable()
    table.put("Jessie", "first")
    table.put("Arnold", "894-59-0011")
    table.put("Jessie", "second")
    assert table.size() == 3
    assert table.max_chain_len() == 3
    assert table.get("Jessie") == ("first", 1)

    assert table.remove("Jessie") == ("first", 1)
    assert table.size() == 1
    assert table.get("Jessie") == (None, 2)
    assert table.get("Arnold") == ("894-59-0011", 1)
    assert table.remove("Jessie") == (None, 2)
    verify_table(table)


def test_contains_and_items(phonebook_entries: Entries) -> None:
    table = _filled(phonebook_entries)
    assert table.contains_key("Jessie")
    assert not table.contains_key("Jerry")
    assert not table.contains_key(None)
    assert table.contains_value("888-1212-3340")
    assert not table.contains_value("555-0000")
    assert not table.contains_value(None)
    assert sorted(table.items()) == sorted(phonebook_entries)
    assert len(table) == 4


def test_enlarge_exhaustion_keeps_table(phonebook_entries: Entries) -> None:
    table = _filled(phonebook_entries)
    table._sizer = PrimeSizer(MAX_CAPACITY)
    with pytest.raises(PrimeExhaustionError):
        table.enlarge()
    assert table.capacity() == 7
    assert table.get("Jessie") == ("705-12-7500", 2)
