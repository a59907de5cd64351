from __future__ import annotations

from phonebook.analysis.probe import trace_probe_get
from phonebook.analysis.verify import verify_table
from phonebook.core.open_addressing import quadratic_address, quadratic_probing_table

Entries = tuple[tuple[str, str], ...]


def test_address_formula() -> None:
    home = 6
    expected = [6, (6 + 1 + 1) % 7, (6 + 2 + 4) % 7, (6 + 3 + 9) % 7]
    assert [quadratic_address(home, i, 7) for i in range(1, 5)] == expected
    assert quadratic_address(0, 1, 13) == 0
    assert quadratic_address(12, 3, 13) == (12 + 2 + 4) % 13


def test_collisions_follow_quadratic_offsets() -> None:
    # Single-character keys hash to their code point; 'a', 'h', 'o', 'v' all land on 6 mod 7.
    table = quadratic_probing_table(soft=True)
    assert [table.put(k, k.upper()).probes for k in "ahov"] == [1, 2, 3, 4]
    assert table.capacity() == 7

    trace = trace_probe_get(table, "v")
    assert [step["slot"] for step in trace["path"]] == [6, 1, 5, 4]
    assert trace["probes"] == 4
    assert table.get("v") == ("V", 4)


def test_soft_removal_keeps_quadratic_path() -> None:
    table = quadratic_probing_table(soft=True)
    for key in "ahov":
        table.put(key, key.upper())

    assert table.remove("h") == ("H", 3)
    trace = trace_probe_get(table, "v")
    assert [step["state"] for step in trace["path"]] == ["occupied", "tombstone", "occupied", "occupied"]
    assert table.get("v") == ("V", 4)
    # No empty slot is reachable from slot 6, so the miss walks the whole bound.
    assert table.get("h") == (None, 7)


def test_lookup_is_bounded_when_path_has_no_empty_slot() -> None:
    table = quadratic_probing_table()
    for key in "ahov":
        table.put(key, key.upper())
    # 'S' also hashes to slot 6; every slot its path reaches is occupied.
    assert table.get("S") == (None, 7)
    assert table.remove("S") == (None, 7)
    assert trace_probe_get(table, "S")["terminal"] == "exhausted"


def test_phonebook_probe_counts_and_resize(phonebook_entries: Entries) -> None:
    table = quadratic_probing_table()
    assert [table.put(k, v).probes for k, v in phonebook_entries] == [1, 1, 2, 1]
    assert table.get("Jessie") == ("705-12-7500", 2)
    assert table.capacity() == 7

    assert table.put("DeAndre", "888-1212-3340").probes == 12
    assert table.capacity() == 13
    assert table.remove("Thomas") == (None, 1)
    assert table.capacity() == 13
    verify_table(table)


def test_hard_removal_rebuilds_whole_table(phonebook_entries: Entries) -> None:
    table = quadratic_probing_table()
    for key, value in phonebook_entries:
        table.put(key, value)

    # locate 1 + 7 slots scanned + 3 survivors re-placed.
    assert table.remove("Arnold") == ("894-59-0011", 11)
    assert table.capacity() == 7
    assert table.size() == 3
    # Jessie moved back to her home slot during the rebuild.
    assert table.get("Jessie") == ("705-12-7500", 1)
    verify_table(table)


def test_hard_removal_miss_does_not_rebuild(phonebook_entries: Entries) -> None:
    table = quadratic_probing_table()
    for key, value in phonebook_entries:
        table.put(key, value)
    # Jerry visits slots 4, 6, 3 and stops at empty slot 2.
    assert table.remove("Jerry") == (None, 4)
    assert table.get("Jessie").probes == 2
