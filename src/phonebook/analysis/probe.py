"""Probe-path tracing for the phonebook tables."""

from __future__ import annotations

import copy
import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jsonschema import Draft202012Validator

from phonebook.contracts.error import InvariantError
from phonebook.core.chaining import SeparateChainingHashTable
from phonebook.core.open_addressing import _EMPTY, _Entry, OpenAddressingHashTable
from phonebook.core.probes import utf16_order

ProbeTrace = Dict[str, Any]
Table = Union[OpenAddressingHashTable, SeparateChainingHashTable]

TRACE_SCHEMA_ID = "probe-trace.v1"


def _state(slot: Any) -> str:
    if slot is _EMPTY:
        return "empty"
    if isinstance(slot, _Entry):
        return "occupied"
    return "tombstone"


def _base(table: Table, operation: str, key: Optional[str]) -> ProbeTrace:
    backend = table.strategy.name if isinstance(table, OpenAddressingHashTable) else "chaining"
    return {
        "schema": TRACE_SCHEMA_ID,
        "backend": backend,
        "operation": operation,
        "key_repr": repr(key),
        "found": False,
        "terminal": "none",
        "capacity": table.capacity(),
        "probes": 0,
        "path": [],
    }


def _trace_open_lookup(table: OpenAddressingHashTable, operation: str, key: Optional[str]) -> ProbeTrace:
    trace = _base(table, operation, key)
    if key is None:
        return trace
    trace["home"] = table.home(key)
    path: List[Dict[str, Any]] = []
    terminal = "exhausted"
    for i, idx, slot in table.probe_sequence(key):
        step: Dict[str, Any] = {"step": i, "slot": idx, "state": _state(slot)}
        if isinstance(slot, _Entry):
            step["key_repr"] = repr(slot.key)
            step["matches"] = slot.key == key
        path.append(step)
        if slot is _EMPTY:
            terminal = "empty"
            break
        if step.get("matches"):
            terminal = "match"
            trace["found"] = True
            break
    trace["terminal"] = terminal
    trace["path"] = path
    trace["probes"] = len(path)
    return trace


def _trace_chain_lookup(table: SeparateChainingHashTable, operation: str, key: Optional[str]) -> ProbeTrace:
    trace = _base(table, operation, key)
    if key is None:
        return trace
    bucket = table.bucket_of(key)
    chain = table._buckets[bucket]  # pylint: disable=protected-access
    path: List[Dict[str, Any]] = []
    terminal = "miss"
    for pos, entry in enumerate(chain):
        matches = entry.key == key
        path.append({"step": pos + 1, "position": pos, "key_repr": repr(entry.key), "matches": matches})
        if matches:
            terminal = "match"
            trace["found"] = True
            break
    trace.update(
        {
            "bucket": bucket,
            "chain_size": len(chain),
            "terminal": terminal,
            "path": path,
            "probes": len(path) if trace["found"] else len(chain) + 1,
        }
    )
    return trace


def trace_probe_get(table: Table, key: Optional[str]) -> ProbeTrace:
    if isinstance(table, OpenAddressingHashTable):
        return _trace_open_lookup(table, "get", key)
    if isinstance(table, SeparateChainingHashTable):
        return _trace_chain_lookup(table, "get", key)
    raise TypeError(f"Unsupported table type: {type(table)!r}")


def trace_probe_remove(table: Table, key: Optional[str]) -> ProbeTrace:
    """Trace the lookup half of a remove and report its full probe cost.

    The cost comes from running the remove on a copy, so run repair and
    rebuild work is included while ``table`` stays untouched.
    """

    if isinstance(table, OpenAddressingHashTable):
        trace = _trace_open_lookup(table, "remove", key)
        trace["deletion"] = "soft" if table.soft else "hard"
        if table.soft:
            trace["compaction"] = "tombstone"
        elif table.strategy.rebuild_on_hard_delete:
            trace["compaction"] = "rebuild"
        else:
            trace["compaction"] = "run-repair"
    elif isinstance(table, SeparateChainingHashTable):
        trace = _trace_chain_lookup(table, "remove", key)
        trace["compaction"] = "chain-rebuild"
    else:
        raise TypeError(f"Unsupported table type: {type(table)!r}")
    if key is not None:
        trace["probes"] = copy.deepcopy(table).remove(key).probes
    return trace


def _trace_open_put(table: OpenAddressingHashTable, key: str, value: str) -> ProbeTrace:
    trace = _base(table, "put", key)
    trace["value_repr"] = repr(value)
    trace["probes"] = copy.deepcopy(table).put(key, value).probes

    sim = copy.deepcopy(table)
    resized = sim._fill > sim.capacity() // 2  # pylint: disable=protected-access
    if resized:
        sim._rebuild(sim._sizer.next())  # pylint: disable=protected-access
    trace["resized"] = resized
    trace["capacity"] = sim.capacity()
    trace["home"] = sim.home(key)

    table_slots = sim._table  # pylint: disable=protected-access
    carry = key
    path: List[Dict[str, Any]] = []
    terminal = "exhausted"
    for i, idx, slot in sim.probe_sequence(key):
        step: Dict[str, Any] = {"step": i, "slot": idx, "state": _state(slot), "candidate_key": repr(carry)}
        if not isinstance(slot, _Entry):
            terminal = "insert" if slot is _EMPTY else "reuse-tombstone"
            step["action"] = terminal
            path.append(step)
            break
        step["key_repr"] = repr(slot.key)
        if sim.strategy.ordered and utf16_order(slot.key) > utf16_order(carry):
            step["action"] = "swap"
            table_slots[idx], carry = _Entry(carry, ""), slot.key
        else:
            step["action"] = "advance"
        path.append(step)
    trace["terminal"] = terminal
    trace["found"] = terminal != "exhausted"
    trace["path"] = path
    return trace


def trace_probe_put(table: Table, key: str, value: str) -> ProbeTrace:
    """Trace where a put would land without modifying ``table``."""

    if isinstance(table, OpenAddressingHashTable):
        return _trace_open_put(table, key, value)
    if isinstance(table, SeparateChainingHashTable):
        trace = _base(table, "put", key)
        bucket = table.bucket_of(key)
        chain_size = len(table._buckets[bucket])  # pylint: disable=protected-access
        trace.update(
            {
                "value_repr": repr(value),
                "bucket": bucket,
                "chain_size": chain_size,
                "terminal": "append",
                "found": True,
                "probes": copy.deepcopy(table).put(key, value).probes,
                "path": [{"step": 1, "position": chain_size, "action": "insert"}],
            }
        )
        return trace
    raise TypeError(f"Unsupported table type: {type(table)!r}")


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema_resource = resources.files("phonebook.contracts") / "trace_schema.json"
    with schema_resource.open(encoding="utf-8") as stream:
        schema = json.load(stream)
    return Draft202012Validator(schema)


def validate_trace(trace: ProbeTrace) -> None:
    errors = sorted(_validator().iter_errors(trace), key=lambda err: list(err.path))
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.path) or "<root>"
        raise InvariantError(f"Invalid probe trace at {location}: {first.message}")


def export_trace(trace: ProbeTrace, path: Union[str, Path]) -> Path:
    validate_trace(trace)
    target = Path(path)
    target.write_text(json.dumps(trace, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return target


def format_trace_lines(
    trace: Dict[str, Any],
    *,
    export_path: Optional[Union[str, Path]] = None,
) -> List[str]:
    """Return a human-friendly rendering of a probe trace."""

    lines: List[str] = []
    backend = trace.get("backend", "?")
    operation = trace.get("operation", "?")
    key_repr = trace.get("key_repr", "?")
    lines.append(f"Probe trace [{backend}] {operation.upper()} key={key_repr}")
    lines.append(
        f"Found: {trace.get('found')} | Terminal: {trace.get('terminal')} | Probes: {trace.get('probes')}"
    )
    if "capacity" in trace:
        capacity_line = f"Capacity: {trace['capacity']}"
        if trace.get("resized"):
            capacity_line += " (after resize)"
        lines.append(capacity_line)
    if "home" in trace:
        lines.append(f"Home slot: {trace['home']}")
    if "bucket" in trace:
        lines.append(f"Bucket: {trace['bucket']} (chain size {trace.get('chain_size', 0)})")
    if "compaction" in trace:
        lines.append(f"Compaction: {trace['compaction']}")
    lines.append("Steps:")
    path = trace.get("path")
    if not isinstance(path, list) or not path:
        lines.append("  (no path recorded)")
    else:
        for item in path:
            if not isinstance(item, dict):
                lines.append(f"  {item!r}")
                continue
            prefix = f"  Step {item['step']}: " if "step" in item else "  Item: "
            attrs: List[str] = []
            for name in ("slot", "position", "state", "action", "matches", "key_repr", "candidate_key"):
                if name in item and item[name] is not None:
                    value = item[name]
                    if isinstance(value, bool):
                        value = str(value).lower()
                    attrs.append(f"{name}={value}")
            lines.append(prefix + ", ".join(attrs))
    if export_path:
        lines.append(f"Trace JSON written to: {export_path}")
    return lines


__all__ = [
    "TRACE_SCHEMA_ID",
    "export_trace",
    "format_trace_lines",
    "trace_probe_get",
    "trace_probe_put",
    "trace_probe_remove",
    "validate_trace",
]
