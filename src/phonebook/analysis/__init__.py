"""Probe tracing and invariant checks."""

from .probe import (
    export_trace,
    format_trace_lines,
    trace_probe_get,
    trace_probe_put,
    trace_probe_remove,
    validate_trace,
)
from .verify import ordered_violations, table_problems, verify_table

__all__ = [
    "export_trace",
    "format_trace_lines",
    "ordered_violations",
    "table_problems",
    "trace_probe_get",
    "trace_probe_put",
    "trace_probe_remove",
    "validate_trace",
    "verify_table",
]
