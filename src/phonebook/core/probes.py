"""Probe-count result type and the helpers every table shares."""

from __future__ import annotations

from typing import Any, NamedTuple, Optional

from phonebook.contracts.error import InvalidArgumentError

_MASK_32 = 0xFFFFFFFF
_MASK_31 = 0x7FFFFFFF


class Probes(NamedTuple):
    """Value (or ``None``) paired with the number of slots or nodes inspected."""

    value: Optional[str]
    probes: int

    @property
    def found(self) -> bool:
        return self.value is not None


def string_hash(key: str) -> int:
    """31-bit non-negative polynomial hash over the UTF-16 code units of ``key``.

    A single-character key in the Basic Multilingual Plane hashes to its code
    point, which keeps probe addresses easy to predict in tests.
    """

    data = key.encode("utf-16-be", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        h = (31 * h + ((data[i] << 8) | data[i + 1])) & _MASK_32
    return h & _MASK_31


def utf16_order(key: str) -> bytes:
    """Sort key ordering strings by UTF-16 code units, the units ``string_hash`` reads.

    Big-endian UTF-16 bytes compare like the code units themselves, so an
    astral character (a surrogate pair) sorts before BMP characters from
    U+E000 to U+FFFF, unlike plain ``str`` comparison.
    """

    return key.encode("utf-16-be", "surrogatepass")


def check_entry(key: Any, value: Any) -> None:
    """Reject a put before it touches any slot."""

    for label, item in (("key", key), ("value", value)):
        if item is None:
            raise InvalidArgumentError(f"{label} must not be None")
        if not isinstance(item, str):
            raise InvalidArgumentError(
                f"{label} must be a str, got {type(item).__name__}",
                hint="tables only store string keys and values",
            )
        if not item:
            raise InvalidArgumentError(f"{label} must not be empty")


__all__ = ["Probes", "check_entry", "string_hash", "utf16_order"]
