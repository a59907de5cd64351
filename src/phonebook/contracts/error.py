"""Exception taxonomy for the phonebook hash tables."""

from __future__ import annotations

import json
from typing import Any


class EnvelopeError(Exception):
    """Base exception that carries an optional hint for callers."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def to_json(self) -> str:
        payload: dict[str, Any] = {"error": type(self).__name__, "detail": str(self)}
        if self.hint:
            payload["hint"] = self.hint
        return json.dumps(payload, ensure_ascii=False)


class BadInputError(EnvelopeError):
    """Raised for malformed input (config files, env overrides, factory names)."""


class InvalidArgumentError(BadInputError, ValueError):
    """Raised when a put is given a missing, non-string or empty key or value."""


class InvariantError(EnvelopeError):
    """Raised when internal consistency checks fail."""


class PolicyError(EnvelopeError):
    """Raised for unsupported operations or contract violations."""


class PrimeExhaustionError(PolicyError):
    """Raised when the prime capacity ladder has no larger entry left."""


class DuplicateEntryError(PolicyError):
    """Raised when a phonebook already lists the name or the number."""


__all__ = [
    "EnvelopeError",
    "BadInputError",
    "InvalidArgumentError",
    "InvariantError",
    "PolicyError",
    "PrimeExhaustionError",
    "DuplicateEntryError",
]
