"""Exception contracts shared by the phonebook tables."""

from .error import (
    BadInputError,
    DuplicateEntryError,
    EnvelopeError,
    InvalidArgumentError,
    InvariantError,
    PolicyError,
    PrimeExhaustionError,
)

__all__ = [
    "EnvelopeError",
    "BadInputError",
    "InvalidArgumentError",
    "InvariantError",
    "PolicyError",
    "PrimeExhaustionError",
    "DuplicateEntryError",
]
