"""Bounded prime capacity ladder shared by every table."""

from __future__ import annotations

import logging
from typing import Tuple

from phonebook.contracts.error import BadInputError, PrimeExhaustionError

logger = logging.getLogger("phonebook")

# Each entry is the largest prime below twice its predecessor.
PRIMES: Tuple[int, ...] = (
    7,
    13,
    23,
    43,
    83,
    163,
    317,
    631,
    1259,
    2503,
    5003,
    9973,
    19937,
    39869,
    79699,
    159389,
    318751,
    637499,
    1274989,
    2549951,
    5099893,
    10199767,
    20399531,
    40799041,
    81598067,
    163196129,
    326392249,
    652784471,
    1305568919,
)

MIN_CAPACITY: int = PRIMES[0]
MAX_CAPACITY: int = PRIMES[-1]


class PrimeSizer:
    """Private cursor into the shared :data:`PRIMES` ladder.

    ``next()`` fails once the ladder is exhausted; ``previous()`` never goes
    below :data:`MIN_CAPACITY`.
    """

    __slots__ = ("_index",)

    def __init__(self, start: int = MIN_CAPACITY) -> None:
        try:
            self._index = PRIMES.index(start)
        except ValueError as exc:
            raise BadInputError(
                f"{start} is not a capacity on the prime ladder",
                hint=f"pick one of {', '.join(str(p) for p in PRIMES[:6])}, ...",
            ) from exc

    def __repr__(self) -> str:
        return f"PrimeSizer(current={self.current()})"

    def current(self) -> int:
        return PRIMES[self._index]

    def next(self) -> int:
        if self._index + 1 >= len(PRIMES):
            logger.warning("Prime capacity ladder exhausted at %d", PRIMES[self._index])
            raise PrimeExhaustionError(
                f"No prime capacity larger than {PRIMES[self._index]}",
                hint="treat this as the table's capacity ceiling",
            )
        self._index += 1
        return PRIMES[self._index]

    def previous(self) -> int:
        if self._index > 0:
            self._index -= 1
        return PRIMES[self._index]


_PRIME_SET = frozenset(PRIMES)


def is_ladder_prime(value: int) -> bool:
    return value in _PRIME_SET


__all__ = ["MAX_CAPACITY", "MIN_CAPACITY", "PRIMES", "PrimeSizer", "is_ladder_prime"]
