from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from phonebook.core.primes import MIN_CAPACITY, PrimeSizer
from phonebook.core.probes import Probes, check_entry, string_hash

logger = logging.getLogger("phonebook")


@dataclass(slots=True)
class _Entry:
    key: str
    value: str


class SeparateChainingHashTable:
    """Hash table with one chain per bucket and explicit resizing.

    Puts always append (duplicate keys coexist) and cost one probe. The table
    never resizes itself; callers decide when to :meth:`enlarge` or
    :meth:`shrink`.
    """

    __slots__ = ("_sizer", "_buckets", "_size")

    def __init__(self, initial_capacity: int = MIN_CAPACITY) -> None:
        self._sizer = PrimeSizer(initial_capacity)
        self._buckets: List[List[_Entry]] = [[] for _ in range(self._sizer.current())]
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"SeparateChainingHashTable(size={self._size}, capacity={len(self._buckets)})"

    def size(self) -> int:
        return self._size

    def capacity(self) -> int:
        return len(self._buckets)

    def load_factor(self) -> float:
        return self._size / len(self._buckets)

    def max_chain_len(self) -> int:
        return max((len(chain) for chain in self._buckets), default=0)

    def bucket_of(self, key: str) -> int:
        return string_hash(key) % len(self._buckets)

    def _scan(self, key: str) -> Tuple[int, Optional[int], int]:
        """Return ``(bucket, position or None, probes)``; a miss also pays for the end of chain."""

        bucket = self.bucket_of(key)
        chain = self._buckets[bucket]
        for pos, entry in enumerate(chain):
            if entry.key == key:
                return bucket, pos, pos + 1
        return bucket, None, len(chain) + 1

    def put(self, key: str, value: str) -> Probes:
        check_entry(key, value)
        self._buckets[self.bucket_of(key)].append(_Entry(key, value))
        self._size += 1
        return Probes(value, 1)

    def get(self, key: Optional[str]) -> Probes:
        if key is None:
            return Probes(None, 0)
        bucket, pos, probes = self._scan(key)
        if pos is None:
            return Probes(None, probes)
        return Probes(self._buckets[bucket][pos].value, probes)

    def remove(self, key: Optional[str]) -> Probes:
        if key is None:
            return Probes(None, 0)
        bucket, pos, probes = self._scan(key)
        if pos is None:
            return Probes(None, probes)
        chain = self._buckets[bucket]
        removed = chain[pos]
        # Every duplicate of the key goes; the cost is still the locate cost.
        kept = [entry for entry in chain if entry.key != key]
        self._buckets[bucket] = kept
        self._size -= len(chain) - len(kept)
        return Probes(removed.value, probes)

    def contains_key(self, key: Optional[str]) -> bool:
        return self.get(key).value is not None

    def contains_value(self, value: Optional[str]) -> bool:
        if value is None:
            return False
        return any(entry.value == value for chain in self._buckets for entry in chain)

    def items(self) -> Iterator[Tuple[str, str]]:
        for chain in self._buckets:
            for entry in chain:
                yield entry.key, entry.value

    def _rehash(self, new_capacity: int) -> None:
        old = self._buckets
        self._buckets = [[] for _ in range(new_capacity)]
        self._size = 0
        for chain in old:
            for entry in chain:
                self.put(entry.key, entry.value)

    def enlarge(self) -> None:
        old_capacity = len(self._buckets)
        self._rehash(self._sizer.next())
        logger.debug("Enlarged chaining table %d -> %d", old_capacity, len(self._buckets))

    def shrink(self) -> None:
        old_capacity = len(self._buckets)
        self._rehash(self._sizer.previous())
        logger.debug("Shrank chaining table %d -> %d", old_capacity, len(self._buckets))


__all__ = ["SeparateChainingHashTable"]
