from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple, Union

from phonebook.contracts.error import InvariantError
from phonebook.core.primes import MIN_CAPACITY, PrimeSizer
from phonebook.core.probes import Probes, check_entry, string_hash, utf16_order

logger = logging.getLogger("phonebook")


class _Empty:
    __slots__ = ()

    def __repr__(self) -> str:
        return "EMPTY"

    def __reduce__(self) -> str:
        return "_EMPTY"


class _Tombstone:
    __slots__ = ()

    def __repr__(self) -> str:
        return "TOMBSTONE"

    def __reduce__(self) -> str:
        return "_TOMBSTONE"


# Copies and pickles resolve to these singletons, so identity checks hold.
_EMPTY = _Empty()
_TOMBSTONE = _Tombstone()


@dataclass(slots=True)
class _Entry:
    key: str
    value: str


Slot = Union[_Empty, _Tombstone, _Entry]

# (home slot, probe index starting at 1, capacity) -> slot index
AddressFn = Callable[[int, int, int], int]


def linear_address(home: int, i: int, capacity: int) -> int:
    return (home + (i - 1)) % capacity


def quadratic_address(home: int, i: int, capacity: int) -> int:
    step = i - 1
    return (home + step + step * step) % capacity


@dataclass(frozen=True)
class ProbeStrategy:
    """How an open-addressing table walks and repairs its slots.

    ``ordered`` keeps keys sorted along each probe path by swapping larger keys
    deeper into the run during insertion. ``rebuild_on_hard_delete`` replaces
    the local run repair with a rebuild of the whole table at the same
    capacity; quadratic probe paths are not contiguous, so a forward walk over
    the run cannot find every displaced entry.
    """

    name: str
    address: AddressFn
    ordered: bool = False
    rebuild_on_hard_delete: bool = False


LINEAR = ProbeStrategy("linear", linear_address)
ORDERED_LINEAR = ProbeStrategy("ordered_linear", linear_address, ordered=True)
QUADRATIC = ProbeStrategy("quadratic", quadratic_address, rebuild_on_hard_delete=True)


class OpenAddressingHashTable:
    """Open-addressing hash table over string keys with exact probe counts.

    Every operation returns a :class:`Probes` whose count includes any resize,
    rebuild or run repair the operation triggered.
    """

    __slots__ = ("_strategy", "_soft", "_sizer", "_table", "_size", "_fill")

    def __init__(
        self,
        strategy: ProbeStrategy = LINEAR,
        soft: bool = False,
        initial_capacity: int = MIN_CAPACITY,
    ) -> None:
        self._strategy = strategy
        self._soft = soft
        self._sizer = PrimeSizer(initial_capacity)
        self._table: List[Slot] = [_EMPTY] * self._sizer.current()
        self._size = 0
        # Occupied-or-tombstone slot count. Reusing a tombstone leaves it
        # unchanged; only a rebuild reclaims tombstones.
        self._fill = 0

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        mode = "soft" if self._soft else "hard"
        return (
            f"OpenAddressingHashTable(strategy={self._strategy.name}, {mode}, "
            f"size={self._size}, capacity={len(self._table)})"
        )

    @property
    def strategy(self) -> ProbeStrategy:
        return self._strategy

    @property
    def soft(self) -> bool:
        return self._soft

    def size(self) -> int:
        return self._size

    def capacity(self) -> int:
        return len(self._table)

    def load_factor(self) -> float:
        return self._size / len(self._table)

    def home(self, key: str) -> int:
        return string_hash(key) % len(self._table)

    def probe_sequence(self, key: str) -> Iterator[Tuple[int, int, Slot]]:
        """Yield ``(i, slot_index, slot)`` along the probe path of ``key``.

        The path is bounded by the capacity so a table without a reachable
        empty slot still terminates.
        """

        capacity = len(self._table)
        home = self.home(key)
        address = self._strategy.address
        for i in range(1, capacity + 1):
            idx = address(home, i, capacity)
            yield i, idx, self._table[idx]

    def _locate(self, key: str) -> Tuple[Optional[int], int]:
        probes = 0
        for i, idx, slot in self.probe_sequence(key):
            probes = i
            if slot is _EMPTY:
                return None, probes
            if isinstance(slot, _Entry) and slot.key == key:
                return idx, probes
        return None, probes

    def _place(self, key: str, value: str) -> int:
        capacity = len(self._table)
        home = self.home(key)
        address = self._strategy.address
        carry = _Entry(key, value)
        for i in range(1, capacity + 1):
            idx = address(home, i, capacity)
            slot = self._table[idx]
            if not isinstance(slot, _Entry):
                if slot is _EMPTY:
                    self._fill += 1
                self._table[idx] = carry
                self._size += 1
                return i
            if self._strategy.ordered and utf16_order(slot.key) > utf16_order(carry.key):
                self._table[idx], carry = carry, slot
        raise InvariantError(
            f"No free slot on the probe path of {key!r} (capacity={capacity}, fill={self._fill})"
        )

    def _rebuild(self, capacity: int) -> int:
        """Replay every live entry into a fresh array; returns probes charged."""

        old = self._table
        self._table = [_EMPTY] * capacity
        self._size = 0
        self._fill = 0
        probes = 0
        for slot in old:
            probes += 1
            if isinstance(slot, _Entry):
                probes += self._place(slot.key, slot.value)
        return probes

    def _repair_run(self, start: int) -> int:
        """Re-place every entry in the run after a hard-cleared slot."""

        capacity = len(self._table)
        probes = 0
        j = (start + 1) % capacity
        while True:
            probes += 1
            slot = self._table[j]
            if slot is _EMPTY:
                return probes
            self._table[j] = _EMPTY
            if isinstance(slot, _Entry):
                self._size -= 1
                self._fill -= 1
                probes += self._place(slot.key, slot.value)
            j = (j + 1) % capacity

    def put(self, key: str, value: str) -> Probes:
        check_entry(key, value)
        probes = 0
        if self._fill > len(self._table) // 2:
            old_capacity = len(self._table)
            new_capacity = self._sizer.next()
            probes += self._rebuild(new_capacity)
            logger.debug(
                "Resized %s table %d -> %d (%d probes)",
                self._strategy.name,
                old_capacity,
                new_capacity,
                probes,
            )
        probes += self._place(key, value)
        return Probes(value, probes)

    def get(self, key: Optional[str]) -> Probes:
        if key is None:
            return Probes(None, 0)
        idx, probes = self._locate(key)
        if idx is None:
            return Probes(None, probes)
        slot = self._table[idx]
        assert isinstance(slot, _Entry)
        return Probes(slot.value, probes)

    def remove(self, key: Optional[str]) -> Probes:
        if key is None:
            return Probes(None, 0)
        idx, probes = self._locate(key)
        if idx is None:
            return Probes(None, probes)
        slot = self._table[idx]
        assert isinstance(slot, _Entry)
        self._size -= 1
        if self._soft:
            self._table[idx] = _TOMBSTONE
            return Probes(slot.value, probes + 1)
        self._table[idx] = _EMPTY
        self._fill -= 1
        if self._strategy.rebuild_on_hard_delete:
            probes += self._rebuild(len(self._table))
            logger.debug("Rebuilt %s table after hard delete of %r", self._strategy.name, key)
        else:
            probes += self._repair_run(idx)
        return Probes(slot.value, probes)

    def contains_key(self, key: Optional[str]) -> bool:
        return self.get(key).value is not None

    def contains_value(self, value: Optional[str]) -> bool:
        if value is None:
            return False
        return any(isinstance(slot, _Entry) and slot.value == value for slot in self._table)

    def items(self) -> Iterator[Tuple[str, str]]:
        for slot in self._table:
            if isinstance(slot, _Entry):
                yield slot.key, slot.value

    def tombstones(self) -> int:
        return sum(1 for slot in self._table if slot is _TOMBSTONE)


def linear_probing_table(soft: bool = False, initial_capacity: int = MIN_CAPACITY) -> OpenAddressingHashTable:
    return OpenAddressingHashTable(LINEAR, soft, initial_capacity)


def ordered_linear_probing_table(
    soft: bool = False, initial_capacity: int = MIN_CAPACITY
) -> OpenAddressingHashTable:
    return OpenAddressingHashTable(ORDERED_LINEAR, soft, initial_capacity)


def quadratic_probing_table(soft: bool = False, initial_capacity: int = MIN_CAPACITY) -> OpenAddressingHashTable:
    return OpenAddressingHashTable(QUADRATIC, soft, initial_capacity)


__all__ = [
    "LINEAR",
    "ORDERED_LINEAR",
    "QUADRATIC",
    "OpenAddressingHashTable",
    "ProbeStrategy",
    "linear_address",
    "linear_probing_table",
    "ordered_linear_probing_table",
    "quadratic_address",
    "quadratic_probing_table",
]
