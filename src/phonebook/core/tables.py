"""Resolver registry and the contract shared by every table."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional, Protocol, Tuple, Union

from phonebook.contracts.error import BadInputError
from phonebook.core.chaining import SeparateChainingHashTable
from phonebook.core.open_addressing import (
    LINEAR,
    ORDERED_LINEAR,
    QUADRATIC,
    OpenAddressingHashTable,
)
from phonebook.core.primes import MIN_CAPACITY
from phonebook.core.probes import Probes

if TYPE_CHECKING:  # pragma: no cover
    from phonebook.config import TablePolicy


class HashTable(Protocol):
    def put(self, key: str, value: str) -> Probes: ...

    def get(self, key: Optional[str]) -> Probes: ...

    def remove(self, key: Optional[str]) -> Probes: ...

    def contains_key(self, key: Optional[str]) -> bool: ...

    def contains_value(self, value: Optional[str]) -> bool: ...

    def size(self) -> int: ...

    def capacity(self) -> int: ...

    def items(self) -> Iterator[Tuple[str, str]]: ...

    def __len__(self) -> int: ...


class CollisionResolver(str, Enum):
    SEPARATE_CHAINING = "separate_chaining"
    LINEAR_PROBING = "linear_probing"
    ORDERED_LINEAR_PROBING = "ordered_linear_probing"
    QUADRATIC_PROBING = "quadratic_probing"

    @classmethod
    def parse(cls, raw: Union[str, "CollisionResolver"]) -> "CollisionResolver":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError as exc:
            raise BadInputError(
                f"Unknown collision resolver {raw!r}",
                hint="expected one of: " + ", ".join(member.value for member in cls),
            ) from exc


_STRATEGIES = {
    CollisionResolver.LINEAR_PROBING: LINEAR,
    CollisionResolver.ORDERED_LINEAR_PROBING: ORDERED_LINEAR,
    CollisionResolver.QUADRATIC_PROBING: QUADRATIC,
}


def create_table(
    resolver: Union[str, CollisionResolver],
    *,
    soft: bool = False,
    initial_capacity: int = MIN_CAPACITY,
) -> HashTable:
    """Build an empty table for ``resolver``; chaining ignores ``soft``."""

    kind = CollisionResolver.parse(resolver)
    if kind is CollisionResolver.SEPARATE_CHAINING:
        return SeparateChainingHashTable(initial_capacity)
    return OpenAddressingHashTable(_STRATEGIES[kind], soft, initial_capacity)


def table_from_policy(policy: "TablePolicy") -> HashTable:
    return create_table(
        policy.resolver,
        soft=policy.soft_deletion,
        initial_capacity=policy.initial_capacity,
    )


__all__ = ["CollisionResolver", "HashTable", "create_table", "table_from_policy"]
