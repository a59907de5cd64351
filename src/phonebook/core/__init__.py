from .chaining import SeparateChainingHashTable
from .open_addressing import (
    LINEAR,
    ORDERED_LINEAR,
    QUADRATIC,
    OpenAddressingHashTable,
    ProbeStrategy,
    linear_probing_table,
    ordered_linear_probing_table,
    quadratic_probing_table,
)
from .primes import MAX_CAPACITY, MIN_CAPACITY, PRIMES, PrimeSizer, is_ladder_prime
from .probes import Probes, check_entry, string_hash, utf16_order
from .tables import CollisionResolver, HashTable, create_table, table_from_policy

__all__ = [
    "CollisionResolver",
    "HashTable",
    "LINEAR",
    "MAX_CAPACITY",
    "MIN_CAPACITY",
    "ORDERED_LINEAR",
    "OpenAddressingHashTable",
    "PRIMES",
    "PrimeSizer",
    "ProbeStrategy",
    "Probes",
    "QUADRATIC",
    "SeparateChainingHashTable",
    "check_entry",
    "create_table",
    "is_ladder_prime",
    "linear_probing_table",
    "ordered_linear_probing_table",
    "quadratic_probing_table",
    "string_hash",
    "table_from_policy",
    "utf16_order",
]
