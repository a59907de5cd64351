"""Phonebook hash table core package."""

from . import analysis, contracts, core
from .core import (
    CollisionResolver,
    OpenAddressingHashTable,
    Probes,
    SeparateChainingHashTable,
    create_table,
)
from .directory import Phonebook

__all__ = [
    "CollisionResolver",
    "OpenAddressingHashTable",
    "Phonebook",
    "Probes",
    "SeparateChainingHashTable",
    "analysis",
    "contracts",
    "core",
    "create_table",
]
