"""Two-way phonebook built from a pair of hash tables."""

from __future__ import annotations

import logging
from typing import Optional, Union

from phonebook.config import DEFAULT_CONFIG, AppConfig
from phonebook.contracts.error import DuplicateEntryError
from phonebook.core.probes import check_entry
from phonebook.core.tables import CollisionResolver, HashTable, create_table

logger = logging.getLogger("phonebook")

Resolver = Union[str, CollisionResolver]


class Phonebook:
    """Name -> number and number -> name lookups kept in step.

    Each name and each number may be listed once; a second entry for either
    raises :class:`DuplicateEntryError`.
    """

    def __init__(
        self,
        names_to_phones: Resolver = CollisionResolver.SEPARATE_CHAINING,
        phones_to_names: Resolver = CollisionResolver.SEPARATE_CHAINING,
        *,
        soft: bool = False,
    ) -> None:
        self._by_name: HashTable = create_table(names_to_phones, soft=soft)
        self._by_number: HashTable = create_table(phones_to_names, soft=soft)
        logger.debug(
            "Phonebook created (names=%s, numbers=%s, soft=%s)",
            CollisionResolver.parse(names_to_phones).value,
            CollisionResolver.parse(phones_to_names).value,
            soft,
        )

    @classmethod
    def from_config(cls, cfg: Optional[AppConfig] = None) -> "Phonebook":
        policy = (cfg or DEFAULT_CONFIG).phonebook
        return cls(policy.names_to_phones, policy.phones_to_names, soft=policy.soft_deletion)

    def size(self) -> int:
        return self._by_name.size()

    def is_empty(self) -> bool:
        return self.size() == 0

    def get_number_of(self, name: Optional[str]) -> Optional[str]:
        return self._by_name.get(name).value

    def get_owner_of(self, number: Optional[str]) -> Optional[str]:
        return self._by_number.get(number).value

    def add_entry(self, name: str, number: str) -> None:
        check_entry(name, number)
        if self._by_name.contains_key(name):
            raise DuplicateEntryError(f"{name!r} is already listed", hint="delete the old entry first")
        if self._by_number.contains_key(number):
            raise DuplicateEntryError(f"{number!r} is already listed", hint="delete the old entry first")
        self._by_name.put(name, number)
        self._by_number.put(number, name)

    def delete_entry(self, name: Optional[str], number: Optional[str]) -> Optional[str]:
        """Remove the pair; returns the number, or ``None`` when it is not listed."""

        if name is None or number is None:
            return None
        if self._by_name.get(name).value != number:
            return None
        removed = self._by_name.remove(name).value
        self._by_number.remove(number)
        return removed


__all__ = ["Phonebook"]
