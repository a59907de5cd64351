"""Typed configuration loader for the phonebook tables."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .contracts.error import BadInputError
from .core.primes import MIN_CAPACITY, PRIMES, is_ladder_prime
from .core.tables import CollisionResolver

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _coerce_bool(raw: Any, name: str) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in _TRUE:
            return True
        if normalized in _FALSE:
            return False
    raise BadInputError(f"{name} must be boolean, got {raw!r}")


def _check_resolver(value: str, name: str) -> None:
    try:
        CollisionResolver.parse(value)
    except BadInputError as exc:
        raise BadInputError(f"{name}: {exc}", hint=exc.hint) from exc


@dataclass
class TablePolicy:
    resolver: str = CollisionResolver.LINEAR_PROBING.value
    soft_deletion: bool = False
    initial_capacity: int = MIN_CAPACITY

    def validate(self) -> None:
        _check_resolver(self.resolver, "tables.resolver")
        if not is_ladder_prime(self.initial_capacity):
            raise BadInputError(
                f"tables.initial_capacity must be on the prime ladder, got {self.initial_capacity}",
                hint=f"smallest choices: {', '.join(str(p) for p in PRIMES[:5])}",
            )


@dataclass
class PhonebookPolicy:
    names_to_phones: str = CollisionResolver.SEPARATE_CHAINING.value
    phones_to_names: str = CollisionResolver.SEPARATE_CHAINING.value
    soft_deletion: bool = False

    def validate(self) -> None:
        _check_resolver(self.names_to_phones, "phonebook.names_to_phones")
        _check_resolver(self.phones_to_names, "phonebook.phones_to_names")


@dataclass
class LoggingPolicy:
    level: str = "INFO"
    json: bool = False
    file: str | None = None

    def validate(self) -> None:
        if not isinstance(self.level, str):
            raise BadInputError(f"logging.level must be a string, got {self.level!r}")
        if self.file is not None and not isinstance(self.file, str):
            raise BadInputError(f"logging.file must be a string path, got {self.file!r}")
        if self.level.upper() not in _LOG_LEVELS:
            raise BadInputError(f"logging.level must be one of {sorted(_LOG_LEVELS)}")
        self.level = self.level.upper()
        if self.file == "":
            self.file = None

    def numeric_level(self) -> int:
        return int(getattr(logging, self.level.upper()))


@dataclass
class AppConfig:
    tables: TablePolicy = field(default_factory=TablePolicy)
    phonebook: PhonebookPolicy = field(default_factory=PhonebookPolicy)
    logging: LoggingPolicy = field(default_factory=LoggingPolicy)

    @classmethod
    def load(cls, path: Path | None) -> AppConfig:
        if path is None:
            cfg = cls()
        else:
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise BadInputError(f"Config file not found: {path}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise BadInputError(f"Invalid TOML: {exc}") from exc
            cfg = cls.from_dict(data)
        cfg.apply_env_overrides(os.environ)
        cfg.validate()
        return cfg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        sections: dict[str, dict[str, Any]] = {}
        for name in ("tables", "phonebook", "logging"):
            section = data.get(name, {})
            if not isinstance(section, dict):
                raise BadInputError(f"[{name}] section must be a table")
            sections[name] = dict(section)

        try:
            tables = TablePolicy(**sections["tables"])
            phonebook = PhonebookPolicy(**sections["phonebook"])
            logging_policy = LoggingPolicy(**sections["logging"])
        except TypeError as exc:
            raise BadInputError(f"Unknown config key: {exc}") from exc

        tables.soft_deletion = _coerce_bool(tables.soft_deletion, "tables.soft_deletion")
        phonebook.soft_deletion = _coerce_bool(phonebook.soft_deletion, "phonebook.soft_deletion")
        logging_policy.json = _coerce_bool(logging_policy.json, "logging.json")
        if not isinstance(tables.initial_capacity, int) or isinstance(tables.initial_capacity, bool):
            raise BadInputError("tables.initial_capacity must be an integer")
        return cls(tables=tables, phonebook=phonebook, logging=logging_policy)

    def apply_env_overrides(self, env: Mapping[str, str]) -> None:
        mapping: dict[str, tuple[Any, str, Callable[[str], Any]]] = {
            "PHONEBOOK_RESOLVER": (self.tables, "resolver", str),
            "PHONEBOOK_SOFT_DELETION": (
                self.tables,
                "soft_deletion",
                lambda raw: _coerce_bool(raw, "PHONEBOOK_SOFT_DELETION"),
            ),
            "PHONEBOOK_INITIAL_CAPACITY": (self.tables, "initial_capacity", int),
            "PHONEBOOK_NAMES_TO_PHONES": (self.phonebook, "names_to_phones", str),
            "PHONEBOOK_PHONES_TO_NAMES": (self.phonebook, "phones_to_names", str),
            "PHONEBOOK_DIRECTORY_SOFT_DELETION": (
                self.phonebook,
                "soft_deletion",
                lambda raw: _coerce_bool(raw, "PHONEBOOK_DIRECTORY_SOFT_DELETION"),
            ),
            "PHONEBOOK_LOG_LEVEL": (self.logging, "level", str),
            "PHONEBOOK_LOG_JSON": (
                self.logging,
                "json",
                lambda raw: _coerce_bool(raw, "PHONEBOOK_LOG_JSON"),
            ),
            "PHONEBOOK_LOG_FILE": (self.logging, "file", str),
        }
        for key, (target, attr, caster) in mapping.items():
            raw_value = env.get(key)
            if raw_value is None:
                continue
            try:
                value = caster(raw_value)
            except ValueError as exc:
                raise BadInputError(f"Invalid env override {key}={raw_value!r}") from exc
            setattr(target, attr, value)

    def validate(self) -> None:
        self.tables.validate()
        self.phonebook.validate()
        self.logging.validate()


DEFAULT_CONFIG = AppConfig()


def load_app_config(path: str | None) -> AppConfig:
    config_path = Path(path) if path else None
    return AppConfig.load(config_path)


__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG",
    "LoggingPolicy",
    "PhonebookPolicy",
    "TablePolicy",
    "load_app_config",
]
