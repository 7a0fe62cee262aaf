"""Configuration section tree.

A ConfigSection holds the winning value for each base key name plus an
ordered list of child sections. Sections are not unique by name: a tree may
hold several siblings called "server", and lookups choose the first or the
last of them.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Union

from confscope.config.key import ConfigKey
from confscope.exceptions import (
    DuplicateKeyError,
    KeyNotFoundError,
    SectionNotFoundError,
    ValueConversionError,
)

INT_PATTERN = re.compile(r"[+-]?[0-9]+")

# Distinguishes "no default supplied" from a default of None
_MISSING: Any = object()


@dataclass
class ConfigItem:
    """A key together with its value, as stored in a section."""

    key: ConfigKey
    value: str


def parse_bool(name: str, value: str) -> bool:
    """Convert "true"/"false" in any letter case; ``name`` labels errors."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueConversionError(name, value, "boolean")


def parse_int(name: str, value: str) -> int:
    """Convert an optionally signed decimal literal; ``name`` labels errors."""
    if INT_PATTERN.fullmatch(value) is None:
        raise ValueConversionError(name, value, "integer")
    return int(value)


class ConfigSection:
    """Named node of the configuration tree.

    Example:
        root = parse_config("service.ini", "prod", 2)
        db = root.get_last_section("database")
        port = db.get_as_int("port")
        debug = root.get_as_bool("debug", False)
    """

    def __init__(self, name: str = ""):
        self._name = name
        self._items: Dict[str, ConfigItem] = {}
        self._sections: List["ConfigSection"] = []

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return (
            f"ConfigSection(name={self._name!r}, keys={len(self._items)}, "
            f"sections={len(self._sections)})"
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, entry: Union[ConfigKey, "ConfigSection"], value: Optional[str] = None) -> None:
        """Add a key/value pair or a child section.

        ``add(key, value)`` behaves as add_key, ``add(section)`` as add_section.
        """
        if isinstance(entry, ConfigSection):
            if value is not None:
                raise TypeError("a value cannot be supplied when adding a section")
            self.add_section(entry)
        else:
            if value is None:
                raise TypeError(f"no value supplied for key '{entry}'")
            self.add_key(entry, value)

    def add_key(self, key: ConfigKey, value: str) -> None:
        """Insert a key/value pair, keeping the most specific definition.

        An existing entry with the same base name is replaced only by a key
        with a strictly higher precision score; a less precise key is
        ignored. Whatever the arrival order, the most specific definition
        ends up stored.

        Raises:
            DuplicateKeyError: If an entry with the same base name and the
                same precision score already exists
        """
        existing = self._items.get(key.name)
        if existing is None:
            self._items[key.name] = ConfigItem(key, value)
            return

        exist_score = existing.key.precision_score()
        score = key.precision_score()
        if score > exist_score:
            existing.key = key
            existing.value = value
        elif score == exist_score:
            raise DuplicateKeyError(key.to_string(), existing.key.to_string(), score)

    def add_section(self, section: "ConfigSection") -> None:
        """Append a child section. Same-named siblings are kept apart."""
        self._sections.append(section)

    # ------------------------------------------------------------------
    # Structure queries
    # ------------------------------------------------------------------

    def has_key(self, name: str) -> bool:
        return name in self._items

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def keys(self) -> List[str]:
        """Base names of the keys held by this section."""
        return list(self._items)

    def item(self, name: str) -> ConfigItem:
        """Return the winning item for a base name.

        Raises:
            KeyNotFoundError: If no key with that base name exists
        """
        try:
            return self._items[name]
        except KeyError:
            raise KeyNotFoundError(name, self._name) from None

    def items(self) -> Iterator[ConfigItem]:
        return iter(list(self._items.values()))

    def has_section(self, name: str) -> bool:
        return any(section.name == name for section in self._sections)

    def section_names(self) -> List[str]:
        """Names of the child sections, in insertion order, duplicates included."""
        return [section.name for section in self._sections]

    def sections(self) -> List["ConfigSection"]:
        return list(self._sections)

    def get_first_section(self, name: str) -> "ConfigSection":
        """Return the earliest added child section with the given name.

        Raises:
            SectionNotFoundError: If no child has that name
        """
        for section in self._sections:
            if section.name == name:
                return section
        raise SectionNotFoundError(name)

    def get_last_section(self, name: str) -> "ConfigSection":
        """Return the most recently added child section with the given name.

        Raises:
            SectionNotFoundError: If no child has that name
        """
        for section in reversed(self._sections):
            if section.name == name:
                return section
        raise SectionNotFoundError(name)

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def _lookup(self, name: str, default: Any) -> Optional[str]:
        item = self._items.get(name)
        if item is not None:
            return item.value
        if default is _MISSING:
            raise KeyNotFoundError(name, self._name)
        return None

    def get_as_string(self, name: str, default: Any = _MISSING) -> str:
        """Return a value as stored.

        Raises:
            KeyNotFoundError: If the key is absent and no default was given
        """
        value = self._lookup(name, default)
        return default if value is None else value

    def get_as_int(self, name: str, default: Any = _MISSING) -> int:
        """Return a value as an integer.

        Only an optionally signed run of decimal digits converts.

        Raises:
            KeyNotFoundError: If the key is absent and no default was given
            ValueConversionError: If the stored value is not an integer literal
        """
        value = self._lookup(name, default)
        return default if value is None else parse_int(name, value)

    def get_as_bool(self, name: str, default: Any = _MISSING) -> bool:
        """Return a value as a boolean.

        Accepts "true" and "false" in any letter case, nothing else.

        Raises:
            KeyNotFoundError: If the key is absent and no default was given
            ValueConversionError: If the stored value is not true/false
        """
        value = self._lookup(name, default)
        return default if value is None else parse_bool(name, value)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_structured_value(self) -> List[Any]:
        """Project the subtree to ``[name, {key: value}, [children...]]``.

        Keys are rendered in canonical scoped form (e.g. "prod.2.timeout")
        and ordered by base name.
        """
        pairs = {
            self._items[name].key.to_string(): self._items[name].value
            for name in sorted(self._items)
        }
        children = [section.to_structured_value() for section in self._sections]
        return [self._name, pairs, children]

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_structured_value(), indent=indent)


def to_structured_value(section: ConfigSection) -> List[Any]:
    """Read-only projection of a section tree to nested lists and dicts."""
    return section.to_structured_value()
