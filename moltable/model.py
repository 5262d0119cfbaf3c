"""
Table data model: typed property values, properties, records and tables.

Identity everywhere in this module is key-only. ``Property`` and ``Record``
declare every non-key field with ``field(compare=False)`` so equality,
ordering and hashing are driven by ``key`` alone; adding a field later does
not silently join the comparison unless it is declared that way on purpose.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Number:
    """Numeric property value (double precision)."""

    value: float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"Number expects an int or float, got {type(self.value).__name__}")
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class Text:
    """Textual property value."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"Text expects a str, got {type(self.value).__name__}")


# Closed set of value kinds. Every consumer must handle both variants.
PropertyValue = Union[Number, Text]


def make_value(raw: Any) -> PropertyValue:
    """Classify a raw Python value as a Number or Text property value."""

    if isinstance(raw, (Number, Text)):
        return raw
    if isinstance(raw, bool):
        raise TypeError("Boolean values are neither numeric nor text properties")
    if isinstance(raw, (int, float)):
        return Number(float(raw))
    if isinstance(raw, str):
        return Text(raw)
    raise TypeError(f"Cannot classify property value of type {type(raw).__name__}")


def _require_key(key: Any, owner: str) -> None:
    if not isinstance(key, str):
        raise TypeError(f"{owner} key must be a str, got {type(key).__name__}")
    if not key:
        raise ValueError(f"{owner} key must be a non-empty string")


@dataclass(frozen=True, order=True)
class Property:
    """A named attribute. Compared, ordered and hashed by ``key`` only."""

    key: str
    value: PropertyValue = field(compare=False)

    def __post_init__(self) -> None:
        _require_key(self.key, "Property")
        if not isinstance(self.value, (Number, Text)):
            object.__setattr__(self, "value", make_value(self.value))


class PropertySet:
    """
    Immutable, key-ordered collection of properties with unique keys.

    When two properties share a key the first one seen is kept.
    """

    def __init__(self, properties: Iterable[Property] = ()):
        by_key: Dict[str, Property] = {}
        for prop in properties:
            if not isinstance(prop, Property):
                raise TypeError(f"PropertySet expects Property items, got {type(prop).__name__}")
            by_key.setdefault(prop.key, prop)
        self._properties: Tuple[Property, ...] = tuple(sorted(by_key.values()))
        self._index: Dict[str, Property] = {prop.key: prop for prop in self._properties}

    @classmethod
    def from_pairs(cls, pairs: Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]) -> "PropertySet":
        """Build from ``(key, raw value)`` pairs or a mapping of key -> raw value."""

        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        return cls(Property(key, make_value(raw)) for key, raw in pairs)

    def __iter__(self) -> Iterator[Property]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, Property):
            key = key.key
        return key in self._index

    def get(self, key: str) -> Optional[Property]:
        return self._index.get(key)

    def keys(self) -> List[str]:
        return [prop.key for prop in self._properties]

    def items(self) -> List[Tuple[str, PropertyValue]]:
        return [(prop.key, prop.value) for prop in self._properties]

    def as_dict(self) -> Dict[str, PropertyValue]:
        return dict(self.items())

    def __eq__(self, other: object) -> bool:
        # Content comparison (keys and values); record identity stays key-only.
        if not isinstance(other, PropertySet):
            return NotImplemented
        return self.items() == other.items()

    def __repr__(self) -> str:
        inner = ", ".join(f"{key}={value.value!r}" for key, value in self.items())
        return f"PropertySet({inner})"


@dataclass(frozen=True, order=True)
class Record:
    """
    A named entity in a table.

    Two records are the same record iff their keys are equal; ``name`` and
    ``properties`` are excluded from equality, ordering and hashing. Tables
    rely on this to deduplicate and to order their contents.
    """

    key: str
    name: str = field(compare=False)
    properties: PropertySet = field(default_factory=PropertySet, compare=False)

    def __post_init__(self) -> None:
        _require_key(self.key, "Record")
        if isinstance(self.properties, Mapping):
            object.__setattr__(self, "properties", PropertySet.from_pairs(self.properties))
        elif not isinstance(self.properties, PropertySet):
            object.__setattr__(self, "properties", PropertySet(self.properties))

    @classmethod
    def from_row(
        cls,
        key: str,
        name: str,
        pairs: Union[Mapping[str, Any], Iterable[Tuple[str, Any]]] = (),
    ) -> "Record":
        """Build a record from a key, a display name and ``(property key, raw value)`` pairs."""

        return cls(key, name, PropertySet.from_pairs(pairs))

    def copy(self) -> "Record":
        return replace(self, properties=PropertySet(self.properties))


class Table:
    """
    Key-ordered collection of records with at most one record per key.

    Inserting a record whose key is already present leaves the table
    untouched: the first record inserted for a key wins.
    """

    def __init__(self, records: Iterable[Record] = ()):
        self._records: List[Record] = []
        self._keys: List[str] = []
        for record in records:
            self.insert(record)

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "Table":
        return cls(records)

    @classmethod
    def from_rows(cls, rows: Iterable[Tuple[str, str, Any]]) -> "Table":
        """Build a table from ``(key, name, property pairs)`` rows, first row per key wins."""

        table = cls()
        for key, name, pairs in rows:
            table.insert(Record.from_row(key, name, pairs))
        return table

    @classmethod
    def from_sorted(cls, records: Iterable[Record]) -> "Table":
        """Build a table from records already in strictly increasing key order."""

        table = cls()
        for record in records:
            if table._keys and record.key <= table._keys[-1]:
                raise ValueError(
                    f"Records are not in strictly increasing key order: {record.key!r} after {table._keys[-1]!r}"
                )
            table._keys.append(record.key)
            table._records.append(record)
        return table

    def insert(self, record: Record) -> bool:
        """Insert ``record``; return False (and keep the existing record) on a duplicate key."""

        if not isinstance(record, Record):
            raise TypeError(f"Table expects Record items, got {type(record).__name__}")
        index = bisect.bisect_left(self._keys, record.key)
        if index < len(self._keys) and self._keys[index] == record.key:
            LOGGER.debug("Ignoring duplicate record key %r, keeping the first one", record.key)
            return False
        self._keys.insert(index, record.key)
        self._records.insert(index, record)
        return True

    def get(self, key: str, default: Optional[Record] = None) -> Optional[Record]:
        if not isinstance(key, str):
            return default
        index = bisect.bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            return self._records[index]
        return default

    def first(self) -> Optional[Record]:
        return self._records[0] if self._records else None

    def keys(self) -> List[str]:
        return list(self._keys)

    @property
    def records(self) -> Tuple[Record, ...]:
        return tuple(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(tuple(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, item: object) -> bool:
        key = item.key if isinstance(item, Record) else item
        return isinstance(key, str) and self.get(key) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self._keys == other._keys

    def __repr__(self) -> str:
        shown = ", ".join(self._keys[:5])
        if len(self._keys) > 5:
            shown += ", ..."
        return f"Table({len(self._keys)} records: {shown})"
