"""Core record model shared by producers and writers.

A :class:`Record` is an immutable, ordered mapping from field name to a scalar
value.  A :class:`RecordSet` groups records that share exactly the same field
sequence; the set keeps its own ``fields`` tuple so that an empty set still
knows its schema and writers can emit header-only output.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from dlpsynth.utils.errors import SchemaMismatchError

__all__ = ["Value", "Record", "RecordSet", "format_value"]

Value = Union[str, int, Decimal]

_VALUE_TYPES = (str, int, Decimal)


def format_value(value: Value) -> str:
    """Render ``value`` as text the same way for every output format."""

    if isinstance(value, bool):
        raise TypeError("boolean values are not supported in records")
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(slots=True, frozen=True)
class Record:
    """Ordered field/value pairs.

    Field names must be unique, non-empty strings.  Values must be ``str``,
    ``int`` or :class:`~decimal.Decimal`.
    """

    pairs: tuple[tuple[str, Value], ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for name, value in self.pairs:
            if not isinstance(name, str) or not name:
                raise ValueError(f"invalid field name: {name!r}")
            if name in seen:
                raise ValueError(f"duplicate field name: {name!r}")
            seen.add(name)
            if isinstance(value, bool) or not isinstance(value, _VALUE_TYPES):
                raise TypeError(f"unsupported value for {name!r}: {type(value).__name__}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Value]) -> "Record":
        """Build a record preserving the iteration order of ``data``."""

        return cls(tuple(data.items()))

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.pairs)

    @property
    def values(self) -> tuple[Value, ...]:
        return tuple(value for _, value in self.pairs)

    def items(self) -> tuple[tuple[str, Value], ...]:
        return self.pairs

    def __getitem__(self, name: str) -> Value:
        for key, value in self.pairs:
            if key == name:
                return value
        raise KeyError(name)

    def __len__(self) -> int:
        return len(self.pairs)

    def as_dict(self) -> dict[str, Value]:
        """Return a plain ``dict`` copy in field order."""

        return dict(self.pairs)


@dataclass(slots=True, frozen=True)
class RecordSet:
    """Schema-uniform, ordered collection of records."""

    fields: tuple[str, ...]
    records: tuple[Record, ...] = ()

    def __post_init__(self) -> None:
        if len(set(self.fields)) != len(self.fields):
            raise SchemaMismatchError(f"duplicate field names in schema: {self.fields}")
        for index, record in enumerate(self.records):
            if record.fields != self.fields:
                raise SchemaMismatchError(
                    f"record {index} has fields {record.fields}, expected {self.fields}"
                )

    @classmethod
    def from_rows(cls, fields: Sequence[str], rows: Iterable[Sequence[Value]]) -> "RecordSet":
        """Build a set from a field list and positional value rows."""

        names = tuple(fields)
        records: list[Record] = []
        for row in rows:
            values = tuple(row)
            if len(values) != len(names):
                raise SchemaMismatchError(
                    f"row has {len(values)} values, expected {len(names)}"
                )
            records.append(Record(tuple(zip(names, values, strict=True))))
        return cls(names, tuple(records))

    @classmethod
    def from_dicts(
        cls, rows: Iterable[Mapping[str, Value]], fields: Sequence[str] | None = None
    ) -> "RecordSet":
        """Build a set from mappings.

        ``fields`` defaults to the key order of the first mapping; it is
        required when ``rows`` is empty.
        """

        records = tuple(Record.from_mapping(row) for row in rows)
        if fields is None:
            if not records:
                raise SchemaMismatchError("fields are required for an empty record set")
            fields = records[0].fields
        return cls(tuple(fields), records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)
