"""Producer protocol and Faker construction."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from faker import Faker

from dlpsynth.records import RecordSet


@runtime_checkable
class RecordProducer(Protocol):
    """Source of schema-uniform record sets."""

    fields: tuple[str, ...]

    def produce(self, row_count: int) -> RecordSet:
        ...


def make_faker(*, seed: int | None = None, locale: str = "en_US") -> Faker:
    """Return a Faker instance, seeded per instance when ``seed`` is given."""

    fake = Faker(locale)
    if seed is not None:
        fake.seed_instance(seed)
    return fake


def check_row_count(row_count: int) -> int:
    if row_count < 0:
        raise ValueError(f"row_count must be non-negative, got {row_count}")
    return row_count
