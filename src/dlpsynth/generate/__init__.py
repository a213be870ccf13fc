"""Faker-backed record producers.

Two schemas are available: ``catalog`` (no personal data) and ``person``
(names, contact details, national IDs and card numbers).  Use
:func:`get_producer` to build a seeded producer for a schema name.
"""

from __future__ import annotations

from .base import RecordProducer, make_faker
from .catalog import CATALOG_FIELDS, CatalogProducer
from .person import PERSON_FIELDS, PersonProducer

SCHEMAS: dict[str, type] = {
    "catalog": CatalogProducer,
    "person": PersonProducer,
}


def get_producer(schema: str, *, seed: int | None = None, locale: str = "en_US") -> RecordProducer:
    """Return a producer for ``schema`` seeded with ``seed``."""

    try:
        cls = SCHEMAS[schema]
    except KeyError:
        raise ValueError(f"unknown schema: {schema!r}") from None
    return cls(make_faker(seed=seed, locale=locale))


__all__ = [
    "RecordProducer",
    "make_faker",
    "CATALOG_FIELDS",
    "CatalogProducer",
    "PERSON_FIELDS",
    "PersonProducer",
    "SCHEMAS",
    "get_producer",
]
