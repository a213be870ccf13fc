"""Non-sensitive catalog records.

Rows describe made-up software artefacts and carry no personal data, which
makes them the negative control for DLP scanners.
"""

from __future__ import annotations

from faker import Faker

from dlpsynth.records import Record, RecordSet

from .base import check_row_count

CATALOG_FIELDS: tuple[str, ...] = ("Title", "Category", "Version", "Summary", "Tags")

CATEGORIES = (
    "Documentation",
    "Reference",
    "Tutorial",
    "Release Notes",
    "Design",
    "Runbook",
    "Policy",
    "Training",
)


class CatalogProducer:
    fields = CATALOG_FIELDS

    def __init__(self, fake: Faker) -> None:
        self.fake = fake

    def _record(self) -> Record:
        fake = self.fake
        title = fake.catch_phrase()
        version = f"{fake.random_int(0, 9)}.{fake.random_int(0, 20)}.{fake.random_int(0, 50)}"
        tags = ";".join(fake.words(nb=fake.random_int(2, 4), unique=True))
        return Record(
            (
                ("Title", title),
                ("Category", fake.random_element(CATEGORIES)),
                ("Version", version),
                ("Summary", fake.sentence(nb_words=12)),
                ("Tags", tags),
            )
        )

    def produce(self, row_count: int) -> RecordSet:
        count = check_row_count(row_count)
        return RecordSet(self.fields, tuple(self._record() for _ in range(count)))
