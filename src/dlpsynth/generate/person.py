"""Sensitive person records.

Every row holds the identifiers a DLP pipeline is expected to flag: a full
name, email, phone number, US social security number, a Luhn-valid card
number and a postal address.  ``Notes`` mixes free text with characters that
are significant in markup (``&``, ``<``, ``>``, quotes) so the serializers'
escaping is exercised on real output.
"""

from __future__ import annotations

from faker import Faker

from dlpsynth.records import Record, RecordSet

from .base import check_row_count

PERSON_FIELDS: tuple[str, ...] = (
    "Name",
    "Email",
    "Phone",
    "NationalID",
    "CardNumber",
    "Address",
    "Notes",
)

NOTE_TEMPLATES = (
    "{sentence}",
    "Call back re: billing & payments. {sentence}",
    "Prefers contact via <email> only.",
    'Customer said "{word}" twice during the call.',
    "Account flagged for review; balance < limit & no disputes.",
    "{sentence} Ref #{number}.",
)


class PersonProducer:
    fields = PERSON_FIELDS

    def __init__(self, fake: Faker) -> None:
        self.fake = fake

    def _note(self) -> str:
        fake = self.fake
        template = fake.random_element(NOTE_TEMPLATES)
        return template.format(
            sentence=fake.sentence(nb_words=8),
            word=fake.word(),
            number=fake.random_int(10000, 99999),
        )

    def _record(self) -> Record:
        fake = self.fake
        first, last = fake.first_name(), fake.last_name()
        domain = fake.free_email_domain()
        email = f"{first}.{last}@{domain}".lower().replace("'", "")
        address = fake.address().replace("\n", ", ")
        return Record(
            (
                ("Name", f"{first} {last}"),
                ("Email", email),
                ("Phone", fake.phone_number()),
                ("NationalID", fake.ssn()),
                ("CardNumber", fake.credit_card_number()),
                ("Address", address),
                ("Notes", self._note()),
            )
        )

    def produce(self, row_count: int) -> RecordSet:
        count = check_row_count(row_count)
        return RecordSet(self.fields, tuple(self._record() for _ in range(count)))
