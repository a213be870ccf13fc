"""JSON writer.

The document is an array of objects, one per record, with keys in schema
order.  Integers stay JSON numbers; decimals are written as strings so that
no precision is lost.
"""

from __future__ import annotations

import json
import os
from decimal import Decimal
from pathlib import Path
from typing import Any

from dlpsynth.records import RecordSet

__all__ = ["write_json", "to_json_compatible"]


def to_json_compatible(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    return value


def write_json(records: RecordSet, path: str | os.PathLike[str]) -> None:
    """Write ``records`` to ``path`` as a JSON array (``[]`` when empty)."""

    payload = [
        {name: to_json_compatible(value) for name, value in record.items()}
        for record in records
    ]
    with open(Path(path), "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
        f.write("\n")
