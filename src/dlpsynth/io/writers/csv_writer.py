"""Delimited (CSV) writer.

Output follows RFC 4180: a header line with the field names, one line per
record, CRLF line endings, and fields quoted only when they contain a comma,
a double quote or a line break (embedded quotes are doubled).  Files are
UTF-8 without a byte-order mark.
"""

from __future__ import annotations

import csv
import os
from pathlib import Path

from dlpsynth.records import RecordSet, format_value

__all__ = ["write_csv"]


def write_csv(records: RecordSet, path: str | os.PathLike[str]) -> None:
    """Write ``records`` to ``path`` as CSV.

    An empty record set produces the header line alone.  ``OSError`` from the
    filesystem propagates to the caller.
    """

    with open(Path(path), "w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
        writer.writerow(records.fields)
        for record in records:
            writer.writerow([format_value(value) for value in record.values])
