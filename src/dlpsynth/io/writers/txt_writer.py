"""Plain-text writers.

:func:`write_text` persists a Unicode string exactly as given.
:func:`write_records_text` lays a record set out as a captioned listing::

    Customer Records
    ==========================
    Name: Alex Lee
    Email: alex.lee@example.com

    Name: Taylor Tan
    Email: t.t@test.local

The separator is ``min(120, len(caption) + 10)`` characters long and every
record block is followed by one blank line.  No escaping is applied; the
output is meant for line-oriented scanners, not for parsing back.
"""

from __future__ import annotations

import os
from pathlib import Path

from dlpsynth.records import RecordSet, format_value

PathLikeStr = os.PathLike[str]

SEPARATOR_CHAR = "="
SEPARATOR_MAX = 120


def write_text(
    path: str | PathLikeStr,
    text: str,
    *,
    encoding: str = "utf-8",
    newline: str | None = "",
) -> None:
    """Write ``text`` to ``path`` exactly as provided.

    Parameters
    ----------
    path:
        Destination file path.  The parent directory must already exist.
    text:
        The Unicode string to be written.
    encoding:
        Output encoding.  Defaults to UTF-8 without a byte-order mark.
    newline:
        ``newline`` parameter forwarded to :func:`open`.  The default of ``""``
        ensures newline characters in ``text`` are emitted verbatim.
    """

    with open(Path(path), "w", encoding=encoding, newline=newline) as f:
        f.write(text)


def separator_for(caption: str) -> str:
    """Return the separator line drawn under ``caption``."""

    return SEPARATOR_CHAR * min(SEPARATOR_MAX, len(caption) + 10)


def render_records_text(records: RecordSet, caption: str) -> str:
    lines = [caption, separator_for(caption)]
    for record in records:
        for name, value in record.items():
            lines.append(f"{name}: {format_value(value)}")
        lines.append("")
    return "\n".join(lines) + "\n"


def write_records_text(records: RecordSet, path: str | PathLikeStr, caption: str) -> None:
    """Write ``records`` as a captioned ``field: value`` listing."""

    write_text(path, render_records_text(records, caption))


__all__ = [
    "write_text",
    "separator_for",
    "render_records_text",
    "write_records_text",
]
