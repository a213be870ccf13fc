"""Spreadsheet (XLSX) writer backed by ``openpyxl``.

The workbook holds a single worksheet with a bold, frozen header row, an
auto-filter over the used range and column widths fitted to the content.

``openpyxl`` is optional.  :func:`write_xlsx` reports ``False`` when the
engine is missing or anything goes wrong while building or saving the
workbook; a partially written file is removed so that callers never see a
corrupt workbook.
"""

from __future__ import annotations

import contextlib
import os
import re
from pathlib import Path

from dlpsynth.records import RecordSet, format_value
from dlpsynth.utils.logging import get_logger

__all__ = ["safe_sheet_title", "column_widths", "write_xlsx"]

log = get_logger(__name__)

SHEET_TITLE_MAX = 31
MIN_WIDTH = 8
MAX_WIDTH = 60
_SHEET_FORBIDDEN = re.compile(r"[\[\]:*?/\\]")


def safe_sheet_title(name: str) -> str:
    """Return ``name`` made acceptable as an Excel worksheet title."""

    title = _SHEET_FORBIDDEN.sub("_", name).strip("'").strip()
    return title[:SHEET_TITLE_MAX] or "Sheet1"


def column_widths(records: RecordSet) -> list[int]:
    """Return a display width per column based on the longest cell."""

    widths = [len(name) for name in records.fields]
    for record in records:
        for idx, value in enumerate(record.values):
            longest = max((len(part) for part in format_value(value).splitlines()), default=0)
            widths[idx] = max(widths[idx], longest)
    return [min(MAX_WIDTH, max(MIN_WIDTH, w + 2)) for w in widths]


def write_xlsx(records: RecordSet, path: str | os.PathLike[str], sheet_name: str) -> bool:
    """Write ``records`` to ``path`` as a single-sheet workbook.

    Returns ``True`` when the workbook was saved and ``False`` when it could
    not be produced.  Never raises.
    """

    target = Path(path)
    try:
        from openpyxl import Workbook  # type: ignore
        from openpyxl.styles import Font  # type: ignore
        from openpyxl.utils import get_column_letter  # type: ignore
    except ImportError:
        log.warning("Cannot write XLSX: 'openpyxl' not installed")
        return False

    try:
        wb = Workbook()
        ws = wb.active
        ws.title = safe_sheet_title(sheet_name)
        ws.append(list(records.fields))
        for record in records:
            ws.append(list(record.values))
            # openpyxl reads a leading "=" as a formula
            for cell in ws[ws.max_row]:
                if isinstance(cell.value, str) and cell.value.startswith("="):
                    cell.data_type = "s"

        bold = Font(bold=True)
        for cell in ws[1]:
            cell.font = bold
        for idx, width in enumerate(column_widths(records), start=1):
            ws.column_dimensions[get_column_letter(idx)].width = width
        if records.fields:
            last = get_column_letter(len(records.fields))
            ws.auto_filter.ref = f"A1:{last}{len(records) + 1}"
        ws.freeze_panes = "A2"

        wb.save(str(target))
    except Exception as exc:  # engine or filesystem failure
        log.warning("Failed to write XLSX %s: %s", target, exc)
        with contextlib.suppress(OSError):
            target.unlink(missing_ok=True)
        return False
    return True
