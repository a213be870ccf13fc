"""Tests for the spreadsheet writer."""

from __future__ import annotations

import builtins
from pathlib import Path
from typing import Any

import pytest

from dlpsynth.io.writers import xlsx_writer
from dlpsynth.io.writers.xlsx_writer import column_widths, safe_sheet_title, write_xlsx
from dlpsynth.records import RecordSet


def _sample() -> RecordSet:
    return RecordSet.from_rows(
        ["Name", "Email", "Visits"],
        [("Alex Lee", "alex.lee@example.com", 3), ("A & B", "ab@sample.net", 12)],
    )


def test_workbook_layout(tmp_path: Path) -> None:
    openpyxl = pytest.importorskip("openpyxl")
    out = tmp_path / "d.xlsx"
    assert write_xlsx(_sample(), out, "Customers") is True

    wb = openpyxl.load_workbook(out)
    assert wb.sheetnames == ["Customers"]
    ws = wb["Customers"]
    assert [c.value for c in ws[1]] == ["Name", "Email", "Visits"]
    assert all(c.font.bold for c in ws[1])
    assert [c.value for c in ws[3]] == ["A & B", "ab@sample.net", 12]
    assert ws.freeze_panes == "A2"
    assert ws.auto_filter.ref == "A1:C3"
    assert ws.column_dimensions["B"].width >= len("alex.lee@example.com")


def test_empty_set_has_header_only(tmp_path: Path) -> None:
    openpyxl = pytest.importorskip("openpyxl")
    out = tmp_path / "e.xlsx"
    assert write_xlsx(RecordSet.from_rows(["Name"], []), out, "Empty") is True
    ws = openpyxl.load_workbook(out)["Empty"]
    assert ws.max_row == 1
    assert ws["A1"].value == "Name"


def test_missing_engine_returns_false(tmp_path: Path, monkeypatch: Any) -> None:
    real_import = builtins.__import__

    def fake_import(name: str, *args: Any, **kwargs: Any) -> Any:
        if name == "openpyxl" or name.startswith("openpyxl."):
            raise ImportError("No module named 'openpyxl'")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    out = tmp_path / "d.xlsx"
    assert write_xlsx(_sample(), out, "Customers") is False
    assert not out.exists()


def test_save_failure_returns_false_and_leaves_no_file(tmp_path: Path) -> None:
    pytest.importorskip("openpyxl")
    out = tmp_path / "missing" / "d.xlsx"
    assert write_xlsx(_sample(), out, "Customers") is False
    assert not out.exists()


def test_sheet_title_sanitized() -> None:
    assert safe_sheet_title("Q1/Q2: [draft]?") == "Q1_Q2_ _draft__"
    assert len(safe_sheet_title("x" * 50)) == 31
    assert safe_sheet_title("") == "Sheet1"


def test_column_widths_fit_and_cap() -> None:
    rs = RecordSet.from_rows(["A", "Long"], [("tiny", "y" * 200)])
    widths = column_widths(rs)
    assert widths[0] == xlsx_writer.MIN_WIDTH
    assert widths[1] == xlsx_writer.MAX_WIDTH


def test_directory_destination_returns_false(tmp_path: Path) -> None:
    pytest.importorskip("openpyxl")
    out = tmp_path / "d.xlsx"
    out.mkdir()
    assert write_xlsx(_sample(), out, "Customers") is False
    assert out.is_dir()


def test_leading_equals_stays_text(tmp_path: Path) -> None:
    openpyxl = pytest.importorskip("openpyxl")
    rs = RecordSet.from_rows(
        ["Name", "Notes"], [("Alex", "=1+1"), ("Sam", '=HYPERLINK("http://x.test")')]
    )
    out = tmp_path / "f.xlsx"
    assert write_xlsx(rs, out, "Notes") is True

    ws = openpyxl.load_workbook(out)["Notes"]
    assert ws["B2"].data_type == "s"
    assert ws["B2"].value == "=1+1"
    assert ws["B3"].data_type == "s"
    assert ws["B3"].value == '=HYPERLINK("http://x.test")'
