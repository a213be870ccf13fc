"""Three-record example run through every required writer."""

from __future__ import annotations

import csv
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from dlpsynth.driver import write_tier
from dlpsynth.io import WriteOptions, WriteStatus, capabilities
from dlpsynth.records import RecordSet

ROWS = [
    ("Alex Lee", "alex.lee@example.com"),
    ("Taylor Tan", "t.t@test.local"),
    ("A & B", "ab@sample.net"),
]


def _write(tmp_path: Path, records: RecordSet, monkeypatch: Any) -> dict[str, Any]:
    monkeypatch.setattr(capabilities, "is_available", lambda name: False)
    options = WriteOptions(title="Contacts", root_element="Records")
    formats = ["csv", "json", "xml", "html", "txt", "xlsx", "docx"]
    results, _ = write_tier(records, tmp_path, "contacts", formats, options)
    return results


def test_example_outputs(tmp_path: Path, monkeypatch: Any) -> None:
    records = RecordSet.from_rows(["Name", "Email"], ROWS)
    results = _write(tmp_path, records, monkeypatch)
    assert all(results[f].status is WriteStatus.SUCCESS for f in ("csv", "xml", "txt"))

    csv_text = (tmp_path / "contacts.csv").read_text(encoding="utf-8")
    assert len(csv_text.splitlines()) == 4
    with (tmp_path / "contacts.csv").open(newline="", encoding="utf-8") as fh:
        assert [tuple(r) for r in csv.reader(fh)][1:] == ROWS

    xml_text = (tmp_path / "contacts.xml").read_text(encoding="utf-8")
    assert "A &amp; B" in xml_text
    root = ET.fromstring(xml_text.encode("utf-8"))
    assert root.tag == "Records"
    assert len(root) == 3

    txt = (tmp_path / "contacts.txt").read_text(encoding="utf-8")
    body = txt.split("\n", 2)[2]
    blocks = [b for b in body.split("\n\n") if b.strip()]
    assert len(blocks) == 3
    for block, (name, email) in zip(blocks, ROWS, strict=True):
        assert block.splitlines() == [f"Name: {name}", f"Email: {email}"]

    assert results["xlsx"].status is WriteStatus.SKIPPED
    assert results["docx"].status is WriteStatus.SKIPPED
    assert not (tmp_path / "contacts.xlsx").exists()
    assert not (tmp_path / "contacts.docx").exists()
    assert (tmp_path / "README_XLSX.txt").exists()
    assert (tmp_path / "README_DOCX.txt").exists()


def test_empty_set_every_format(tmp_path: Path, monkeypatch: Any) -> None:
    records = RecordSet.from_rows(["Name", "Email"], [])
    results = _write(tmp_path, records, monkeypatch)
    for fmt in ("csv", "json", "xml", "html", "txt"):
        assert results[fmt].status is WriteStatus.SUCCESS

    assert (tmp_path / "contacts.csv").read_text(encoding="utf-8").splitlines() == ["Name,Email"]
    root = ET.parse(tmp_path / "contacts.xml").getroot()
    assert root.tag == "Records" and len(root) == 0
    html_text = (tmp_path / "contacts.html").read_text(encoding="utf-8")
    assert "<th>Name</th><th>Email</th>" in html_text
    assert "<td>" not in html_text
    assert (tmp_path / "contacts.txt").read_text(encoding="utf-8").splitlines() == [
        "Contacts",
        "=" * 18,
    ]
