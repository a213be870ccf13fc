"""Tests for capability probing and fallback notices."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from typing import Any

import pytest

from dlpsynth.io import capabilities
from dlpsynth.utils.errors import UnknownCapabilityError


def test_probe_matches_find_spec() -> None:
    capabilities.is_available.cache_clear()
    for name, cap in capabilities.CAPABILITIES.items():
        expected = importlib.util.find_spec(cap.module) is not None
        assert capabilities.is_available(name) is expected
    assert set(capabilities.probe_all()) == {capabilities.SPREADSHEET, capabilities.DOCUMENT}


def test_probe_reports_missing_module(monkeypatch: Any) -> None:
    capabilities.is_available.cache_clear()
    monkeypatch.setattr(importlib.util, "find_spec", lambda name: None)
    try:
        assert capabilities.is_available(capabilities.SPREADSHEET) is False
    finally:
        capabilities.is_available.cache_clear()


def test_unknown_capability() -> None:
    with pytest.raises(UnknownCapabilityError):
        capabilities.is_available("pdf")
    with pytest.raises(UnknownCapabilityError):
        capabilities.fallback_path(".", "pdf")


def test_fallback_notice_paths_and_text(tmp_path: Path) -> None:
    xlsx = capabilities.write_fallback_notice(tmp_path, capabilities.SPREADSHEET)
    docx = capabilities.write_fallback_notice(tmp_path, capabilities.DOCUMENT)
    assert xlsx == tmp_path / "README_XLSX.txt"
    assert docx == tmp_path / "README_DOCX.txt"
    assert "pip install openpyxl" in xlsx.read_text(encoding="utf-8")
    assert "pip install python-docx" in docx.read_text(encoding="utf-8")


def test_fallback_notice_is_deterministic(tmp_path: Path) -> None:
    first = capabilities.write_fallback_notice(tmp_path, capabilities.DOCUMENT).read_bytes()
    second = capabilities.write_fallback_notice(tmp_path, capabilities.DOCUMENT).read_bytes()
    assert first == second
    assert sorted(p.name for p in tmp_path.iterdir()) == ["README_DOCX.txt"]


def test_clear_fallback_notice(tmp_path: Path) -> None:
    assert capabilities.clear_fallback_notice(tmp_path, capabilities.SPREADSHEET) is False
    capabilities.write_fallback_notice(tmp_path, capabilities.SPREADSHEET)
    assert capabilities.clear_fallback_notice(tmp_path, capabilities.SPREADSHEET) is True
    assert list(tmp_path.iterdir()) == []
