from pathlib import Path

import pytest
from pydantic import ValidationError

from dlpsynth.config import load_config


def test_rows_out_of_range(tmp_path: Path) -> None:
    cfg_file = tmp_path / "bad.yml"
    cfg_file.write_text("tiers:\n  heavy_pii:\n    rows: 5000\n")
    with pytest.raises(ValidationError):
        load_config(cfg_file, env={})
    cfg_file.write_text("tiers:\n  no_pii:\n    rows: 0\n")
    with pytest.raises(ValidationError):
        load_config(cfg_file, env={})


def test_unknown_key(tmp_path: Path) -> None:
    cfg_file = tmp_path / "bad.yml"
    cfg_file.write_text("unknown:\n  foo: 1\n")
    with pytest.raises(ValidationError):
        load_config(cfg_file, env={})


def test_unknown_format_rejected() -> None:
    with pytest.raises(ValidationError):
        load_config(env={}, overrides={"formats": ["csv", "pdf"]})
    with pytest.raises(ValidationError):
        load_config(env={}, overrides={"formats": ["csv", "CSV"]})


def test_unknown_schema_rejected() -> None:
    with pytest.raises(ValidationError):
        load_config(env={}, overrides={"tiers": {"no_pii": {"schema": "invoices"}}})


def test_bad_element_and_folder_names() -> None:
    with pytest.raises(ValidationError):
        load_config(env={}, overrides={"tiers": {"no_pii": {"root_element": "Two Words"}}})
    with pytest.raises(ValidationError):
        load_config(env={}, overrides={"tiers": {"no_pii": {"folder": "../escape"}}})


def test_user_file_overrides(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text(
        "formats: [CSV, txt]\n"
        "tiers:\n"
        "  no_pii:\n"
        "    rows: 7\n"
        "    schema: person\n"
    )
    cfg = load_config(cfg_file, env={})
    assert cfg.formats == ["csv", "txt"]
    assert cfg.tiers.no_pii.rows == 7
    assert cfg.tiers.no_pii.schema_name == "person"
    assert cfg.tiers.no_pii.folder == "No-PII"


def test_non_mapping_file_rejected(tmp_path: Path) -> None:
    cfg_file = tmp_path / "list.yml"
    cfg_file.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_config(cfg_file, env={})


def test_malformed_yaml_rejected(tmp_path: Path) -> None:
    cfg_file = tmp_path / "broken.yml"
    cfg_file.write_text("tiers: [unclosed\n")
    with pytest.raises(ValueError, match="not valid YAML"):
        load_config(cfg_file, env={})
