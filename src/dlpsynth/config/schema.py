"""Typed configuration schema and loader for dlpsynth."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, conint, field_validator

from dlpsynth.io import available_formats
from dlpsynth.io.writers.xml_writer import xml_name

TIER_ORDER: tuple[str, ...] = ("no_pii", "light_pii", "heavy_pii")

MAX_ROWS = 1000

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class OutputSettings(BaseModel):
    """Where and how tier folders are written."""

    root_dir: Path
    stamp_filenames: bool = True
    stamp_format: str = "%Y%m%d_%H%M%S"

    model_config = ConfigDict(extra="forbid")


class TierSettings(BaseModel):
    """Settings for one sensitivity tier."""

    folder: str
    base_name: str
    schema_name: Literal["catalog", "person"] = Field(alias="schema")
    rows: conint(ge=1, le=MAX_ROWS)
    title: str
    root_element: str = "Records"
    record_element: str = "Record"
    sheet_name: str = "Records"

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("folder", "base_name")
    @classmethod
    def _plain_name(cls, value: str) -> str:
        if not value or value in {".", ".."} or any(sep in value for sep in "/\\"):
            raise ValueError(f"must be a plain file name, got {value!r}")
        return value

    @field_validator("root_element", "record_element")
    @classmethod
    def _element_name(cls, value: str) -> str:
        if xml_name(value) != value:
            raise ValueError(f"not a valid XML element name: {value!r}")
        return value


class TiersSettings(BaseModel):
    """The three sensitivity tiers."""

    no_pii: TierSettings
    light_pii: TierSettings
    heavy_pii: TierSettings

    model_config = ConfigDict(extra="forbid")

    def get(self, name: str) -> TierSettings:
        if name not in TIER_ORDER:
            raise KeyError(name)
        return getattr(self, name)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    locale: str
    seed: int | None = None
    seed_env: str
    output: OutputSettings
    formats: list[str]
    tiers: TiersSettings
    logging: LoggingSettings

    model_config = ConfigDict(extra="forbid")

    @field_validator("formats")
    @classmethod
    def _known_formats(cls, value: list[str]) -> list[str]:
        known = set(available_formats())
        normalized = [fmt.lower() for fmt in value]
        unknown = [fmt for fmt in normalized if fmt not in known]
        if unknown:
            raise ValueError(f"unknown formats: {', '.join(unknown)}")
        if len(set(normalized)) != len(normalized):
            raise ValueError("formats must not repeat")
        return normalized


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_defaults() -> dict[str, Any]:
    """Return the packaged ``defaults.yml`` as a dict."""

    with (
        importlib_resources.files("dlpsynth.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        return yaml.safe_load(f) or {}


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    ``overrides`` mapping (used by the CLI) < environment variable for the
    seed.
    """

    merged = load_defaults()
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            try:
                user = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"configuration file {path} is not valid YAML: {exc}") from exc
        if not isinstance(user, dict):
            raise ValueError(f"configuration file {path} must contain a mapping")
        merged = deep_merge_dicts(merged, user)
    if overrides:
        merged = deep_merge_dicts(merged, dict(overrides))

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    raw_seed = environ.get(cfg.seed_env)
    if raw_seed:
        try:
            cfg.seed = int(raw_seed)
        except ValueError:
            raise ValueError(f"{cfg.seed_env} must be an integer, got {raw_seed!r}") from None

    return cfg


__all__ = [
    "TIER_ORDER",
    "MAX_ROWS",
    "ConfigModel",
    "OutputSettings",
    "TierSettings",
    "TiersSettings",
    "LoggingSettings",
    "deep_merge_dicts",
    "load_defaults",
    "load_config",
]
