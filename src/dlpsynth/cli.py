"""Typer-based command line interface for dataset generation.

The ``generate`` command runs the tier driver: every selected tier gets its
own folder holding the same records as CSV, JSON, XML, HTML and text, plus
XLSX and DOCX when the office engines are installed (otherwise a README
notice explains how to enable them).  ``capabilities`` reports which optional
engines are available.

Exit codes
----------
0 success (skipped optional formats still count as success)
3 I/O error (output directory not writable, a required format failed)
4 configuration error
5 unexpected pipeline error
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .config.schema import MAX_ROWS, TIER_ORDER
from .driver import TierReport, run_all
from .io import capabilities
from .utils.errors import TierError
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

app = typer.Typer(
    name="dlpsynth",
    help="Synthetic DLP test datasets. Use 'dlpsynth generate' to write all tiers.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _cli_overrides(
    *,
    tiers: list[str],
    rows: int | None,
    out_dir: Path | None,
    seed: int | None,
    no_stamp: bool,
) -> dict[str, Any]:
    """Return a config fragment holding the CLI overrides."""

    overrides: dict[str, Any] = {}
    if out_dir is not None:
        overrides.setdefault("output", {})["root_dir"] = str(out_dir)
    if no_stamp:
        overrides.setdefault("output", {})["stamp_filenames"] = False
    if seed is not None:
        overrides["seed"] = seed
    if rows is not None:
        overrides["tiers"] = {t: {"rows": rows} for t in (tiers or TIER_ORDER)}
    return overrides


def _print_report(report: TierReport) -> None:
    typer.echo(f"[{report.tier}] {report.record_count} records in {report.directory}")
    for fmt, result in report.results.items():
        typer.echo(f"  {fmt:<5} {result.describe()}")
    for notice in report.notices:
        typer.echo(f"  note  {notice.name} written")


@app.callback()
def main() -> None:
    """Entry point for the dlpsynth command group."""
    pass


@app.command()
def generate(  # noqa: PLR0913
    tier: Optional[list[str]] = typer.Option(  # noqa: B008
        None, "--tier", "-t", help=f"Tier to generate (repeatable): {', '.join(TIER_ORDER)}"
    ),
    rows: Optional[int] = typer.Option(  # noqa: B008
        None, "--rows", help=f"Row count for the selected tiers (1-{MAX_ROWS})"
    ),
    out_dir: Optional[Path] = typer.Option(  # noqa: B008
        None, "--out", help="Root directory for tier folders"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    seed: Optional[int] = typer.Option(  # noqa: B008
        None, "--seed", help="Seed for reproducible records"
    ),
    no_stamp: bool = typer.Option(  # noqa: B008
        False, "--no-stamp", help="Do not add a timestamp to file names"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Log debug messages to stderr"
    ),
) -> None:
    """Generate the datasets for the selected tiers."""

    selected = list(dict.fromkeys(tier or []))
    unknown = [t for t in selected if t not in TIER_ORDER]
    if unknown:
        _safe_exit(4, f"Unknown tier(s): {', '.join(unknown)}")

    overrides = _cli_overrides(
        tiers=selected, rows=rows, out_dir=out_dir, seed=seed, no_stamp=no_stamp
    )
    try:
        cfg: ConfigModel = load_config(config_path, overrides=overrides)
    except (ValidationError, ValueError, OSError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])

    configure_logging("DEBUG" if verbose else cfg.logging.level)

    try:
        reports = run_all(cfg, selected or None)
    except OSError as exc:
        _safe_exit(3, str(exc))
    except TierError as exc:
        _safe_exit(4, str(exc))
    except Exception as exc:  # pragma: no cover - unexpected
        msg = str(exc)
        if verbose:
            msg = f"{type(exc).__name__}: {msg}"
        _safe_exit(5, msg)

    for report in reports:
        _print_report(report)

    if any(not report.ok for report in reports):
        _safe_exit(3, "One or more required formats failed")


@app.command("capabilities")
def show_capabilities() -> None:
    """Show which optional output engines are installed."""

    for name, available in capabilities.probe_all().items():
        cap = capabilities.get_capability(name)
        state = "available" if available else f"missing (pip install {cap.distribution})"
        typer.echo(f"{cap.label:<5} {cap.purpose}: {state}")


if __name__ == "__main__":  # pragma: no cover
    app()
