"""Tier driver: generate each tier's records and fan them out to every format.

For a tier the driver creates ``<root>/<folder>``, builds the record set with
the tier's producer and then runs the configured writers one after another.
Each writer is attempted exactly once.  A writer's outcome never affects its
siblings: a failed CSV does not stop the XML, and a skipped spreadsheet is
replaced by a ``README_XLSX.txt`` notice.
"""

from __future__ import annotations

import os
import zlib
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from dlpsynth.config import ConfigModel, TierSettings
from dlpsynth.config.schema import TIER_ORDER
from dlpsynth.generate import get_producer
from dlpsynth.io import WriteOptions, WriteResult, WriteStatus, capabilities, get_writer
from dlpsynth.records import RecordSet
from dlpsynth.utils.errors import TierError
from dlpsynth.utils.logging import get_logger

__all__ = [
    "TierReport",
    "tier_seed",
    "stamped_base_name",
    "build_records",
    "write_tier",
    "run_tier",
    "run_all",
]

log = get_logger(__name__)


@dataclass(slots=True)
class TierReport:
    """Outcome of one tier run."""

    tier: str
    directory: Path
    base_name: str
    record_count: int
    results: dict[str, WriteResult] = field(default_factory=dict)
    notices: list[Path] = field(default_factory=list)

    @property
    def failed(self) -> list[str]:
        return [fmt for fmt, res in self.results.items() if res.status is WriteStatus.FAILED]

    @property
    def skipped(self) -> list[str]:
        return [fmt for fmt, res in self.results.items() if res.status is WriteStatus.SKIPPED]

    @property
    def ok(self) -> bool:
        """``True`` when no required format failed."""

        return not self.failed


def tier_seed(seed: int | None, tier: str) -> int | None:
    """Derive a per-tier seed so tiers do not share a random stream."""

    if seed is None:
        return None
    return seed ^ zlib.crc32(tier.encode("utf-8"))


def stamped_base_name(base_name: str, stamp_format: str | None, now: datetime) -> str:
    """Return ``base_name`` suffixed with ``now`` formatted by ``stamp_format``."""

    if not stamp_format:
        return base_name
    return f"{base_name}_{now.strftime(stamp_format)}"


def _options(settings: TierSettings) -> WriteOptions:
    return WriteOptions(
        title=settings.title,
        root_element=settings.root_element,
        record_element=settings.record_element,
        sheet_name=settings.sheet_name,
    )


def build_records(
    settings: TierSettings, *, seed: int | None = None, locale: str = "en_US"
) -> RecordSet:
    """Produce the record set for a tier."""

    producer = get_producer(settings.schema_name, seed=seed, locale=locale)
    return producer.produce(settings.rows)


def write_tier(
    records: RecordSet,
    directory: str | os.PathLike[str],
    base_name: str,
    formats: Sequence[str],
    options: WriteOptions,
) -> tuple[dict[str, WriteResult], list[Path]]:
    """Write ``records`` in every format of ``formats`` into ``directory``.

    Returns the per-format results and the fallback notices written.  The
    directory must already exist.
    """

    out_dir = Path(directory)
    results: dict[str, WriteResult] = {}
    notices: list[Path] = []
    for fmt in formats:
        writer = get_writer(fmt)
        destination = out_dir / f"{base_name}{writer.extension}"
        result = writer.write(records, destination, options)
        results[writer.name] = result

        if writer.capability is None:
            continue
        if result.status is WriteStatus.SKIPPED:
            notices.append(capabilities.write_fallback_notice(out_dir, writer.capability))
        elif result.status is WriteStatus.SUCCESS:
            capabilities.clear_fallback_notice(out_dir, writer.capability)
    return results, notices


def run_tier(
    tier: str,
    config: ConfigModel,
    *,
    root: str | os.PathLike[str] | None = None,
    now: datetime | None = None,
) -> TierReport:
    """Generate and write one tier.

    Raises
    ------
    TierError
        If ``tier`` is not a known tier name.
    OSError
        If the tier directory cannot be created.
    """

    if tier not in TIER_ORDER:
        raise TierError(f"unknown tier: {tier!r} (expected one of {', '.join(TIER_ORDER)})")
    settings = config.tiers.get(tier)

    base_root = Path(root) if root is not None else config.output.root_dir
    directory = base_root / settings.folder
    directory.mkdir(parents=True, exist_ok=True)

    records = build_records(settings, seed=tier_seed(config.seed, tier), locale=config.locale)
    stamp = config.output.stamp_format if config.output.stamp_filenames else None
    base_name = stamped_base_name(settings.base_name, stamp, now or datetime.now())

    log.info("Tier %s: %d records -> %s", tier, len(records), directory)
    results, notices = write_tier(records, directory, base_name, config.formats, _options(settings))
    report = TierReport(
        tier=tier,
        directory=directory,
        base_name=base_name,
        record_count=len(records),
        results=results,
        notices=notices,
    )
    if report.failed:
        log.error("Tier %s: failed formats: %s", tier, ", ".join(report.failed))
    return report


def run_all(
    config: ConfigModel,
    tiers: Iterable[str] | None = None,
    *,
    root: str | os.PathLike[str] | None = None,
    now: datetime | None = None,
) -> list[TierReport]:
    """Run ``tiers`` (default: all) in the canonical tier order.

    One timestamp is shared by all tiers of a run.
    """

    wanted = list(TIER_ORDER) if tiers is None else list(dict.fromkeys(tiers))
    unknown = [t for t in wanted if t not in TIER_ORDER]
    if unknown:
        raise TierError(f"unknown tier(s): {', '.join(unknown)}")
    stamp_time = now or datetime.now()
    ordered = [t for t in TIER_ORDER if t in wanted]
    return [run_tier(t, config, root=root, now=stamp_time) for t in ordered]
