"""Format registry for record writers.

Each output format is registered under a short name (``"csv"``, ``"xlsx"``,
...) together with its file extension.  Every registered writer honours the
same contract::

    writer.write(records, destination, options) -> WriteResult

so a driver can loop over formats without knowing their details.

Required writers turn :class:`OSError` from the filesystem into a ``FAILED``
result.  Optional writers are gated by a capability probe and report
``SKIPPED`` when their engine is missing or could not produce the file; they
never raise.

``UnsupportedFormatError`` is raised when asking for a format that has no
registered writer.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from dlpsynth.records import RecordSet
from dlpsynth.utils.errors import UnsupportedFormatError
from dlpsynth.utils.logging import get_logger

from . import capabilities
from .writers.csv_writer import write_csv
from .writers.docx_writer import write_docx
from .writers.html_writer import write_html
from .writers.json_writer import write_json
from .writers.txt_writer import write_records_text
from .writers.xlsx_writer import write_xlsx
from .writers.xml_writer import write_xml

log = get_logger(__name__)


class WriteStatus(Enum):
    """Terminal outcome of a single writer invocation."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of writing one format.

    ``reason`` explains a ``SKIPPED`` result; ``error`` carries the exception
    behind a ``FAILED`` one.
    """

    status: WriteStatus
    path: Path | None = None
    reason: str | None = None
    error: BaseException | None = None

    @classmethod
    def success(cls, path: Path) -> "WriteResult":
        return cls(WriteStatus.SUCCESS, path=path)

    @classmethod
    def skipped(cls, reason: str) -> "WriteResult":
        return cls(WriteStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, error: BaseException) -> "WriteResult":
        return cls(WriteStatus.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.status is WriteStatus.SUCCESS

    def describe(self) -> str:
        if self.status is WriteStatus.SUCCESS:
            return f"written {self.path}"
        if self.status is WriteStatus.SKIPPED:
            return f"skipped ({self.reason})"
        return f"failed ({self.error})"


@dataclass(frozen=True, slots=True)
class WriteOptions:
    """Per-tier presentation options shared by all writers.

    Each writer picks the options it understands: ``title`` for HTML, text
    captions and documents, ``root_element``/``record_element`` for XML and
    ``sheet_name`` for spreadsheets.
    """

    title: str = "Records"
    root_element: str = "Records"
    record_element: str = "Record"
    sheet_name: str = "Records"


@runtime_checkable
class FormatWriter(Protocol):
    """Common contract for all output formats."""

    name: str
    extension: str
    capability: str | None

    def write(
        self, records: RecordSet, destination: str | os.PathLike[str], options: WriteOptions
    ) -> WriteResult:
        ...


RequiredFunc = Callable[[RecordSet, Path, WriteOptions], None]
OptionalFunc = Callable[[RecordSet, Path, WriteOptions], bool]


@dataclass(frozen=True, slots=True)
class RequiredWriter:
    """Writer whose only failure mode is the filesystem."""

    name: str
    extension: str
    func: RequiredFunc = field(repr=False)
    capability: str | None = None

    def write(
        self, records: RecordSet, destination: str | os.PathLike[str], options: WriteOptions
    ) -> WriteResult:
        path = Path(destination)
        try:
            self.func(records, path, options)
        except OSError as exc:
            log.error("Failed to write %s output %s: %s", self.name, path, exc)
            return WriteResult.failed(exc)
        log.debug("Wrote %s (%d records)", path, len(records))
        return WriteResult.success(path)


@dataclass(frozen=True, slots=True)
class OptionalWriter:
    """Writer depending on an optional engine."""

    name: str
    extension: str
    capability: str
    func: OptionalFunc = field(repr=False)

    def write(
        self, records: RecordSet, destination: str | os.PathLike[str], options: WriteOptions
    ) -> WriteResult:
        path = Path(destination)
        if not capabilities.is_available(self.capability):
            dist = capabilities.get_capability(self.capability).distribution
            log.warning("Skipping %s output: '%s' is not installed", self.name, dist)
            return WriteResult.skipped(f"{dist} not installed")
        if not self.func(records, path, options):
            return WriteResult.skipped(f"{self.name} engine could not produce the file")
        log.debug("Wrote %s (%d records)", path, len(records))
        return WriteResult.success(path)


_WRITERS: dict[str, FormatWriter] = {}


def register_writer(writer: FormatWriter) -> None:
    """Register ``writer`` under its ``name`` (case-insensitive)."""

    _WRITERS[writer.name.lower()] = writer


def get_writer(name: str) -> FormatWriter:
    """Return the writer registered under ``name``.

    Raises
    ------
    UnsupportedFormatError
        If no writer is registered for ``name``.
    """

    writer = _WRITERS.get(name.lower())
    if writer is None:
        raise UnsupportedFormatError(f"Unsupported output format: '{name}'") from None
    return writer


def available_formats() -> list[str]:
    """Return registered format names in registration order."""

    return list(_WRITERS)


def write_records(
    name: str,
    records: RecordSet,
    destination: str | os.PathLike[str],
    options: WriteOptions | None = None,
) -> WriteResult:
    """Write ``records`` with the writer registered under ``name``."""

    return get_writer(name).write(records, destination, options or WriteOptions())


register_writer(RequiredWriter("csv", ".csv", lambda rs, p, o: write_csv(rs, p)))
register_writer(RequiredWriter("json", ".json", lambda rs, p, o: write_json(rs, p)))
register_writer(
    RequiredWriter(
        "xml", ".xml", lambda rs, p, o: write_xml(rs, p, o.root_element, o.record_element)
    )
)
register_writer(RequiredWriter("html", ".html", lambda rs, p, o: write_html(rs, p, o.title)))
register_writer(
    RequiredWriter("txt", ".txt", lambda rs, p, o: write_records_text(rs, p, o.title))
)
register_writer(
    OptionalWriter(
        "xlsx", ".xlsx", capabilities.SPREADSHEET, lambda rs, p, o: write_xlsx(rs, p, o.sheet_name)
    )
)
register_writer(
    OptionalWriter(
        "docx", ".docx", capabilities.DOCUMENT, lambda rs, p, o: write_docx(rs, p, o.title)
    )
)

__all__ = [
    "WriteStatus",
    "WriteResult",
    "WriteOptions",
    "FormatWriter",
    "RequiredWriter",
    "OptionalWriter",
    "register_writer",
    "get_writer",
    "available_formats",
    "write_records",
]
