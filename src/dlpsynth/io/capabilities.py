"""Optional output engines and their fallback notices.

The spreadsheet and document writers depend on engines that are installed as
extras (``openpyxl`` and ``python-docx``).  :func:`is_available` answers
whether an engine can be imported without importing it, and
:func:`write_fallback_notice` emits the placeholder file that stands in for an
output that could not be produced.

Notices live next to the other outputs of a tier under a fixed name
(``README_XLSX.txt``, ``README_DOCX.txt``), so a tier directory holds at most
one notice per missing capability.
"""

from __future__ import annotations

import functools
import importlib.util
import os
from dataclasses import dataclass
from pathlib import Path

from dlpsynth.utils.errors import UnknownCapabilityError
from dlpsynth.utils.logging import get_logger

from .writers.txt_writer import write_text

__all__ = [
    "Capability",
    "CAPABILITIES",
    "SPREADSHEET",
    "DOCUMENT",
    "get_capability",
    "is_available",
    "probe_all",
    "fallback_path",
    "fallback_text",
    "write_fallback_notice",
    "clear_fallback_notice",
]

log = get_logger(__name__)

SPREADSHEET = "spreadsheet"
DOCUMENT = "document"


@dataclass(frozen=True, slots=True)
class Capability:
    """Description of an optional engine."""

    name: str
    module: str
    distribution: str
    label: str
    purpose: str


CAPABILITIES: dict[str, Capability] = {
    SPREADSHEET: Capability(
        name=SPREADSHEET,
        module="openpyxl",
        distribution="openpyxl",
        label="XLSX",
        purpose="Excel workbooks (.xlsx)",
    ),
    DOCUMENT: Capability(
        name=DOCUMENT,
        module="docx",
        distribution="python-docx",
        label="DOCX",
        purpose="Word documents (.docx)",
    ),
}


def get_capability(name: str) -> Capability:
    """Return the declared capability ``name``.

    Raises
    ------
    UnknownCapabilityError
        If ``name`` is not declared in :data:`CAPABILITIES`.
    """

    try:
        return CAPABILITIES[name]
    except KeyError:
        raise UnknownCapabilityError(name) from None


@functools.lru_cache(maxsize=None)
def is_available(name: str) -> bool:
    """Return ``True`` when the engine behind ``name`` can be imported.

    The module is located with :func:`importlib.util.find_spec` and never
    executed.  Results are cached for the lifetime of the process.
    """

    cap = get_capability(name)
    try:
        return importlib.util.find_spec(cap.module) is not None
    except (ImportError, ValueError):
        return False


def probe_all() -> dict[str, bool]:
    """Return availability for every declared capability."""

    return {name: is_available(name) for name in CAPABILITIES}


def fallback_path(directory: str | os.PathLike[str], name: str) -> Path:
    """Return the notice path for capability ``name`` inside ``directory``."""

    return Path(directory) / f"README_{get_capability(name).label}.txt"


def fallback_text(name: str) -> str:
    """Return the human-readable enablement instructions for ``name``."""

    cap = get_capability(name)
    return (
        f"{cap.label} output was not generated.\n"
        "\n"
        f"Producing {cap.purpose} requires the '{cap.distribution}' package,\n"
        "which was not available when this dataset was written.\n"
        "\n"
        "To enable it, install the package into the same environment:\n"
        f"    pip install {cap.distribution}\n"
        "or install all office engines at once:\n"
        "    pip install 'dlpsynth[office]'\n"
        "\n"
        "Then run 'dlpsynth generate' again. All other formats in this folder\n"
        "were written normally.\n"
    )


def write_fallback_notice(directory: str | os.PathLike[str], name: str) -> Path:
    """Write the notice for capability ``name`` and return its path."""

    path = fallback_path(directory, name)
    write_text(path, fallback_text(name))
    log.info("Wrote fallback notice %s", path)
    return path


def clear_fallback_notice(directory: str | os.PathLike[str], name: str) -> bool:
    """Remove a stale notice for ``name``; return ``True`` if one existed."""

    path = fallback_path(directory, name)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    log.debug("Removed stale fallback notice %s", path)
    return True
