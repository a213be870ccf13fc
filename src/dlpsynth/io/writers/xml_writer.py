"""Markup-tree (XML) writer.

Layout::

    <?xml version="1.0" encoding="UTF-8"?>
    <Records>
      <Record>
        <Name>A &amp; B</Name>
        <Email>ab@sample.net</Email>
      </Record>
    </Records>

The root element name is chosen by the caller so that tiers can label their
records distinctly.  Every text value is entity-escaped, quotes included.
Field names that are not valid XML names are mapped onto valid ones by
:func:`xml_name`; two fields mapping onto the same element are rejected.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from xml.sax.saxutils import escape

from dlpsynth.records import RecordSet, format_value
from dlpsynth.utils.errors import SchemaMismatchError
from dlpsynth.utils.logging import get_logger

__all__ = ["xml_name", "element_names", "escape_text", "render_xml", "write_xml"]

log = get_logger(__name__)

_ENTITIES = {'"': "&quot;", "'": "&apos;"}
_NAME_START = re.compile(r"[A-Za-z_]")
_NAME_INVALID = re.compile(r"[^A-Za-z0-9_.\-]")
# XML 1.0 forbids most C0 control characters even when escaped.
_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

INDENT = "  "


def xml_name(name: str) -> str:
    """Return ``name`` coerced into a valid XML element name."""

    cleaned = _NAME_INVALID.sub("_", name.strip())
    if not cleaned or not _NAME_START.match(cleaned) or cleaned.lower().startswith("xml"):
        cleaned = "_" + cleaned
    return cleaned


def _checked_name(name: str, role: str) -> str:
    if not name or xml_name(name) != name:
        raise ValueError(f"invalid {role} element name: {name!r}")
    return name


def element_names(fields: tuple[str, ...]) -> list[str]:
    """Return the element name of every field in ``fields``.

    Raises :class:`SchemaMismatchError` when two fields map onto the same
    element name, e.g. ``"National ID"`` and ``"National_ID"``.
    """

    seen: dict[str, str] = {}
    for name in fields:
        tag = xml_name(name)
        if tag in seen:
            raise SchemaMismatchError(
                f"fields {seen[tag]!r} and {name!r} both map to XML element <{tag}>"
            )
        seen[tag] = name
    return list(seen)


def _strip_control(text: str) -> tuple[str, int]:
    return _CONTROL.subn("", text)


def escape_text(text: str) -> str:
    """Escape ``&``, ``<``, ``>``, ``"`` and ``'`` for element content.

    Control characters XML 1.0 cannot carry are dropped.
    """

    return escape(_strip_control(text)[0], _ENTITIES)


def render_xml(records: RecordSet, root_element: str, record_element: str = "Record") -> str:
    root = _checked_name(root_element, "root")
    item = _checked_name(record_element, "record")
    tags = element_names(records.fields)

    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    if not records:
        lines.append(f"<{root} />")
        return "\n".join(lines) + "\n"

    dropped = 0
    lines.append(f"<{root}>")
    for record in records:
        lines.append(f"{INDENT}<{item}>")
        for tag, value in zip(tags, record.values, strict=True):
            text, count = _strip_control(format_value(value))
            dropped += count
            lines.append(f"{INDENT * 2}<{tag}>{escape(text, _ENTITIES)}</{tag}>")
        lines.append(f"{INDENT}</{item}>")
    lines.append(f"</{root}>")
    if dropped:
        log.debug("Dropped %d control character(s) not allowed in XML 1.0", dropped)
    return "\n".join(lines) + "\n"


def write_xml(
    records: RecordSet,
    path: str | os.PathLike[str],
    root_element: str = "Records",
    record_element: str = "Record",
) -> None:
    """Write ``records`` under ``root_element`` to ``path``.

    Raises
    ------
    ValueError
        If ``root_element`` or ``record_element`` is not a valid XML name.
    SchemaMismatchError
        If two field names map onto the same element name.
    OSError
        If the destination cannot be written.
    """

    text = render_xml(records, root_element, record_element)
    with open(Path(path), "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
