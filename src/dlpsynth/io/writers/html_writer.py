"""Markup-tabular (HTML) writer.

Produces a standalone page: a heading with the title followed by a single
table whose header row lists the field names.  Styling is inline so the file
renders the same when opened straight from disk; the page references no
external resources.
"""

from __future__ import annotations

import html
import os
from pathlib import Path

from dlpsynth.records import RecordSet, format_value

__all__ = ["render_html", "write_html"]

_STYLE = """\
body { font-family: Segoe UI, Helvetica, Arial, sans-serif; margin: 2em; color: #222; }
h1 { font-size: 1.4em; }
table { border-collapse: collapse; width: 100%; }
th, td { border: 1px solid #ccc; padding: 4px 8px; text-align: left; vertical-align: top; }
th { background: #f0f0f0; }
tbody tr:nth-child(even) { background: #fafafa; }"""


def _esc(text: str) -> str:
    return html.escape(text, quote=True)


def render_html(records: RecordSet, title: str) -> str:
    out: list[str] = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{_esc(title)}</title>",
        f"<style>\n{_STYLE}\n</style>",
        "</head>",
        "<body>",
        f"<h1>{_esc(title)}</h1>",
        "<table>",
        "<thead>",
        "<tr>" + "".join(f"<th>{_esc(name)}</th>" for name in records.fields) + "</tr>",
        "</thead>",
        "<tbody>",
    ]
    for record in records:
        cells = "".join(f"<td>{_esc(format_value(v))}</td>" for v in record.values)
        out.append(f"<tr>{cells}</tr>")
    out.extend(["</tbody>", "</table>", "</body>", "</html>"])
    return "\n".join(out) + "\n"


def write_html(records: RecordSet, path: str | os.PathLike[str], title: str) -> None:
    """Write ``records`` to ``path`` as an HTML table page titled ``title``."""

    with open(Path(path), "w", encoding="utf-8", newline="\n") as f:
        f.write(render_html(records, title))
