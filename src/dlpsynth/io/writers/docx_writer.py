"""Word-processing (DOCX) writer.

The writer talks to a :class:`DocumentEngine`, which opens one
:class:`DocumentSession` per invocation.  The default engine is backed by
``python-docx``; other engines (for example office automation) can be passed
in as long as they implement the same small protocol.

Document layout: a level-1 heading with the title, then one ``field: value``
paragraph per field for each record and an empty paragraph between records.

Sessions are always closed through :func:`open_session`, whichever way the
write ends.  An error raised while closing is logged and dropped so it never
hides the error that ended the write.  :func:`write_docx` reports every
failure, including a missing or broken engine, as ``False``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from dlpsynth.records import RecordSet, format_value
from dlpsynth.utils.logging import get_logger

__all__ = [
    "DocumentSession",
    "DocumentEngine",
    "DocxSession",
    "DocxEngine",
    "open_session",
    "write_docx",
]

log = get_logger(__name__)


@runtime_checkable
class DocumentSession(Protocol):
    """An open, in-progress document."""

    def add_heading(self, text: str, level: int = 1) -> None:
        ...

    def add_paragraph(self, text: str = "") -> None:
        ...

    def save(self, path: Path) -> None:
        ...

    def close(self) -> None:
        """Release the document and any engine resources.  Must be idempotent."""

        ...


@runtime_checkable
class DocumentEngine(Protocol):
    """Factory for document sessions."""

    def open(self) -> DocumentSession:
        ...


class DocxSession:
    """Session wrapping an in-memory ``python-docx`` document."""

    def __init__(self, document: Any) -> None:
        self._document: Any | None = document

    @property
    def closed(self) -> bool:
        return self._document is None

    def _doc(self) -> Any:
        if self._document is None:
            raise RuntimeError("document session is closed")
        return self._document

    def add_heading(self, text: str, level: int = 1) -> None:
        self._doc().add_heading(text, level=level)

    def add_paragraph(self, text: str = "") -> None:
        self._doc().add_paragraph(text)

    def save(self, path: Path) -> None:
        self._doc().save(str(path))

    def close(self) -> None:
        self._document = None


class DocxEngine:
    """Engine creating blank documents with ``python-docx``."""

    def __init__(self) -> None:
        import docx  # type: ignore

        self._docx = docx

    def open(self) -> DocxSession:
        return DocxSession(self._docx.Document())


@contextmanager
def open_session(engine: DocumentEngine) -> Iterator[DocumentSession]:
    """Open a session on ``engine`` and close it on every exit path."""

    session = engine.open()
    try:
        yield session
    finally:
        try:
            session.close()
        except Exception as exc:  # close errors must not mask the write outcome
            log.debug("Ignoring error while closing document session: %s", exc)


def write_docx(
    records: RecordSet,
    path: str | os.PathLike[str],
    title: str,
    *,
    engine: DocumentEngine | None = None,
) -> bool:
    """Write ``records`` to ``path`` as a document headed by ``title``.

    Parameters
    ----------
    records:
        Records to render.
    path:
        Destination ``.docx`` file; its parent directory must exist.
    title:
        Text of the top-level heading.
    engine:
        Document engine to use.  Defaults to :class:`DocxEngine`; failing to
        construct it counts as the capability being unavailable.

    Returns
    -------
    bool
        ``True`` when the document was saved, ``False`` otherwise.  A partially
        written file is removed before returning ``False``.
    """

    target = Path(path)
    try:
        active = engine if engine is not None else DocxEngine()
    except Exception as exc:  # ImportError or a broken installation
        log.warning("Cannot write DOCX: document engine unavailable (%s)", exc)
        return False

    try:
        with open_session(active) as session:
            session.add_heading(title, level=1)
            for idx, record in enumerate(records):
                if idx:
                    session.add_paragraph("")
                for name, value in record.items():
                    session.add_paragraph(f"{name}: {format_value(value)}")
            session.save(target)
    except Exception as exc:  # automation or save failure
        log.warning("Failed to write DOCX %s: %s", target, exc)
        with suppress(OSError):
            target.unlink(missing_ok=True)
        return False
    return True
