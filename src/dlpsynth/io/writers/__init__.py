"""Per-format record writers.

Every module exposes one ``write_*`` function taking a
:class:`~dlpsynth.records.RecordSet` and a destination path.  Required formats
raise :class:`OSError` when the destination cannot be written; the optional
spreadsheet and document writers return ``False`` instead of raising.
"""
