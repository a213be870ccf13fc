"""Synthetic multi-format datasets for data-loss-prevention testing.

The package produces fake records for three sensitivity tiers and serializes
each tier into CSV, JSON, XML, HTML and plain text, plus XLSX and DOCX when
the optional office engines are installed.  The command line interface lives
in :mod:`dlpsynth.cli`.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
