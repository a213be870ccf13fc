"""Typed exceptions for record sets, output formats and capabilities."""


class SchemaMismatchError(ValueError):
    """Raised when records in one set do not share the same field sequence."""


class IOFormatError(ValueError):
    """Base class for I/O format related errors."""


class UnsupportedFormatError(IOFormatError):
    """Raised when no writer is registered for an output format."""


class UnknownCapabilityError(KeyError):
    """Raised when probing a capability that is not declared."""


class TierError(ValueError):
    """Raised for unknown tier names or unusable tier settings."""
