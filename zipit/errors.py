"""
Exceptions raised by zipit itself.

Errors coming from sinks and sources (OSError and friends) are never
wrapped, they reach the caller as they were raised.
"""


class ZipitError(Exception):
    """Base class for all zipit errors."""


class ArchiveFinalizedError(ZipitError, RuntimeError):
    """Raised when an archive is used after it has been finalized."""


class SourceError(ZipitError, ValueError):
    """Raised when a streamed file entry names neither a file nor a stream."""
