"""Errors that unwind out of the ingestion core."""


class LogAnalyzeError(Exception):
    """Base class for fatal ingestion failures."""


class LogOpenError(LogAnalyzeError):
    """Raised when the input file cannot be opened."""


class LogReadError(LogAnalyzeError):
    """Raised when the underlying stream fails mid-read."""
