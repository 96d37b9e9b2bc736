"""Custom exceptions for the daily URL hit report."""
from __future__ import annotations

from typing import Optional


class UrlHitsError(Exception):
    """Base exception for all report operations."""
    pass


class RecordParseError(UrlHitsError):
    """Raised when an input line is not a `<epoch_seconds>|<url>` record."""

    def __init__(self, message: str, line: Optional[str] = None, line_number: Optional[int] = None):
        self.line = line
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class FileProcessingError(UrlHitsError):
    """Raised when the input file cannot be opened, read or decoded."""
    pass


class ConfigError(UrlHitsError):
    """Raised when a YAML config file is unreadable or malformed."""
    pass


class ExportError(UrlHitsError):
    """Raised when exporting the tally to DuckDB fails."""
    pass
