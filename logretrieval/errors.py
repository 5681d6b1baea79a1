"""Errors raised by the log queries."""


class LogRetrievalError(Exception):
    """Base class for every query failure surfaced to callers."""


class InvalidDate(LogRetrievalError, ValueError):
    """Raised when a by-date query gets something other than YYYY-MM-DD."""


class LogFileNotFound(LogRetrievalError, FileNotFoundError):
    """Raised when no log file exists for the requested date."""


class DirectoryUnavailable(LogRetrievalError):
    """Raised when the log directory is missing, unreadable, or has no log files."""
