"""filenav — filter-driven asynchronous recursive directory walker."""

from __future__ import annotations

from pathlib import Path

__version__ = "0.1.0"


class FilenavError(Exception):
    """Base error for traversal failures.

    Attributes:
        path: Filesystem path the failure relates to, if any.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigError(FilenavError):
    """Invalid traversal invocation, raised before any filesystem access."""


class DirectoryListError(FilenavError):
    """A directory could not be listed.

    Raised out of :func:`filenav.walker.traverse` for the root directory.
    For sub-directories it is recorded in the walk report instead.
    """


class StatError(FilenavError):
    """Metadata lookup for a single entry failed. Always absorbed."""
