"""Package-specific exception types."""

from __future__ import annotations


class ProcessFileError(Exception):
    """Raised when a Markdown file cannot be read for processing.

    Args:
        filepath: Path of the file that failed.
        reason: Human-readable cause.
    """

    def __init__(self, filepath: object, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"{filepath}: {reason}")
