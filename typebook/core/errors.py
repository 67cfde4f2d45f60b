"""Errors raised while loading or importing practice text."""

from __future__ import annotations


class TypebookError(Exception):
    """Base class for user-facing errors."""


class EmptyTextError(TypebookError, ValueError):
    """Raised when the text to practice is empty or whitespace-only."""

    def __init__(self, message: str = "Error: Text is empty.") -> None:
        super().__init__(message)


class FileTooLargeError(TypebookError):
    """Raised when an imported file exceeds the configured size limit."""

    def __init__(self, path: str, size: int, limit: int) -> None:
        self.path = path
        self.size = size
        self.limit = limit
        super().__init__(
            f"File is too large ({size / (1024 * 1024):.1f} MB). "
            f"Please choose a file under {limit / (1024 * 1024):.0f} MB."
        )


class TextImportError(TypebookError):
    """Raised when a file cannot be read or decoded as text."""
