"""Errors raised while constructing a photo location record.

All of them are ``ValueError`` subclasses so callers that only care about
"bad input" can catch the builtin.
"""

from typing import Any, Optional


class RecordValidationError(ValueError):
    """Base error for an invalid photo location record.

    Attributes:
        field: External name of the offending field (e.g. ``GPSLatitude``).
        value: The rejected value.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None) -> None:
        self.message = message
        self.field = field
        self.value = value
        super().__init__(message)


class InvalidCoordinate(RecordValidationError):
    """Latitude or longitude outside its valid range."""


class InvalidDerivedValue(RecordValidationError):
    """Negative distance, or a non-finite x / y / distance."""


class InvalidIdentifier(RecordValidationError):
    """Missing or empty file identifier."""
