from .core.exceptions import InvalidCoordinate, InvalidDerivedValue, InvalidIdentifier, RecordValidationError
from .models.photo_location import PhotoLocationRecord

__all__ = [
    "PhotoLocationRecord",
    "RecordValidationError",
    "InvalidCoordinate",
    "InvalidDerivedValue",
    "InvalidIdentifier",
]
