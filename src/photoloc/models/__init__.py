from .exif import ExifFields
from .photo_location import PhotoLocationRecord

__all__ = ["ExifFields", "PhotoLocationRecord"]
