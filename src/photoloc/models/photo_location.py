"""Photo location record: one photo's EXIF metadata plus derived planar fields."""

import math
from dataclasses import dataclass, fields, replace as dataclass_replace
from datetime import datetime
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Tuple

from photoloc.core.exceptions import InvalidCoordinate, InvalidDerivedValue, InvalidIdentifier

# attribute name -> external (EXIF-style) key
EXTERNAL_NAMES: Dict[str, str] = {
    "creation_date": "CreationDate",
    "file_name": "FileName",
    "gps_latitude": "GPSLatitude",
    "gps_longitude": "GPSLongitude",
    "who": "Who",
    "x": "x",
    "y": "y",
    "distance": "distance",
}


def _is_real(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_identifier(file_name: Any) -> None:
    if not isinstance(file_name, str) or not file_name.strip():
        raise InvalidIdentifier("FileName must be a non-empty string", field="FileName", value=file_name)


def validate_coordinate(lat: Any, lon: Any) -> None:
    """Raise InvalidCoordinate unless (lat, lon) are finite decimal degrees in range."""
    if not _is_real(lat) or not math.isfinite(lat) or not -90.0 <= lat <= 90.0:
        raise InvalidCoordinate(f"GPSLatitude out of range [-90, 90]: {lat!r}", field="GPSLatitude", value=lat)
    if not _is_real(lon) or not math.isfinite(lon) or not -180.0 <= lon <= 180.0:
        raise InvalidCoordinate(f"GPSLongitude out of range [-180, 180]: {lon!r}", field="GPSLongitude", value=lon)


def validate_derived(x: Any, y: Any, distance: Any) -> None:
    for name, value in (("x", x), ("y", y), ("distance", distance)):
        if not _is_real(value) or not math.isfinite(value):
            raise InvalidDerivedValue(f"{name} must be a finite number: {value!r}", field=name, value=value)
    if distance < 0:
        raise InvalidDerivedValue(f"distance must be >= 0: {distance!r}", field="distance", value=distance)


def parse_creation_date(value: str) -> Optional[datetime]:
    """Best-effort parse of an EXIF (``YYYY:MM:DD HH:MM:SS``) or ISO 8601 timestamp."""
    text = (value or "").strip()
    if not text:
        return None
    # EXIF writes the date part with colons
    if len(text) >= 19 and text[4] == ":" and text[7] == ":":
        text = f"{text[:4]}-{text[5:7]}-{text[8:10]}T{text[11:]}"
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class PhotoLocationRecord:
    """Immutable, validated bundle of capture metadata and planar position.

    ``x``/``y`` and ``distance`` come from one projection shared by the whole
    batch; the record only carries them. Construction raises
    ``InvalidIdentifier``, ``InvalidCoordinate`` or ``InvalidDerivedValue``
    (checked in that order) and never yields a partial record.
    """

    creation_date: str
    file_name: str
    gps_latitude: float
    gps_longitude: float
    who: str
    x: float
    y: float
    distance: float

    def __post_init__(self) -> None:
        validate_identifier(self.file_name)
        validate_coordinate(self.gps_latitude, self.gps_longitude)
        validate_derived(self.x, self.y, self.distance)
        if self.who is None:
            object.__setattr__(self, "who", "")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PhotoLocationRecord":
        """Build a record from a mapping keyed by the external names (``CreationDate``, ...)."""
        return cls(**{attr: data[key] for attr, key in EXTERNAL_NAMES.items()})

    def to_dict(self) -> Dict[str, Any]:
        return {EXTERNAL_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}

    def replace(self, **changes: Any) -> "PhotoLocationRecord":
        """Return a new, re-validated record with ``changes`` applied."""
        return dataclass_replace(self, **changes)

    @property
    def coordinate(self) -> Tuple[float, float]:
        return self.gps_latitude, self.gps_longitude

    @property
    def planar(self) -> Tuple[float, float]:
        return self.x, self.y

    def capture_time(self) -> Optional[datetime]:
        return parse_creation_date(self.creation_date)

    def planar_distance_to(self, other: "PhotoLocationRecord") -> float:
        # Only comparable between records projected in the same batch
        return math.hypot(self.x - other.x, self.y - other.y)
