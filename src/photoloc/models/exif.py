from dataclasses import dataclass
from typing import Optional


@dataclass
class ExifFields:
    file_name: str
    creation_date: str = ""
    gps_latitude: Optional[float] = None
    gps_longitude: Optional[float] = None
    who: str = ""

    @property
    def has_gps(self) -> bool:
        return self.gps_latitude is not None and self.gps_longitude is not None
