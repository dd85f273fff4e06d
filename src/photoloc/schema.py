from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PhotoLocationResponse(BaseModel):
    """Record as handed to consumers; serialised with the EXIF-style names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    creation_date: str = Field(alias="CreationDate")
    file_name: str = Field(alias="FileName")
    gps_latitude: float = Field(alias="GPSLatitude", ge=-90.0, le=90.0)
    gps_longitude: float = Field(alias="GPSLongitude", ge=-180.0, le=180.0)
    who: str = Field("", alias="Who")
    x: float
    y: float
    distance: float = Field(ge=0.0)


class ClusterGroupResponse(BaseModel):
    id: int
    photos: List[str]
    photo_details: List[PhotoLocationResponse] = []
    count: Optional[int] = None
    is_noise: bool = False
    centroid_x: Optional[float] = None
    centroid_y: Optional[float] = None
