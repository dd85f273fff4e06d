from dataclasses import dataclass, field
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Photo Locations"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # Projection
    REFERENCE_POLICY: str = "centroid"  # centroid, first, origin, nearest
    PROJECTION_CRS: Optional[str] = None  # None -> aeqd centred on the reference

    # GPS clustering
    GPS_EPS_M: float = 20.0
    GPS_MIN_SAMPLES: int = 2

    # Remote images
    HTTP_TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(env_file=".env")

configs = Settings()


@dataclass
class ProjectionConfig:
    reference_policy: str = field(default_factory=lambda: configs.REFERENCE_POLICY)
    crs: Optional[str] = field(default_factory=lambda: configs.PROJECTION_CRS)
    ellps: str = "WGS84"


@dataclass
class GPSConfig:
    eps_m: float = field(default_factory=lambda: configs.GPS_EPS_M)
    min_samples: int = field(default_factory=lambda: configs.GPS_MIN_SAMPLES)


@dataclass
class JobConfig:
    job_id: str
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    gps: GPSConfig = field(default_factory=GPSConfig)
