"""Planar projection and distance for a batch of GPS coordinates.

Every point of a batch is projected with one CRS so that the resulting
``(x, y)`` pairs are comparable. By default this is an azimuthal equidistant
projection (metres) centred on the batch reference: the planar distance
from the centre is then the geodesic distance to the reference.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from pyproj import CRS, Geod, Transformer
from sklearn.neighbors import NearestNeighbors

from photoloc.core.config import ProjectionConfig
from photoloc.models.photo_location import validate_coordinate

logger = logging.getLogger(__name__)

LatLon = Tuple[float, float]


class ReferencePolicy(str, Enum):
    CENTROID = "centroid"
    FIRST = "first"
    ORIGIN = "origin"
    NEAREST = "nearest"  # pairwise: distance to the closest other point


@dataclass(frozen=True)
class ProjectedPoint:
    x: float
    y: float
    distance: float


def centroid(coords: Sequence[LatLon]) -> LatLon:
    """Mean latitude and circular mean longitude (safe across the antimeridian)."""
    lats = np.array([c[0] for c in coords], dtype=float)
    lons = np.radians([c[1] for c in coords])
    lon = math.degrees(math.atan2(np.sin(lons).mean(), np.cos(lons).mean()))
    return float(lats.mean()), lon


class Projector:
    def __init__(self, config: Optional[ProjectionConfig] = None):
        self.config = config or ProjectionConfig()
        self.geod = Geod(ellps=self.config.ellps)

    def project(
        self,
        coords: Iterable[LatLon],
        policy: Optional[ReferencePolicy] = None,
        origin: Optional[LatLon] = None,
    ) -> List[ProjectedPoint]:
        """Projects ``(lat, lon)`` pairs and computes their distances, one result per input, in order.

        Raises:
            InvalidCoordinate: a pair (or ``origin``) is out of range.
            ValueError: ``ORIGIN`` policy without ``origin``, or unknown policy name.
        """
        points = list(coords)
        if not points:
            return []
        for lat, lon in points:
            validate_coordinate(lat, lon)

        policy = ReferencePolicy(policy or self.config.reference_policy)
        reference = self._reference(points, policy, origin)
        transformer = self._transformer(reference)

        lats = np.array([p[0] for p in points], dtype=float)
        lons = np.array([p[1] for p in points], dtype=float)
        xs, ys = transformer.transform(lons, lats)
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)

        if policy is ReferencePolicy.NEAREST:
            distances = self._nearest_distances(xs, ys)
        else:
            ref_x, ref_y = transformer.transform(reference[1], reference[0])
            distances = np.hypot(xs - ref_x, ys - ref_y)

        logger.debug(
            f"Projected {len(points)} points (policy={policy.value}, reference={reference}, "
            f"crs={self.config.crs or 'aeqd'})"
        )
        return [ProjectedPoint(float(x), float(y), float(d)) for x, y, d in zip(xs, ys, distances)]

    def geodesic_distance(self, a: LatLon, b: LatLon) -> float:
        """WGS84 geodesic distance in metres between two ``(lat, lon)`` pairs."""
        # inv(lon1, lat1, lon2, lat2) -> az12, az21, dist
        _, _, dist = self.geod.inv(a[1], a[0], b[1], b[0])
        return float(dist)

    def _reference(self, points: List[LatLon], policy: ReferencePolicy, origin: Optional[LatLon]) -> LatLon:
        if policy is ReferencePolicy.ORIGIN:
            if origin is None:
                raise ValueError("ORIGIN reference policy requires an origin (lat, lon)")
            validate_coordinate(origin[0], origin[1])
            return float(origin[0]), float(origin[1])
        if policy is ReferencePolicy.FIRST:
            return float(points[0][0]), float(points[0][1])
        return centroid(points)

    def _transformer(self, reference: LatLon) -> Transformer:
        if self.config.crs:
            target = CRS.from_user_input(self.config.crs)
        else:
            lat_0, lon_0 = reference
            target = CRS.from_proj4(
                f"+proj=aeqd +lat_0={lat_0} +lon_0={lon_0} +ellps={self.config.ellps} +units=m +no_defs"
            )
        return Transformer.from_crs("EPSG:4326", target, always_xy=True)

    def _nearest_distances(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Distance from each point to its closest other point of the batch.

        A point with no other point to compare against (a batch of one) gets 0.0,
        the same as a point that has a duplicate.
        """
        if len(xs) < 2:
            return np.zeros(len(xs))
        planar = np.column_stack([xs, ys])
        # First neighbour is the point itself (or a duplicate at distance 0)
        nn = NearestNeighbors(n_neighbors=2).fit(planar)
        distances, _ = nn.kneighbors(planar)
        return distances[:, 1]
