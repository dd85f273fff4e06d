import logging
from typing import Dict, List, Optional

import numpy as np
from sklearn.cluster import DBSCAN

from photoloc.clusters.base import Clusterer
from photoloc.core.config import GPSConfig
from photoloc.models.photo_location import PhotoLocationRecord

logger = logging.getLogger(__name__)


class GPSCluster(Clusterer):
    """Density clustering on the planar ``(x, y)`` of one batch (units of the projection, metres by default)."""

    def __init__(self, config: Optional[GPSConfig] = None):
        config = config or GPSConfig()
        self.max_dist_m = config.eps_m
        self.min_samples = config.min_samples

    async def cluster(self, records: List[PhotoLocationRecord]) -> List[List[PhotoLocationRecord]]:
        if len(records) < max(self.min_samples, 2):
            return [list(records)]

        coords = np.array([r.planar for r in records], dtype=float)
        labels = DBSCAN(eps=self.max_dist_m, min_samples=self.min_samples).fit_predict(coords)
        clusters = self._group_by_labels(records, labels)
        logger.info(f"GPS clustering: {len(records)} records -> {len(clusters)} groups")
        return clusters

    def _group_by_labels(
        self, records: List[PhotoLocationRecord], labels: np.ndarray
    ) -> List[List[PhotoLocationRecord]]:
        clusters: Dict[int, List[PhotoLocationRecord]] = {}
        noise = []
        for r, label in zip(records, labels):
            if label == -1:
                noise.append(r)
            else:
                clusters.setdefault(int(label), []).append(r)

        # Noise points trail as singletons; they are not neighbours of each other
        return list(clusters.values()) + [[r] for r in noise]
