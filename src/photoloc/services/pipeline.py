import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple

from photoloc.clusters.base import Clusterer
from photoloc.clusters.gps import GPSCluster
from photoloc.core.config import JobConfig
from photoloc.core.exceptions import RecordValidationError
from photoloc.models.exif import ExifFields
from photoloc.models.photo_location import PhotoLocationRecord, validate_coordinate, validate_identifier
from photoloc.services.metadata_extractor import MetadataExtractor
from photoloc.services.projection import LatLon, Projector, ReferencePolicy

logger = logging.getLogger(__name__)

MISSING_GPS = "missing GPS coordinates"


@dataclass
class BuildResult:
    """Outcome of building records for a batch.

    Attributes:
        records: Records built successfully, in input order.
        failed: Tuples of (file_name, reason) for photos that produced no record.
    """

    records: List[PhotoLocationRecord] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)


class ClusterRunner:
    def __init__(self, clusterers: List[Clusterer]):
        self.clusterers = clusterers

    async def process(self, records: List[PhotoLocationRecord]) -> List[List[PhotoLocationRecord]]:
        """
        Applies the clusterers in sequence, each one to every group produced so far.
        """
        clusters = [records]

        for clusterer in self.clusterers:
            logger.info(f"Applying clusterer: {clusterer.__class__.__name__}")

            new_clusters = []
            for cluster in clusters:
                if not cluster:
                    continue
                if clusterer.condition(cluster):
                    new_clusters.extend(await clusterer.cluster(cluster))
                else:
                    new_clusters.append(cluster)

            clusters = new_clusters
            logger.info(f"Resulted in {len(clusters)} clusters.")
        return clusters


class PhotoLocationPipeline:
    def __init__(
        self,
        config: JobConfig,
        extractor: Optional[MetadataExtractor] = None,
        projector: Optional[Projector] = None,
    ):
        self.config = config
        self.metadata_extractor = extractor or MetadataExtractor()
        self.projector = projector or Projector(config.projection)
        logger.debug(f"Initializing pipeline for job_id: {self.config.job_id}")

        clusterers = self._create_clusterers(self.config)
        self.clusterer = ClusterRunner(clusterers)
        logger.debug(f"Pipeline initialized with {len(clusterers)} clusterers.")

    def _create_clusterers(self, config: JobConfig) -> List[Clusterer]:
        return [GPSCluster(config.gps)]

    async def cluster(self, records: List[PhotoLocationRecord]) -> List[List[PhotoLocationRecord]]:
        """Groups records of one batch by planar proximity."""
        if not records:
            return []
        return await self.clusterer.process(records)

    async def run(
        self,
        image_paths: Iterable[str],
        policy: Optional[ReferencePolicy] = None,
        origin: Optional[LatLon] = None,
    ) -> BuildResult:
        logger.info(f"Pipeline run started for job {self.config.job_id}.")
        start = time.perf_counter()

        logger.info("Extracting metadata...")
        fields_by_file = await self.metadata_extractor.extract_many(image_paths)

        result = self.build(fields_by_file, policy=policy, origin=origin)
        logger.info(
            f"Pipeline run finished for job {self.config.job_id} in {time.perf_counter() - start:.2f}s: "
            f"{len(result.records)} records, {len(result.failed)} failed."
        )
        return result

    def build(
        self,
        fields_by_file: Mapping[str, ExifFields],
        policy: Optional[ReferencePolicy] = None,
        origin: Optional[LatLon] = None,
    ) -> BuildResult:
        """Projects every geotagged photo with one shared projection and builds its record.

        Each record is constructed independently: a photo that fails validation
        is listed in ``failed`` and does not affect the others.
        """
        result = BuildResult()
        located: List[Tuple[str, ExifFields]] = []

        for file_name, fields in fields_by_file.items():
            if not fields.has_gps:
                logger.warning(f"Skipping {file_name}: {MISSING_GPS}")
                result.failed.append((file_name, MISSING_GPS))
                continue
            located.append((file_name, fields))

        # Only valid coordinates enter the shared projection
        projectable: List[Tuple[str, ExifFields]] = []
        for file_name, fields in located:
            try:
                validate_identifier(file_name)
                validate_coordinate(fields.gps_latitude, fields.gps_longitude)
            except RecordValidationError as e:
                logger.warning(f"Skipping {file_name!r}: {e}")
                result.failed.append((file_name, str(e)))
                continue
            projectable.append((file_name, fields))

        if not projectable:
            return result

        projected = self.projector.project(
            [(f.gps_latitude, f.gps_longitude) for _, f in projectable],
            policy=policy,
            origin=origin,
        )

        for (file_name, fields), point in zip(projectable, projected):
            try:
                record = PhotoLocationRecord(
                    creation_date=fields.creation_date,
                    file_name=file_name,
                    gps_latitude=fields.gps_latitude,
                    gps_longitude=fields.gps_longitude,
                    who=fields.who,
                    x=point.x,
                    y=point.y,
                    distance=point.distance,
                )
            except RecordValidationError as e:
                logger.warning(f"Skipping {file_name!r}: {e}")
                result.failed.append((file_name, str(e)))
                continue
            result.records.append(record)

        return result
