from typing import Iterable, List

from photoloc.models.photo_location import PhotoLocationRecord
from photoloc.schema import ClusterGroupResponse, PhotoLocationResponse


def to_response(record: PhotoLocationRecord) -> PhotoLocationResponse:
    """Converts a record into the consumer-facing pydantic model."""
    return PhotoLocationResponse.model_validate(record.to_dict())


def format_records(records: Iterable[PhotoLocationRecord]) -> List[PhotoLocationResponse]:
    return [to_response(r) for r in records]


def format_cluster_response(
    final_clusters: List[List[PhotoLocationRecord]], noise_id: int = -1
) -> List[ClusterGroupResponse]:
    """
    Converts clustering output into response groups; single-photo groups are pooled as noise.
    """
    formatted_clusters = []
    noise_records = []

    valid_clusters = []
    for cluster in final_clusters:
        if len(cluster) == 1:
            noise_records.extend(cluster)
        elif cluster:
            valid_clusters.append(cluster)

    for idx, cluster in enumerate(valid_clusters):
        formatted_clusters.append(
            ClusterGroupResponse(
                id=idx,
                photos=[r.file_name for r in cluster],
                photo_details=format_records(cluster),
                count=len(cluster),
                centroid_x=sum(r.x for r in cluster) / len(cluster),
                centroid_y=sum(r.y for r in cluster) / len(cluster),
            )
        )

    if noise_records:
        formatted_clusters.append(
            ClusterGroupResponse(
                id=noise_id,
                photos=[r.file_name for r in noise_records],
                photo_details=format_records(noise_records),
                count=len(noise_records),
                is_noise=True,
            )
        )

    return formatted_clusters
