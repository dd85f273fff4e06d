from .metadata_extractor import MetadataExtractor
from .pipeline import BuildResult, ClusterRunner, PhotoLocationPipeline
from .projection import ProjectedPoint, Projector, ReferencePolicy

__all__ = [
    "MetadataExtractor",
    "BuildResult",
    "ClusterRunner",
    "PhotoLocationPipeline",
    "ProjectedPoint",
    "Projector",
    "ReferencePolicy",
]
