from .base import Clusterer
from .gps import GPSCluster

__all__ = ["Clusterer", "GPSCluster"]
