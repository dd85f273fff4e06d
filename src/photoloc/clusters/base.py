from abc import ABC, abstractmethod
from typing import Iterable, List

from photoloc.models.photo_location import PhotoLocationRecord


class Clusterer(ABC):
    """Abstract base class for a clustering strategy over photo location records."""

    @abstractmethod
    async def cluster(self, records: List[PhotoLocationRecord]) -> List[List[PhotoLocationRecord]]:
        """
        Applies a clustering strategy to a list of records.

        Args:
            records: Records projected in the same batch.

        Returns:
            A list of clusters, where each cluster is a list of records.
        """
        raise NotImplementedError()

    @staticmethod
    def condition(records: Iterable[PhotoLocationRecord]) -> bool:
        """ Determines whether the strategy should be applied to the given records. """
        return True
