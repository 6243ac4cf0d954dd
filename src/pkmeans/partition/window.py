"""
In-memory window adapter.

Evaluates k-means the way a window function does: one call per row, in row
order, against a single partition-scoped cache. ``kmeans`` derives the
initial centroids from the data, ``kmeans_with_init`` takes them from the
caller, and ``kmeans_partitioned`` runs one independent cache per partition.
"""

from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence

from ..base.errors import InvalidInitialCentroidsError
from ..base.interfaces import RowSource
from .cache import PartitionCache


class InMemoryPartition(RowSource):
    """RowSource over a Python sequence of row vectors.

    The cursor plays the role of the current row of a window frame.
    """

    def __init__(self, rows: Sequence[Any], k: int,
                 initial_centroids: Optional[Any] = None):
        self.rows = rows
        self.k = k
        self.centroids = initial_centroids
        self.position = 0

    def row_count(self) -> int:
        return len(self.rows)

    def row_vector(self, row_index: int) -> Any:
        return self.rows[row_index]

    def k_parameter(self) -> int:
        return self.k

    def initial_centroids(self) -> Optional[Any]:
        return self.centroids

    def current_position(self) -> int:
        return self.position

    def seek(self, position: int) -> None:
        self.position = position


def _evaluate(partition: InMemoryPartition, **options) -> List[int]:
    cache = PartitionCache(partition, **options)
    labels = []
    for position in range(partition.row_count()):
        partition.seek(position)
        labels.append(cache.get_label())
    return labels


def kmeans(rows: Sequence[Any], k: int, **options) -> List[int]:
    """Label every row of one partition, deriving centroids from the data.

    Args:
        rows: Row vectors of the partition, in row order
        k: Number of clusters
        **options: Passed to PartitionCache (tol, max_iter, verbose, device, dtype)

    Returns:
        One label per row
    """
    return _evaluate(InMemoryPartition(rows, k), **options)


def kmeans_with_init(rows: Sequence[Any], k: int, initial_centroids: Any,
                     **options) -> List[int]:
    """Label every row of one partition, starting from caller-supplied centroids.

    Raises:
        InvalidInitialCentroidsError: ``initial_centroids`` is None or malformed
    """
    if initial_centroids is None:
        raise InvalidInitialCentroidsError("initial mean vector is missing")
    return _evaluate(InMemoryPartition(rows, k, initial_centroids), **options)


def kmeans_partitioned(groups: Mapping[Hashable, Sequence[Any]], k: int,
                       initial_centroids: Optional[Any] = None,
                       **options) -> Dict[Hashable, List[int]]:
    """Run one independent clustering per partition key.

    Args:
        groups: Partition key -> rows of that partition
        k: Number of clusters, shared by all partitions
        initial_centroids: Optional centroids used for every partition

    Returns:
        Partition key -> labels of that partition's rows
    """
    results = {}
    for key, rows in groups.items():
        results[key] = _evaluate(InMemoryPartition(rows, k, initial_centroids), **options)
    return results
