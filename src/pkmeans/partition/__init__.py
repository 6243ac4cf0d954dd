"""Partition-scoped evaluation of k-means labels."""

from .cache import PartitionCache
from .window import InMemoryPartition, kmeans, kmeans_with_init, kmeans_partitioned

__all__ = [
    'PartitionCache',
    'InMemoryPartition',
    'kmeans',
    'kmeans_with_init',
    'kmeans_partitioned'
]
