"""
pkmeans: k-means labels computed once per partition.

A window-function style k-means: every row of a partition asks for its
cluster label, the first request clusters the whole partition with Lloyd's
algorithm, and the rest read the memoized result.

Example usage:
    >>> from pkmeans import kmeans
    >>>
    >>> kmeans([[1.0], [2.0], [9.0], [10.0]], k=2)
    [0, 0, 1, 1]
    >>>
    >>> # Or through the estimator on a whole matrix
    >>> from pkmeans import KMeans
    >>> km = KMeans(n_clusters=2).fit([[1.0], [2.0], [9.0], [10.0]])
    >>> km.labels_
    tensor([0, 0, 1, 1])
"""

__version__ = '0.1.0'

# Import main algorithm
from .algorithms.kmeans import KMeans

# Partition-scoped evaluation
from .partition import (
    PartitionCache,
    InMemoryPartition,
    kmeans,
    kmeans_with_init,
    kmeans_partitioned
)

from .distances import euclidean_distance

# Convenience imports
from .base import (
    RowSource,
    InputMatrix,
    CentroidSet,
    AssignmentVector,
    MinMax,
    PartitionResult,
    KMeansError,
    InvalidInputError,
    InvalidInitialCentroidsError,
    ConvergenceWarning
)

__all__ = [
    # Algorithm
    'KMeans',

    # Partition evaluation
    'PartitionCache',
    'InMemoryPartition',
    'kmeans',
    'kmeans_with_init',
    'kmeans_partitioned',
    'euclidean_distance',

    # Core data structures
    'RowSource',
    'InputMatrix',
    'CentroidSet',
    'AssignmentVector',
    'MinMax',
    'PartitionResult',

    # Errors
    'KMeansError',
    'InvalidInputError',
    'InvalidInitialCentroidsError',
    'ConvergenceWarning',

    # Version
    '__version__'
]
