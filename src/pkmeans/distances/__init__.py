"""Distance metrics for clustering algorithms."""

from .euclidean import EuclideanDistance, euclidean_distance

__all__ = [
    'EuclideanDistance',
    'euclidean_distance'
]
