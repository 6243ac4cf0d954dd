"""
Euclidean distance metric for clustering.

Plain (non-squared) L2 distance: both the nearest-centroid search and the
k-means objective sum true distances, not squared ones.
"""

import math
from typing import Optional, Sequence, Union
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


VectorLike = Union[Tensor, Sequence[float]]


def euclidean_distance(a: VectorLike, b: VectorLike, dim: Optional[int] = None) -> float:
    """Euclidean distance between two vectors of the same length.

    Args:
        a: First vector
        b: Second vector
        dim: Number of leading coordinates to compare; whole vector when None.
            The caller guarantees both vectors have at least that many.

    Returns:
        Non-negative float
    """
    if isinstance(a, Tensor) and isinstance(b, Tensor):
        if dim is not None:
            a, b = a[:dim], b[:dim]
        diff = a - b
        return float(torch.sqrt(torch.sum(diff * diff)))

    if dim is None:
        dim = len(a)
    total = 0.0
    for i in range(dim):
        delta = a[i] - b[i]
        total += delta * delta
    return math.sqrt(total)


class EuclideanDistance(DistanceMetric):
    """Euclidean distance metric.

    Computes ||x - μ|| where μ is the cluster center.
    """

    def __init__(self, squared: bool = False):
        """
        Args:
            squared: If True, return squared distances.
                    If False, return actual Euclidean distances (default).
        """
        self.squared = squared

    def compute(self, points: Tensor, center: Tensor, **kwargs) -> Tensor:
        """Compute Euclidean distances from points to one center.

        Args:
            points: (n, d) tensor of points
            center: (d,) tensor

        Returns:
            (n,) tensor of distances
        """
        diff = points - center.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=1)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        """(n, k) distance matrix, one column per center."""
        distances = torch.empty(points.shape[0], centers.shape[0],
                                device=points.device, dtype=points.dtype)
        for k in range(centers.shape[0]):
            distances[:, k] = self.compute(points, centers[k])
        return distances
