"""
Initialization from caller-supplied centers.

Useful for warm starts or when the caller already knows good starting points.
"""

from typing import Any, Optional
import torch

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import CentroidSet, MinMax
from ..utils.validation import validate_initial_centroids


class SuppliedCentroidsInit(InitializationStrategy):
    """Initialize from a k x d structure supplied by the caller.

    Accepts either a flat sequence of ``k * d`` numbers or ``k`` groups of
    ``d`` numbers, as a list, tuple, ndarray or tensor. The shape is checked
    against the requested ``n_clusters`` and ``dimension``.
    """

    def __init__(self, initial_centroids: Any):
        """
        Args:
            initial_centroids: Raw centroid structure
        """
        self.initial_centroids = initial_centroids

    def initialize(self, n_clusters: int, dimension: int,
                   min_max: Optional[MinMax] = None,
                   device: Optional[torch.device] = None,
                   dtype: torch.dtype = torch.float64) -> CentroidSet:
        """Validate and copy the supplied centers.

        Raises:
            InvalidInitialCentroidsError: wrong shape or missing element
        """
        means = validate_initial_centroids(
            self.initial_centroids, n_clusters, dimension,
            dtype=dtype, device=device
        )
        return CentroidSet.from_means(means)
