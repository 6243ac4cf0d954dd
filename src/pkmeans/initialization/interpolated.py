"""
Deterministic initialization from the per-dimension bounds of the input.

Centroid ``i`` is placed on the segment from the minimum corner toward the
maximum corner of the data:

    centroid[i][a] = (max[a] - min[a]) * (i + 1) / (dim + 1) + min[a]

The divisor is ``dim + 1``, not ``k + 1``. With k > dim the later centroids
land past the maximum corner. Existing labelings depend on this placement.
"""

from typing import Optional
import torch

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import CentroidSet, MinMax


class MinMaxInterpolationInit(InitializationStrategy):
    """Spaces centroids along the min-max diagonal. Uses no randomness."""

    def initialize(self, n_clusters: int, dimension: int,
                   min_max: Optional[MinMax] = None,
                   device: Optional[torch.device] = None,
                   dtype: torch.dtype = torch.float64) -> CentroidSet:
        if min_max is None:
            raise ValueError("MinMaxInterpolationInit requires min_max bounds")
        if min_max.dimension != dimension:
            raise ValueError(f"Bounds have dimension {min_max.dimension}, "
                             f"but data has dimension {dimension}")

        minimum = min_max.minimum.to(device=device, dtype=dtype)
        span = min_max.span.to(device=device, dtype=dtype)

        steps = torch.arange(1, n_clusters + 1, device=device, dtype=dtype)
        means = span.unsqueeze(0) * steps.unsqueeze(1) / (dimension + 1) + minimum.unsqueeze(0)

        return CentroidSet.from_means(means)
