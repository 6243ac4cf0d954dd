"""
Mean update strategy for centroid-based clustering.
"""

import torch

from ..base.interfaces import ParameterUpdater
from ..base.data_structures import InputMatrix, CentroidSet, AssignmentVector


class MeanUpdater(ParameterUpdater):
    """Recomputes every centroid as the mean of the rows assigned to it.

    A centroid with no assigned rows is reset to the zero vector rather than
    kept or dropped.
    """

    def update(self, matrix: InputMatrix, assignments: AssignmentVector,
               centroids: CentroidSet) -> None:
        """Rewrite the centroid buffer in place.

        Args:
            matrix: (N, d) input vectors
            assignments: Current labels
            centroids: Centroid set to overwrite
        """
        points = matrix.rows
        labels = assignments.labels

        sums = torch.zeros(centroids.n_clusters, centroids.dimension,
                           device=points.device, dtype=points.dtype)
        sums.index_add_(0, labels, points)
        counts = assignments.count_per_cluster().to(points.dtype)

        # Empty clusters: 0 / 1 keeps the zero sum
        means = sums / counts.clamp(min=1).unsqueeze(1)

        centroids.update_means(means)
