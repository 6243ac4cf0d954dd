"""
Hard assignment strategy for clustering algorithms.

Assigns each point to its nearest centroid based on the distance metric.
"""

from typing import Optional
import torch

from ..base.interfaces import AssignmentStrategy, DistanceMetric
from ..base.data_structures import InputMatrix, CentroidSet, AssignmentVector
from ..distances.euclidean import EuclideanDistance


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest centroid.

    Ties go to the lowest centroid index: scanning centroids 0..k-1, a later
    centroid only wins when it is strictly closer.
    """

    def __init__(self, metric: Optional[DistanceMetric] = None):
        self.metric = metric if metric is not None else EuclideanDistance()

    def compute_assignments(self, matrix: InputMatrix, centroids: CentroidSet,
                            out: Optional[AssignmentVector] = None) -> AssignmentVector:
        """Assign each row to its nearest centroid.

        Args:
            matrix: (N, d) input vectors
            centroids: k centroids
            out: Buffer to overwrite in place

        Returns:
            (N,) assignment vector
        """
        points = matrix.rows
        means = centroids.means

        best_distance = self.metric.compute(points, means[0])
        best_cluster = torch.zeros(matrix.n_points, dtype=torch.long, device=points.device)

        for k in range(1, centroids.n_clusters):
            distances = self.metric.compute(points, means[k])
            closer = distances < best_distance
            best_distance = torch.where(closer, distances, best_distance)
            best_cluster[closer] = k

        if out is None:
            return AssignmentVector(best_cluster, centroids.n_clusters)

        out.labels.copy_(best_cluster)
        return out
