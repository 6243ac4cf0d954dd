"""
Core data structures for the partition k-means engine.

Vectors live in flat, row-major buffers indexed by ``row * dim + dimension``.
The 2D views handed to the numeric code share that storage, so writes made
through a view land in the owned buffer.

Writer discipline inside one Lloyd iteration: the assignment step is the only
writer of an AssignmentVector, the update step the only writer of a CentroidSet.
"""

from typing import Optional, List
import torch
from torch import Tensor
from dataclasses import dataclass, field


class InputMatrix:
    """N vectors of equal dimension, assembled once and never mutated afterwards."""

    def __init__(self, data: Tensor, n_points: int, dimension: int):
        """
        Args:
            data: (n_points * dimension,) flat tensor
            n_points: Number of rows N
            dimension: Vector dimension d
        """
        assert data.dim() == 1 and data.numel() == n_points * dimension
        self.data = data
        self.n_points = n_points
        self.dimension = dimension

    @classmethod
    def from_rows(cls, rows: Tensor) -> 'InputMatrix':
        """Wrap an (N, d) tensor, copying it into contiguous flat storage."""
        assert rows.dim() == 2
        n_points, dimension = rows.shape
        return cls(rows.contiguous().reshape(-1).clone(), n_points, dimension)

    @property
    def rows(self) -> Tensor:
        """(N, d) view over the flat storage."""
        return self.data.view(self.n_points, self.dimension)

    def row(self, index: int) -> Tensor:
        start = index * self.dimension
        return self.data[start:start + self.dimension]

    @property
    def device(self) -> torch.device:
        return self.data.device

    @property
    def dtype(self) -> torch.dtype:
        return self.data.dtype

    def __len__(self) -> int:
        return self.n_points


class CentroidSet:
    """k centroids of dimension d in one flat buffer, rewritten in place each iteration."""

    def __init__(self, data: Tensor, n_clusters: int, dimension: int):
        assert data.dim() == 1 and data.numel() == n_clusters * dimension
        self.data = data
        self.n_clusters = n_clusters
        self.dimension = dimension

    @classmethod
    def zeros(cls, n_clusters: int, dimension: int,
              device: Optional[torch.device] = None,
              dtype: torch.dtype = torch.float64) -> 'CentroidSet':
        return cls(torch.zeros(n_clusters * dimension, device=device, dtype=dtype),
                   n_clusters, dimension)

    @classmethod
    def from_means(cls, means: Tensor) -> 'CentroidSet':
        """Copy a (k, d) tensor into a new centroid set."""
        assert means.dim() == 2
        n_clusters, dimension = means.shape
        return cls(means.contiguous().reshape(-1).clone(), n_clusters, dimension)

    @property
    def means(self) -> Tensor:
        """(k, d) view over the flat storage."""
        return self.data.view(self.n_clusters, self.dimension)

    def centroid(self, index: int) -> Tensor:
        start = index * self.dimension
        return self.data[start:start + self.dimension]

    def update_means(self, new_means: Tensor) -> None:
        """Update cluster means in-place."""
        self.means.copy_(new_means)

    def __repr__(self) -> str:
        return f"CentroidSet(n_clusters={self.n_clusters}, dimension={self.dimension})"


class AssignmentVector:
    """One cluster index in ``[0, k)`` per input row."""

    def __init__(self, labels: Tensor, n_clusters: int):
        assert labels.dim() == 1
        self.labels = labels.long()
        self.n_clusters = n_clusters

    @classmethod
    def zeros(cls, n_points: int, n_clusters: int,
              device: Optional[torch.device] = None) -> 'AssignmentVector':
        """Fresh vector with every row on centroid 0."""
        return cls(torch.zeros(n_points, dtype=torch.long, device=device), n_clusters)

    @property
    def n_points(self) -> int:
        return self.labels.shape[0]

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Get indices of points assigned to a specific cluster."""
        return torch.where(self.labels == cluster_idx)[0]

    def count_per_cluster(self) -> Tensor:
        """Count points per cluster."""
        return torch.bincount(self.labels, minlength=self.n_clusters)

    def tolist(self) -> List[int]:
        return [int(v) for v in self.labels.tolist()]

    def __len__(self) -> int:
        return self.n_points


class MinMax:
    """Running per-dimension minimum and maximum, fed one vector at a time."""

    def __init__(self, dimension: int, device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float64):
        self.dimension = dimension
        self.minimum = torch.zeros(dimension, device=device, dtype=dtype)
        self.maximum = torch.zeros(dimension, device=device, dtype=dtype)
        self.count = 0

    @classmethod
    def of(cls, matrix: InputMatrix) -> 'MinMax':
        """Bounds of a whole matrix in one pass."""
        bounds = cls(matrix.dimension, matrix.device, matrix.dtype)
        if matrix.n_points > 0:
            rows = matrix.rows
            bounds.minimum = rows.amin(dim=0).clone()
            bounds.maximum = rows.amax(dim=0).clone()
            bounds.count = matrix.n_points
        return bounds

    def observe(self, vector: Tensor) -> None:
        if self.count == 0:
            self.minimum = vector.clone()
            self.maximum = vector.clone()
        else:
            self.minimum = torch.minimum(self.minimum, vector)
            self.maximum = torch.maximum(self.maximum, vector)
        self.count += 1

    @property
    def span(self) -> Tensor:
        return self.maximum - self.minimum


@dataclass
class AlgorithmState:
    """Snapshot of one Lloyd iteration, kept for diagnostics."""
    iteration: int
    objective_value: float
    diff: float
    converged: bool = False


@dataclass
class PartitionResult:
    """Final labels of one partition plus the done flag.

    Lives only as long as the owning PartitionCache.
    """
    labels: List[int] = field(default_factory=list)
    done: bool = False
    n_iter: int = 0
    objective_value: Optional[float] = None
