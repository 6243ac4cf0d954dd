"""
Core interfaces for the partition k-means engine.

This module defines the abstract base classes that all components must implement,
so the Lloyd loop can be driven without knowing which concrete pieces it runs.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
import torch
from torch import Tensor

from .data_structures import InputMatrix, CentroidSet, AssignmentVector, MinMax


class DistanceMetric(ABC):
    """Abstract base class for point-to-center distance computations."""

    @abstractmethod
    def compute(self, points: Tensor, center: Tensor, **kwargs) -> Tensor:
        """Compute distances from points to a single center.

        Args:
            points: (n, d) tensor of points
            center: (d,) tensor
            **kwargs: Metric-specific parameters

        Returns:
            (n,) tensor of distances
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for centroid initialization strategies."""

    @abstractmethod
    def initialize(self, n_clusters: int, dimension: int,
                   min_max: Optional[MinMax] = None,
                   device: Optional[torch.device] = None,
                   dtype: torch.dtype = torch.float64) -> CentroidSet:
        """Produce the initial centroid set.

        Args:
            n_clusters: Number of centroids k
            dimension: Vector dimension d
            min_max: Per-dimension bounds of the input, if the strategy needs them
            device: Target device
            dtype: Target dtype

        Returns:
            Freshly allocated CentroidSet
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, matrix: InputMatrix, centroids: CentroidSet,
                            out: Optional[AssignmentVector] = None) -> AssignmentVector:
        """Assign every row of the matrix to a centroid.

        Args:
            matrix: Input vectors
            centroids: Current centroid set
            out: Assignment buffer to overwrite; allocated when None

        Returns:
            The written AssignmentVector
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, matrix: InputMatrix, assignments: AssignmentVector,
               centroids: CentroidSet) -> None:
        """Rewrite the centroid buffer in place from the current assignments."""
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, matrix: InputMatrix, centroids: CentroidSet,
                assignments: AssignmentVector) -> Tensor:
        """Compute objective function value as a scalar tensor."""
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass


class RowSource(ABC):
    """Row-oriented storage of one partition, as seen by the clustering core.

    Implementations adapt whatever holds the rows (a window frame, a
    dataframe group, a list) to the handful of calls PartitionCache needs.
    ``row_vector`` and ``initial_centroids`` return raw values; the cache
    validates them.
    """

    @abstractmethod
    def row_count(self) -> int:
        pass

    @abstractmethod
    def row_vector(self, row_index: int) -> Any:
        pass

    @abstractmethod
    def k_parameter(self) -> int:
        pass

    def initial_centroids(self) -> Optional[Any]:
        """Caller-supplied k x dim centroids, or None to derive them."""
        return None

    @abstractmethod
    def current_position(self) -> int:
        pass
