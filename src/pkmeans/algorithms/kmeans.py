"""
K-means clustering algorithm.

Lloyd's algorithm with deterministic min-max initialization (or caller
supplied centers) and an absolute objective-decrease stopping rule.
"""

from typing import Optional, Any, Union
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import ClusteringObjective
from ..base.data_structures import InputMatrix, CentroidSet, AssignmentVector
from ..assignments.hard import HardAssignment
from ..initialization.interpolated import MinMaxInterpolationInit
from ..initialization.from_previous import SuppliedCentroidsInit
from ..utils.convergence import ObjectiveDecrease
from ..updates.mean import MeanUpdater


class KMeansObjective(ClusteringObjective):
    """K-means objective: sum of (non-squared) distances to assigned centroids."""

    def compute(self, matrix: InputMatrix, centroids: CentroidSet,
                assignments: AssignmentVector) -> Tensor:
        """Total distance of every row to the centroid its label points at."""
        assigned = centroids.means.index_select(0, assignments.labels)
        diff = matrix.rows - assigned
        return torch.sqrt(torch.sum(diff * diff, dim=1)).sum()

    @property
    def minimize(self) -> bool:
        return True


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Partitions data into K clusters with Lloyd's algorithm.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str or array-like, default='minmax'
        Initialization method:
        - 'minmax' : centroids interpolated between the per-dimension
          minimum and maximum of the data
        - array of shape (n_clusters, n_features) or flat of length
          n_clusters * n_features : Use as initial centers
    max_iter : int, optional
        Iteration cap. None (default) iterates until the objective stops
        decreasing by at least ``tol``.
    tol : float, default=0.01
        Absolute decrease of the objective below which the loop stops
    verbose : int, default=0
        Verbosity level
    device : torch.device, optional
        Device for computation (CPU by default)
    dtype : torch.dtype, default=torch.float64
        Floating point type of the vectors

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centroids
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    inertia_ : float
        Sum of distances to the assigned cluster centers
    n_iter_ : int
        Number of iterations run
    """

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, Any] = 'minmax',
                 max_iter: Optional[int] = None,
                 tol: float = 0.01,
                 verbose: int = 0,
                 device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float64):
        """Initialize K-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            tol=tol,
            verbose=verbose,
            device=device,
            dtype=dtype
        )
        self.init = init

    def _create_components(self) -> None:
        """Create K-means specific components."""
        self.assignment_strategy = HardAssignment()
        self.update_strategy = MeanUpdater()

        if isinstance(self.init, str):
            if self.init == 'minmax':
                self.initialization_strategy = MinMaxInterpolationInit()
            else:
                raise ValueError(f"Unknown init method: {self.init}")
        else:
            self.initialization_strategy = SuppliedCentroidsInit(self.init)

        self.convergence_criterion = ObjectiveDecrease(threshold=self.tol)
        self.objective = KMeansObjective()

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params['init'] = self.init
        return params

    def score(self, X: Any, y: Optional[Tensor] = None) -> float:
        """Opposite of the value of X on the K-means objective.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            New data
        y : Ignored
            Not used

        Returns
        -------
        score : float
            Negative of the sum of distances to the nearest centers
        """
        matrix = InputMatrix.from_rows(self._validate_data(X))
        labels = self.predict(matrix.rows)
        assignments = AssignmentVector(labels, self.n_clusters)
        return -self.objective.compute(matrix, self.centroids, assignments).item()
