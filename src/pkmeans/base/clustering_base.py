"""
Base class for clustering algorithms driven by the Lloyd loop.

Provides the common algorithmic skeleton for alternating optimization
between assignment and update steps.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Tuple
import itertools
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import (
    InputMatrix, CentroidSet, AssignmentVector, MinMax, AlgorithmState
)
from .errors import ConvergenceWarning, InvalidInputError
from ..utils.device import parse_device
from ..utils.validation import validate_data, check_n_clusters


class BaseClusteringAlgorithm:
    """Base class implementing the alternating optimization framework.

    Subclasses need to specify:
    - Assignment strategy
    - Parameter update strategy
    - Initialization strategy
    - Convergence criterion
    - Objective function

    The loop runs Init -> Iterating -> Converged. Init scores the seeded
    centroids against an all-zero assignment vector to get a baseline
    objective. Each iteration then assigns, updates and rescores until the
    convergence criterion fires. With ``max_iter=None`` there is no cap.
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: Optional[int] = None,
                 tol: float = 0.01,
                 verbose: int = 0,
                 device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float64):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Optional iteration cap (None runs until convergence)
            tol: Convergence threshold
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            device: Torch device (None for CPU)
            dtype: Floating point type of all vectors
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.tol = tol
        self.verbose = verbose
        self.device = parse_device(device)
        self.dtype = dtype

        # These will be set by subclasses
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.centroids: Optional[CentroidSet] = None
        self.assignments: Optional[AssignmentVector] = None
        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.assignment_strategy
        - self.update_strategy
        - self.initialization_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass

    def fit(self, X: Any, y: Optional[Tensor] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, d) data (tensor, ndarray or nested list)
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        rows = self._validate_data(X)
        matrix = InputMatrix.from_rows(rows)
        return self.fit_matrix(matrix, MinMax.of(matrix))

    def fit_predict(self, X: Any, y: Optional[Tensor] = None) -> Tensor:
        """Fit and return cluster assignments."""
        self.fit(X, y)
        return self.assignments.labels

    def predict(self, X: Any) -> Tensor:
        """Assign new data to the fitted centroids.

        Args:
            X: (n, d) data

        Returns:
            (n,) tensor of cluster assignments
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        matrix = InputMatrix.from_rows(self._validate_data(X))
        if matrix.dimension != self.centroids.dimension:
            raise InvalidInputError(f"X has {matrix.dimension} features, but the model "
                                    f"was fitted with {self.centroids.dimension}")
        return self.assignment_strategy.compute_assignments(matrix, self.centroids).labels

    def fit_matrix(self, matrix: InputMatrix,
                   min_max: Optional[MinMax] = None) -> 'BaseClusteringAlgorithm':
        """Run initialization and the Lloyd loop on an assembled matrix.

        Args:
            matrix: Validated input vectors
            min_max: Per-dimension bounds, for strategies that derive centroids

        Returns:
            Self
        """
        self.n_clusters = check_n_clusters(self.n_clusters)
        if self.max_iter is not None and self.max_iter < 1:
            raise ValueError(f"max_iter must be at least 1 or None, got {self.max_iter}")
        self._create_components()

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")

        start_time = time.time()
        self.centroids = self.initialization_strategy.initialize(
            self.n_clusters, matrix.dimension, min_max,
            device=matrix.device, dtype=matrix.dtype
        )
        self.assignments, self.converged_ = self._iterate(matrix, self.centroids)

        if self.verbose:
            if not self.converged_:
                print(f"Stopped after {self.n_iter_} iterations without converging")
            print(f"Total fitting time: {time.time() - start_time:.3f}s")

        self.fitted_ = True
        return self

    def _iterate(self, matrix: InputMatrix,
                 centroids: CentroidSet) -> Tuple[AssignmentVector, bool]:
        """Drive assignment/update/objective until the criterion fires.

        Mutates ``centroids`` in place and returns the final assignments.
        """
        assignments = AssignmentVector.zeros(matrix.n_points, self.n_clusters,
                                             device=matrix.device)
        self.n_iter_ = 0
        self.history_ = []
        self.convergence_criterion.reset()

        # Init: baseline objective, only used as the first comparison point
        baseline = self.objective.compute(matrix, centroids, assignments).item()
        self.convergence_criterion.check({
            'iteration': -1,
            'objective': baseline
        })

        iterations = itertools.count() if self.max_iter is None else range(self.max_iter)
        converged = False

        for iteration in iterations:
            iter_start_time = time.time()

            # Assignment step, then update step
            self.assignment_strategy.compute_assignments(matrix, centroids, out=assignments)
            self.update_strategy.update(matrix, assignments, centroids)

            objective_value = self.objective.compute(matrix, centroids, assignments).item()

            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'objective': objective_value,
                'assignments': assignments
            })
            self.n_iter_ = iteration + 1

            diff = getattr(self.convergence_criterion, 'last_diff', None)
            self.history_.append(AlgorithmState(
                iteration=iteration,
                objective_value=objective_value,
                diff=float('nan') if diff is None else diff,
                converged=converged
            ))

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: objective = {objective_value:.6f} "
                      f"({iter_time:.3f}s)")
            if self.verbose >= 2:
                self._print_centroids(centroids)

            if converged:
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        if not converged:
            warnings.warn(f"Failed to converge after {self.max_iter} iterations",
                          ConvergenceWarning)

        return assignments, converged

    def _print_centroids(self, centroids: CentroidSet) -> None:
        for k in range(centroids.n_clusters):
            coords = ", ".join(f"{v:f}" for v in centroids.centroid(k).tolist())
            print(f"{k}: {coords}")

    def _validate_data(self, X: Any) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, dtype=self.dtype, device=self.device)

    @property
    def cluster_centers_(self) -> Tensor:
        """Get cluster centers/means."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.centroids.means

    @property
    def labels_(self) -> Optional[Tensor]:
        if not self.fitted_:
            return None
        return self.assignments.labels

    @property
    def inertia_(self) -> float:
        """Get final objective value."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.history_[-1].objective_value

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'tol': self.tol,
            'verbose': self.verbose,
            'device': self.device,
            'dtype': self.dtype
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            if key == 'device':
                value = parse_device(value)
            setattr(self, key, value)
        return self
