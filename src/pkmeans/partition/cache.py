"""
Once-per-partition memoization of a k-means labeling.

A row-at-a-time caller asks for the label of one row at a time. The first
request of a partition assembles the whole input matrix from the row source,
runs k-means to convergence and keeps only the resulting label list. Every
later request is a list lookup.

One cache belongs to exactly one partition. Create a new one per partition;
nothing is shared between instances.
"""

from typing import Optional, List
import torch

from ..algorithms.kmeans import KMeans
from ..base.interfaces import RowSource
from ..base.data_structures import InputMatrix, MinMax, PartitionResult
from ..base.errors import InvalidInputError
from ..utils.device import parse_device, estimate_memory_usage
from ..utils.validation import validate_row_vector, check_n_clusters


class PartitionCache:
    """Lazily computes and memoizes the cluster label of every row in a partition.

    Parameters
    ----------
    source : RowSource
        Adapter over the partition's rows
    tol : float, default=0.01
        Absolute objective decrease below which the Lloyd loop stops
    max_iter : int, optional
        Opt-in iteration cap; None reproduces the uncapped loop
    verbose : int, default=0
        Verbosity level passed to the estimator
    device : torch.device, optional
        Device for the working tensors (CPU by default)
    dtype : torch.dtype, default=torch.float64
        Floating point type of the vectors
    """

    def __init__(self,
                 source: RowSource,
                 tol: float = 0.01,
                 max_iter: Optional[int] = None,
                 verbose: int = 0,
                 device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float64):
        self.source = source
        self.tol = tol
        self.max_iter = max_iter
        self.verbose = verbose
        self.device = parse_device(device)
        self.dtype = dtype

        self.result = PartitionResult()

    @property
    def is_done(self) -> bool:
        return self.result.done

    def get_label(self, position: Optional[int] = None) -> int:
        """Cluster index of the row at ``position``.

        Args:
            position: 0-based offset in partition row order; the source's
                current position when None

        Returns:
            Label in ``[0, k)``

        Raises:
            InvalidInputError: a row is malformed (first call only)
            InvalidInitialCentroidsError: supplied centroids are malformed
            IndexError: position outside the partition
        """
        if position is None:
            position = self.source.current_position()

        if not self.result.done:
            self._compute(position)

        labels = self.result.labels
        if not 0 <= position < len(labels):
            raise IndexError(f"position {position} out of range for partition "
                             f"of {len(labels)} rows")
        return labels[position]

    label_for_position = get_label

    def labels(self) -> List[int]:
        """All labels of the partition in row order, computing them if needed."""
        if not self.result.done:
            self._compute(self.source.current_position())
        return list(self.result.labels)

    def _compute(self, position: int) -> None:
        n_points = int(self.source.row_count())
        if n_points < 1:
            raise InvalidInputError("partition has no rows")
        if not 0 <= position < n_points:
            raise IndexError(f"position {position} out of range for partition "
                             f"of {n_points} rows")

        # The requesting row fixes the dimension for the whole partition
        first = validate_row_vector(self.source.row_vector(position),
                                    dtype=self.dtype, device=self.device)
        dimension = first.shape[0]
        n_clusters = check_n_clusters(self.source.k_parameter())

        matrix, min_max = self._assemble(n_points, dimension)

        initial = self.source.initial_centroids()
        estimator = KMeans(
            n_clusters=n_clusters,
            init='minmax' if initial is None else initial,
            max_iter=self.max_iter,
            tol=self.tol,
            verbose=self.verbose,
            device=self.device,
            dtype=self.dtype
        )

        if self.verbose >= 2:
            memory = estimate_memory_usage(n_points, dimension, n_clusters, self.dtype)
            print(f"Partition of {n_points} rows, dim={dimension}, k={n_clusters}: "
                  f"~{memory['total']} bytes working memory")

        estimator.fit_matrix(matrix, min_max)

        # Only the labels outlive the run
        self.result = PartitionResult(
            labels=estimator.assignments.tolist(),
            done=True,
            n_iter=estimator.n_iter_,
            objective_value=estimator.inertia_
        )

    def _assemble(self, n_points: int, dimension: int):
        """Copy every row into flat storage, tracking per-dimension bounds."""
        data = torch.empty(n_points * dimension, device=self.device, dtype=self.dtype)
        min_max = MinMax(dimension, device=self.device, dtype=self.dtype)

        for i in range(n_points):
            try:
                vector = validate_row_vector(self.source.row_vector(i), dimension,
                                             dtype=self.dtype, device=self.device)
            except InvalidInputError as e:
                raise InvalidInputError(f"row {i}: {e}") from e
            data[i * dimension:(i + 1) * dimension] = vector
            min_max.observe(vector)

        return InputMatrix(data, n_points, dimension), min_max
