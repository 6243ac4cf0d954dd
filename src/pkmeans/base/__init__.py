"""Base classes and interfaces for the partition k-means engine."""

from .errors import (
    KMeansError,
    InvalidInputError,
    InvalidInitialCentroidsError,
    ConvergenceWarning
)

from .interfaces import (
    AssignmentStrategy,
    ParameterUpdater,
    DistanceMetric,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective,
    RowSource
)

from .data_structures import (
    InputMatrix,
    CentroidSet,
    AssignmentVector,
    MinMax,
    AlgorithmState,
    PartitionResult
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Errors
    'KMeansError',
    'InvalidInputError',
    'InvalidInitialCentroidsError',
    'ConvergenceWarning',

    # Interfaces
    'AssignmentStrategy',
    'ParameterUpdater',
    'DistanceMetric',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',
    'RowSource',

    # Data structures
    'InputMatrix',
    'CentroidSet',
    'AssignmentVector',
    'MinMax',
    'AlgorithmState',
    'PartitionResult',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
