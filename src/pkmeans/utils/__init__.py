"""Utility functions for the partition k-means engine."""

from .convergence import ObjectiveDecrease

from .validation import (
    validate_row_vector,
    validate_data,
    validate_initial_centroids,
    check_n_clusters
)

from .device import (
    get_default_device,
    parse_device,
    estimate_memory_usage
)

__all__ = [
    # Convergence criteria
    'ObjectiveDecrease',

    # Validation
    'validate_row_vector',
    'validate_data',
    'validate_initial_centroids',
    'check_n_clusters',

    # Device management
    'get_default_device',
    'parse_device',
    'estimate_memory_usage'
]
