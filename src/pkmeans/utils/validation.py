"""
Input validation utilities.

Turns caller-supplied values (lists, tuples, numpy arrays, tensors) into
tensors of a known shape, rejecting anything with the wrong rank, the wrong
length or a missing element. ``None`` and NaN both count as missing;
infinities are rejected as well because they make the objective undefined.
"""

from typing import Optional, Union, Any
import torch
from torch import Tensor
import numpy as np

from ..base.errors import InvalidInputError, InvalidInitialCentroidsError


def _to_float_array(value: Any, error_cls: type, what: str) -> np.ndarray:
    """Convert to a float64 ndarray, mapping conversion failures to ``error_cls``."""
    if value is None:
        raise error_cls(f"{what} is missing")

    if isinstance(value, Tensor):
        return value.detach().cpu().numpy().astype(np.float64)

    try:
        return np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError, OverflowError) as e:
        raise error_cls(f"{what} is not a regular numeric array: {e}") from e


def _check_complete(arr: np.ndarray, error_cls: type, what: str) -> None:
    if np.isnan(arr).any():
        raise error_cls(f"{what} contains a missing element")
    if np.isinf(arr).any():
        raise error_cls(f"{what} contains an infinite element")


def validate_row_vector(value: Any, dimension: Optional[int] = None,
                        dtype: torch.dtype = torch.float64,
                        device: Optional[torch.device] = None) -> Tensor:
    """Validate one input row.

    Args:
        value: Raw row value
        dimension: Required length; any positive length is accepted when None
        dtype: Target data type
        device: Target device

    Returns:
        (d,) tensor

    Raises:
        InvalidInputError: wrong rank, wrong length, empty, or missing element
    """
    arr = _to_float_array(value, InvalidInputError, "input vector")

    if arr.ndim != 1:
        raise InvalidInputError(f"input vector must be 1d, got {arr.ndim}d")
    if arr.shape[0] == 0:
        raise InvalidInputError("input vector is empty")
    if dimension is not None and arr.shape[0] != dimension:
        raise InvalidInputError(f"input vector has length {arr.shape[0]}, "
                                f"expected {dimension}")
    _check_complete(arr, InvalidInputError, "input vector")

    return torch.from_numpy(arr).to(dtype=dtype, device=device)


def validate_data(X: Union[Tensor, np.ndarray, list],
                  dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None) -> Tensor:
    """Validate a whole (N, d) input matrix.

    Raises:
        InvalidInputError: not 2D, no rows, no columns, or a missing element
    """
    arr = _to_float_array(X, InvalidInputError, "input matrix")

    if arr.ndim != 2:
        raise InvalidInputError(f"Expected 2D array, got {arr.ndim}D")

    n_samples, n_features = arr.shape
    if n_samples < 1:
        raise InvalidInputError("Found 0 samples, but need at least 1")
    if n_features < 1:
        raise InvalidInputError("Found 0 features, but need at least 1")
    _check_complete(arr, InvalidInputError, "input matrix")

    return torch.from_numpy(np.ascontiguousarray(arr)).to(dtype=dtype, device=device)


def validate_initial_centroids(value: Any, n_clusters: int, dimension: int,
                               dtype: torch.dtype = torch.float64,
                               device: Optional[torch.device] = None) -> Tensor:
    """Validate caller-supplied centroids.

    Accepts a flat sequence of ``n_clusters * dimension`` numbers or a
    two-level ``n_clusters x dimension`` structure.

    Returns:
        (k, d) tensor

    Raises:
        InvalidInitialCentroidsError: shape mismatch or missing element
    """
    arr = _to_float_array(value, InvalidInitialCentroidsError, "initial mean vector")

    if arr.ndim == 2:
        if arr.shape != (n_clusters, dimension):
            raise InvalidInitialCentroidsError(
                f"initial mean vector has shape {arr.shape}, "
                f"expected ({n_clusters}, {dimension})")
    elif arr.ndim == 1:
        if arr.shape[0] != n_clusters * dimension:
            raise InvalidInitialCentroidsError(
                f"initial mean vector has {arr.shape[0]} elements, "
                f"expected {n_clusters * dimension}")
        arr = arr.reshape(n_clusters, dimension)
    else:
        raise InvalidInitialCentroidsError(
            f"initial mean vector must be 1d or 2d, got {arr.ndim}d")

    _check_complete(arr, InvalidInitialCentroidsError, "initial mean vector")

    return torch.from_numpy(np.ascontiguousarray(arr)).to(dtype=dtype, device=device)


def check_n_clusters(n_clusters: Any) -> int:
    """Validate number of clusters.

    Unlike estimators that sample centers from the data, k may exceed N
    here: surplus clusters simply end up empty.

    Raises:
        TypeError: not an integer
        ValueError: not positive
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise ValueError(f"n_clusters must be positive, got {n_clusters}")

    return int(n_clusters)
