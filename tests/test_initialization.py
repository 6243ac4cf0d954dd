# tests/test_initialization.py
"""
Centroid initialization: min-max interpolation and supplied centroids.
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from pkmeans.base.data_structures import InputMatrix, MinMax
from pkmeans.base.errors import InvalidInitialCentroidsError
from pkmeans.initialization import MinMaxInterpolationInit, SuppliedCentroidsInit


def _bounds(rows) -> MinMax:
    return MinMax.of(InputMatrix.from_rows(torch.tensor(rows, dtype=torch.float64)))


def test_minmax_formula_uses_dim_plus_one():
    # dim=2, so the divisor is 3 regardless of k
    bounds = _bounds([[0.0, 10.0], [3.0, 40.0]])
    centroids = MinMaxInterpolationInit().initialize(4, 2, bounds)

    expected = torch.tensor([
        [3.0 * (i + 1) / 3 + 0.0, 30.0 * (i + 1) / 3 + 10.0] for i in range(4)
    ], dtype=torch.float64)
    assert centroids.means.shape == (4, 2)
    assert torch.allclose(centroids.means, expected)


def test_minmax_one_dimension_example():
    bounds = _bounds([[1.0], [2.0], [9.0], [10.0]])
    centroids = MinMaxInterpolationInit().initialize(2, 1, bounds)
    assert centroids.means.flatten().tolist() == [5.5, 10.0]


def test_minmax_constant_data_collapses_to_minimum():
    bounds = _bounds([[5.0, -1.0]])
    centroids = MinMaxInterpolationInit().initialize(3, 2, bounds)
    assert torch.equal(centroids.means, torch.tensor([[5.0, -1.0]] * 3, dtype=torch.float64))


def test_minmax_requires_bounds():
    with pytest.raises(ValueError):
        MinMaxInterpolationInit().initialize(2, 1, None)


def test_running_bounds_match_batch_bounds(rng):
    X = rng.normal(size=(30, 4))
    running = MinMax(4)
    for row in torch.from_numpy(X):
        running.observe(row)
    batch = MinMax.of(InputMatrix.from_rows(torch.from_numpy(X)))
    assert torch.equal(running.minimum, batch.minimum)
    assert torch.equal(running.maximum, batch.maximum)
    assert running.count == batch.count == 30


@pytest.mark.parametrize("value", [
    [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]],
    [1.0, 2.0, 3.0, 4.0, 5.0, 6.0],
    np.arange(1.0, 7.0).reshape(3, 2),
    torch.arange(1.0, 7.0),
])
def test_supplied_accepts_flat_and_nested(value):
    centroids = SuppliedCentroidsInit(value).initialize(3, 2)
    assert centroids.means.tolist() == [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]
    assert centroids.means.dtype == torch.float64


@pytest.mark.parametrize("value", [
    [[1.0, 2.0], [3.0, 4.0]],                  # 2 x dim for k=3
    [1.0, 2.0, 3.0, 4.0, 5.0],                 # flat, wrong length
    [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]],        # transposed
    [[[1.0, 2.0]], [[3.0, 4.0]], [[5.0, 6.0]]],  # 3d
    [[1.0, 2.0], [3.0, None], [5.0, 6.0]],     # missing element
    [[1.0, 2.0], [3.0], [5.0, 6.0]],           # ragged
    [1.0, float("nan"), 3.0, 4.0, 5.0, 6.0],
    [1.0, 2.0, 3.0, 4.0, 5.0, 10 ** 400],     # too large for float64
    None,
])
def test_supplied_rejects_bad_shapes(value):
    with pytest.raises(InvalidInitialCentroidsError):
        SuppliedCentroidsInit(value).initialize(3, 2)
