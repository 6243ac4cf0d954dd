# tests/test_partition_cache.py
"""
PartitionCache: lazy single computation per partition, memoized lookups,
hard failures on malformed rows or centroids.
"""

from __future__ import annotations

from typing import Any, List, Optional

import pytest
import torch

from pkmeans import (
    PartitionCache,
    RowSource,
    InvalidInputError,
    InvalidInitialCentroidsError,
)


class CountingSource(RowSource):
    """RowSource that records every call the cache makes."""

    def __init__(self, rows: List[Any], k: int, centroids: Optional[Any] = None,
                 position: int = 0):
        self.rows = rows
        self.k = k
        self.centroids = centroids
        self.position = position
        self.vector_calls: List[int] = []
        self.k_calls = 0

    def row_count(self) -> int:
        return len(self.rows)

    def row_vector(self, row_index: int) -> Any:
        self.vector_calls.append(row_index)
        return self.rows[row_index]

    def k_parameter(self) -> int:
        self.k_calls += 1
        return self.k

    def initial_centroids(self) -> Optional[Any]:
        return self.centroids

    def current_position(self) -> int:
        return self.position


def test_one_dimensional_grouping():
    cache = PartitionCache(CountingSource([[1.0], [2.0], [9.0], [10.0]], k=2))
    labels = [cache.get_label(i) for i in range(4)]

    assert labels[0] == labels[1]
    assert labels[2] == labels[3]
    assert labels[0] != labels[2]


def test_computes_once_then_looks_up():
    source = CountingSource([[1.0], [2.0], [9.0], [10.0]], k=2)
    cache = PartitionCache(source)

    assert not cache.is_done
    first = cache.get_label(2)
    assert cache.is_done
    calls_after_first = list(source.vector_calls)

    # Requesting row first (to fix dim), then every row in order
    assert calls_after_first == [2, 0, 1, 2, 3]
    assert source.k_calls == 1

    for _ in range(3):
        assert cache.get_label(2) == first
    for i in range(4):
        cache.get_label(i)
    assert source.vector_calls == calls_after_first
    assert source.k_calls == 1


def test_label_for_position_is_alias():
    cache = PartitionCache(CountingSource([[0.0], [10.0]], k=2))
    assert cache.label_for_position(0) == cache.get_label(0)
    assert cache.label_for_position(1) == cache.get_label(1)


def test_default_position_is_current_row():
    source = CountingSource([[1.0], [2.0], [9.0], [10.0]], k=2, position=3)
    cache = PartitionCache(source)
    assert cache.get_label() == cache.get_label(3)
    source.position = 0
    assert cache.get_label() == cache.get_label(0)


def test_labels_in_range(rng):
    rows = rng.normal(size=(25, 4)).tolist()
    cache = PartitionCache(CountingSource(rows, k=4))
    labels = cache.labels()
    assert len(labels) == 25
    assert all(isinstance(v, int) and 0 <= v < 4 for v in labels)


def test_single_row_single_cluster():
    cache = PartitionCache(CountingSource([[3.0, 4.0]], k=1))
    assert cache.get_label(0) == 0
    assert cache.result.n_iter == 1
    assert cache.result.objective_value == 0.0


def test_supplied_centroids_are_used():
    rows = [[0.0], [1.0], [10.0], [11.0]]
    low_first = PartitionCache(CountingSource(rows, k=2, centroids=[[0.0], [10.0]])).labels()
    high_first = PartitionCache(CountingSource(rows, k=2, centroids=[10.0, 0.0])).labels()
    assert low_first == [0, 0, 1, 1]
    assert high_first == [1, 1, 0, 0]


def test_supplied_centroids_wrong_shape():
    source = CountingSource([[0.0], [1.0], [2.0]], k=3, centroids=[[0.0], [1.0]])
    cache = PartitionCache(source)
    with pytest.raises(InvalidInitialCentroidsError):
        cache.get_label(0)
    assert not cache.is_done


def test_short_row_aborts_whole_partition():
    rows = [[1.0, 2.0], [3.0, 4.0], [5.0], [7.0, 8.0]]
    cache = PartitionCache(CountingSource(rows, k=2))

    with pytest.raises(InvalidInputError, match="row 2"):
        cache.get_label(0)
    assert not cache.is_done
    assert cache.result.labels == []

    # No partial result: every row keeps failing
    for i in (0, 1, 3):
        with pytest.raises(InvalidInputError):
            cache.get_label(i)


@pytest.mark.parametrize("bad", [
    None,
    [1.0, None],
    [1.0, float("nan")],
    [[1.0, 2.0]],
    [],
    "ab",
    [1.0, 10 ** 400],
])
def test_malformed_rows(bad):
    rows = [[0.0, 0.0], bad, [1.0, 1.0]]
    with pytest.raises(InvalidInputError):
        PartitionCache(CountingSource(rows, k=2)).get_label(0)


def test_requesting_row_fixes_dimension():
    # Current row has length 3, so the length-2 rows are the malformed ones
    rows = [[0.0, 0.0], [1.0, 1.0, 1.0]]
    with pytest.raises(InvalidInputError, match="row 0"):
        PartitionCache(CountingSource(rows, k=1)).get_label(1)


def test_position_out_of_range():
    cache = PartitionCache(CountingSource([[0.0], [1.0]], k=1))
    with pytest.raises(IndexError):
        cache.get_label(2)
    cache.get_label(0)
    with pytest.raises(IndexError):
        cache.get_label(-1)


def test_empty_partition():
    with pytest.raises(InvalidInputError):
        PartitionCache(CountingSource([], k=1)).get_label(0)


def test_bad_k_from_source():
    with pytest.raises(ValueError):
        PartitionCache(CountingSource([[0.0]], k=0)).get_label(0)


def test_accepts_tensor_and_tuple_rows():
    rows = [torch.tensor([1.0]), (2.0,), [9.0], torch.tensor([10.0], dtype=torch.float32)]
    labels = PartitionCache(CountingSource(rows, k=2)).labels()
    assert labels[0] == labels[1] != labels[2] == labels[3]


def test_iteration_cap_is_opt_in():
    rows = [[1.0], [2.0], [9.0], [10.0]]
    uncapped = PartitionCache(CountingSource(rows, k=2))
    uncapped.labels()
    assert uncapped.result.n_iter == 2

    capped = PartitionCache(CountingSource(rows, k=2), max_iter=1)
    with pytest.warns(UserWarning):
        capped.labels()
    assert capped.result.n_iter == 1


def test_verbose_reports_progress(capsys):
    cache = PartitionCache(CountingSource([[1.0], [2.0], [9.0], [10.0]], k=2), verbose=2)
    cache.get_label(0)
    out = capsys.readouterr().out
    assert "Partition of 4 rows, dim=1, k=2" in out
    assert "Converged at iteration 1" in out
    # Centroid dump per iteration
    assert "0: 1.500000" in out
