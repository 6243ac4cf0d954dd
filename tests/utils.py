# tests/utils.py
"""
Small, reusable helpers used across the test suite.

Functions:
- labels_equal_up_to_perm(y1, y2, K): True if y2 is a relabeling of y1.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict, Sequence

import numpy as np


def labels_equal_up_to_perm(y1: Sequence[int], y2: Sequence[int], K: int) -> bool:
    """Return True if y2 can be permuted to equal y1 exactly."""
    y1 = np.asarray(y1)
    y2 = np.asarray(y2)
    if y1.shape != y2.shape:
        return False
    for perm in itertools.permutations(range(K)):
        mapping = np.array(perm)
        if np.array_equal(y1, mapping[y2]):
            return True
    return False


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("fit", {"n": 400, "d": 3, "K": 2}):
    ...     model.fit(X)

    Output
    ------
    [timing] fit {"n":400,"d":3,"K":2} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.
    """
    meta_str = ""
    if meta:
        try:
            meta_str = " " + json.dumps(meta, separators=(",", ":"))
        except (TypeError, ValueError):
            meta_str = " " + repr(meta)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
