"""
descriptive.py

Summary statistics over numeric sequences.

Empty input degrades to 0 instead of NaN so a freshly loading view can
always render a number.
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from records import StudentDataset


@dataclass(frozen=True)
class ScoreSummary:
    mean: float
    median: float
    std: float
    count: int


def mean(xs: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    arr = np.asarray(xs, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def standard_deviation(xs: Sequence[float]) -> float:
    """Population standard deviation (divides by N); 0.0 for fewer than 2 values."""
    arr = np.asarray(xs, dtype=float)
    if arr.size < 2:
        return 0.0
    return float(np.sqrt(np.sum((arr - arr.mean()) ** 2) / arr.size))


def median(xs: Sequence[float]) -> float:
    """Element at index N // 2 of the sorted values (upper middle); 0.0 when empty."""
    arr = np.sort(np.asarray(xs, dtype=float))
    if arr.size == 0:
        return 0.0
    return float(arr[arr.size // 2])


def percentile_rank(value: float, sorted_xs: Sequence[float]) -> int:
    """
    Integer rank 0-100 of ``value`` against an ascending sequence.

    The rank is the first index whose entry is >= ``value`` (the left
    insertion point), scaled so the first index maps to 0 and the last to
    100. Ties therefore share the rank of their first occurrence, and
    ``value`` need not be a member of ``sorted_xs``.
    """
    arr = np.asarray(sorted_xs, dtype=float)
    n = arr.size
    if n == 0:
        return 0
    if n == 1:
        return 0 if value < arr[0] else 100
    index = min(int(np.searchsorted(arr, value, side="left")), n - 1)
    # Half-up rounding, not Python's banker's rounding.
    return int(math.floor(100.0 * index / (n - 1) + 0.5))


def summarise_scores(xs: Sequence[float]) -> ScoreSummary:
    arr = np.asarray(xs, dtype=float)
    return ScoreSummary(
        mean=mean(arr),
        median=median(arr),
        std=standard_deviation(arr),
        count=int(arr.size),
    )


def pass_rate(dataset: StudentDataset) -> float:
    """Percentage of records labelled Pass; 0.0 for an empty dataset."""
    if dataset.is_empty:
        return 0.0
    passed = sum(1 for r in dataset if r.passed)
    return 100.0 * passed / len(dataset)
