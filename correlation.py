"""
correlation.py

Pearson correlation between numeric sequences.

- pearson_correlation:
    r for two equal-length sequences; 0.0 when undefined.
- correlation_matrix:
    Pairwise r over study hours, attendance, past and final score.
- top_predictor:
    Predictor with the strongest linear association to final score.
"""

from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from constants import CORRELATION_LABELS, PREDICTOR_COLUMNS, TARGET_COLUMN
from records import StudentDataset


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson r at full precision.

    Returns 0.0 for empty input or when either sequence is constant, since
    the result is rendered directly and NaN cannot be. Raises ValueError
    when the lengths differ.
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if x_arr.shape != y_arr.shape:
        raise ValueError(f"Length mismatch: {x_arr.size} vs {y_arr.size}")
    if x_arr.size == 0:
        return 0.0
    # Exact constancy check; tiny non-zero deviations from rounding in the
    # mean would otherwise produce a spurious r.
    if np.all(x_arr == x_arr[0]) or np.all(y_arr == y_arr[0]):
        return 0.0

    dx = x_arr - x_arr.mean()
    dy = y_arr - y_arr.mean()
    denominator = np.sqrt(np.sum(dx * dx) * np.sum(dy * dy))
    if denominator == 0:
        return 0.0
    r = float(np.sum(dx * dy) / denominator)
    return max(-1.0, min(1.0, r))


def correlation_matrix(dataset: StudentDataset) -> pd.DataFrame:
    """Square DataFrame of r values labelled for display."""
    columns = PREDICTOR_COLUMNS + [TARGET_COLUMN]
    labels = [CORRELATION_LABELS[c] for c in columns]
    data = {c: dataset.column(c) for c in columns}

    matrix = np.zeros((len(columns), len(columns)))
    for i, a in enumerate(columns):
        for j, b in enumerate(columns):
            matrix[i, j] = pearson_correlation(data[a], data[b])
    return pd.DataFrame(matrix, index=labels, columns=labels)


def top_predictor(dataset: StudentDataset) -> Optional[Tuple[str, float]]:
    """(column, r) with the largest |r| against final score; None when empty."""
    if dataset.is_empty:
        return None
    target = dataset.column(TARGET_COLUMN)
    scored = [(c, pearson_correlation(dataset.column(c), target)) for c in PREDICTOR_COLUMNS]
    return max(scored, key=lambda item: abs(item[1]))
