"""
modelling.py

Final exam score regression via the normal equation, NumPy only.

Implements:

- prepare_modelling_data:
    Build design matrix X (with intercept) and target y from a dataset.
- solve_linear_system:
    Gaussian elimination with partial pivoting; raises on singular input.
- run_ols_regression:
    beta = (X'X)^-1 X'y, fitted values, residuals and R-squared.
- fit_score_model / try_fit_score_model:
    RegressionModel over study hours, attendance and past score.
- model_diagnostics:
    Fitted values and residuals per student.
- classify_by_residual:
    Label over-/under-performing students based on residual quantiles.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from constants import (
    COL_ID,
    EQUATION_DECIMALS,
    EQUATION_SYMBOLS,
    MIN_OBSERVATIONS,
    PREDICTOR_COLUMNS,
    PREDICTOR_NAMES,
    SOURCE_HEADERS,
    TARGET_COLUMN,
)
from records import StudentDataset, StudentRecord

logger = logging.getLogger(__name__)

# Pivot magnitudes below this fraction of the largest |X'X| entry are
# treated as zero (matrix singular to working precision).
SINGULAR_TOLERANCE = 1e-10

# Column-scaled X'X with a larger 2-norm condition number is near-singular:
# coefficients would carry fewer than ~4 correct significant digits.
MAX_CONDITION_NUMBER = 1e12


class DegenerateModelError(ValueError):
    """The normal equations have no unique solution."""


@dataclass(frozen=True)
class RegressionModel:
    """
    Fitted linear model: Score = intercept + sum(coef * predictor).

    Coefficients are kept at full precision; only ``equation`` rounds.
    Predictions are not clamped to the score range. ``coefficients`` is a
    read-only mapping, so models are hashable and safe to cache.
    """
    coefficients: Mapping[str, float]
    intercept: float
    r_squared: float
    n_observations: int
    decimals: int = EQUATION_DECIMALS

    def __post_init__(self):
        object.__setattr__(self, "coefficients", MappingProxyType(dict(self.coefficients)))

    def __hash__(self):
        return hash((
            frozenset(self.coefficients.items()),
            self.intercept,
            self.r_squared,
            self.n_observations,
            self.decimals,
        ))

    @property
    def equation(self) -> str:
        d = self.decimals
        parts = [f"Score = {self.intercept:.{d}f}"]
        for name, symbol in zip(PREDICTOR_NAMES, EQUATION_SYMBOLS):
            coef = self.coefficients[name]
            sign = "-" if coef < 0 else "+"
            parts.append(f"{sign} {abs(coef):.{d}f}·{symbol}")
        return " ".join(parts)

    def predict(self, study_hours: float, attendance_rate: float, past_exam_score: float) -> float:
        values = (study_hours, attendance_rate, past_exam_score)
        return self.intercept + sum(
            self.coefficients[name] * v for name, v in zip(PREDICTOR_NAMES, values)
        )

    def predict_record(self, record: StudentRecord) -> float:
        return self.predict(
            record.study_hours_per_week,
            record.attendance_rate,
            record.past_exam_scores,
        )


# ---------- Data preparation ---------- #

def prepare_modelling_data(dataset: StudentDataset) -> Tuple[pd.DataFrame, pd.Series]:
    """
    Prepare X and y for OLS regression.

    Returns
    -------
    X : DataFrame (n x 4)
        Columns 'const', then the predictor display names.
    y : Series (n,)
        Final exam scores.
    """
    X = pd.DataFrame({"const": np.ones(len(dataset))})
    for col, name in zip(PREDICTOR_COLUMNS, PREDICTOR_NAMES):
        X[name] = dataset.column(col)
    y = pd.Series(dataset.column(TARGET_COLUMN), name=TARGET_COLUMN)
    return X, y


# ---------- Linear algebra ---------- #

def solve_linear_system(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Solve A x = b by Gaussian elimination with partial pivoting.

    Raises DegenerateModelError when a pivot vanishes relative to the
    largest entry of A.
    """
    A = np.array(A, dtype=float)
    b = np.array(b, dtype=float).reshape(-1)
    n = A.shape[0]

    scale = np.max(np.abs(A)) if A.size else 0.0
    if scale == 0:
        raise DegenerateModelError("Normal matrix is all zeros")
    tol = SINGULAR_TOLERANCE * scale

    for k in range(n):
        pivot_row = k + int(np.argmax(np.abs(A[k:, k])))
        if abs(A[pivot_row, k]) <= tol:
            raise DegenerateModelError(f"Singular normal matrix at column {k}")
        if pivot_row != k:
            A[[k, pivot_row]] = A[[pivot_row, k]]
            b[[k, pivot_row]] = b[[pivot_row, k]]
        for i in range(k + 1, n):
            factor = A[i, k] / A[k, k]
            A[i, k:] -= factor * A[k, k:]
            b[i] -= factor * b[k]

    # Back substitution
    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        x[i] = (b[i] - A[i, i + 1:] @ x[i + 1:]) / A[i, i]
    return x


# ---------- OLS using NumPy ---------- #

def run_ols_regression(X: pd.DataFrame, y: pd.Series) -> Dict[str, object]:
    """
    Run OLS regression through the normal equations.

    Columns of X are rescaled by their largest magnitude before forming
    X'X so the singularity tolerance is independent of predictor units.
    A scaled X'X whose condition number exceeds MAX_CONDITION_NUMBER is
    rejected as near-singular.

    Returns a dict with:
    - beta: Series of coefficients (indexed by X columns)
    - y_hat: Series of fitted values
    - residuals: Series of residuals
    - r2: float R-squared (0.0 when y has zero variance)
    - n: int number of observations
    - k: int number of parameters
    """
    X_mat = X.values.astype(float)
    y_vec = y.values.astype(float)
    n, k = X_mat.shape

    if n < k:
        raise DegenerateModelError(f"{n} observations for {k} parameters")
    if np.unique(X_mat, axis=0).shape[0] < k:
        raise DegenerateModelError("Fewer distinct predictor rows than parameters")

    col_scale = np.max(np.abs(X_mat), axis=0)
    if np.any(col_scale == 0):
        raise DegenerateModelError("Predictor column is identically zero")
    X_scaled = X_mat / col_scale

    # (X'X) beta = X'y
    XtX = X_scaled.T @ X_scaled
    condition = np.linalg.cond(XtX)
    if not np.isfinite(condition) or condition > MAX_CONDITION_NUMBER:
        raise DegenerateModelError(
            f"Normal matrix is near-singular (condition number {condition:.3g})"
        )
    XtY = X_scaled.T @ y_vec
    beta = solve_linear_system(XtX, XtY) / col_scale

    y_hat = X_mat @ beta
    residuals = y_vec - y_hat

    ssr = float(residuals @ residuals)
    centred = y_vec - y_vec.mean()
    sst = float(centred @ centred)
    r2 = 1.0 - ssr / sst if sst > 0 else 0.0

    return {
        "beta": pd.Series(beta, index=X.columns, name="coef"),
        "y_hat": pd.Series(y_hat, index=X.index, name="fitted"),
        "residuals": pd.Series(residuals, index=X.index, name="residual"),
        "r2": r2,
        "n": n,
        "k": k,
    }


def fit_score_model(dataset: StudentDataset, decimals: int = EQUATION_DECIMALS) -> RegressionModel:
    """
    Fit final exam score on study hours, attendance and past score.

    Raises DegenerateModelError for fewer than four observations or a
    singular design (constant or collinear predictors).
    """
    if len(dataset) < MIN_OBSERVATIONS:
        raise DegenerateModelError(
            f"Need at least {MIN_OBSERVATIONS} records, got {len(dataset)}"
        )

    X, y = prepare_modelling_data(dataset)
    results = run_ols_regression(X, y)
    beta = results["beta"]

    return RegressionModel(
        coefficients={name: float(beta[name]) for name in PREDICTOR_NAMES},
        intercept=float(beta["const"]),
        r_squared=float(results["r2"]),
        n_observations=int(results["n"]),
        decimals=decimals,
    )


def try_fit_score_model(
    dataset: StudentDataset,
    decimals: int = EQUATION_DECIMALS,
) -> Optional[RegressionModel]:
    """fit_score_model, or None ("no prediction available") when degenerate."""
    try:
        return fit_score_model(dataset, decimals=decimals)
    except DegenerateModelError as exc:
        logger.warning("Regression model unavailable: %s", exc)
        return None


# ---------- Diagnostics ---------- #

def model_diagnostics(model: RegressionModel, dataset: StudentDataset) -> pd.DataFrame:
    """
    Per-student fitted values and residuals under ``model``.

    Columns: Student_ID, Final_Exam_Score, fitted, residual.
    """
    fitted = [model.predict_record(r) for r in dataset]
    actual = dataset.column(TARGET_COLUMN)
    return pd.DataFrame({
        SOURCE_HEADERS[COL_ID]: dataset.values(COL_ID),
        SOURCE_HEADERS[TARGET_COLUMN]: actual,
        "fitted": np.asarray(fitted, dtype=float),
        "residual": actual - np.asarray(fitted, dtype=float),
    })


def classify_by_residual(
    diagnostics: pd.DataFrame,
    high_quantile: float = 0.9,
    low_quantile: float = 0.1,
) -> pd.DataFrame:
    """
    Label students as 'over-performing' or 'under-performing' based on
    residual quantiles.

    Parameters
    ----------
    diagnostics : DataFrame
        Output of model_diagnostics.
    high_quantile, low_quantile : float
        Thresholds to classify residuals.

    Returns
    -------
    DataFrame with Student_ID, residual, performance_flag, sorted by
    residual descending.
    """
    id_col = SOURCE_HEADERS[COL_ID]
    diag_df = diagnostics.copy()
    if diag_df.empty:
        return diag_df.assign(performance_flag=pd.Series(dtype=object))[
            [id_col, "residual", "performance_flag"]
        ]

    high_thr = diag_df["residual"].quantile(high_quantile)
    low_thr = diag_df["residual"].quantile(low_quantile)

    conditions = [
        diag_df["residual"] >= high_thr,
        diag_df["residual"] <= low_thr,
    ]
    choices = ["over-performing", "under-performing"]
    diag_df["performance_flag"] = np.select(conditions, choices, default="as-expected")

    return diag_df[[id_col, "residual", "performance_flag"]].sort_values(
        "residual", ascending=False
    )
