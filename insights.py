"""
insights.py

Dashboard figures and the dataset digest handed to the external
language-model collaborator. Everything here is plain data; formatting
beyond ``format_digest`` belongs to the display layer.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from constants import (
    COL_FINAL_SCORE,
    COL_PAST_SCORE,
    COL_STUDY_HOURS,
    DIGEST_SAMPLE_SIZE,
    GENDERS,
    REQUIRED_COLUMNS,
    SOURCE_HEADERS,
)
from correlation import pearson_correlation
from descriptive import mean, pass_rate
from records import StudentDataset


@dataclass(frozen=True)
class DashboardStats:
    total: int
    pass_count: int
    pass_rate: float
    average_score: float
    average_study_hours: float
    past_final_correlation: float
    internet_pass_rate_gap: float


@dataclass(frozen=True)
class DatasetDigest:
    total: int
    pass_count: int
    pass_rate: float
    average_score: float
    columns: List[str] = field(default_factory=list)
    sample: List[dict] = field(default_factory=list)


def internet_pass_rate_gap(dataset: StudentDataset) -> float:
    """Pass rate with home internet minus without; 0.0 if either group is empty."""
    with_internet = StudentDataset([r for r in dataset if r.internet_access_at_home == "Yes"])
    without = StudentDataset([r for r in dataset if r.internet_access_at_home == "No"])
    if with_internet.is_empty or without.is_empty:
        return 0.0
    return pass_rate(with_internet) - pass_rate(without)


def dashboard_stats(dataset: StudentDataset) -> Optional[DashboardStats]:
    """Headline figures; None for an empty dataset (nothing to show yet)."""
    if dataset.is_empty:
        return None
    return DashboardStats(
        total=len(dataset),
        pass_count=sum(1 for r in dataset if r.passed),
        pass_rate=pass_rate(dataset),
        average_score=mean(dataset.column(COL_FINAL_SCORE)),
        average_study_hours=mean(dataset.column(COL_STUDY_HOURS)),
        past_final_correlation=pearson_correlation(
            dataset.column(COL_PAST_SCORE), dataset.column(COL_FINAL_SCORE)
        ),
        internet_pass_rate_gap=internet_pass_rate_gap(dataset),
    )


def pass_counts_by_gender(dataset: StudentDataset) -> Dict[str, Dict[str, int]]:
    counts = {g: {"Pass": 0, "Fail": 0} for g in GENDERS}
    for record in dataset:
        counts[record.gender][record.pass_fail] += 1
    return counts


# ---------- Digest ---------- #

def dataset_digest(dataset: StudentDataset, sample_size: int = DIGEST_SAMPLE_SIZE) -> DatasetDigest:
    return DatasetDigest(
        total=len(dataset),
        pass_count=sum(1 for r in dataset if r.passed),
        pass_rate=pass_rate(dataset),
        average_score=mean(dataset.column(COL_FINAL_SCORE)),
        columns=[SOURCE_HEADERS[c] for c in REQUIRED_COLUMNS],
        sample=[r.to_source_dict() for r in dataset.head(sample_size)],
    )


def format_digest(digest: DatasetDigest) -> str:
    """Compact text form of the digest for a prompt."""
    return "\n".join([
        "Dataset Summary:",
        f"Total Students: {digest.total}",
        f"Pass Rate: {digest.pass_rate:.1f}%",
        f"Average Final Score: {digest.average_score:.1f}",
        "",
        f"Columns: {', '.join(digest.columns)}.",
        "",
        "Sample Data JSON:",
        json.dumps(digest.sample),
    ])
