"""
analysis.py

One-shot assembly of everything the dashboard reads: the cleaned dataset,
the cleaning report, the regression model (or None), headline figures and
the digest text. Built once at startup and passed down read-only.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from cleaning import CleaningReport, sanitise_records_with_report
from config import AnalysisConfig, load_config
from insights import DashboardStats, dashboard_stats, dataset_digest, format_digest
from modelling import RegressionModel, try_fit_score_model
from records import StudentDataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentAnalysis:
    dataset: StudentDataset
    cleaning: CleaningReport
    model: Optional[RegressionModel]
    stats: Optional[DashboardStats]
    digest: str


def build_analysis(text: str, config: Optional[AnalysisConfig] = None) -> StudentAnalysis:
    if config is None:
        config = load_config()

    dataset, report = sanitise_records_with_report(text, strict=config.strict)
    if dataset.is_empty:
        logger.warning("No valid student records after cleaning")

    return StudentAnalysis(
        dataset=dataset,
        cleaning=report,
        model=try_fit_score_model(dataset, decimals=config.equation_decimals),
        stats=dashboard_stats(dataset),
        digest=format_digest(dataset_digest(dataset, sample_size=config.digest_sample_size)),
    )
