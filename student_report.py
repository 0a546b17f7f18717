"""
student_report.py

Individual student report: percentile standing, a radar profile and a
"what if" simulation of study hours / attendance through the fitted
regression model.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from constants import COL_FINAL_SCORE, COL_STUDY_HOURS, SCORE_RANGE, STUDY_HOURS_SCALE
from descriptive import percentile_rank
from modelling import RegressionModel
from records import StudentDataset, StudentRecord


class StudentNotFoundError(LookupError):
    """No record with the requested student id."""


@dataclass(frozen=True)
class StudentReport:
    record: StudentRecord
    score_percentile: int
    study_percentile: int
    radar: Dict[str, float]
    predicted_score: Optional[float] = None
    improvement: Optional[float] = None


def clamp_score(score: float) -> float:
    low, high = SCORE_RANGE
    return min(high, max(low, score))


def radar_profile(record: StudentRecord) -> Dict[str, float]:
    """Profile values on an approximate 0-100 scale."""
    return {
        "Study Hrs": record.study_hours_per_week / STUDY_HOURS_SCALE * 100.0,
        "Attendance": record.attendance_rate,
        "Past Score": record.past_exam_scores,
        "Final Score": record.final_exam_score,
    }


def build_student_report(
    dataset: StudentDataset,
    student_id: str,
    model: Optional[RegressionModel] = None,
    study_hours: Optional[float] = None,
    attendance_rate: Optional[float] = None,
) -> StudentReport:
    """
    Report for ``student_id`` against the whole dataset.

    ``study_hours`` / ``attendance_rate`` override the student's own values
    for the simulation and default to them. ``predicted_score`` is clamped
    to the score range; ``improvement`` is the unclamped change relative to
    the model's prediction for the unchanged record. Both are None without
    a model.
    """
    record = dataset.find(student_id)
    if record is None:
        raise StudentNotFoundError(student_id)

    scores = np.sort(dataset.column(COL_FINAL_SCORE))
    hours = np.sort(dataset.column(COL_STUDY_HOURS))

    predicted = improvement = None
    if model is not None:
        sim_study = record.study_hours_per_week if study_hours is None else study_hours
        sim_attendance = record.attendance_rate if attendance_rate is None else attendance_rate
        simulated = model.predict(sim_study, sim_attendance, record.past_exam_scores)
        predicted = clamp_score(simulated)
        improvement = simulated - model.predict_record(record)

    return StudentReport(
        record=record,
        score_percentile=percentile_rank(record.final_exam_score, scores),
        study_percentile=percentile_rank(record.study_hours_per_week, hours),
        radar=radar_profile(record),
        predicted_score=predicted,
        improvement=improvement,
    )
