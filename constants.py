"""
constants.py

Fixed schema and display constants for the student analytics core.

Column names are the snake_case forms of the source dataset headers
(``Student_ID`` -> ``student_id``); ``SOURCE_HEADERS`` maps them back for
frames handed to the display layer.
"""

from typing import Dict, List, Tuple


# ---------- Columns ---------- #

COL_ID = "student_id"
COL_GENDER = "gender"
COL_STUDY_HOURS = "study_hours_per_week"
COL_ATTENDANCE = "attendance_rate"
COL_PAST_SCORE = "past_exam_scores"
COL_PARENT_EDU = "parental_education_level"
COL_INTERNET = "internet_access_at_home"
COL_EXTRACURRICULAR = "extracurricular_activities"
COL_FINAL_SCORE = "final_exam_score"
COL_PASS_FAIL = "pass_fail"

REQUIRED_COLUMNS: List[str] = [
    COL_ID,
    COL_GENDER,
    COL_STUDY_HOURS,
    COL_ATTENDANCE,
    COL_PAST_SCORE,
    COL_PARENT_EDU,
    COL_INTERNET,
    COL_EXTRACURRICULAR,
    COL_FINAL_SCORE,
    COL_PASS_FAIL,
]

NUMERIC_COLUMNS: List[str] = [
    COL_STUDY_HOURS,
    COL_ATTENDANCE,
    COL_PAST_SCORE,
    COL_FINAL_SCORE,
]

SOURCE_HEADERS: Dict[str, str] = {
    COL_ID: "Student_ID",
    COL_GENDER: "Gender",
    COL_STUDY_HOURS: "Study_Hours_per_Week",
    COL_ATTENDANCE: "Attendance_Rate",
    COL_PAST_SCORE: "Past_Exam_Scores",
    COL_PARENT_EDU: "Parental_Education_Level",
    COL_INTERNET: "Internet_Access_at_Home",
    COL_EXTRACURRICULAR: "Extracurricular_Activities",
    COL_FINAL_SCORE: "Final_Exam_Score",
    COL_PASS_FAIL: "Pass_Fail",
}

# Standardised header -> canonical column. Covers the record attribute
# vocabulary (camelCase, split by the header standardiser) and short forms.
HEADER_ALIASES: Dict[str, str] = {
    "id": COL_ID,
    "student": COL_ID,
    "study_hours": COL_STUDY_HOURS,
    "study_hours_per_week": COL_STUDY_HOURS,
    "attendance": COL_ATTENDANCE,
    "past_exam_score": COL_PAST_SCORE,
    "past_score": COL_PAST_SCORE,
    "parental_education": COL_PARENT_EDU,
    "internet_access": COL_INTERNET,
    "extracurricular": COL_EXTRACURRICULAR,
    "final_score": COL_FINAL_SCORE,
}


# ---------- Vocabularies ---------- #

GENDERS: Tuple[str, ...] = ("Male", "Female")
YES_NO: Tuple[str, ...] = ("Yes", "No")
PASS_FAIL: Tuple[str, ...] = ("Pass", "Fail")

ENUM_VOCABULARIES: Dict[str, Tuple[str, ...]] = {
    COL_GENDER: GENDERS,
    COL_INTERNET: YES_NO,
    COL_EXTRACURRICULAR: YES_NO,
    COL_PASS_FAIL: PASS_FAIL,
}

MISSING_SENTINELS = frozenset({"", "na", "n/a", "nan", "null", "none", "-", "?"})


# ---------- Regression ---------- #

PREDICTOR_COLUMNS: List[str] = [COL_STUDY_HOURS, COL_ATTENDANCE, COL_PAST_SCORE]
TARGET_COLUMN = COL_FINAL_SCORE

PREDICTOR_NAMES: List[str] = ["Study Hours", "Attendance", "Past Scores"]
EQUATION_SYMBOLS: List[str] = ["StudyHours", "Attendance", "PastScore"]

MIN_OBSERVATIONS = len(PREDICTOR_COLUMNS) + 1


# ---------- Display ---------- #

EQUATION_DECIMALS = 2
DIGEST_SAMPLE_SIZE = 5
SCORE_RANGE: Tuple[float, float] = (0.0, 100.0)
STUDY_HOURS_SCALE = 40.0

CORRELATION_LABELS: Dict[str, str] = {
    COL_STUDY_HOURS: "Study Hrs",
    COL_ATTENDANCE: "Attendance",
    COL_PAST_SCORE: "Past Score",
    COL_FINAL_SCORE: "Final Score",
}
