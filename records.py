"""
records.py

Typed student records and the immutable dataset handed to every consumer.

- StudentRecord.from_row:
    Validate one parsed row; raises MalformedRecordError on bad data.
- StudentDataset:
    Read-only ordered collection with column access, lookup, filtering
    and a pandas view for the display layer.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from constants import (
    COL_ATTENDANCE,
    COL_EXTRACURRICULAR,
    COL_FINAL_SCORE,
    COL_GENDER,
    COL_ID,
    COL_INTERNET,
    COL_PARENT_EDU,
    COL_PASS_FAIL,
    COL_PAST_SCORE,
    COL_STUDY_HOURS,
    ENUM_VOCABULARIES,
    MISSING_SENTINELS,
    NUMERIC_COLUMNS,
    REQUIRED_COLUMNS,
    SOURCE_HEADERS,
)


class MalformedRecordError(ValueError):
    """A single input row failed type or vocabulary validation."""


# ---------- Field coercion ---------- #

def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() in MISSING_SENTINELS
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _coerce_number(column: str, value: object, strict: bool) -> float:
    """Parse a numeric cell; missing/unparsable -> error (strict) or 0.0."""
    if _is_missing(value):
        number = None
    else:
        try:
            number = float(value.strip() if isinstance(value, str) else value)
        except (TypeError, ValueError):
            number = None
        if number is not None and math.isnan(number):
            number = None

    if number is None:
        if strict:
            raise MalformedRecordError(f"{column}: unparsable or missing value {value!r}")
        return 0.0
    if not math.isfinite(number):
        raise MalformedRecordError(f"{column}: non-finite value {value!r}")
    return number


def _coerce_enum(column: str, value: object) -> str:
    text = "" if _is_missing(value) else str(value).strip()
    for allowed in ENUM_VOCABULARIES[column]:
        if text.lower() == allowed.lower():
            return allowed
    raise MalformedRecordError(f"{column}: unrecognised value {value!r}")


# ---------- Record ---------- #

@dataclass(frozen=True)
class StudentRecord:
    """One row of the cleaned dataset.

    ``pass_fail`` is the stored label from the source data; it is never
    recomputed from ``final_exam_score``.
    """
    student_id: str
    gender: str
    study_hours_per_week: float
    attendance_rate: float
    past_exam_scores: float
    parental_education_level: str
    internet_access_at_home: str
    extracurricular_activities: str
    final_exam_score: float
    pass_fail: str

    @classmethod
    def from_row(cls, row: Mapping[str, object], strict: bool = True) -> "StudentRecord":
        """
        Build a record from a mapping keyed by canonical column names.

        With ``strict=False`` missing or unparsable numerics become 0.0;
        enum, id and non-finite checks apply in both modes.
        """
        raw_id = row.get(COL_ID)
        student_id = "" if _is_missing(raw_id) else str(raw_id).strip()
        if not student_id:
            raise MalformedRecordError(f"{COL_ID}: empty identifier")

        numbers = {c: _coerce_number(c, row.get(c), strict) for c in NUMERIC_COLUMNS}
        if numbers[COL_STUDY_HOURS] < 0:
            raise MalformedRecordError(
                f"{COL_STUDY_HOURS}: negative value {numbers[COL_STUDY_HOURS]}"
            )

        education = row.get(COL_PARENT_EDU)
        return cls(
            student_id=student_id,
            gender=_coerce_enum(COL_GENDER, row.get(COL_GENDER)),
            study_hours_per_week=numbers[COL_STUDY_HOURS],
            attendance_rate=numbers[COL_ATTENDANCE],
            past_exam_scores=numbers[COL_PAST_SCORE],
            parental_education_level="" if _is_missing(education) else str(education).strip(),
            internet_access_at_home=_coerce_enum(COL_INTERNET, row.get(COL_INTERNET)),
            extracurricular_activities=_coerce_enum(
                COL_EXTRACURRICULAR, row.get(COL_EXTRACURRICULAR)
            ),
            final_exam_score=numbers[COL_FINAL_SCORE],
            pass_fail=_coerce_enum(COL_PASS_FAIL, row.get(COL_PASS_FAIL)),
        )

    @property
    def passed(self) -> bool:
        return self.pass_fail == "Pass"

    def to_source_dict(self) -> dict:
        """Record keyed by the source dataset headers."""
        return {SOURCE_HEADERS[k]: v for k, v in asdict(self).items()}


# ---------- Dataset ---------- #

@dataclass(frozen=True)
class StudentDataset:
    """Immutable, ordered collection of cleaned records.

    Built once per ingestion; a new ingestion yields a new object, so
    results derived from a dataset may be cached against its identity.
    """
    records: Tuple[StudentRecord, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "records", tuple(self.records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[StudentRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> StudentRecord:
        return self.records[index]

    @property
    def is_empty(self) -> bool:
        return not self.records

    def column(self, name: str) -> np.ndarray:
        """Numeric column as a float array (empty array for an empty dataset)."""
        if name not in NUMERIC_COLUMNS:
            raise KeyError(f"Not a numeric column: {name!r}")
        return np.array([getattr(r, name) for r in self.records], dtype=float)

    def values(self, name: str) -> List[object]:
        if name not in REQUIRED_COLUMNS:
            raise KeyError(f"Unknown column: {name!r}")
        return [getattr(r, name) for r in self.records]

    def to_frame(self) -> pd.DataFrame:
        """DataFrame with the source headers, one row per record."""
        df = pd.DataFrame([asdict(r) for r in self.records], columns=REQUIRED_COLUMNS)
        return df.rename(columns=SOURCE_HEADERS)

    def find(self, student_id: str) -> Optional[StudentRecord]:
        """First record with ``student_id`` (ids may repeat, see cleaning)."""
        for record in self.records:
            if record.student_id == student_id:
                return record
        return None

    def sample(self, indices: Sequence[int]) -> List[StudentRecord]:
        return [self.records[i] for i in indices]

    def head(self, n: int) -> List[StudentRecord]:
        return list(self.records[:max(n, 0)])

    def filter(
        self,
        gender: Optional[str] = None,
        education: Optional[str] = None,
    ) -> "StudentDataset":
        """Subset by gender and/or parental education; ``None`` or "All" keeps all."""
        selected = [
            r for r in self.records
            if (gender in (None, "All") or r.gender == gender)
            and (education in (None, "All") or r.parental_education_level == education)
        ]
        return StudentDataset(selected)

    def search(self, text: str, limit: Optional[int] = None) -> List[StudentRecord]:
        """Records whose id contains ``text`` (case-insensitive)."""
        needle = text.strip().lower()
        if not needle:
            return []
        matches = [r for r in self.records if needle in r.student_id.lower()]
        return matches if limit is None else matches[:limit]

    def education_levels(self) -> List[str]:
        """Distinct parental education levels in first-seen order."""
        return list(dict.fromkeys(r.parental_education_level for r in self.records))
