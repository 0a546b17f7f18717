"""
cleaning.py

Record sanitiser: raw delimited text -> deduplicated StudentDataset.

- standardise_columns:
    snake_case header names and map aliases onto the canonical schema.
- ensure_numeric:
    Coerce numeric columns, turning missing sentinels / junk into NaN.
- sanitise_records_with_report:
    Full pipeline, returning the dataset and a CleaningReport.
- sanitise_records:
    Same, dataset only.

Malformed rows are dropped and counted, never raised. Duplicates are
rows equal in every parsed field; rows sharing only an id are kept.
"""

import csv
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from constants import HEADER_ALIASES, MISSING_SENTINELS, NUMERIC_COLUMNS, REQUIRED_COLUMNS
from records import MalformedRecordError, StudentDataset, StudentRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleaningReport:
    rows_read: int = 0
    malformed: int = 0
    duplicates: int = 0
    kept: int = 0


# ---------- Helpers ---------- #

def detect_delimiter(sample_line: str) -> str:
    """Priority: tab -> semicolon -> comma."""
    if "\t" in sample_line:
        return "\t"
    if ";" in sample_line:
        return ";"
    return ","


def standardise_columns(df: pd.DataFrame) -> pd.DataFrame:
    """snake_case column names (camelCase split) and resolve aliases."""
    df = df.copy()
    df.columns = (
        df.columns
        .astype(str)
        .str.strip()
        .str.replace(r"(?<=[a-z0-9])(?=[A-Z])", "_", regex=True)
        .str.lower()
        .str.replace(r"[^\w]+", "_", regex=True)
        .str.replace("__+", "_", regex=True)
        .str.strip("_")
    )
    df.columns = [HEADER_ALIASES.get(c, c) for c in df.columns]
    # First occurrence wins when two headers resolve to the same column.
    return df.loc[:, ~df.columns.duplicated()]


def ensure_numeric(df: pd.DataFrame, cols: List[str]) -> pd.DataFrame:
    df = df.copy()
    for c in cols:
        if c in df.columns:
            missing = df[c].astype(str).str.strip().str.lower().isin(MISSING_SENTINELS)
            df[c] = pd.to_numeric(df[c].where(~missing, np.nan), errors="coerce")
    return df


def _split_line(line: str, delimiter: str) -> List[str]:
    """Split one line with csv quoting rules; raises csv.Error on bad quoting or oversized fields."""
    rows = list(csv.reader([line], delimiter=delimiter))
    return rows[0] if rows else []


def _read_table(text: str, delimiter: Optional[str]) -> Tuple[pd.DataFrame, int]:
    """Split text into a frame of string cells; returns (frame, unreadable or wrong-width rows)."""
    # splitlines() accepts \n, \r\n and bare \r line endings.
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return pd.DataFrame(), 0

    delimiter = delimiter or detect_delimiter(lines[0])
    try:
        header = _split_line(lines[0], delimiter)
    except csv.Error as exc:
        logger.warning("Unreadable header row: %s", exc)
        return pd.DataFrame(), len(lines) - 1

    rows: List[List[str]] = []
    bad = 0
    for row_no, line in enumerate(lines[1:], start=1):
        try:
            fields = _split_line(line, delimiter)
        except csv.Error as exc:
            logger.debug("Data row %d dropped: %s", row_no, exc)
            bad += 1
            continue
        if len(fields) != len(header):
            logger.debug("Data row %d dropped: %d fields, expected %d", row_no, len(fields), len(header))
            bad += 1
            continue
        rows.append(fields)
    return pd.DataFrame(rows, columns=header, dtype=object), bad


# ---------- Pipeline ---------- #

def sanitise_records_with_report(
    text: str,
    strict: bool = True,
    delimiter: Optional[str] = None,
) -> Tuple[StudentDataset, CleaningReport]:
    """
    Parse header-plus-rows delimited text into a StudentDataset.

    Parameters
    ----------
    text : str
        Raw delimited text; the first non-blank line names the columns.
    strict : bool
        True drops rows with missing/unparsable numerics; False imputes 0.0.
    delimiter : str, optional
        Field delimiter; auto-detected from the header when omitted.

    Returns
    -------
    dataset : StudentDataset
        Valid, deduplicated records in source order.
    report : CleaningReport
    """
    if not text or not text.strip():
        return StudentDataset(), CleaningReport()

    df, bad_width = _read_table(text.lstrip("\ufeff"), delimiter)
    rows_read = len(df) + bad_width
    if df.empty:
        report = CleaningReport(rows_read=rows_read, malformed=bad_width)
        return StudentDataset(), report

    df = standardise_columns(df)
    missing_cols = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing_cols:
        logger.warning("Missing expected columns %s; no rows accepted", missing_cols)
        report = CleaningReport(rows_read=rows_read, malformed=rows_read)
        return StudentDataset(), report

    df = df[REQUIRED_COLUMNS].apply(lambda s: s.str.strip())
    df = ensure_numeric(df, NUMERIC_COLUMNS)

    malformed = bad_width
    duplicates = 0
    seen = set()
    kept: List[StudentRecord] = []
    for row_no, row in enumerate(df.to_dict("records"), start=1):
        try:
            record = StudentRecord.from_row(row, strict=strict)
        except MalformedRecordError as exc:
            logger.debug("Data row %d dropped: %s", row_no, exc)
            malformed += 1
            continue
        if record in seen:
            duplicates += 1
            continue
        seen.add(record)
        kept.append(record)

    report = CleaningReport(
        rows_read=rows_read,
        malformed=malformed,
        duplicates=duplicates,
        kept=len(kept),
    )
    logger.info(
        "Sanitised %d rows: %d kept, %d malformed, %d duplicates",
        report.rows_read, report.kept, report.malformed, report.duplicates,
    )
    return StudentDataset(kept), report


def sanitise_records(
    text: str,
    strict: bool = True,
    delimiter: Optional[str] = None,
) -> StudentDataset:
    """Parse delimited text into a StudentDataset (see sanitise_records_with_report)."""
    dataset, _ = sanitise_records_with_report(text, strict=strict, delimiter=delimiter)
    return dataset
