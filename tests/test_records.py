import numpy as np
import pytest

from helpers import make_record
from records import MalformedRecordError, StudentDataset, StudentRecord


def _row(**overrides):
    row = {
        "student_id": "S1",
        "gender": "Female",
        "study_hours_per_week": "12.5",
        "attendance_rate": "90",
        "past_exam_scores": "77",
        "parental_education_level": "PhD",
        "internet_access_at_home": "Yes",
        "extracurricular_activities": "No",
        "final_exam_score": "81",
        "pass_fail": "Pass",
    }
    row.update(overrides)
    return row


def test_from_row_parses_strings():
    record = StudentRecord.from_row(_row())
    assert record.study_hours_per_week == 12.5
    assert record.final_exam_score == 81.0
    assert record.passed


def test_from_row_rejects_non_finite_in_both_modes():
    for value in ["inf", "-inf", float("inf")]:
        with pytest.raises(MalformedRecordError):
            StudentRecord.from_row(_row(attendance_rate=value))
        with pytest.raises(MalformedRecordError):
            StudentRecord.from_row(_row(attendance_rate=value), strict=False)


def test_from_row_missing_numeric_depends_on_mode():
    with pytest.raises(MalformedRecordError):
        StudentRecord.from_row(_row(final_exam_score=None))
    assert StudentRecord.from_row(_row(final_exam_score=float("nan")), strict=False).final_exam_score == 0.0


def test_from_row_rejects_missing_id():
    with pytest.raises(MalformedRecordError):
        StudentRecord.from_row(_row(student_id="  "))


def test_to_source_dict_uses_source_headers():
    data = make_record().to_source_dict()
    assert data["Student_ID"] == "S1"
    assert data["Study_Hours_per_Week"] == 10.0
    assert data["Pass_Fail"] == "Pass"


def test_dataset_is_immutable_sequence():
    records = [make_record("S1"), make_record("S2")]
    dataset = StudentDataset(records)
    records.append(make_record("S3"))
    assert len(dataset) == 2
    assert isinstance(dataset.records, tuple)
    with pytest.raises(AttributeError):
        dataset.records = ()
    assert [r.student_id for r in dataset] == ["S1", "S2"]
    assert dataset[1].student_id == "S2"


def test_column_and_values():
    dataset = StudentDataset([make_record("S1", study=3), make_record("S2", study=7)])
    np.testing.assert_array_equal(dataset.column("study_hours_per_week"), [3.0, 7.0])
    assert dataset.values("student_id") == ["S1", "S2"]
    assert StudentDataset().column("final_exam_score").size == 0
    with pytest.raises(KeyError):
        dataset.column("gender")


def test_to_frame_has_source_headers():
    frame = StudentDataset([make_record()]).to_frame()
    assert list(frame.columns)[:3] == ["Student_ID", "Gender", "Study_Hours_per_Week"]
    assert frame.loc[0, "Final_Exam_Score"] == 75.0
    assert StudentDataset().to_frame().empty


def test_find_sample_head():
    dataset = StudentDataset([make_record("S1", final=50), make_record("S2"), make_record("S1", final=60)])
    assert dataset.find("S1").final_exam_score == 50.0
    assert dataset.find("S9") is None
    assert [r.student_id for r in dataset.sample([2, 0])] == ["S1", "S1"]
    assert len(dataset.head(2)) == 2
    assert dataset.head(-1) == []


def test_filter_and_search():
    dataset = StudentDataset([
        make_record("S101", gender="Male", education="PhD"),
        make_record("S102", gender="Female", education="PhD"),
        make_record("T200", gender="Female", education="Masters"),
    ])
    assert [r.student_id for r in dataset.filter(gender="Female")] == ["S102", "T200"]
    assert [r.student_id for r in dataset.filter(gender="All", education="PhD")] == ["S101", "S102"]
    assert [r.student_id for r in dataset.search("s10")] == ["S101", "S102"]
    assert len(dataset.search("s10", limit=1)) == 1
    assert dataset.search("") == []
    assert dataset.education_levels() == ["PhD", "Masters"]
