import json

import pytest

from helpers import make_record
from insights import (
    dashboard_stats,
    dataset_digest,
    format_digest,
    internet_pass_rate_gap,
    pass_counts_by_gender,
)
from records import StudentDataset


def test_dashboard_stats(sample_dataset):
    stats = dashboard_stats(sample_dataset)
    assert stats.total == 6
    assert stats.pass_count == 4
    assert stats.pass_rate == pytest.approx(400 / 6)
    assert stats.average_score == pytest.approx((72 + 88 + 41 + 69 + 35 + 95) / 6)
    assert stats.average_study_hours == pytest.approx(15.0)
    assert stats.past_final_correlation > 0.9
    # With internet: S1, S2, S5, S6 -> 3/4 pass; without: S3, S4 -> 1/2
    assert stats.internet_pass_rate_gap == pytest.approx(25.0)


def test_dashboard_stats_empty():
    assert dashboard_stats(StudentDataset()) is None


def test_internet_gap_zero_when_group_missing():
    dataset = StudentDataset([make_record("S1", internet="Yes"), make_record("S2", internet="Yes")])
    assert internet_pass_rate_gap(dataset) == 0.0


def test_pass_counts_by_gender(sample_dataset):
    assert pass_counts_by_gender(sample_dataset) == {
        "Male": {"Pass": 2, "Fail": 1},
        "Female": {"Pass": 2, "Fail": 1},
    }


def test_digest_samples_head(sample_dataset):
    digest = dataset_digest(sample_dataset, sample_size=2)
    assert digest.total == 6
    assert digest.pass_count == 4
    assert [s["Student_ID"] for s in digest.sample] == ["S1", "S2"]
    assert digest.columns[0] == "Student_ID"
    assert digest.columns[-1] == "Pass_Fail"


def test_format_digest(sample_dataset):
    text = format_digest(dataset_digest(sample_dataset, sample_size=1))
    assert "Total Students: 6" in text
    assert "Pass Rate: 66.7%" in text
    assert "Average Final Score: 66.7" in text
    sample = json.loads(text.splitlines()[-1])
    assert sample[0]["Student_ID"] == "S1"


def test_digest_of_empty_dataset():
    digest = dataset_digest(StudentDataset())
    assert (digest.total, digest.pass_rate, digest.average_score, digest.sample) == (0, 0.0, 0.0, [])
    assert "Total Students: 0" in format_digest(digest)
