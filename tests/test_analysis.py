from analysis import build_analysis
from config import AnalysisConfig
from helpers import HEADER, csv_text


def test_build_analysis(sample_text):
    result = build_analysis(sample_text, AnalysisConfig(digest_sample_size=2))
    assert len(result.dataset) == 6
    assert result.cleaning.kept == 6
    assert result.model is not None
    assert result.model.n_observations == 6
    assert result.stats.total == 6
    assert '"Student_ID": "S2"' in result.digest
    assert '"Student_ID": "S3"' not in result.digest


def test_build_analysis_lenient_keeps_unparsable_rows(sample_text):
    text = sample_text + "S7,Male,??,80,70,PhD,Yes,No,60,Pass\n"
    assert len(build_analysis(text, AnalysisConfig()).dataset) == 6
    assert len(build_analysis(text, AnalysisConfig(strict=False)).dataset) == 7


def test_build_analysis_empty_input_degrades():
    result = build_analysis(HEADER + "\n", AnalysisConfig())
    assert len(result.dataset) == 0
    assert result.model is None
    assert result.stats is None
    assert "Total Students: 0" in result.digest


def test_build_analysis_reads_environment(monkeypatch):
    monkeypatch.setenv("STUDENT_ANALYTICS_DECIMALS", "1")
    text = csv_text(
        "S1,Male,10,60,50,PhD,Yes,No,50,Pass",
        "S2,Male,20,85,55,PhD,Yes,No,40,Pass",
        "S3,Male,30,70,80,PhD,Yes,No,70,Pass",
        "S4,Male,40,95,70,PhD,Yes,No,60,Pass",
        "S5,Male,25,75,65,PhD,Yes,No,58,Pass",
    )
    result = build_analysis(text)
    assert result.model.decimals == 1
