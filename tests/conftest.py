import pytest

from cleaning import sanitise_records
from helpers import csv_text


@pytest.fixture
def sample_text():
    return csv_text(
        "S1,Male,10,85,70,Bachelors,Yes,No,72,Pass",
        "S2,Female,25,92,81,Masters,Yes,Yes,88,Pass",
        "S3,Female,5,60,45,High School,No,No,41,Fail",
        "S4,Male,18,75,66,PhD,No,Yes,69,Pass",
        "S5,Male,2,55,38,High School,Yes,No,35,Fail",
        "S6,Female,30,98,90,Bachelors,Yes,Yes,95,Pass",
    )


@pytest.fixture
def sample_dataset(sample_text):
    return sanitise_records(sample_text)
