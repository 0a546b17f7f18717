from records import StudentDataset, StudentRecord


HEADER = (
    "Student_ID,Gender,Study_Hours_per_Week,Attendance_Rate,Past_Exam_Scores,"
    "Parental_Education_Level,Internet_Access_at_Home,Extracurricular_Activities,"
    "Final_Exam_Score,Pass_Fail"
)


def csv_text(*rows: str, header: str = HEADER) -> str:
    return "\n".join((header,) + rows) + "\n"


def make_record(
    student_id="S1",
    study=10.0,
    attendance=80.0,
    past=70.0,
    final=75.0,
    gender="Male",
    education="Bachelors",
    internet="Yes",
    extracurricular="No",
    pass_fail="Pass",
) -> StudentRecord:
    return StudentRecord(
        student_id=student_id,
        gender=gender,
        study_hours_per_week=float(study),
        attendance_rate=float(attendance),
        past_exam_scores=float(past),
        parental_education_level=education,
        internet_access_at_home=internet,
        extracurricular_activities=extracurricular,
        final_exam_score=float(final),
        pass_fail=pass_fail,
    )


def linear_dataset(study, attendance, past, noise=None) -> StudentDataset:
    """Records whose final score is 2*study + 0.5*attendance + 0.3*past + 5."""
    noise = noise or [0.0] * len(study)
    records = []
    for i, (s, a, p, e) in enumerate(zip(study, attendance, past, noise)):
        final = 2 * s + 0.5 * a + 0.3 * p + 5 + e
        records.append(make_record(f"S{i + 1}", s, a, p, final))
    return StudentDataset(records)
