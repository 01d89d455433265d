from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import get_db
from main import app
from models.assessments import Assessment as AssessmentModel
from models.attendance import Attendance as AttendanceModel
from models.class_weight_settings import ClassWeightSetting as ClassWeightSettingModel
from models.classes import Class as ClassModel
from models.criteria import Criterion as CriterionModel
from models.criterion_scores import CriterionScore as CriterionScoreModel
from models.students import Student as StudentModel
from models.weight_categories import WeightCategory as WeightCategoryModel
from schemas.gradebook import (
    AssessmentRecord, AttendanceEventRecord, ClassRecord, CriterionRecord, CriterionScoreRecord,
    GradebookSnapshot, StudentRecord, WeightSettingRecord,
)
from scripts.init_db import create_tables

TUGAS, UJIAN = 1, 2
MARCH_1 = date(2025, 3, 1)


def _attendance():
    events = []
    # Ayu: 18 present, 1 sick, 1 unexcused in March, plus one April meeting
    statuses = ["Present"] * 18 + ["Sick", "UnexcusedAbsence"]
    for i, status in enumerate(statuses):
        events.append(AttendanceEventRecord(student_id=1, meeting_date=MARCH_1 + timedelta(days=i), status=status))
    events.append(AttendanceEventRecord(student_id=1, meeting_date=date(2025, 4, 2), status="Present"))
    # Budi: 5 present, 5 excused
    for i in range(10):
        status = "Present" if i < 5 else "ExcusedAbsence"
        events.append(AttendanceEventRecord(student_id=2, meeting_date=MARCH_1 + timedelta(days=i), status=status))
    return events


def build_snapshot() -> GradebookSnapshot:
    """
    Class VII-A:
      Ayu  (1): Tugas 1 = 70%, Ujian Tengah = 70%, Kuis (uncategorized) = 100%
      Budi (2): Tugas 1 = 90% (one criterion ungraded), Ujian Tengah = 90%
      Citra(3): nothing scored
    """
    return GradebookSnapshot(
        class_info=ClassRecord(id=1, class_name="VII-A", term="2024/2025 Genap", teacher_id=1),
        students=[
            StudentRecord(id=1, student_name="Ayu Lestari", external_id="0081234501", class_id=1),
            StudentRecord(id=2, student_name="Budi Santoso", external_id="0081234502", class_id=1),
            StudentRecord(id=3, student_name="Citra Dewi", external_id="0081234503", class_id=1),
        ],
        assessments=[
            AssessmentRecord(id=10, class_id=1, assessment_name="Tugas 1", assessment_date=date(2025, 3, 3),
                             kind="formative", weight_category_id=TUGAS),
            AssessmentRecord(id=20, class_id=1, assessment_name="Ujian Tengah", assessment_date=date(2025, 3, 20),
                             kind="summative", weight_category_id=UJIAN),
            AssessmentRecord(id=30, class_id=1, assessment_name="Kuis", assessment_date=date(2025, 3, 10),
                             kind="formative", weight_category_id=None),
        ],
        criteria=[
            CriterionRecord(id=101, assessment_id=10, description="Ketepatan", max_score=10, order=1),
            CriterionRecord(id=102, assessment_id=10, description="Kerapian", max_score=10, order=2),
            CriterionRecord(id=201, assessment_id=20, description="Pilihan Ganda", max_score=50, order=1),
            CriterionRecord(id=202, assessment_id=20, description="Esai", max_score=50, order=2),
            CriterionRecord(id=301, assessment_id=30, description="Kuis Lisan", max_score=20, order=1),
        ],
        scores=[
            CriterionScoreRecord(student_id=1, criterion_id=101, score=8),
            CriterionScoreRecord(student_id=1, criterion_id=102, score=6),
            CriterionScoreRecord(student_id=1, criterion_id=201, score=40),
            CriterionScoreRecord(student_id=1, criterion_id=202, score=30),
            CriterionScoreRecord(student_id=1, criterion_id=301, score=20),
            CriterionScoreRecord(student_id=2, criterion_id=101, score=9),
            CriterionScoreRecord(student_id=2, criterion_id=201, score=45),
            CriterionScoreRecord(student_id=2, criterion_id=202, score=45),
        ],
        weight_settings=[
            WeightSettingRecord(weight_category_id=TUGAS, weight_percent=40),
            WeightSettingRecord(weight_category_id=UJIAN, weight_percent=60),
        ],
        attendance=_attendance(),
    )


@pytest.fixture
def snapshot():
    return build_snapshot()


# ==========================================================
# [DB] in-memory SQLite seeded with the same snapshot + a second class
# ==========================================================

def seed(db, snap: GradebookSnapshot):
    db.add(ClassModel(**snap.class_info.model_dump()))
    db.add(ClassModel(id=2, class_name="VII-B", term="2024/2025 Genap", teacher_id=1))
    db.add_all([
        WeightCategoryModel(id=TUGAS, category_name="Tugas"),
        WeightCategoryModel(id=UJIAN, category_name="Ujian"),
        WeightCategoryModel(id=3, category_name="Praktik"),
    ])
    db.flush()
    db.add_all([StudentModel(**s.model_dump()) for s in snap.students])
    db.add(StudentModel(id=4, student_name="Dedi Pratama", external_id="0081234504", class_id=2))
    db.add_all([AssessmentModel(**a.model_dump()) for a in snap.assessments])
    db.add(AssessmentModel(id=40, class_id=2, assessment_name="Tugas 1", assessment_date=date(2025, 3, 4),
                           kind="formative", weight_category_id=TUGAS))
    db.add_all([ClassWeightSettingModel(class_id=1, **w.model_dump()) for w in snap.weight_settings])
    db.flush()
    db.add_all([CriterionModel(**c.model_dump()) for c in snap.criteria])
    db.add(CriterionModel(id=401, assessment_id=40, description="Ketepatan", max_score=10, order=1))
    db.flush()
    db.add_all([CriterionScoreModel(**s.model_dump()) for s in snap.scores])
    db.add(CriterionScoreModel(student_id=4, criterion_id=401, score=6))
    db.add_all([
        AttendanceModel(student_id=e.student_id, meeting_date=e.meeting_date, status=e.status.value)
        for e in snap.attendance
    ])
    db.commit()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    seed(session, build_snapshot())
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
