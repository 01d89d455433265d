import sys
from datetime import date

from sqlalchemy.orm import Session

from database.db import Base, SessionLocal, engine

# ✅ every model must be imported so Base.metadata knows its table
from models.classes import Class as ClassModel
from models.students import Student as StudentModel
from models.weight_categories import WeightCategory as WeightCategoryModel
from models.class_weight_settings import ClassWeightSetting as ClassWeightSettingModel
from models.assessments import Assessment as AssessmentModel
from models.criteria import Criterion as CriterionModel
from models.criterion_scores import CriterionScore as CriterionScoreModel
from models.attendance import Attendance as AttendanceModel


def create_tables(bind=engine):
    Base.metadata.create_all(bind=bind)


def seed_demo(db: Session):
    """Small demo class: two weight categories, one assessment with two criteria."""
    db.add(ClassModel(id=1, class_name="VII-A", term="2024/2025 Ganjil", teacher_id=1))
    db.add_all([
        WeightCategoryModel(id=1, category_name="Tugas"),
        WeightCategoryModel(id=2, category_name="Ujian"),
    ])
    db.flush()
    db.add_all([
        StudentModel(id=1, student_name="Ayu Lestari", external_id="0081234501", class_id=1),
        StudentModel(id=2, student_name="Budi Santoso", external_id="0081234502", class_id=1),
        ClassWeightSettingModel(class_id=1, weight_category_id=1, weight_percent=40),
        ClassWeightSettingModel(class_id=1, weight_category_id=2, weight_percent=60),
        AssessmentModel(id=1, class_id=1, assessment_name="Tugas 1", assessment_date=date(2025, 3, 3),
                        kind="formative", weight_category_id=1),
    ])
    db.flush()
    db.add_all([
        CriterionModel(id=1, assessment_id=1, description="Ketepatan", max_score=10, order=1),
        CriterionModel(id=2, assessment_id=1, description="Kerapian", max_score=10, order=2),
    ])
    db.flush()
    db.add_all([
        CriterionScoreModel(student_id=1, criterion_id=1, score=8),
        CriterionScoreModel(student_id=1, criterion_id=2, score=6),
        AttendanceModel(student_id=1, meeting_date=date(2025, 3, 3), status="Present"),
        AttendanceModel(student_id=2, meeting_date=date(2025, 3, 3), status="Sick"),
    ])
    db.commit()


if __name__ == "__main__":
    create_tables()
    if "--demo" in sys.argv:
        db = SessionLocal()
        try:
            seed_demo(db)
        finally:
            db.close()
    print("✅ tables created" + (" with demo data" if "--demo" in sys.argv else ""))
