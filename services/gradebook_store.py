"""
services/gradebook_store.py

- Read boundary between the SQLAlchemy record store and the gradebook engine.
- Every function returns plain pydantic records (schemas/gradebook.py), never ORM objects.
- Any SQLAlchemyError, or a stored row that fails record validation, is logged and re-raised
  as DataFetchError (chained); nothing is retried here.
"""

import logging
from datetime import date
from functools import wraps
from typing import Iterable, List, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

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
    GradebookSnapshot, StudentRecord, WeightCategoryRecord, WeightSettingRecord,
)
from services.gradebook.errors import DataFetchError, RecordNotFound

logger = logging.getLogger(__name__)


def _store_call(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.exception(f"record store failure in {func.__name__}")
            raise DataFetchError(f"{func.__name__} failed: {e.__class__.__name__}") from e
        except ValidationError as e:
            # stored row no longer fits its record: a data fault, not a bad request
            logger.exception(f"invalid stored row in {func.__name__}")
            raise DataFetchError(f"{func.__name__} failed: stored data is invalid") from e
    return wrapper


# ==========================================================
# [Single records]
# ==========================================================

@_store_call
def get_class(db: Session, class_id: int) -> ClassRecord:
    row = db.query(ClassModel).filter(ClassModel.id == class_id).first()
    if row is None:
        raise RecordNotFound(f"Class {class_id} not found")
    return ClassRecord.model_validate(row)

@_store_call
def get_student(db: Session, student_id: int) -> StudentRecord:
    row = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if row is None:
        raise RecordNotFound(f"Student {student_id} not found")
    return StudentRecord.model_validate(row)

@_store_call
def get_assessment(db: Session, assessment_id: int) -> AssessmentRecord:
    row = db.query(AssessmentModel).filter(AssessmentModel.id == assessment_id).first()
    if row is None:
        raise RecordNotFound(f"Assessment {assessment_id} not found")
    return AssessmentRecord.model_validate(row)


# ==========================================================
# [Collections]
# ==========================================================

@_store_call
def students(db: Session, class_id: int) -> List[StudentRecord]:
    rows = (
        db.query(StudentModel)
        .filter(StudentModel.class_id == class_id)
        .order_by(StudentModel.student_name, StudentModel.id)
        .all()
    )
    return [StudentRecord.model_validate(r) for r in rows]

@_store_call
def assessments(db: Session, class_id: int) -> List[AssessmentRecord]:
    rows = (
        db.query(AssessmentModel)
        .filter(AssessmentModel.class_id == class_id)
        .order_by(AssessmentModel.assessment_date, AssessmentModel.id)
        .all()
    )
    return [AssessmentRecord.model_validate(r) for r in rows]

@_store_call
def criteria(db: Session, assessment_ids: Iterable[int]) -> List[CriterionRecord]:
    ids = list(assessment_ids)
    if not ids:
        return []
    rows = (
        db.query(CriterionModel)
        .filter(CriterionModel.assessment_id.in_(ids))
        .order_by(CriterionModel.assessment_id, CriterionModel.order, CriterionModel.id)
        .all()
    )
    return [CriterionRecord.model_validate(r) for r in rows]

@_store_call
def criterion_scores(
    db: Session,
    assessment_ids: Optional[Iterable[int]] = None,
    student_id: Optional[int] = None,
) -> List[CriterionScoreRecord]:
    query = db.query(CriterionScoreModel).join(
        CriterionModel, CriterionModel.id == CriterionScoreModel.criterion_id
    )
    if assessment_ids is not None:
        query = query.filter(CriterionModel.assessment_id.in_(list(assessment_ids)))
    if student_id is not None:
        query = query.filter(CriterionScoreModel.student_id == student_id)
    rows = query.order_by(CriterionScoreModel.id).all()
    return [CriterionScoreRecord.model_validate(r) for r in rows]

@_store_call
def weight_categories(db: Session) -> List[WeightCategoryRecord]:
    rows = db.query(WeightCategoryModel).order_by(WeightCategoryModel.category_name).all()
    return [WeightCategoryRecord.model_validate(r) for r in rows]

@_store_call
def weight_settings(db: Session, class_id: int) -> List[WeightSettingRecord]:
    rows = (
        db.query(ClassWeightSettingModel)
        .filter(ClassWeightSettingModel.class_id == class_id)
        .order_by(ClassWeightSettingModel.weight_category_id)
        .all()
    )
    return [WeightSettingRecord.model_validate(r) for r in rows]

@_store_call
def attendance_events(
    db: Session,
    student_ids: Iterable[int],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[AttendanceEventRecord]:
    ids = list(student_ids)
    if not ids:
        return []
    query = db.query(AttendanceModel).filter(AttendanceModel.student_id.in_(ids))
    if start is not None and end is not None:
        query = query.filter(AttendanceModel.meeting_date.between(start, end))
    rows = query.order_by(AttendanceModel.meeting_date, AttendanceModel.id).all()
    return [AttendanceEventRecord.model_validate(r) for r in rows]


# ==========================================================
# [Snapshot] class -> assessments -> criteria -> scores, fetched once
# ==========================================================

def load_class_snapshot(db: Session, class_id: int) -> GradebookSnapshot:
    """Grades only; attendance is read per date range by attendance_events."""
    class_info = get_class(db, class_id)
    roster = students(db, class_id)
    class_assessments = assessments(db, class_id)
    assessment_ids = [a.id for a in class_assessments]

    return GradebookSnapshot(
        class_info=class_info,
        students=roster,
        assessments=class_assessments,
        criteria=criteria(db, assessment_ids),
        scores=criterion_scores(db, assessment_ids=assessment_ids) if assessment_ids else [],
        weight_settings=weight_settings(db, class_id),
        attendance=[],
    )


# ==========================================================
# [Write] class weight settings (validated by the caller)
# ==========================================================

@_store_call
def replace_weight_settings(db: Session, class_id: int, weights: Mapping[int, float]) -> List[WeightSettingRecord]:
    try:
        db.query(ClassWeightSettingModel).filter(ClassWeightSettingModel.class_id == class_id).delete()
        for category_id, percent in weights.items():
            db.add(ClassWeightSettingModel(class_id=class_id, weight_category_id=category_id, weight_percent=percent))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return weight_settings(db, class_id)
