"""
services/gradebook_service.py

Application-facing gradebook operations. Each one fetches its inputs through
services/gradebook_store.py and hands them to the pure engine in services/gradebook/.
Engine knobs (epsilon, threshold) arrive as arguments; nothing here reads settings.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from schemas.analysis import (
    AttendanceSummary, ClassAttendanceSummary, ClassStatistics, ComparativeResult,
    FinalGradeResult, ScoreExportTable, ScorePair,
)
from schemas.gradebook import WeightSettingRecord
from services import gradebook_store as store
from services.gradebook.attendance_aggregator import summarize_class, summarize_student
from services.gradebook.class_statistics import compute_class_statistics
from services.gradebook.comparative import compare_classes
from services.gradebook.errors import RecordNotFound
from services.gradebook.relational import relational_pairs as pair_scores
from services.gradebook.score_aggregator import assessment_percentage as percentage_of, class_percentages, student_percentages
from services.gradebook.score_export import build_score_export
from services.gradebook.trend import TrendSeries, build_trend
from services.gradebook.weighted_grade import DEFAULT_EPSILON, compute_final_grade, validate_weights

logger = logging.getLogger(__name__)


def _check_in_class(snapshot, assessment_ids: Optional[Iterable[int]]) -> Optional[List[int]]:
    if assessment_ids is None:
        return None
    ids = list(assessment_ids)
    known = {a.id for a in snapshot.assessments}
    unknown = [i for i in ids if i not in known]
    if unknown:
        raise RecordNotFound(f"Assessments {unknown} do not belong to class {snapshot.class_info.id}")
    return ids


# ==========================================================
# [Grades]
# ==========================================================

def assessment_percentage(db: Session, student_id: int, assessment_id: int) -> Optional[float]:
    """None means undefined: the student has no recorded score on this assessment."""
    store.get_student(db, student_id)
    store.get_assessment(db, assessment_id)
    criteria = store.criteria(db, [assessment_id])
    scores = store.criterion_scores(db, assessment_ids=[assessment_id], student_id=student_id)
    return percentage_of(student_id, criteria, scores)


def final_grade(db: Session, student_id: int, class_id: int, epsilon: float = DEFAULT_EPSILON) -> FinalGradeResult:
    """Raises InvalidWeightConfiguration when the class weights do not sum to 100."""
    student = store.get_student(db, student_id)
    if student.class_id != class_id:
        raise RecordNotFound(f"Student {student_id} is not enrolled in class {class_id}")
    snapshot = store.load_class_snapshot(db, class_id)
    # compute_final_grade re-validates the weights: they may have changed since they were saved
    return compute_final_grade(
        student_id=student_id,
        class_id=class_id,
        assessments=snapshot.assessments,
        percentages=student_percentages(snapshot, student_id),
        weight_settings=snapshot.weight_settings,
        epsilon=epsilon,
    )


# ==========================================================
# [Analysis]
# ==========================================================

def class_statistics(
    db: Session,
    class_id: int,
    assessment_ids: Optional[Iterable[int]] = None,
    passing_threshold: Optional[float] = None,
) -> ClassStatistics:
    snapshot = store.load_class_snapshot(db, class_id)
    ids = _check_in_class(snapshot, assessment_ids)
    return compute_class_statistics(snapshot.students, class_percentages(snapshot, ids), passing_threshold)


def trend(db: Session, student_id: int, assessment_ids: Optional[Iterable[int]] = None) -> TrendSeries:
    student = store.get_student(db, student_id)
    snapshot = store.load_class_snapshot(db, student.class_id)
    ids = _check_in_class(snapshot, assessment_ids)
    chosen = [a for a in snapshot.assessments if ids is None or a.id in ids]
    return build_trend(chosen, student_percentages(snapshot, student_id, ids))


def comparative_averages(db: Session, class_id_a: int, class_id_b: int) -> ComparativeResult:
    return compare_classes(store.load_class_snapshot(db, class_id_a), store.load_class_snapshot(db, class_id_b))


def relational_pairs(db: Session, assessment_id: int, criterion_id_a: int, criterion_id_b: int) -> List[ScorePair]:
    store.get_assessment(db, assessment_id)
    criteria = store.criteria(db, [assessment_id])
    scores = store.criterion_scores(db, assessment_ids=[assessment_id])
    return pair_scores(criteria, scores, criterion_id_a, criterion_id_b)


# ==========================================================
# [Attendance]
# ==========================================================

def student_attendance_summary(db: Session, student_id: int, start: date, end: date) -> AttendanceSummary:
    if start > end:
        raise ValueError("start must not be after end")
    student = store.get_student(db, student_id)
    events = store.attendance_events(db, [student_id], start, end)
    return summarize_student(student, events, start, end)


def class_attendance_summary(db: Session, class_id: int, start: date, end: date) -> ClassAttendanceSummary:
    if start > end:
        raise ValueError("start must not be after end")
    store.get_class(db, class_id)
    roster = store.students(db, class_id)
    events = store.attendance_events(db, [s.id for s in roster], start, end)
    return summarize_class(class_id, roster, events, start, end)


# ==========================================================
# [Export / weight settings]
# ==========================================================

def score_export(db: Session, assessment_id: int) -> ScoreExportTable:
    assessment = store.get_assessment(db, assessment_id)
    return build_score_export(
        assessment_id,
        store.students(db, assessment.class_id),
        store.criteria(db, [assessment_id]),
        store.criterion_scores(db, assessment_ids=[assessment_id]),
    )


def save_weight_settings(
    db: Session,
    class_id: int,
    rows: Iterable[WeightSettingRecord],
    epsilon: float = DEFAULT_EPSILON,
) -> List[WeightSettingRecord]:
    """Validate first; an invalid configuration (duplicates included) never reaches the store."""
    store.get_class(db, class_id)
    validated = validate_weights(rows, class_id=class_id, epsilon=epsilon)

    known = {c.id for c in store.weight_categories(db)}
    unknown = [cid for cid in validated if cid not in known]
    if unknown:
        raise RecordNotFound(f"Weight categories {unknown} not found")

    saved = store.replace_weight_settings(db, class_id, validated)
    logger.info(f"weight settings saved: class={class_id}, categories={sorted(validated)}")
    return saved
