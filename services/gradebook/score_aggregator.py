"""
ScoreAggregator: raw per-criterion scores -> one percentage per (student, assessment).

    percentage = 100 * sum(score) / sum(max_score)

Both sums run only over criteria the student actually has a score for. A criterion
without a score is "not graded" and contributes to neither side. With no contributing
criterion the percentage is undefined (None). A score above its criterion's max_score is
logged and treated as not graded, so a percentage never leaves 0..100.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from schemas.gradebook import CriterionRecord, CriterionScoreRecord

logger = logging.getLogger(__name__)


def latest_scores(scores: Iterable[CriterionScoreRecord]) -> Dict[Tuple[int, int], float]:
    """(student_id, criterion_id) -> score; a later duplicate row replaces an earlier one."""
    latest: Dict[Tuple[int, int], float] = {}
    for s in scores:
        latest[(s.student_id, s.criterion_id)] = s.score
    return latest


def within_ceiling(student_id: int, criterion_id: int, score: float, max_score: float) -> bool:
    if score <= max_score:
        return True
    logger.warning(
        f"score {score:g} of student {student_id} exceeds max {max_score:g} of criterion {criterion_id}; skipped"
    )
    return False


def raw_totals(
    student_id: int,
    criteria: Iterable[CriterionRecord],
    scores: Iterable[CriterionScoreRecord],
) -> Tuple[float, float]:
    """(sum of recorded scores, sum of max_score of the criteria that were scored)."""
    by_key = latest_scores(scores)
    total_score, total_max = 0.0, 0.0
    for criterion in criteria:
        score = by_key.get((student_id, criterion.id))
        if score is None or not within_ceiling(student_id, criterion.id, score, criterion.max_score):
            continue
        total_score += score
        total_max += criterion.max_score
    return total_score, total_max


def assessment_percentage(
    student_id: int,
    criteria: Iterable[CriterionRecord],
    scores: Iterable[CriterionScoreRecord],
) -> Optional[float]:
    """Percentage of one student on one assessment, or None when nothing was scored."""
    total_score, total_max = raw_totals(student_id, criteria, scores)
    if total_max <= 0:
        return None
    return 100 * total_score / total_max


def assessment_percentages(
    criteria: Iterable[CriterionRecord],
    scores: Iterable[CriterionScoreRecord],
) -> Dict[int, float]:
    """
    student_id -> percentage for one assessment.

    Only students with at least one recorded score appear; everyone else is
    undefined and simply absent from the map.
    """
    criteria = list(criteria)
    max_by_criterion = {c.id: c.max_score for c in criteria}

    sums: Dict[int, List[float]] = {}
    for (student_id, criterion_id), score in latest_scores(scores).items():
        max_score = max_by_criterion.get(criterion_id)
        if max_score is None:
            # score for a criterion of another assessment
            continue
        if not within_ceiling(student_id, criterion_id, score, max_score):
            continue
        acc = sums.setdefault(student_id, [0.0, 0.0])
        acc[0] += score
        acc[1] += max_score

    result = {sid: 100 * got / ceiling for sid, (got, ceiling) in sums.items() if ceiling > 0}
    logger.debug(f"assessment_percentages: {len(criteria)} criteria, {len(result)} scored students")
    return result


# ==========================================================
# Snapshot helpers
# ==========================================================

def class_percentages(snapshot, assessment_ids: Optional[Iterable[int]] = None) -> Dict[int, Dict[int, float]]:
    """assessment_id -> {student_id -> percentage} for the chosen assessments of a snapshot."""
    wanted = None if assessment_ids is None else set(assessment_ids)
    result = {}
    for assessment in snapshot.assessments:
        if wanted is not None and assessment.id not in wanted:
            continue
        result[assessment.id] = assessment_percentages(
            snapshot.criteria_for(assessment.id), snapshot.scores_for(assessment.id)
        )
    return result


def student_percentages(snapshot, student_id: int, assessment_ids: Optional[Iterable[int]] = None) -> Dict[int, float]:
    """assessment_id -> percentage for one student; undefined assessments are left out."""
    return {
        assessment_id: per_student[student_id]
        for assessment_id, per_student in class_percentages(snapshot, assessment_ids).items()
        if student_id in per_student
    }
