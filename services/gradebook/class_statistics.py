"""
ClassStatisticsEngine: descriptive statistics of one class over a set of assessments.

Averaging is two-level on purpose:
  1. per student: mean of that student's assessment percentages
  2. per class:   mean of the per-student means
Every student weighs the same no matter how many assessments they have scores for.
Students without any percentage are excluded from both levels.
"""

import logging
from math import fsum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from schemas.analysis import ClassStatistics, StudentAverage
from schemas.gradebook import StudentRecord

logger = logging.getLogger(__name__)

# (label, exclusive upper bound); the last bucket is open-ended
DISTRIBUTION_BUCKETS = (("0-59", 60), ("60-69", 70), ("70-79", 80), ("80-89", 90), ("90-100", None))


def student_averages(
    students: Sequence[StudentRecord],
    percentages: Mapping[int, Mapping[int, float]],
) -> Tuple[List[StudentAverage], List[int]]:
    """
    `percentages` is assessment_id -> {student_id -> percentage}.

    Returns (averages in roster order, ids of students with no percentage).
    """
    averages: List[StudentAverage] = []
    unscored: List[int] = []
    for student in students:
        values = [per_student[student.id] for per_student in percentages.values() if student.id in per_student]
        if not values:
            unscored.append(student.id)
            continue
        averages.append(StudentAverage(
            student_id=student.id,
            student_name=student.student_name,
            average=fsum(values) / len(values),
            assessment_count=len(values),
        ))
    return averages, unscored


def distribution(averages: Iterable[float]) -> Dict[str, int]:
    buckets = {label: 0 for label, _ in DISTRIBUTION_BUCKETS}
    for avg in averages:
        for label, upper in DISTRIBUTION_BUCKETS:
            if upper is None or avg < upper:
                buckets[label] += 1
                break
    return buckets


def rank(averages: Iterable[StudentAverage]) -> List[StudentAverage]:
    """Descending by average; ties keep their incoming order (sorted() is stable)."""
    ordered = sorted(averages, key=lambda a: a.average, reverse=True)
    return [a.model_copy(update={"rank": idx}) for idx, a in enumerate(ordered, start=1)]


def class_average(averages: Sequence[StudentAverage]) -> Optional[float]:
    if not averages:
        return None
    return fsum(a.average for a in averages) / len(averages)


def compute_class_statistics(
    students: Sequence[StudentRecord],
    percentages: Mapping[int, Mapping[int, float]],
    passing_threshold: Optional[float] = None,
) -> ClassStatistics:
    averages, unscored = student_averages(students, percentages)
    if unscored:
        logger.debug(f"compute_class_statistics: {len(unscored)} students without scores excluded")

    ranked = rank(averages)
    below = [a for a in ranked if passing_threshold is not None and a.average < passing_threshold]
    return ClassStatistics(
        average=class_average(averages),
        highest=max((a.average for a in averages), default=None),
        lowest=min((a.average for a in averages), default=None),
        ranked_students=ranked,
        unscored_student_ids=unscored,
        distribution=distribution(a.average for a in averages),
        below_threshold=below,
    )
