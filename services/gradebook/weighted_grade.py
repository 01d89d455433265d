"""
WeightedGradeCalculator: per-assessment percentages -> one final grade per student per class.

1. The class weight settings must sum to 100 (within epsilon). Checked before saving the
   settings and again before every computation, since they may have changed since.
2. CategoryAverage = mean of the student's defined percentages in that category.
3. FinalGrade = sum(CategoryAverage * weight / 100).
4. A weighted category without any scored assessment contributes 0 and yields a warning.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from schemas.analysis import FinalGradeResult
from schemas.gradebook import AssessmentRecord, WeightSettingRecord
from services.gradebook.errors import InvalidWeightConfiguration

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 1e-6


def validate_weights(
    weight_settings: Iterable[WeightSettingRecord],
    class_id: Optional[int] = None,
    epsilon: float = DEFAULT_EPSILON,
) -> Dict[int, float]:
    """Turn the weight rows of one class into a validated {category_id: weight_percent} map."""
    weights: Dict[int, float] = {}
    for setting in weight_settings:
        if setting.weight_category_id in weights:
            raise InvalidWeightConfiguration(
                f"Category {setting.weight_category_id} is weighted more than once", class_id=class_id
            )
        if not 0 <= setting.weight_percent <= 100:
            raise InvalidWeightConfiguration(
                f"Weight {setting.weight_percent} of category {setting.weight_category_id} is outside 0..100",
                class_id=class_id,
            )
        weights[setting.weight_category_id] = setting.weight_percent

    if not weights:
        raise InvalidWeightConfiguration("No weight settings configured", class_id=class_id, total=0.0)

    total = sum(weights.values())
    if abs(total - 100) > epsilon:
        raise InvalidWeightConfiguration(
            f"Weights must sum to 100, got {total:g}", class_id=class_id, total=total
        )
    return weights


def category_averages(
    assessments: Iterable[AssessmentRecord],
    percentages: Mapping[int, Optional[float]],
) -> Tuple[Dict[int, float], List[int]]:
    """
    Mean percentage per weight category for one student.

    `percentages` maps assessment_id -> percentage; missing or None entries are
    ungraded and excluded from the mean. Returns the averages and the ids of
    uncategorized assessments that were skipped.
    """
    buckets: Dict[int, List[float]] = {}
    uncategorized: List[int] = []
    for assessment in assessments:
        if assessment.weight_category_id is None:
            uncategorized.append(assessment.id)
            continue
        value = percentages.get(assessment.id)
        if value is None:
            continue
        buckets.setdefault(assessment.weight_category_id, []).append(value)

    averages = {category_id: sum(values) / len(values) for category_id, values in buckets.items()}
    return averages, uncategorized


def compute_final_grade(
    student_id: int,
    class_id: int,
    assessments: Iterable[AssessmentRecord],
    percentages: Mapping[int, Optional[float]],
    weight_settings: Iterable[WeightSettingRecord],
    epsilon: float = DEFAULT_EPSILON,
) -> FinalGradeResult:
    weights = validate_weights(weight_settings, class_id=class_id, epsilon=epsilon)
    averages, uncategorized = category_averages(assessments, percentages)

    warnings: List[str] = []
    final = 0.0
    for category_id, weight in weights.items():
        average = averages.get(category_id)
        if average is None:
            if weight > 0:
                warnings.append(
                    f"Category {category_id} carries {weight:g}% but student {student_id} has no scored assessment in it"
                )
            continue
        final += average * weight / 100

    for category_id in averages:
        if category_id not in weights:
            warnings.append(f"Category {category_id} has no weight setting for class {class_id}; its assessments are ignored")

    for message in warnings:
        logger.warning(message)

    return FinalGradeResult(
        student_id=student_id,
        class_id=class_id,
        final_grade=final,
        category_averages=averages,
        warnings=warnings,
        uncategorized_assessment_ids=uncategorized,
    )
