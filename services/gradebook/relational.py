"""
RelationalAnalyzer: paired raw scores of two criteria within one assessment.

Only students with a score on BOTH criteria yield a point; nothing is substituted for
a missing score. No coefficient is computed here, the pairs are the product.
"""

from typing import Dict, Iterable, List

from schemas.analysis import ScorePair
from schemas.gradebook import CriterionRecord, CriterionScoreRecord
from services.gradebook.score_aggregator import latest_scores


def relational_pairs(
    criteria: Iterable[CriterionRecord],
    scores: Iterable[CriterionScoreRecord],
    criterion_id_a: int,
    criterion_id_b: int,
) -> List[ScorePair]:
    """
    One ScorePair(student_id, x=score on A, y=score on B) per fully scored student.

    `criteria` are the criteria of the assessment; both chosen ids must belong to it.
    The order of the result carries no meaning.
    """
    if criterion_id_a == criterion_id_b:
        raise ValueError("Two different criteria are required for relational analysis")
    known = {c.id for c in criteria}
    missing = [cid for cid in (criterion_id_a, criterion_id_b) if cid not in known]
    if missing:
        raise ValueError(f"Criteria {missing} do not belong to this assessment")

    xs: Dict[int, float] = {}
    ys: Dict[int, float] = {}
    for (student_id, criterion_id), score in latest_scores(scores).items():
        if criterion_id == criterion_id_a:
            xs[student_id] = score
        elif criterion_id == criterion_id_b:
            ys[student_id] = score

    return [
        ScorePair(student_id=student_id, x=xs[student_id], y=ys[student_id])
        for student_id in sorted(xs.keys() & ys.keys())
    ]
