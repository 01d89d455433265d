"""
Score export table: one row per student, one column per criterion, then the raw total
and the scaled-to-100 score.

The scaled score IS the ScoreAggregator percentage, so ungraded criteria stay blank and
are excluded from it rather than exported as 0. A score above its criterion's max is
blanked the same way.
"""

from typing import Iterable, List, Optional

from schemas.analysis import ScoreExportRow, ScoreExportTable
from schemas.gradebook import CriterionRecord, CriterionScoreRecord, StudentRecord
from services.gradebook.score_aggregator import assessment_percentage, latest_scores, within_ceiling

FIXED_HEADER = ["Student Name", "Student ID"]
TOTAL_HEADER = ["Total Score", "Scaled Score (0-100)"]


def _format_max(value: float) -> str:
    return f"{value:g}"


def build_score_export(
    assessment_id: int,
    students: Iterable[StudentRecord],
    criteria: Iterable[CriterionRecord],
    scores: Iterable[CriterionScoreRecord],
) -> ScoreExportTable:
    criteria = sorted(criteria, key=lambda c: (c.order, c.id))
    scores = list(scores)
    by_key = latest_scores(scores)

    header = FIXED_HEADER + [f"{c.description} (Max: {_format_max(c.max_score)})" for c in criteria] + TOTAL_HEADER

    rows: List[ScoreExportRow] = []
    for student in students:
        cells: List[Optional[float]] = []
        for c in criteria:
            score = by_key.get((student.id, c.id))
            if score is not None and not within_ceiling(student.id, c.id, score, c.max_score):
                score = None
            cells.append(score)
        rows.append(ScoreExportRow(
            student_id=student.id,
            student_name=student.student_name,
            external_id=student.external_id,
            criterion_scores=cells,
            total_score=sum(cell for cell in cells if cell is not None),
            scaled_score=assessment_percentage(student.id, criteria, scores),
        ))

    return ScoreExportTable(
        assessment_id=assessment_id,
        header=header,
        max_total_score=sum(c.max_score for c in criteria),
        rows=rows,
    )
