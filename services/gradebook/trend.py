"""TrendAnalyzer: one student's assessment percentages in chronological order."""

from typing import Iterable, Iterator, List, Mapping, Tuple

from schemas.analysis import TrendPoint
from schemas.gradebook import AssessmentRecord


class TrendSeries:
    """
    Finite, restartable sequence of (date, percentage) pairs.

    Every iteration starts a fresh pass over the points; nothing is consumed.
    """

    def __init__(self, points: Iterable[TrendPoint]):
        # sorted() is stable, so assessments on the same date keep their input order
        self._points: List[TrendPoint] = sorted(points, key=lambda p: p.assessment_date)

    def __iter__(self) -> Iterator[Tuple]:
        return ((p.assessment_date, p.percentage) for p in self._points)

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> List[TrendPoint]:
        return list(self._points)


def build_trend(assessments: Iterable[AssessmentRecord], percentages: Mapping[int, float]) -> TrendSeries:
    """Assessments without a percentage for the student are left out, not plotted as 0."""
    return TrendSeries(
        TrendPoint(
            assessment_id=a.id,
            assessment_name=a.assessment_name,
            assessment_date=a.assessment_date,
            percentage=percentages[a.id],
        )
        for a in assessments
        if percentages.get(a.id) is not None
    )
