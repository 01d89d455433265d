from datetime import date

from services.gradebook.attendance_aggregator import summarize_class, summarize_student
from services.gradebook.class_statistics import compute_class_statistics
from services.gradebook.comparative import compare_classes
from services.gradebook.relational import relational_pairs
from services.gradebook.score_aggregator import class_percentages, student_percentages
from services.gradebook.score_export import build_score_export
from services.gradebook.trend import build_trend
from services.gradebook.weighted_grade import compute_final_grade

MARCH = (date(2025, 3, 1), date(2025, 3, 31))


def _twice(compute):
    first, second = compute(), compute()
    assert first == second
    return first


def test_every_aggregator_is_repeatable(snapshot):
    _twice(lambda: class_percentages(snapshot))
    _twice(lambda: compute_final_grade(
        student_id=1, class_id=1, assessments=snapshot.assessments,
        percentages=student_percentages(snapshot, 1), weight_settings=snapshot.weight_settings,
    ))
    _twice(lambda: compute_class_statistics(snapshot.students, class_percentages(snapshot), passing_threshold=75))
    _twice(lambda: summarize_student(snapshot.students[0], snapshot.attendance, *MARCH))
    _twice(lambda: summarize_class(1, snapshot.students, snapshot.attendance, *MARCH))
    _twice(lambda: build_trend(snapshot.assessments, student_percentages(snapshot, 1)).points)
    _twice(lambda: compare_classes(snapshot, snapshot))
    _twice(lambda: relational_pairs(snapshot.criteria_for(20), snapshot.scores_for(20), 201, 202))
    _twice(lambda: build_score_export(10, snapshot.students, snapshot.criteria_for(10), snapshot.scores_for(10)))


def test_repeated_results_are_not_empty(snapshot):
    stats = _twice(lambda: compute_class_statistics(snapshot.students, class_percentages(snapshot)))
    assert [s.student_id for s in stats.ranked_students] == [2, 1]
    pairs = _twice(lambda: relational_pairs(snapshot.criteria_for(20), snapshot.scores_for(20), 201, 202))
    assert len(pairs) == 2
