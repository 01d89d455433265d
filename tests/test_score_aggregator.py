import pytest

from schemas.gradebook import CriterionRecord, CriterionScoreRecord
from services.gradebook.score_aggregator import (
    assessment_percentage, assessment_percentages, class_percentages, raw_totals, student_percentages,
)


def _criteria(*max_scores):
    return [CriterionRecord(id=i + 1, assessment_id=1, max_score=m, order=i) for i, m in enumerate(max_scores)]


def test_two_criteria_scenario():
    criteria = _criteria(10, 10)
    scores = [
        CriterionScoreRecord(student_id=7, criterion_id=1, score=8),
        CriterionScoreRecord(student_id=7, criterion_id=2, score=6),
    ]
    assert assessment_percentage(7, criteria, scores) == pytest.approx(70.0)


def test_ungraded_criterion_is_excluded_not_zero():
    criteria = _criteria(10, 10)
    scores = [CriterionScoreRecord(student_id=7, criterion_id=1, score=9)]
    # 9 / 10, not 9 / 20
    assert assessment_percentage(7, criteria, scores) == pytest.approx(90.0)


def test_no_scores_is_undefined():
    assert assessment_percentage(7, _criteria(10, 10), []) is None
    assert assessment_percentages(_criteria(10), []) == {}


def test_zero_score_is_defined():
    scores = [CriterionScoreRecord(student_id=7, criterion_id=1, score=0)]
    assert assessment_percentage(7, _criteria(10), scores) == 0.0


def test_percentage_round_trips_to_raw_scores(snapshot):
    for assessment in snapshot.assessments:
        criteria = snapshot.criteria_for(assessment.id)
        scores = snapshot.scores_for(assessment.id)
        for student in snapshot.students:
            percentage = assessment_percentage(student.id, criteria, scores)
            total_score, total_max = raw_totals(student.id, criteria, scores)
            if percentage is None:
                assert total_max == 0
                continue
            assert percentage * total_max / 100 == pytest.approx(total_score)


def test_duplicate_rows_keep_the_last_one():
    scores = [
        CriterionScoreRecord(student_id=7, criterion_id=1, score=2),
        CriterionScoreRecord(student_id=7, criterion_id=1, score=5),
    ]
    assert assessment_percentage(7, _criteria(10), scores) == pytest.approx(50.0)


def test_scores_of_foreign_criteria_are_ignored():
    scores = [
        CriterionScoreRecord(student_id=7, criterion_id=1, score=5),
        CriterionScoreRecord(student_id=7, criterion_id=99, score=100),
    ]
    assert assessment_percentages(_criteria(10), scores) == {7: pytest.approx(50.0)}


def test_class_percentages(snapshot):
    result = class_percentages(snapshot)
    assert result[10] == {1: pytest.approx(70.0), 2: pytest.approx(90.0)}
    assert result[20] == {1: pytest.approx(70.0), 2: pytest.approx(90.0)}
    assert result[30] == {1: pytest.approx(100.0)}


def test_student_percentages_skip_undefined(snapshot):
    assert student_percentages(snapshot, 2) == {10: pytest.approx(90.0), 20: pytest.approx(90.0)}
    assert student_percentages(snapshot, 3) == {}
    assert student_percentages(snapshot, 1, assessment_ids=[30]) == {30: pytest.approx(100.0)}


def test_same_input_same_output(snapshot):
    assert class_percentages(snapshot) == class_percentages(snapshot)


def test_score_above_max_is_skipped(caplog):
    criteria = _criteria(10, 10)
    scores = [
        CriterionScoreRecord(student_id=7, criterion_id=1, score=15),
        CriterionScoreRecord(student_id=7, criterion_id=2, score=6),
    ]
    with caplog.at_level("WARNING"):
        assert assessment_percentage(7, criteria, scores) == pytest.approx(60.0)
    assert "exceeds max" in caplog.text
    assert assessment_percentages(criteria, scores) == {7: pytest.approx(60.0)}


def test_only_scores_above_max_is_undefined():
    scores = [CriterionScoreRecord(student_id=7, criterion_id=1, score=15)]
    assert assessment_percentage(7, _criteria(10), scores) is None
    assert assessment_percentages(_criteria(10), scores) == {}


def test_score_equal_to_max_counts():
    scores = [CriterionScoreRecord(student_id=7, criterion_id=1, score=10)]
    assert assessment_percentage(7, _criteria(10), scores) == pytest.approx(100.0)
