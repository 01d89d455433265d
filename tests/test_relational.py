import pytest

from schemas.gradebook import CriterionRecord, CriterionScoreRecord
from services.gradebook.relational import relational_pairs

CRITERIA = [
    CriterionRecord(id=1, assessment_id=5, max_score=10),
    CriterionRecord(id=2, assessment_id=5, max_score=10),
]


def test_pairs_only_fully_scored_students(snapshot):
    pairs = relational_pairs(snapshot.criteria_for(10), snapshot.scores_for(10), 101, 102)
    # Budi has no score on 102 and is dropped entirely
    assert [(p.student_id, p.x, p.y) for p in pairs] == [(1, 8, 6)]


def test_only_one_criterion_scored_gives_no_pairs():
    scores = [
        CriterionScoreRecord(student_id=1, criterion_id=1, score=7),
        CriterionScoreRecord(student_id=2, criterion_id=1, score=9),
    ]
    assert relational_pairs(CRITERIA, scores, 1, 2) == []


def test_identical_pairs_are_kept_per_student():
    scores = [
        CriterionScoreRecord(student_id=s, criterion_id=c, score=5) for s in (1, 2) for c in (1, 2)
    ]
    pairs = relational_pairs(CRITERIA, scores, 1, 2)
    assert len(pairs) == 2
    assert {(p.x, p.y) for p in pairs} == {(5, 5)}


def test_axes_follow_argument_order():
    scores = [
        CriterionScoreRecord(student_id=1, criterion_id=1, score=3),
        CriterionScoreRecord(student_id=1, criterion_id=2, score=9),
    ]
    (pair,) = relational_pairs(CRITERIA, scores, 2, 1)
    assert (pair.x, pair.y) == (9, 3)


@pytest.mark.parametrize("a, b", [(1, 1), (1, 42)])
def test_invalid_criteria(a, b):
    with pytest.raises(ValueError):
        relational_pairs(CRITERIA, [], a, b)
