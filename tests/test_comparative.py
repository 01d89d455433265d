import pytest

from schemas.gradebook import ClassRecord, GradebookSnapshot
from services.gradebook.comparative import compare_classes


def test_side_by_side_averages(snapshot):
    empty = GradebookSnapshot(class_info=ClassRecord(id=2, class_name="VII-B"))
    result = compare_classes(snapshot, empty)
    assert result.class_a.class_name == "VII-A"
    assert result.class_a.average == pytest.approx(85.0)
    assert result.class_a.scored_students == 2
    # an empty class stays undefined rather than 0
    assert result.class_b.average is None
    assert result.as_pair() == (result.class_a.average, None)


def test_same_class_twice(snapshot):
    a, b = compare_classes(snapshot, snapshot).as_pair()
    assert a == b
