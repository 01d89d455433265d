from services.gradebook.errors import format_percentage, round_percentage


def test_undefined_is_never_rendered_as_zero():
    assert format_percentage(None) == "—"
    assert format_percentage(0.0) == "0.00"
    assert format_percentage(78) == "78.00"
    assert format_percentage(2 / 3 * 100) == "66.67"


def test_round_percentage_keeps_none():
    assert round_percentage(None) is None
    assert round_percentage(76.6666) == 76.67
