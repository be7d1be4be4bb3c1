import pytest

from ticketera.parsing import cell_text, parse_number_or_zero


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("   ", 0.0),
        ("abc", 0.0),
        ("12,5", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
        (True, 0.0),
        (3, 3.0),
        (2.5, 2.5),
        (" 11.80 ", 11.80),
    ],
)
def test_parse_number_or_zero(value: object, expected: float) -> None:
    assert parse_number_or_zero(value) == expected


def test_cell_text_normalizes_integral_floats() -> None:
    assert cell_text(1002.0) == "1002"
    assert cell_text(1002) == "1002"
    assert cell_text(10.5) == "10.5"
    assert cell_text(None) == ""
    assert cell_text("A-77") == "A-77"
