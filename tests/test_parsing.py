"""Phase and number parsing tests."""

from math import pi

import pytest

from wavegen.parsing import parse_number, parse_phase


@pytest.mark.parametrize("text, expected", [
    ("1.57", 1.57),
    ("  -0.5 ", -0.5),
    ("r:1.5", 1.5),
    ("R:2", 2.0),
    ("d:90", pi / 2),
    ("D:180", pi),
    ("90deg", pi / 2),
    ("90 DEG", pi / 2),
    ("45d", pi / 4),
    ("3.14/2", 1.57),
    ("-6/4", -1.5),
])
def test_parse_phase(text, expected):
    assert parse_phase(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "abc", "1/0", "deg", "r:", "d:x", "1/2/3", "nan", "inf"])
def test_parse_phase_rejects(text):
    with pytest.raises(ValueError, match="phase"):
        parse_phase(text)


def test_parse_number():
    assert parse_number(" 2.5 ", "frequency") == 2.5
    assert parse_number("-1e-3") == -0.001


@pytest.mark.parametrize("text", ["x", "", "nan", "-inf"])
def test_parse_number_rejects(text):
    with pytest.raises(ValueError, match="frequency"):
        parse_number(text, "frequency")
