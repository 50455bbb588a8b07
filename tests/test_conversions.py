"""Unit conversion and rounding helper tests."""

import pytest

from conversions import conversion_quicktips, convert_value, round_half_up, round_int


def test_convert_within_family():
    assert convert_value(2.5, "t", "kg") == 2500
    assert convert_value(1500, "L", "m3") == pytest.approx(1.5)
    assert convert_value(3, "MWh", "kWh") == 3000


def test_unknown_unit():
    with pytest.raises(ValueError, match="Unit not supported"):
        convert_value(1, "lb", "kg")


def test_cross_family():
    with pytest.raises(ValueError, match="Cannot convert"):
        convert_value(1, "kg", "kWh")


@pytest.mark.parametrize("value,digits,expected", [
    (262.5, 0, 263),
    (2.5, 0, 3),
    (0.25, 1, 0.3),
    (4.547368, 2, 4.55),
    (-1.5, 0, -1),
])
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == expected


def test_round_int():
    assert round_int(2.5) == 3
    assert isinstance(round_int(1.2), int)


def test_quicktips():
    assert len(conversion_quicktips()) == 4
