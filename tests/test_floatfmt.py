import math

import pytest

from doomkit.floatfmt import (
    format_float,
    magnitude_digits,
    round_fraction,
    special_value,
)
from doomkit.spec import FormatSpec

EXACT_VALUES = [0.0, 1.5, 2.25, -3.125, 10.0625, 2.75, 1024.5, -0.5]


@pytest.mark.parametrize("value", EXACT_VALUES)
def test_default_precision_matches_standard_formatting(value):
    assert format_float(value, FormatSpec(type="f")) == "%f" % value


@pytest.mark.parametrize("value", [2.25, 2.75, 0.125, 0.375, -1.625])
@pytest.mark.parametrize("precision", [1, 2, 3, 8])
def test_ties_round_to_even_like_standard_formatting(value, precision):
    spec = FormatSpec(type="f", precision=precision, has_precision=True)
    assert format_float(value, spec) == "%.*f" % (precision, value)


@pytest.mark.parametrize("width", [3, 10, 14])
def test_right_aligned_width(width):
    spec = FormatSpec(type="f", width=width, has_width=True)
    assert format_float(1.5, spec) == "%*f" % (width, 1.5)


def test_left_aligned_width():
    spec = FormatSpec(type="f", width=12, has_width=True, minus=True)
    assert format_float(1.5, spec) == "%-12f" % 1.5


def test_zero_fill_for_positive_value():
    spec = FormatSpec(type="f", width=11, has_width=True, zero=True)
    assert format_float(1.5, spec) == "%011f" % 1.5


def test_plus_flag():
    spec = FormatSpec(type="f", plus=True)
    assert format_float(1.5, spec) == "%+f" % 1.5


def test_plus_flag_keeps_minus_sign():
    spec = FormatSpec(type="f", plus=True)
    assert format_float(-1.5, spec) == "%f" % -1.5


def test_space_flag_with_width():
    spec = FormatSpec(type="f", width=10, has_width=True, space=True)
    assert format_float(1.5, spec) == "% 10f" % 1.5


@pytest.mark.parametrize(
    "value, text",
    [(math.nan, "nan"), (math.inf, "inf"), (-math.inf, "-inf")],
)
def test_special_values_ignore_flags(value, text):
    spec = FormatSpec(type="f", width=10, has_width=True, plus=True)
    assert special_value(value) == text
    assert format_float(value, spec) == text


def test_special_value_is_none_for_finite():
    assert special_value(1.0) is None


def test_zero_precision_rounds_odd_whole_up():
    spec = FormatSpec(type="f", precision=0, has_precision=True)
    assert format_float(3.7, spec) == "%.0f" % 3.7


def test_zero_precision_keeps_even_whole():
    spec = FormatSpec(type="f", precision=0, has_precision=True)
    assert format_float(2.7, spec) == "2"


def test_zero_precision_sharp_keeps_point():
    spec = FormatSpec(type="f", precision=0, has_precision=True, sharp=True)
    assert format_float(3.7, spec) == "%#.0f" % 3.7


def test_zero_precision_space_flag():
    spec = FormatSpec(type="f", precision=0, has_precision=True, space=True)
    assert format_float(3.7, spec) == "% .0f" % 3.7


def test_zero_precision_zero_value_is_empty():
    spec = FormatSpec(type="f", precision=0, has_precision=True)
    assert format_float(0.0, spec) == ""


def test_zero_precision_negative_uses_magnitude_digits():
    spec = FormatSpec(type="f", precision=0, has_precision=True)
    assert format_float(-123.4, spec) == magnitude_digits(-123.4)
    assert magnitude_digits(-123.4) == "-12"


def test_magnitude_digits_counts_integer_digits():
    value = 5e25
    result = magnitude_digits(value)
    assert result.isdigit()
    assert len(result) == len(str(int(value)))


def test_magnitude_digits_of_small_value_is_empty():
    assert magnitude_digits(1e-30) == magnitude_digits(0.0)
    assert len(magnitude_digits(0.5)) == 0


@pytest.mark.parametrize("fraction", [0.25, 0.75, 0.125, 0.0625])
@pytest.mark.parametrize("precision", [1, 2, 4])
def test_round_fraction_matches_standard_digits(fraction, precision):
    expected = ("%.*f" % (precision, fraction)).split(".")[1]
    assert round_fraction(fraction, precision) == expected


def test_round_fraction_of_zero_is_all_zeros():
    result = round_fraction(0.0, 4)
    assert len(result) == 4
    assert set(result) == {"0"}


def test_round_fraction_length_matches_precision():
    for precision in range(1, 10):
        assert len(round_fraction(0.3125, precision)) == precision