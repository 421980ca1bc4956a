"""Formatting of the %Lf conversion for extended-precision values."""

import math
from typing import Optional

from doomkit.floatfmt import magnitude_digits, round_fraction
from doomkit.spec import FormatSpec

_DEFAULT_PRECISION = 6


def long_special_value(value: float) -> Optional[str]:
    """Return the text for NaN or positive infinity, or None otherwise.

    Negative infinity is not recognised here: the check compares it with
    positive infinity, so it falls through like a finite value.
    """
    if math.isnan(value):
        return "nan"
    if value == math.inf:
        return "inf"
    return None


def _zero_precision(x: float, spec: FormatSpec) -> str:
    if x < 1e-20 or x > 1e20:
        return magnitude_digits(x)
    odd = int(x) % 2
    x *= 10
    if int(x) % 10 >= 5 and odd:
        x += 10
    x /= 10
    number = str(int(x))
    if spec.sharp:
        number += "."
    return number


def _pad_and_sign(number: str, spec: FormatSpec) -> str:
    fill = "0" if spec.zero else " "
    if spec.plus and not number.startswith("-"):
        number = "+" + number
    if spec.width > len(number):
        pad = spec.width - len(number) - (1 if spec.space else 0)
        padding = fill * max(pad, 0)
        number = number + padding if spec.minus else padding + number
    if spec.space:
        number = " " + number
    return number


def format_long_float(value: float, spec: FormatSpec) -> str:
    """Format ``value`` for the %Lf conversion according to ``spec``.

    Unlike %f, a zero precision ignores the space flag.  Negative infinity
    has no finite digits to print and raises OverflowError.
    """
    x = float(value)
    special = long_special_value(x)
    if special is not None:
        return special
    if math.isinf(x):
        raise OverflowError("cannot format negative infinity as %Lf")
    if spec.has_precision and spec.precision <= 0:
        return _zero_precision(x, spec)
    precision = spec.precision if spec.has_precision else _DEFAULT_PRECISION
    negative = x < 0
    if negative:
        x = -x
    whole = int(x)
    number = ("-" if negative else "") + str(whole) + "."
    number += round_fraction(x - whole, precision)
    return _pad_and_sign(number, spec)