"""Formatting of the %f conversion for double-precision values."""

import math
from typing import Optional

from doomkit.numconv import digit_count
from doomkit.spec import FormatSpec

_DEFAULT_PRECISION = 6


def special_value(value: float) -> Optional[str]:
    """Return the text for NaN or an infinity, or None for a finite value."""
    if math.isnan(value):
        return "nan"
    if value == math.inf:
        return "inf"
    if value == -math.inf:
        return "-inf"
    return None


def magnitude_digits(value: float) -> str:
    """Spell the leading integer digits of a very large or very small value.

    A negative value loses its last integer digit, and values below one
    produce no digits at all.
    """
    negative = value < 0
    x = -value if negative else value
    count = 0
    while x >= 1.0:
        x /= 10
        count += 1
    wanted = max(count - 1 if negative else count, 0)
    digits = []
    for _ in range(wanted):
        x *= 10
        digit = int(x)
        digits.append(str(digit))
        x -= digit
    text = "".join(digits)
    return "-" + text if negative else text


def round_fraction(fraction: float, precision: int) -> str:
    """Return the digits after the point for ``fraction`` rounded to ``precision``.

    Ties are broken towards an even last digit.  A carry out of the fraction
    is not moved into the integer part; it shows up as an extra digit.
    """
    x = fraction
    for _ in range(precision + 1):
        x *= 10
    z = int(x)
    if z % 10 > 5:
        z += 10 - z % 10
    elif z % 10 == 5:
        x *= 10
        z = int(x)
        if z % 10 > 0:
            z += 10 - z % 10
        z //= 10
        if z % 10 > 5:
            z += 10 - z % 10
        if z % 10 == 5 and ((z % 100) // 10) % 2 != 0:
            z += 10
    num = z // 10
    if num == 0:
        return "0" * precision
    leading = precision - digit_count(num)
    return "0" * max(leading, 0) + str(num)


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
    if spec.space:
        number = " " + number
    return number


def _apply_flags(number: str, spec: FormatSpec) -> str:
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


def format_float(value: float, spec: FormatSpec) -> str:
    """Format ``value`` for the %f conversion according to ``spec``."""
    x = float(value)
    special = special_value(x)
    if special is not None:
        return special
    if spec.has_precision and spec.precision <= 0:
        return _zero_precision(x, spec)
    precision = spec.precision if spec.has_precision else _DEFAULT_PRECISION
    negative = x < 0
    if negative:
        x = -x
    whole = int(x)
    number = ("-" if negative else "") + str(whole) + "."
    number += round_fraction(x - whole, precision)
    return _apply_flags(number, spec)