"""Integer-to-text conversions shared by the formatters."""

import string

_DIGITS = string.digits + string.ascii_lowercase


def _check_base(base: int) -> None:
    if not 2 <= base <= len(_DIGITS):
        raise ValueError(f"base must be between 2 and {len(_DIGITS)}, got {base}")


def base_alphabet(base: int, upper: bool = False) -> str:
    """Return the digit characters used for ``base``, letters in the chosen case."""
    _check_base(base)
    alphabet = _DIGITS[:base]
    return alphabet.upper() if upper else alphabet


def digit_count(value: int, base: int = 10) -> int:
    """Return how many digits ``value`` takes in ``base``; zero takes one."""
    _check_base(base)
    value = abs(value)
    if value == 0:
        return 1
    count = 0
    while value:
        value //= base
        count += 1
    return count


def to_base(value: int, base: int, upper: bool = False) -> str:
    """Render a non-negative integer in ``base``."""
    if value < 0:
        raise ValueError(f"cannot render negative value {value} without a sign")
    alphabet = base_alphabet(base, upper)
    if value == 0:
        return alphabet[0]
    digits = []
    while value:
        value, digit = divmod(value, base)
        digits.append(alphabet[digit])
    return "".join(reversed(digits))


def signed_decimal(value: int) -> str:
    """Render an integer in decimal with a leading minus sign when negative."""
    if value < 0:
        return "-" + to_base(-value, 10)
    return to_base(value, 10)