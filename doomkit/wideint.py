"""Unsigned conversions %u, %o, %x and %X for the ``l`` and ``ll`` sizes."""

from doomkit.numconv import to_base
from doomkit.spec import FormatSpec
from doomkit.uintfmt import format_unsigned_text, with_prefix
from doomkit.unsigned import truncate

_WIDE_SIZES = ("l", "ll")

_BASES = {
    "u": (10, False),
    "o": (8, False),
    "x": (16, False),
    "X": (16, True),
}


def format_long_unsigned(value: int, spec: FormatSpec) -> str:
    """Format a 64-bit unsigned ``value`` for an ``l`` or ``ll`` conversion.

    Zero gets no special treatment here: it is laid out like any other number.
    """
    if spec.size not in _WIDE_SIZES:
        raise ValueError(f"not a wide length modifier: {spec.size!r}")
    try:
        base, upper = _BASES[spec.type]
    except KeyError:
        raise ValueError(f"not an unsigned conversion: {spec.type!r}") from None
    text = to_base(truncate(value, spec.size), base, upper)
    if spec.type == "x" and spec.size == "ll":
        # %llx applies the alternate-form prefix before the shared layout does.
        text = with_prefix(text, spec)
    return format_unsigned_text(text, spec)