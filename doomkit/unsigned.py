"""Unsigned conversions %u, %o, %x and %X for the default, ``h`` and ``hh`` sizes."""

from doomkit.numconv import to_base
from doomkit.spec import FormatSpec
from doomkit.uintfmt import format_unsigned_text, format_zero

_SIZE_BITS = {
    "hh": 8,
    "h": 16,
    "": 32,
    "l": 64,
    "ll": 64,
}

_BASES = {
    "u": (10, False),
    "o": (8, False),
    "x": (16, False),
    "X": (16, True),
}


def truncate(value: int, size: str) -> int:
    """Reduce ``value`` to the unsigned range of the C type named by ``size``."""
    try:
        bits = _SIZE_BITS[size]
    except KeyError:
        raise ValueError(f"unknown length modifier {size!r}") from None
    return int(value) & ((1 << bits) - 1)


def format_unsigned(value: int, spec: FormatSpec) -> str:
    """Format ``value`` for an unsigned conversion according to ``spec``.

    Without a length modifier a zero value follows the special zero rules;
    with ``h`` or ``hh`` it is laid out like any other number.
    """
    try:
        base, upper = _BASES[spec.type]
    except KeyError:
        raise ValueError(f"not an unsigned conversion: {spec.type!r}") from None
    number = truncate(value, spec.size)
    if number == 0 and not spec.size:
        return format_zero(spec)
    return format_unsigned_text(to_base(number, base, upper), spec)