"""A printf-style formatter built on the conversion parser and the type formatters."""

import sys
from dataclasses import replace
from typing import Iterable, Iterator, List, Tuple

from doomkit.charfmt import format_char, format_percent, format_z
from doomkit.floatfmt import format_float
from doomkit.intfmt import format_int, format_intmax
from doomkit.longfloat import format_long_float
from doomkit.numconv import to_base
from doomkit.spec import FormatSpec, contains_directive, parse_spec
from doomkit.unsigned import format_unsigned
from doomkit.wideint import format_long_unsigned

_SIGNED_BITS = {"hh": 8, "h": 16, "": 32, "l": 64, "ll": 64}
_POINTER_MASK = (1 << 64) - 1


def _next_arg(args: Iterator):
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _length(spec: FormatSpec) -> str:
    """Reduce the length modifier to one of "", "h", "hh", "l" or "ll"."""
    first = spec.size[:1]
    if first in ("h", "l"):
        return first * 2 if spec.size[1:2] == first else first
    return ""


def _wrap_signed(value, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((int(value) + half) % (1 << bits)) - half


def _pad(text: str, spec: FormatSpec) -> str:
    if not spec.has_width:
        return text
    return text.ljust(spec.width) if spec.minus else text.rjust(spec.width)


def _format_string(value, spec: FormatSpec) -> str:
    if value is None:
        if spec.zero and spec.has_width:
            return "0" * spec.width
        return "(null)"
    text = str(value)
    if spec.has_precision:
        text = text[: spec.precision]
    return _pad(text, spec)


def _format_pointer(value, spec: FormatSpec) -> str:
    number = 0 if value is None else int(value) & _POINTER_MASK
    if number == 0 and spec.has_precision and spec.precision == 0:
        return "0x"
    return _pad("0x" + to_base(number, 16), spec)


def format_directive(spec: FormatSpec, args: Iterable, written: int) -> Tuple[str, int]:
    """Format one parsed conversion, taking its value from ``args``.

    ``written`` is the count produced so far, stored by %n into the first slot
    of its argument.  Returns the text and the count it adds; %jd and %zd add
    nothing to the count although their text is produced.
    """
    args = iter(args)
    kind = spec.type
    if kind in ("d", "i"):
        if spec.size[:1] in ("j", "z"):
            return format_intmax(_next_arg(args)), 0
        size = _length(spec)
        value = _wrap_signed(_next_arg(args), _SIGNED_BITS[size])
        text = format_int(value, replace(spec, size=size))
    elif kind == "Z":
        text = format_z(spec)
    elif kind in ("u", "o", "x", "X"):
        size = _length(spec)
        value = int(_next_arg(args))
        sized = replace(spec, size=size)
        if size in ("l", "ll"):
            text = format_long_unsigned(value, sized)
        else:
            text = format_unsigned(value, sized)
    elif kind == "c":
        text = format_char(_next_arg(args), spec)
    elif kind == "p":
        text = _format_pointer(_next_arg(args), spec)
    elif kind == "n":
        target = _next_arg(args)
        target[0] = written
        return "", 0
    elif kind == "%":
        text = format_percent(spec)
    elif kind == "s":
        text = _format_string(_next_arg(args), spec)
    elif kind == "f":
        value = float(_next_arg(args))
        if spec.size[:1] == "L":
            text = format_long_float(value, spec)
        else:
            text = format_float(value, spec)
    else:
        return "", 0
    return text, len(text)


def _render(fmt: str, args: Iterable) -> Tuple[str, int]:
    if not contains_directive(fmt):
        return fmt, len(fmt)
    remaining = iter(args)
    pieces: List[str] = []
    count = 0
    pos = 0
    while pos < len(fmt):
        if fmt[pos] == "%":
            spec, pos = parse_spec(fmt, pos, remaining)
            if spec.type:
                text, added = format_directive(spec, remaining, count)
                pieces.append(text)
                count += added
        else:
            pieces.append(fmt[pos])
            count += 1
            pos += 1
    return "".join(pieces), count


def sprintf(fmt: str, *args) -> str:
    """Return ``fmt`` with its conversions replaced by the formatted ``args``."""
    return _render(fmt, args)[0]


def printf(fmt: str, *args) -> int:
    """Write the formatted text to standard output and return the count produced."""
    text, count = _render(fmt, args)
    sys.stdout.write(text)
    return count