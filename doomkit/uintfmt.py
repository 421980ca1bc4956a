"""Padding and precision rules shared by the unsigned conversions %u, %o, %x and %X."""

from dataclasses import replace

from doomkit.spec import FormatSpec


def _overlay_right(base: str, text: str) -> str:
    """Write ``text`` over the right end of ``base``; what runs past its left edge is lost."""
    if len(text) >= len(base):
        return text[len(text) - len(base):]
    return base[: len(base) - len(text)] + text


def _tail_without(text: str, stops: str) -> str:
    """Return the longest suffix of ``text`` holding none of ``stops``."""
    cut = max(text.rfind(char) for char in stops)
    return text[cut + 1:]


def with_prefix(text: str, spec: FormatSpec) -> str:
    """Add the alternate-form prefix that the ``#`` flag asks for."""
    if not spec.sharp:
        return text
    if spec.type == "o" and (spec.precision != len(text) or not spec.precision):
        return "0" + text
    if spec.type == "x" and not spec.has_width and text[1:2] != "x":
        return "0x" + text
    if spec.type == "X":
        return "0X" + text
    return text


def _zero_fill(text: str, spec: FormatSpec) -> str:
    body = _overlay_right("0" * spec.width, _tail_without(text, "xX0"))
    if spec.sharp and spec.type in ("x", "X"):
        body = "0" + spec.type + body[2:]
    return body


def pad_width(text: str, spec: FormatSpec) -> str:
    """Pad an unsigned number to the field width."""
    if spec.minus:
        if spec.type == "x" and spec.sharp:
            text = "0x" + text
        padded = text.ljust(spec.width)
    elif spec.zero:
        padded = _zero_fill(text, spec)
    else:
        padded = text.rjust(spec.width)
    if spec.sharp and spec.type != "o" and not spec.zero:
        prefixed = "0x" + text
        padded = prefixed.ljust(spec.width) if spec.minus else prefixed.rjust(spec.width)
    return padded


def apply_precision(text: str, spec: FormatSpec) -> str:
    """Zero-extend the digits of ``text`` to the precision, prefix included."""
    base = with_prefix("0" * spec.precision, spec)
    return _overlay_right(base, _tail_without(text, "xX"))


def _bare_octal_zero(spec: FormatSpec) -> str:
    if spec.type != "o" or not spec.sharp:
        return ""
    if not spec.has_width:
        return "0"
    return "0".ljust(spec.width) if spec.minus else "0".rjust(spec.width)


def format_zero(spec: FormatSpec) -> str:
    """Format the value zero for an unsigned conversion."""
    if not spec.has_width and not spec.has_precision:
        return "0"
    if spec.has_precision and spec.precision == 0:
        shown = _bare_octal_zero(spec)
        if spec.has_width and not shown:
            return " " * spec.width
        return shown
    return format_unsigned_text("0", replace(spec, sharp=False, zero=False))


def format_unsigned_text(text: str, spec: FormatSpec) -> str:
    """Lay out already converted unsigned digits according to the spec."""
    shown = with_prefix(text, spec)
    length = len(shown)
    signless = length - int(spec.negative)
    if spec.width <= length and spec.precision <= signless:
        return shown
    if (not spec.has_width and spec.precision > signless) or spec.width <= spec.precision:
        return apply_precision(shown, spec)
    if (not spec.has_precision or spec.precision <= length) and spec.width >= length:
        return pad_width(shown, spec)
    return pad_width(apply_precision(shown, spec), spec)