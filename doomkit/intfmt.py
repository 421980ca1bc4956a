"""Formatting of signed decimal conversions: %d, %i and the intmax variants."""

from dataclasses import replace

from doomkit.numconv import signed_decimal
from doomkit.spec import FormatSpec


def _overlay_right(base: str, text: str) -> str:
    """Write ``text`` over the right end of ``base``; what runs past its left edge is lost."""
    if len(text) >= len(base):
        return text[len(text) - len(base):]
    return base[: len(base) - len(text)] + text


def apply_sign(text: str, spec: FormatSpec) -> str:
    """Prefix ``+`` or a space when the spec asks for one."""
    if spec.plus:
        return "+" + text
    if spec.space:
        return " " + text
    return text


def _pad_minus_or_zero(text: str, spec: FormatSpec) -> str:
    width = spec.width
    if spec.minus:
        return text.ljust(width)
    digits = signed_decimal(spec.value)
    if spec.has_precision and spec.precision > len(digits):
        return _overlay_right(" " * width, text)
    fill = " " if spec.has_precision and spec.precision < len(text) else "0"
    buffer = fill * width
    if spec.negative or spec.plus or spec.space:
        if buffer and text:
            buffer = text[0] + buffer[1:]
        return _overlay_right(buffer, text[1:])
    return _overlay_right(buffer, text)


def pad_int_width(text: str, spec: FormatSpec) -> str:
    """Pad an already signed number to the field width."""
    if spec.minus or spec.zero:
        return _pad_minus_or_zero(text, spec)
    return _overlay_right(" " * spec.width, text)


def int_precision(text: str, spec: FormatSpec, sign_len: int) -> str:
    """Zero-extend ``text`` to the precision, keeping ``sign_len`` sign characters in front."""
    signed = apply_sign(text, spec)
    buffer = "0" * (spec.precision + sign_len)
    if sign_len:
        if buffer and signed:
            buffer = signed[0] + buffer[1:]
        return _overlay_right(buffer, signed[1:])
    return _overlay_right(buffer, signed)


def _empty_int(spec: FormatSpec) -> str:
    sign = "+" if spec.plus else " " if spec.space else ""
    if not spec.has_width:
        return sign
    return sign.ljust(spec.width) if spec.minus else sign.rjust(spec.width)


def _print_int(text: str, spec: FormatSpec) -> str:
    length = len(text)
    sign_len = int(spec.space) + int(spec.plus) + int(spec.negative)
    if (not spec.has_width and not spec.has_precision) or (
        spec.width < length and spec.precision < length - sign_len
    ):
        return apply_sign(text, spec)
    if (
        (not spec.has_width or spec.width < length)
        and spec.precision > length - sign_len
    ) or spec.width <= spec.precision:
        return int_precision(text, spec, sign_len)
    if (not spec.has_precision or spec.precision <= length) and spec.width >= length:
        return pad_int_width(apply_sign(text, spec), spec)
    if spec.space:
        sign_len -= 1
        spec = replace(spec, space=False)
    return pad_int_width(int_precision(text, spec, sign_len), spec)


def format_int(value: int, spec: FormatSpec) -> str:
    """Format a signed integer for %d or %i; the spec itself is left untouched."""
    spec = replace(spec, value=value, negative=spec.negative or value < 0)
    if spec.negative:
        spec = replace(spec, space=False, plus=False)
    elif spec.plus:
        spec = replace(spec, space=False)
    if value == 0 and spec.has_precision and spec.precision == 0:
        return _empty_int(spec)
    return _print_int(signed_decimal(value), spec)


def format_intmax(value: int) -> str:
    """Format a 64-bit signed value for %jd and %zd, with no padding."""
    wrapped = ((int(value) + 2**63) % 2**64) - 2**63
    return signed_decimal(wrapped)