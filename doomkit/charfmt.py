"""Formatting of single-character conversions: %c, %% and %Z."""

from typing import Union

from doomkit.spec import FormatSpec


def _pad_single(char: str, spec: FormatSpec, width: int) -> str:
    if spec.minus:
        return char.ljust(width)
    if spec.zero:
        return char.rjust(width, "0")
    return char.rjust(width)


def format_char(code: Union[int, str], spec: FormatSpec) -> str:
    """Format a %c argument; only its low byte is written."""
    number = ord(code) if isinstance(code, str) else int(code)
    char = chr(number & 0xFF)
    if not spec.has_width:
        return char
    return _pad_single(char, spec, spec.width)


def format_percent(spec: FormatSpec) -> str:
    """Format a literal percent sign, padded to the width."""
    if spec.width > 0:
        return _pad_single("%", spec, spec.width)
    return "%"


def format_z(spec: FormatSpec) -> str:
    """Format the %Z conversion, which prints the letter Z."""
    if spec.has_width:
        return _pad_single("Z", spec, max(spec.width, 1))
    return "Z"