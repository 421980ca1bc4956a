"""Conversion specifications and the parser that reads them from a format string."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from doomkit.numconv import digit_count

TYPE_CHARS = frozenset("dioxXufsc%ZpCSODU")
FLAG_CHARS = frozenset("-+0 #")
SIZE_CHARS = frozenset("hlLjz")


@dataclass
class FormatSpec:
    """One conversion: its type, length modifier, width, precision and flags."""

    type: str = ""
    size: str = ""
    width: int = 0
    has_width: bool = False
    precision: int = 0
    has_precision: bool = False
    minus: bool = False
    plus: bool = False
    zero: bool = False
    space: bool = False
    sharp: bool = False
    negative: bool = False
    value: int = 0

    def size_is(self, prefix: str) -> bool:
        """Tell whether the length modifier starts with ``prefix``; ``""`` means none."""
        if not prefix:
            return not self.size
        return self.size.startswith(prefix)


def contains_directive(text: str) -> bool:
    """Tell whether ``text`` holds any conversion at all."""
    return "%" in text


def _c_int(value) -> int:
    """Wrap a value to a 32-bit signed integer, as a C ``int`` argument."""
    return ((int(value) + 2**31) % 2**32) - 2**31


def _is_digit(char: str) -> bool:
    return bool(char) and "0" <= char <= "9"


class _Parser:
    def __init__(self, fmt: str, pos: int, args: Iterator):
        self.fmt = fmt
        self.pos = pos
        self.args = args
        self.spec = FormatSpec()

    def peek(self) -> str:
        return self.fmt[self.pos] if self.pos < len(self.fmt) else ""

    def take_arg(self) -> int:
        try:
            return _c_int(next(self.args))
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    def read_number(self) -> int:
        end = self.pos
        while end < len(self.fmt) and _is_digit(self.fmt[end]):
            end += 1
        value = int(self.fmt[self.pos:end])
        # The cursor moves by the digit count of the value, not of the text.
        self.pos += digit_count(value, 10)
        return value

    def flags(self) -> None:
        spec = self.spec
        while (char := self.peek()) and char in FLAG_CHARS:
            if char == "-":
                spec.minus = True
            elif char == "+":
                spec.plus = True
            elif char == "0":
                spec.zero = True
            elif char == " ":
                spec.space = True
            else:
                spec.sharp = True
            self.pos += 1

    def star_width(self) -> None:
        if self.peek() != "*":
            return
        spec = self.spec
        spec.has_width = True
        spec.width = self.take_arg()
        if spec.width < 0:
            spec.width = -spec.width
            spec.minus = True
        self.pos += 1

    def width(self) -> None:
        char = self.peek()
        if char == "*":
            self.star_width()
        elif _is_digit(char):
            self.spec.width = self.read_number()
            self.spec.has_width = True

    def skip_dots(self, resets: bool) -> None:
        if self.peek() == "." and resets:
            self.spec.precision = 0
            self.spec.has_precision = True
        while self.peek() == ".":
            self.pos += 1

    def precision(self) -> None:
        spec = self.spec
        char = self.peek()
        if not char:
            return
        if char == "*":
            value = self.take_arg()
            if value < 0:
                spec.precision = 0
                spec.has_precision = False
            else:
                spec.precision = value
                spec.has_precision = True
            self.pos += 1
        elif _is_digit(char):
            spec.precision = self.read_number()
            spec.has_precision = True
        else:
            spec.has_precision = True

    def size(self) -> None:
        start = self.pos
        while (char := self.peek()) and char in SIZE_CHARS:
            self.pos += 1
        run = self.fmt[start:self.pos]
        if len(run) <= 2:
            self.spec.size = run

    def kind(self) -> None:
        char = self.peek()
        if char and char in TYPE_CHARS:
            self.spec.type = char
            self.pos += 1

    def parse(self) -> Tuple[FormatSpec, int]:
        self.pos += 1
        self.flags()
        self.star_width()
        self.flags()
        self.width()
        self.flags()
        self.star_width()
        self.flags()
        if self.peek() == ".":
            self.skip_dots(resets=False)
            self.precision()
            self.skip_dots(resets=True)
        self.flags()
        self.size()
        self.flags()
        self.kind()
        return self.spec, self.pos


def parse_spec(fmt: str, pos: int, args: Iterable) -> Tuple[FormatSpec, int]:
    """Parse the conversion whose ``%`` sits at ``fmt[pos]``.

    ``args`` supplies the values for ``*`` widths and precisions and should be an
    iterator, so that the caller sees what was consumed.  Returns the spec and the
    position after it.  When no valid type character follows, ``spec.type`` is
    empty and the position points at the character that stopped the parse.
    """
    return _Parser(fmt, pos, iter(args)).parse()