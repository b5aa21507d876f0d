"""Line range resolution for the command language.

Range text is one of ``""``, ``",Y"``, ``"X"`` or ``"X,Y"`` with 1-based,
inclusive line numbers. Missing or non-positive numbers take defaults from
the current buffer size.
"""

import re
from dataclasses import dataclass

from .constants import EditorConstants
from .exceptions import CommandSyntaxError

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class LineRange:
    """An inclusive pair of 1-based line positions."""

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def positions(self) -> range:
        return range(self.start, self.end + 1)

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)

    def __str__(self) -> str:
        return f"{self.start},{self.end}"


def leading_int(text: str) -> int:
    """Parse a leading integer the lenient way: garbage reads as 0."""
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else 0


def parse_range(text: str, count: int) -> LineRange:
    """Resolve range text against a buffer of ``count`` lines.

    The result is advisory; callers iterate over ``to_range_defaults`` of it.

    Raises:
        CommandSyntaxError: If the text starts with anything other than a
            digit or a comma.
    """
    c = text.lstrip()
    if not c:
        return LineRange(1, count)

    if c[0] == ',':
        y = leading_int(c[1:])
        return LineRange(1, y if y > 0 else count)

    m = _DIGITS.match(c)
    if m:
        digits = m.group(0)
        x = int(digits)
        rest = c[len(digits):].lstrip()
        if rest.startswith(','):
            rest = rest[1:].lstrip()
            y = leading_int(rest) if rest else count
        else:
            y = x
        return LineRange(x if x > 0 else 1, y if y > 0 else count)

    raise CommandSyntaxError("bad range")


def to_range_defaults(line_range: LineRange, count: int) -> LineRange:
    """Normalize a resolved range so that ``1 <= start <= end <= count``.

    With an empty buffer the result is the empty range ``(1, 0)``.
    """
    a, b = line_range.start, line_range.end
    if a < 1:
        a = 1
    if b < 1 or b > count:
        b = count
    if count <= 0:
        return LineRange(1, 0)
    if a > b:
        a, b = b, a
    # Swapping can carry an out-of-range start into the end position
    b = min(b, count)
    a = min(a, b)
    return LineRange(a, b)


def resolve_range(text: str, count: int) -> LineRange:
    return to_range_defaults(parse_range(text, count), count)


def split_range_and_pattern(argument: str) -> tuple[str, str]:
    """Split ``"a,b /old/new/"`` into range text and pattern spec.

    The range is everything before the first delimiter. Without any
    delimiter the pattern part is empty.
    """
    delim = EditorConstants.PATTERN_DELIMITER
    idx = argument.find(delim)
    if idx < 0:
        return argument, ""
    return argument[:idx], argument[idx:]
