import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import EditorConstants
from .exceptions import AllocationError, BoundsError, CapacityError

logger = logging.getLogger(__name__)


@dataclass
class CursorPosition:
    row: int = 0
    column: int = 0

    def __lt__(self, other):
        if self.row != other.row:
            return self.row < other.row
        return self.column < other.column

    def __ge__(self, other):
        return not self < other


class LineStore:
    """Ordered, position-addressed collection of text lines.

    Indices are 0-based here; the 1-based positions of the command
    language are translated by the engine. Lines are plain ``str``
    objects, so no caller can hold on to mutable line content across an
    insert or delete; read by index after every mutation.
    """

    _lines: list[str]
    capacity: int
    max_line_length: int

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        capacity: int = EditorConstants.MAX_LINES,
        max_line_length: int = EditorConstants.MAX_LINE_LENGTH,
    ):
        self.capacity = capacity
        self.max_line_length = max_line_length
        self._lines = []
        if lines is not None:
            self.replace_all(lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, idx: int) -> str:
        self._check_index(idx)
        return self._lines[idx]

    def __iter__(self):
        return iter(list(self._lines))

    @property
    def count(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> list[str]:
        """Snapshot of the current content for rendering."""
        return list(self._lines)

    def _check_index(self, idx: int):
        if not 0 <= idx < len(self._lines):
            raise BoundsError(f"bad line {idx + 1}")

    def _prepare(self, text: str) -> str:
        try:
            value = str(text)
        except MemoryError as e:
            raise AllocationError("alloc failed") from e
        if len(value) > self.max_line_length:
            logger.debug(f"Truncating line of {len(value)} characters to {self.max_line_length}")
            value = value[: self.max_line_length]
        return value

    def make_room(self, pos: int, n: int):
        """Open ``n`` empty slots at ``pos``, shifting later lines forward."""
        if n <= 0:
            return
        if len(self._lines) + n > self.capacity:
            logger.debug(f"make_room({pos}, {n}) rejected at {len(self._lines)}/{self.capacity} lines")
            raise CapacityError("out of space")
        pos = max(0, min(pos, len(self._lines)))
        self._lines[pos:pos] = [""] * n

    def close_gap(self, pos: int, n: int):
        """Remove the lines at ``pos .. pos+n-1`` and shift the rest back."""
        if n <= 0 or pos >= len(self._lines):
            return
        del self._lines[max(0, pos) : pos + n]

    def set_line(self, idx: int, text: str):
        """Replace the content at ``idx``.

        The new value is fully prepared before the old one is dropped, so
        an allocation failure leaves the slot untouched.
        """
        self._check_index(idx)
        self._lines[idx] = self._prepare(text)

    def insert_line(self, pos: int, text: str):
        value = self._prepare(text)
        pos = max(0, min(pos, len(self._lines)))
        self.make_room(pos, 1)
        self._lines[pos] = value

    def ensure_exists(self, idx: int):
        """Grow the store with empty lines up to and including ``idx``.

        Stops silently at capacity.
        """
        while len(self._lines) <= idx:
            if len(self._lines) >= self.capacity:
                return
            self._lines.append("")

    def replace_all(self, lines: Iterable[str]):
        """Discard all content and install ``lines``.

        All-or-nothing: if the new content does not fit, the current
        content is kept.
        """
        prepared = [self._prepare(line) for line in lines]
        if len(prepared) > self.capacity:
            raise CapacityError(f"too many lines ({len(prepared)} > {self.capacity})")
        self._lines = prepared

    def clear(self):
        self._lines = []
