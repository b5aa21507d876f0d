"""Character-level editing at a (row, column) cursor.

This is the only way visual mode changes the buffer: insert_char,
delete_char, backspace, insert_newline and ensure_exists mutate the line
store; the remaining methods only move the cursor or the view.
"""

import logging

from .constants import EditorConstants
from .exceptions import CapacityError
from .model import CursorPosition, LineStore

logger = logging.getLogger(__name__)


class CursorEditModel:
    store: LineStore
    cursor_position: CursorPosition
    top_line: int  # First visible row, owned by the renderer

    def __init__(self, store: LineStore, tab_width: int = EditorConstants.TAB_WIDTH):
        self.store = store
        self.tab_width = tab_width
        self.cursor_position = CursorPosition()
        self.top_line = 0

    @property
    def row(self) -> int:
        return self.cursor_position.row

    @property
    def column(self) -> int:
        return self.cursor_position.column

    def reset(self):
        """Home the cursor and view, as on entering visual mode."""
        self.cursor_position = CursorPosition()
        self.top_line = 0
        if self.store.count == 0:
            self.ensure_exists(0)

    def _line_length(self, row: int) -> int:
        return len(self.store[row]) if row < self.store.count else 0

    def _clamp_column(self):
        length = self._line_length(self.cursor_position.row)
        if self.cursor_position.column > length:
            self.cursor_position.column = length

    # --- buffer mutators ---

    def ensure_exists(self, idx: int):
        self.store.ensure_exists(idx)

    def insert_char(self, c: str) -> bool:
        """Insert ``c`` at the cursor and advance the column.

        Returns:
            True if the character was inserted, False if the line is full
            or the row could not be created.
        """
        row = self.cursor_position.row
        self.ensure_exists(row)
        if row >= self.store.count:
            return False
        line = self.store[row]
        self._clamp_column()
        if len(line) >= self.store.max_line_length:
            return False
        col = self.cursor_position.column
        self.store.set_line(row, line[:col] + c + line[col:])
        self.cursor_position.column += 1
        return True

    def insert_tab(self) -> bool:
        inserted = False
        for _ in range(self.tab_width):
            inserted = self.insert_char(' ') or inserted
        return inserted

    def delete_char(self) -> bool:
        """Delete the character at the cursor, or join the next line at end of line.

        A join whose result would exceed the line limit is rejected.
        """
        row = self.cursor_position.row
        if row >= self.store.count:
            return False
        self._clamp_column()
        line = self.store[row]
        col = self.cursor_position.column

        if col < len(line):
            self.store.set_line(row, line[:col] + line[col + 1:])
            return True

        if row + 1 < self.store.count:
            next_line = self.store[row + 1]
            if len(line) + len(next_line) > self.store.max_line_length:
                logger.debug(f"Join of rows {row} and {row + 1} rejected: too long")
                return False
            self.store.set_line(row, line + next_line)
            self.store.close_gap(row + 1, 1)
            return True

        return False

    def backspace(self) -> bool:
        if self.cursor_position.column > 0:
            self._clamp_column()
            self.cursor_position.column -= 1
            return self.delete_char()
        row = self.cursor_position.row
        if 0 < row <= self.store.count:
            self.cursor_position.row = row - 1
            self.cursor_position.column = self._line_length(row - 1)
            return self.delete_char()
        return False

    def insert_newline(self) -> bool:
        """Split the current line at the cursor and move to the new line."""
        row = self.cursor_position.row
        self.ensure_exists(row)
        if row >= self.store.count:
            return False
        self._clamp_column()
        line = self.store[row]
        col = self.cursor_position.column
        try:
            self.store.insert_line(row + 1, line[col:])
        except CapacityError:
            logger.debug("Newline rejected: buffer full")
            return False
        self.store.set_line(row, line[:col])
        self.cursor_position.row = row + 1
        self.cursor_position.column = 0
        return True

    # --- navigation ---

    def left_char(self):
        if self.cursor_position.column > 0:
            self._clamp_column()
            self.cursor_position.column -= 1
        elif self.cursor_position.row > 0:
            self.cursor_position.row -= 1
            self.cursor_position.column = self._line_length(self.cursor_position.row)

    def right_char(self):
        row = self.cursor_position.row
        if row >= self.store.count:
            return
        if self.cursor_position.column < self._line_length(row):
            self.cursor_position.column += 1
        elif row < self.store.count - 1:
            self.cursor_position.row += 1
            self.cursor_position.column = 0

    def up_line(self):
        if self.cursor_position.row > 0:
            self.cursor_position.row -= 1
            self._clamp_column()

    def down_line(self):
        if self.cursor_position.row < self.store.count - 1:
            self.cursor_position.row += 1
            self._clamp_column()

    def move_beginning_of_line(self):
        self.cursor_position.column = 0

    def move_end_of_line(self):
        if self.cursor_position.row < self.store.count:
            self.cursor_position.column = self._line_length(self.cursor_position.row)

    def page_up(self, page_rows: int):
        self.cursor_position.row = max(0, self.cursor_position.row - page_rows)
        self.top_line = self.cursor_position.row
        self._clamp_column()

    def page_down(self, page_rows: int):
        row = min(self.cursor_position.row + page_rows, self.store.count - 1)
        self.cursor_position.row = max(0, row)
        self.top_line = self.cursor_position.row
        self._clamp_column()

    def scroll_to_cursor(self, page_rows: int) -> bool:
        """Adjust top_line so the cursor row is visible.

        Returns:
            True if the view moved and needs a full redraw.
        """
        row = self.cursor_position.row
        if row < self.top_line:
            self.top_line = row
            return True
        if row >= self.top_line + page_rows:
            self.top_line = row - page_rows + 1
            return True
        return False
