"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles full-screen terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception as e:
                # curtsies can fail to initialize without a real tty (CI,
                # pipes); visual mode then gets no keys and exits on EOF.
                logger.warning(f"Keyboard input unavailable: {e}")
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                # Teardown should never crash the editor
                logger.warning(f"Could not restore keyboard mode: {e}")
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def clear_screen(self):
        print(self.term.home + self.term.clear, end='')

    def draw_screen(self, lines: list[str], first_row: int, cursor_row: int, cursor_col: int,
                    rows: int, columns: int, status: str, right_status: str = ""):
        """Draw a window of buffer lines, the status line, and position the cursor.

        Args:
            lines: Snapshot of the whole buffer
            first_row: Index of the buffer line shown on screen row 0
            cursor_row: Cursor row in buffer coordinates
            cursor_col: Cursor column
            rows: Screen rows including the status line
            columns: Screen width
            status: Left part of the status line
            right_status: Text right-aligned on the status line, dropped if it
                would overlap
        """
        self.clear_screen()
        for y in range(rows - 1):
            idx = first_row + y
            print(self.term.move(y, 0), end='')
            if idx < len(lines):
                print(lines[idx][:columns], end='')
            else:
                print(EditorConstants.EMPTY_ROW_MARKER, end='')

        status_text = status[:columns]
        if right_status and len(status_text) + len(right_status) < columns:
            status_text = status_text.ljust(columns - len(right_status)) + right_status
        print(self.term.move(rows - 1, 0) + self.term.reverse + status_text.ljust(columns)
              + self.term.normal, end='')

        self.move_cursor(cursor_row - first_row, min(cursor_col, columns - 1))

    def move_cursor(self, y: int, x: int):
        print(self.term.move(y, x) + self.term.normal_cursor, end='', flush=True)

    def draw_help(self, help_lines: list[str], rows: int):
        """Draw a help page with a continue prompt on the last row."""
        self.clear_screen()
        for i, line in enumerate(help_lines):
            print(self.term.move(i, 0) + line, end='')
        print(self.term.move(rows - 1, 0) + "  Press any key to continue...", end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None when no input is available.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (including status line)."""
        return self.term.height
