"""Editing session state.

One ``EditorSession`` holds everything a running editor mutates: the line
store, the last-used range, the current file name and the settings. It is
created at start-up and passed explicitly to the engine, the REPL and the
visual mode.
"""

from typing import Optional

from .constants import EditorConstants
from .model import LineStore
from .ranges import LineRange
from .settings import EditorSettings


class EditorSession:
    """State shared by the REPL and visual mode for one editing session."""

    def __init__(self, settings: Optional[EditorSettings] = None, lines=None):
        self.settings = settings or EditorSettings()
        self.store = LineStore(
            lines,
            capacity=self.settings.max_lines,
            max_line_length=self.settings.max_line_length,
        )
        self.current_file: Optional[str] = None
        # Display aid only; never used as a default for later commands
        self.last_range: Optional[LineRange] = None
        self.modified = False

    def remember_range(self, start: int, end: int) -> None:
        self.last_range = LineRange(start, end)

    @property
    def display_name(self) -> str:
        return self.current_file or EditorConstants.NO_FILE

    def status_line(self) -> str:
        return EditorConstants.STATUS_LINE.format(self.store.count, self.display_name)
