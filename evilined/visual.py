"""Full-screen visual editing mode.

Keystrokes are dispatched through a registry of small command objects to
the cursor edit model; the screen is redrawn from a snapshot of the line
store after every key.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .cursor import CursorEditModel
from .exceptions import EditorError
from .filetypes import get_file_type
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .terminal import TerminalInterface

if TYPE_CHECKING:
    from .engine import BufferEngine
    from .session import EditorSession

logger = logging.getLogger(__name__)

HELP_LINES = [
    "=================================================================",
    "             EVILINED - FULLSCREEN EDITOR - HELP                 ",
    "=================================================================",
    "",
    "  NAVIGATION:",
    "    Arrow Keys    - Move cursor",
    "    Home          - Beginning of line",
    "    End           - End of line",
    "    PgUp/PgDn     - Scroll page up/down",
    "",
    "  EDITING:",
    "    Type          - Insert characters",
    "    Tab           - Insert spaces",
    "    Enter         - Insert new line",
    "    Backspace     - Delete previous character",
    "    Delete        - Delete current character",
    "",
    "  FILE OPERATIONS:",
    "    F2            - Save file",
    "    F10 or Esc    - Exit to line mode",
    "=================================================================",
]


class VisualCommand(ABC):
    """Base class for visual mode key commands."""

    @abstractmethod
    def execute(self, editor: 'VisualEditor', key_event: KeyEvent) -> bool:
        """Execute the command.

        Returns:
            True if the command modified the buffer
        """


class MovementCommand(VisualCommand):
    def execute(self, editor, key_event):
        self._move(editor)
        return False

    @abstractmethod
    def _move(self, editor: 'VisualEditor'):
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor_model.left_char()


class RightCharCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor_model.right_char()


class UpLineCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor_model.up_line()


class DownLineCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor_model.down_line()


class BeginningOfLineCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor_model.move_beginning_of_line()


class EndOfLineCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor_model.move_end_of_line()


class PageUpCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor_model.page_up(editor.page_rows)


class PageDownCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor_model.page_down(editor.page_rows)


class EditCommand(VisualCommand):
    def execute(self, editor, key_event):
        return self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'VisualEditor', key_event: KeyEvent) -> bool:
        pass


class InsertCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        if len(char) == 1 and 32 <= ord(char) < 127:
            return editor.cursor_model.insert_char(char)
        return False


class InsertTabCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.cursor_model.insert_tab()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.cursor_model.insert_newline()


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.cursor_model.backspace()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.cursor_model.delete_char()


class SystemCommand(VisualCommand):
    def execute(self, editor, key_event):
        self._execute_system(editor)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'VisualEditor'):
        pass


class ExitCommand(SystemCommand):
    def _execute_system(self, editor):
        editor.running = False


class SaveCommand(SystemCommand):
    def _execute_system(self, editor):
        editor.save()


class HelpCommand(SystemCommand):
    def _execute_system(self, editor):
        editor.help_visible = True


class KeyBindingRegistry:
    """Maps key events to visual mode commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], VisualCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        special = {
            'left': LeftCharCommand(),
            'right': RightCharCommand(),
            'up': UpLineCommand(),
            'down': DownLineCommand(),
            'home': BeginningOfLineCommand(),
            'end': EndOfLineCommand(),
            'page_up': PageUpCommand(),
            'page_down': PageDownCommand(),
            'enter': InsertNewlineCommand(),
            'tab': InsertTabCommand(),
            'backspace': BackspaceCommand(),
            'delete': DeleteCharCommand(),
            'escape': ExitCommand(),
        }
        for value, command in special.items():
            self.register(KeyType.SPECIAL, value, command)
        self.register(KeyType.FUNCTION, 'f1', HelpCommand())
        self.register(KeyType.FUNCTION, 'f2', SaveCommand())
        self.register(KeyType.FUNCTION, 'f10', ExitCommand())

    def register(self, key_type: KeyType, value: str, command: VisualCommand):
        self._commands[(key_type, value)] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[VisualCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'VisualEditor', key_event: KeyEvent) -> bool:
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)
        if key_event.key_type == KeyType.REGULAR:
            return InsertCharCommand().execute(editor, key_event)
        return False


class VisualEditor:
    """Full-screen editor over the session's line store."""

    def __init__(self, session: 'EditorSession', engine: 'BufferEngine',
                 terminal: Optional[TerminalInterface] = None,
                 keyboard: Optional[KeyboardHandler] = None):
        self.session = session
        self.engine = engine
        self.cursor_model = CursorEditModel(session.store, tab_width=session.settings.tab_width)
        self.terminal = terminal or TerminalInterface()
        self.keyboard = keyboard or KeyboardHandler(self.terminal)
        self.registry = KeyBindingRegistry()
        self.running = False
        self.help_visible = False
        self.status_message: Optional[str] = None

    @property
    def rows(self) -> int:
        """Screen rows in use, including the status line."""
        return max(2, min(self.session.settings.screen_rows, self.terminal.height))

    @property
    def columns(self) -> int:
        return max(2, min(self.session.settings.screen_columns, self.terminal.width))

    @property
    def page_rows(self) -> int:
        return self.rows - 1

    def save(self):
        if not self.session.current_file:
            self.status_message = "No file name (use W name in line mode)"
            return
        try:
            result = self.engine.save()
            self.status_message = result.message
        except EditorError as e:
            self.status_message = f"! {e}"

    def status_text(self) -> str:
        pos = self.cursor_model.cursor_position
        status = (f" F1=Help F2=Save ESC=Exit | Line {pos.row + 1}/{self.session.store.count}"
                  f" Col {pos.column + 1} | {self.session.display_name}")
        if self.status_message:
            status += f" | {self.status_message}"
        return status

    def draw(self):
        if self.help_visible:
            self.terminal.draw_help(HELP_LINES, self.rows)
            return
        self.terminal.draw_screen(
            self.session.store.lines,
            self.cursor_model.top_line,
            self.cursor_model.row,
            self.cursor_model.column,
            rows=self.rows,
            columns=self.columns,
            status=self.status_text(),
            right_status=get_file_type(self.session.current_file),
        )

    def handle_key_event(self, key_event: KeyEvent):
        if self.help_visible:
            self.help_visible = False
            return
        self.status_message = None
        if self.registry.execute(self, key_event):
            self.session.modified = True
        self.cursor_model.scroll_to_cursor(self.page_rows)

    def run(self):
        """Run visual mode until the user leaves it."""
        self.cursor_model.reset()
        self.terminal.setup()
        self.running = True
        try:
            with self.terminal.term.cbreak():
                while self.running:
                    self.draw()
                    key_event = self.keyboard.get_key_event(timeout=None)
                    if key_event is None:
                        # No keyboard available
                        logger.debug("No key input, leaving visual mode")
                        break
                    self.handle_key_event(key_event)
        finally:
            self.running = False
            self.terminal.cleanup()
