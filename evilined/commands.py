"""Command pattern implementation for line-mode commands.

Each command letter maps to one ``LineCommand``. The registry is the
command boundary: any ``EditorError`` raised while a command runs is turned
into a failed ``CommandResult`` so control always returns to the REPL.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING

from .constants import EditorConstants
from .engine import CommandResult, chomp
from .exceptions import CommandSyntaxError, EditorError
from .ranges import leading_int, split_range_and_pattern

if TYPE_CHECKING:
    from .repl import Repl

logger = logging.getLogger(__name__)

HELP_TEXT = [
    "Commands:",
    "  L [a][,b]           list lines",
    "  I [n]               insert at n (end with a single '.')",
    "  D a[,b]             delete lines",
    "  E n                 edit (replace) line",
    "  R a[,b] /old/new/[g]  replace; 'g' = global per line",
    "  S [a][,b] /text/    search (case-insensitive)",
    "  O name              open (load) file",
    "  W [name]            write (save) file",
    "  V                   fullscreen visual editor mode",
    "  P                   print status",
    "  H or ?              help",
    "  Q                   quit",
]


class LineCommand(ABC):
    """Base class for line-mode commands."""

    @abstractmethod
    def execute(self, repl: 'Repl', argument: str) -> CommandResult:
        """Execute the command.

        Args:
            repl: The REPL running the command
            argument: Command text after the letter, leading whitespace removed

        Returns:
            Result to report to the user
        """


class ListCommand(LineCommand):
    def execute(self, repl, argument):
        return repl.engine.list_lines(argument)


class InsertCommand(LineCommand):
    def execute(self, repl, argument):
        count = repl.session.store.count
        n = leading_int(argument) if argument else count + 1
        return repl.engine.insert(n, repl.read_line)


class DeleteCommand(LineCommand):
    def execute(self, repl, argument):
        try:
            return repl.engine.delete(argument)
        except CommandSyntaxError as e:
            raise CommandSyntaxError("need D a[,b]") from e


class EditCommand(LineCommand):
    def execute(self, repl, argument):
        if not argument:
            raise CommandSyntaxError("need E n")
        return repl.engine.edit(leading_int(argument), repl.read_line)


class ReplaceCommand(LineCommand):
    def execute(self, repl, argument):
        range_text, spec = split_range_and_pattern(argument)
        if not spec:
            raise CommandSyntaxError(EditorConstants.REPLACE_SYNTAX_MESSAGE)
        return repl.engine.replace(range_text, spec)


class SearchCommand(LineCommand):
    def execute(self, repl, argument):
        range_text, spec = split_range_and_pattern(argument)
        if not spec:
            # Bare text searches the whole buffer
            return repl.engine.search(None, argument)
        return repl.engine.search(range_text, spec)


class OpenCommand(LineCommand):
    def execute(self, repl, argument):
        if not argument:
            raise CommandSyntaxError("need filename")
        return repl.engine.load(argument)


class WriteCommand(LineCommand):
    def execute(self, repl, argument):
        return repl.engine.save(argument or None)


class VisualCommand(LineCommand):
    def execute(self, repl, argument):
        repl.run_visual()
        return CommandResult()


class StatusCommand(LineCommand):
    def execute(self, repl, argument):
        return repl.engine.status()


class HelpCommand(LineCommand):
    def execute(self, repl, argument):
        return CommandResult(output=list(HELP_TEXT))


class QuitCommand(LineCommand):
    def execute(self, repl, argument):
        if repl.session.modified and not repl.quit_warned:
            repl.quit_warned = True
            return CommandResult.failure(EditorConstants.UNSAVED_CHANGES_MESSAGE)
        return CommandResult(quit=True)


class CommandRegistry:
    """Registry mapping command letters to commands."""

    def __init__(self):
        self._commands: Dict[str, LineCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        self.register('L', ListCommand())
        self.register('I', InsertCommand())
        self.register('D', DeleteCommand())
        self.register('E', EditCommand())
        self.register('R', ReplaceCommand())
        self.register('S', SearchCommand())
        self.register('O', OpenCommand())
        self.register('W', WriteCommand())
        self.register('V', VisualCommand())
        self.register('P', StatusCommand())
        self.register('H', HelpCommand())
        self.register('?', HelpCommand())
        self.register('Q', QuitCommand())

    def register(self, letter: str, command: LineCommand):
        self._commands[letter.upper()] = command

    def get_command(self, letter: str) -> Optional[LineCommand]:
        return self._commands.get(letter.upper())

    def execute(self, repl: 'Repl', line: str) -> Optional[CommandResult]:
        """Run one command line.

        Returns:
            The command's result, or None for a blank line
        """
        text = chomp(line).lstrip()
        if not text:
            return None
        letter, argument = text[0], text[1:].lstrip()
        command = self.get_command(letter)
        if command is None:
            return CommandResult(ok=False, message="?")
        logger.debug(f"Executing {letter.upper()} {argument!r}")
        try:
            return command.execute(repl, argument)
        except EditorError as e:
            logger.debug(f"{letter.upper()} failed: {e}")
            return CommandResult.failure(str(e))
