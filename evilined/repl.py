"""Line-mode read-eval-print loop."""

import os
import sys
import time
from typing import Callable, Optional, TextIO

from .commands import CommandRegistry
from .constants import EditorConstants
from .engine import BufferEngine, CommandResult
from .session import EditorSession


def banner(session: EditorSession, filename: Optional[str]) -> list[str]:
    """Build the start-up banner for ``filename``."""
    name = filename or EditorConstants.NO_FILE
    if filename and os.path.exists(filename):
        file_status = f"EXISTING FILE ({session.store.count} LINES)"
    else:
        file_status = "NEW FILE"
    rule = "=" * 65
    return [
        rule,
        "              E V I L I N E D   Advanced Line Editor".ljust(65),
        rule,
        f"               Active File    :   {name.upper()}",
        f"               File Status    :   {file_status}",
        f"               System Time    :   {time.strftime('%H:%M:%S')}",
        rule,
        "         Ready.  Type '?' for Help or 'V' for Visual Mode.",
        rule,
        "",
    ]


class Repl:
    """Reads command lines, runs them, and prints results and status."""

    def __init__(self, session: EditorSession, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None,
                 visual_factory: Optional[Callable[['Repl'], object]] = None):
        self.session = session
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.engine = BufferEngine(session, write=self.write)
        self.registry = CommandRegistry()
        self._visual_factory = visual_factory
        self.running = False
        # Set by a Q refused for unsaved changes; cleared by the next command
        self.quit_warned = False

    def write(self, text: str = ""):
        print(text, file=self.stdout)

    def read_line(self, prompt: str) -> Optional[str]:
        """Prompt for and read one line; None at end of input."""
        print(prompt, end='', file=self.stdout, flush=True)
        line = self.stdin.readline()
        if not line:
            return None
        return line

    def report(self, result: CommandResult):
        for line in result.output:
            self.write(line)
        if result.message:
            self.write(result.message)

    def run_visual(self):
        if self._visual_factory is not None:
            editor = self._visual_factory(self)
        else:
            from .visual import VisualEditor
            editor = VisualEditor(self.session, self.engine)
        editor.run()

    def execute(self, line: str) -> Optional[CommandResult]:
        warned = self.quit_warned
        result = self.registry.execute(self, line)
        if warned and result is not None:
            self.quit_warned = False
        if result is not None:
            self.report(result)
        return result

    def run(self, show_banner: bool = True) -> int:
        """Run until Q or end of input.

        Returns:
            Process exit status
        """
        if show_banner:
            for line in banner(self.session, self.session.current_file):
                self.write(line)
        self.write(self.session.status_line())
        self.running = True
        while self.running:
            line = self.read_line(EditorConstants.PROMPT)
            if line is None:
                break
            result = self.execute(line)
            if result is None:
                continue
            if result.quit:
                break
            self.write(self.session.status_line())
        self.running = False
        return 0
