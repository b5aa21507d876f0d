"""Buffer command engine.

Implements list, insert, delete, edit, replace, search, load and save on
top of the line store, the range resolver and the pattern matcher. Each
operation runs to completion and returns a ``CommandResult``; failures are
raised as ``EditorError`` subclasses and turned into results by the
command registry.
"""

import errno
import logging
import os
import tempfile
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from .constants import EditorConstants
from .exceptions import BoundsError, CapacityError, FileAccessError
from .pattern import find_case_insensitive, parse_replace_spec, parse_search_spec, replace_in_line
from .ranges import LineRange, parse_range, to_range_defaults
from .session import EditorSession

logger = logging.getLogger(__name__)

# Returns one line of input without its line ending, or None at end of input
LineReader = Callable[[str], Optional[str]]
LineWriter = Callable[[str], None]
RangeArg = Union[str, tuple, LineRange, None]


@dataclass
class CommandResult:
    ok: bool = True
    message: str = ""
    output: List[str] = field(default_factory=list)
    quit: bool = False

    @classmethod
    def failure(cls, message: str) -> "CommandResult":
        return cls(ok=False, message=f"! {message}")


def format_line(index: int, text: str) -> str:
    """Format a listed line with its 0-based index."""
    return f"{EditorConstants.LINE_NUMBER_FORMAT.format(index)}: {text}"


def chomp(text: str) -> str:
    """Strip one trailing line ending (LF, CR or CRLF)."""
    if text.endswith('\n'):
        text = text[:-1]
    if text.endswith('\r'):
        text = text[:-1]
    return text


class BufferEngine:
    """Executes buffer commands against an editor session."""

    def __init__(self, session: EditorSession, write: Optional[LineWriter] = None):
        self.session = session
        # Echo for text shown while a command is still reading input
        self._write = write or (lambda text: None)

    @property
    def store(self):
        return self.session.store

    def _resolve(self, line_range: RangeArg) -> LineRange:
        """Resolve range text (or an explicit pair) and normalize it."""
        count = self.store.count
        if line_range is None:
            raw = LineRange(1, count)
        elif isinstance(line_range, LineRange):
            raw = line_range
        elif isinstance(line_range, tuple):
            raw = LineRange(*line_range)
        else:
            raw = parse_range(line_range, count)
        return to_range_defaults(raw, count)

    # --- listing and searching ---

    def list_lines(self, line_range: RangeArg = "") -> CommandResult:
        if self.store.count == 0:
            return CommandResult(message=EditorConstants.EMPTY_BUFFER_MESSAGE)
        r = self._resolve(line_range)
        output = [format_line(i - 1, self.store[i - 1]) for i in r.positions()]
        self.session.remember_range(r.start, r.end)
        return CommandResult(output=output)

    def search(self, line_range: RangeArg, spec: str) -> CommandResult:
        pattern = parse_search_spec(spec)
        r = self._resolve(line_range)
        output = []
        for i in r.positions():
            text = self.store[i - 1]
            if find_case_insensitive(text, pattern) >= 0:
                output.append(format_line(i - 1, text))
        self.session.remember_range(r.start, r.end)
        logger.debug(f"search {pattern!r} in {r}: {len(output)} match(es)")
        return CommandResult(message=f"-- {len(output)} match(es)", output=output)

    # --- mutation ---

    def insert(self, n: int, read_line: LineReader) -> CommandResult:
        """Insert lines read from ``read_line`` before line ``n``.

        Input ends at a line holding only ``.`` or at end of input. Lines
        accepted before a capacity failure stay in the buffer.
        """
        count = self.store.count
        n = max(1, min(n, count + 1))
        pos = n - 1
        self._write(f"-- Insert at  Line {EditorConstants.LINE_NUMBER_FORMAT.format(pos)}  --")
        try:
            while True:
                text = read_line(f"{EditorConstants.LINE_NUMBER_FORMAT.format(pos + 1)}: ")
                if text is None:
                    break
                text = chomp(text)
                if text == EditorConstants.INSERT_SENTINEL:
                    break
                self.store.insert_line(pos, text)
                self.session.modified = True
                pos += 1
        finally:
            self.session.remember_range(n, pos)
        inserted = pos - (n - 1)
        return CommandResult(message=f"-- inserted {inserted} line(s)")

    def delete(self, line_range: RangeArg) -> CommandResult:
        r = self._resolve(line_range)
        if self.store.count == 0 or r.is_empty:
            return CommandResult(message="-- deleted 0 line(s)")
        self.store.close_gap(r.start - 1, len(r))
        self.session.modified = True
        self.session.remember_range(r.start, min(r.start, self.store.count))
        return CommandResult(message=f"-- deleted {len(r)} line(s)")

    def edit(self, n: int, read_line: LineReader) -> CommandResult:
        """Show line ``n`` and replace it with one line of input."""
        if not 1 <= n <= self.store.count:
            raise BoundsError("bad line")
        self._write(format_line(n - 1, self.store[n - 1]))
        text = read_line(f"{EditorConstants.LINE_NUMBER_FORMAT.format(n)}: ")
        if text is None:
            return CommandResult(message="-- unchanged")
        self.store.set_line(n - 1, chomp(text))
        self.session.modified = True
        self.session.remember_range(n, n)
        return CommandResult(message=f"-- line {n} replaced")

    def replace(self, line_range: RangeArg, spec: str) -> CommandResult:
        parsed = parse_replace_spec(spec)
        r = self._resolve(line_range)
        settings = self.session.settings
        total = 0
        for i in r.positions():
            text = self.store[i - 1]
            if not text:
                continue
            new_text, made = replace_in_line(
                text, parsed.old, parsed.new, parsed.global_,
                max_length=self.store.max_line_length,
                limit=settings.replace_limit,
            )
            if made:
                self.store.set_line(i - 1, new_text)
                total += made
        if total:
            self.session.modified = True
        self.session.remember_range(r.start, r.end)
        return CommandResult(message=f"Replaced {total} occurrence(s).")

    # --- files ---

    def _read_lines(self, name: str) -> list[str]:
        """Read a file into a list of lines no longer than the line limit."""
        width = self.store.max_line_length
        lines = []
        try:
            # Only LF ends a line; a lone CR is line content
            with open(name, 'r', encoding=self.session.settings.encoding, newline='\n') as f:
                for raw in f:
                    text = chomp(raw)
                    # Over-long physical lines continue on the next line
                    while len(text) > width:
                        lines.append(text[:width])
                        text = text[width:]
                    lines.append(text)
                    if len(lines) > self.store.capacity:
                        raise CapacityError(f"file exceeds {self.store.capacity} lines")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {name}: {e}")
            raise FileAccessError("open failed") from e
        return lines

    def load(self, name: str) -> CommandResult:
        """Replace the buffer with the content of ``name``.

        The file is read completely before the buffer is touched, so a
        failed load leaves the previous content in place.
        """
        lines = self._read_lines(name)
        self.store.replace_all(lines)
        self.session.current_file = name
        self.session.modified = False
        self.session.remember_range(1, self.store.count)
        logger.debug(f"Loaded {self.store.count} line(s) from {name}")
        return CommandResult(message=f"-- loaded {self.store.count} line(s)")

    def save(self, name: Optional[str] = None) -> CommandResult:
        """Write the buffer to ``name`` (or the current file) atomically."""
        filename = name or self.session.current_file
        if not filename:
            raise FileAccessError("W needs filename (no current file)")

        content = ''.join(line + '\n' for line in self.store)
        dir_name = os.path.dirname(filename) or '.'
        temp_filename = None
        try:
            # Temp file in the target directory so the rename stays on one filesystem
            with tempfile.NamedTemporaryFile(
                mode='w',
                encoding=self.session.settings.encoding,
                newline='\n',
                dir=dir_name,
                prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
                suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                delete=False,
            ) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            os.replace(temp_filename, filename)

        except (OSError, UnicodeEncodeError) as e:
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            logger.warning(f"Could not save {filename}: {e}")
            if isinstance(e, PermissionError):
                raise FileAccessError(f"write failed: permission denied saving {filename}") from e
            if isinstance(e, OSError) and e.errno == errno.ENOSPC:
                raise FileAccessError("write failed: no space left on device") from e
            raise FileAccessError(f"write failed: cannot save to {filename}") from e

        self.session.current_file = filename
        self.session.modified = False
        return CommandResult(message=f"-- wrote {self.store.count} line(s) to {filename}")

    def status(self) -> CommandResult:
        output = []
        last = self.session.last_range
        if last is not None:
            output.append(EditorConstants.LAST_RANGE_LINE.format(last.start, last.end))
        return CommandResult(message=self.session.status_line(), output=output)
