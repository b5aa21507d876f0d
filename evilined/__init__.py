"""EviLinEd - a line-oriented text buffer editor."""

from .model import LineStore, CursorPosition
from .ranges import LineRange, parse_range, to_range_defaults
from .pattern import find_case_insensitive, replace_in_line
from .session import EditorSession
from .engine import BufferEngine, CommandResult
from .cursor import CursorEditModel

__all__ = [
    'LineStore',
    'CursorPosition',
    'LineRange',
    'parse_range',
    'to_range_defaults',
    'find_case_insensitive',
    'replace_in_line',
    'EditorSession',
    'BufferEngine',
    'CommandResult',
    'CursorEditModel',
]
