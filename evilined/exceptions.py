"""Error kinds raised by the buffer engine.

Every error is recovered at the command boundary (see ``commands.py``);
the message of an exception is the human-readable status the REPL prints
after the ``!`` marker.
"""


class EditorError(Exception):
    """Base class for all recoverable editor errors."""


class CommandSyntaxError(EditorError):
    """A range or pattern specification could not be parsed."""


class BoundsError(EditorError):
    """A line number lies outside the buffer."""


class CapacityError(EditorError):
    """The buffer would exceed its line capacity or a line its maximum length."""


class AllocationError(EditorError):
    """Memory for a new line could not be obtained."""


class FileAccessError(EditorError):
    """A file could not be opened, read or written."""
