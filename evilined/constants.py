"""Constants and configuration for the evilined editor."""

class EditorConstants:
    """Central configuration constants for the editor."""
    
    # Buffer limits
    MAX_LINES = 1200  # Default line capacity of the buffer
    MAX_LINE_LENGTH = 255  # Printable characters per line
    REPLACE_ITERATION_LIMIT = 1024  # Upper bound on rewrites per line in a global replace
    
    # Visual mode
    TAB_WIDTH = 8  # Spaces inserted for the Tab key
    SCREEN_ROWS = 24  # Including the status line
    SCREEN_COLUMNS = 80
    EMPTY_ROW_MARKER = "~"  # Drawn for rows past the end of the buffer
    
    # File operations
    DEFAULT_ENCODING = "latin-1"  # Single-byte, round-trips every byte
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files
    
    # Command language
    INSERT_SENTINEL = "."  # A line holding only this ends insert mode
    PATTERN_DELIMITER = "/"
    LINE_NUMBER_FORMAT = "{:05d}"
    
    # REPL prompts and status messages
    PROMPT = "* "
    NO_FILE = "(none)"
    EMPTY_BUFFER_MESSAGE = "(empty)"
    STATUS_LINE = "Lines: {}  File: {}"
    LAST_RANGE_LINE = "Range: {},{}"
    REPLACE_SYNTAX_MESSAGE = "syntax: R a,b /old/new/[g]"
    SEARCH_SYNTAX_MESSAGE = "syntax: S a,b /text/"
    UNSAVED_CHANGES_MESSAGE = "unsaved changes (W to save, Q again to quit)"
