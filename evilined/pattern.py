"""Pattern matching and find/replace on single lines."""

import logging
import string
from dataclasses import dataclass

from .constants import EditorConstants
from .exceptions import CommandSyntaxError

logger = logging.getLogger(__name__)

# ASCII-only folding; str.lower() would also fold non-ASCII letters
_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


@dataclass
class ReplaceSpec:
    old: str
    new: str
    global_: bool = False


def find_case_insensitive(haystack: str, needle: str) -> int:
    """Return the first index of ``needle`` in ``haystack`` ignoring case, or -1.

    The empty needle matches at index 0.
    """
    if not needle:
        return 0
    return haystack.translate(_ASCII_FOLD).find(needle.translate(_ASCII_FOLD))


def replace_in_line(
    line: str,
    old: str,
    new: str,
    global_: bool = False,
    max_length: int = EditorConstants.MAX_LINE_LENGTH,
    limit: int = EditorConstants.REPLACE_ITERATION_LIMIT,
) -> tuple[str, int]:
    """Replace case-sensitive literal occurrences of ``old`` with ``new``.

    Scanning resumes after each inserted ``new``, so matches never overlap
    and replacement text is not rescanned. A replacement that would push
    the line past ``max_length`` stops the scan; edits made before it are
    kept.

    Returns:
        Tuple of (rewritten line, number of replacements).
    """
    if not old:
        return line, 0

    made = 0
    pos = 0
    while made < limit:
        found = line.find(old, pos)
        if found < 0:
            break
        if len(line) - len(old) + len(new) > max_length:
            logger.debug(f"Replacement would exceed {max_length} characters, stopping")
            break
        try:
            line = line[:found] + new + line[found + len(old):]
        except MemoryError:
            logger.warning("Out of memory rewriting line, keeping earlier replacements")
            break
        made += 1
        pos = found + len(new)
        if not global_:
            break
    else:
        logger.debug(f"Replace limit of {limit} reached")

    return line, made


def parse_delimited(text: str, delim: str = EditorConstants.PATTERN_DELIMITER) -> tuple[str, str]:
    """Read one ``delim``-enclosed segment from the start of ``text``.

    Returns:
        Tuple of (segment, text after the closing delimiter).

    Raises:
        CommandSyntaxError: If ``text`` does not open with ``delim`` or the
            segment is not closed.
    """
    if not text.startswith(delim):
        raise CommandSyntaxError(f"expected '{delim}'")
    end = text.find(delim, 1)
    if end < 0:
        raise CommandSyntaxError(f"missing closing '{delim}'")
    return text[1:end], text[end + 1:]


def parse_replace_spec(spec: str) -> ReplaceSpec:
    """Parse ``/old/new/`` with an optional trailing ``g`` flag."""
    delim = EditorConstants.PATTERN_DELIMITER
    try:
        old, rest = parse_delimited(spec.lstrip(), delim)
        # The closing delimiter of the old text opens the new text
        new, rest = parse_delimited(delim + rest, delim)
    except CommandSyntaxError as e:
        raise CommandSyntaxError(EditorConstants.REPLACE_SYNTAX_MESSAGE) from e
    flag = rest.lstrip()
    return ReplaceSpec(old=old, new=new, global_=flag[:1] in ('g', 'G'))


def parse_search_spec(spec: str) -> str:
    """Parse ``/text/`` or a bare trailing token into the search text."""
    text = spec.lstrip()
    if text.startswith(EditorConstants.PATTERN_DELIMITER):
        try:
            pattern, _ = parse_delimited(text)
        except CommandSyntaxError as e:
            raise CommandSyntaxError(EditorConstants.SEARCH_SYNTAX_MESSAGE) from e
        return pattern
    return text
