"""File type names shown in the visual mode status line."""

import os

_FILE_TYPES = {
    ('for', 'ftn', 'f77', 'f', 'f90', 'f95'): "FORTRAN source file",
    ('asm', 's'): "ASSEMBLER source file",
    ('sub', 'sbr'): "SUBROUTINE source file",
    ('c',): "C source file",
    ('h',): "C header file",
    ('cpp', 'cxx', 'cc'): "C++ source file",
    ('hpp', 'hxx'): "C++ header file",
    ('pas',): "PASCAL source file",
    ('bas',): "BASIC source file",
    ('cob', 'cbl'): "COBOL source file",
    ('pli', 'pl1'): "PL/I source file",
    ('plm',): "PL/M source file",
    ('alg', 'algol'): "ALGOL source file",
    ('bat',): "DOS batch file",
    ('cmd',): "Command script",
    ('txt',): "Text file",
    ('doc',): "Document file",
    ('md',): "Markdown file",
    ('dat',): "Data file",
    ('ini', 'cfg'): "Configuration file",
    ('hex',): "Intel HEX file",
    ('bin',): "Binary file",
    ('com', 'exe'): "DOS executable",
    ('obj',): "Object file",
    ('lib',): "Library file",
    ('mak',): "Makefile",
}

EXTENSION_TYPES = {ext: name for exts, name in _FILE_TYPES.items() for ext in exts}


def get_file_type(filename) -> str:
    """Describe a file by its extension, or return "" if unknown."""
    if not filename:
        return ""
    ext = os.path.splitext(filename)[1]
    return EXTENSION_TYPES.get(ext[1:].lower(), "") if ext else ""
