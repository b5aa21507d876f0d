"""EviLinEd CLI entry point.

Allows running via `python -m evilined` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .version import get_version_string

USAGE = "usage: evilined [--version] [--debug] [--config PATH] [FILE]"


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[list[str]] = None) -> None:
    # Small arg parsing for version, debug logging, config location, and optional filename
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    debug = False
    config_path = None
    filename = None
    while args:
        arg = args.pop(0)
        if arg == "--debug":
            debug = True
        elif arg == "--config":
            if not args:
                print(USAGE, file=sys.stderr)
                sys.exit(2)
            config_path = args.pop(0)
        elif arg.startswith("-") and arg != "-":
            print(USAGE, file=sys.stderr)
            sys.exit(2)
        elif filename is None:
            filename = arg
    _configure_logging(debug)

    from .exceptions import CapacityError, EditorError
    from .repl import Repl
    from .session import EditorSession
    from .settings import load_settings

    session = EditorSession(load_settings(config_path))
    repl = Repl(session)
    if filename:
        try:
            repl.engine.load(filename)
        except CapacityError as e:
            # The file exists; keep it out of reach of a bare W
            logging.getLogger(__name__).warning(f"Initial load of {filename} failed: {e}")
            print(f"! couldn't open '{filename}': {e} (starting empty)")
        except EditorError as e:
            logging.getLogger(__name__).debug(f"Initial load failed: {e}")
            print(f"! couldn't open '{filename}' (starting empty)")
            session.current_file = filename
    sys.exit(repl.run())


if __name__ == "__main__":  # pragma: no cover
    main()
