from __future__ import annotations

import importlib.metadata


def get_version() -> str:
    """Return the installed distribution version, or "unknown" from a source tree."""
    try:
        return importlib.metadata.version("evilined")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_version_string() -> str:
    return f"evilined {get_version()}"
