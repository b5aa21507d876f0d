"""Persistent editor settings.

Settings are read from a JSON file in an OS-appropriate config directory,
or from the file given with --config. Unknown keys are ignored and invalid values
fall back to the defaults with a warning.
"""

from __future__ import annotations

import codecs
import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    """User-tunable limits and defaults."""

    max_lines: int = EditorConstants.MAX_LINES
    max_line_length: int = EditorConstants.MAX_LINE_LENGTH
    replace_limit: int = EditorConstants.REPLACE_ITERATION_LIMIT
    tab_width: int = EditorConstants.TAB_WIDTH
    encoding: str = EditorConstants.DEFAULT_ENCODING
    screen_rows: int = EditorConstants.SCREEN_ROWS
    screen_columns: int = EditorConstants.SCREEN_COLUMNS


# Inclusive bounds for integer settings
_INT_BOUNDS = {
    'max_lines': (1, 1_000_000),
    'max_line_length': (1, 65_535),
    'replace_limit': (1, 1_000_000),
    'tab_width': (1, 32),
    'screen_rows': (2, 1_000),
    'screen_columns': (2, 1_000),
}


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if setting is valid, False otherwise.
    """
    if key in _INT_BOUNDS:
        # bool is an int subclass but never a sensible size
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        low, high = _INT_BOUNDS[key]
        return low <= value <= high

    if key == 'encoding':
        if not isinstance(value, str):
            return False
        try:
            codecs.lookup(value)
        except LookupError:
            return False
        return True

    # Unknown settings are considered valid (forward compatibility)
    return True


class SettingsPersistence:
    """Reads editor settings from a JSON file."""

    def __init__(self, settings_file: Optional[Path] = None):
        """Initialize settings persistence.

        Args:
            settings_file: Explicit JSON file to use instead of the
                platform config directory.
        """
        if settings_file is None:
            self._settings_file = Path(platformdirs.user_config_dir("evilined")) / "settings.json"
        else:
            self._settings_file = Path(settings_file)
        self._settings_cache: Optional[Dict[str, Any]] = None

    def _load_raw(self) -> Dict[str, Any]:
        """Load the raw settings mapping from disk.

        Returns:
            The stored mapping, or an empty dict if the file doesn't exist
            or can't be read.
        """
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                logger.warning("Settings file has invalid format (not a dict), ignoring")
                self._settings_cache = {}
                return self._settings_cache

            self._settings_cache = data
            return self._settings_cache

        except (json.JSONDecodeError, OSError, PermissionError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

    def load_settings(self) -> EditorSettings:
        """Load settings, dropping invalid entries.

        Returns:
            EditorSettings with stored values applied over the defaults.
        """
        raw = self._load_raw()
        known = {f.name for f in fields(EditorSettings)}
        values = {}
        for key, value in raw.items():
            if key not in known:
                logger.debug(f"Ignoring unknown setting {key!r}")
                continue
            if not validate_setting(key, value):
                logger.warning(f"Invalid value {value!r} for setting {key!r}, using default")
                continue
            values[key] = value
        return EditorSettings(**values)


def load_settings(settings_file: Optional[str] = None) -> EditorSettings:
    """Load settings from ``settings_file`` or the user config directory."""
    path = Path(settings_file) if settings_file else None
    return SettingsPersistence(path).load_settings()
