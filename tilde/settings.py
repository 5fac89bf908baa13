"""User settings loaded from the platform config directory.

Settings live in ``config.json`` under ``platformdirs.user_config_dir``.
A missing file means defaults; a malformed file or an invalid value is
logged and replaced by its default so the editor always starts.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    quit_times: int = EditorConstants.QUIT_TIMES
    default_line_ending: str = EditorConstants.DEFAULT_LINE_ENDING
    show_welcome: bool = True


def default_config_dir() -> Path:
    return Path(platformdirs.user_config_dir(EditorConstants.NAME))


def validate_setting(key: str, value: Any) -> bool:
    """Return True if ``value`` is acceptable for setting ``key``.

    Unknown keys are accepted and ignored for forward compatibility.
    """
    if key == 'quit_times':
        # bool is an int subclass
        return isinstance(value, int) and not isinstance(value, bool) and value >= 1
    if key == 'default_line_ending':
        return value in EditorConstants.LINE_ENDINGS
    if key == 'show_welcome':
        return isinstance(value, bool)
    return True


class SettingsStore:
    """Reads ``config.json``."""

    def __init__(self, config_dir: Optional[Path] = None):
        config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
        self._settings_file = config_dir / "config.json"

    def _read_raw(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> Settings:
        settings = Settings()
        for key, value in self._read_raw().items():
            if not hasattr(settings, key):
                continue
            if not validate_setting(key, value):
                logger.warning(f"Invalid value {value!r} for setting {key}, using default")
                continue
            setattr(settings, key, value)
        return settings


def load_settings(config_dir: Optional[Path] = None) -> Settings:
    return SettingsStore(config_dir).load()
