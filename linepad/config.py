"""User configuration for the linepad editor.

Options are read from JSON in an OS-appropriate config directory. A missing
or damaged file never stops the editor: problems are logged and defaults
are used instead.
"""

from __future__ import annotations

import codecs
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants
from .cursor import ColumnPolicy

logger = logging.getLogger(__name__)

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class EditorConfig:
    """Editor options that users may change."""
    column_policy: ColumnPolicy = ColumnPolicy.CLAMP
    open_missing_as_new: bool = False
    encoding: str = EditorConstants.DEFAULT_ENCODING
    log_file: Optional[str] = None
    log_level: str = 'WARNING'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        """Build a config from raw values, skipping invalid ones."""
        config = cls()
        for key, value in data.items():
            if not hasattr(config, key):
                logger.warning(f"Ignoring unknown config option {key!r}")
                continue
            if not validate_setting(key, value):
                logger.warning(f"Ignoring invalid value {value!r} for config option {key!r}")
                continue
            if key == 'column_policy':
                value = ColumnPolicy(value)
            elif key == 'log_level':
                value = value.upper()
            setattr(config, key, value)
        return config


def validate_setting(key: str, value: Any) -> bool:
    """Validate a raw config value.

    Args:
        key: Option name.
        value: Value as read from JSON.

    Returns:
        True if the value can be used for the option.
    """
    if key == 'column_policy':
        return value in {policy.value for policy in ColumnPolicy}
    if key == 'open_missing_as_new':
        return isinstance(value, bool)
    if key == 'encoding':
        if not isinstance(value, str):
            return False
        try:
            codecs.lookup(value)
        except LookupError:
            return False
        return True
    if key == 'log_file':
        return value is None or isinstance(value, str)
    if key == 'log_level':
        return isinstance(value, str) and value.upper() in _LOG_LEVELS
    return False


class ConfigStore:
    """Loads EditorConfig from JSON."""

    def __init__(self, config_dir: Optional[Path] = None):
        config_dir = Path(config_dir or platformdirs.user_config_dir(EditorConstants.APP_NAME))
        self._config_file = config_dir / EditorConstants.CONFIG_FILENAME
        self._cache: Optional[EditorConfig] = None

    @property
    def path(self) -> Path:
        return self._config_file

    def load(self) -> EditorConfig:
        """Load the config, falling back to defaults on any problem."""
        if self._cache is not None:
            return self._cache

        if not self._config_file.exists():
            self._cache = EditorConfig()
            return self._cache

        try:
            with open(self._config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load config from {self._config_file}: {e}")
            self._cache = EditorConfig()
            return self._cache

        if not isinstance(data, dict):
            logger.warning("Config file has invalid format (not a dict), ignoring")
            self._cache = EditorConfig()
            return self._cache

        self._cache = EditorConfig.from_dict(data)
        return self._cache


# Global instance
_store: Optional[ConfigStore] = None


def get_config_store() -> ConfigStore:
    """Get the global config store instance."""
    global _store
    if _store is None:
        _store = ConfigStore()
    return _store
