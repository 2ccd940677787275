"""
Translations - Key/value overrides for tool descriptions and titles.

Values are resolved once per key and cached for the life of the helper:
1. LOCALGIT_<KEY> environment variable
2. Key in localgit-config.json (current directory)
3. The caller's default

The same JSON file may carry a `filter_patterns` array, which replaces the
process-wide body filter rules when the helper is created.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .bodyfilter import set_filter_patterns
from .logger import get_logger

_logger = get_logger()

CONFIG_FILE_NAME = "localgit-config.json"
ENV_PREFIX = "LOCALGIT_"
FILTER_PATTERNS_KEY = "filter_patterns"

TranslationFunc = Callable[[str, str], str]


def null_translation_helper(key: str, default_value: str) -> str:
    """Translation function that always returns the default."""
    return default_value


def _read_config_file(path: Path) -> Dict[str, Any]:
    """Read the JSON config file, returning {} if it is absent or unreadable."""
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        _logger.warn("translations", "config_read_failed", {"path": str(path), "error": str(e)})
        return {}
    if not isinstance(data, dict):
        _logger.warn("translations", "config_not_object", {"path": str(path)})
        return {}
    return data


class TranslationHelper:
    """Resolve translation keys with caching.

    Example:
        t = TranslationHelper()
        t("TOOL_GIT_STATUS_DESCRIPTION", "Shows the working tree status")
        t.dump()  # write every resolved key to localgit-config.json
    """

    def __init__(self, config_dir: Optional[str] = None):
        self.config_path = Path(config_dir or os.getcwd()) / CONFIG_FILE_NAME
        self._config = _read_config_file(self.config_path)
        self._cache: Dict[str, str] = {}

        patterns = self._config.get(FILTER_PATTERNS_KEY)
        if isinstance(patterns, list) and patterns:
            _logger.info("translations", "filter_patterns_loaded", {"count": len(patterns)})
            set_filter_patterns(patterns)

    def __call__(self, key: str, default_value: str) -> str:
        key = key.upper()
        if key in self._cache:
            return self._cache[key]

        env_value = os.environ.get(ENV_PREFIX + key)
        if env_value is not None:
            value = env_value
        else:
            configured = self._config.get(key)
            value = configured if isinstance(configured, str) else default_value

        self._cache[key] = value
        return value

    @property
    def key_map(self) -> Dict[str, str]:
        return dict(self._cache)

    def dump(self) -> None:
        """Write the resolved keys to the config file, keeping filter_patterns."""
        dump_translation_key_map(self._cache, self.config_path)


def dump_translation_key_map(key_map: Dict[str, str], path: Optional[Path] = None) -> None:
    """Write key_map as JSON, preserving any filter_patterns already in the file.

    Raises:
        OSError: If the file cannot be written
    """
    path = path or Path.cwd() / CONFIG_FILE_NAME
    existing = _read_config_file(path)

    output: Dict[str, Any] = dict(key_map)
    patterns = existing.get(FILTER_PATTERNS_KEY)
    if patterns:
        output[FILTER_PATTERNS_KEY] = patterns

    with open(path, "w", encoding="utf-8") as f:
        json.dump(output, f, indent=2)
