"""
Configuration Loader - Load and merge localgit configuration.

Configuration precedence (low → high):
1. ~/.localgit/config.json (global defaults)
2. .localgit/config.json (project config)
3. Environment variables (LOCALGIT_*)

Example config.json:
    {
        "repositories": ["/home/me/src/app", "/home/me/src/lib"],
        "filter_patterns": ["(?m)^Co-Authored-By:.*$"],
        "read_only": false,
        "log_level": "INFO"
    }
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..bodyfilter import ConfigureResult, set_filter_patterns
from ..logger import get_logger
from ..logging_config import configure_from_settings, parse_bool

_logger = get_logger()


def _as_bool(value: Any, default: bool) -> bool:
    """Read a flag that may be a JSON bool or a string such as "false"."""
    if value is None:
        return default
    if isinstance(value, str):
        return parse_bool(value, default)
    return bool(value)


@dataclass
class LocalGitConfig:
    """Parsed localgit configuration.

    Attributes:
        repositories: Allowed repository roots, absolute; the first is the default
        filter_patterns: Body filter rules (empty means built-in defaults)
        read_only: Only expose tools that don't modify repositories
        strict_boundary: Require allowed-root matches to end on a path separator
        log_level: Logging level
        log_directory: Directory for log files
        log_enabled: Write log entries at all
        log_console: Echo log entries to stderr
    """
    repositories: List[str] = field(default_factory=list)
    filter_patterns: List[str] = field(default_factory=list)
    read_only: bool = False
    strict_boundary: bool = False
    log_level: str = "INFO"
    log_directory: Optional[str] = None
    log_enabled: bool = True
    log_console: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "repositories": list(self.repositories),
            "filter_patterns": list(self.filter_patterns),
            "read_only": self.read_only,
            "strict_boundary": self.strict_boundary,
            "log_level": self.log_level,
            "log_directory": self.log_directory,
            "log_enabled": self.log_enabled,
            "log_console": self.log_console,
        }

    def apply_filter_patterns(self) -> Optional[ConfigureResult]:
        """Install filter_patterns into the process-wide body filter, if any."""
        if not self.filter_patterns:
            return None
        _logger.info("config", "filter_patterns_loaded", {"count": len(self.filter_patterns)})
        return set_filter_patterns(self.filter_patterns)

    def configure_logging(self) -> None:
        """Apply the log_* settings to the global logger."""
        configure_from_settings(self.to_dict())


class ConfigLoader:
    """Load configuration from multiple sources with precedence.

    Example:
        loader = ConfigLoader(project_root="/path/to/project")
        config = loader.load()
        print(config.repositories)
    """

    def __init__(
        self,
        project_root: Optional[str] = None,
        home_dir: Optional[str] = None,
    ):
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.home_dir = Path(home_dir) if home_dir else Path.home()

        self.global_config_path = self.home_dir / ".localgit" / "config.json"
        self.project_config_path = self.project_root / ".localgit" / "config.json"

    def load(self) -> LocalGitConfig:
        """Load and merge configuration from all sources."""
        config_dict: Dict[str, Any] = {}

        if self.global_config_path.exists():
            config_dict.update(self._load_json(self.global_config_path))

        if self.project_config_path.exists():
            config_dict.update(self._load_json(self.project_config_path))

        config_dict = self._apply_env_vars(config_dict)

        return LocalGitConfig(
            repositories=self._normalize_repositories(config_dict.get("repositories", [])),
            filter_patterns=list(config_dict.get("filter_patterns") or []),
            read_only=_as_bool(config_dict.get("read_only"), False),
            strict_boundary=_as_bool(config_dict.get("strict_boundary"), False),
            log_level=config_dict.get("log_level", "INFO"),
            log_directory=config_dict.get("log_directory"),
            log_enabled=_as_bool(config_dict.get("log_enabled"), True),
            log_console=_as_bool(config_dict.get("log_console"), False),
        )

    def _load_json(self, path: Path) -> Dict[str, Any]:
        """Load a JSON configuration file, or {} on error."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            _logger.warn("config", "config_read_failed", {"path": str(path), "error": str(e)})
            return {}
        if not isinstance(data, dict):
            _logger.warn("config", "config_not_object", {"path": str(path)})
            return {}
        return data

    def _apply_env_vars(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides.

        Examples:
            LOCALGIT_REPOSITORIES=/a:/b -> config["repositories"] = ["/a", "/b"]
            LOCALGIT_READ_ONLY=1        -> config["read_only"] = True
        """
        repositories = os.environ.get("LOCALGIT_REPOSITORIES")
        if repositories is not None:
            config["repositories"] = [p for p in repositories.split(os.pathsep) if p]

        read_only = os.environ.get("LOCALGIT_READ_ONLY")
        if read_only is not None:
            config["read_only"] = parse_bool(read_only, False)

        strict = os.environ.get("LOCALGIT_STRICT_BOUNDARY")
        if strict is not None:
            config["strict_boundary"] = parse_bool(strict, False)

        env_mappings = {
            "LOCALGIT_LOG_LEVEL": "log_level",
            "LOCALGIT_LOG_DIR": "log_directory",
            "LOCALGIT_LOG_ENABLED": "log_enabled",
            "LOCALGIT_LOG_CONSOLE": "log_console",
        }
        for env_var, config_key in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                config[config_key] = value

        return config

    def _normalize_repositories(self, repositories: Any) -> List[str]:
        if isinstance(repositories, str):
            repositories = [repositories]
        result = []
        for repo in repositories or []:
            path = os.path.expanduser(str(repo))
            if not os.path.isabs(path):
                path = str(self.project_root / path)
            result.append(os.path.abspath(path))
        return result


def load_config(project_root: Optional[str] = None) -> LocalGitConfig:
    """Convenience function to load configuration."""
    return ConfigLoader(project_root=project_root).load()
