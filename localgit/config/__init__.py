"""
Configuration System - Load localgit settings from files and environment.

Configuration precedence (low → high):
1. ~/.localgit/config.json (global defaults)
2. .localgit/config.json (project config)
3. LOCALGIT_* environment variables
"""

from .loader import ConfigLoader, LocalGitConfig, load_config

__all__ = ["ConfigLoader", "LocalGitConfig", "load_config"]
