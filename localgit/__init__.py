"""
localgit - Local Git tools for Claude agents.

This package exposes local Git operations as in-process MCP tools for the
Claude Agent SDK, and filters unwanted trailers (Co-Authored-By lines, tool
footers) out of commit messages and PR bodies.
"""

from .bodyfilter import (
    BodyFilter,
    ConfigureResult,
    FilterConfig,
    RejectedPattern,
    filter_body,
    set_filter_patterns,
)
from .gitops import CliGitOperations, GitCommandError, GitOperations
from .repo_path import (
    AccessDeniedError,
    InvalidPathError,
    NoRepositoryError,
    NotARepositoryError,
    RepoPathError,
    validate_repo_path,
)

__version__ = "0.1.0"
__all__ = [
    "BodyFilter",
    "ConfigureResult",
    "FilterConfig",
    "RejectedPattern",
    "filter_body",
    "set_filter_patterns",
    "CliGitOperations",
    "GitCommandError",
    "GitOperations",
    "AccessDeniedError",
    "InvalidPathError",
    "NoRepositoryError",
    "NotARepositoryError",
    "RepoPathError",
    "validate_repo_path",
]
