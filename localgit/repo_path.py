"""
Repository Path Validator - Decide whether a requested path may be operated on.

A path is accepted only if it falls under one of the configured repository
roots (when any are configured) and is itself a Git working tree.
"""

import os
from typing import Sequence

from .logger import get_logger

_logger = get_logger()


class RepoPathError(ValueError):
    """Base class for repository path validation failures."""


class NoRepositoryError(RepoPathError):
    """No path was requested and no default repository is configured."""


class InvalidPathError(RepoPathError):
    """The requested path cannot be resolved to an absolute path."""


class AccessDeniedError(RepoPathError):
    """The requested path lies outside every allowed repository root."""


class NotARepositoryError(RepoPathError):
    """The requested path has no .git entry."""


def _is_under_root(abs_path: str, root: str, strict_boundary: bool) -> bool:
    """Check containment of abs_path under root.

    With strict_boundary=False this is a raw string-prefix test, which also
    admits siblings such as /repos/app-backup under /repos/app.
    """
    if not abs_path.startswith(root):
        return False
    if not strict_boundary:
        return True
    rest = abs_path[len(root):]
    return rest == "" or rest.startswith(os.sep) or root.endswith(os.sep)


def _require_git_dir(abs_path: str) -> None:
    # .git may be a directory or a file (worktrees, submodules)
    if not os.path.exists(os.path.join(abs_path, ".git")):
        raise NotARepositoryError(f"not a git repository: {abs_path}")


def validate_repo_path(
    requested_path: str,
    allowed_paths: Sequence[str],
    strict_boundary: bool = False,
) -> str:
    """Validate and normalize a repository path.

    Args:
        requested_path: Path from the caller, may be empty or relative
        allowed_paths: Configured absolute repository roots; empty means
            containment is not enforced
        strict_boundary: Require the match to end on a path separator

    Returns:
        The absolute, validated repository path

    Raises:
        NoRepositoryError: Empty request and no roots configured
        InvalidPathError: Path cannot be made absolute
        AccessDeniedError: Path outside every allowed root
        NotARepositoryError: Path has no .git entry
    """
    if not requested_path:
        if allowed_paths:
            default_path = allowed_paths[0]
            _require_git_dir(default_path)
            return default_path
        raise NoRepositoryError("no repository specified and no defaults configured")

    if "\x00" in requested_path:
        raise InvalidPathError(f"invalid path: embedded null byte in {requested_path!r}")

    try:
        abs_path = os.path.abspath(requested_path)
    except (OSError, ValueError) as e:
        raise InvalidPathError(f"invalid path: {e}") from e

    if allowed_paths and not any(
        _is_under_root(abs_path, root, strict_boundary) for root in allowed_paths
    ):
        _logger.warn("repo_path", "access_denied", {"path": abs_path})
        raise AccessDeniedError(
            f"access denied - path outside allowed repositories: {abs_path}"
        )

    _require_git_dir(abs_path)
    return abs_path
