"""
Git MCP Tools - Local Git repository tools for Claude.

These tools use the @tool decorator from claude-agent-sdk to create
in-process MCP tools. Every tool except git_init and git_list_repositories
validates its repo_path against the configured repositories before any git
command runs.
"""

import json
import math
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from claude_agent_sdk import SdkMcpTool, tool

from .bodyfilter import BodyFilter, get_default_filter
from .gitops import GitCommandError, GitOperations
from .logger import get_logger
from .repo_path import RepoPathError, validate_repo_path
from .tool import git_tool_definition, register_git_tools
from .translations import TranslationFunc, null_translation_helper

_logger = get_logger()

DEFAULT_LOG_MAX_COUNT = 10


@dataclass
class GitToolDependencies:
    """What the git tools need at call time.

    Attributes:
        git_ops: Git command implementation
        repo_paths: Allowed repository roots; the first is the default
        strict_boundary: Require allowed-root matches to end on a path separator
        body_filter: Filter for commit messages (process-wide filter if None)
    """
    git_ops: GitOperations
    repo_paths: List[str] = field(default_factory=list)
    strict_boundary: bool = False
    body_filter: Optional[BodyFilter] = None

    def get_body_filter(self) -> BodyFilter:
        return self.body_filter or get_default_filter()


def _text_result(text: str) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}]}


def _error_result(text: str) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": True}


def _parse_args(args: Any) -> Dict[str, Any]:
    """Normalize tool arguments to a dict.

    Raises:
        ValueError: If args is neither a mapping nor a JSON object string
    """
    if args is None:
        return {}
    if isinstance(args, (str, bytes)):
        args = json.loads(args)
    if not isinstance(args, dict):
        raise ValueError(f"expected an object, got {type(args).__name__}")
    return args


def _optional_string(args: Dict[str, Any], key: str) -> str:
    value = args.get(key)
    return value if isinstance(value, str) else ""


def split_file_list(files: str) -> List[str]:
    """Split a file argument on commas, else on spaces, else keep it whole."""
    if "," in files:
        parts = files.split(",")
    elif " " in files:
        parts = files.split(" ")
    else:
        return [files]
    return [p.strip() for p in parts if p.strip()]


def build_git_tools(
    deps: GitToolDependencies,
    t: TranslationFunc = null_translation_helper,
) -> List[SdkMcpTool]:
    """Build the SDK tools bound to deps.

    Args:
        deps: Git implementation and repository configuration
        t: Translation function for descriptions

    Returns:
        List of SdkMcpTool, in catalog order
    """
    register_git_tools(t)

    def _git_tool(name: str):
        definition = git_tool_definition(name, t)
        return tool(definition.name, definition.description, definition.parameters)

    def _resolve(args: Dict[str, Any]) -> str:
        return validate_repo_path(
            _optional_string(args, "repo_path"),
            deps.repo_paths,
            strict_boundary=deps.strict_boundary,
        )

    def _call(tool_name: str, raw_args: Any, run, failure: str) -> Dict[str, Any]:
        """Parse args, validate the repository, run the operation, format errors."""
        try:
            args = _parse_args(raw_args)
        except ValueError as e:
            return _error_result(f"Failed to parse arguments: {e}")

        try:
            repo_path = _resolve(args)
        except RepoPathError as e:
            return _error_result(f"Repository path error: {e}")

        _logger.debug("git_tools", "tool_called", {"tool": tool_name, "repo_path": repo_path})

        try:
            return run(repo_path, args)
        except (GitCommandError, OSError) as e:
            _logger.warn("git_tools", "git_failed", {"tool": tool_name, "error": str(e)})
            return _error_result(f"{failure}: {e}")

    @_git_tool("git_status")
    async def git_status(args: Dict[str, Any]) -> Dict[str, Any]:
        """Show working tree status."""
        def run(repo_path, _args):
            status = deps.git_ops.get_status(repo_path)
            return _text_result(f"Repository status for {repo_path}:\n{status}")
        return _call("git_status", args, run, "Failed to get status")

    @_git_tool("git_diff_unstaged")
    async def git_diff_unstaged(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, _args):
            diff = deps.git_ops.get_diff_unstaged(repo_path)
            return _text_result(f"Unstaged changes for {repo_path}:\n{diff}")
        return _call("git_diff_unstaged", args, run, "Failed to get unstaged diff")

    @_git_tool("git_diff_staged")
    async def git_diff_staged(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, _args):
            diff = deps.git_ops.get_diff_staged(repo_path)
            return _text_result(f"Staged changes for {repo_path}:\n{diff}")
        return _call("git_diff_staged", args, run, "Failed to get staged diff")

    @_git_tool("git_diff")
    async def git_diff(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            target = parsed.get("target")
            if not isinstance(target, str):
                return _error_result("target must be a string")
            diff = deps.git_ops.get_diff(repo_path, target)
            return _text_result(f"Diff with {target} for {repo_path}:\n{diff}")
        return _call("git_diff", args, run, "Failed to get diff")

    @_git_tool("git_commit")
    async def git_commit(args: Dict[str, Any]) -> Dict[str, Any]:
        """Commit staged changes; the message is filtered for trailers first."""
        def run(repo_path, parsed):
            message = parsed.get("message")
            if not isinstance(message, str):
                return _error_result("message must be a string")
            message = deps.get_body_filter().filter(message)
            if not message:
                return _error_result("message cannot be empty after filtering")
            return _text_result(deps.git_ops.commit_changes(repo_path, message))
        return _call("git_commit", args, run, "Failed to commit")

    @_git_tool("git_add")
    async def git_add(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            files = parsed.get("files")
            if not isinstance(files, str):
                return _error_result("files must be a string")
            file_list = split_file_list(files)
            return _text_result(deps.git_ops.add_files(repo_path, file_list))
        return _call("git_add", args, run, "Failed to add files")

    @_git_tool("git_reset")
    async def git_reset(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, _args):
            return _text_result(deps.git_ops.reset_staged(repo_path))
        return _call("git_reset", args, run, "Failed to reset")

    @_git_tool("git_log")
    async def git_log(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            max_count = DEFAULT_LOG_MAX_COUNT
            value = parsed.get("max_count")
            # bool is an int subclass; JSON true is not a count
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                if not math.isfinite(value) or value < 1:
                    return _error_result("max_count must be a positive number")
                max_count = int(value)
            logs = deps.git_ops.get_log(repo_path, max_count)
            return _text_result(f"Commit history for {repo_path}:\n" + "\n".join(logs))
        return _call("git_log", args, run, "Failed to get log")

    @_git_tool("git_create_branch")
    async def git_create_branch(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            branch_name = parsed.get("branch_name")
            if not isinstance(branch_name, str):
                return _error_result("branch_name must be a string")
            base_branch = _optional_string(parsed, "base_branch")
            return _text_result(deps.git_ops.create_branch(repo_path, branch_name, base_branch))
        return _call("git_create_branch", args, run, "Failed to create branch")

    @_git_tool("git_checkout")
    async def git_checkout(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            branch_name = parsed.get("branch_name")
            if not isinstance(branch_name, str):
                return _error_result("branch_name must be a string")
            return _text_result(deps.git_ops.checkout_branch(repo_path, branch_name))
        return _call("git_checkout", args, run, "Failed to checkout branch")

    @_git_tool("git_show")
    async def git_show(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            revision = parsed.get("revision")
            if not isinstance(revision, str):
                return _error_result("revision must be a string")
            return _text_result(deps.git_ops.show_commit(repo_path, revision))
        return _call("git_show", args, run, "Failed to show commit")

    @_git_tool("git_init")
    async def git_init(args: Dict[str, Any]) -> Dict[str, Any]:
        """Initialize a repository; the target is not yet a repo, so it is only made absolute."""
        try:
            parsed = _parse_args(args)
        except ValueError as e:
            return _error_result(f"Failed to parse arguments: {e}")

        requested = _optional_string(parsed, "repo_path")
        if not requested:
            return _error_result("repo_path must be specified for initialization")

        try:
            abs_path = os.path.abspath(requested)
        except (OSError, ValueError) as e:
            return _error_result(f"Failed to get absolute path: {e}")

        try:
            return _text_result(deps.git_ops.init_repo(abs_path))
        except (GitCommandError, OSError) as e:
            return _error_result(f"Failed to initialize repository: {e}")

    @_git_tool("git_push")
    async def git_push(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            result = deps.git_ops.push_changes(
                repo_path, _optional_string(parsed, "remote"), _optional_string(parsed, "branch"),
            )
            return _text_result(result)
        return _call("git_push", args, run, "Failed to push changes")

    @_git_tool("git_pull")
    async def git_pull(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            result = deps.git_ops.pull_changes(
                repo_path, _optional_string(parsed, "remote"), _optional_string(parsed, "branch"),
            )
            return _text_result(result)
        return _call("git_pull", args, run, "Failed to pull changes")

    @_git_tool("git_list_repositories")
    async def git_list_repositories(args: Dict[str, Any]) -> Dict[str, Any]:
        if not deps.repo_paths:
            return _text_result("No repositories configured")

        lines = [f"Available repositories ({len(deps.repo_paths)}):", ""]
        for i, repo_path in enumerate(deps.repo_paths, start=1):
            name = os.path.basename(repo_path.rstrip(os.sep)) or repo_path
            lines.append(f"{i}. {name} ({repo_path})")
        return _text_result("\n".join(lines) + "\n")

    @_git_tool("git_apply_patch_string")
    async def git_apply_patch_string(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            patch_string = parsed.get("patch_string")
            if not isinstance(patch_string, str):
                return _error_result("patch_string must be a string")
            if not patch_string.strip():
                return _error_result("patch_string cannot be empty")
            return _text_result(deps.git_ops.apply_patch_from_string(repo_path, patch_string))
        return _call("git_apply_patch_string", args, run, "Failed to apply patch")

    @_git_tool("git_apply_patch_file")
    async def git_apply_patch_file(args: Dict[str, Any]) -> Dict[str, Any]:
        def run(repo_path, parsed):
            patch_file = parsed.get("patch_file")
            if not isinstance(patch_file, str):
                return _error_result("patch_file must be a string")
            if not patch_file.strip():
                return _error_result("patch_file cannot be empty")

            abs_patch = os.path.abspath(patch_file)
            if not os.path.exists(abs_patch):
                return _error_result(f"Patch file does not exist: {abs_patch}")

            return _text_result(deps.git_ops.apply_patch_from_file(repo_path, abs_patch))
        return _call("git_apply_patch_file", args, run, "Failed to apply patch")

    return [
        git_status,
        git_diff_unstaged,
        git_diff_staged,
        git_diff,
        git_commit,
        git_add,
        git_reset,
        git_log,
        git_create_branch,
        git_checkout,
        git_show,
        git_init,
        git_push,
        git_pull,
        git_list_repositories,
        git_apply_patch_string,
        git_apply_patch_file,
    ]
