"""
Git Tool Catalog - Registers the local git tools in the global registry.

Descriptions and titles are resolved through a translation function so they
can be overridden with LOCALGIT_TOOL_GIT_<NAME>_DESCRIPTION and friends.

Call `register_git_tools(t)` to populate the global Tool registry.
"""

from typing import Any, Dict, List, Optional

from ..translations import TranslationFunc, null_translation_helper
from .registry import Tool, ToolDefinition

REPO_PATH_DESCRIPTION = "Path to Git repository (optional if default repository is configured)"


def _schema(
    properties: Optional[Dict[str, Dict[str, Any]]] = None,
    required: Optional[List[str]] = None,
    with_repo_path: bool = True,
) -> Dict[str, Any]:
    props: Dict[str, Dict[str, Any]] = {}
    if with_repo_path:
        props["repo_path"] = {"type": "string", "description": REPO_PATH_DESCRIPTION}
    props.update(properties or {})
    schema: Dict[str, Any] = {"type": "object", "properties": props}
    if required:
        schema["required"] = required
    return schema


def _string(description: str) -> Dict[str, Any]:
    return {"type": "string", "description": description}


# name -> (default description, default title, read-only, schema)
GIT_TOOLS = {
    "git_status": (
        "Shows the working tree status of a local Git repository",
        "Git status", True, _schema(),
    ),
    "git_diff_unstaged": (
        "Shows changes in the working directory that are not yet staged",
        "Git diff unstaged", True, _schema(),
    ),
    "git_diff_staged": (
        "Shows changes that are staged for commit",
        "Git diff staged", True, _schema(),
    ),
    "git_diff": (
        "Shows differences between branches or commits",
        "Git diff", True,
        _schema({"target": _string("Target branch or commit to compare with")}, ["target"]),
    ),
    "git_commit": (
        "Records changes to the repository",
        "Git commit", False,
        _schema({"message": _string("Commit message")}, ["message"]),
    ),
    "git_add": (
        "Adds file contents to the staging area",
        "Git add", False,
        _schema({"files": _string("Comma-separated list of file paths to stage")}, ["files"]),
    ),
    "git_reset": (
        "Unstages all staged changes",
        "Git reset", False, _schema(),
    ),
    "git_log": (
        "Shows the commit logs",
        "Git log", True,
        _schema({"max_count": {
            "type": "number",
            "description": "Maximum number of commits to show (default: 10)",
        }}),
    ),
    "git_create_branch": (
        "Creates a new branch from an optional base branch and automatically checks it out",
        "Git create branch", False,
        _schema({
            "branch_name": _string("Name of the new branch"),
            "base_branch": _string("Starting point for the new branch (optional)"),
        }, ["branch_name"]),
    ),
    "git_checkout": (
        "Switches branches",
        "Git checkout", False,
        _schema({"branch_name": _string("Name of branch to checkout")}, ["branch_name"]),
    ),
    "git_show": (
        "Shows the contents of a commit",
        "Git show", True,
        _schema({
            "revision": _string("The revision (commit hash, branch name, tag) to show"),
        }, ["revision"]),
    ),
    "git_init": (
        "Initialize a new Git repository",
        "Git init", False,
        _schema(
            {"repo_path": _string("Path to directory to initialize git repo")},
            ["repo_path"],
            with_repo_path=False,
        ),
    ),
    "git_push": (
        "Pushes local commits to a remote repository and automatically sets up tracking",
        "Git push", False,
        _schema({
            "remote": _string("Remote name (default: origin)"),
            "branch": _string("Branch name to push (default: current branch)"),
        }),
    ),
    "git_pull": (
        "Pulls changes from a remote repository with automatic rebase and prune",
        "Git pull", False,
        _schema({
            "remote": _string("Remote name (default: origin)"),
            "branch": _string("Branch name to pull (default: current branch's upstream)"),
        }),
    ),
    "git_list_repositories": (
        "Lists all available Git repositories",
        "Git list repositories", True, _schema(with_repo_path=False),
    ),
    "git_apply_patch_string": (
        "Applies a patch from a string to a git repository",
        "Git apply patch string", False,
        _schema({"patch_string": _string("Patch string to apply")}, ["patch_string"]),
    ),
    "git_apply_patch_file": (
        "Applies a patch from a file to a git repository",
        "Git apply patch file", False,
        _schema({"patch_file": _string("Path to the patch file")}, ["patch_file"]),
    ),
}


def git_tool_definition(name: str, t: TranslationFunc = null_translation_helper) -> ToolDefinition:
    """Build the definition of one git tool with its text resolved through t.

    Raises:
        KeyError: If name is not a git tool
    """
    description, title, read_only, schema = GIT_TOOLS[name]
    key = f"TOOL_{name.upper()}"
    return ToolDefinition(
        name=name,
        description=t(f"{key}_DESCRIPTION", description),
        title=t(f"{key}_USER_TITLE", title),
        parameters=schema,
        category="git",
        is_read_only=read_only,
    )


def register_git_tools(t: TranslationFunc = null_translation_helper) -> None:
    """Register all git tools in the global registry.

    This function is idempotent - calling it multiple times is safe. The
    first registration wins; use git_tool_definition for per-caller text.
    """
    for name in GIT_TOOLS:
        definition = git_tool_definition(name, t)
        Tool.register(
            name,
            description=definition.description,
            title=definition.title,
            parameters=definition.parameters,
            category=definition.category,
            is_read_only=definition.is_read_only,
        )
