# tests/conftest.py
from typing import List

import pytest

from localgit.bodyfilter import DEFAULT_FILTER_PATTERNS, set_filter_patterns
from localgit.gitops import GitCommandError, GitOperations
from localgit.logger import get_logger
from localgit.tool import Tool


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
    """Keep logs, the tool registry and the default filter per-test."""
    get_logger().configure(enabled=True, level="DEBUG", log_directory=str(tmp_path / "logs"))
    for var in ("LOCALGIT_REPOSITORIES", "LOCALGIT_READ_ONLY", "LOCALGIT_STRICT_BOUNDARY",
                "LOCALGIT_LOG_LEVEL", "LOCALGIT_LOG_DIR", "LOCALGIT_LOG_ENABLED", "LOCALGIT_LOG_CONSOLE"):
        monkeypatch.delenv(var, raising=False)
    Tool.clear()
    set_filter_patterns(DEFAULT_FILTER_PATTERNS)
    yield
    Tool.clear()
    set_filter_patterns(DEFAULT_FILTER_PATTERNS)
    get_logger().close()


@pytest.fixture
def make_repo(tmp_path):
    """Create a directory that looks like a git working tree."""
    def _make(name: str) -> str:
        repo = tmp_path / name
        (repo / ".git").mkdir(parents=True)
        return str(repo)
    return _make


class FakeGitOps(GitOperations):
    """Records calls and returns canned output."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.fail_with: GitCommandError = None

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_with is not None:
            raise self.fail_with

    def get_status(self, repo_path):
        self._record("get_status", repo_path)
        return "On branch main\nnothing to commit, working tree clean"

    def get_diff_unstaged(self, repo_path):
        self._record("get_diff_unstaged", repo_path)
        return "diff --git a/x b/x"

    def get_diff_staged(self, repo_path):
        self._record("get_diff_staged", repo_path)
        return "diff --git a/y b/y"

    def get_diff(self, repo_path, target):
        self._record("get_diff", repo_path, target)
        return f"diff against {target}"

    def commit_changes(self, repo_path, message):
        self._record("commit_changes", repo_path, message)
        return "Changes committed successfully"

    def add_files(self, repo_path, files):
        self._record("add_files", repo_path, files)
        return "Files staged successfully"

    def reset_staged(self, repo_path):
        self._record("reset_staged", repo_path)
        return "All staged changes reset"

    def get_log(self, repo_path, max_count):
        self._record("get_log", repo_path, max_count)
        return ["Commit: abc", "Commit: def"]

    def create_branch(self, repo_path, branch_name, base_branch=""):
        self._record("create_branch", repo_path, branch_name, base_branch)
        return f"Created and checked out branch '{branch_name}'"

    def checkout_branch(self, repo_path, branch_name):
        self._record("checkout_branch", repo_path, branch_name)
        return f"Switched to branch '{branch_name}'"

    def init_repo(self, repo_path):
        self._record("init_repo", repo_path)
        return f"Initialized empty Git repository in {repo_path}/.git"

    def show_commit(self, repo_path, revision):
        self._record("show_commit", repo_path, revision)
        return f"commit {revision}"

    def push_changes(self, repo_path, remote="", branch=""):
        self._record("push_changes", repo_path, remote, branch)
        return "pushed"

    def pull_changes(self, repo_path, remote="", branch=""):
        self._record("pull_changes", repo_path, remote, branch)
        return "pulled"

    def apply_patch_from_string(self, repo_path, patch_string):
        self._record("apply_patch_from_string", repo_path, patch_string)
        return "Patch applied successfully"

    def apply_patch_from_file(self, repo_path, patch_file_path):
        self._record("apply_patch_from_file", repo_path, patch_file_path)
        return "Patch applied successfully"


@pytest.fixture
def fake_git():
    return FakeGitOps()
