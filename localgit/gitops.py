"""
Git Operations - The capability the git tools delegate to.

GitOperations is the abstract interface; CliGitOperations implements it by
running the `git` executable in the repository directory. Every method takes
an already validated absolute repository path.
"""

import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from typing import List, Optional

from .logger import get_logger

_logger = get_logger()

# Seconds before a single git invocation is abandoned
GIT_TIMEOUT_SECONDS = 120

LOG_FORMAT = "Commit: %H%nAuthor: %an <%ae>%nDate: %ad%nMessage: %s%n"


class GitCommandError(RuntimeError):
    """A git command exited with a non-zero status.

    Attributes:
        args_list: Arguments passed to git
        returncode: Exit status (None if git could not be started)
        output: Combined stdout/stderr of the command
    """

    def __init__(self, args_list: List[str], returncode: Optional[int], output: str, reason: str = ""):
        self.args_list = list(args_list)
        self.returncode = returncode
        self.output = output
        reason = reason or f"exit status {returncode}"
        super().__init__(f"git command failed: {reason}\nOutput: {output}")


class GitOperations(ABC):
    """Abstract interface for Git operations."""

    @abstractmethod
    def get_status(self, repo_path: str) -> str:
        pass

    @abstractmethod
    def get_diff_unstaged(self, repo_path: str) -> str:
        pass

    @abstractmethod
    def get_diff_staged(self, repo_path: str) -> str:
        pass

    @abstractmethod
    def get_diff(self, repo_path: str, target: str) -> str:
        pass

    @abstractmethod
    def commit_changes(self, repo_path: str, message: str) -> str:
        pass

    @abstractmethod
    def add_files(self, repo_path: str, files: List[str]) -> str:
        pass

    @abstractmethod
    def reset_staged(self, repo_path: str) -> str:
        pass

    @abstractmethod
    def get_log(self, repo_path: str, max_count: int) -> List[str]:
        pass

    @abstractmethod
    def create_branch(self, repo_path: str, branch_name: str, base_branch: str = "") -> str:
        pass

    @abstractmethod
    def checkout_branch(self, repo_path: str, branch_name: str) -> str:
        pass

    @abstractmethod
    def init_repo(self, repo_path: str) -> str:
        pass

    @abstractmethod
    def show_commit(self, repo_path: str, revision: str) -> str:
        pass

    @abstractmethod
    def push_changes(self, repo_path: str, remote: str = "", branch: str = "") -> str:
        pass

    @abstractmethod
    def pull_changes(self, repo_path: str, remote: str = "", branch: str = "") -> str:
        pass

    @abstractmethod
    def apply_patch_from_string(self, repo_path: str, patch_string: str) -> str:
        pass

    @abstractmethod
    def apply_patch_from_file(self, repo_path: str, patch_file_path: str) -> str:
        pass


def run_git_command(repo_path: str, *args: str) -> str:
    """Run a git command in repo_path and return its combined output.

    Raises:
        GitCommandError: If git exits non-zero, times out or is missing
    """
    cmd = ["git", *args]
    env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}

    with _logger.span("gitops", "git_command", {"args": list(args), "cwd": repo_path}):
        try:
            result = subprocess.run(
                cmd,
                cwd=repo_path,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                env=env,
                timeout=GIT_TIMEOUT_SECONDS,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            output = e.output or ""
            if isinstance(output, bytes):
                output = output.decode("utf-8", errors="replace")
            raise GitCommandError(
                list(args), None, output,
                reason=f"timed out after {GIT_TIMEOUT_SECONDS}s",
            ) from e
        except FileNotFoundError as e:
            raise GitCommandError(list(args), None, "", reason=f"could not run git: {e}") from e

    if result.returncode != 0:
        raise GitCommandError(list(args), result.returncode, result.stdout)
    return result.stdout


class CliGitOperations(GitOperations):
    """GitOperations backed by the git command line."""

    def get_status(self, repo_path: str) -> str:
        return run_git_command(repo_path, "status")

    def get_diff_unstaged(self, repo_path: str) -> str:
        return run_git_command(repo_path, "diff")

    def get_diff_staged(self, repo_path: str) -> str:
        return run_git_command(repo_path, "diff", "--cached")

    def get_diff(self, repo_path: str, target: str) -> str:
        return run_git_command(repo_path, "diff", target)

    def commit_changes(self, repo_path: str, message: str) -> str:
        output = run_git_command(repo_path, "commit", "-m", message)
        return f"Changes committed successfully\n{output}"

    def add_files(self, repo_path: str, files: List[str]) -> str:
        run_git_command(repo_path, "add", "--", *files)
        return "Files staged successfully"

    def reset_staged(self, repo_path: str) -> str:
        run_git_command(repo_path, "reset")
        return "All staged changes reset"

    def get_log(self, repo_path: str, max_count: int) -> List[str]:
        output = run_git_command(
            repo_path, "log", f"--max-count={max_count}", f"--format={LOG_FORMAT}",
        )
        return [entry.strip() for entry in output.split("\n\n") if entry.strip()]

    def create_branch(self, repo_path: str, branch_name: str, base_branch: str = "") -> str:
        args = ["checkout", "-b", branch_name]
        if base_branch:
            args.append(base_branch)
        run_git_command(repo_path, *args)
        base = base_branch or "current HEAD"
        return f"Created and checked out branch '{branch_name}' from '{base}'"

    def checkout_branch(self, repo_path: str, branch_name: str) -> str:
        run_git_command(repo_path, "checkout", branch_name)
        return f"Switched to branch '{branch_name}'"

    def init_repo(self, repo_path: str) -> str:
        os.makedirs(repo_path, exist_ok=True)
        run_git_command(repo_path, "init")
        return f"Initialized empty Git repository in {os.path.join(repo_path, '.git')}"

    def show_commit(self, repo_path: str, revision: str) -> str:
        return run_git_command(repo_path, "show", revision)

    def push_changes(self, repo_path: str, remote: str = "", branch: str = "") -> str:
        remote = remote or "origin"
        branch = branch or self._current_branch(repo_path)
        output = run_git_command(repo_path, "push", "-u", remote, branch)
        return f"Pushed branch '{branch}' to '{remote}'\n{output}"

    def pull_changes(self, repo_path: str, remote: str = "", branch: str = "") -> str:
        args = ["pull", "--rebase", "--prune", remote or "origin"]
        if branch:
            args.append(branch)
        output = run_git_command(repo_path, *args)
        return f"Pulled changes from '{remote or 'origin'}'\n{output}"

    def apply_patch_from_string(self, repo_path: str, patch_string: str) -> str:
        fd, patch_path = tempfile.mkstemp(suffix=".patch", prefix="localgit-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(patch_string)
            return self.apply_patch_from_file(repo_path, patch_path)
        finally:
            os.remove(patch_path)

    def apply_patch_from_file(self, repo_path: str, patch_file_path: str) -> str:
        run_git_command(repo_path, "apply", "--check", patch_file_path)
        output = run_git_command(repo_path, "apply", patch_file_path)
        return f"Patch applied successfully\n{output}".rstrip("\n")

    def _current_branch(self, repo_path: str) -> str:
        return run_git_command(repo_path, "rev-parse", "--abbrev-ref", "HEAD").strip()
