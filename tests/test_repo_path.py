"""Tests for repository path validation."""

import os

import pytest

from localgit.repo_path import (
    AccessDeniedError,
    InvalidPathError,
    NoRepositoryError,
    NotARepositoryError,
    RepoPathError,
    validate_repo_path,
)


class TestDefaultRepository:
    def test_no_path_and_no_roots(self):
        with pytest.raises(NoRepositoryError, match="no repository specified"):
            validate_repo_path("", [])

    def test_no_path_uses_first_root(self, make_repo):
        first = make_repo("a")
        second = make_repo("b")
        assert validate_repo_path("", [first, second]) == first

    def test_default_root_still_needs_git_dir(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(NotARepositoryError):
            validate_repo_path("", [str(plain)])


class TestContainment:
    def test_path_outside_roots_is_denied(self, make_repo):
        root = make_repo("repos/a")
        with pytest.raises(AccessDeniedError, match="access denied"):
            validate_repo_path("/etc", [root])

    def test_root_itself_is_accepted(self, make_repo):
        root = make_repo("repos/a")
        assert validate_repo_path(root, [root]) == root

    def test_subdirectory_without_git_dir(self, make_repo):
        root = make_repo("repos/a")
        sub = os.path.join(root, "sub")
        os.mkdir(sub)
        with pytest.raises(NotARepositoryError, match="not a git repository"):
            validate_repo_path(sub, [root])

    def test_nested_repository_under_root(self, make_repo):
        root = make_repo("repos/a")
        nested = make_repo("repos/a/vendor/lib")
        assert validate_repo_path(nested, [root]) == nested

    def test_any_root_may_match(self, make_repo):
        a = make_repo("a")
        b = make_repo("b")
        assert validate_repo_path(b, [a, b]) == b

    def test_sibling_prefix_is_admitted_by_default(self, make_repo):
        root = make_repo("repos/app")
        sibling = make_repo("repos/app-backup")
        assert validate_repo_path(sibling, [root]) == sibling

    def test_sibling_prefix_denied_with_strict_boundary(self, make_repo):
        root = make_repo("repos/app")
        sibling = make_repo("repos/app-backup")
        with pytest.raises(AccessDeniedError):
            validate_repo_path(sibling, [root], strict_boundary=True)

    def test_strict_boundary_accepts_root_and_children(self, make_repo):
        root = make_repo("repos/app")
        child = make_repo("repos/app/child")
        assert validate_repo_path(root, [root], strict_boundary=True) == root
        assert validate_repo_path(child, [root], strict_boundary=True) == child

    def test_dot_dot_is_normalized_before_check(self, make_repo, tmp_path):
        root = make_repo("repos/a")
        make_repo("repos/b")
        escaping = os.path.join(root, "..", "b")
        with pytest.raises(AccessDeniedError):
            validate_repo_path(escaping, [root])

    def test_open_mode_without_roots(self, make_repo):
        repo = make_repo("anywhere")
        assert validate_repo_path(repo, []) == repo


class TestResolution:
    def test_relative_path_resolves_against_cwd(self, make_repo, tmp_path, monkeypatch):
        repo = make_repo("rel")
        monkeypatch.chdir(tmp_path)
        assert validate_repo_path("rel", []) == repo

    def test_git_file_counts_as_repository(self, tmp_path):
        worktree = tmp_path / "worktree"
        worktree.mkdir()
        (worktree / ".git").write_text("gitdir: /somewhere/.git/worktrees/wt\n")
        assert validate_repo_path(str(worktree), []) == str(worktree)

    def test_null_byte_is_invalid(self):
        with pytest.raises(InvalidPathError):
            validate_repo_path("bad\x00path", [])

    def test_errors_share_a_base_class(self):
        for exc in (NoRepositoryError, InvalidPathError, AccessDeniedError, NotARepositoryError):
            assert issubclass(exc, RepoPathError)
            assert issubclass(exc, ValueError)
