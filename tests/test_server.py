"""Tests for the git tool server."""

import json

from localgit.bodyfilter import get_default_filter
from localgit.config import LocalGitConfig
from localgit.git_tools import GitToolDependencies
from localgit.gitops import CliGitOperations
from localgit.logger import LogLevel, get_logger
from localgit.server import GitToolServer
from localgit.translations import CONFIG_FILE_NAME, null_translation_helper


def test_allows_every_tool(fake_git, make_repo):
    deps = GitToolDependencies(git_ops=fake_git, repo_paths=[make_repo("r")])
    server = GitToolServer(deps, t=null_translation_helper)

    assert len(server.tools) == 17
    assert len(server.allowed_tools) == 17
    assert all(name.startswith("mcp__git__") for name in server.allowed_tools)
    assert server.mcp_server["name"] == "git"


def test_read_only_limits_allowed_tools(fake_git):
    server = GitToolServer(GitToolDependencies(git_ops=fake_git), t=null_translation_helper, read_only=True)

    assert len(server.tools) == 17
    assert "mcp__git__git_status" in server.allowed_tools
    assert "mcp__git__git_list_repositories" in server.allowed_tools
    assert "mcp__git__git_commit" not in server.allowed_tools
    assert "mcp__git__git_push" not in server.allowed_tools
    assert len(server.allowed_tools) == 7


def test_from_config(fake_git, make_repo):
    repo = make_repo("r")
    config = LocalGitConfig(
        repositories=[repo],
        filter_patterns=[r"(?m)^Signed-off-by:.*$"],
        read_only=True,
        strict_boundary=True,
    )
    server = GitToolServer.from_config(config, git_ops=fake_git, t=null_translation_helper)

    assert server.deps.git_ops is fake_git
    assert server.deps.repo_paths == [repo]
    assert server.deps.strict_boundary is True
    assert server.read_only is True
    assert get_default_filter().patterns == [r"(?m)^Signed-off-by:.*$"]


def test_from_config_defaults_to_cli_git(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    server = GitToolServer.from_config(LocalGitConfig(), t=null_translation_helper)
    assert isinstance(server.deps.git_ops, CliGitOperations)


def test_translation_file_in_working_directory(fake_git, tmp_path, monkeypatch):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({
        "TOOL_GIT_STATUS_DESCRIPTION": "Status, translated",
    }))
    monkeypatch.chdir(tmp_path)
    server = GitToolServer(GitToolDependencies(git_ops=fake_git))

    status = next(t for t in server.tools if t.name == "git_status")
    assert status.description == "Status, translated"


def test_from_config_applies_logging(fake_git, tmp_path):
    config = LocalGitConfig(log_level="TRACE", log_directory=str(tmp_path / "server-logs"))
    GitToolServer.from_config(config, git_ops=fake_git, t=null_translation_helper)

    logger = get_logger()
    assert logger.level == LogLevel.TRACE
    logger.close()
    content = "".join(f.read_text() for f in (tmp_path / "server-logs").glob("*.jsonl"))
    assert "git_server_created" in content
