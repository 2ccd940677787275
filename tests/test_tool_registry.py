"""Tests for the tool registry and git tool catalog."""

from localgit.tool import GIT_TOOLS, Tool, ToolDefinition, register_git_tools

READ_ONLY = [
    "git_status",
    "git_diff_unstaged",
    "git_diff_staged",
    "git_diff",
    "git_log",
    "git_show",
    "git_list_repositories",
]


def test_qualified_name():
    assert ToolDefinition(name="git_status", description="").qualified_name == "mcp__git__git_status"


def test_register_is_idempotent():
    first = Tool.register("git_status", description="one", is_read_only=True)
    second = Tool.register("git_status", description="two")
    assert first is second
    assert Tool.get("git_status").description == "one"


def test_register_defaults_to_empty_object_schema():
    definition = Tool.register("custom")
    assert definition.parameters == {"type": "object", "properties": {}}
    assert definition.category == "git"


def test_catalog_registers_seventeen_tools():
    register_git_tools()
    assert len(Tool.list()) == 17
    assert Tool.list_names() == list(GIT_TOOLS)


def test_read_only_split():
    register_git_tools()
    assert Tool.get_read_only_tools() == READ_ONLY
    assert set(Tool.get_write_tools()) == set(GIT_TOOLS) - set(READ_ONLY)


def test_list_qualified_names_filters_unknown():
    register_git_tools()
    assert Tool.list_qualified_names(["git_log", "nope"]) == ["mcp__git__git_log"]
    assert len(Tool.list_qualified_names()) == 17


def test_translation_function_overrides_text():
    def t(key, default):
        return "custom status" if key == "TOOL_GIT_STATUS_DESCRIPTION" else default

    register_git_tools(t)
    assert Tool.get("git_status").description == "custom status"
    assert Tool.get("git_status").title == "Git status"


def test_schemas():
    register_git_tools()
    assert "repo_path" not in Tool.get("git_list_repositories").parameters["properties"]
    assert Tool.get("git_init").parameters["required"] == ["repo_path"]
    assert Tool.get("git_add").parameters["required"] == ["files"]


def test_clear():
    register_git_tools()
    Tool.clear()
    assert not Tool.is_registered("git_status")
