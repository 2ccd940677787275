"""
Tool system - Global tool registry and the git tool catalog.

This module provides:
- Tool: Global tool registry (namespace singleton pattern)
- ToolDefinition: Schema for tool definitions
- register_git_tools: Populate the registry with the local git tools
- git_tool_definition: One git tool with its text translated
"""

from .catalog import GIT_TOOLS, git_tool_definition, register_git_tools
from .registry import Tool, ToolDefinition

__all__ = ["Tool", "ToolDefinition", "GIT_TOOLS", "git_tool_definition", "register_git_tools"]
