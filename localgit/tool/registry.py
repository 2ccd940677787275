"""
Tool Registry - Global registry of git tool definitions.

Tools are registered once with their description, JSON schema and read-only
flag. The server uses the registry to build the SDK tools and to decide
which qualified tool names an agent is allowed to call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

MCP_SERVER_NAME = "git"


@dataclass
class ToolDefinition:
    """Definition of a tool exposed to agents.

    Attributes:
        name: Unique identifier for the tool (e.g., "git_status")
        description: Human-readable description of what the tool does
        title: Short user-facing title
        parameters: JSON Schema for tool parameters
        category: Tool category for grouping
        is_read_only: True if tool doesn't modify the repository
    """
    name: str
    description: str
    title: str = ""
    parameters: Dict[str, Any] = field(default_factory=dict)
    category: str = "git"
    is_read_only: bool = False

    @property
    def qualified_name(self) -> str:
        """Tool name as the SDK exposes it: mcp__<server>__<tool>."""
        return f"mcp__{MCP_SERVER_NAME}__{self.name}"


class _ToolRegistry:
    """Global tool registry (singleton).

    Example:
        Tool.register("git_status", description="...", is_read_only=True)
        Tool.get("git_status").qualified_name  # "mcp__git__git_status"
    """

    _instance: Optional["_ToolRegistry"] = None

    def __new__(cls) -> "_ToolRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._tools: Dict[str, ToolDefinition] = {}
        return cls._instance

    def register(
        self,
        name: str,
        *,
        description: str = "",
        title: str = "",
        parameters: Optional[Dict[str, Any]] = None,
        category: str = "git",
        is_read_only: bool = False,
    ) -> ToolDefinition:
        """Register a tool in the global registry.

        Registering an existing name returns the existing definition unchanged.
        """
        if name in self._tools:
            return self._tools[name]

        tool_def = ToolDefinition(
            name=name,
            description=description,
            title=title,
            parameters=parameters or {"type": "object", "properties": {}},
            category=category,
            is_read_only=is_read_only,
        )
        self._tools[name] = tool_def
        return tool_def

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def list(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    def list_names(self) -> List[str]:
        return list(self._tools.keys())

    def list_qualified_names(self, names: Optional[List[str]] = None) -> List[str]:
        """Get qualified names for SDK usage.

        Args:
            names: Optional list of tool names to filter. If None, returns all.
        """
        if names is None:
            return [t.qualified_name for t in self._tools.values()]
        return [self._tools[n].qualified_name for n in names if n in self._tools]

    def get_read_only_tools(self) -> List[str]:
        return [t.name for t in self._tools.values() if t.is_read_only]

    def get_write_tools(self) -> List[str]:
        return [t.name for t in self._tools.values() if not t.is_read_only]

    def is_registered(self, name: str) -> bool:
        return name in self._tools

    def clear(self) -> None:
        """Clear all registered tools. Used for testing."""
        self._tools.clear()


# Global singleton instance
Tool = _ToolRegistry()
