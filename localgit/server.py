"""
Git Tool Server - Assemble the in-process MCP server for the git tools.

Example:
    from claude_agent_sdk import ClaudeAgentOptions
    from localgit.server import GitToolServer

    server = GitToolServer.from_config()
    options = ClaudeAgentOptions(
        mcp_servers={"git": server.mcp_server},
        allowed_tools=server.allowed_tools,
    )
"""

from typing import Any, List, Optional

from claude_agent_sdk import create_sdk_mcp_server

from .config import LocalGitConfig, load_config
from .git_tools import GitToolDependencies, build_git_tools
from .gitops import CliGitOperations, GitOperations
from .logger import get_logger
from .tool import Tool
from .tool.registry import MCP_SERVER_NAME
from .translations import TranslationFunc, TranslationHelper

_logger = get_logger()

SERVER_VERSION = "1.0.0"


class GitToolServer:
    """SDK MCP server exposing the local git tools.

    Attributes:
        deps: Dependencies the tools are bound to
        read_only: Only allow tools that don't modify repositories
        tools: The SdkMcpTool objects
        mcp_server: Server config for ClaudeAgentOptions.mcp_servers
        allowed_tools: Qualified names for ClaudeAgentOptions.allowed_tools
    """

    def __init__(
        self,
        deps: GitToolDependencies,
        t: Optional[TranslationFunc] = None,
        read_only: bool = False,
    ):
        self.deps = deps
        self.read_only = read_only
        self.tools = build_git_tools(deps, t or TranslationHelper())
        self.mcp_server: Any = create_sdk_mcp_server(
            name=MCP_SERVER_NAME,
            version=SERVER_VERSION,
            tools=self.tools,
        )
        self.allowed_tools: List[str] = self._get_allowed_tools()

        _logger.info("server", "git_server_created", {
            "repositories": list(deps.repo_paths),
            "tools_count": len(self.tools),
            "allowed_count": len(self.allowed_tools),
            "read_only": read_only,
        })

    def _get_allowed_tools(self) -> List[str]:
        names = [t.name for t in self.tools]
        if self.read_only:
            read_only = set(Tool.get_read_only_tools())
            names = [n for n in names if n in read_only]
        return Tool.list_qualified_names(names)

    @classmethod
    def from_config(
        cls,
        config: Optional[LocalGitConfig] = None,
        git_ops: Optional[GitOperations] = None,
        t: Optional[TranslationFunc] = None,
    ) -> "GitToolServer":
        """Build a server from LocalGitConfig (loaded from disk if not given).

        Also applies the config's logging settings and filter patterns.
        """
        config = config or load_config()
        config.configure_logging()
        config.apply_filter_patterns()

        deps = GitToolDependencies(
            git_ops=git_ops or CliGitOperations(),
            repo_paths=list(config.repositories),
            strict_boundary=config.strict_boundary,
        )
        return cls(deps, t=t, read_only=config.read_only)
