"""
CLI entry point for localgit.

Usage:
    localgit filter < message.txt            # Filter stdin to stdout
    localgit filter .git/COMMIT_EDITMSG      # Filter a file in place (commit-msg hook)
    localgit check-path /path/to/repo        # Validate a path against configured repositories
    localgit tools                           # List the git tools
"""

import argparse
import sys
from typing import List, Optional

from .bodyfilter import filter_body
from .config import load_config
from .logging_config import configure_from_environment
from .repo_path import RepoPathError, validate_repo_path
from .tool import Tool, register_git_tools


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="localgit",
        description="Local git tools and commit message filtering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  localgit filter < message.txt
  localgit filter .git/COMMIT_EDITMSG
  localgit check-path .
  localgit tools --read-only
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    filter_parser = subparsers.add_parser(
        "filter", help="Strip configured trailers and footers from a message",
    )
    filter_parser.add_argument(
        "file", nargs="?",
        help="File to filter in place (reads stdin and writes stdout if omitted)",
    )

    check_parser = subparsers.add_parser(
        "check-path", help="Validate a repository path against the configuration",
    )
    check_parser.add_argument("path", nargs="?", default="", help="Repository path")

    tools_parser = subparsers.add_parser("tools", help="List the git tools")
    tools_parser.add_argument(
        "--read-only", dest="read_only", action="store_true",
        help="Only list tools that don't modify repositories",
    )

    return parser


def _run_filter(file: Optional[str]) -> int:
    if file is None:
        sys.stdout.write(filter_body(sys.stdin.read()) + "\n")
        return 0

    with open(file, "r", encoding="utf-8") as f:
        text = f.read()
    with open(file, "w", encoding="utf-8") as f:
        f.write(filter_body(text) + "\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_from_environment()
    config = load_config()
    config.configure_logging()
    config.apply_filter_patterns()

    if args.command == "filter":
        return _run_filter(args.file)

    if args.command == "check-path":
        try:
            print(validate_repo_path(args.path, config.repositories, config.strict_boundary))
        except RepoPathError as e:
            print(f"Repository path error: {e}", file=sys.stderr)
            return 1
        return 0

    register_git_tools()
    names = Tool.get_read_only_tools() if args.read_only else Tool.list_names()
    for name in names:
        definition = Tool.get(name)
        marker = "r " if definition.is_read_only else "rw"
        print(f"{marker}  {definition.name:<24} {definition.description}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
