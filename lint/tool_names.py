"""Tool name normalization and recognition for workflow frontmatter."""

from __future__ import annotations

import re
from typing import Iterable

# Built-in tools (core tools only, not MCP tools)
BUILTIN_TOOLS: tuple[str, ...] = (
    "Read",
    "Write",
    "Edit",
    "Grep",
    "Glob",
    "Bash",
    "Task",
    "WebSearch",
    "WebFetch",
    "Skill",
    "NotebookEdit",
    "NotebookRead",
    "TodoWrite",
    "AskUserQuestion",
    "EnterPlanMode",
    "ExitPlanMode",
    "LSP",
    "KillShell",
)

_BUILTIN_LOWER = frozenset(tool.lower() for tool in BUILTIN_TOOLS)

MCP_TOOL_RE = re.compile(r"^mcp__[\w-]+__[\w-]+\*?$")
MCP_WILDCARD_RE = re.compile(r"^mcp__\S*\*$")
BASH_RESTRICTION_RE = re.compile(r"^Bash\([^)]+\)$")


def split_tool_list(value: str) -> list[str]:
    """Split a comma-separated tool string into tokens.

    Commas inside parentheses belong to the token, so
    ``Bash(git add:*, git commit:*)`` stays a single entry. Empty tokens are
    dropped.
    """
    tokens: list[str] = []
    current: list[str] = []
    depth = 0
    for char in value:
        if char == "(":
            depth += 1
        elif char == ")" and depth > 0:
            depth -= 1
        elif char == "," and depth == 0:
            tokens.append("".join(current))
            current = []
            continue
        current.append(char)
    tokens.append("".join(current))
    return [token.strip() for token in tokens if token.strip()]


def normalize_tools(value: object) -> list[str] | None:
    """Flatten a tools field into a list of tool tokens.

    Accepts a list (whose entries may themselves be comma-separated sublists)
    or a comma-separated string. Returns None for any other value type.
    """
    if isinstance(value, str):
        return split_tool_list(value)
    if isinstance(value, list):
        tokens: list[str] = []
        for entry in value:
            nested = normalize_tools(entry) if isinstance(entry, (str, list)) else None
            if nested is None:
                tokens.append(str(entry))
            else:
                tokens.extend(nested)
        return tokens
    return None


def is_builtin_tool(tool: str) -> bool:
    return tool.lower() in _BUILTIN_LOWER


def is_mcp_tool(tool: str) -> bool:
    return tool.lower().startswith("mcp__")


def is_valid_tool(tool: str) -> bool:
    """Check a single normalized tool token."""
    if is_builtin_tool(tool):
        return True
    if MCP_TOOL_RE.match(tool) or BASH_RESTRICTION_RE.match(tool):
        return True
    return bool(MCP_WILDCARD_RE.match(tool))


def unknown_tools(tools: Iterable[str]) -> list[str]:
    return [tool for tool in tools if not is_valid_tool(tool)]
