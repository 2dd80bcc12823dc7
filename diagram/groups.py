"""Ordered dependency groups, the form both diagram backends render from.

A group is one drawable dependency of an agent or command: a single skill,
agent, command, CLI app or background task, all of its built-in tools, or one
MCP server with the tools used from it. The Mermaid backend expands the
built-in tool group into one node per tool, the structural backend keeps it
as one node.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .categories import CategoryKey
from .types import (
    DependencyGraph,
    McpTool,
    normalize_background_tasks,
    normalize_cli_apps,
)


@dataclass(frozen=True)
class DependencyGroup:
    """One dependency as drawn by the diagram backends.

    ``members`` holds the tools of a tool group or the example commands of a
    CLI app. ``invoked`` overrides the category's declared/invoked flag for
    MCP servers that are only mentioned in the body.
    """

    key: CategoryKey
    name: str
    invoked: Optional[bool] = None
    members: Tuple[str, ...] = ()
    description: str = ""
    agent_name: Optional[str] = None


def declared_builtin_tools(deps: DependencyGraph) -> List[str]:
    # Graphs that only carry ``tools`` keep their MCP entries in there.
    if deps.builtin_tools:
        return list(deps.builtin_tools)
    return [tool for tool in deps.tools if not McpTool.is_mcp_name(tool)]


def declared_mcp_tools(deps: DependencyGraph) -> List[McpTool]:
    if deps.mcp_tools:
        return list(deps.mcp_tools)
    return [McpTool.parse(tool) for tool in deps.tools if McpTool.is_mcp_name(tool)]


def group_mcp_tools(deps: DependencyGraph) -> Dict[str, List[str]]:
    """MCP servers with their short tool names, in first-seen order.

    Servers declared through tools come first, with their tools. Servers that
    are only mentioned in the body follow with no tools.
    """
    by_server: Dict[str, List[str]] = {}
    for mcp_tool in declared_mcp_tools(deps):
        short_name = mcp_tool.tool.split("__")[-1] or mcp_tool.tool
        by_server.setdefault(mcp_tool.server, []).append(short_name)
    for server in deps.mcp_servers:
        by_server.setdefault(server, [])
    return by_server


def dependency_groups(deps: DependencyGraph) -> List[DependencyGroup]:
    """Groups in drawing order: tools, skills, agents, commands, MCP servers,
    skill invocations, CLI apps, background tasks."""
    groups: List[DependencyGroup] = []

    builtin = declared_builtin_tools(deps)
    if builtin:
        groups.append(
            DependencyGroup(CategoryKey.BUILTIN_TOOLS, "Built-in Tools", members=tuple(builtin))
        )

    groups += [DependencyGroup(CategoryKey.SKILLS, name) for name in deps.skills]
    groups += [DependencyGroup(CategoryKey.AGENTS, name) for name in deps.agents]
    groups += [DependencyGroup(CategoryKey.COMMANDS, name) for name in deps.commands]

    declared_servers = {mcp_tool.server for mcp_tool in declared_mcp_tools(deps)}
    for server, tools in group_mcp_tools(deps).items():
        groups.append(
            DependencyGroup(
                CategoryKey.MCP_TOOLS,
                server,
                invoked=server not in declared_servers,
                members=tuple(tools),
            )
        )

    groups += [
        DependencyGroup(CategoryKey.SKILL_INVOCATIONS, name) for name in deps.skill_invocations
    ]
    groups += [
        DependencyGroup(CategoryKey.CLI_APPS, app.name, members=tuple(app.commands))
        for app in normalize_cli_apps(deps.cli_apps)
    ]
    groups += [
        DependencyGroup(
            CategoryKey.BACKGROUND_TASKS,
            task.type,
            description=task.description,
            agent_name=task.agent_name,
        )
        for task in normalize_background_tasks(deps.background_tasks)
    ]
    return groups
