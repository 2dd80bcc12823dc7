"""Dependency categories shared by the Mermaid and structural diagram backends.

Each category fixes how one kind of dependency is drawn: its label prefix, its
colors, the label of the edge leading to it and whether it is a declared
(frontmatter) or an invoked (runtime) dependency. Invoked edges are animated
and dashed, declared edges are solid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CategoryKey(str, Enum):
    BUILTIN_TOOLS = "builtin"
    MCP_TOOLS = "mcp"
    SKILLS = "skill"
    AGENTS = "agent"
    COMMANDS = "command"
    SKILL_INVOCATIONS = "skill-invocation"
    CLI_APPS = "cli"
    BACKGROUND_TASKS = "background-task"


@dataclass(frozen=True)
class Category:
    key: CategoryKey
    label: str
    node_type: str
    id_prefix: str
    mermaid_prefix: str
    edge_label: str
    fill: str
    stroke: str
    invoked: bool = False

    @property
    def mermaid_style(self) -> str:
        return f"fill:{self.fill},stroke:{self.stroke},color:#fff"


CATEGORIES: dict[CategoryKey, Category] = {
    c.key: c
    for c in (
        Category(
            key=CategoryKey.BUILTIN_TOOLS,
            label="Tool",
            node_type="toolGroup",
            id_prefix="builtin-group",
            mermaid_prefix="T",
            edge_label="uses",
            fill="#3b82f6",
            stroke="#2563eb",
        ),
        Category(
            key=CategoryKey.MCP_TOOLS,
            label="MCP",
            node_type="toolGroup",
            id_prefix="mcp-server-",
            mermaid_prefix="M",
            edge_label="via MCP",
            fill="#ec4899",
            stroke="#db2777",
        ),
        Category(
            key=CategoryKey.SKILLS,
            label="Skill",
            node_type="skill",
            id_prefix="skill-",
            mermaid_prefix="S",
            edge_label="declared",
            fill="#10b981",
            stroke="#059669",
        ),
        Category(
            key=CategoryKey.AGENTS,
            label="Agent",
            node_type="agent",
            id_prefix="agent-",
            mermaid_prefix="NA",
            edge_label="spawns",
            fill="#8b5cf6",
            stroke="#7c3aed",
            invoked=True,
        ),
        Category(
            key=CategoryKey.COMMANDS,
            label="Command",
            node_type="command",
            id_prefix="command-",
            mermaid_prefix="C",
            edge_label="invokes",
            fill="#f59e0b",
            stroke="#d97706",
            invoked=True,
        ),
        Category(
            key=CategoryKey.SKILL_INVOCATIONS,
            label="Skill",
            node_type="skill",
            id_prefix="skill-invoke-",
            mermaid_prefix="SI",
            edge_label="invokes",
            fill="#10b981",
            stroke="#059669",
            invoked=True,
        ),
        Category(
            key=CategoryKey.CLI_APPS,
            label="CLI",
            node_type="cli",
            id_prefix="cli-app-",
            mermaid_prefix="CLI",
            edge_label="calls",
            fill="#06b6d4",
            stroke="#0891b2",
        ),
        Category(
            key=CategoryKey.BACKGROUND_TASKS,
            label="Task",
            node_type="backgroundTask",
            id_prefix="background-task-",
            mermaid_prefix="BG",
            edge_label="runs async",
            fill="#f59e0b",
            stroke="#d97706",
            invoked=True,
        ),
    )
}

# Root and placeholder nodes are not dependency categories.
ROOT_STYLE = "fill:#8b5cf6,stroke:#7c3aed,color:#fff"
DEPENDENT_STYLE = "fill:#3b82f6,stroke:#2563eb,color:#fff"
PLACEHOLDER_STYLE = "fill:#e5e7eb,stroke:#d1d5db,color:#374151"


def category(key: CategoryKey) -> Category:
    return CATEGORIES[key]
