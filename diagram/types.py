"""Data models for workflow dependency diagrams."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class McpTool:
    tool: str
    server: str

    @staticmethod
    def is_mcp_name(name: str) -> bool:
        return name.lower().startswith("mcp__")

    @classmethod
    def parse(cls, name: str) -> "McpTool":
        """Split ``mcp__<server>__<tool>``; a trailing ``*`` means all tools."""
        server = name.split("__")[1]
        return cls(tool="ALL" if name.endswith("*") else name, server=server)


@dataclass(frozen=True)
class CliAppMetadata:
    """A CLI application called through Bash, with example commands."""

    name: str
    commands: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "commands": list(self.commands)}


@dataclass(frozen=True)
class BackgroundTaskMetadata:
    """A background, parallel or async task detected in a workflow body."""

    type: str
    description: str = ""
    agent_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.agent_name:
            data["agentName"] = self.agent_name
        return data


def normalize_cli_apps(apps: Optional[List[Union[str, CliAppMetadata]]]) -> List[CliAppMetadata]:
    """Accept both bare app names and full metadata entries."""
    if not apps:
        return []
    return [CliAppMetadata(name=app) if isinstance(app, str) else app for app in apps]


def normalize_background_tasks(
    tasks: Optional[List[Union[str, BackgroundTaskMetadata]]],
) -> List[BackgroundTaskMetadata]:
    """Accept both bare task types and full metadata entries."""
    if not tasks:
        return []
    return [
        BackgroundTaskMetadata(type=task) if isinstance(task, str) else task for task in tasks
    ]


@dataclass
class DependencyGraph:
    """Dependencies of one agent or command.

    Declared dependencies are drawn with solid edges: tools, builtin_tools,
    mcp_tools, skills and cli_apps. Invoked dependencies are runtime usage
    found in the body and are drawn animated: agents, commands,
    skill_invocations and background_tasks. An MCP server in mcp_servers is
    declared when one of its tools is in mcp_tools and invoked otherwise.
    """

    tools: List[str] = field(default_factory=list)
    builtin_tools: List[str] = field(default_factory=list)
    mcp_tools: List[McpTool] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    mcp_servers: List[str] = field(default_factory=list)
    agents: List[str] = field(default_factory=list)
    commands: List[str] = field(default_factory=list)
    skill_invocations: List[str] = field(default_factory=list)
    cli_apps: List[Union[str, CliAppMetadata]] = field(default_factory=list)
    background_tasks: List[Union[str, BackgroundTaskMetadata]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(
            (
                self.tools,
                self.builtin_tools,
                self.mcp_tools,
                self.skills,
                self.mcp_servers,
                self.agents,
                self.commands,
                self.skill_invocations,
                self.cli_apps,
                self.background_tasks,
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tools": list(self.tools),
            "builtinTools": list(self.builtin_tools),
            "mcpTools": [{"tool": t.tool, "server": t.server} for t in self.mcp_tools],
            "skills": list(self.skills),
            "mcpServers": list(self.mcp_servers),
            "agents": list(self.agents),
            "commands": list(self.commands),
            "skillInvocations": list(self.skill_invocations),
            "cliApps": [app.to_dict() for app in normalize_cli_apps(self.cli_apps)],
            "backgroundTasks": [
                task.to_dict() for task in normalize_background_tasks(self.background_tasks)
            ],
        }


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class DiagramNode:
    """A node of the interactive diagram.

    ``data`` always carries ``width`` and ``height`` so the layout pass can
    size the node.
    """

    id: str
    type: str
    data: Dict[str, Any]
    position: Position = Position()

    @property
    def width(self) -> float:
        return float(self.data.get("width", 150))

    @property
    def height(self) -> float:
        return float(self.data.get("height", 40))

    def moved_to(self, x: float, y: float) -> "DiagramNode":
        return replace(self, position=Position(x, y))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "position": {"x": self.position.x, "y": self.position.y},
            "data": self.data,
        }


@dataclass(frozen=True)
class EdgeStyle:
    stroke: str
    stroke_width: int = 2
    dashed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        style: Dict[str, Any] = {"stroke": self.stroke, "strokeWidth": self.stroke_width}
        if self.dashed:
            style["strokeDasharray"] = "5,5"
        return style


@dataclass(frozen=True)
class DiagramEdge:
    id: str
    source: str
    target: str
    label: str = ""
    animated: bool = False
    style: Optional[EdgeStyle] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "animated": self.animated,
            "label": self.label,
        }
        if self.style is not None:
            data["style"] = self.style.to_dict()
        return data


@dataclass(frozen=True)
class Diagram:
    """Compiled nodes and edges for one selected workflow entity."""

    nodes: List[DiagramNode] = field(default_factory=list)
    edges: List[DiagramEdge] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, node_id: str) -> Optional[DiagramNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
