"""Data models for scanned workflow files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from diagram.types import DependencyGraph

NODE_TYPES = ("agent", "command", "skill", "tool", "mcpServer")


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str
    severity: str = "warning"


@dataclass(frozen=True)
class WorkflowNode:
    """A selectable entity of the workflow graph.

    ``id`` is unique within its ``type`` only.
    """

    type: str
    id: str
    name: str
    source_path: str = ""


@dataclass
class AgentInfo:
    id: str
    name: str
    description: str
    source_path: Path
    tools: list[str] = field(default_factory=list)
    model: str = ""
    dependencies: DependencyGraph = field(default_factory=DependencyGraph)
    validation_errors: list[ValidationError] = field(default_factory=list)

    @property
    def node(self) -> WorkflowNode:
        return WorkflowNode("agent", self.id, self.name, str(self.source_path))


@dataclass
class CommandInfo:
    id: str
    name: str
    description: str
    source_path: Path
    allowed_tools: list[str] = field(default_factory=list)
    dependencies: DependencyGraph = field(default_factory=DependencyGraph)
    validation_errors: list[ValidationError] = field(default_factory=list)

    @property
    def node(self) -> WorkflowNode:
        return WorkflowNode("command", self.id, self.name, str(self.source_path))


@dataclass
class SkillInfo:
    id: str
    name: str
    description: str
    source_path: Path
    validation_errors: list[ValidationError] = field(default_factory=list)

    @property
    def node(self) -> WorkflowNode:
        return WorkflowNode("skill", self.id, self.name, str(self.source_path))


WorkflowEntity = Union[AgentInfo, CommandInfo, SkillInfo]


@dataclass
class WorkflowGraph:
    agents: list[AgentInfo] = field(default_factory=list)
    commands: list[CommandInfo] = field(default_factory=list)
    skills: list[SkillInfo] = field(default_factory=list)

    def entities(self, node_type: str) -> list[WorkflowEntity]:
        if node_type == "agent":
            return list(self.agents)
        if node_type == "command":
            return list(self.commands)
        if node_type == "skill":
            return list(self.skills)
        return []

    def find(self, node: WorkflowNode) -> WorkflowEntity | None:
        """Look up the entity behind ``node`` by type and id."""
        for entity in self.entities(node.type):
            if entity.id == node.id:
                return entity
        return None

    def find_by_name(self, name: str, node_type: str | None = None) -> WorkflowEntity | None:
        """Look up an entity by id or display name, agents first."""
        name = name.lstrip("/")
        types = [node_type] if node_type else ["agent", "command", "skill"]
        for kind in types:
            for entity in self.entities(kind):
                if name in (entity.id, entity.name):
                    return entity
        return None
