"""Dependency diagrams for agents, commands and skills."""

from .categories import CATEGORIES, Category, CategoryKey
from .compiler import (
    compile_agent,
    compile_command,
    compile_dependencies,
    compile_selection,
    compile_skill,
)
from .groups import DependencyGroup, dependency_groups
from .layout import layout_diagram
from .mermaid import (
    escape_for_mermaid,
    mermaid_for_agent,
    mermaid_for_command_or_skill,
    mermaid_for_selection,
)
from .types import (
    BackgroundTaskMetadata,
    CliAppMetadata,
    DependencyGraph,
    Diagram,
    DiagramEdge,
    DiagramNode,
    McpTool,
    Position,
)

__all__ = [
    "BackgroundTaskMetadata",
    "CATEGORIES",
    "Category",
    "CategoryKey",
    "CliAppMetadata",
    "DependencyGraph",
    "DependencyGroup",
    "Diagram",
    "DiagramEdge",
    "DiagramNode",
    "McpTool",
    "Position",
    "compile_agent",
    "compile_command",
    "compile_dependencies",
    "compile_selection",
    "compile_skill",
    "dependency_groups",
    "escape_for_mermaid",
    "layout_diagram",
    "mermaid_for_agent",
    "mermaid_for_command_or_skill",
    "mermaid_for_selection",
]
