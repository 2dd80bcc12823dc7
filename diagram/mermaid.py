"""Render workflow dependencies as Mermaid flowcharts."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Tuple

from .categories import (
    DEPENDENT_STYLE,
    PLACEHOLDER_STYLE,
    ROOT_STYLE,
    Category,
    CategoryKey,
    category,
)
from .groups import dependency_groups
from .types import DependencyGraph

if TYPE_CHECKING:
    from workflows.types import AgentInfo, WorkflowGraph, WorkflowNode

INDENT = "  "


def escape_for_mermaid(text: str) -> str:
    """Make text safe inside a quoted Mermaid label."""
    return text.replace('"', "#quot;").replace("\r\n", " ").replace("\n", " ")


def _node(node_id: str, label: str, style: str) -> List[str]:
    return [
        f'{INDENT}{node_id}["{escape_for_mermaid(label)}"]',
        f"{INDENT}style {node_id} {style}",
    ]


def _agent_entries(deps: DependencyGraph) -> Iterator[Tuple[Category, str, bool]]:
    # One Mermaid node per built-in tool, one per group otherwise.
    for group in dependency_groups(deps):
        cat = category(group.key)
        invoked = cat.invoked if group.invoked is None else group.invoked
        if group.key is CategoryKey.BUILTIN_TOOLS:
            for tool in group.members:
                yield cat, tool, invoked
        else:
            yield cat, group.name, invoked


def mermaid_for_agent(name: str, deps: DependencyGraph, kind: str = "agent") -> str:
    """Generate a ``graph TD`` flowchart of an agent's dependencies.

    Declared dependencies are linked with solid arrows, invoked ones with
    dotted arrows. An agent without dependencies gets a single placeholder
    node.

    Args:
        name: Agent (or command) display name.
        deps: Its dependency graph.
        kind: Root label, "agent" or "command".

    Returns:
        Mermaid source, one statement per line.
    """
    lines = ["graph TD"]
    lines += _node("A", f"{kind.capitalize()}: {name}", ROOT_STYLE)

    counters: Dict[str, int] = defaultdict(int)
    for cat, item, invoked in _agent_entries(deps):
        node_id = f"{cat.mermaid_prefix}{counters[cat.mermaid_prefix]}"
        counters[cat.mermaid_prefix] += 1
        arrow = "-.->" if invoked else "-->"
        lines.append(f'{INDENT}{node_id}["{cat.label}: {escape_for_mermaid(item)}"]')
        lines.append(f"{INDENT}A {arrow} {node_id}")
        lines.append(f"{INDENT}style {node_id} {cat.mermaid_style}")

    if not counters:
        lines += _node("INFO", "No dependencies", PLACEHOLDER_STYLE)

    return "\n".join(lines)


def dependents_of(
    kind: str, keys: Iterable[str], agents: Iterable["AgentInfo"]
) -> List["AgentInfo"]:
    """Agents that reference a command or skill by any of ``keys``."""
    wanted = set(keys)
    found = []
    for agent in agents:
        deps = agent.dependencies
        refs = deps.commands if kind == "command" else [*deps.skills, *deps.skill_invocations]
        if wanted.intersection(refs):
            found.append(agent)
    return found


def mermaid_for_command_or_skill(
    kind: str, name: str, agents: Iterable["AgentInfo"], keys: Optional[Iterable[str]] = None
) -> str:
    """Generate a flowchart of the agents that use a command or skill.

    Edges point from each dependent agent into the selected node.

    Args:
        kind: "command" or "skill".
        name: Display name of the command or skill.
        agents: All known agents.
        keys: Names the entity may be referenced by; defaults to ``name``.
    """
    if kind not in ("command", "skill"):
        raise ValueError(f"Expected 'command' or 'skill', got {kind!r}")

    lines = ["graph TD"]
    lines += _node("MAIN", f"{kind.capitalize()}: {name}", ROOT_STYLE)

    dependents = dependents_of(kind, keys if keys is not None else [name], agents)
    for index, agent in enumerate(dependents):
        node_id = f"A{index}"
        lines.append(f'{INDENT}{node_id}["Agent: {escape_for_mermaid(agent.name)}"]')
        lines.append(f"{INDENT}{node_id} --> MAIN")
        lines.append(f"{INDENT}style {node_id} {DEPENDENT_STYLE}")

    if not dependents:
        lines += _node("INFO", f"No agents use this {kind} yet", PLACEHOLDER_STYLE)

    return "\n".join(lines)


def mermaid_for_selection(
    graph: Optional["WorkflowGraph"], node: Optional["WorkflowNode"]
) -> Optional[str]:
    """Mermaid source for the selected entity, or None when it cannot be found."""
    if graph is None or node is None:
        return None

    entity = graph.find(node)
    if entity is None:
        return None

    if node.type == "agent":
        return mermaid_for_agent(entity.name, entity.dependencies)
    if node.type in ("command", "skill"):
        return mermaid_for_command_or_skill(
            node.type, entity.name, graph.agents, keys={entity.id, entity.name}
        )
    return None
