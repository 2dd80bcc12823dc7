"""Compile dependency graphs into typed diagram nodes and edges.

Built-in tools collapse into one group node and MCP tools into one group node
per server, so long tool lists stay readable. A server that is only mentioned
in the body gets an empty group with an animated edge. Every other dependency
gets a node of its own. All nodes sit at the origin until ``diagram.layout``
places them.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from utils import get_logger

from .categories import Category, CategoryKey, category
from .groups import DependencyGroup, dependency_groups
from .types import Diagram, DiagramEdge, DiagramNode, DependencyGraph, EdgeStyle

if TYPE_CHECKING:
    from workflows.types import AgentInfo, WorkflowGraph, WorkflowNode

logger = get_logger(__name__)

ROOT_WIDTH = 200
ROOT_HEIGHT = 80
ITEM_WIDTH = 150
ITEM_HEIGHT = 40
GROUP_WIDTH = 200
WIDE_WIDTH = 220


def group_height(count: int, row_height: int = 22, padding: int = 50, minimum: int = 80) -> int:
    """Height of a node listing ``count`` rows."""
    return max(minimum, count * row_height + padding)


class NodeIds:
    """Per-category counters: ``skill-0``, ``skill-1``, ``command-0``, ..."""

    def __init__(self) -> None:
        self._counters: Dict[str, int] = defaultdict(int)

    def next(self, prefix: str) -> str:
        index = self._counters[prefix]
        self._counters[prefix] += 1
        return f"{prefix}{index}"


def _edge(source: str, target: str, cat: Category, invoked: Optional[bool] = None) -> DiagramEdge:
    animated = cat.invoked if invoked is None else invoked
    return DiagramEdge(
        id=f"{source}-{target}",
        source=source,
        target=target,
        label=cat.edge_label,
        animated=animated,
        style=EdgeStyle(stroke=cat.fill, dashed=animated),
    )


def _group_node(group: DependencyGroup, ids: NodeIds) -> DiagramNode:
    cat = category(group.key)
    key = group.key

    if key is CategoryKey.BUILTIN_TOOLS or key is CategoryKey.MCP_TOOLS:
        node_id = cat.id_prefix
        if key is CategoryKey.MCP_TOOLS:
            node_id += group.name
        data: Dict[str, Any] = {
            "name": group.name,
            "tools": list(group.members),
            "category": key.value,
            "width": GROUP_WIDTH,
            "height": group_height(len(group.members)),
        }
        return DiagramNode(id=node_id, type=cat.node_type, data=data)

    node_id = ids.next(cat.id_prefix)
    if key is CategoryKey.CLI_APPS:
        data = {
            "name": group.name,
            "commands": list(group.members),
            "width": WIDE_WIDTH,
            "height": group_height(len(group.members), minimum=60),
        }
    elif key is CategoryKey.BACKGROUND_TASKS:
        data = {
            "name": group.name,
            "description": group.description,
            "width": WIDE_WIDTH,
            "height": 60,
        }
        if group.agent_name:
            data["agentName"] = group.agent_name
    else:
        data = {"name": group.name, "width": ITEM_WIDTH, "height": ITEM_HEIGHT}
        if key is CategoryKey.AGENTS:
            data["description"] = ""
    return DiagramNode(id=node_id, type=cat.node_type, data=data)


def compile_dependencies(root: DiagramNode, deps: DependencyGraph) -> Diagram:
    """Compile the forward dependencies of ``root``.

    Args:
        root: The selected agent or command node.
        deps: Its dependency graph.

    Returns:
        The root node followed by one node per dependency group, each
        connected to the root by one edge.
    """
    nodes = [root]
    edges: List[DiagramEdge] = []
    ids = NodeIds()

    for group in dependency_groups(deps):
        node = _group_node(group, ids)
        nodes.append(node)
        edges.append(_edge(root.id, node.id, category(group.key), group.invoked))

    return Diagram(nodes=nodes, edges=edges)


def _root(
    node_id: str, name: str, description: str, width: int = ROOT_WIDTH, height: int = ROOT_HEIGHT
) -> DiagramNode:
    return DiagramNode(
        id=node_id,
        type=node_id,
        data={"name": name, "description": description, "width": width, "height": height},
    )


def compile_agent(name: str, description: str, deps: DependencyGraph) -> Diagram:
    return compile_dependencies(_root("agent", name, description), deps)


def compile_command(name: str, description: str, deps: DependencyGraph) -> Diagram:
    return compile_dependencies(_root("command", name, description), deps)


def compile_skill(skill_keys: Iterable[str], name: str, agents: Iterable["AgentInfo"]) -> Diagram:
    """Compile the reverse dependencies of a skill.

    Agents that declare the skill get a solid edge into it, agents that only
    invoke it at runtime get an animated one.

    Args:
        skill_keys: Names the skill may be referenced by (id and display name).
        name: Display name of the skill.
        agents: All known agents.
    """
    keys = set(skill_keys)
    main = DiagramNode(
        id="main", type="skill", data={"name": name, "width": ROOT_WIDTH, "height": 60}
    )
    nodes = [main]
    edges: List[DiagramEdge] = []
    ids = NodeIds()
    agent_category = category(CategoryKey.AGENTS)

    for agent in agents:
        declared = keys.intersection(agent.dependencies.skills)
        invoked = keys.intersection(agent.dependencies.skill_invocations)
        if not declared and not invoked:
            continue
        node_id = ids.next(agent_category.id_prefix)
        nodes.append(
            DiagramNode(
                id=node_id,
                type="agent",
                data={
                    "name": agent.name,
                    "description": agent.description,
                    "width": 180,
                    "height": 60,
                },
            )
        )
        edge_category = category(CategoryKey.SKILLS if declared else CategoryKey.SKILL_INVOCATIONS)
        edges.append(_edge(node_id, main.id, edge_category))

    return Diagram(nodes=nodes, edges=edges)


def compile_selection(graph: Optional["WorkflowGraph"], node: Optional["WorkflowNode"]) -> Diagram:
    """Compile the diagram for the selected workflow entity.

    A missing graph, a missing selection or a selection that no longer exists
    (stale id, deleted file) yields an empty diagram. Tool and MCP server
    selections have no diagram of their own.
    """
    if graph is None or node is None:
        return Diagram()

    entity = graph.find(node)
    if entity is None:
        logger.debug(f"No {node.type} '{node.id}' in workflow graph")
        return Diagram()

    if node.type == "agent":
        return compile_agent(entity.name, entity.description, entity.dependencies)
    if node.type == "command":
        return compile_command(entity.name, entity.description, entity.dependencies)
    if node.type == "skill":
        return compile_skill({entity.id, entity.name}, entity.name, graph.agents)
    return Diagram()
