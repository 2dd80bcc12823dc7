"""Deterministic layered layout for compiled diagrams.

Nodes are ranked by their longest path from a source, kept in input order
within a rank and each rank is centered on the main axis. The same input
always produces the same coordinates, so rendered diagrams can be cached by
graph identity.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from config import Config

from .types import Diagram, DiagramNode

DIRECTIONS = ("TB", "LR")


def assign_ranks(diagram: Diagram) -> Dict[str, int]:
    """Longest-path rank of every node.

    Edges pointing at unknown nodes are ignored. Cycles cannot push a rank past
    the node count, so the relaxation always terminates.
    """
    ranks = {node.id: 0 for node in diagram.nodes}
    edges = [e for e in diagram.edges if e.source in ranks and e.target in ranks]
    limit = max(len(ranks) - 1, 0)

    for _ in range(len(ranks)):
        changed = False
        for edge in edges:
            candidate = min(ranks[edge.source] + 1, limit)
            if candidate > ranks[edge.target]:
                ranks[edge.target] = candidate
                changed = True
        if not changed:
            break
    return ranks


def _group_by_rank(diagram: Diagram, ranks: Dict[str, int]) -> List[List[DiagramNode]]:
    layers: Dict[int, List[DiagramNode]] = {}
    for node in diagram.nodes:
        layers.setdefault(ranks[node.id], []).append(node)
    return [layers[rank] for rank in sorted(layers)]


def layout_diagram(
    diagram: Diagram,
    direction: Optional[str] = None,
    rank_gap: Optional[int] = None,
    node_gap: Optional[int] = None,
) -> Diagram:
    """Assign positions to every node of ``diagram``.

    Positions are top-left corners. In ``TB`` mode ranks are rows growing
    downwards; in ``LR`` mode they are columns growing to the right.

    Args:
        diagram: Compiled diagram with placeholder positions.
        direction: "TB" or "LR". Defaults to ``Config.LAYOUT_DIRECTION``.
        rank_gap: Space between ranks. Defaults to ``Config.LAYOUT_RANK_GAP``.
        node_gap: Space between nodes of one rank. Defaults to
            ``Config.LAYOUT_NODE_GAP``.

    Returns:
        A new diagram with the same nodes (positioned) and edges.

    Raises:
        ValueError: If ``direction`` is not supported.
    """
    direction = (direction or Config.LAYOUT_DIRECTION).upper()
    if direction not in DIRECTIONS:
        raise ValueError(f"Unsupported layout direction '{direction}'. Use one of: TB, LR")
    rank_gap = Config.LAYOUT_RANK_GAP if rank_gap is None else rank_gap
    node_gap = Config.LAYOUT_NODE_GAP if node_gap is None else node_gap

    horizontal = direction == "LR"
    positions: Dict[str, tuple[float, float]] = {}
    offset = 0.0

    for layer in _group_by_rank(diagram, assign_ranks(diagram)):
        # Extent along the rank axis and across it.
        spans = [node.height if horizontal else node.width for node in layer]
        depth = max(node.width if horizontal else node.height for node in layer)

        cursor = -(sum(spans) + node_gap * (len(layer) - 1)) / 2
        for node, span in zip(layer, spans):
            positions[node.id] = (offset, cursor) if horizontal else (cursor, offset)
            cursor += span + node_gap
        offset += depth + rank_gap

    nodes = [node.moved_to(*positions[node.id]) for node in diagram.nodes]
    return Diagram(nodes=nodes, edges=list(diagram.edges))
