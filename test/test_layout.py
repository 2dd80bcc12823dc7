import pytest

from diagram import (
    DependencyGraph,
    Diagram,
    DiagramEdge,
    DiagramNode,
    compile_agent,
    layout_diagram,
)
from diagram.layout import assign_ranks


def _node(node_id: str, width: int = 100, height: int = 40) -> DiagramNode:
    return DiagramNode(id=node_id, type="agent", data={"width": width, "height": height})


def _edge(source: str, target: str) -> DiagramEdge:
    return DiagramEdge(id=f"{source}-{target}", source=source, target=target)


class TestAssignRanks:
    def test_longest_path(self):
        diagram = Diagram(
            nodes=[_node("a"), _node("b"), _node("c")],
            edges=[_edge("a", "b"), _edge("b", "c"), _edge("a", "c")],
        )

        assert assign_ranks(diagram) == {"a": 0, "b": 1, "c": 2}

    def test_cycle_terminates(self):
        diagram = Diagram(nodes=[_node("a"), _node("b")], edges=[_edge("a", "b"), _edge("b", "a")])

        ranks = assign_ranks(diagram)

        assert max(ranks.values()) <= 1

    def test_dangling_edges_ignored(self):
        diagram = Diagram(nodes=[_node("a")], edges=[_edge("a", "ghost")])

        assert assign_ranks(diagram) == {"a": 0}


class TestLayoutDiagram:
    def _star(self):
        deps = DependencyGraph(skills=["one", "two", "three"])
        return compile_agent("root", "", deps)

    def test_top_to_bottom(self):
        diagram = layout_diagram(self._star(), direction="TB", rank_gap=80, node_gap=40)

        root = diagram.node("agent")
        children = diagram.nodes[1:]
        assert root.position.y == 0
        # root is 200 wide, centered on x = 0
        assert root.position.x == -100
        assert {c.position.y for c in children} == {80 + 80}
        # three 150 wide nodes with two 40 gaps span 530
        assert [c.position.x for c in children] == [-265, -75, 115]

    def test_left_to_right(self):
        diagram = layout_diagram(self._star(), direction="lr", rank_gap=80, node_gap=40)

        root = diagram.node("agent")
        children = diagram.nodes[1:]
        assert root.position.x == 0
        assert root.position.y == -40
        assert {c.position.x for c in children} == {200 + 80}

    def test_deterministic(self):
        first = layout_diagram(self._star()).to_dict()
        second = layout_diagram(self._star()).to_dict()

        assert first == second

    def test_edges_untouched_and_input_not_mutated(self):
        original = self._star()

        laid_out = layout_diagram(original)

        assert laid_out.edges == original.edges
        assert all(n.position.x == 0 and n.position.y == 0 for n in original.nodes)

    def test_defaults_come_from_config(self, monkeypatch):
        from config import Config

        monkeypatch.setattr(Config, "LAYOUT_DIRECTION", "LR")

        diagram = layout_diagram(self._star())

        assert diagram.node("agent").position.x == 0
        assert diagram.nodes[1].position.x > 0

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            layout_diagram(self._star(), direction="BT")

    def test_empty_diagram(self):
        assert layout_diagram(Diagram()).nodes == []
