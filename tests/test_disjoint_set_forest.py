"""Tests for the union-find forest."""

from __future__ import annotations

import pytest

from regionseg.models.pixel_graph import PixelGraph
from regionseg.models.disjoint_set_forest import DisjointSetForest


def _row_graph(colors) -> PixelGraph:
    """1×N graph with the given RGB colors."""
    n = len(colors)
    return PixelGraph(
        width=n,
        height=1,
        colors=[[r, g, b, 255] for r, g, b in colors],
        up=[-1] * n,
        down=[-1] * n,
        left=[i - 1 for i in range(n)],
        right=[i + 1 if i + 1 < n else -1 for i in range(n)],
    )


class TestUnion:
    def test_similar_colors_merge(self):
        forest = DisjointSetForest(_row_graph([(100, 100, 100), (110, 100, 100)]))
        assert forest.union(0, 1, 50.0)
        assert forest.same_set(0, 1)

    def test_distance_at_epsilon_does_not_merge(self):
        # sqrt(30² + 40²) = 50
        forest = DisjointSetForest(_row_graph([(100, 100, 100), (130, 140, 100)]))
        assert not forest.union(0, 1, 50.0)
        assert not forest.same_set(0, 1)
        assert forest.union(0, 1, 50.01)

    def test_brightness_gate(self):
        forest = DisjointSetForest(_row_graph([(10, 0, 0), (20, 0, 0), (45, 0, 0)]))
        assert not forest.union(0, 1, 50.0)
        # one side above the gate is enough
        assert forest.union(1, 2, 50.0)

    def test_custom_gate(self):
        forest = DisjointSetForest(_row_graph([(10, 0, 0), (20, 0, 0)]), brightness_gate=5)
        assert forest.union(0, 1, 50.0)

    def test_same_set_is_noop(self):
        forest = DisjointSetForest(_row_graph([(100, 0, 0)] * 2))
        assert forest.union(0, 1, 50.0)
        assert not forest.union(1, 0, 50.0)

    def test_equal_rank_x_root_survives(self):
        graph = _row_graph([(100, 0, 0)] * 2)
        forest = DisjointSetForest(graph)
        forest.union(0, 1, 50.0)
        assert graph.parent[1] == 0
        assert graph.rank[0] == 1
        assert graph.rank[1] == 0

    def test_higher_rank_becomes_parent(self):
        graph = _row_graph([(100, 0, 0)] * 3)
        forest = DisjointSetForest(graph)
        forest.union(1, 2, 50.0)          # root 1, rank 1
        forest.union(0, 1, 50.0)          # rank 0 vs 1 → 0 goes under 1
        assert graph.parent[0] == 1
        assert graph.rank[1] == 1

    def test_distance_uses_node_colors_not_roots(self):
        # 0-1 close, 1-2 close, 0-2 far: chaining still joins all three
        forest = DisjointSetForest(_row_graph([(100, 0, 0), (140, 0, 0), (180, 0, 0)]))
        assert forest.union(0, 1, 50.0)
        assert forest.union(1, 2, 50.0)
        assert forest.same_set(0, 2)


class TestFind:
    def test_path_compression(self):
        graph = _row_graph([(100, 0, 0)] * 4)
        graph.parent[:] = [0, 0, 1, 2]     # chain 3 → 2 → 1 → 0
        forest = DisjointSetForest(graph)
        assert forest.find(3) == 0
        assert graph.parent == [0, 0, 0, 0]

    def test_find_is_stable(self):
        graph = _row_graph([(100, 0, 0)] * 5)
        forest = DisjointSetForest(graph)
        for i in range(4):
            forest.union(i, i + 1, 50.0)
        roots = {forest.find(i) for i in range(5)}
        assert len(roots) == 1
        root = roots.pop()
        for i in range(5):
            assert graph.parent[i] == root

    def test_sizes_and_roots(self):
        forest = DisjointSetForest(_row_graph([(100, 0, 0), (100, 0, 0), (250, 250, 250)]))
        forest.union(0, 1, 50.0)
        forest.union(1, 2, 50.0)
        assert forest.roots() == [0, 2]
        assert forest.component_sizes() == {0: 2, 2: 1}


@pytest.mark.parametrize("a, b, expected", [
    ((0, 0, 0), (0, 0, 0), 0.0),
    ((0, 0, 0), (3, 4, 0), 5.0),
    ((255, 255, 255, 0), (255, 255, 255, 255), 0.0),
])
def test_color_distance_ignores_alpha(a, b, expected):
    assert DisjointSetForest.color_distance(a, b) == pytest.approx(expected)
