from __future__ import annotations
import math
from collections import Counter
from typing import Dict, List

from .pixel_graph import PixelGraph

DEFAULT_BRIGHTNESS_GATE = 40


class DisjointSetForest:
    """
    Union-find over the nodes of a PixelGraph.

    *   find() compresses paths: every node walked is re-parented to the root.
    *   union() merges by rank, gated by brightness and RGB distance.
    *   Parent/rank live in the graph arena, the forest only operates on them.
    """

    def __init__(self, graph: PixelGraph, brightness_gate: int = DEFAULT_BRIGHTNESS_GATE):
        self.graph = graph
        self.brightness_gate = brightness_gate

    def __len__(self) -> int:
        return len(self.graph)

    def find(self, x: int) -> int:
        parent = self.graph.parent
        root = x
        while parent[root] != root:
            root = parent[root]
        # second walk: point everything on the path straight at the root
        while parent[x] != root:
            parent[x], x = root, parent[x]
        return root

    @staticmethod
    def color_distance(a, b) -> float:
        """Euclidean distance over R, G, B (alpha ignored)."""
        return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2)

    def union(self, x: int, y: int, epsilon: float) -> bool:
        """
        Merge the sets of nodes x and y when their colors are closer than epsilon.

        Returns:
            True if two distinct sets were merged, False otherwise.
        """
        colors = self.graph.colors
        cx, cy = colors[x], colors[y]
        # near-black pairs never merge
        if cx[0] < self.brightness_gate and cy[0] < self.brightness_gate:
            return False

        rx, ry = self.find(x), self.find(y)
        if rx == ry:
            return False
        if self.color_distance(cx, cy) >= epsilon:
            return False

        parent, rank = self.graph.parent, self.graph.rank
        if rank[ry] > rank[rx]:
            parent[rx] = ry
        else:
            parent[ry] = rx
            if rank[rx] == rank[ry]:
                rank[rx] += 1
        return True

    def same_set(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)

    def roots(self) -> List[int]:
        """Component roots in ascending node order."""
        return [i for i in range(len(self.graph)) if self.find(i) == i]

    def component_sizes(self) -> Dict[int, int]:
        """root → pixel count, derived on demand."""
        return dict(Counter(self.find(i) for i in range(len(self.graph))))
