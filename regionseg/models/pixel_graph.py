from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List

NO_NEIGHBOR = -1


@dataclass
class PixelGraph:
    """
    Node arena for one segmentation pass.

    Node ``i`` is the pixel at flat index ``i`` (row-major). Neighbour links and
    forest parents are plain indices into the arena, so no node owns another.
    Absent neighbours (grid boundary) are ``NO_NEIGHBOR``.
    """
    width: int
    height: int
    colors: List[List[int]]   # [r, g, b, a] per node; r, g, b are rewritten by the colorizer
    up: List[int]
    down: List[int]
    left: List[int]
    right: List[int]
    parent: List[int] = field(default_factory=list)
    rank: List[int] = field(default_factory=list)

    def __post_init__(self):
        n = self.width * self.height
        if not self.parent:
            self.parent = list(range(n))
        if not self.rank:
            self.rank = [0] * n

    def __len__(self) -> int:
        return self.width * self.height

    def neighbors(self, i: int) -> Iterator[int]:
        """Existing neighbours of node ``i`` in up, down, left, right order."""
        for j in (self.up[i], self.down[i], self.left[i], self.right[i]):
            if j != NO_NEIGHBOR:
                yield j

    def color(self, i: int) -> tuple:
        return tuple(self.colors[i])
