# repositories/graph_repository.py
import numpy as np
from ..models.pixel_buffer import PixelBuffer
from ..models.pixel_graph import PixelGraph, NO_NEIGHBOR


class GraphRepository:
    """
    Builds the pixel adjacency graph for one segmentation pass.

    • One node per pixel, RGBA copied from the buffer snapshot.
    • 4-neighbour links as arena indices, NO_NEIGHBOR on the grid boundary.
    """

    @staticmethod
    def _neighbor_indices(width: int, height: int):
        idx = np.arange(width * height, dtype=np.int64).reshape(height, width)

        up = np.full_like(idx, NO_NEIGHBOR)
        down = np.full_like(idx, NO_NEIGHBOR)
        left = np.full_like(idx, NO_NEIGHBOR)
        right = np.full_like(idx, NO_NEIGHBOR)

        up[1:, :] = idx[:-1, :]
        down[:-1, :] = idx[1:, :]
        left[:, 1:] = idx[:, :-1]
        right[:, :-1] = idx[:, 1:]
        return up.ravel(), down.ravel(), left.ravel(), right.ravel()

    def build(self, image: PixelBuffer) -> PixelGraph:
        width, height = image.width, image.height
        up, down, left, right = self._neighbor_indices(width, height)
        return PixelGraph(
            width=width,
            height=height,
            colors=image.pixels.reshape(-1, 4).tolist(),
            up=up.tolist(),
            down=down.tolist(),
            left=left.tolist(),
            right=right.tolist(),
        )
