from __future__ import annotations
from collections import Counter
import os
import logging

import numpy as np
from tqdm import trange
from dotenv import load_dotenv

from ..models.pixel_buffer import PixelBuffer
from ..models.pixel_graph import PixelGraph
from ..models.disjoint_set_forest import DisjointSetForest, DEFAULT_BRIGHTNESS_GATE
from ..models.segmentation_result import SegmentationResult
from ..repositories.graph_repository import GraphRepository
from ..repositories.image_repository import ImageRepository

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ComponentService:
    """
    Color-similarity connected components over the pixel grid.
    *   Builds the adjacency graph, runs union-find discovery, then paints
        every component with one color per root.
    *   Randomness comes only from the generator passed in.
    """

    def __init__(self,
                 epsilon: float = None,
                 brightness_gate: int = None,
                 min_component_size: int = None):
        self.epsilon = epsilon if epsilon is not None else float(os.getenv("SEGMENT_EPSILON", "50.0"))
        self.brightness_gate = brightness_gate if brightness_gate is not None else int(
            os.getenv("BRIGHTNESS_GATE", str(DEFAULT_BRIGHTNESS_GATE)))
        self.min_component_size = min_component_size if min_component_size is not None else int(
            os.getenv("MIN_COMPONENT_SIZE", "3"))
        self.show_progress = os.getenv("SHOW_PROGRESS", "0") == "1"
        if self.epsilon < 0:
            raise ValueError(f"Segmentation epsilon must be non-negative, got {self.epsilon}")

        self.graph_repository = GraphRepository()
        self.image_repository = ImageRepository()

    # ─── Public API ────────────────────────────────────────────────
    def build_graph(self, image: PixelBuffer) -> PixelGraph:
        return self.graph_repository.build(image)

    def find_components(self, graph: PixelGraph, epsilon: float = None) -> DisjointSetForest:
        """
        Visit every node in row-major order and try to merge it with each
        existing neighbour (up, down, left, right). Every edge is tried from
        both ends; union() is idempotent.
        """
        if epsilon is None:
            epsilon = self.epsilon
        forest = DisjointSetForest(graph, brightness_gate=self.brightness_gate)

        merges = 0
        width = graph.width
        up, down, left, right = graph.up, graph.down, graph.left, graph.right
        for y in trange(graph.height, desc="union", ncols=70, disable=not self.show_progress):
            for i in range(y * width, (y + 1) * width):
                for j in (up[i], down[i], left[i], right[i]):
                    if j >= 0 and forest.union(i, j, epsilon):
                        merges += 1

        logger.debug(f"Discovery over {graph.width}x{graph.height} (eps={epsilon}): {merges} merges")
        return forest

    def color_components(self, forest: DisjointSetForest, rng: np.random.Generator) -> SegmentationResult:
        """
        Paint each component with a single color.

        Component sizes are counted in a full pass first, so the
        small-component check always sees the final size. A root is colored
        the first time any of its pixels is reached in row-major order:
        black below min_component_size, a uniformly random RGB otherwise.

        Returns:
            SegmentationResult with an opaque RGBA image and the component counts.
        """
        graph = forest.graph
        n = len(graph)
        roots = [forest.find(i) for i in range(n)]
        sizes = Counter(roots)

        colored = [False] * n
        component_count = suppressed_count = 0
        for r in roots:
            if colored[r]:
                continue
            colored[r] = True
            component_count += 1
            if sizes[r] < self.min_component_size:
                graph.colors[r][:3] = [0, 0, 0]
                suppressed_count += 1
            else:
                graph.colors[r][:3] = rng.integers(0, 256, size=3).tolist()

        out = np.empty((n, 4), dtype=np.uint8)
        if n:
            palette = np.asarray(graph.colors, dtype=np.uint8)[:, :3]
            out[:, :3] = palette[np.asarray(roots)]
        out[:, 3] = 255

        logger.info(f"{component_count} components ({suppressed_count} below {self.min_component_size} px suppressed)")
        return SegmentationResult(
            image=self.image_repository.create_image(out.reshape(graph.height, graph.width, 4)),
            component_count=component_count,
            suppressed_count=suppressed_count,
            component_sizes=dict(sizes),
        )

    def segment(self, image: PixelBuffer, rng: np.random.Generator, epsilon: float = None) -> SegmentationResult:
        """Graph build → discovery → colorizer on one image."""
        graph = self.build_graph(image)
        forest = self.find_components(graph, epsilon)
        return self.color_components(forest, rng)
