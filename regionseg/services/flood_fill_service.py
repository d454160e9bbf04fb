from __future__ import annotations
from collections import deque
import os
import logging

import numpy as np
from tqdm import trange
from dotenv import load_dotenv

from ..models.pixel_buffer import PixelBuffer
from ..models.segmentation_result import FloodFillResult

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# 4-connectivity: right, left, down, up
_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class FloodFillService:
    """
    Recolors dark regions of an edge-magnitude image.
    *   Works in place on the PixelBuffer it is given.
    *   A painted pixel is raised above the threshold, which doubles as the
        visited marker.
    """

    def __init__(self, epsilon: int = None):
        self.epsilon = epsilon if epsilon is not None else int(os.getenv("FLOOD_FILL_EPSILON", "20"))
        self.show_progress = os.getenv("SHOW_PROGRESS", "0") == "1"
        self._validate(self.epsilon)

    @staticmethod
    def _validate(epsilon: int) -> None:
        if epsilon < 0:
            raise ValueError(f"Flood-fill epsilon must be non-negative, got {epsilon}")
        if 2 * epsilon > 255:
            raise ValueError(f"Flood-fill epsilon {epsilon} leaves no fill color above the threshold")

    @staticmethod
    def flood_fill(pixels: np.ndarray, x: int, y: int, color, threshold: int) -> int:
        """
        Paint every pixel 4-connected to (x, y) whose R channel is <= threshold.

        Args:
            pixels: (H, W, 4) uint8 array, modified in place.
            color: (r, g, b) fill color; its R must exceed threshold.

        Returns:
            Number of pixels painted.
        """
        if color[0] <= threshold:
            raise ValueError(f"Fill color {tuple(color)} would not mark pixels as visited (threshold {threshold})")
        height, width = pixels.shape[:2]
        stack = deque([(x, y)])
        painted = 0
        while stack:
            cx, cy = stack.pop()
            if cx < 0 or cx >= width or cy < 0 or cy >= height:
                continue
            if pixels[cy, cx, 0] > threshold:
                continue
            pixels[cy, cx, :3] = color
            painted += 1
            for dx, dy in _DIRECTIONS:
                stack.append((cx + dx, cy + dy))
        return painted

    def color_regions(self, image: PixelBuffer, rng: np.random.Generator, epsilon: int = None) -> FloodFillResult:
        """
        Seed a fill from every interior pixel whose R is below epsilon and give
        each fill its own random color, channels drawn from [2*epsilon, 255].
        """
        if epsilon is None:
            epsilon = self.epsilon
        self._validate(epsilon)

        pixels = image.pixels
        height, width = pixels.shape[:2]
        region_count = filled = 0
        for y in trange(1, height - 1, desc="flood", ncols=70, disable=not self.show_progress):
            for x in range(1, width - 1):
                if pixels[y, x, 0] < epsilon:
                    color = rng.integers(2 * epsilon, 256, size=3).tolist()
                    filled += self.flood_fill(pixels, x, y, color, epsilon)
                    region_count += 1

        logger.info(f"{region_count} dark regions filled ({filled} px, eps={epsilon})")
        return FloodFillResult(image=image, region_count=region_count, filled_pixels=filled)
