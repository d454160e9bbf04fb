"""Tests for Sobel edge extraction."""

from __future__ import annotations

import math

import numpy as np

from regionseg.services.edge_service import EdgeService
from regionseg.models.pixel_buffer import PixelBuffer


GX = [[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]]
GY = [[1, 2, 1], [0, 0, 0], [-1, -2, -1]]


def _reference_magnitude(pixels: np.ndarray, x: int, y: int) -> int:
    sum_x = sum_y = 0
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            r, g, b = (int(c) for c in pixels[y + dy, x + dx, :3])
            gray = (r + g + b) // 3
            sum_x += GX[dy + 1][dx + 1] * gray
            sum_y += GY[dy + 1][dx + 1] * gray
    return min(255, int(math.floor(math.sqrt(sum_x ** 2 + sum_y ** 2) + 0.5)))


class TestSobel:
    def test_geometry_and_alpha_preserved(self):
        gen = np.random.default_rng(0)
        pixels = gen.integers(0, 256, size=(9, 12, 4), dtype=np.uint8)
        out = EdgeService().sobel(PixelBuffer(pixels))
        assert out.pixels.shape == pixels.shape
        assert np.array_equal(out.pixels[:, :, 3], pixels[:, :, 3])
        # gray output
        assert np.array_equal(out.pixels[:, :, 0], out.pixels[:, :, 1])
        assert np.array_equal(out.pixels[:, :, 0], out.pixels[:, :, 2])

    def test_border_ring_is_black(self):
        gen = np.random.default_rng(1)
        out = EdgeService().sobel(PixelBuffer(gen.integers(0, 256, size=(6, 7, 4), dtype=np.uint8)))
        rgb = out.pixels[:, :, :3]
        assert not rgb[0].any() and not rgb[-1].any()
        assert not rgb[:, 0].any() and not rgb[:, -1].any()

    def test_matches_scalar_definition(self):
        gen = np.random.default_rng(2)
        pixels = gen.integers(0, 256, size=(7, 8, 4), dtype=np.uint8)
        out = EdgeService().sobel(PixelBuffer(pixels)).pixels
        for y in range(1, 6):
            for x in range(1, 7):
                assert out[y, x, 0] == _reference_magnitude(pixels, x, y), (x, y)

    def test_vertical_edge(self, vertical_edge):
        out = EdgeService().sobel(vertical_edge).pixels[:, :, 0]
        interior = out[1:-1, 1:-1]
        # the step sits between columns 4 and 5; both see the full 4*255 response
        assert (out[1:-1, 5] == 255).all()
        assert (out[1:-1, 4] == 255).all()
        rest = np.delete(interior, [3, 4], axis=1)
        assert (rest == 0).all()

    def test_flat_image_has_no_edges(self, make_buffer):
        out = EdgeService().sobel(make_buffer(np.full((5, 5), 77)))
        assert not out.pixels[:, :, :3].any()

    def test_degenerate_geometry(self, make_buffer):
        src = make_buffer(np.full((2, 6), 200), alpha=128)
        out = EdgeService().sobel(src)
        assert not out.pixels[:, :, :3].any()
        assert (out.pixels[:, :, 3] == 128).all()

    def test_source_not_modified(self, vertical_edge):
        before = vertical_edge.pixels.copy()
        EdgeService().sobel(vertical_edge)
        assert np.array_equal(before, vertical_edge.pixels)
