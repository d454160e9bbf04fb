"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from regionseg.models.pixel_buffer import PixelBuffer


def _make_buffer(rgb, alpha: int = 255) -> PixelBuffer:
    """PixelBuffer from an (H, W) gray or (H, W, 3) RGB array-like."""
    arr = np.asarray(rgb, dtype=np.uint8)
    if arr.ndim == 2:
        arr = np.repeat(arr[:, :, np.newaxis], 3, axis=2)
    h, w = arr.shape[:2]
    alpha_plane = np.full((h, w, 1), alpha, dtype=np.uint8)
    return PixelBuffer(np.concatenate([arr, alpha_plane], axis=2))


@pytest.fixture
def make_buffer():
    """Factory: PixelBuffer from a gray or RGB array-like, uniform alpha."""
    return _make_buffer


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def dark_square() -> PixelBuffer:
    """7×7 image: bright (255) border ring around a 5×5 block of zeros."""
    gray = np.full((7, 7), 255, dtype=np.uint8)
    gray[1:6, 1:6] = 0
    return _make_buffer(gray)


@pytest.fixture
def vertical_edge() -> PixelBuffer:
    """10×10 image: black for x < 5, white for x >= 5."""
    gray = np.zeros((10, 10), dtype=np.uint8)
    gray[:, 5:] = 255
    return _make_buffer(gray)


@pytest.fixture
def shapes_image() -> PixelBuffer:
    """40×30 image: gray background, a red block, a blue block and a stray dot."""
    rgb = np.full((30, 40, 3), 90, dtype=np.uint8)
    rgb[5:15, 5:18] = (220, 40, 40)
    rgb[12:26, 22:36] = (40, 60, 210)
    rgb[27, 3] = (255, 255, 255)
    return _make_buffer(rgb)
