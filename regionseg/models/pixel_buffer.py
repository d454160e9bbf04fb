from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np

CHANNELS = 4  # R, G, B, A


@dataclass
class PixelBuffer:
    """
    Simple data object: RGBA pixels (+ optional path for bookkeeping).
    No codec logic outside the image repository.
    """
    pixels: np.ndarray  # Shape (H, W, 4), dtype uint8, RGBA order, row-major.
    path: Path | None = None  # Source or destination of the image.

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != CHANNELS:
            raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")
        if self.path is not None:
            self.path = Path(self.path)

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    def index(self, x: int, y: int) -> int:
        """Flat row-major index of pixel (x, y)."""
        return y * self.width + x

    def copy(self, path: Path | str | None = None) -> "PixelBuffer":
        return PixelBuffer(self.pixels.copy(), path if path is not None else self.path)

    # ── Codec boundary: interleaved RGBA bytes ──────────────────────
    @classmethod
    def from_flat(cls, data, width: int, height: int, path: Path | str | None = None) -> "PixelBuffer":
        """
        Build a buffer from interleaved RGBA bytes of length width*height*4.
        """
        flat = np.frombuffer(bytes(data), dtype=np.uint8)
        expected = width * height * CHANNELS
        if flat.size != expected:
            raise ValueError(f"Expected {expected} bytes for a {width}x{height} RGBA image, got {flat.size}")
        return cls(flat.reshape(height, width, CHANNELS).copy(), path)

    def to_flat(self) -> bytes:
        return np.ascontiguousarray(self.pixels).tobytes()
