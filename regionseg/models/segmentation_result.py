from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict
from .pixel_buffer import PixelBuffer


@dataclass
class SegmentationResult:
    """
    Data object returned by the component colorizer.
    """
    image: PixelBuffer
    component_count: int     # every root, suppressed ones included
    suppressed_count: int    # roots painted black for being too small
    component_sizes: Dict[int, int] = field(default_factory=dict)  # root index → pixel count


@dataclass
class FloodFillResult:
    """
    Data object returned by the flood-fill recolorer.
    """
    image: PixelBuffer
    region_count: int        # fills launched
    filled_pixels: int       # pixels painted across all fills
