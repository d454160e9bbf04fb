# pipeline/component_labeler.py
from pathlib import Path
import os
import logging

import numpy as np
from dotenv import load_dotenv

from ..models.pixel_buffer import PixelBuffer
from ..models.segmentation_result import SegmentationResult
from ..services.component_service import ComponentService

# ------------------------------------------------------------------
# env‑vars
load_dotenv()
OUTPUT_DIR = os.getenv("OUTPUT_DIR_PATH", "data/output")
OUTPUT_EXT = os.getenv("OUTPUT_IMG_EXT", ".png")

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
def label_components(
    edges: PixelBuffer,
    rng: np.random.Generator,
    *,
    component_service: ComponentService | None = None,
    epsilon: float | None                      = None,
    output_dir: str | Path                     = OUTPUT_DIR,
    ext: str                                   = OUTPUT_EXT,
    stem: str                                  = "image",
) -> SegmentationResult:
    """
    Disjoint-set segmentation of the edge image:
        • build the 4-neighbour pixel graph from *edges*
        • merge neighbours closer than epsilon
        • paint each component one color, tiny ones black
    The labeled image is pointed at ``<stem>_components<ext>`` but not written.
    """
    component_service = component_service or ComponentService()
    result = component_service.segment(edges, rng, epsilon)
    result.image.path = Path(output_dir) / f"{stem}_components{ext}"
    logger.debug(f"Component image ready for {result.image.path}")
    return result
