# pipeline/region_filler.py
from pathlib import Path
import os
import logging

import numpy as np
from dotenv import load_dotenv

from ..models.pixel_buffer import PixelBuffer
from ..models.segmentation_result import FloodFillResult
from ..services.flood_fill_service import FloodFillService
from ..services.image_service import ImageService

# ------------------------------------------------------------------
# env‑vars
load_dotenv()
OUTPUT_DIR = os.getenv("OUTPUT_DIR_PATH", "data/output")
OUTPUT_EXT = os.getenv("OUTPUT_IMG_EXT", ".png")

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
def fill_regions(
    edges: PixelBuffer,
    rng: np.random.Generator,
    *,
    flood_fill_service: FloodFillService | None = None,
    image_service: ImageService | None          = None,
    epsilon: int | None                         = None,
    output_dir: str | Path                      = OUTPUT_DIR,
    ext: str                                    = OUTPUT_EXT,
    stem: str                                   = "image",
) -> FloodFillResult:
    """
    Flood-fill every dark region of the edge image with its own color.
    Runs on a copy, so *edges* stays valid for other stages.
    The recolored image is pointed at ``<stem>_regions<ext>`` but not written.
    """
    flood_fill_service = flood_fill_service or FloodFillService()
    image_service = image_service or ImageService()
    working = image_service.copy(edges)
    result = flood_fill_service.color_regions(working, rng, epsilon)
    result.image.path = Path(output_dir) / f"{stem}_regions{ext}"
    logger.debug(f"Region image ready for {result.image.path}")
    return result
