# pipeline/edge_extractor.py
from pathlib import Path
import os
import logging

from dotenv import load_dotenv

from ..models.pixel_buffer import PixelBuffer
from ..services.edge_service import EdgeService

# ------------------------------------------------------------------
# env‑vars
load_dotenv()
OUTPUT_DIR = os.getenv("OUTPUT_DIR_PATH", "data/output")
OUTPUT_EXT = os.getenv("OUTPUT_IMG_EXT", ".png")

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
def extract_edges(
    image: PixelBuffer,
    *,
    edge_service: EdgeService | None = None,
    output_dir: str | Path           = OUTPUT_DIR,
    ext: str                         = OUTPUT_EXT,
    stem: str | None                 = None,
) -> PixelBuffer:
    """
    Sobel pass over *image*. The returned edge-magnitude image is pointed at
    ``<stem>_edges<ext>`` in *output_dir* but not written; saving is left to
    the caller. The source image is left untouched.
    """
    edge_service = edge_service or EdgeService()
    stem = stem or (image.path.stem if image.path else "image")
    edges = edge_service.sobel(image)
    edges.path = Path(output_dir) / f"{stem}_edges{ext}"
    logger.debug(f"Edge image ready for {edges.path}")
    return edges
