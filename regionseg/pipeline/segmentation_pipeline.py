"""
Segmentation Pipeline
Edge extraction, disjoint-set component labeling and flood-fill region
recoloring of a single image. All three results are computed in memory and
written at the end; a decode or encode failure leaves no output behind.
"""

import os
import logging
from pathlib import Path
from typing import List

import numpy as np
from dotenv import load_dotenv

from ..models.pixel_buffer import PixelBuffer
from ..models.pipeline_report import PipelineReport
from ..repositories.image_repository import ImageEncodeError
from ..services.image_service import ImageService
from ..services.component_service import ComponentService
from ..services.flood_fill_service import FloodFillService
from .edge_extractor import extract_edges
from .component_labeler import label_components
from .region_filler import fill_regions

# Load environment variables
load_dotenv()

OUTPUT_DIR = os.getenv("OUTPUT_DIR_PATH", "data/output")
OUTPUT_EXT = os.getenv("OUTPUT_IMG_EXT", ".png")

logger = logging.getLogger(__name__)


def _save_outputs(images: List[PixelBuffer], image_service: ImageService) -> None:
    """
    Encode every image to its path. If one fails, the files already written
    by this call are removed before the error propagates.
    """
    written: List[Path] = []
    try:
        for image in images:
            image_service.save(image)
            written.append(image.path)
    except ImageEncodeError:
        for path in written:
            path.unlink(missing_ok=True)
        logger.warning(f"Encode failed, removed {len(written)} partial output(s)")
        raise


def run_segmentation(
    input_path: str | Path,
    output_dir: str | Path = OUTPUT_DIR,
    *,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    segment_epsilon: float | None = None,
    flood_fill_epsilon: int | None = None,
    ext: str = OUTPUT_EXT,
    image_service: ImageService | None = None,
    component_service: ComponentService | None = None,
    flood_fill_service: FloodFillService | None = None,
) -> PipelineReport:
    """
    Run the full pipeline on one image file.

    Steps:
    1. Decode *input_path* (ImageDecodeError propagates)
    2. Sobel edges
    3. Union-find components over the edge image
    4. Flood fill of dark edge-image regions
    5. Write ``<stem>_edges<ext>``, ``<stem>_components<ext>`` and
       ``<stem>_regions<ext>`` (ImageEncodeError propagates, partial files removed)

    One generator drives every random color. It is *rng* when given, else
    seeded from *seed*, else from the RANDOM_SEED env var (default 42).

    Returns:
        PipelineReport with the output paths and counts.
    """
    image_service = image_service or ImageService()
    component_service = component_service or ComponentService()
    flood_fill_service = flood_fill_service or FloodFillService()
    if rng is None:
        if seed is None:
            seed = int(os.getenv("RANDOM_SEED", "42"))
        rng = np.random.default_rng(seed)
    output_dir = Path(output_dir)

    source = image_service.load(input_path)
    stem = Path(input_path).stem
    logger.info(f"Loaded {input_path} ({source.width}x{source.height})")

    edges = extract_edges(source, output_dir=output_dir, ext=ext, stem=stem)

    components = label_components(
        edges, rng,
        component_service=component_service,
        epsilon=segment_epsilon,
        output_dir=output_dir, ext=ext, stem=stem,
    )

    regions = fill_regions(
        edges, rng,
        flood_fill_service=flood_fill_service,
        image_service=image_service,
        epsilon=flood_fill_epsilon,
        output_dir=output_dir, ext=ext, stem=stem,
    )

    _save_outputs([edges, components.image, regions.image], image_service)

    return PipelineReport(
        input_path=Path(input_path),
        edges_path=edges.path,
        components_path=components.image.path,
        regions_path=regions.image.path,
        width=source.width,
        height=source.height,
        component_count=components.component_count,
        suppressed_count=components.suppressed_count,
        region_count=regions.region_count,
    )


def log_report(report: PipelineReport) -> None:
    """
    Log the results of one pipeline run.
    """
    logger.info("=" * 60)
    logger.info(f"Input:       {report.input_path} ({report.width}x{report.height})")
    logger.info(f"Edges:       {report.edges_path}")
    logger.info(f"Components:  {report.components_path} "
                f"({report.component_count} found, {report.suppressed_count} suppressed)")
    logger.info(f"Regions:     {report.regions_path} ({report.region_count} filled)")
    logger.info("=" * 60)
