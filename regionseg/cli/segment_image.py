import os
import sys
import logging
import argparse
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..pipeline.segmentation_pipeline import run_segmentation, log_report
from ..repositories.image_repository import ImageCodecError
from ..services.component_service import ComponentService
from ..services.flood_fill_service import FloodFillService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Sobel edges, union-find components and flood-fill regions for one image.")
    ap.add_argument("input", nargs="?", default=os.getenv("INPUT_IMAGE_PATH", "data/input.png"),
                    help="image to segment")
    ap.add_argument("--output-dir", default=os.getenv("OUTPUT_DIR_PATH", "data/output"),
                    help="dir for the _edges, _components and _regions images")
    ap.add_argument("--ext", default=os.getenv("OUTPUT_IMG_EXT", ".png"))
    ap.add_argument("--segment-epsilon", type=float, default=None,
                    help="color distance below which neighbours merge (SEGMENT_EPSILON)")
    ap.add_argument("--flood-fill-epsilon", type=int, default=None,
                    help="R value below which a pixel is filled (FLOOD_FILL_EPSILON)")
    # argparse converts string defaults, so a bad RANDOM_SEED is a usage error
    ap.add_argument("--seed", type=int, default=os.getenv("RANDOM_SEED", "42"))
    return ap


def main(argv=None) -> int:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )
    args = build_parser().parse_args(argv)

    try:
        component_service = ComponentService(epsilon=args.segment_epsilon)
        flood_fill_service = FloodFillService(epsilon=args.flood_fill_epsilon)
    except ValueError as err:
        logger.error(f"Invalid configuration: {err}")
        return 2

    try:
        report = run_segmentation(
            args.input,
            args.output_dir,
            seed=args.seed,
            ext=args.ext,
            component_service=component_service,
            flood_fill_service=flood_fill_service,
        )
    except ImageCodecError as err:
        logger.error(f"Segmentation aborted: {err}")
        return 1

    log_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
