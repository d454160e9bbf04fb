from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path


@dataclass
class PipelineReport:
    """
    Summary of one run: where the three result images went and what was found.
    """
    input_path: Path
    edges_path: Path
    components_path: Path
    regions_path: Path
    width: int
    height: int
    component_count: int
    suppressed_count: int
    region_count: int
