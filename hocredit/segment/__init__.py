"""Word and line segmentation without an OCR engine.

Pipeline: classify pixels, find 8-connected components, drop implausible
sizes, merge fragments into words, group words into lines.
"""

from typing import List, Optional

from hocredit.config import SegmentationConfig

from .model import LineBox, WordBox, vertical_overlap
from .pixels import PixelClass, PixelGrid, classify
from .components import filter_components, find_components, find_components_in_mask
from .merge import merge_components, should_merge, sort_components
from .lines import group_words_into_lines, on_same_line, sort_words


def segment_grid(grid: PixelGrid, config: Optional[SegmentationConfig] = None) -> List[LineBox]:
    """Run the full segmentation pipeline over a pixel grid.

    Doxygen:
    - @param grid: Decoded image samples.
    - @param config: Thresholds and size bounds; defaults to `SegmentationConfig()`.
    - @return: Lines in reading order, each holding its words left-to-right.
    """
    cfg = config or SegmentationConfig()
    components = find_components(grid, threshold=cfg.dark_threshold)
    words = filter_components(components, grid.width, grid.height, cfg)
    words = merge_components(words, cfg)
    return group_words_into_lines(words, cfg)


__all__ = [
    "LineBox",
    "WordBox",
    "vertical_overlap",
    "PixelClass",
    "PixelGrid",
    "classify",
    "find_components",
    "find_components_in_mask",
    "filter_components",
    "merge_components",
    "should_merge",
    "sort_components",
    "group_words_into_lines",
    "on_same_line",
    "sort_words",
    "segment_grid",
]
