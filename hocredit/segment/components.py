"""Connected-component discovery and size filtering.

Components are found with an 8-connected flood fill over the text mask. The
fill keeps pending coordinates on an explicit list so page-sized blobs do not
exhaust the interpreter stack.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from hocredit.config import SegmentationConfig
from hocredit.segment.model import WordBox
from hocredit.segment.pixels import PixelGrid

# N, S, E, W and the four diagonals
NEIGHBOURS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


def _fill(mask: List[List[bool]], visited: List[bytearray], seed_x: int, seed_y: int) -> WordBox:
    height, width = len(mask), len(mask[0])
    min_x = max_x = seed_x
    min_y = max_y = seed_y
    visited[seed_y][seed_x] = 1
    stack = [(seed_x, seed_y)]
    while stack:
        x, y = stack.pop()
        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y
        for dx, dy in NEIGHBOURS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and not visited[ny][nx] and mask[ny][nx]:
                visited[ny][nx] = 1
                stack.append((nx, ny))
    return WordBox(x=min_x, y=min_y, width=max_x - min_x + 1, height=max_y - min_y + 1)


def find_components_in_mask(mask: np.ndarray) -> List[WordBox]:
    """Label 8-connected True regions of `mask` and return their bounding boxes.

    Doxygen:
    - @param mask: Boolean array of shape (height, width); True marks text pixels.
    - @return: One WordBox per component, in row-major order of each component's first pixel.
    """
    mask = np.asarray(mask, dtype=bool)
    if mask.size == 0:
        return []
    # plain lists: per-pixel numpy indexing dominates the fill otherwise
    rows = mask.tolist()
    visited = [bytearray(mask.shape[1]) for _ in range(mask.shape[0])]
    components: List[WordBox] = []
    # Only text pixels can seed a component; nonzero() yields them in row-major order.
    ys, xs = np.nonzero(mask)
    for y, x in zip(ys.tolist(), xs.tolist()):
        if visited[y][x]:
            continue
        components.append(_fill(rows, visited, x, y))
    return components


def find_components(grid: PixelGrid, threshold: float = 0.5) -> List[WordBox]:
    """Find raw (unfiltered) connected components of text pixels in `grid`.

    Doxygen:
    - @param grid: Read-only pixel grid.
    - @param threshold: Dark-pixel threshold as a fraction of the channel range.
    - @return: List of WordBox, one per connected blob.
    """
    return find_components_in_mask(grid.text_mask(threshold))


def is_valid_word_size(box: WordBox, image_width: int, image_height: int,
                       config: Optional[SegmentationConfig] = None) -> bool:
    cfg = config or SegmentationConfig()
    max_width = image_width // cfg.max_width_divisor
    max_height = image_height // cfg.max_height_divisor
    return (cfg.min_word_width <= box.width <= max_width
            and cfg.min_word_height <= box.height <= max_height)


def filter_components(components: Sequence[WordBox], image_width: int, image_height: int,
                      config: Optional[SegmentationConfig] = None) -> List[WordBox]:
    """Keep components whose size is plausible for a single word.

    Degenerate boxes (width or height <= 0) are dropped as well.

    Doxygen:
    - @param components: Raw component boxes.
    - @param image_width: Width of the source image in pixels.
    - @param image_height: Height of the source image in pixels.
    - @param config: Size bounds; defaults to `SegmentationConfig()`.
    - @return: Filtered list, input order preserved.
    """
    cfg = config or SegmentationConfig()
    return [
        c for c in components
        if c.is_valid and is_valid_word_size(c, image_width, image_height, cfg)
    ]
