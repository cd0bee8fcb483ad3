"""High-level pipeline: load image → binarise → segment → export.

Also wraps accuracy scoring of two text files. These are the entry points
used by the CLI; the engines in `hocredit.segment` and `hocredit.metrics`
stay free of I/O.
"""

from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional, Sequence

import cv2
import numpy as np
import pandas as pd

from hocredit.config import AccuracyConfig, SegmentationConfig
from hocredit.image import load_image, preprocess_for_segmentation
from hocredit.metrics import AccuracyMetrics, score
from hocredit.render import draw_segmentation
from hocredit.segment import LineBox, PixelGrid, segment_grid

DATAFRAME_COLUMNS = [
    'line', 'word', 'x', 'y', 'width', 'height',
    'line_x', 'line_y', 'line_width', 'line_height',
]


def segment_image(img: np.ndarray, config: Optional[SegmentationConfig] = None,
                  preprocess: bool = True) -> List[LineBox]:
    """Segment an in-memory image into lines of word boxes.

    Doxygen:
    - @param img: Decoded image array (gray, RGB or RGBA).
    - @param config: Segmentation settings; defaults to `SegmentationConfig()`.
    - @param preprocess: Binarise with `preprocess_for_segmentation` first.
    - @return: LineBox list in reading order.
    - @throws ValueError: If the image has a zero dimension.
    """
    if preprocess:
        if np.asarray(img).size == 0:
            raise ValueError("Pixel grid must have non-zero dimensions")
        img = preprocess_for_segmentation(img)
    return segment_grid(PixelGrid(img), config)


def lines_to_dicts(lines: Sequence[LineBox]) -> List[Dict[str, Any]]:
    return [line.to_dict() for line in lines]


def lines_to_dataframe(lines: Sequence[LineBox]) -> pd.DataFrame:
    """Flatten lines into one row per word.

    Doxygen:
    - @param lines: Segmentation result.
    - @return: DataFrame with `DATAFRAME_COLUMNS`; `line` and `word` are 1-based.
    """
    rows = [
        {
            'line': li,
            'word': wi,
            'x': w.x,
            'y': w.y,
            'width': w.width,
            'height': w.height,
            'line_x': line.x,
            'line_y': line.y,
            'line_width': line.width,
            'line_height': line.height,
        }
        for li, line in enumerate(lines, start=1)
        for wi, w in enumerate(line.words, start=1)
    ]
    return pd.DataFrame(rows, columns=DATAFRAME_COLUMNS)


def segment_image_file(
    image_path: str,
    config: Optional[SegmentationConfig] = None,
    preprocess: bool = True,
    csv_path: Optional[str] = None,
    overlay_path: Optional[str] = None,
) -> Dict[str, Any]:
    """Run segmentation on an image file and optionally save CSV / overlay.

    Doxygen:
    - @param image_path: Path to input image file.
    - @param config: Segmentation settings.
    - @param preprocess: Binarise before segmentation (disable for clean scans).
    - @param csv_path: Where to write the per-word table, if given.
    - @param overlay_path: Where to write the debug overlay image, if given.
    - @return: Dict with keys {'width', 'height', 'lines', 'word_count'}.
    """
    img = load_image(image_path)
    height, width = img.shape[:2]

    lines = segment_image(img, config=config, preprocess=preprocess)
    word_count = sum(len(line.words) for line in lines)
    print(f"Custom word detection completed: {word_count} words, {len(lines)} lines ({width}x{height})", file=sys.stderr)

    if csv_path:
        lines_to_dataframe(lines).to_csv(csv_path, index=False)
        print(f"Word table written to: {csv_path}", file=sys.stderr)

    if overlay_path:
        overlay = draw_segmentation(img, lines)
        if not cv2.imwrite(overlay_path, cv2.cvtColor(overlay, cv2.COLOR_RGB2BGR)):
            print(f"Warning: failed to write overlay image '{overlay_path}'", file=sys.stderr)
        else:
            print(f"Overlay written to: {overlay_path}", file=sys.stderr)

    return {
        'width': int(width),
        'height': int(height),
        'lines': lines_to_dicts(lines),
        'word_count': word_count,
    }


def _read_text(path: str) -> str:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Text file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def score_text_files(original_path: str, corrected_path: str,
                     config: Optional[AccuracyConfig] = None) -> AccuracyMetrics:
    """Score a corrected transcription file against the original file.

    Doxygen:
    - @param original_path: UTF-8 text file with the reference transcription.
    - @param corrected_path: UTF-8 text file with the corrected transcription.
    - @param config: Word comparison policy.
    - @return: AccuracyMetrics for the pair.
    """
    return score(_read_text(original_path), _read_text(corrected_path), config)
