"""Debug overlay of segmentation results.

Boxes are drawn with OpenCV, line numbers with PIL, on an RGB copy of the
input image.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import cv2
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from hocredit.image.processing import to_gray_uint8
from hocredit.segment.model import LineBox

WORD_COLOR: Tuple[int, int, int] = (0, 170, 0)
LINE_COLOR: Tuple[int, int, int] = (220, 0, 0)
LABEL_COLOR: Tuple[int, int, int] = (0, 0, 220)


def _to_rgb(img: np.ndarray) -> np.ndarray:
    arr = np.asarray(img)
    if arr.ndim == 3 and arr.shape[2] == 3 and arr.dtype == np.uint8:
        return arr.copy()
    if arr.ndim == 3 and arr.shape[2] == 4 and arr.dtype == np.uint8:
        return cv2.cvtColor(arr, cv2.COLOR_RGBA2RGB)
    return cv2.cvtColor(to_gray_uint8(arr), cv2.COLOR_GRAY2RGB)


def draw_segmentation(img: np.ndarray, lines: Sequence[LineBox], label_lines: bool = True,
                      thickness: int = 1) -> np.ndarray:
    """Draw word and line rectangles over an image.

    Doxygen:
    - @param img: Source image (gray, RGB or RGBA); not modified.
    - @param lines: Segmentation result from `segment_grid`.
    - @param label_lines: Write 1-based line numbers left of each line.
    - @param thickness: Rectangle border width in pixels.
    - @return: New RGB uint8 image with the overlay.
    """
    canvas = _to_rgb(img)
    for line in lines:
        # right/bottom are exclusive, cv2 corners are inclusive
        cv2.rectangle(canvas, (line.x, line.y), (line.right - 1, line.bottom - 1), LINE_COLOR, thickness)
        for word in line.words:
            cv2.rectangle(canvas, (word.x, word.y), (word.right - 1, word.bottom - 1), WORD_COLOR, thickness)

    if not label_lines or not lines:
        return canvas

    img_pil = Image.fromarray(canvas)
    draw = ImageDraw.Draw(img_pil)
    font = ImageFont.load_default()
    for idx, line in enumerate(lines, start=1):
        label = str(idx)
        left, top, right, _ = draw.textbbox((0, 0), label, font=font)
        x = max(0, line.x - (right - left) - 3)
        draw.text((x, max(0, line.y - top)), label, fill=LABEL_COLOR, font=font)
    return np.array(img_pil)
