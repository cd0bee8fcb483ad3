"""Pixel classification and a read-only pixel grid over numpy arrays.

A pixel is "text" when the mean of its colour channels (alpha ignored) is
below `threshold` times the full channel range. For 8-bit samples with the
default threshold of 0.5 that means intensities 0..127 are text.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Tuple, Union

import numpy as np


class PixelClass(str, Enum):
    TEXT = "text"
    BACKGROUND = "background"


def full_scale_for(dtype: np.dtype) -> float:
    """Return the exclusive upper bound of channel values for `dtype`.

    Doxygen:
    - @param dtype: numpy dtype of the samples.
    - @return: 256 for uint8, 65536 for uint16, 1.0 for floating point, etc.
    """
    dtype = np.dtype(dtype)
    if dtype == np.bool_:
        return 2.0
    if np.issubdtype(dtype, np.integer):
        return float(np.iinfo(dtype).max) + 1.0
    if np.issubdtype(dtype, np.floating):
        return 1.0
    raise ValueError(f"Unsupported pixel dtype: {dtype}")


def _color_channels(pixel: np.ndarray) -> np.ndarray:
    # 2 channels = luminance + alpha, 4 channels = RGB + alpha
    if pixel.shape[-1] in (2, 4):
        return pixel[..., :-1]
    return pixel


def classify(pixel: Union[int, float, Tuple[Any, ...], np.ndarray], threshold: float = 0.5,
             full_scale: float = 256.0) -> PixelClass:
    """Classify one pixel as text or background.

    Doxygen:
    - @param pixel: Gray value or channel tuple (gray+alpha, RGB, RGBA).
    - @param threshold: Fraction of `full_scale` below which the pixel is text.
    - @param full_scale: Exclusive upper bound of channel values.
    - @return: PixelClass.TEXT or PixelClass.BACKGROUND.
    """
    samples = np.atleast_1d(np.asarray(pixel, dtype=np.float64))
    intensity = float(_color_channels(samples).mean())
    return PixelClass.TEXT if intensity < threshold * full_scale else PixelClass.BACKGROUND


class PixelGrid:
    """Immutable view over decoded image samples.

    Accepts arrays shaped (H, W) or (H, W, C) with C in 1..4. The caller's
    array is never written to; the grid holds a read-only view of it.
    """

    def __init__(self, samples: np.ndarray) -> None:
        arr = np.asarray(samples)
        if arr.ndim == 3 and arr.shape[2] not in (1, 2, 3, 4):
            raise ValueError(f"Unsupported channel count: {arr.shape[2]}")
        if arr.ndim not in (2, 3):
            raise ValueError(f"Pixel grid must be 2-D or 3-D, got shape {arr.shape}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError(f"Pixel grid must have non-zero dimensions, got {arr.shape[1]}x{arr.shape[0]}")
        view = arr.view()
        view.flags.writeable = False
        self._samples = view
        self.full_scale = full_scale_for(arr.dtype)

    @property
    def width(self) -> int:
        return int(self._samples.shape[1])

    @property
    def height(self) -> int:
        return int(self._samples.shape[0])

    @property
    def samples(self) -> np.ndarray:
        return self._samples

    def at(self, x: int, y: int):
        """Return the raw sample(s) at column `x`, row `y`."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} grid")
        return self._samples[y, x]

    def classify_at(self, x: int, y: int, threshold: float = 0.5) -> PixelClass:
        return classify(self.at(x, y), threshold=threshold, full_scale=self.full_scale)

    def text_mask(self, threshold: float = 0.5) -> np.ndarray:
        """Vectorised `classify` over the whole grid.

        Doxygen:
        - @param threshold: Fraction of the channel range below which a pixel is text.
        - @return: New boolean array of shape (height, width), True for text pixels.
        """
        samples = self._samples.astype(np.float64)
        if samples.ndim == 3:
            intensity = _color_channels(samples).mean(axis=2)
        else:
            intensity = samples
        return intensity < threshold * self.full_scale
