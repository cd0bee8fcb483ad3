"""Image loading and binarisation ahead of word segmentation.

Decoding goes through Pillow (PNG, JPEG, GIF, TIFF, ...); cleanup uses
OpenCV on numpy arrays. Arrays are returned in RGB / RGBA / gray order,
never BGR.
"""

from __future__ import annotations

import os

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from hocredit.segment.pixels import full_scale_for

# Percent of darkest / brightest pixels clipped by the contrast stretch
BLACK_CLIP_PERCENT = 0.15
WHITE_CLIP_PERCENT = 0.05
BINARY_THRESHOLD = 0.75


def load_image(path: str) -> np.ndarray:
    """Decode an image file into a numpy array.

    Doxygen:
    - @param path: Path to the image file.
    - @return: uint8 array (H, W), (H, W, 3) or (H, W, 4); uint16 (H, W) for 16-bit gray.
    - @throws FileNotFoundError: If the file does not exist.
    - @throws RuntimeError: If the file cannot be decoded as an image.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Image file not found: {path}")
    try:
        with Image.open(path) as img:
            img.load()
            mode = img.mode
            if mode == "1":
                img = img.convert("L")
            elif mode == "P":
                img = img.convert("RGBA" if "transparency" in img.info else "RGB")
            elif mode in ("LA", "L", "RGB", "RGBA") or mode.startswith("I;16"):
                pass
            elif mode == "I":
                return np.clip(np.asarray(img), 0, 65535).astype(np.uint16)
            else:
                img = img.convert("RGB")
            return np.array(img)
    except (UnidentifiedImageError, OSError) as exc:
        raise RuntimeError(f"Failed to load image: {path}") from exc


def to_gray_uint8(img: np.ndarray) -> np.ndarray:
    """Collapse any supported sample layout to 8-bit grayscale.

    Doxygen:
    - @param img: Gray, gray+alpha, RGB or RGBA array of any integer/float dtype.
    - @return: uint8 array of shape (H, W).
    """
    arr = np.asarray(img)
    if arr.dtype != np.uint8:
        scale = 256.0 / full_scale_for(arr.dtype)
        arr = np.clip(arr.astype(np.float64) * scale, 0, 255).astype(np.uint8)
    if arr.ndim == 2:
        return arr
    channels = arr.shape[2]
    if channels == 1:
        return arr[:, :, 0]
    if channels == 2:
        return np.ascontiguousarray(arr[:, :, 0])
    if channels == 3:
        return cv2.cvtColor(arr, cv2.COLOR_RGB2GRAY)
    if channels == 4:
        return cv2.cvtColor(arr, cv2.COLOR_RGBA2GRAY)
    raise ValueError(f"Unsupported channel count: {channels}")


def stretch_contrast(gray: np.ndarray, black_percent: float = BLACK_CLIP_PERCENT,
                     white_percent: float = WHITE_CLIP_PERCENT) -> np.ndarray:
    lo = float(np.percentile(gray, black_percent))
    hi = float(np.percentile(gray, 100.0 - white_percent))
    if hi <= lo:
        return gray.copy()
    stretched = (gray.astype(np.float64) - lo) * (255.0 / (hi - lo))
    return np.clip(np.rint(stretched), 0, 255).astype(np.uint8)


def preprocess_for_segmentation(img: np.ndarray) -> np.ndarray:
    """Binarise a page so that text is black (0) on white (255).

    Steps: grayscale, contrast stretch, light unsharp mask, horizontal
    2x1 closing to bridge hairline gaps, fixed threshold at 75% intensity.

    Doxygen:
    - @param img: Input image array (gray, RGB or RGBA).
    - @return: Binary uint8 image of shape (H, W).
    """
    gray = to_gray_uint8(img)
    gray = stretch_contrast(gray)
    blurred = cv2.GaussianBlur(gray, (0, 0), 1.0)
    sharpened = cv2.addWeighted(gray, 1.5, blurred, -0.5, 0)
    kernel = np.ones((1, 2), dtype=np.uint8)
    closed = cv2.morphologyEx(sharpened, cv2.MORPH_CLOSE, kernel)
    _, binary = cv2.threshold(closed, int(BINARY_THRESHOLD * 255), 255, cv2.THRESH_BINARY)
    return binary
