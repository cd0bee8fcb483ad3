"""Image-level utilities (decoding, binarisation before segmentation)."""

from .processing import (
    load_image,
    preprocess_for_segmentation,
    stretch_contrast,
    to_gray_uint8,
)

__all__ = [
    "load_image",
    "preprocess_for_segmentation",
    "stretch_contrast",
    "to_gray_uint8",
]
