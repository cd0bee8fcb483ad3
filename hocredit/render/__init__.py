"""Rendering helpers for visual inspection of segmentation output."""

from .draw import draw_segmentation

__all__ = [
    "draw_segmentation",
]
