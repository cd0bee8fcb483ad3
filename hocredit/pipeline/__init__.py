"""High-level orchestration for segmentation and accuracy scoring."""

from .process import (
    lines_to_dataframe,
    lines_to_dicts,
    score_text_files,
    segment_image,
    segment_image_file,
)

__all__ = [
    "lines_to_dataframe",
    "lines_to_dicts",
    "score_text_files",
    "segment_image",
    "segment_image_file",
]
