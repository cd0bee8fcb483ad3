"""Transcription accuracy metrics (edit distance, word error rate)."""

from .edit_distance import (
    AlignmentResult,
    EditOp,
    edit_distance,
    edit_operations,
    levenshtein_distance,
)
from .accuracy import (
    AccuracyMetrics,
    character_similarity,
    score,
    tokenize,
)

__all__ = [
    "AlignmentResult",
    "EditOp",
    "edit_distance",
    "edit_operations",
    "levenshtein_distance",
    "AccuracyMetrics",
    "character_similarity",
    "score",
    "tokenize",
]
