"""Transcription accuracy metrics for an original/corrected text pair.

Character similarity is derived from the character-level edit distance and
is always case-sensitive. Word metrics come from an alignment of
whitespace-delimited tokens; the case policy for tokens is set by
`AccuracyConfig.case_sensitive`. Denominators are clamped to at least 1, so
empty texts yield defined values instead of a division error.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from hocredit.config import AccuracyConfig
from hocredit.metrics.edit_distance import edit_distance


@dataclass(frozen=True)
class AccuracyMetrics:
    character_similarity: float
    word_similarity: float
    word_accuracy: float
    word_error_rate: float
    total_words_original: int
    total_words_transcribed: int
    correct_words: int
    substitutions: int
    deletions: int
    insertions: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def tokenize(text: str, case_sensitive: bool = True) -> List[str]:
    """Split `text` on runs of whitespace; lowercase tokens when not case-sensitive."""
    tokens = (text or "").split()
    if not case_sensitive:
        tokens = [t.lower() for t in tokens]
    return tokens


def character_similarity(original: str, corrected: str) -> float:
    distance, _ = edit_distance(original or "", corrected or "")
    return _clamp(1.0 - distance / max(1, len(original or "")))


def score(original: str, corrected: str, config: Optional[AccuracyConfig] = None) -> AccuracyMetrics:
    """Compare a corrected transcription against the original text.

    Doxygen:
    - @param original: Reference text (plain, markup already stripped).
    - @param corrected: Candidate transcription.
    - @param config: Word comparison policy; defaults to `AccuracyConfig()`.
    - @return: AccuracyMetrics with similarity, accuracy, WER and edit counts.
    """
    cfg = config or AccuracyConfig()

    char_sim = character_similarity(original, corrected)

    original_words = tokenize(original, cfg.case_sensitive)
    corrected_words = tokenize(corrected, cfg.case_sensitive)
    _, alignment = edit_distance(original_words, corrected_words)

    reference_count = max(1, len(original_words))
    word_accuracy = alignment.matches / reference_count
    word_error_rate = alignment.errors / reference_count

    return AccuracyMetrics(
        character_similarity=char_sim,
        word_similarity=_clamp(1.0 - word_error_rate),
        word_accuracy=word_accuracy,
        word_error_rate=word_error_rate,
        total_words_original=len(original_words),
        total_words_transcribed=len(corrected_words),
        correct_words=alignment.matches,
        substitutions=alignment.substitutions,
        deletions=alignment.deletions,
        insertions=alignment.insertions,
    )
