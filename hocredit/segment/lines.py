from __future__ import annotations

from functools import cmp_to_key
from typing import List, Optional, Sequence

from hocredit.config import SegmentationConfig
from hocredit.segment.model import LineBox, WordBox, valid_boxes, vertical_overlap


def sort_words(words: Sequence[WordBox], row_divisor: int = 2) -> List[WordBox]:
    """Sort words top-to-bottom, left-to-right.

    Two words sort as one row (by x) when their y differ by less than
    `a.height // row_divisor`, where `a` is the left operand of the comparison.
    """
    def _compare(a: WordBox, b: WordBox) -> int:
        if abs(a.y - b.y) < a.height // row_divisor:
            return (a.x > b.x) - (a.x < b.x)
        return (a.y > b.y) - (a.y < b.y)

    return sorted(words, key=cmp_to_key(_compare))


def on_same_line(line_words: Sequence[WordBox], word: WordBox, tolerance_divisor: int = 3) -> bool:
    """Check whether `word` vertically fits the envelope of the current line.

    Doxygen:
    - @param line_words: Words already on the line (non-empty for a real check).
    - @param word: Candidate word.
    - @param tolerance_divisor: Envelope padding is (average word height) // divisor.
    - @return: True if the word's span overlaps [top - tol, bottom + tol].
    """
    if not line_words:
        return True
    avg_height = sum(w.height for w in line_words) // len(line_words)
    tolerance = avg_height // tolerance_divisor
    top = min(w.y for w in line_words) - tolerance
    bottom = max(w.bottom for w in line_words) + tolerance
    return vertical_overlap(top, bottom, word.y, word.bottom)


def group_words_into_lines(words: Sequence[WordBox],
                           config: Optional[SegmentationConfig] = None) -> List[LineBox]:
    """Group word boxes into horizontal text lines.

    Doxygen:
    - @param words: Word boxes in any order.
    - @param config: Row band and tolerance divisors; defaults to `SegmentationConfig()`.
    - @return: LineBox list in reading order, words left-to-right within each line.
    """
    cfg = config or SegmentationConfig()
    ordered = sort_words(valid_boxes(words), cfg.line_row_divisor)
    if not ordered:
        return []

    lines: List[LineBox] = []
    current: List[WordBox] = []
    for word in ordered:
        if not current or on_same_line(current, word, cfg.line_tolerance_divisor):
            current.append(word)
        else:
            lines.append(LineBox.from_words(current))
            current = [word]
    if current:
        lines.append(LineBox.from_words(current))
    return lines
