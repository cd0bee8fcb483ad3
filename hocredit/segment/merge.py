"""Greedy merging of adjacent components into word boxes.

Broken glyphs and letters split by thresholding show up as several small
components sitting side by side. After a rough top-to-bottom, left-to-right
sort, each component is compared only with the previous member of the open
group; it joins when the horizontal gap is small relative to glyph height and
the vertical spans overlap. This is a greedy walk, not a clustering, and the
result depends on the sort order.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import List, Optional, Sequence

from hocredit.config import SegmentationConfig
from hocredit.segment.model import WordBox, valid_boxes, vertical_overlap


def sort_components(components: Sequence[WordBox], row_threshold: int = 10) -> List[WordBox]:
    """Sort boxes into reading order using a fixed same-row band.

    Doxygen:
    - @param components: Boxes to sort.
    - @param row_threshold: Boxes whose y differ by less than this sort by x.
    - @return: New sorted list.
    """
    def _compare(a: WordBox, b: WordBox) -> int:
        if abs(a.y - b.y) < row_threshold:
            return (a.x > b.x) - (a.x < b.x)
        return (a.y > b.y) - (a.y < b.y)

    return sorted(components, key=cmp_to_key(_compare))


def should_merge(last: WordBox, candidate: WordBox, gap_divisor: int = 3) -> bool:
    """Return True when `candidate` continues the word ending with `last`.

    Doxygen:
    - @param last: Most recent member of the open group.
    - @param candidate: Next component in sorted order.
    - @param gap_divisor: Max gap is max(last.height, candidate.height) // gap_divisor.
    - @return: Whether the two should be merged.
    """
    gap = candidate.x - last.right
    max_gap = max(last.height, candidate.height) // gap_divisor
    return (0 <= gap <= max_gap
            and vertical_overlap(last.y, last.bottom, candidate.y, candidate.bottom))


def merge_components(components: Sequence[WordBox],
                     config: Optional[SegmentationConfig] = None) -> List[WordBox]:
    """Merge neighbouring components into word boxes.

    Doxygen:
    - @param components: Filtered component boxes in any order.
    - @param config: Sort band and gap ratio; defaults to `SegmentationConfig()`.
    - @return: Word boxes in reading order.
    """
    cfg = config or SegmentationConfig()
    ordered = sort_components(valid_boxes(components), cfg.merge_row_threshold)
    if len(ordered) <= 1:
        return ordered

    merged: List[WordBox] = []
    group = [ordered[0]]
    for component in ordered[1:]:
        if should_merge(group[-1], component, cfg.merge_gap_divisor):
            group.append(component)
        else:
            merged.append(WordBox.union(group))
            group = [component]
    merged.append(WordBox.union(group))
    return merged
