from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Sequence, Tuple


def vertical_overlap(a_top: int, a_bottom: int, b_top: int, b_bottom: int) -> bool:
    """Closed-interval test: spans that merely touch count as overlapping."""
    return b_bottom >= a_top and b_top <= a_bottom


@dataclass(frozen=True)
class WordBox:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    @classmethod
    def union(cls, boxes: Sequence["WordBox"]) -> "WordBox":
        """Bounding box of all `boxes` (must be non-empty)."""
        if not boxes:
            raise ValueError("Cannot build the union of zero boxes.")
        if len(boxes) == 1:
            return boxes[0]
        min_x = min(b.x for b in boxes)
        min_y = min(b.y for b in boxes)
        max_x = max(b.right for b in boxes)
        max_y = max(b.bottom for b in boxes)
        return cls(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)

    def to_dict(self) -> Dict[str, int]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


@dataclass(frozen=True)
class LineBox:
    words: Tuple[WordBox, ...]
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_words(cls, words: Iterable[WordBox]) -> "LineBox":
        members = tuple(words)
        bbox = WordBox.union(members)
        return cls(words=members, x=bbox.x, y=bbox.y, width=bbox.width, height=bbox.height)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'words': [w.to_dict() for w in self.words],
        }


def valid_boxes(boxes: Iterable[WordBox]) -> list:
    """Drop boxes with non-positive width or height."""
    return [b for b in boxes if b.is_valid]
