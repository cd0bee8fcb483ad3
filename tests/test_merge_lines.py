from hocredit.config import SegmentationConfig
from hocredit.segment.lines import group_words_into_lines, on_same_line, sort_words
from hocredit.segment.merge import merge_components, should_merge, sort_components
from hocredit.segment.model import LineBox, WordBox, vertical_overlap


def test_vertical_overlap_is_inclusive():
    assert vertical_overlap(10, 30, 30, 40)
    assert vertical_overlap(10, 30, 0, 10)
    assert not vertical_overlap(10, 30, 31, 40)
    assert not vertical_overlap(10, 30, 0, 9)


def test_should_merge_gap_limits():
    a = WordBox(10, 10, 20, 20)  # right edge at 30, max gap 20 // 3 == 6
    assert should_merge(a, WordBox(30, 10, 20, 20))
    assert should_merge(a, WordBox(36, 10, 20, 20))
    assert not should_merge(a, WordBox(37, 10, 20, 20))
    # overlapping horizontally gives a negative gap
    assert not should_merge(a, WordBox(25, 10, 20, 20))


def test_should_merge_requires_vertical_overlap():
    a = WordBox(10, 10, 20, 20)
    assert should_merge(a, WordBox(32, 30, 20, 20))
    assert not should_merge(a, WordBox(32, 31, 20, 20))


def test_sort_components_uses_row_band():
    boxes = [WordBox(50, 5, 10, 10), WordBox(0, 30, 10, 10), WordBox(10, 0, 10, 10)]
    assert sort_components(boxes) == [WordBox(10, 0, 10, 10), WordBox(50, 5, 10, 10), WordBox(0, 30, 10, 10)]


def test_merge_components_joins_close_fragments():
    merged = merge_components([WordBox(35, 10, 20, 20), WordBox(10, 10, 20, 20)])
    assert merged == [WordBox(10, 10, 45, 20)]


def test_merge_components_keeps_distant_fragments_apart():
    merged = merge_components([WordBox(10, 10, 20, 20), WordBox(50, 10, 20, 20)])
    assert merged == [WordBox(10, 10, 20, 20), WordBox(50, 10, 20, 20)]


def test_merge_compares_against_last_member_only():
    tall = WordBox(0, 0, 30, 30)
    small_top = WordBox(32, 0, 10, 10)
    # overlaps the group's envelope (0..30) but not small_top (0..10)
    low = WordBox(44, 20, 10, 10)
    merged = merge_components([low, small_top, tall])
    assert merged == [WordBox(0, 0, 42, 30), low]


def test_merge_components_drops_degenerate_and_handles_empty():
    assert merge_components([]) == []
    assert merge_components([WordBox(0, 0, 0, 5), WordBox(3, 3, 12, 12)]) == [WordBox(3, 3, 12, 12)]


def test_merge_components_respects_gap_divisor():
    boxes = [WordBox(10, 10, 20, 20), WordBox(40, 10, 20, 20)]
    assert len(merge_components(boxes)) == 2
    assert len(merge_components(boxes, SegmentationConfig(merge_gap_divisor=1))) == 1


def test_on_same_line_tolerance():
    line = [WordBox(0, 0, 20, 20)]  # tolerance 20 // 3 == 6, envelope -6..26
    assert on_same_line(line, WordBox(30, 26, 20, 10))
    assert not on_same_line(line, WordBox(30, 27, 20, 10))
    assert on_same_line([], WordBox(0, 500, 5, 5))


def test_sort_words_orders_rows_then_columns():
    words = [WordBox(60, 3, 20, 20), WordBox(0, 40, 20, 20), WordBox(5, 0, 20, 20)]
    assert sort_words(words) == [WordBox(5, 0, 20, 20), WordBox(60, 3, 20, 20), WordBox(0, 40, 20, 20)]


def test_group_words_into_lines():
    words = [
        WordBox(50, 2, 30, 20),
        WordBox(0, 50, 30, 20),
        WordBox(0, 0, 30, 20),
    ]
    lines = group_words_into_lines(words)
    assert len(lines) == 2
    first, second = lines
    assert first.words == (WordBox(0, 0, 30, 20), WordBox(50, 2, 30, 20))
    assert (first.x, first.y, first.width, first.height) == (0, 0, 80, 22)
    assert second.words == (WordBox(0, 50, 30, 20),)


def test_line_bbox_contains_its_words():
    words = [WordBox(x * 40, (x % 3) * 2, 30, 18 + x) for x in range(6)]
    for line in group_words_into_lines(words):
        xs = [w.x for w in line.words]
        assert xs == sorted(xs)
        for w in line.words:
            assert line.x <= w.x and w.right <= line.right
            assert line.y <= w.y and w.bottom <= line.bottom


def test_group_words_into_lines_empty_and_degenerate():
    assert group_words_into_lines([]) == []
    assert group_words_into_lines([WordBox(0, 0, -1, 10)]) == []


def test_line_box_from_words_and_to_dict():
    line = LineBox.from_words([WordBox(0, 0, 10, 10), WordBox(20, 5, 10, 10)])
    assert line.to_dict() == {
        'x': 0, 'y': 0, 'width': 30, 'height': 15,
        'words': [
            {'x': 0, 'y': 0, 'width': 10, 'height': 10},
            {'x': 20, 'y': 5, 'width': 10, 'height': 10},
        ],
    }
