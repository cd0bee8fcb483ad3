import numpy as np
import pytest

from hocredit.config import SegmentationConfig
from hocredit.segment import LineBox, PixelGrid, WordBox, segment_grid


def _page(width=200, height=200, channels=None):
    shape = (height, width) if channels is None else (height, width, channels)
    return np.full(shape, 255, dtype=np.uint8)


def test_blank_page_has_no_lines():
    assert segment_grid(PixelGrid(_page())) == []


def test_single_rectangle_becomes_one_word_and_one_line():
    img = _page()
    img[20:40, 30:60] = 0
    lines = segment_grid(PixelGrid(img))
    assert len(lines) == 1
    assert lines[0].words == (WordBox(30, 20, 30, 20),)
    assert (lines[0].x, lines[0].y, lines[0].width, lines[0].height) == (30, 20, 30, 20)


def test_close_rectangles_merge_into_one_word():
    img = _page()
    img[20:40, 30:60] = 0
    img[20:40, 65:95] = 0  # gap of 5 px, limit is 20 // 3 == 6
    lines = segment_grid(PixelGrid(img))
    assert len(lines) == 1
    assert lines[0].words == (WordBox(30, 20, 65, 20),)


def test_distant_rectangles_stay_separate_words_on_one_line():
    img = _page()
    img[20:40, 30:60] = 0
    img[22:42, 80:110] = 0
    lines = segment_grid(PixelGrid(img))
    assert len(lines) == 1
    assert lines[0].words == (WordBox(30, 20, 30, 20), WordBox(80, 22, 30, 20))


def test_two_rows_become_two_lines():
    img = _page()
    img[20:40, 30:60] = 0
    img[20:40, 90:120] = 0
    img[100:118, 10:50] = 0
    lines = segment_grid(PixelGrid(img))
    assert [len(line.words) for line in lines] == [2, 1]
    assert lines[1].words == (WordBox(10, 100, 40, 18),)
    assert all(isinstance(line, LineBox) for line in lines)


def test_oversized_and_tiny_blobs_are_filtered():
    img = _page()
    img[20:40, 0:150] = 0    # wider than half the page
    img[100:104, 100:104] = 0  # speck
    assert segment_grid(PixelGrid(img)) == []


def test_rgb_and_rgba_pages_segment_like_gray():
    gray = _page()
    gray[20:40, 30:60] = 0
    rgb = np.repeat(gray[:, :, None], 3, axis=2)
    rgba = np.dstack([rgb, np.full(gray.shape, 255, dtype=np.uint8)])
    expected = segment_grid(PixelGrid(gray))
    assert segment_grid(PixelGrid(rgb)) == expected
    assert segment_grid(PixelGrid(rgba)) == expected


def test_dark_threshold_from_config():
    img = _page()
    img[20:40, 30:60] = 150
    assert segment_grid(PixelGrid(img)) == []
    lines = segment_grid(PixelGrid(img), SegmentationConfig(dark_threshold=0.7))
    assert len(lines) == 1


def test_segmentation_is_deterministic():
    rng = np.random.default_rng(3)
    img = _page(300, 300)
    for _ in range(12):
        x, y = rng.integers(0, 260), rng.integers(0, 270)
        img[y:y + 14, x:x + 25] = 0
    first = segment_grid(PixelGrid(img))
    second = segment_grid(PixelGrid(img.copy()))
    assert first == second


def test_zero_sized_grid_fails_fast():
    with pytest.raises(ValueError):
        segment_grid(PixelGrid(np.zeros((0, 100), dtype=np.uint8)))
