import json
import os

import pytest

from hocredit.config import AccuracyConfig, SegmentationConfig, load_config

REPO_CONFIG = os.path.join(os.path.dirname(os.path.dirname(__file__)), "config", "hocredit.json")


def test_shipped_config_matches_defaults():
    seg, acc = load_config(REPO_CONFIG)
    assert seg == SegmentationConfig()
    assert acc == AccuracyConfig()


def test_missing_config_falls_back_with_warning(tmp_path, capsys):
    seg, acc = load_config(str(tmp_path / "absent.json"))
    assert seg == SegmentationConfig()
    assert acc.case_sensitive is True
    assert "Warning" in capsys.readouterr().err


def test_config_overrides(tmp_path):
    path = tmp_path / "hocredit.json"
    path.write_text(json.dumps({
        "segmentation": {"min_word_width": 4, "dark_threshold": 0.6},
        "accuracy": {"case_sensitive": False},
    }), encoding="utf-8")
    seg, acc = load_config(str(path))
    assert seg.min_word_width == 4
    assert seg.dark_threshold == 0.6
    assert seg.min_word_height == 10
    assert acc.case_sensitive is False


def test_bad_json_and_unknown_keys_warn(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert load_config(str(bad)) == (SegmentationConfig(), AccuracyConfig())
    assert "Could not load config" in capsys.readouterr().err

    extra = tmp_path / "extra.json"
    extra.write_text(json.dumps({"segmentation": {"colour": "red"}}), encoding="utf-8")
    seg, _ = load_config(str(extra))
    assert seg == SegmentationConfig()
    assert "colour" in capsys.readouterr().err


def test_invalid_values_raise():
    with pytest.raises(ValueError):
        SegmentationConfig(dark_threshold=0)
    with pytest.raises(ValueError):
        SegmentationConfig(merge_gap_divisor=0)
    with pytest.raises(ValueError):
        SegmentationConfig(min_word_width=-1)
    with pytest.raises(ValueError):
        SegmentationConfig(dark_threshold="0.7")
    with pytest.raises(ValueError):
        SegmentationConfig(min_word_width=8.5)
    with pytest.raises(ValueError):
        SegmentationConfig(max_width_divisor=True)
    with pytest.raises(ValueError):
        AccuracyConfig(case_sensitive="false")


def test_badly_typed_config_values_raise(tmp_path):
    path = tmp_path / "hocredit.json"
    path.write_text(json.dumps({"segmentation": {"dark_threshold": "0.7"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))

    path.write_text(json.dumps({"accuracy": {"case_sensitive": "false"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))

    path.write_text(json.dumps({"segmentation": {"dark_threshold": 1}}), encoding="utf-8")
    seg, _ = load_config(str(path))
    assert seg.dark_threshold == 1
