import json
import os
import sys
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

CONFIG_PATH = os.path.join(os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir)), "config", "hocredit.json")


@dataclass(frozen=True)
class SegmentationConfig:
    """Tunable knobs of the word/line segmentation engine.

    The size bounds assume portrait pages with line-scale text: anything wider
    than half the page or taller than a fifth of it is treated as a figure or
    rule, and blobs under 8x10 px as noise. Large headings and very small print
    fall outside these defaults and need a custom config.

    Doxygen:
    - @param dark_threshold: Fraction of the channel range below which a pixel is text.
    - @param min_word_width: Smallest accepted component width in pixels.
    - @param min_word_height: Smallest accepted component height in pixels.
    - @param max_width_divisor: Components wider than image_width // divisor are dropped.
    - @param max_height_divisor: Components taller than image_height // divisor are dropped.
    - @param merge_row_threshold: Y distance under which components sort as one row.
    - @param merge_gap_divisor: Max merge gap is max(height_a, height_b) // divisor.
    - @param line_row_divisor: Words sort as one row when |dy| < height // divisor.
    - @param line_tolerance_divisor: Line envelope tolerance is average height // divisor.
    """

    dark_threshold: float = 0.5
    min_word_width: int = 8
    min_word_height: int = 10
    max_width_divisor: int = 2
    max_height_divisor: int = 5
    merge_row_threshold: int = 10
    merge_gap_divisor: int = 3
    line_row_divisor: int = 2
    line_tolerance_divisor: int = 3

    def __post_init__(self) -> None:
        # bool is an int subclass; JSON true/false must not pass as a number
        if isinstance(self.dark_threshold, bool) or not isinstance(self.dark_threshold, (int, float)):
            raise ValueError(f"dark_threshold must be a number, got {self.dark_threshold!r}")
        for f in fields(self):
            if f.name == "dark_threshold":
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{f.name} must be an integer, got {value!r}")
        if not 0.0 < self.dark_threshold <= 1.0:
            raise ValueError(f"dark_threshold must be in (0, 1], got {self.dark_threshold}")
        if self.min_word_width < 0 or self.min_word_height < 0:
            raise ValueError("Minimum word dimensions must not be negative.")
        if self.merge_row_threshold < 0:
            raise ValueError("merge_row_threshold must not be negative.")
        for name in ("max_width_divisor", "max_height_divisor", "merge_gap_divisor",
                     "line_row_divisor", "line_tolerance_divisor"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1.")


@dataclass(frozen=True)
class AccuracyConfig:
    """Word comparison policy of the accuracy scorer (characters always compare exactly)."""

    case_sensitive: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.case_sensitive, bool):
            raise ValueError(f"case_sensitive must be true or false, got {self.case_sensitive!r}")


def _build(cls, section: Any, name: str):
    if section is None:
        return cls()
    if not isinstance(section, dict):
        print(f"Warning: '{name}' section in config must be an object, using defaults", file=sys.stderr)
        return cls()
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(section) - known)
    if unknown:
        print(f"Warning: ignoring unknown '{name}' config keys: {', '.join(unknown)}", file=sys.stderr)
    values: Dict[str, Any] = {k: v for k, v in section.items() if k in known}
    return cls(**values)


def load_config(path: Optional[str] = None) -> Tuple[SegmentationConfig, AccuracyConfig]:
    """Load engine settings from config/hocredit.json, falling back to defaults.

    Doxygen:
    - @param path: Optional path to the JSON file; defaults to `CONFIG_PATH`.
    - @return: (SegmentationConfig, AccuracyConfig) pair.
    - @throws ValueError: If a configured value is out of range.
    """
    cfg_path = path or CONFIG_PATH

    if not os.path.exists(cfg_path):
        print(f"Warning: hocredit.json not found at {cfg_path}, using defaults", file=sys.stderr)
        return SegmentationConfig(), AccuracyConfig()

    try:
        with open(cfg_path, "r", encoding="utf-8") as cfg_file:
            data = json.load(cfg_file) or {}
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Warning: Could not load config from {cfg_path}: {exc}", file=sys.stderr)
        return SegmentationConfig(), AccuracyConfig()

    if not isinstance(data, dict):
        print(f"Warning: config at {cfg_path} must be a JSON object, using defaults", file=sys.stderr)
        return SegmentationConfig(), AccuracyConfig()

    segmentation = _build(SegmentationConfig, data.get("segmentation"), "segmentation")
    accuracy = _build(AccuracyConfig, data.get("accuracy"), "accuracy")
    return segmentation, accuracy
