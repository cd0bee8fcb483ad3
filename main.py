"""
Entry point and facade for the hOCR editing core engines.

This module exposes a stable API and a small CLI.

Packages:
- hocredit.segment: Pixel classification, components, merging, line grouping
- hocredit.metrics: Edit distance and transcription accuracy metrics
- hocredit.image: Image decoding and binarisation
- hocredit.render: Debug overlay drawing
- hocredit.pipeline: File-level orchestration (`segment_image_file`, `score_text_files`)
"""

from __future__ import annotations

import json
import sys

from hocredit.config import (
    AccuracyConfig,
    SegmentationConfig,
    load_config,
)
from hocredit.segment import (
    LineBox,
    PixelGrid,
    WordBox,
    segment_grid,
)
from hocredit.metrics import (
    AccuracyMetrics,
    AlignmentResult,
    edit_distance,
    levenshtein_distance,
    score,
)
from hocredit.pipeline import (
    lines_to_dataframe,
    score_text_files,
    segment_image,
    segment_image_file,
)

__all__ = [
    # config
    "AccuracyConfig",
    "SegmentationConfig",
    "load_config",
    # segmentation
    "LineBox",
    "PixelGrid",
    "WordBox",
    "segment_grid",
    "segment_image",
    "segment_image_file",
    "lines_to_dataframe",
    # metrics
    "AccuracyMetrics",
    "AlignmentResult",
    "edit_distance",
    "levenshtein_distance",
    "score",
    "score_text_files",
]


def _cli(argv=None) -> int:
    """CLI for word segmentation or transcription scoring.

    Segmentation mode:
    --image / -i: Path to input image
    --raw: Skip binarisation (for already clean, high-contrast scans)
    --csv: Write one row per detected word to this CSV file
    --overlay: Write a debug image with word/line boxes

    Scoring mode (cannot be combined with --image):
    --original / -a: Reference transcription (UTF-8 text file)
    --corrected / -b: Corrected transcription (UTF-8 text file)
    --ignore-case: Compare words case-insensitively

    Common:
    --config / -c: Path to hocredit.json (default: config/hocredit.json)
    """
    import argparse

    parser = argparse.ArgumentParser(description="Detect word/line boxes on a page image or score a corrected transcription.")
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to hocredit.json (default: config/hocredit.json)")
    # segmentation mode
    parser.add_argument("--image", "-i", type=str, help="Path to input image to segment")
    parser.add_argument("--raw", action="store_true", help="Skip binarisation before segmentation")
    parser.add_argument("--csv", type=str, default=None, help="Write per-word table to this CSV path")
    parser.add_argument("--overlay", type=str, default=None, help="Write debug overlay image to this path")
    # scoring mode
    parser.add_argument("--original", "-a", type=str, help="Reference transcription text file")
    parser.add_argument("--corrected", "-b", type=str, help="Corrected transcription text file")
    parser.add_argument("--ignore-case", action="store_true", help="Compare words case-insensitively")

    args = parser.parse_args(argv)
    if args.image and (args.original or args.corrected):
        parser.error("--image cannot be combined with --original/--corrected")

    try:
        seg_config, acc_config = load_config(args.config)
        if args.ignore_case:
            acc_config = AccuracyConfig(case_sensitive=False)

        if args.image:
            result = segment_image_file(
                args.image,
                config=seg_config,
                preprocess=not args.raw,
                csv_path=args.csv,
                overlay_path=args.overlay,
            )
            print(json.dumps(result, indent=2))
            return 0

        if args.original and args.corrected:
            metrics = score_text_files(args.original, args.corrected, acc_config)
            print(json.dumps(metrics.to_dict(), indent=2))
            return 0
    except (ValueError, FileNotFoundError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print("Please provide either --image or both --original and --corrected.")
    print("Examples:\n  python main.py --image page.png --overlay boxes.png\n  python main.py --original ocr.txt --corrected fixed.txt")
    return 2


def main() -> None:
    raise SystemExit(_cli())


if __name__ == "__main__":
    main()
