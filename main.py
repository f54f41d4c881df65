"""
Entry point and CLI for layout-preserving OCR text reconstruction.

Reads one scan result (or a list of them) from a JSON file in the host
payload shape ``{"text", "blocks", "metadata"}`` and prints the
reconstructed text of every page.

Packages:
- ocrlayout.layout: fragment model, clustering and column rendering
- ocrlayout.ingest: payload parsing and coordinate normalization
- ocrlayout.pipeline: mode selection and `reconstruct`
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from ocrlayout.ingest.normalize import parse_scan_result
from ocrlayout.layout.model import ReconstructionOptions
from ocrlayout.log import setup_logger
from ocrlayout.pipeline.reconstruct import raw_text, reconstruct

logger = logging.getLogger("ocrlayout.cli")


def _load_pages(path: str) -> List[Dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return data
    raise ValueError(f"Expected a JSON object or array in {path}, got {type(data).__name__}.")


def _cli() -> None:
    """CLI for reconstructing scan results.

    --input / -i: JSON file with one scan result or a list of them
    --line-width: Output width in characters (default from config, 56)
    --min-confidence: Drop blocks below this confidence
    --row-grouping-factor: Override the Y-proximity multiplier
    --mode: Force paragraphs|clustered instead of selecting from metadata
    --clustering: auto|median|geometric
    --rendering: grid|proportional
    --config: Path to a layout tuning JSON (default: config/layout.json)
    --raw: Print plain reading-order text instead
    --verbose / -v: Debug logging
    """
    import argparse

    parser = argparse.ArgumentParser(description="Reconstruct column-aligned text from OCR scan results.")
    parser.add_argument("--input", "-i", type=str, required=True, help="Path to scan result JSON")
    parser.add_argument("--line-width", type=int, default=None, help="Output width in characters (default: 56)")
    parser.add_argument("--min-confidence", type=float, default=None, help="Discard blocks below this confidence")
    parser.add_argument("--row-grouping-factor", type=float, default=None, help="Y-proximity multiplier over median line height")
    parser.add_argument("--mode", type=str, default=None, choices=["paragraphs", "clustered"], help="Force a reconstruction mode")
    parser.add_argument("--clustering", type=str, default=None, choices=["auto", "median", "geometric"], help="Row clustering strategy")
    parser.add_argument("--rendering", type=str, default=None, choices=["grid", "proportional"], help="Column rendering strategy")
    parser.add_argument("--config", type=str, default=None, help="Layout tuning JSON (default: config/layout.json)")
    parser.add_argument("--raw", action="store_true", help="Print plain reading-order text without layout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    setup_logger("ocrlayout", "DEBUG" if args.verbose else "WARNING")

    try:
        options = ReconstructionOptions.from_config(
            args.config,
            line_width=args.line_width,
            min_confidence=args.min_confidence,
            row_grouping_factor=args.row_grouping_factor,
            mode=args.mode,
            clustering=args.clustering,
            rendering=args.rendering,
        )
        pages = _load_pages(args.input)
    except (OSError, ValueError) as e:
        print(str(e))
        raise SystemExit(2)

    for index, page in enumerate(pages):
        try:
            fragments, text, metadata = parse_scan_result(page)
        except ValueError as e:
            logger.error("Page %d: %s", index + 1, e)
            raise SystemExit(2)
        if index > 0:
            print()
        if args.raw:
            print(raw_text(fragments))
        else:
            print(reconstruct(fragments, text, metadata, options))


if __name__ == "__main__":
    _cli()
