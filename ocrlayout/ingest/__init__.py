"""Adapters from OCR engine output to normalized fragments."""

from .normalize import (
    safe_normalize,
    frame_from_pixels,
    flip_bottom_left,
    fragment_from_dict,
    fragments_from_records,
    parse_scan_result,
    fragments_from_pixel_boxes,
    fragments_from_tesseract,
)

__all__ = [
    "safe_normalize",
    "frame_from_pixels",
    "flip_bottom_left",
    "fragment_from_dict",
    "fragments_from_records",
    "parse_scan_result",
    "fragments_from_pixel_boxes",
    "fragments_from_tesseract",
]
