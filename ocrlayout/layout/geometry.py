"""Geometry and statistics helpers over normalized frames.

All divisions go through `safe_divide`, so degenerate (zero-sized) boxes
produce 0.0 instead of raising.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .model import Frame, TextFragment


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero or negative."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def median(values: Iterable[float]) -> float:
    """Median of an unsorted collection; 0.0 when empty.

    Doxygen:
    - @param values: Any iterable of numbers.
    - @return: Median as float (mean of the two middle values for even counts).
    """
    data = list(values)
    if not data:
        return 0.0
    return float(np.median(np.asarray(data, dtype=float)))


def median_of_sorted(values: Sequence[float]) -> float:
    """Median of an already ascending sequence, without re-sorting."""
    n = len(values)
    if n == 0:
        return 0.0
    mid = n // 2
    if n % 2 == 0:
        return (values[mid - 1] + values[mid]) / 2.0
    return float(values[mid])


def mid_y(frame: Frame) -> float:
    return frame.y + frame.height / 2.0


def median_height(fragments: Iterable[TextFragment]) -> float:
    return median(f.frame.height for f in fragments)


def union(a: Frame, b: Frame) -> Frame:
    left = min(a.x, b.x)
    top = min(a.y, b.y)
    right = max(a.right, b.right)
    bottom = max(a.bottom, b.bottom)
    return Frame(left, top, right - left, bottom - top)


def union_all(frames: Iterable[Frame]) -> Frame:
    out: Optional[Frame] = None
    for fr in frames:
        out = fr if out is None else union(out, fr)
    return out if out is not None else Frame(0.0, 0.0, 0.0, 0.0)


def intersection(a: Frame, b: Frame) -> Optional[Frame]:
    """Intersection box, or None if the frames do not touch."""
    left = max(a.x, b.x)
    top = max(a.y, b.y)
    right = min(a.right, b.right)
    bottom = min(a.bottom, b.bottom)
    if right < left or bottom < top:
        return None
    return Frame(left, top, right - left, bottom - top)


def vertical_overlap(a: Frame, b: Frame) -> float:
    return max(0.0, min(a.bottom, b.bottom) - max(a.y, b.y))


def horizontal_overlap(a: Frame, b: Frame) -> float:
    return max(0.0, min(a.right, b.right) - max(a.x, b.x))


def vertical_overlap_ratio(a: Frame, b: Frame) -> float:
    """Vertical overlap relative to the smaller of the two heights."""
    return safe_divide(vertical_overlap(a, b), min(a.height, b.height))


def horizontal_overlap_ratio(a: Frame, b: Frame) -> float:
    """Horizontal overlap relative to the combined horizontal span, in [0, 1]."""
    span = max(a.right, b.right) - min(a.x, b.x)
    return safe_divide(horizontal_overlap(a, b), span)


def sort_left_to_right(fragments: Iterable[TextFragment]) -> List[TextFragment]:
    return sorted(fragments, key=lambda f: (f.frame.x, f.frame.y, f.text))
