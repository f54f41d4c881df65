"""Row clustering: group fragments that sit on the same visual line.

One greedy pass over fragments sorted by vertical midpoint. Each fragment
joins the existing row whose running median mid-Y is closest (strictly
within the threshold), or opens a new row. A `ClusteringPolicy` decides
whether a row may accept a fragment: the plain policy only checks the
median distance, the geometric policy also gates on height compatibility,
vertical overlap / centerline proximity and bounding box growth.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .geometry import (
    horizontal_overlap,
    median_height,
    median_of_sorted,
    safe_divide,
    sort_left_to_right,
    union,
    vertical_overlap_ratio,
)
from .model import Frame, ReconstructionOptions, TextFragment

logger = logging.getLogger(__name__)


class Row:
    """Accumulator for one visual line.

    `add` updates members, sorted mid-Y/height samples and the union box in
    one step, so the medians are read without re-sorting.
    """

    def __init__(self, first: TextFragment):
        self._fragments: List[TextFragment] = [first]
        self._mid_ys: List[float] = [first.mid_y]
        self._heights: List[float] = [first.frame.height]
        self._bbox: Frame = first.frame

    def add(self, fragment: TextFragment) -> None:
        self._fragments.append(fragment)
        bisect.insort(self._mid_ys, fragment.mid_y)
        bisect.insort(self._heights, fragment.frame.height)
        self._bbox = union(self._bbox, fragment.frame)

    @property
    def fragments(self) -> List[TextFragment]:
        return list(self._fragments)

    @property
    def median_mid_y(self) -> float:
        return median_of_sorted(self._mid_ys)

    @property
    def median_height(self) -> float:
        return median_of_sorted(self._heights)

    @property
    def bbox(self) -> Frame:
        return self._bbox

    def ordered(self) -> List[TextFragment]:
        """Members left-to-right."""
        return sort_left_to_right(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def __repr__(self) -> str:
        texts = [f.text for f in self.ordered()]
        return f"Row(median_mid_y={self.median_mid_y:.4f}, texts={texts!r})"


@dataclass(frozen=True)
class ClusteringPolicy:
    """Thresholds and the matching predicate used by `cluster_rows`.

    Doxygen:
    - @param grouping_factor: Y-proximity multiplier over the median fragment height.
    - @param min_reference_height: Height used in place of a zero median.
    - @param strict: Enable the geometric gates (sub-line fragment granularity).
    - @param height_compatibility: Minimum min(h)/max(h) between row and fragment.
    - @param overlap_ratio: Minimum vertical overlap relative to the smaller height.
    - @param centerline_distance_factor: Max centerline distance over the typical height.
    - @param stacked_growth_limit: Max union height (x typical) when boxes overlap horizontally.
    - @param skewed_growth_limit: Max union height (x typical) otherwise.
    """

    grouping_factor: float = 0.5
    min_reference_height: float = 0.02
    strict: bool = False
    height_compatibility: float = 0.40
    overlap_ratio: float = 0.50
    centerline_distance_factor: float = 0.70
    stacked_growth_limit: float = 1.2
    skewed_growth_limit: float = 2.0

    @classmethod
    def for_mode(cls, options: ReconstructionOptions, mode: str) -> "ClusteringPolicy":
        return cls(
            grouping_factor=options.grouping_factor(mode),
            min_reference_height=options.min_reference_height,
            strict=options.uses_geometric(mode),
            height_compatibility=options.height_compatibility,
            overlap_ratio=options.overlap_ratio,
            centerline_distance_factor=options.centerline_distance_factor,
            stacked_growth_limit=options.stacked_growth_limit,
            skewed_growth_limit=options.skewed_growth_limit,
        )

    def reference_height(self, height: float) -> float:
        return height if height > 0 else self.min_reference_height

    def threshold(self, typical_height: float) -> float:
        return self.grouping_factor * self.reference_height(typical_height)

    def distance(self, row: Row, fragment: TextFragment, threshold: float) -> Optional[float]:
        """Distance from the row's median mid-Y if the row may take the fragment, else None."""
        dist = abs(row.median_mid_y - fragment.mid_y)
        if dist >= threshold:
            return None
        if self.strict and not self.geometry_fits(row, fragment):
            return None
        return dist

    def geometry_fits(self, row: Row, fragment: TextFragment) -> bool:
        box = row.bbox
        frame = fragment.frame

        max_h = max(box.height, frame.height)
        min_h = min(box.height, frame.height)
        if max_h > 0 and safe_divide(min_h, max_h) < self.height_compatibility:
            return False

        typical = self.reference_height(max(row.median_height, frame.height))
        overlap_good = vertical_overlap_ratio(box, frame) >= self.overlap_ratio
        center_close = abs(box.mid_y - frame.mid_y) <= self.centerline_distance_factor * typical
        if not (overlap_good or center_close):
            return False

        stacked = horizontal_overlap(box, frame) > 0
        limit = self.stacked_growth_limit if stacked else self.skewed_growth_limit
        return union(box, frame).height <= limit * typical


def _vertical_key(fragment: TextFragment):
    return (fragment.mid_y, fragment.frame.x, fragment.frame.y, fragment.text)


def order_rows(rows: Iterable[Row]) -> List[Row]:
    """Top-to-bottom by median mid-Y; stable for equal medians."""
    return sorted(rows, key=lambda r: r.median_mid_y)


def cluster_rows(fragments: Iterable[TextFragment], policy: Optional[ClusteringPolicy] = None) -> List[Row]:
    """Partition fragments into visual rows, ordered top-to-bottom.

    Doxygen:
    - @param fragments: Fragments in any order.
    - @param policy: Matching policy; defaults to the plain median-proximity policy.
    - @return: Rows sorted by median mid-Y.
    """
    policy = policy or ClusteringPolicy()
    items = sorted(fragments, key=_vertical_key)
    if not items:
        return []

    threshold = policy.threshold(median_height(items))
    rows: List[Row] = []

    for fragment in items:
        best: Optional[Row] = None
        best_dist = float("inf")
        for row in rows:
            dist = policy.distance(row, fragment, threshold)
            # strict '<' keeps the first (topmost) row on ties
            if dist is not None and dist < best_dist:
                best = row
                best_dist = dist
        if best is not None:
            best.add(fragment)
        else:
            rows.append(Row(fragment))

    logger.debug("Clustered %d fragments into %d rows (threshold=%.4f, strict=%s)",
                 len(items), len(rows), threshold, policy.strict)
    return order_rows(rows)
