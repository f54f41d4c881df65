"""Layout reconstruction core.

This package includes the fragment data model, geometry helpers, the
confidence filter, row clustering and column rendering.
"""

from .model import (
    Frame,
    TextFragment,
    ScanMetadata,
    ReconstructionOptions,
    MODE_PARAGRAPHS,
    MODE_CLUSTERED,
)
from .filtering import filter_by_confidence
from .clustering import Row, ClusteringPolicy, cluster_rows, order_rows
from .columns import render_row_grid, render_row_proportional, render_rows

__all__ = [
    "Frame",
    "TextFragment",
    "ScanMetadata",
    "ReconstructionOptions",
    "MODE_PARAGRAPHS",
    "MODE_CLUSTERED",
    "filter_by_confidence",
    "Row",
    "ClusteringPolicy",
    "cluster_rows",
    "order_rows",
    "render_row_grid",
    "render_row_proportional",
    "render_rows",
]
