"""Layout-preserving text reconstruction from positioned OCR fragments.

Packages:
- ocrlayout.layout: data model, geometry, confidence filter, row clustering, column rendering
- ocrlayout.ingest: normalization of engine output into fragments
- ocrlayout.pipeline: mode selection and the `reconstruct` entry points
"""

from ocrlayout.layout.model import (
    Frame,
    TextFragment,
    ScanMetadata,
    ReconstructionOptions,
    MODE_PARAGRAPHS,
    MODE_CLUSTERED,
)
from ocrlayout.pipeline import (
    ModeDecision,
    select_mode,
    LayoutResult,
    reconstruct,
    reconstruct_from_fragments,
    reconstruct_scan_result,
    raw_text,
    recognize_layout,
)

__all__ = [
    "Frame",
    "TextFragment",
    "ScanMetadata",
    "ReconstructionOptions",
    "MODE_PARAGRAPHS",
    "MODE_CLUSTERED",
    "ModeDecision",
    "select_mode",
    "LayoutResult",
    "reconstruct",
    "reconstruct_from_fragments",
    "reconstruct_scan_result",
    "raw_text",
    "recognize_layout",
]
