"""High-level orchestration: mode selection → clustering → rendering."""

from .mode import ModeDecision, select_mode
from .reconstruct import (
    LayoutResult,
    reconstruct,
    reconstruct_from_fragments,
    reconstruct_scan_result,
    raw_text,
    recognize_layout,
)

__all__ = [
    "ModeDecision",
    "select_mode",
    "LayoutResult",
    "reconstruct",
    "reconstruct_from_fragments",
    "reconstruct_scan_result",
    "raw_text",
    "recognize_layout",
]
