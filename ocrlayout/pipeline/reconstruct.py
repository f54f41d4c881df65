"""Reconstruct column-aligned text from positioned OCR fragments.

Flow: mode selection → (native text passthrough) or confidence filter →
row clustering → row ordering → column rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from ocrlayout.ingest.normalize import parse_scan_result
from ocrlayout.layout.clustering import ClusteringPolicy, cluster_rows
from ocrlayout.layout.columns import render_rows
from ocrlayout.layout.filtering import filter_by_confidence
from ocrlayout.layout.model import MODE_CLUSTERED, ReconstructionOptions, ScanMetadata, TextFragment

from .mode import select_mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutResult:
    text: str
    fragments: List[TextFragment]


def reconstruct_from_fragments(
    fragments: Iterable[TextFragment],
    mode: str = MODE_CLUSTERED,
    options: Optional[ReconstructionOptions] = None,
) -> str:
    """Block reconstruction without mode selection.

    Doxygen:
    - @param fragments: Normalized fragments, any order.
    - @param mode: 'paragraphs' or 'clustered'.
    - @param options: Tuning; defaults to ReconstructionOptions().
    - @return: Rows joined by newlines, no trailing newline; '' for no fragments.
    """
    options = options or ReconstructionOptions()
    kept = filter_by_confidence(fragments, options.min_confidence)
    if not kept:
        return ""
    rows = cluster_rows(kept, ClusteringPolicy.for_mode(options, mode))
    return render_rows(rows, options)


def reconstruct(
    fragments: Iterable[TextFragment],
    native_text: Optional[str] = None,
    metadata: Optional[ScanMetadata] = None,
    options: Optional[ReconstructionOptions] = None,
) -> str:
    """Render a page's fragments as layout-preserving plain text.

    Doxygen:
    - @param fragments: Normalized fragments of one page.
    - @param native_text: Engine-assembled text, used verbatim when the engine already aligns columns.
    - @param metadata: Engine description used to choose the strategy.
    - @param options: Tuning; `options.mode` overrides the selected mode.
    - @return: Reconstructed text ('' for an empty page).
    """
    options = options or ReconstructionOptions()
    decision = select_mode(metadata, native_text)
    if decision.skip_reconstruction:
        return decision.text or ""
    mode = options.mode or decision.mode
    logger.debug("Reconstructing in %s mode", mode)
    return reconstruct_from_fragments(fragments, mode, options)


def reconstruct_scan_result(scan_result: Mapping[str, Any], options: Optional[ReconstructionOptions] = None) -> str:
    """Reconstruct from a host payload with ``text``, ``blocks`` and ``metadata`` keys."""
    fragments, text, metadata = parse_scan_result(scan_result)
    return reconstruct(fragments, text, metadata, options)


def raw_text(fragments: Iterable[TextFragment]) -> str:
    """Plain reading-order text: fragments sorted top-to-bottom, one per line."""
    ordered = sorted(fragments, key=lambda f: f.frame.y)
    return "\n".join(f.text for f in ordered)


def recognize_layout(
    fragments: Iterable[TextFragment],
    options: Optional[ReconstructionOptions] = None,
) -> LayoutResult:
    """Heuristic layout recognition over word-level fragments.

    Uses geometric clustering and proportional spacing and, like the native
    engines, terminates every line with a newline. The fragments come back
    sorted top-to-bottom.
    """
    options = options or ReconstructionOptions(clustering="geometric", rendering="proportional")
    items = list(fragments)
    kept = filter_by_confidence(items, options.min_confidence)
    rows = cluster_rows(kept, ClusteringPolicy.for_mode(options, MODE_CLUSTERED))
    text = render_rows(rows, options, trailing_newline=True)
    return LayoutResult(text=text, fragments=sorted(items, key=lambda f: f.frame.y))
