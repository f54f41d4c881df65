from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ocrlayout.layout.model import (
    ENGINE_DOCUMENTS,
    KNOWN_ENGINES,
    MODE_CLUSTERED,
    MODE_PARAGRAPHS,
    ScanMetadata,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModeDecision:
    mode: str
    skip_reconstruction: bool = False
    text: Optional[str] = None


def select_mode(metadata: Optional[ScanMetadata], native_text: Optional[str] = None) -> ModeDecision:
    """Pick the reconstruction strategy for a page.

    Doxygen:
    - @param metadata: Engine description of the page, or None when unknown.
    - @param native_text: Text already assembled by the engine, if any.
    - @return: ModeDecision; when `skip_reconstruction` is set, `text` is the
      native text with trailing whitespace removed.

    Never raises. Unknown engines fall back to 'clustered' and never pass
    native text through.
    """
    if metadata is None:
        logger.debug("No scan metadata; using %s reconstruction", MODE_CLUSTERED)
        return ModeDecision(MODE_CLUSTERED)

    engine = metadata.ocr_engine
    if engine not in KNOWN_ENGINES:
        logger.warning("Unrecognized OCR engine %r; falling back to %s reconstruction", engine, MODE_CLUSTERED)
        return ModeDecision(MODE_CLUSTERED)

    if engine == ENGINE_DOCUMENTS:
        return ModeDecision(MODE_PARAGRAPHS)

    # V2 Vision text / ML Kit output is already column-aligned by the engine.
    if metadata.text_version == 2 and native_text and native_text.strip():
        return ModeDecision(MODE_CLUSTERED, skip_reconstruction=True, text=native_text.rstrip())

    return ModeDecision(MODE_CLUSTERED)
