from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .model import TextFragment

logger = logging.getLogger(__name__)


def filter_by_confidence(
    fragments: Iterable[TextFragment],
    min_confidence: Optional[float] = None,
) -> List[TextFragment]:
    """Drop fragments whose confidence is below `min_confidence`.

    Fragments without a confidence value always pass, and so does everything
    when no threshold is given. Input order is preserved.
    """
    items = list(fragments)
    if min_confidence is None:
        return items
    kept = [f for f in items if f.confidence is None or f.confidence >= min_confidence]
    dropped = len(items) - len(kept)
    if dropped:
        logger.debug("Dropped %d of %d fragments below confidence %.2f", dropped, len(items), min_confidence)
    return kept
