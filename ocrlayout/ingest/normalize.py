"""Adapters that turn OCR engine output into normalized `TextFragment`s.

This module provides:
- Pixel to normalized coordinate conversion guarded against zero dimensions.
- Bottom-left to top-left origin conversion.
- Parsing of host scan-result payloads (``text``/``blocks``/``metadata``).
- Tabular adapters for pixel word boxes and pytesseract ``image_to_data`` dicts.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from ocrlayout.layout.model import Frame, ScanMetadata, TextFragment

_FRAME_KEYS = ("x", "y", "width", "height")


def safe_normalize(value: float, dimension: float) -> float:
    """Divide a pixel value by the image dimension; 0.0 for non-positive dimensions."""
    return value / dimension if dimension > 0 else 0.0


def frame_from_pixels(
    left: float,
    top: float,
    width: float,
    height: float,
    image_width: float,
    image_height: float,
) -> Frame:
    return Frame(
        x=safe_normalize(left, image_width),
        y=safe_normalize(top, image_height),
        width=safe_normalize(width, image_width),
        height=safe_normalize(height, image_height),
    )


def flip_bottom_left(frame: Frame) -> Frame:
    """Convert a bottom-left-origin frame to top-left origin."""
    return Frame(frame.x, 1.0 - frame.y - frame.height, frame.width, frame.height)


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def fragment_from_dict(record: Mapping[str, Any]) -> TextFragment:
    """Build a fragment from a block record.

    Doxygen:
    - @param record: Either ``{text, frame: {x, y, width, height}, confidence?}``
      or a flat ``{text, x, y, width, height, confidence?}`` dict.
    - @return: TextFragment; a missing confidence stays None.
    - @throws ValueError: If the frame is missing or not numeric.
    """
    frame_src = record.get("frame", record)
    try:
        frame = Frame(*(float(frame_src[k]) for k in _FRAME_KEYS))
        confidence = _optional_float(record.get("confidence"))
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed fragment record {dict(record)!r}: {exc}") from exc
    text = record.get("text")
    return TextFragment(text="" if text is None else str(text), frame=frame, confidence=confidence)


def fragments_from_records(records: Optional[Iterable[Mapping[str, Any]]]) -> List[TextFragment]:
    return [fragment_from_dict(r) for r in (records or [])]


def parse_scan_result(payload: Mapping[str, Any]) -> Tuple[List[TextFragment], Optional[str], Optional[ScanMetadata]]:
    """Split a host scan result into (fragments, native text, metadata)."""
    fragments = fragments_from_records(payload.get("blocks"))
    text = payload.get("text")
    metadata = ScanMetadata.from_dict(payload.get("metadata"))
    return fragments, (None if text is None else str(text)), metadata


def _frame_columns(df: pd.DataFrame) -> Tuple[str, str]:
    left = "left" if "left" in df.columns else "x"
    top = "top" if "top" in df.columns else "y"
    return left, top


def _dataframe_to_fragments(df: pd.DataFrame, image_width: float, image_height: float) -> List[TextFragment]:
    if df.empty:
        return []
    left, top = _frame_columns(df)
    w = float(image_width)
    h = float(image_height)
    xs = df[left].astype(float) / w if w > 0 else pd.Series(0.0, index=df.index)
    ys = df[top].astype(float) / h if h > 0 else pd.Series(0.0, index=df.index)
    ws = df["width"].astype(float) / w if w > 0 else pd.Series(0.0, index=df.index)
    hs = df["height"].astype(float) / h if h > 0 else pd.Series(0.0, index=df.index)
    if "confidence" in df.columns:
        confs = pd.to_numeric(df["confidence"], errors="coerce")
    else:
        confs = pd.Series(float("nan"), index=df.index)

    out: List[TextFragment] = []
    for text, x, y, wd, ht, conf in zip(df["text"].tolist(), xs, ys, ws, hs, confs):
        out.append(TextFragment(
            text=str(text),
            frame=Frame(float(x), float(y), float(wd), float(ht)),
            confidence=None if pd.isna(conf) else float(conf),
        ))
    return out


def fragments_from_pixel_boxes(
    boxes: Sequence[Mapping[str, Any]],
    image_width: float,
    image_height: float,
) -> List[TextFragment]:
    """Normalize pixel word boxes (``text, x|left, y|top, width, height, confidence?``).

    Doxygen:
    - @param boxes: Pixel-space box dicts.
    - @param image_width: Source image width in pixels.
    - @param image_height: Source image height in pixels.
    - @return: Normalized fragments in input order.
    - @throws ValueError: If a geometry column is missing.
    """
    if not boxes:
        return []
    df = pd.DataFrame(list(boxes))
    left, top = _frame_columns(df)
    missing = [c for c in ("text", left, top, "width", "height") if c not in df.columns]
    if missing:
        raise ValueError(f"Pixel boxes are missing columns: {', '.join(missing)}")
    df["text"] = df["text"].fillna("").astype(str)
    return _dataframe_to_fragments(df, image_width, image_height)


def fragments_from_tesseract(data: Dict[str, Any], image_width: float, image_height: float) -> List[TextFragment]:
    """Convert ``pytesseract.image_to_data(..., output_type=Output.DICT)`` output.

    Non-word rows (conf <= 0) and blank texts are dropped; confidence is
    rescaled from 0..100 to 0..1.
    """
    df = pd.DataFrame(data)
    if df.empty:
        return []
    df["conf"] = pd.to_numeric(df["conf"], errors="coerce").fillna(-1)
    df = df[df["conf"] > 0].copy()
    df["text"] = df["text"].fillna("").astype(str).str.strip()
    df = df[df["text"] != ""].copy()
    df["confidence"] = (df["conf"] / 100.0).clip(0.0, 1.0)
    return _dataframe_to_fragments(df, image_width, image_height)
