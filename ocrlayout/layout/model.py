from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

MODE_PARAGRAPHS = "paragraphs"
MODE_CLUSTERED = "clustered"
MODES = (MODE_PARAGRAPHS, MODE_CLUSTERED)

# Default Y-proximity multiplier per mode (threshold = factor x median height).
MODE_FACTOR = {
    MODE_PARAGRAPHS: 0.6,
    MODE_CLUSTERED: 0.5,
}

CLUSTERING_STRATEGIES = ("auto", "median", "geometric")
RENDERING_STRATEGIES = ("grid", "proportional")

ENGINE_DOCUMENTS = "RecognizeDocumentsRequest"
ENGINE_VISION_TEXT = "VNRecognizeTextRequest"
ENGINE_MLKIT = "MLKit"
ENGINE_NONE = "none"
KNOWN_ENGINES = (ENGINE_DOCUMENTS, ENGINE_VISION_TEXT, ENGINE_MLKIT, ENGINE_NONE)


@dataclass(frozen=True)
class Frame:
    """Normalized bounding box, origin top-left, all values in [0, 1]."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2.0


@dataclass(frozen=True)
class TextFragment:
    """One recognized span of text with its normalized frame."""

    text: str
    frame: Frame
    confidence: Optional[float] = None

    @classmethod
    def create(
        cls,
        text: str,
        x: float,
        y: float,
        width: float,
        height: float,
        confidence: Optional[float] = None,
    ) -> "TextFragment":
        return cls(text=text, frame=Frame(x, y, width, height), confidence=confidence)

    @property
    def mid_y(self) -> float:
        return self.frame.mid_y


@dataclass(frozen=True)
class ScanMetadata:
    """Engine description attached to a scanned page.

    Only `text_version` and `ocr_engine` are branched on; nothing here is validated.
    """

    platform: str = ""
    text_version: int = 2
    filter: str = "color"
    ocr_engine: str = ENGINE_NONE

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["ScanMetadata"]:
        if data is None:
            return None
        version = data.get("textVersion", data.get("text_version", 2))
        try:
            version = int(version)
        except (TypeError, ValueError):
            version = 2
        return cls(
            platform=str(data.get("platform", "")),
            text_version=version,
            filter=str(data.get("filter", "color")),
            ocr_engine=str(data.get("ocrEngine", data.get("ocr_engine", ENGINE_NONE))),
        )


@dataclass
class ReconstructionOptions:
    """Caller-supplied tuning for block reconstruction.

    Doxygen:
    - @param line_width: Output width in character columns (grid rendering).
    - @param min_confidence: Drop fragments below this confidence; fragments without one always pass.
    - @param row_grouping_factor: Overrides the per-mode Y-proximity multiplier.
    - @param mode: Force 'paragraphs' or 'clustered'; None lets the mode selector decide.
    - @param clustering: 'auto' | 'median' | 'geometric'.
    - @param rendering: 'grid' | 'proportional'.
    - @throws ValueError: On any out-of-contract value.
    """

    line_width: int = 56
    min_confidence: Optional[float] = None
    row_grouping_factor: Optional[float] = None
    mode: Optional[str] = None
    clustering: str = "auto"
    rendering: str = "grid"
    min_reference_height: float = 0.02
    height_compatibility: float = 0.40
    overlap_ratio: float = 0.50
    centerline_distance_factor: float = 0.70
    stacked_growth_limit: float = 1.2
    skewed_growth_limit: float = 2.0
    adaptive_spacing_factor: float = 0.5
    space_width_factor: float = 0.5
    max_spaces: int = 10

    def __post_init__(self) -> None:
        if isinstance(self.line_width, bool) or not isinstance(self.line_width, int):
            raise ValueError(f"line_width must be an integer, got {self.line_width!r}.")
        if self.line_width <= 0:
            raise ValueError(f"line_width must be positive, got {self.line_width}.")
        if self.min_confidence is not None and not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError(f"min_confidence must be within [0, 1], got {self.min_confidence}.")
        if self.row_grouping_factor is not None and self.row_grouping_factor <= 0:
            raise ValueError(f"row_grouping_factor must be positive, got {self.row_grouping_factor}.")
        if self.mode is not None and self.mode not in MODES:
            raise ValueError(f"mode must be one of {', '.join(MODES)}; got '{self.mode}'.")
        if self.clustering not in CLUSTERING_STRATEGIES:
            allowed = ", ".join(CLUSTERING_STRATEGIES)
            raise ValueError(f"clustering must be one of {allowed}; got '{self.clustering}'.")
        if self.rendering not in RENDERING_STRATEGIES:
            allowed = ", ".join(RENDERING_STRATEGIES)
            raise ValueError(f"rendering must be one of {allowed}; got '{self.rendering}'.")
        if isinstance(self.max_spaces, bool) or not isinstance(self.max_spaces, int) or self.max_spaces < 0:
            raise ValueError(f"max_spaces must be a non-negative integer, got {self.max_spaces!r}.")
        for name in (
            "min_reference_height",
            "height_compatibility",
            "overlap_ratio",
            "centerline_distance_factor",
            "stacked_growth_limit",
            "skewed_growth_limit",
            "adaptive_spacing_factor",
            "space_width_factor",
        ):
            value = getattr(self, name)
            if value is None or value <= 0:
                raise ValueError(f"{name} must be positive, got {value!r}.")

    @classmethod
    def from_config(cls, path: Optional[str] = None, **overrides: Any) -> "ReconstructionOptions":
        """Build options from the JSON tuning file; keyword overrides win."""
        from ocrlayout.config import load_layout_config

        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in load_layout_config(path, known_keys=known).items() if k in known}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def grouping_factor(self, mode: str) -> float:
        if self.row_grouping_factor is not None:
            return float(self.row_grouping_factor)
        return MODE_FACTOR.get(mode, MODE_FACTOR[MODE_CLUSTERED])

    def uses_geometric(self, mode: str) -> bool:
        if self.clustering == "auto":
            return mode == MODE_CLUSTERED
        return self.clustering == "geometric"
