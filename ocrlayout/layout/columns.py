"""Render clustered rows into column-aligned text lines."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .clustering import Row
from .geometry import median_height, round_half_up, safe_divide, sort_left_to_right
from .model import ReconstructionOptions, TextFragment


def render_row_grid(fragments: Iterable[TextFragment], line_width: int) -> str:
    """Place fragments on a fixed-width character grid.

    Doxygen:
    - @param fragments: Members of one row, any order.
    - @param line_width: Number of character columns.
    - @return: The line with trailing whitespace trimmed.
    """
    buf = [" "] * line_width
    cursor = 0
    for fragment in sort_left_to_right(fragments):
        # never retreat behind text already written
        col = max(round_half_up(fragment.frame.x * line_width), cursor)
        for i, ch in enumerate(fragment.text):
            pos = col + i
            if pos >= line_width:
                break
            buf[pos] = ch
        cursor = col + len(fragment.text) + 1
    return "".join(buf).rstrip()


def render_row_proportional(
    fragments: Iterable[TextFragment],
    adaptive_spacing_factor: float = 0.5,
    space_width_factor: float = 0.5,
    max_spaces: int = 10,
    min_reference_height: float = 0.02,
) -> str:
    """Join fragments with space runs proportional to their horizontal gaps.

    Doxygen:
    - @param fragments: Members of one row, any order.
    - @param adaptive_spacing_factor: Gap (x median height) above which a column break is assumed.
    - @param space_width_factor: Width of one space (x median height).
    - @param max_spaces: Hard cap on consecutive inserted spaces.
    - @param min_reference_height: Height used in place of a zero median.
    - @return: The rendered line.
    """
    ordered = sort_left_to_right(fragments)
    if not ordered:
        return ""
    ref_height = median_height(ordered)
    if ref_height <= 0:
        ref_height = min_reference_height
    column_gap = ref_height * adaptive_spacing_factor
    space_width = ref_height * space_width_factor

    parts: List[str] = []
    last_right = 0.0
    for index, fragment in enumerate(ordered):
        if index > 0:
            gap = fragment.frame.x - last_right
            if gap > column_gap:
                spaces = max(1, round_half_up(safe_divide(gap, space_width)))
                parts.append(" " * min(spaces, max_spaces))
            elif gap > 0:
                parts.append(" ")
        parts.append(fragment.text)
        last_right = fragment.frame.right
    return "".join(parts)


def render_row(row: Row, options: ReconstructionOptions) -> str:
    if options.rendering == "proportional":
        return render_row_proportional(
            row.fragments,
            adaptive_spacing_factor=options.adaptive_spacing_factor,
            space_width_factor=options.space_width_factor,
            max_spaces=options.max_spaces,
            min_reference_height=options.min_reference_height,
        )
    return render_row_grid(row.fragments, options.line_width)


def render_rows(rows: Sequence[Row], options: ReconstructionOptions, trailing_newline: bool = False) -> str:
    """Render rows in the given order, one line each."""
    lines = [render_row(row, options) for row in rows]
    if not lines:
        return ""
    text = "\n".join(lines)
    return text + "\n" if trailing_newline else text
