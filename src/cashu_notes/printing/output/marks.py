"""
Module: printing.output.marks

Purpose:
    Draw print marks: corner crop marks, the advisory bleed rectangle,
    and shared cut lines between neighbouring notes.
    Pure geometry against a DrawingSurface; no layout decisions here.

Key Functions:
    - draw_crop_marks(): L-shaped marks outside each trim corner
    - draw_bleed_guide(): Bleed inset rectangle
    - draw_cut_lines(): Deduplicated cut lines along note edges
    - crop_mark_segments(): Segment list behind draw_crop_marks()

Dependencies:
    - printing.output.surface: DrawingSurface protocol

Used By:
    - printing.output.assembler: Page rendering
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from cashu_notes.core.models.geometry import Box, Size
from cashu_notes.printing.layout.config import CROP_MARK_GAP, CROP_MARK_LENGTH
from .surface import DrawingSurface

logger = logging.getLogger(__name__)

Segment = Tuple[float, float, float, float]

CROP_MARK_COLOR = (0, 0, 0)
CROP_MARK_WIDTH = 0.25
BLEED_GUIDE_COLOR = (255, 0, 0)
BLEED_GUIDE_WIDTH = 0.1
CUT_LINE_COLOR = (200, 200, 200)
CUT_LINE_WIDTH = 0.1


def crop_mark_segments(
    box: Box,
    gap: float = CROP_MARK_GAP,
    length: float = CROP_MARK_LENGTH,
) -> List[Segment]:
    """
    Line segments of the four corner crop marks around ``box``.

    Each corner gets one horizontal and one vertical segment that start
    ``gap`` mm outside the trim edge and run ``length`` mm further out.

    Returns:
        Eight (x1, y1, x2, y2) segments: TL, TR, BL, BR corners,
        horizontal before vertical
    """
    left, top, right, bottom = box.x, box.y, box.right, box.bottom
    return [
        # Top-left
        (left - gap - length, top, left - gap, top),
        (left, top - gap - length, left, top - gap),
        # Top-right
        (right + gap, top, right + gap + length, top),
        (right, top - gap - length, right, top - gap),
        # Bottom-left
        (left - gap - length, bottom, left - gap, bottom),
        (left, bottom + gap, left, bottom + gap + length),
        # Bottom-right
        (right + gap, bottom, right + gap + length, bottom),
        (right, bottom + gap, right, bottom + gap + length),
    ]


def draw_crop_marks(
    surface: DrawingSurface,
    box: Box,
    gap: float = CROP_MARK_GAP,
    length: float = CROP_MARK_LENGTH,
) -> None:
    """Draw corner crop marks around a note's trim box."""
    surface.set_stroke(CROP_MARK_COLOR, CROP_MARK_WIDTH)
    for segment in crop_mark_segments(box, gap, length):
        surface.line(*segment)


def draw_bleed_guide(surface: DrawingSurface, page_size: Size, bleed: float) -> None:
    """
    Draw the bleed inset as a thin red rectangle.

    Advisory only; it marks the area notes must stay inside.
    """
    if bleed <= 0:
        return
    surface.set_stroke(BLEED_GUIDE_COLOR, BLEED_GUIDE_WIDTH)
    surface.rect(bleed, bleed, page_size.width - 2 * bleed, page_size.height - 2 * bleed)


def draw_cut_lines(surface: DrawingSurface, boxes: Iterable[Box]) -> List[str]:
    """
    Draw one cut line per distinct note edge.

    Edges are keyed by their fixed coordinate (``v-<x>`` for vertical
    lines, ``h-<y>`` for horizontal ones). Notes sharing an edge share
    its key, and the line is drawn once spanning all of them.

    Args:
        surface: Page surface
        boxes: Note trim boxes on the page

    Returns:
        Keys of the lines drawn, in draw order

    Example:
        >>> draw_cut_lines(surface, [Box(0, 0, 50, 30), Box(50, 0, 50, 30)])
        ['v-0', 'v-50', 'h-0', 'h-30', 'v-100']
    """
    # key -> [position, start, end]
    spans: Dict[str, List[float]] = {}
    for box in boxes:
        for axis, position, start, end in (
            ("v", box.x, box.y, box.bottom),
            ("v", box.right, box.y, box.bottom),
            ("h", box.y, box.x, box.right),
            ("h", box.bottom, box.x, box.right),
        ):
            key = _edge_key(axis, position)
            span = spans.get(key)
            if span is None:
                spans[key] = [position, start, end]
            else:
                span[1] = min(span[1], start)
                span[2] = max(span[2], end)

    surface.set_stroke(CUT_LINE_COLOR, CUT_LINE_WIDTH)
    for key, (position, start, end) in spans.items():
        if key.startswith("v"):
            surface.line(position, start, position, end)
        else:
            surface.line(start, position, end, position)

    logger.debug(f"Drew {len(spans)} cut lines")
    return list(spans)


def _edge_key(axis: str, value: float) -> str:
    return f"{axis}-{round(value, 3):g}"
