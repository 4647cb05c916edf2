"""
Module: printing.layout.geometry

Purpose:
    Unit conversion and fit-to-box math for note artwork.
    SVG sizes are read in CSS pixels (96 DPI) and converted to mm.

Key Functions:
    - detect_dimensions(): Read an SVG's intrinsic size in mm
    - fit_to_box(): Largest uniform scale of a rotated note inside a box
    - rotated_size(): Footprint of a size after a quarter-turn rotation
    - normalize_rotation(): Validate a rotation value

Dependencies:
    - xml.etree.ElementTree (std): SVG header parsing
    - core.models.geometry: Size

Used By:
    - printing.layout.models: NoteArtifact natural size
    - printing.layout.planner: Stacked and grid placement
    - printing.output.assembler: Image sizing
"""

from __future__ import annotations

import logging
import math
import re
import xml.etree.ElementTree as ET
from typing import Optional

from cashu_notes.core.models.geometry import Size
from .config import ConfigurationError

logger = logging.getLogger(__name__)

# 96 DPI: 1 inch = 25.4mm
MM_PER_PX = 25.4 / 96
PT_PER_MM = 72 / 25.4

VALID_ROTATIONS = (0, 90, 180, 270)

_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(px)?\s*$")


def normalize_rotation(rotation: int) -> int:
    """
    Validate and normalise a rotation in degrees.

    Negative and >= 360 values are folded into [0, 360).

    Raises:
        ConfigurationError: If the rotation is not a quarter turn
    """
    value = int(rotation) % 360
    if value not in VALID_ROTATIONS or rotation != int(rotation):
        raise ConfigurationError(
            f"Rotation must be one of {VALID_ROTATIONS} degrees, got {rotation}"
        )
    return value


def is_quarter_turn(rotation: int) -> bool:
    """True when the rotation swaps width and height."""
    return rotation % 180 == 90


def rotated_size(size: Size, rotation: int) -> Size:
    """Return the bounding size of ``size`` after rotating it."""
    return size.swapped() if is_quarter_turn(rotation) else size


def detect_dimensions(svg: str) -> Optional[Size]:
    """
    Detect an SVG's intrinsic size in millimetres.

    The viewBox wins over width/height attributes. Lengths are CSS
    pixels; a ``px`` suffix is accepted, other units are not.

    Args:
        svg: SVG markup

    Returns:
        Size in mm, or None if the markup has no usable size
    """
    try:
        root = ET.fromstring(svg)
    except (ET.ParseError, TypeError, ValueError) as e:
        logger.debug(f"Could not parse SVG header: {e}")
        return None

    if _local_name(root.tag) != "svg":
        return None

    view_box = root.get("viewBox")
    if view_box:
        parts = [p for p in re.split(r"[\s,]+", view_box.strip()) if p]
        if len(parts) == 4:
            try:
                size = _px_to_size(float(parts[2]), float(parts[3]))
            except ValueError:
                size = None
            if size is not None:
                return size

    width_px = _parse_length(root.get("width"))
    height_px = _parse_length(root.get("height"))
    if width_px and height_px:
        return _px_to_size(width_px, height_px)

    return None


def fit_to_box(natural: Size, rotation: int, target: Size) -> Size:
    """
    Scale a note so its rotated footprint fills ``target``.

    The scale is uniform and may exceed 1.0, so small artwork is scaled
    up. A 90/270 rotation swaps width and height before scaling.

    Args:
        natural: Unrotated note size (mm)
        rotation: Rotation in degrees
        target: Box to fit into (mm)

    Returns:
        Footprint size after rotation and scaling

    Example:
        >>> fit_to_box(Size(50, 90), 90, Size(155, 90))
        Size(width=155.0, height=86.11...)
    """
    footprint = rotated_size(natural, rotation)
    scale = min(target.width / footprint.width, target.height / footprint.height)
    width = min(footprint.width * scale, target.width)
    height = min(footprint.height * scale, target.height)
    return Size(width, height)


def mm_to_pt(mm: float) -> float:
    """Convert millimetres to PDF points (1/72 inch)."""
    return mm * PT_PER_MM


def mm_to_px(mm: float, dpi: int) -> int:
    """Convert millimetres to whole pixels at ``dpi``, at least 1."""
    return max(1, round(mm / 25.4 * dpi))


def _px_to_size(width_px: float, height_px: float) -> Optional[Size]:
    """Size in mm, or None unless both sides are finite and positive in mm."""
    width, height = width_px * MM_PER_PX, height_px * MM_PER_PX
    if not all(math.isfinite(v) and v > 0 for v in (width, height)):
        return None
    return Size(width, height)


def _parse_length(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    match = _NUMBER_RE.match(value)
    if not match:
        return None
    number = float(match.group(1))
    return number if number > 0 else None


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
