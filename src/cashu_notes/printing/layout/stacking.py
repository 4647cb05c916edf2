"""
Module: printing.layout.stacking

Purpose:
    Fixed three-per-page arrangement used by the default print flow.
    Notes are stacked vertically in equal slots; each note is fitted to
    its slot independently so mixed note sizes can share a page.

Key Functions:
    - stack_notes(): Front page placements for the stacked arrangement
    - stacked_target(): Box a note is fitted into for its rotation

Algorithm:
    slot = (page_height - 2*bleed) / 3
    target height = slot - 2*cut mark space
    target width = 155mm for 90/270 rotations, otherwise the page width
        minus bleed and cut mark space on both sides
    x centres the note on the page, y centres it inside its slot

Dependencies:
    - printing.layout.geometry: fit_to_box
    - printing.layout.config: PrintConfig, stacking constants

Used By:
    - printing.layout.planner: compute_arrangement()
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from cashu_notes.core.models.geometry import Size
from .config import (
    ConfigurationError,
    CUT_MARK_SPACE,
    NOTES_PER_PAGE,
    PORTRAIT_TARGET_WIDTH,
    PrintConfig,
)
from .geometry import fit_to_box, is_quarter_turn
from .models import NoteArtifact, NotePlacement

logger = logging.getLogger(__name__)


def slot_height(config: PrintConfig) -> float:
    """Vertical space given to each of the stacked notes."""
    return config.usable_height / NOTES_PER_PAGE


def stacked_target(config: PrintConfig, rotation: int) -> Size:
    """
    Box a note is fitted into on the stacked page.

    Raises:
        ConfigurationError: If bleed and cut marks leave no room
    """
    landscape_width = config.usable_width - 2 * CUT_MARK_SPACE
    if is_quarter_turn(rotation):
        width = min(PORTRAIT_TARGET_WIDTH, landscape_width)
    else:
        width = landscape_width
    height = slot_height(config) - 2 * CUT_MARK_SPACE
    if width <= 0 or height <= 0:
        raise ConfigurationError(
            f"No room for {NOTES_PER_PAGE} notes per page on a "
            f"{config.page_size.width}x{config.page_size.height}mm page with "
            f"{config.bleed_margin}mm bleed - reduce the bleed margin or use a larger page"
        )
    return Size(width, height)


def stack_notes(
    artifacts: Sequence[NoteArtifact],
    config: PrintConfig,
) -> List[tuple[NotePlacement, ...]]:
    """
    Place notes three to a page, stacked vertically.

    Args:
        artifacts: Notes in print order
        config: Print configuration

    Returns:
        One tuple of placements per front page
    """
    page_width = config.page_size.width
    slot = slot_height(config)

    pages: List[tuple[NotePlacement, ...]] = []
    current: List[NotePlacement] = []

    for artifact in artifacts:
        position = len(current)
        fitted = fit_to_box(
            artifact.natural_size,
            artifact.rotation,
            stacked_target(config, artifact.rotation),
        )

        x = (page_width - fitted.width) / 2
        slot_top = config.bleed_margin + position * slot
        y = slot_top + (slot - fitted.height) / 2

        current.append(NotePlacement(
            x=x,
            y=y,
            width=fitted.width,
            height=fitted.height,
            artifact=artifact,
            rotation=artifact.rotation,
            slot=position,
        ))

        if len(current) == NOTES_PER_PAGE:
            pages.append(tuple(current))
            current = []

    if current:
        pages.append(tuple(current))

    logger.debug(f"Stacked {len(artifacts)} notes onto {len(pages)} front pages")
    return pages
