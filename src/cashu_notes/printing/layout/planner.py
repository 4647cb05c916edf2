"""
Module: printing.layout.planner

Purpose:
    Compute where every note goes on every page.
    Pure function of its inputs: the same notes and config always give
    the same ArrangementResult.

Key Functions:
    - compute_arrangement(): Main planning entry point
    - calculate_print_stats(): Page and sheet counts for a job

Algorithm:
    1. MANUAL returns an empty result; the caller places notes itself
    2. STACKED delegates to stacking.stack_notes (3 per page)
    3. GRID sizes every cell from the first note and fills row-major
    4. AUTO currently uses GRID
    5. When double-sided, each front page with at least one back is
       followed by a back page with identical slot positions

Dependencies:
    - printing.layout.stacking: Stacked arrangement
    - printing.layout.models: NotePlacement, PageLayout, ArrangementResult
    - printing.layout.config: PrintConfig

Used By:
    - printing.output.assembler: Document assembly
    - printing.controller: Statistics
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from .config import ArrangementMode, ConfigurationError, NOTES_PER_PAGE, PrintConfig
from .models import (
    ArrangementResult,
    NoteArtifact,
    NotePlacement,
    PageLayout,
    PrintStats,
    Side,
)
from .stacking import stack_notes

logger = logging.getLogger(__name__)

# Guards floor() against 1.9999... when notes fill a row exactly
_FIT_EPSILON = 1e-9


def compute_arrangement(
    artifacts: Sequence[NoteArtifact],
    config: PrintConfig,
) -> ArrangementResult:
    """
    Arrange notes onto pages.

    Args:
        artifacts: Notes in print order (not modified)
        config: Print configuration

    Returns:
        ArrangementResult with front (and back) page layouts

    Raises:
        ConfigurationError: If the notes cannot fit on the page

    Example:
        >>> result = compute_arrangement(notes, PrintConfig())
        >>> result.notes_per_page
        3
    """
    if config.arrangement is ArrangementMode.MANUAL:
        logger.debug("Manual arrangement requested, returning empty layout")
        return ArrangementResult.empty()

    if config.arrangement is ArrangementMode.STACKED:
        fronts = stack_notes(artifacts, config)
        notes_per_page = NOTES_PER_PAGE
        unused = _stacked_unused_space(fronts, config)
        warnings: List[str] = []
    else:
        # AUTO has no packing of its own yet
        if not artifacts:
            return ArrangementResult.empty(unused_space_percent=100.0)
        fronts, notes_per_page, unused, warnings = _arrange_in_grid(artifacts, config)

    layouts = _interleave_backs(fronts, config.double_sided)

    logger.info(
        f"Arranged {len(artifacts)} notes onto {len(layouts)} pages "
        f"({config.arrangement}, {notes_per_page} per page)"
    )

    return ArrangementResult(
        layouts=tuple(layouts),
        total_pages=len(layouts),
        notes_per_page=notes_per_page,
        unused_space_percent=unused,
        warnings=tuple(warnings),
    )


def _arrange_in_grid(
    artifacts: Sequence[NoteArtifact],
    config: PrintConfig,
) -> tuple[List[tuple[NotePlacement, ...]], int, float, List[str]]:
    """
    Row-major grid with every cell the size of the first note.

    Returns:
        (front pages, notes per page, unused space percent, warnings)
    """
    reference = artifacts[0].footprint
    spacing = config.spacing
    usable_width = config.usable_width
    usable_height = config.usable_height

    notes_per_row = _cells(usable_width, reference.width, spacing)
    notes_per_col = _cells(usable_height, reference.height, spacing)
    notes_per_page = notes_per_row * notes_per_col

    if notes_per_page == 0:
        raise ConfigurationError(
            f"Note too large for page: {reference.width:.1f}x{reference.height:.1f}mm "
            f"does not fit the {usable_width:.1f}x{usable_height:.1f}mm printable area "
            f"of a {config.format} page - choose a larger format, reduce the bleed "
            f"margin or reduce the note size"
        )

    warnings: List[str] = []
    mismatched = [
        i for i, a in enumerate(artifacts)
        if a.footprint != reference
    ]
    if mismatched:
        warnings.append(
            f"{len(mismatched)} note(s) differ from the first note's size "
            f"({reference.width:.1f}x{reference.height:.1f}mm) and will be "
            f"scaled into its grid cell"
        )
        logger.warning(warnings[-1])

    pages: List[tuple[NotePlacement, ...]] = []
    current: List[NotePlacement] = []

    for i, artifact in enumerate(artifacts):
        index_on_page = i % notes_per_page
        row = index_on_page // notes_per_row
        col = index_on_page % notes_per_row

        current.append(NotePlacement(
            x=config.bleed_margin + col * (reference.width + spacing),
            y=config.bleed_margin + row * (reference.height + spacing),
            width=reference.width,
            height=reference.height,
            artifact=artifact,
            rotation=artifact.rotation,
            slot=index_on_page,
        ))

        if len(current) == notes_per_page or i == len(artifacts) - 1:
            pages.append(tuple(current))
            current = []

    # Based on the last page only
    last_page_count = len(artifacts) % notes_per_page or notes_per_page
    usable_area = usable_width * usable_height
    used_area = min(notes_per_page, last_page_count) * reference.area
    unused = max(0.0, (usable_area - used_area) / usable_area * 100)

    return pages, notes_per_page, unused, warnings


def _cells(available: float, size: float, spacing: float) -> int:
    return int(math.floor((available + spacing) / (size + spacing) + _FIT_EPSILON))


def _stacked_unused_space(
    fronts: List[tuple[NotePlacement, ...]],
    config: PrintConfig,
) -> float:
    if not fronts:
        return 100.0
    usable_area = config.usable_width * config.usable_height
    used_area = sum(p.width * p.height for p in fronts[-1])
    return max(0.0, (usable_area - used_area) / usable_area * 100)


def _interleave_backs(
    fronts: List[tuple[NotePlacement, ...]],
    double_sided: bool,
) -> List[PageLayout]:
    """
    Number the front pages and insert back pages after them.

    A back page mirrors its front's slots exactly: same x/y, same size,
    artwork turned 180 degrees so it reads upright after a short-edge
    flip. Notes without a back still occupy their slot.
    """
    layouts: List[PageLayout] = []
    for placements in fronts:
        layouts.append(PageLayout(
            page_number=len(layouts) + 1,
            placements=placements,
            side=Side.FRONT,
        ))
        if not double_sided or not any(p.artifact.has_back for p in placements):
            continue
        backs = tuple(
            NotePlacement(
                x=p.x,
                y=p.y,
                width=p.width,
                height=p.height,
                artifact=p.artifact,
                rotation=(p.rotation + 180) % 360,
                slot=p.slot,
            )
            for p in placements
        )
        layouts.append(PageLayout(
            page_number=len(layouts) + 1,
            placements=backs,
            side=Side.BACK,
        ))
    return layouts


def calculate_print_stats(
    artifacts: Sequence[NoteArtifact],
    config: PrintConfig,
) -> PrintStats:
    """
    Count pages and physical sheets for a job.

    Raises:
        ConfigurationError: Propagated from compute_arrangement()
    """
    arrangement = compute_arrangement(artifacts, config)
    return PrintStats(
        total_notes=len(artifacts),
        pages_needed=arrangement.total_pages,
        sheets_needed=arrangement.sheet_count,
    )
