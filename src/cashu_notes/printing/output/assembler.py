"""
Module: printing.output.assembler

Purpose:
    Assemble the print-ready PDF from an ArrangementResult.
    Each PageLayout becomes one PDF page; notes are rasterized and
    drawn at their placement, followed by crop marks and cut lines.

Key Functions:
    - assemble(): Async assembly entry point
    - assemble_sync(): Blocking wrapper
    - suggested_filename(): Download name for a job

Key Classes:
    - PrintDocument: Finished PDF plus the page plan it was built from

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - printing.layout: Planner and models
    - printing.output.rasterizer: SVG rendering

Used By:
    - printing.controller: Job orchestration
    - cli: Command-line printing
"""

from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Sequence

from reportlab.pdfgen import canvas

from cashu_notes.core.models.geometry import Size
from cashu_notes.printing.layout import (
    ArrangementMode,
    ArrangementResult,
    ConfigurationError,
    NoteArtifact,
    NotePlacement,
    PageLayout,
    PrintConfig,
    compute_arrangement,
)
from cashu_notes.printing.layout.geometry import (
    fit_to_box,
    mm_to_pt,
    mm_to_px,
    rotated_size,
)
from .marks import draw_bleed_guide, draw_crop_marks, draw_cut_lines
from .rasterizer import CairoRasterizer, ContentLoadError, Rasterizer, rotate_image
from .surface import PdfPageSurface

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

DOCUMENT_TITLE = "Cashu Notes"


@dataclass(frozen=True)
class PrintDocument:
    """
    Assembled print document (immutable).

    Attributes:
        pdf_bytes: Complete PDF file contents
        pages: Page layouts in output order
        filename: Suggested download filename
        total_operations: Render units counted for progress
        page_size: Page size in mm
    """

    pdf_bytes: bytes
    pages: tuple[PageLayout, ...]
    filename: str
    total_operations: int
    page_size: Size

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def write(self, output_dir: Path, filename: Optional[str] = None) -> Path:
        """Write the PDF into ``output_dir`` and return its path."""
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / (filename or self.filename)
        path.write_bytes(self.pdf_bytes)
        logger.info(f"Wrote {self.page_count} pages to {path}")
        return path


class _ProgressTracker:
    """Counts rendered note sides and reports (completed, total)."""

    def __init__(self, total: int, callback: Optional[ProgressCallback]) -> None:
        self.total = total
        self.completed = 0
        self._callback = callback

    def advance(self, units: int = 1) -> None:
        for _ in range(units):
            self.completed += 1
            if self._callback:
                self._callback(self.completed, self.total)


def suggested_filename(config: PrintConfig, today: Optional[date] = None) -> str:
    """
    Download filename for a print job.

    Example:
        >>> suggested_filename(PrintConfig(double_sided=True), date(2024, 5, 1))
        'cashu-notes-double-2024-05-01.pdf'
    """
    sided = "double" if config.double_sided else "single"
    stamp = (today or date.today()).isoformat()
    return f"cashu-notes-{sided}-{stamp}.pdf"


async def assemble(
    artifacts: Sequence[NoteArtifact],
    config: PrintConfig,
    on_progress: Optional[ProgressCallback] = None,
    *,
    rasterizer: Optional[Rasterizer] = None,
    arrangement: Optional[ArrangementResult] = None,
    today: Optional[date] = None,
) -> PrintDocument:
    """
    Render notes into a paginated PDF.

    Pages are rendered strictly in order, one note at a time. Progress is
    reported after every note side, including empty back slots, so the
    last report is always (total, total) with
    total = len(artifacts) * (2 if double-sided else 1).

    Args:
        artifacts: Notes in print order
        config: Print configuration
        on_progress: Called with (completed, total) after each note side
        rasterizer: SVG renderer (defaults to CairoRasterizer)
        arrangement: Precomputed layout; required for MANUAL arrangement
        today: Date used in the suggested filename

    Returns:
        PrintDocument with the PDF bytes

    Raises:
        ConfigurationError: If there is nothing to print or the layout fails
        ContentLoadError: If any note's artwork cannot be rendered; no
            partial document is returned
    """
    if arrangement is None:
        if config.arrangement is ArrangementMode.MANUAL:
            raise ConfigurationError(
                "Manual arrangement has no computed layout - pass the "
                "arrangement you placed yourself"
            )
        arrangement = compute_arrangement(artifacts, config)

    if not arrangement.layouts:
        raise ConfigurationError("Nothing to print - add at least one note")

    rasterizer = rasterizer or CairoRasterizer()
    page_size = config.page_size
    total = len(artifacts) * (2 if config.double_sided else 1)
    progress = _ProgressTracker(total, on_progress)

    logger.info(
        f"Assembling {arrangement.total_pages} pages for {len(artifacts)} notes "
        f"({'double' if config.double_sided else 'single'}-sided)"
    )

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(mm_to_pt(page_size.width), mm_to_pt(page_size.height)))
    c.setTitle(DOCUMENT_TITLE)
    c.setCreator(DOCUMENT_TITLE)

    layouts = arrangement.layouts
    for i, layout in enumerate(layouts):
        surface = PdfPageSurface(c, page_size)
        await _render_page(surface, layout, config, rasterizer, progress)
        c.showPage()

        # Fronts with no back page still count their back units
        next_is_back = i + 1 < len(layouts) and not layouts[i + 1].is_front
        if config.double_sided and layout.is_front and not next_is_back:
            progress.advance(layout.placement_count)

    c.save()

    return PrintDocument(
        pdf_bytes=buf.getvalue(),
        pages=tuple(layouts),
        filename=suggested_filename(config, today),
        total_operations=total,
        page_size=page_size,
    )


def assemble_sync(
    artifacts: Sequence[NoteArtifact],
    config: PrintConfig,
    on_progress: Optional[ProgressCallback] = None,
    **kwargs,
) -> PrintDocument:
    """Run assemble() to completion on a fresh event loop."""
    return asyncio.run(assemble(artifacts, config, on_progress, **kwargs))


async def _render_page(
    surface: PdfPageSurface,
    layout: PageLayout,
    config: PrintConfig,
    rasterizer: Rasterizer,
    progress: _ProgressTracker,
) -> None:
    """
    Render one page: bleed guide, note artwork, crop marks, cut lines.

    Args:
        surface: Page surface
        layout: Page plan
        config: Print configuration
        rasterizer: SVG renderer
        progress: Progress tracker
    """
    if config.bleed_guide:
        draw_bleed_guide(surface, surface.page_size, config.bleed_margin)

    for placement in layout.placements:
        content = placement.artifact.content(layout.side)
        if content:
            await _draw_note(surface, placement, content, layout, config.dpi, rasterizer)
            if config.crop_marks:
                draw_crop_marks(surface, placement.box)
        else:
            logger.debug(
                f"Page {layout.page_number}: slot {placement.slot} has no "
                f"{layout.side} artwork, leaving it blank"
            )
        progress.advance()

    if config.cut_lines and layout.placement_count > 1:
        draw_cut_lines(surface, [p.box for p in layout.placements])


async def _draw_note(
    surface: PdfPageSurface,
    placement: NotePlacement,
    content: str,
    layout: PageLayout,
    dpi: int,
    rasterizer: Rasterizer,
) -> None:
    """
    Rasterize one note side and draw it centred in its placement box.

    The artwork is rendered upright at its fitted size, then turned to
    the placement rotation.

    Raises:
        ContentLoadError: If the artwork cannot be rendered
    """
    artifact = placement.artifact
    fitted = fit_to_box(
        artifact.natural_size,
        placement.rotation,
        Size(placement.width, placement.height),
    )
    upright = rotated_size(fitted, placement.rotation)

    try:
        image = await rasterizer.rasterize(
            content,
            mm_to_px(upright.width, dpi),
            mm_to_px(upright.height, dpi),
        )
    except ContentLoadError as e:
        name = artifact.label or f"slot {placement.slot + 1}"
        raise ContentLoadError(
            f"Could not render the {layout.side} of note {name} on page "
            f"{layout.page_number}: {e}"
        ) from e

    x = placement.x + (placement.width - fitted.width) / 2
    y = placement.y + (placement.height - fitted.height) / 2
    surface.draw_image(rotate_image(image, placement.rotation), x, y, fitted.width, fitted.height)
