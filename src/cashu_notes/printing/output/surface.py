"""
Module: printing.output.surface

Purpose:
    Drawing surface for one PDF page.
    Callers work in millimetres with a top-left origin; the surface
    converts to ReportLab points with a bottom-left origin.

Key Classes:
    - DrawingSurface: Protocol used by the mark renderer
    - PdfPageSurface: ReportLab canvas implementation

Dependencies:
    - reportlab: PDF canvas
    - PIL: Image type

Used By:
    - printing.output.marks: Crop marks and cut lines
    - printing.output.assembler: Note artwork placement
"""

from __future__ import annotations

import io
from typing import Protocol, Tuple

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from cashu_notes.core.models.geometry import Size
from cashu_notes.printing.layout.geometry import mm_to_pt

RGB = Tuple[int, int, int]


class DrawingSurface(Protocol):
    """Minimal vector drawing interface, millimetres, top-left origin."""

    def set_stroke(self, color: RGB, width: float) -> None: ...

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def rect(self, x: float, y: float, width: float, height: float) -> None: ...


class PdfPageSurface:
    """
    DrawingSurface backed by a ReportLab canvas page.

    Args:
        c: Canvas positioned on the page to draw
        page_size: Page size in mm
    """

    def __init__(self, c: canvas.Canvas, page_size: Size) -> None:
        self.canvas = c
        self.page_size = page_size
        self._page_height_pt = mm_to_pt(page_size.height)

    def set_stroke(self, color: RGB, width: float) -> None:
        r, g, b = color
        self.canvas.setStrokeColorRGB(r / 255, g / 255, b / 255)
        self.canvas.setLineWidth(mm_to_pt(width))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.canvas.line(
            mm_to_pt(x1), self._flip(y1),
            mm_to_pt(x2), self._flip(y2),
        )

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self.canvas.rect(
            mm_to_pt(x),
            self._flip(y + height),
            mm_to_pt(width),
            mm_to_pt(height),
            stroke=1,
            fill=0,
        )

    def draw_image(
        self,
        image: Image.Image,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Draw ``image`` stretched to the given box (mm)."""
        self.canvas.drawImage(
            _pil_to_reader(image),
            mm_to_pt(x),
            self._flip(y + height),
            width=mm_to_pt(width),
            height=mm_to_pt(height),
            mask="auto",
        )

    def _flip(self, y_mm: float) -> float:
        """Convert a top-down mm coordinate to bottom-up points."""
        return self._page_height_pt - mm_to_pt(y_mm)


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)
