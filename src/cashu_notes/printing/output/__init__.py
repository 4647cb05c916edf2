"""
Module: printing.output

Purpose:
    PDF assembly and print marks for note printing.
    Converts an ArrangementResult to a PDF using ReportLab.

Key Functions:
    - assemble(): Render notes to a PrintDocument
    - draw_crop_marks(), draw_cut_lines(), draw_bleed_guide(): Print marks
    - get_printing_instructions(): Printer guidance text

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - cairosvg: SVG rasterization

Used By:
    - printing.controller: Pipeline orchestration
"""

from .assembler import (
    PrintDocument,
    assemble,
    assemble_sync,
    suggested_filename,
)
from .instructions import get_printing_instructions
from .marks import draw_bleed_guide, draw_crop_marks, draw_cut_lines
from .rasterizer import CairoRasterizer, ContentLoadError, Rasterizer

__all__ = [
    "PrintDocument",
    "assemble",
    "assemble_sync",
    "suggested_filename",
    "get_printing_instructions",
    "draw_bleed_guide",
    "draw_crop_marks",
    "draw_cut_lines",
    "CairoRasterizer",
    "ContentLoadError",
    "Rasterizer",
]
