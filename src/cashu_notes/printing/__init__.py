"""
Module: printing

Purpose:
    Print pipeline for Cashu notes. Arranges note artwork onto pages
    (three stacked notes per page by default, or a uniform grid) and
    assembles a print-ready PDF with crop marks and optional cut lines,
    keeping back pages in registration for double-sided printing.

Key Functions:
    - compute_arrangement(): Plan pages and placements
    - assemble(): Render the PDF
    - print_notes(): Main entry point for a complete job

Key Classes:
    - PrintConfig: Print job configuration
    - NoteArtifact: Note to print
    - ArrangementResult: Page plan

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - cairosvg: SVG rendering

Used By:
    - cli: Command-line printing
"""

from .layout import (
    ArrangementMode,
    ArrangementResult,
    ConfigurationError,
    NoteArtifact,
    Orientation,
    PageFormat,
    PrintConfig,
    compute_arrangement,
    calculate_print_stats,
)
from .output import ContentLoadError, PrintDocument, assemble, assemble_sync
from .controller import print_notes, run_print_job, PrintResult, PrintError

__all__ = [
    # Config
    "ArrangementMode",
    "Orientation",
    "PageFormat",
    "PrintConfig",
    # Layout
    "ArrangementResult",
    "NoteArtifact",
    "compute_arrangement",
    "calculate_print_stats",
    # Output
    "PrintDocument",
    "assemble",
    "assemble_sync",
    # Controller
    "print_notes",
    "run_print_job",
    "PrintResult",
    # Errors
    "ConfigurationError",
    "ContentLoadError",
    "PrintError",
]
