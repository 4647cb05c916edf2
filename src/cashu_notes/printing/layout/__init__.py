"""
Module: printing.layout

Purpose:
    Page layout for note printing.
    Converts notes and a print configuration into positioned page layouts.

Key Functions:
    - compute_arrangement(): Main entry point for layout
    - calculate_print_stats(): Page/sheet counts
    - detect_dimensions(): SVG intrinsic size in mm
    - fit_to_box(): Rotated fit-to-box scaling

Key Classes:
    - PrintConfig: Configuration for a print job
    - NoteArtifact: Note to print
    - NotePlacement: Positioned note
    - PageLayout: Single page layout plan
    - ArrangementResult: Layout for a whole job

Dependencies:
    - Pure Python; no rendering libraries are imported here

Used By:
    - printing.output.assembler: PDF assembly
    - printing.controller: Job orchestration
"""

from .config import (
    ArrangementMode,
    ConfigurationError,
    Orientation,
    PageFormat,
    PrintConfig,
)
from .geometry import detect_dimensions, fit_to_box, rotated_size
from .models import (
    ArrangementResult,
    NoteArtifact,
    NotePlacement,
    PageLayout,
    PrintStats,
    Side,
)
from .planner import compute_arrangement, calculate_print_stats

__all__ = [
    # Config
    "ArrangementMode",
    "ConfigurationError",
    "Orientation",
    "PageFormat",
    "PrintConfig",
    # Geometry
    "detect_dimensions",
    "fit_to_box",
    "rotated_size",
    # Models
    "ArrangementResult",
    "NoteArtifact",
    "NotePlacement",
    "PageLayout",
    "PrintStats",
    "Side",
    # Functions
    "compute_arrangement",
    "calculate_print_stats",
]
