"""
Module: printing.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses representing notes, placements, and pages.

Key Classes:
    - NoteArtifact: One physical note (front/back SVG + natural size)
    - NotePlacement: Note positioned on a page
    - PageLayout: Complete page layout
    - ArrangementResult: Planner output for a whole job

Dependencies:
    - dataclasses (std)
    - printing.layout.geometry: Size detection

Used By:
    - printing.layout.planner: Creates PageLayouts
    - printing.output.assembler: Consumes ArrangementResult
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cashu_notes.core.models.geometry import Box, Size
from .config import DEFAULT_NOTE_SIZE, DEFAULT_ROTATION
from .geometry import detect_dimensions, normalize_rotation, rotated_size

logger = logging.getLogger(__name__)


class Side(str, Enum):
    FRONT = "front"
    BACK = "back"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NoteArtifact:
    """
    One note to print (immutable).

    Attributes:
        front: Front SVG markup
        back: Back SVG markup, or None for single-sided notes
        natural_size: Unrotated note size in mm, fixed at construction
        rotation: Clockwise rotation applied on the page
        label: Display text such as the amount (not interpreted)
    """

    front: str
    natural_size: Size
    back: Optional[str] = None
    rotation: int = DEFAULT_ROTATION
    label: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", normalize_rotation(self.rotation))

    @property
    def has_back(self) -> bool:
        return bool(self.back)

    @property
    def footprint(self) -> Size:
        """Natural size after rotation."""
        return rotated_size(self.natural_size, self.rotation)

    def content(self, side: Side) -> Optional[str]:
        return self.front if side is Side.FRONT else self.back

    @classmethod
    def from_svg(
        cls,
        front: str,
        back: Optional[str] = None,
        *,
        rotation: int = DEFAULT_ROTATION,
        label: str = "",
        natural_size: Optional[Size] = None,
    ) -> NoteArtifact:
        """
        Create an artifact, detecting its natural size from the artwork.

        Size sources in order: ``natural_size``, the front SVG, the back
        SVG, then the 80x140mm default.

        Example:
            >>> note = NoteArtifact.from_svg('<svg viewBox="0 0 96 96"/>')
            >>> note.natural_size
            Size(width=25.4, height=25.4)
        """
        size = natural_size or detect_dimensions(front)
        if size is None and back:
            size = detect_dimensions(back)
        if size is None:
            logger.warning(
                f"No size information in note artwork{f' ({label})' if label else ''}, "
                f"using {DEFAULT_NOTE_SIZE.width}x{DEFAULT_NOTE_SIZE.height}mm"
            )
            size = DEFAULT_NOTE_SIZE
        return cls(
            front=front,
            back=back or None,
            natural_size=size,
            rotation=rotation,
            label=label,
        )


@dataclass(frozen=True)
class NotePlacement:
    """
    A note positioned on a page.

    Attributes:
        x: Left edge from page left (mm)
        y: Top edge from page top (mm)
        width: Placed footprint width (mm)
        height: Placed footprint height (mm)
        artifact: The note to draw
        rotation: Clockwise rotation of the artwork on this page
        slot: Position index on the page (0-based)
    """

    x: float
    y: float
    width: float
    height: float
    artifact: NoteArtifact
    rotation: int
    slot: int = 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class PageLayout:
    """
    Complete layout plan for a single page.

    Attributes:
        page_number: Page number (1-indexed)
        placements: NotePlacements on this page in slot order
        side: Whether this page carries fronts or backs
    """

    page_number: int
    placements: tuple[NotePlacement, ...]
    side: Side = Side.FRONT

    @property
    def is_front(self) -> bool:
        return self.side is Side.FRONT

    @property
    def placement_count(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class ArrangementResult:
    """
    Planner output (immutable, never persisted).

    Attributes:
        layouts: Pages in print order (backs follow their fronts)
        total_pages: Number of pages including back pages
        notes_per_page: Page capacity for the chosen arrangement
        unused_space_percent: Unused share of the usable area on the
            last front page
        warnings: Non-fatal layout warnings
    """

    layouts: tuple[PageLayout, ...]
    total_pages: int
    notes_per_page: int
    unused_space_percent: float
    warnings: tuple[str, ...] = ()

    @property
    def front_pages(self) -> tuple[PageLayout, ...]:
        return tuple(p for p in self.layouts if p.is_front)

    @property
    def sheet_count(self) -> int:
        """Physical sheets needed; a back page shares its front's sheet."""
        return len(self.front_pages)

    @property
    def total_placements(self) -> int:
        return sum(p.placement_count for p in self.layouts)

    @classmethod
    def empty(cls, unused_space_percent: float = 0.0) -> ArrangementResult:
        return cls(
            layouts=(),
            total_pages=0,
            notes_per_page=0,
            unused_space_percent=unused_space_percent,
        )


@dataclass(frozen=True)
class PrintStats:
    """Summary numbers for a print job."""

    total_notes: int
    pages_needed: int
    sheets_needed: int
