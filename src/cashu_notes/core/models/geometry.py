"""
Module: geometry

Purpose:
    Provides the Size and Box value types used throughout layout and
    rendering. All values are millimetres unless a name says otherwise.

Key Classes:
    - Size: width/height pair
    - Box: axis-aligned rectangle anchored at its top-left corner

Dependencies:
    - dataclasses (std)

Used By:
    - printing.layout: planner and geometry utilities
    - printing.output: mark renderer and assembler
    - core.models.templates: template dimensions
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Size:
    """
    Width/height pair in millimetres.

    Invariants:
        - width > 0
        - height > 0

    Example:
        >>> Size(50, 90).swapped()
        Size(width=90, height=50)
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Size must be positive, got {self.width}x{self.height}"
            )

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_portrait(self) -> bool:
        return self.height > self.width

    def swapped(self) -> Size:
        """Return the size with width and height exchanged."""
        return Size(self.height, self.width)

    def to_dict(self) -> dict[str, float]:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Size:
        return cls(width=float(data["width"]), height=float(data["height"]))


@dataclass(frozen=True, slots=True)
class Box:
    """
    Axis-aligned rectangle on a page.

    Coordinates use a top-left origin with y growing downwards, matching
    how pages are described to the printer operator.

    Attributes:
        x: Left edge (mm)
        y: Top edge (mm)
        width: Width (mm)
        height: Height (mm)
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height
