"""
Module: printing.layout.config

Purpose:
    Print job configuration for the layout engine.
    Defines page formats, orientation, bleed, marks and arrangement mode.

Key Classes:
    - PrintConfig: Immutable print job configuration
    - PageFormat: Named page sizes
    - ArrangementMode: How notes are placed on pages
    - ConfigurationError: Invalid configuration or note/page mismatch

Dependencies:
    - dataclasses (std)
    - core.models.geometry: Size

Used By:
    - printing.layout.planner: Arrangement computation
    - printing.output.assembler: Document assembly
    - printing.controller: Job orchestration
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from cashu_notes.core.models.geometry import Size


# Stacking path constants (mm)
NOTES_PER_PAGE = 3
CROP_MARK_GAP = 2.0
CROP_MARK_LENGTH = 5.0
CUT_MARK_SPACE = CROP_MARK_GAP + CROP_MARK_LENGTH
PORTRAIT_TARGET_WIDTH = 155.0
DEFAULT_BLEED = 5.0
DEFAULT_SPACING = 5.0
DEFAULT_DPI = 300

DEFAULT_NOTE_SIZE = Size(80.0, 140.0)
DEFAULT_ROTATION = 90


class ConfigurationError(ValueError):
    """Print configuration cannot produce a valid layout."""
    pass


class PageFormat(str, Enum):
    """Named page format."""
    A4 = "A4"
    LETTER = "Letter"
    CUSTOM = "Custom"

    def __str__(self) -> str:
        return self.value


PAGE_FORMATS: dict[PageFormat, Size] = {
    PageFormat.A4: Size(210.0, 297.0),
    PageFormat.LETTER: Size(215.9, 279.4),
}


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    def __str__(self) -> str:
        return self.value


class ArrangementMode(str, Enum):
    """How notes are arranged on pages."""
    STACKED = "stacked"  # Fixed 3 notes per page, each fitted independently
    GRID = "grid"        # Uniform grid sized from the first note
    AUTO = "auto"        # Currently identical to GRID
    MANUAL = "manual"    # Caller supplies the arrangement

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PrintConfig:
    """
    Configuration for a print job (immutable).

    Attributes:
        format: Named page format
        orientation: Portrait or landscape (landscape swaps page sides)
        bleed_margin: Page margin kept clear of notes (mm)
        crop_marks: Draw L-shaped crop marks around every note
        cut_lines: Draw shared cut lines between notes (grid layouts)
        double_sided: Emit back pages after each front page
        arrangement: Arrangement mode
        spacing: Gap between grid cells (mm)
        custom_dimensions: Page size when format is CUSTOM
        dpi: Rasterization resolution for note artwork
        bleed_guide: Draw the advisory bleed rectangle

    Example:
        >>> config = PrintConfig(double_sided=True)
        >>> config.page_size
        Size(width=210.0, height=297.0)
    """

    format: PageFormat = PageFormat.A4
    orientation: Orientation = Orientation.PORTRAIT
    bleed_margin: float = DEFAULT_BLEED
    crop_marks: bool = True
    cut_lines: bool = False
    double_sided: bool = False
    arrangement: ArrangementMode = ArrangementMode.STACKED
    spacing: float = DEFAULT_SPACING
    custom_dimensions: Optional[Size] = None
    dpi: int = DEFAULT_DPI
    bleed_guide: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.bleed_margin < 0:
            raise ConfigurationError(
                f"bleed_margin must be non-negative: {self.bleed_margin}"
            )
        if self.spacing < 0:
            raise ConfigurationError(f"spacing must be non-negative: {self.spacing}")
        if self.dpi <= 0:
            raise ConfigurationError(f"dpi must be positive: {self.dpi}")
        if self.format is PageFormat.CUSTOM and self.custom_dimensions is None:
            raise ConfigurationError(
                "Custom page format needs custom_dimensions (width and height in mm)"
            )
        if self.format is not PageFormat.CUSTOM and self.custom_dimensions is not None:
            raise ConfigurationError(
                f"custom_dimensions given for {self.format} page; "
                "set format to Custom to use them"
            )
        if self.usable_width <= 0 or self.usable_height <= 0:
            raise ConfigurationError(
                f"Bleed margin {self.bleed_margin}mm leaves no printable area "
                f"on a {self.page_size.width}x{self.page_size.height}mm page"
            )

    @property
    def page_size(self) -> Size:
        """Page size in mm after orientation is applied."""
        if self.format is PageFormat.CUSTOM:
            size = self.custom_dimensions
        else:
            size = PAGE_FORMATS[self.format]
        # Custom sizes are taken as given in portrait
        if self.orientation is Orientation.LANDSCAPE and size.is_portrait:
            return size.swapped()
        return size

    @property
    def usable_width(self) -> float:
        """Width available for notes (excluding bleed)."""
        return self.page_size.width - 2 * self.bleed_margin

    @property
    def usable_height(self) -> float:
        """Height available for notes (excluding bleed)."""
        return self.page_size.height - 2 * self.bleed_margin

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PrintConfig:
        """
        Build a config from a saved job mapping.

        Accepts the camelCase keys written by the browser app
        (``bleedMargin``, ``doubleSided``...) as well as snake_case.

        Raises:
            ConfigurationError: On unknown enum values or invalid settings
        """
        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        try:
            fmt = PageFormat(pick("format", default=PageFormat.A4.value))
            orientation = Orientation(pick("orientation", default=Orientation.PORTRAIT.value))
            arrangement = ArrangementMode(
                pick("arrangement", default=ArrangementMode.STACKED.value)
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid print setting: {e}") from e

        custom = pick("custom_dimensions", "customDimensions")
        try:
            custom_size = Size.from_dict(custom) if custom else None
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid custom dimensions: {custom!r}") from e

        try:
            bleed_margin = float(pick("bleed_margin", "bleedMargin", default=DEFAULT_BLEED))
            spacing = float(pick("spacing", default=DEFAULT_SPACING))
            dpi = int(pick("dpi", default=DEFAULT_DPI))
        except (TypeError, ValueError, OverflowError) as e:
            raise ConfigurationError(f"Invalid numeric print setting: {e}") from e

        return cls(
            format=fmt,
            orientation=orientation,
            bleed_margin=bleed_margin,
            crop_marks=bool(pick("crop_marks", "cropMarks", default=True)),
            cut_lines=bool(pick("cut_lines", "cutLines", default=False)),
            double_sided=bool(pick("double_sided", "doubleSided", default=False)),
            arrangement=arrangement,
            spacing=spacing,
            custom_dimensions=custom_size,
            dpi=dpi,
            bleed_guide=bool(pick("bleed_guide", "bleedGuide", default=False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format.value,
            "orientation": self.orientation.value,
            "bleedMargin": self.bleed_margin,
            "cropMarks": self.crop_marks,
            "cutLines": self.cut_lines,
            "doubleSided": self.double_sided,
            "arrangement": self.arrangement.value,
            "spacing": self.spacing,
            "customDimensions": (
                self.custom_dimensions.to_dict() if self.custom_dimensions else None
            ),
            "dpi": self.dpi,
            "bleedGuide": self.bleed_guide,
        }
