"""
Module: printing.output.instructions

Purpose:
    Plain-text printer instructions shown next to the generated PDF.
"""

from __future__ import annotations

from typing import Optional

from cashu_notes.printing.layout.config import (
    ArrangementMode,
    NOTES_PER_PAGE,
    PrintConfig,
)


def get_printing_instructions(double_sided: bool, config: Optional[PrintConfig] = None) -> str:
    """
    Build printing instructions for a job.

    Args:
        double_sided: Whether back pages are interleaved
        config: Print configuration (defaults to the standard A4 job)

    Returns:
        Multi-line instruction text
    """
    config = config or PrintConfig(double_sided=double_sided)
    page = config.page_size
    paper = f"{config.format} ({page.width:g}mm x {page.height:g}mm)"
    stacked = config.arrangement is ArrangementMode.STACKED

    lines = [
        f"{'DOUBLE' if double_sided else 'SINGLE'}-SIDED PRINTING INSTRUCTIONS",
        "",
        "1. Print settings:",
        f"   - Paper: {paper}",
        f"   - Orientation: {config.orientation}",
    ]
    if double_sided:
        lines.append("   - Double-sided: flip on SHORT edge")
    lines += [
        "   - Quality: best available",
        "   - Scale: 100% (no fit-to-page)",
        "   - Margins: none",
        "",
    ]

    if double_sided:
        lines += [
            "2. Page order:",
            "   - Each front page is followed by the backs of the same notes",
            "   - Backs print in exactly the same positions as their fronts",
            "",
            "3. Important:",
            "   - Use 'flip on short edge', not 'flip on long edge'",
            "   - Print one or two test sheets to check alignment first",
            "",
            "4. Cutting:",
        ]
    else:
        lines += ["2. Cutting:"]

    if stacked:
        lines.append(f"   - Each page holds {NOTES_PER_PAGE} notes stacked vertically")
    lines += [
        "   - Use the corner crop marks as guides",
        f"   - {config.bleed_margin:g}mm bleed is kept clear around the page edge",
        "   - Cut along the marks for correctly sized notes",
    ]
    return "\n".join(lines)
