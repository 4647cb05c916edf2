"""
Command-line entry point.

Usage:
    cashu-notes note1.svg note2.svg,note2-back.svg --double-sided -o out/

Each NOTE argument is a front SVG, optionally followed by a comma and a
back SVG. Settings come from ``--config`` (a saved print job JSON) and
are overridden by any flag given explicitly.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from cashu_notes import __version__
from cashu_notes.core.models.geometry import Size
from cashu_notes.printing import (
    ArrangementMode,
    ConfigurationError,
    NoteArtifact,
    Orientation,
    PageFormat,
    PrintConfig,
    PrintError,
    print_notes,
)
from cashu_notes.printing.layout import detect_dimensions
from cashu_notes.printing.output import get_printing_instructions
from cashu_notes.storage import JsonFileStorage
from cashu_notes.templates import TemplateLoadError, load_template

logger = logging.getLogger("cashu_notes")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cashu-notes",
        description="Lay out Cashu note artwork for printing and write a PDF.",
    )
    p.add_argument("notes", nargs="+", metavar="NOTE",
                   help="Front SVG, or FRONT,BACK pair of SVG files")
    p.add_argument("-o", "--output", type=Path, default=Path("."),
                   help="Output directory (default: current directory)")
    p.add_argument("--config", type=Path, help="Saved print job JSON to start from")
    p.add_argument("--template", type=Path,
                   help="Template bundle; its dimensions are used when an SVG has no size")
    p.add_argument("--format", choices=[f.value for f in PageFormat])
    p.add_argument("--page-size", metavar="WxH", help="Custom page size in mm, e.g. 100x150")
    p.add_argument("--orientation", choices=[o.value for o in Orientation])
    p.add_argument("--arrangement",
                   choices=[m.value for m in ArrangementMode if m is not ArrangementMode.MANUAL])
    p.add_argument("--bleed", type=float, help="Bleed margin in mm")
    p.add_argument("--spacing", type=float, help="Grid spacing in mm")
    p.add_argument("--dpi", type=int, help="Artwork rasterization DPI")
    p.add_argument("--rotation", type=int, default=90, choices=[0, 90, 180, 270],
                   help="Note rotation on the page (default: 90)")
    p.add_argument("--double-sided", action="store_true", default=None)
    p.add_argument("--cut-lines", action="store_true", default=None)
    p.add_argument("--no-crop-marks", dest="crop_marks", action="store_false", default=None)
    p.add_argument("--bleed-guide", action="store_true", default=None)
    p.add_argument("--history", type=Path, help="JSON file to record print history in")
    p.add_argument("--instructions", action="store_true",
                   help="Print printer instructions after writing the PDF")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _parse_page_size(value: str) -> Size:
    try:
        width, height = (float(v) for v in value.lower().split("x"))
        return Size(width, height)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid page size {value!r}: expected WIDTHxHEIGHT in mm"
        ) from e


def build_config(args: argparse.Namespace) -> PrintConfig:
    """
    Combine ``--config`` with explicit flags.

    Raises:
        ConfigurationError: On invalid settings
    """
    if args.config:
        try:
            data = json.loads(args.config.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot read config {args.config}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config {args.config} must hold a JSON object")
        base = PrintConfig.from_dict(data)
    else:
        base = None

    overrides = {}
    if args.format:
        overrides["format"] = PageFormat(args.format)
        if overrides["format"] is not PageFormat.CUSTOM:
            overrides["custom_dimensions"] = None
    if args.page_size:
        overrides["custom_dimensions"] = _parse_page_size(args.page_size)
        overrides.setdefault("format", PageFormat.CUSTOM)
    if args.orientation:
        overrides["orientation"] = Orientation(args.orientation)
    if args.arrangement:
        overrides["arrangement"] = ArrangementMode(args.arrangement)
    for flag, field_name in (
        ("bleed", "bleed_margin"),
        ("spacing", "spacing"),
        ("dpi", "dpi"),
        ("double_sided", "double_sided"),
        ("cut_lines", "cut_lines"),
        ("crop_marks", "crop_marks"),
        ("bleed_guide", "bleed_guide"),
    ):
        value = getattr(args, flag)
        if value is not None:
            overrides[field_name] = value

    if base is None:
        return PrintConfig(**overrides)
    return dataclasses.replace(base, **overrides)


def load_artifacts(
    notes: Sequence[str],
    rotation: int,
    fallback_size: Optional[Size] = None,
) -> List[NoteArtifact]:
    """Read NOTE arguments into artifacts, in order."""
    artifacts = []
    for spec in notes:
        front_path, _, back_path = spec.partition(",")
        front = Path(front_path).read_text(encoding="utf-8")
        back = Path(back_path).read_text(encoding="utf-8") if back_path else None
        size = detect_dimensions(front) or (detect_dimensions(back) if back else None)
        artifacts.append(NoteArtifact.from_svg(
            front,
            back,
            rotation=rotation,
            label=Path(front_path).stem,
            natural_size=size or fallback_size,
        ))
    return artifacts


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
        fallback = load_template(args.template, strict=True).dimensions if args.template else None
        artifacts = load_artifacts(args.notes, args.rotation, fallback)
    except (ConfigurationError, TemplateLoadError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read note artwork: {e}", file=sys.stderr)
        return 1

    def report(done: int, total: int) -> None:
        logger.info(f"Rendered {done}/{total}")

    storage = JsonFileStorage(args.history) if args.history else None
    try:
        result = print_notes(
            artifacts, config, args.output, on_progress=report, storage=storage
        )
    except PrintError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    print(
        f"{result.pdf_path} ({result.page_count} pages, "
        f"{result.stats.sheets_needed} sheets)"
    )
    if args.instructions:
        print()
        print(get_printing_instructions(config.double_sided, config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
