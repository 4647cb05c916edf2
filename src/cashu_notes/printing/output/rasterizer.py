"""
Module: printing.output.rasterizer

Purpose:
    Turn note SVG artwork into raster images for the PDF.
    Rendering runs on a worker thread so the event loop stays free,
    but callers await one note at a time.

Key Classes:
    - Rasterizer: Protocol for SVG -> PIL image rendering
    - CairoRasterizer: cairosvg implementation
    - ContentLoadError: Artwork could not be rendered

Key Functions:
    - rotate_image(): Clockwise quarter-turn rotation

Dependencies:
    - cairosvg: SVG rendering (imported on first use)
    - PIL: Image decoding and rotation

Used By:
    - printing.output.assembler: Note artwork rendering
"""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Protocol

from PIL import Image

logger = logging.getLogger(__name__)


class ContentLoadError(Exception):
    """Note artwork could not be decoded or rendered."""
    pass


class Rasterizer(Protocol):
    async def rasterize(self, svg: str, width_px: int, height_px: int) -> Image.Image:
        """Render ``svg`` to an RGBA image of exactly the given size."""
        ...


# PIL transposes turn counter-clockwise
_CLOCKWISE_TRANSPOSE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def rotate_image(image: Image.Image, rotation: int) -> Image.Image:
    """
    Rotate an image clockwise by a multiple of 90 degrees.

    Args:
        image: Source image (not modified)
        rotation: 0, 90, 180 or 270

    Returns:
        Rotated copy (or the same image for 0)
    """
    rotation %= 360
    if rotation == 0:
        return image
    return image.transpose(_CLOCKWISE_TRANSPOSE[rotation])


class CairoRasterizer:
    """Render SVG with cairosvg."""

    async def rasterize(self, svg: str, width_px: int, height_px: int) -> Image.Image:
        try:
            png = await asyncio.to_thread(_svg_to_png, svg, width_px, height_px)
            image = Image.open(io.BytesIO(png))
            image.load()
        except ContentLoadError:
            raise
        except Exception as e:
            raise ContentLoadError(f"Failed to render SVG artwork: {e}") from e

        if image.size != (width_px, height_px):
            image = image.resize((width_px, height_px), Image.Resampling.LANCZOS)
        logger.debug(f"Rasterized SVG to {width_px}x{height_px}px")
        return image.convert("RGBA")


def _svg_to_png(svg: str, width_px: int, height_px: int) -> bytes:
    try:
        import cairosvg
    except (ImportError, OSError) as e:
        # OSError: cairosvg installed but the cairo library is missing
        raise ContentLoadError(
            f"SVG rendering needs cairosvg and the cairo library: {e}"
        ) from e
    return cairosvg.svg2png(
        bytestring=svg.encode("utf-8"),
        output_width=width_px,
        output_height=height_px,
    )
