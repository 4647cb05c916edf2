import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import cashu_notes
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from cashu_notes.core.models.geometry import Size
from cashu_notes.printing.layout import NoteArtifact
from cashu_notes.printing.output.rasterizer import ContentLoadError


def make_svg(width_px: float = 302.36, height_px: float = 529.13, view_box: bool = True) -> str:
    """SVG header of the given CSS pixel size (defaults to 80x140mm)."""
    if view_box:
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width_px} {height_px}">'
            f'<rect width="{width_px}" height="{height_px}" fill="white"/></svg>'
        )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width_px}" height="{height_px}">'
        f'</svg>'
    )


class FakeRasterizer:
    """Async rasterizer returning blank images and recording every call."""

    def __init__(self, fail_on: str | None = None):
        self.calls: list[tuple[str, int, int]] = []
        self.fail_on = fail_on

    async def rasterize(self, svg: str, width_px: int, height_px: int) -> Image.Image:
        self.calls.append((svg, width_px, height_px))
        if self.fail_on is not None and self.fail_on in svg:
            raise ContentLoadError("broken artwork")
        return Image.new("RGBA", (width_px, height_px), (255, 255, 255, 255))


class RecordingSurface:
    """DrawingSurface that records draw calls."""

    def __init__(self, page_size: Size = Size(210, 297)):
        self.page_size = page_size
        self.lines: list[tuple[float, float, float, float]] = []
        self.rects: list[tuple[float, float, float, float]] = []
        self.strokes: list[tuple[tuple[int, int, int], float]] = []

    def set_stroke(self, color, width):
        self.strokes.append((color, width))

    def line(self, x1, y1, x2, y2):
        self.lines.append((x1, y1, x2, y2))

    def rect(self, x, y, width, height):
        self.rects.append((x, y, width, height))


def make_note(
    label: str = "note",
    size: Size = Size(80, 140),
    back: bool = False,
    rotation: int = 90,
) -> NoteArtifact:
    return NoteArtifact(
        front=f"<svg><!-- front {label} --></svg>",
        back=f"<svg><!-- back {label} --></svg>" if back else None,
        natural_size=size,
        rotation=rotation,
        label=label,
    )


@pytest.fixture
def fake_rasterizer():
    return FakeRasterizer()


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def note_factory():
    return make_note


@pytest.fixture
def svg_factory():
    return make_svg


@pytest.fixture
def rasterizer_factory():
    return FakeRasterizer
