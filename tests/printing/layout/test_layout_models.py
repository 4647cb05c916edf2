"""
Tests for layout models.
"""

import logging

import pytest

from cashu_notes.core.models.geometry import Size
from cashu_notes.printing.layout import (
    ArrangementResult,
    ConfigurationError,
    NoteArtifact,
    PrintConfig,
    Side,
    compute_arrangement,
)


class TestNoteArtifact:
    def test_when_from_svg_then_size_detected_from_front(self, svg_factory):
        note = NoteArtifact.from_svg(svg_factory(96, 192))

        assert note.natural_size.width == pytest.approx(25.4)
        assert note.natural_size.height == pytest.approx(50.8)
        assert note.rotation == 90

    def test_when_front_has_no_size_then_back_used(self, svg_factory):
        note = NoteArtifact.from_svg("<svg/>", svg_factory(96, 96, view_box=False))

        assert note.natural_size.width == pytest.approx(25.4)
        assert note.has_back

    def test_when_explicit_size_then_wins(self, svg_factory):
        note = NoteArtifact.from_svg(svg_factory(96, 96), natural_size=Size(50, 90))

        assert note.natural_size == Size(50, 90)

    def test_when_no_size_anywhere_then_default_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            note = NoteArtifact.from_svg("<svg/>", label="21 sats")

        assert note.natural_size == Size(80, 140)
        assert "21 sats" in caplog.text

    def test_when_empty_back_then_single_sided(self, svg_factory):
        note = NoteArtifact.from_svg(svg_factory(), "")

        assert note.back is None
        assert not note.has_back
        assert note.content(Side.BACK) is None

    def test_footprint_follows_rotation(self):
        note = NoteArtifact(front="<svg/>", natural_size=Size(80, 140), rotation=270)

        assert note.footprint == Size(140, 80)

    def test_when_rotation_invalid_then_raises(self):
        with pytest.raises(ConfigurationError):
            NoteArtifact(front="<svg/>", natural_size=Size(80, 140), rotation=45)


class TestArrangementResult:
    def test_empty(self):
        result = ArrangementResult.empty()

        assert result.layouts == ()
        assert result.sheet_count == 0
        assert result.total_placements == 0
        assert result.warnings == ()


def test_when_svg_size_overflows_then_default_size_planned():
    note = NoteArtifact.from_svg('<svg viewBox="0 0 1e999 100"/>')

    result = compute_arrangement([note], PrintConfig())

    assert note.natural_size == Size(80, 140)
    assert result.total_pages == 1


def test_arrangement_result_is_hashable(note_factory):
    result = compute_arrangement([note_factory()], PrintConfig())

    assert hash(result) == hash(compute_arrangement([note_factory()], PrintConfig()))
    assert isinstance(result.warnings, tuple)
