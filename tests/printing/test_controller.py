"""
Tests for print job orchestration.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from cashu_notes.core.models.geometry import Size
from cashu_notes.printing import (
    ArrangementMode,
    PrintConfig,
    PrintError,
    print_notes,
    run_print_job,
)
from cashu_notes.storage import MemoryStorage, PrintHistory, StorageError


def _run(*args, **kwargs):
    return asyncio.run(run_print_job(*args, **kwargs))


class TestRunPrintJob:
    def test_when_job_succeeds_then_pdf_written(self, note_factory, fake_rasterizer, tmp_path):
        notes = [note_factory(f"n{i}", back=True) for i in range(4)]
        config = PrintConfig(double_sided=True, dpi=30)

        result = _run(notes, config, tmp_path, rasterizer=fake_rasterizer)

        assert result.pdf_path.exists()
        assert result.pdf_path.parent == tmp_path
        assert result.page_count == 4
        assert result.stats.total_notes == 4
        assert result.stats.sheets_needed == 2
        assert result.warnings == ()

    def test_when_filename_given_then_used(self, note_factory, fake_rasterizer, tmp_path):
        result = _run(
            [note_factory()], PrintConfig(dpi=30), tmp_path,
            rasterizer=fake_rasterizer, filename="batch.pdf",
        )

        assert result.pdf_path == tmp_path / "batch.pdf"

    def test_when_storage_given_then_history_recorded(
        self, note_factory, fake_rasterizer, tmp_path
    ):
        storage = MemoryStorage()
        notes = [note_factory("21 sats"), note_factory("")]

        _run(notes, PrintConfig(dpi=30), tmp_path, rasterizer=fake_rasterizer, storage=storage)

        entries = asyncio.run(PrintHistory(storage).entries())
        assert len(entries) == 1
        assert entries[0].notes == 2
        assert entries[0].pages == 1
        assert entries[0].arrangement == "stacked"
        assert entries[0].labels == ("21 sats",)

    def test_when_history_fails_then_job_still_succeeds(
        self, note_factory, fake_rasterizer, tmp_path
    ):
        storage = MemoryStorage()
        storage.set = AsyncMock(side_effect=StorageError("disk full"))

        result = _run(
            [note_factory()], PrintConfig(dpi=30), tmp_path,
            rasterizer=fake_rasterizer, storage=storage,
        )

        assert result.pdf_path.exists()

    def test_when_no_notes_then_print_error(self, tmp_path):
        with pytest.raises(PrintError, match="No notes"):
            _run([], PrintConfig(), tmp_path)

    def test_when_manual_then_print_error(self, note_factory, tmp_path):
        config = PrintConfig(arrangement=ArrangementMode.MANUAL)

        with pytest.raises(PrintError, match="Manual"):
            _run([note_factory()], config, tmp_path)

    def test_when_layout_impossible_then_print_error(self, note_factory, tmp_path):
        config = PrintConfig(arrangement=ArrangementMode.GRID)

        with pytest.raises(PrintError, match="Note too large"):
            _run([note_factory(size=Size(400, 400))], config, tmp_path)

    def test_when_rendering_fails_then_no_pdf_written(
        self, note_factory, rasterizer_factory, tmp_path
    ):
        rasterizer = rasterizer_factory(fail_on="front n1")
        notes = [note_factory(f"n{i}") for i in range(3)]

        with pytest.raises(PrintError, match="no PDF was written"):
            _run(notes, PrintConfig(dpi=30), tmp_path, rasterizer=rasterizer)

        assert list(tmp_path.iterdir()) == []

    def test_when_output_not_writable_then_print_error(
        self, note_factory, fake_rasterizer, tmp_path
    ):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")

        with pytest.raises(PrintError, match="Failed to write"):
            _run([note_factory()], PrintConfig(dpi=30), blocker / "out",
                 rasterizer=fake_rasterizer)


def test_print_notes_blocking_wrapper(note_factory, fake_rasterizer, tmp_path):
    result = print_notes(
        [note_factory()], PrintConfig(dpi=30), tmp_path, rasterizer=fake_rasterizer
    )

    assert result.page_count == 1
    assert result.duration_s >= 0
