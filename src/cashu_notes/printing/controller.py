"""
Module: printing.controller

Purpose:
    Orchestrate a complete print job.
    Validate → Arrange → Assemble → Write → Record history

Key Functions:
    - print_notes(): Blocking entry point
    - run_print_job(): Async entry point

Key Classes:
    - PrintResult: Completed job summary
    - PrintError: Exception for job failures

Dependencies:
    - printing.layout: Arrangement and statistics
    - printing.output: PDF assembly
    - storage: Optional print history

Used By:
    - cli: Command-line printing
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from cashu_notes.storage import PrintHistory, PrintRecord, StorageAdapter, StorageError
from .layout import (
    ArrangementMode,
    ConfigurationError,
    NoteArtifact,
    PrintConfig,
    PrintStats,
    compute_arrangement,
)
from .output import ContentLoadError, PrintDocument, assemble
from .output.assembler import ProgressCallback
from .output.rasterizer import Rasterizer

logger = logging.getLogger(__name__)


class PrintError(Exception):
    """Error during a print job."""
    pass


@dataclass(frozen=True)
class PrintResult:
    """
    Completed print job (immutable).

    Attributes:
        pdf_path: Path to the written PDF
        page_count: Pages in the PDF
        stats: Note/page/sheet counts
        warnings: Non-fatal layout warnings
        duration_s: Wall time of the job
    """
    pdf_path: Path
    page_count: int
    stats: PrintStats
    warnings: tuple[str, ...]
    duration_s: float


async def run_print_job(
    artifacts: Sequence[NoteArtifact],
    config: PrintConfig,
    output_dir: Path,
    *,
    on_progress: Optional[ProgressCallback] = None,
    rasterizer: Optional[Rasterizer] = None,
    storage: Optional[StorageAdapter] = None,
    filename: Optional[str] = None,
) -> PrintResult:
    """
    Print notes to a PDF in ``output_dir``.

    Pipeline:
    1. Compute the arrangement (fails fast on capacity problems)
    2. Assemble the PDF page by page
    3. Write the file
    4. Record the job in print history (if storage is given)

    Args:
        artifacts: Notes in print order
        config: Print configuration
        output_dir: Directory for the PDF
        on_progress: Progress callback (completed, total)
        rasterizer: SVG renderer override
        storage: Storage for print history
        filename: Override for the suggested filename

    Returns:
        PrintResult with the PDF path and counts

    Raises:
        PrintError: If layout, rendering or writing fails
    """
    start_time = time.perf_counter()

    if not artifacts:
        raise PrintError("No notes to print")
    if config.arrangement is ArrangementMode.MANUAL:
        raise PrintError(
            "Manual arrangement cannot be printed automatically - "
            "choose stacked, grid or auto"
        )

    logger.info(
        f"Starting print job: {len(artifacts)} notes, {config.format} "
        f"{config.arrangement}, {'double' if config.double_sided else 'single'}-sided"
    )

    # 1. Arrange
    try:
        arrangement = compute_arrangement(artifacts, config)
    except ConfigurationError as e:
        raise PrintError(str(e)) from e

    # 2. Assemble
    try:
        document: PrintDocument = await assemble(
            artifacts,
            config,
            on_progress,
            rasterizer=rasterizer,
            arrangement=arrangement,
        )
    except ContentLoadError as e:
        raise PrintError(f"Rendering failed, no PDF was written: {e}") from e
    except ConfigurationError as e:
        raise PrintError(str(e)) from e

    # 3. Write
    try:
        pdf_path = document.write(output_dir, filename)
    except OSError as e:
        raise PrintError(f"Failed to write PDF to {output_dir}: {e}") from e

    # 4. History
    if storage is not None:
        record = PrintRecord(
            filename=pdf_path.name,
            notes=len(artifacts),
            pages=document.page_count,
            double_sided=config.double_sided,
            arrangement=config.arrangement.value,
            created_at=datetime.now().isoformat(timespec="seconds"),
            labels=tuple(a.label for a in artifacts if a.label),
        )
        try:
            await PrintHistory(storage).record(record)
        except StorageError as e:
            # The PDF is already written; history is best effort
            logger.warning(f"Could not record print history: {e}")

    duration = time.perf_counter() - start_time
    logger.info(f"Print job complete: {document.page_count} pages in {duration:.2f}s")

    return PrintResult(
        pdf_path=pdf_path,
        page_count=document.page_count,
        stats=PrintStats(
            total_notes=len(artifacts),
            pages_needed=arrangement.total_pages,
            sheets_needed=arrangement.sheet_count,
        ),
        warnings=arrangement.warnings,
        duration_s=duration,
    )


def print_notes(
    artifacts: Sequence[NoteArtifact],
    config: PrintConfig,
    output_dir: Path,
    **kwargs,
) -> PrintResult:
    """Blocking wrapper around run_print_job()."""
    return asyncio.run(run_print_job(artifacts, config, output_dir, **kwargs))
