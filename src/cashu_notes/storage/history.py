"""Print history kept through a StorageAdapter."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, List

from .adapters import StorageAdapter

logger = logging.getLogger(__name__)

HISTORY_KEY = "prints"


@dataclass(frozen=True)
class PrintRecord:
    """One completed print job."""

    filename: str
    notes: int
    pages: int
    double_sided: bool
    arrangement: str
    created_at: str  # ISO timestamp
    labels: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["labels"] = list(self.labels)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PrintRecord:
        return cls(
            filename=data["filename"],
            notes=int(data["notes"]),
            pages=int(data["pages"]),
            double_sided=bool(data["double_sided"]),
            arrangement=data["arrangement"],
            created_at=data["created_at"],
            labels=tuple(data.get("labels", [])),
        )


class PrintHistory:
    """Append-only list of PrintRecords under the ``prints`` key."""

    def __init__(self, storage: StorageAdapter) -> None:
        self.storage = storage

    async def entries(self) -> List[PrintRecord]:
        raw = await self.storage.get(HISTORY_KEY) or []
        records = []
        for item in raw:
            try:
                records.append(PrintRecord.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed print history entry: {e}")
        return records

    async def record(self, entry: PrintRecord) -> None:
        raw = await self.storage.get(HISTORY_KEY) or []
        raw.append(entry.to_dict())
        await self.storage.set(HISTORY_KEY, raw)
        logger.debug(f"Recorded print {entry.filename} ({len(raw)} in history)")

    async def clear(self) -> None:
        await self.storage.remove(HISTORY_KEY)
