"""
Storage adapters.

Keyed JSON storage with an async interface. The printing pipeline only
uses it to record print history; any backend that implements
StorageAdapter can be passed in.

Malformed files fall back to an empty store with a warning rather than
failing the print job; write failures raise StorageError.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "cashu-notes:"


class StorageError(Exception):
    """A storage backend failed to read or write."""
    pass


class StorageAdapter(Protocol):
    async def get(self, key: str) -> Optional[Any]: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def remove(self, key: str) -> None: ...

    async def clear(self) -> None: ...

    async def keys(self) -> List[str]: ...


class MemoryStorage:
    """In-process storage; values are deep-copied in and out."""

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}

    async def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def clear(self) -> None:
        self._data.clear()

    async def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStorage:
    """
    Storage backed by a single JSON object on disk.

    Keys are stored with ``prefix`` so several stores can share a file;
    clear() and keys() only see this store's keys.

    Args:
        path: JSON file location (created on first write)
        prefix: Key namespace
    """

    def __init__(self, path: Path, prefix: str = DEFAULT_PREFIX) -> None:
        self.path = path
        self.prefix = prefix

    async def get(self, key: str) -> Optional[Any]:
        data = await asyncio.to_thread(self._read)
        return data.get(self._key(key))

    async def set(self, key: str, value: Any) -> None:
        data = await asyncio.to_thread(self._read)
        data[self._key(key)] = value
        await asyncio.to_thread(self._write, data)

    async def remove(self, key: str) -> None:
        data = await asyncio.to_thread(self._read)
        if data.pop(self._key(key), None) is not None:
            await asyncio.to_thread(self._write, data)

    async def clear(self) -> None:
        data = await asyncio.to_thread(self._read)
        kept = {k: v for k, v in data.items() if not k.startswith(self.prefix)}
        await asyncio.to_thread(self._write, kept)

    async def keys(self) -> List[str]:
        data = await asyncio.to_thread(self._read)
        return [k[len(self.prefix):] for k in data if k.startswith(self.prefix)]

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"Storage file {self.path} is corrupted, starting empty: {e}")
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} is not a JSON object, starting empty")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e
