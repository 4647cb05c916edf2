"""Storage adapters and print history."""

from .adapters import (
    DEFAULT_PREFIX,
    JsonFileStorage,
    MemoryStorage,
    StorageAdapter,
    StorageError,
)
from .history import HISTORY_KEY, PrintHistory, PrintRecord

__all__ = [
    "DEFAULT_PREFIX",
    "JsonFileStorage",
    "MemoryStorage",
    "StorageAdapter",
    "StorageError",
    "HISTORY_KEY",
    "PrintHistory",
    "PrintRecord",
]
