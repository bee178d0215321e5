"""Services package."""

from finance_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    LedgerStorageInterface,
    PersistenceCorruptError,
    PersistenceWriteError,
    StorageError,
    decode_snapshot,
    encode_snapshot,
)

__all__ = [
    # Storage services
    "InMemoryStorage",
    "JsonFileStorage",
    "LedgerStorageInterface",
    "PersistenceCorruptError",
    "PersistenceWriteError",
    "StorageError",
    "decode_snapshot",
    "encode_snapshot",
]
