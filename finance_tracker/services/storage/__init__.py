"""
Storage Services Package

Provides the abstract snapshot storage interface and its implementations.
JSON files on local disk are the default backend; everything is designed
to be swappable.
"""

from finance_tracker.services.storage.interface import (
    LedgerStorageInterface,
    PersistenceCorruptError,
    PersistenceWriteError,
    StorageError,
)
from finance_tracker.services.storage.json_file import JsonFileStorage
from finance_tracker.services.storage.memory import InMemoryStorage
from finance_tracker.services.storage.snapshot import (
    decode_snapshot,
    encode_snapshot,
)

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "PersistenceCorruptError",
    "PersistenceWriteError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
    # Snapshot codec
    "decode_snapshot",
    "encode_snapshot",
]
