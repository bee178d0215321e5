"""
Abstract Storage Interface

DESIGN DECISION: The ledger is persisted through a tiny key-value
interface. This allows us to:
1. Keep the snapshot on local disk for the desktop app
2. Use in-memory storage for testing
3. Swap in another durable store later without touching the store logic

The interface is intentionally simple. A value is always one complete
ledger snapshot; there are no partial or incremental writes.
"""

from abc import ABC, abstractmethod
from typing import Optional


class LedgerStorageInterface(ABC):
    """
    Abstract interface for snapshot storage.

    Any storage implementation (JSON files, a database table, etc.)
    must implement these methods.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Record name

        Returns:
            The stored text, or None if nothing was ever written

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """
        Replace the value stored under a key.

        The write must be atomic: readers see either the old value
        or the new one, never a mix.

        Args:
            key: Record name
            value: Complete snapshot text

        Raises:
            PersistenceWriteError: If the value could not be stored
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class PersistenceCorruptError(StorageError):
    """Stored snapshot exists but cannot be parsed into a ledger."""
    pass


class PersistenceWriteError(StorageError):
    """Snapshot could not be written."""
    pass
