"""In-memory storage, for tests and as a fallback when disk is unavailable."""

from typing import Optional

from finance_tracker.services.storage.interface import LedgerStorageInterface


class InMemoryStorage(LedgerStorageInterface):
    """Dict-backed key-value store. Contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._records: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def read(self, key: str) -> Optional[str]:
        return self._records.get(key)

    def write(self, key: str, value: str) -> None:
        self._records[key] = value
        self.write_count += 1
