"""
JSON File Storage Implementation

DESIGN DECISION: Local JSON files are the default backend because:
1. The tracker is a single-user, single-session tool
2. No database setup required
3. Users can open and back up the snapshot with any editor

TRADEOFFS:
- Every mutation rewrites the whole file (fine for a personal ledger)
- No concurrent writers (there is exactly one session per store)

Writes go to a temporary file in the same directory which then replaces
the snapshot, so a crash mid-write leaves the previous snapshot intact.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance_tracker.services.storage.interface import (
    LedgerStorageInterface,
    PersistenceWriteError,
    StorageError,
)


class JsonFileStorage(LedgerStorageInterface):
    """
    Stores each key as ``<data_dir>/<key>.json``.

    Transient OS errors on write are retried with exponential backoff
    before surfacing as PersistenceWriteError.
    """

    def __init__(
        self,
        data_dir: Path | str,
        retry_attempts: int = 3,
        retry_wait_max: float = 2.0,
    ):
        self._data_dir = Path(data_dir)
        self._retry_attempts = retry_attempts
        self._retry_wait_max = retry_wait_max

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """Location of the file backing a key."""
        return self._data_dir / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        retrying = Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=0.1, max=self._retry_wait_max),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            retrying(self._write_atomic, self.path_for(key), value)
        except OSError as e:
            raise PersistenceWriteError(
                f"Could not write snapshot '{key}' after "
                f"{self._retry_attempts} attempt(s): {e}"
            ) from e

    def _write_atomic(self, path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.stem}-", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            # Leave no stray temp files behind.
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
