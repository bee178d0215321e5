"""Tests for snapshot storage backends and the snapshot codec."""

import json
import os

import pytest
from decimal import Decimal

from finance_tracker.models import TransactionType
from finance_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    PersistenceCorruptError,
    PersistenceWriteError,
    StorageError,
    decode_snapshot,
    encode_snapshot,
)


class TestSnapshotCodec:
    """Tests for encode_snapshot / decode_snapshot."""

    def test_encode_produces_flat_records(self, make_transaction):
        """Test the on-disk layout of a snapshot."""
        snapshot = encode_snapshot([
            make_transaction(amount="50.75", note="Dinner", id="a"),
        ])
        assert json.loads(snapshot) == [{
            "id": "a",
            "amount": 50.75,
            "category": "Food",
            "date": "2024-01-01",
            "note": "Dinner",
            "type": "expense",
        }]

    def test_decode_preserves_order(self, make_transaction):
        """Test that decoding keeps the saved order and values."""
        ledger = [
            make_transaction(amount="3", date="2024-03-01"),
            make_transaction(amount="1", date="2024-01-01", type=TransactionType.INCOME, category="Salary"),
            make_transaction(amount="2.5", date="2024-02-01"),
        ]
        assert decode_snapshot(encode_snapshot(ledger)) == ledger

    def test_decode_empty_list(self):
        """Test an empty snapshot is an empty ledger."""
        assert decode_snapshot("[]") == []

    def test_decode_snapshot_from_original_app(self):
        """Test snapshots written by the browser version still load."""
        raw = json.dumps([
            {"id": 1704441600000, "amount": 50.75, "category": "Food",
             "date": "2024-01-05", "note": "", "type": "expense"},
            {"id": 1704441600001, "amount": 1000, "category": "Salary",
             "date": "2024-01-01", "note": "", "type": "income"},
        ])
        ledger = decode_snapshot(raw)
        assert [t.id for t in ledger] == ["1704441600000", "1704441600001"]
        assert ledger[1].amount == Decimal("1000")

    @pytest.mark.parametrize("raw", [
        "not json at all",
        "{\"id\": 1}",
        "[{\"id\": \"a\"}]",
        "[{\"id\": \"a\", \"amount\": -5, \"category\": \"Food\", "
        "\"date\": \"2024-01-01\", \"note\": \"\", \"type\": \"expense\"}]",
        "[{\"id\": \"a\", \"amount\": 5, \"category\": \"Food\", "
        "\"date\": \"2024-01-01\", \"note\": \"\", \"type\": \"transfer\"}]",
    ])
    def test_decode_rejects_bad_snapshots(self, raw):
        """Test malformed snapshots raise PersistenceCorruptError."""
        with pytest.raises(PersistenceCorruptError):
            decode_snapshot(raw)


class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    def test_read_missing_key(self):
        """Test absent keys read as None."""
        assert InMemoryStorage().read("transactions") is None

    def test_write_then_read(self):
        """Test values are replaced wholesale."""
        storage = InMemoryStorage()
        storage.write("transactions", "[1]")
        storage.write("transactions", "[2]")
        assert storage.read("transactions") == "[2]"
        assert storage.write_count == 2


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_read_missing_file(self, tmp_path):
        """Test a missing snapshot file reads as None."""
        storage = JsonFileStorage(tmp_path / "data")
        assert storage.read("transactions") is None

    def test_write_creates_directory_and_file(self, tmp_path):
        """Test the first write creates the data directory."""
        storage = JsonFileStorage(tmp_path / "nested" / "data")
        storage.write("transactions", "[]")
        assert storage.path_for("transactions").read_text(encoding="utf-8") == "[]"
        assert storage.read("transactions") == "[]"

    def test_write_leaves_no_temp_files(self, tmp_path):
        """Test the atomic write cleans up after itself."""
        storage = JsonFileStorage(tmp_path)
        storage.write("transactions", "[1]")
        storage.write("transactions", "[1, 2]")
        assert sorted(os.listdir(tmp_path)) == ["transactions.json"]

    def test_write_failure_raises_persistence_write_error(self, tmp_path, monkeypatch):
        """Test OS errors are retried and then surfaced."""
        storage = JsonFileStorage(tmp_path, retry_attempts=2, retry_wait_max=0)
        calls = []

        def failing_replace(src, dst):
            calls.append(dst)
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", failing_replace)
        with pytest.raises(PersistenceWriteError, match="disk full"):
            storage.write("transactions", "[]")
        assert len(calls) == 2
        assert [name for name in os.listdir(tmp_path) if name.endswith(".tmp")] == []

    def test_write_recovers_after_transient_failure(self, tmp_path, monkeypatch):
        """Test a single transient error is absorbed by the retry."""
        storage = JsonFileStorage(tmp_path, retry_attempts=3, retry_wait_max=0)
        real_replace = os.replace
        attempts = {"count": 0}

        def flaky_replace(src, dst):
            attempts["count"] += 1
            if attempts["count"] == 1:
                raise OSError("busy")
            real_replace(src, dst)

        monkeypatch.setattr(os, "replace", flaky_replace)
        storage.write("transactions", "[3]")
        assert storage.read("transactions") == "[3]"
        assert attempts["count"] == 2

    def test_unreadable_snapshot_raises_storage_error(self, tmp_path):
        """Test read failures other than 'missing' are StorageErrors."""
        storage = JsonFileStorage(tmp_path)
        storage.path_for("transactions").mkdir()
        with pytest.raises(StorageError):
            storage.read("transactions")
