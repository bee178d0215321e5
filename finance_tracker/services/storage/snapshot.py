"""
Ledger snapshot codec.

A snapshot is a JSON array of flat transaction records:

    [{"id": "...", "amount": 50.75, "category": "Food",
      "date": "2024-01-05", "note": "", "type": "expense"}, ...]

There is no schema version field. Decoding is all-or-nothing: one bad
record makes the whole snapshot corrupt.
"""

from pydantic import TypeAdapter, ValidationError

from finance_tracker.models.transaction import Transaction
from finance_tracker.services.storage.interface import PersistenceCorruptError


_LEDGER_ADAPTER = TypeAdapter(list[Transaction])


def encode_snapshot(transactions: list[Transaction]) -> str:
    """Serialize the full ledger, preserving order."""
    return _LEDGER_ADAPTER.dump_json(list(transactions)).decode("utf-8")


def decode_snapshot(raw: str | bytes) -> list[Transaction]:
    """
    Parse a snapshot back into transactions.

    Raises:
        PersistenceCorruptError: If the text is not JSON or not a list
            of valid transaction records.
    """
    try:
        return _LEDGER_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise PersistenceCorruptError(
            f"Snapshot is not a valid transaction list: {e.error_count()} error(s), "
            f"first: {e.errors()[0]['msg']}"
        ) from e
