"""
Transaction Store

Owns the canonical, ordered list of transactions for one session.

Lifecycle:
1. Construction → load the snapshot (a corrupt one means an empty ledger)
2. add / remove → mutate the in-memory list
3. After every mutation → write the WHOLE list as one snapshot

CRITICAL: The in-memory list is authoritative. A failed write is logged
and remembered, but never rolls back or loses in-session data.
"""

from collections.abc import Callable
from typing import Any, Optional
from uuid import uuid4

from finance_tracker.audit import AuditLogger
from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.services.storage import (
    LedgerStorageInterface,
    PersistenceCorruptError,
    StorageError,
    decode_snapshot,
    encode_snapshot,
)
from finance_tracker.validation import (
    TransactionValidator,
    ValidationError,
    parse_amount,
)


DEFAULT_SNAPSHOT_KEY = "transactions"
MAX_ID_ATTEMPTS = 100


def _uuid_id() -> str:
    return str(uuid4())


class TransactionStore:
    """
    In-memory ledger synchronized with a key-value snapshot store.

    Insertion order is preserved and is the tie-break baseline for
    every sorted view.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        storage_key: str = DEFAULT_SNAPSHOT_KEY,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._storage = storage
        self._storage_key = storage_key
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._id_factory = id_factory or _uuid_id

        self.load_error: Optional[PersistenceCorruptError] = None
        self.last_persist_error: Optional[StorageError] = None

        try:
            self._transactions = self.load()
        except PersistenceCorruptError as e:
            # Leave the snapshot where it is; the next save overwrites it.
            self.load_error = e
            self._transactions = []
            self._audit_logger.log_ledger_load_failed(self._storage_key, str(e))
        else:
            self._audit_logger.log_ledger_loaded(
                self._storage_key, len(self._transactions)
            )
        # Every id this session has seen, so a removed id is never reissued.
        self._issued_ids = {transaction.id for transaction in self._transactions}

    @property
    def storage_key(self) -> str:
        return self._storage_key

    def load(self) -> list[Transaction]:
        """
        Read the persisted ledger.

        Returns:
            Stored transactions in their saved order; empty if nothing
            was ever saved.

        Raises:
            PersistenceCorruptError: If the snapshot can't be read or parsed.
        """
        try:
            raw = self._storage.read(self._storage_key)
        except PersistenceCorruptError:
            raise
        except StorageError as e:
            raise PersistenceCorruptError(
                f"Snapshot '{self._storage_key}' could not be read: {e}"
            ) from e
        if raw is None:
            return []
        return decode_snapshot(raw)

    def add(
        self,
        amount: Any,
        category: str,
        date: Any,
        note: Optional[str] = "",
        type: TransactionType | str = TransactionType.EXPENSE,
    ) -> Transaction:
        """
        Record a new transaction and persist the ledger.

        Raises:
            ValidationError: If the amount isn't a positive number, the date
                or category is empty, or the type is unknown. The ledger is
                left unchanged.
        """
        result = self._validator.validate(
            amount=amount, category=category, date=date, note=note, type=type
        )
        if not result.is_valid:
            self._audit_logger.log_validation_failed(
                [issue.model_dump() for issue in result.issues]
            )
            raise ValidationError(result.issues)

        transaction = Transaction(
            id=self._next_id(),
            amount=parse_amount(amount),
            category=category,
            date=date,
            note=note or "",
            type=type,
        )
        self._transactions.append(transaction)
        self._audit_logger.log_transaction_added(
            transaction_id=transaction.id,
            amount=str(transaction.amount),
            category=transaction.category,
            type=transaction.type.value,
        )
        self._persist()
        return transaction

    def remove(self, transaction_id: Any) -> bool:
        """
        Delete a transaction by id.

        Returns:
            True if a transaction was removed. An unknown id is a no-op
            and returns False without touching storage.
        """
        target = str(transaction_id)
        for index, transaction in enumerate(self._transactions):
            if transaction.id == target:
                del self._transactions[index]
                self._audit_logger.log_transaction_removed(target)
                self._persist()
                return True
        return False

    def list(self) -> list[Transaction]:
        """Current transactions in insertion order (a copy)."""
        return list(self._transactions)

    def get(self, transaction_id: Any) -> Optional[Transaction]:
        target = str(transaction_id)
        for transaction in self._transactions:
            if transaction.id == target:
                return transaction
        return None

    def __len__(self) -> int:
        return len(self._transactions)

    def _next_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = str(self._id_factory())
            if candidate and candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate
        message = f"id_factory produced no unused id in {MAX_ID_ATTEMPTS} attempts"
        self._audit_logger.log_error(
            error_type="id_exhausted",
            error_message=message,
            details={"issued": len(self._issued_ids)},
        )
        raise RuntimeError(message)

    def _persist(self) -> bool:
        """Write the full ledger. Failures are logged, never raised."""
        count = len(self._transactions)
        try:
            self._storage.write(self._storage_key, encode_snapshot(self._transactions))
        except StorageError as e:
            self.last_persist_error = e
            self._audit_logger.log_save_failed(self._storage_key, count, str(e))
            return False
        self.last_persist_error = None
        self._audit_logger.log_snapshot_saved(self._storage_key, count)
        return True
