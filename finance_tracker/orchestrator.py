"""
Main Orchestrator for Finance Tracker

This module ties the components together for a front end:
1. Settings → storage backend → TransactionStore
2. A query flow that turns (criteria, sort key) into everything a
   screen needs: the ordered view, its description and the summaries

DESIGN DECISION: The engine is pulled, never pushed. The front end calls
LedgerQueryFlow.run() after every mutation or criteria change; nothing
here tracks dependencies or caches derived state.
"""

from typing import NamedTuple, Optional, Union

import structlog

from finance_tracker.audit import AuditLogger
from finance_tracker.config import Settings, get_settings
from finance_tracker.ledger import TransactionStore
from finance_tracker.models.catalog import DEFAULT_CATALOG, CategoryCatalog
from finance_tracker.models.transaction import (
    FilterCriteria,
    SortKey,
    Summary,
    Transaction,
)
from finance_tracker.queries import (
    AggregationEngine,
    FilterSortEngine,
    describe_criteria,
)
from finance_tracker.queries.filters import CriteriaInput
from finance_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    LedgerStorageInterface,
)
from finance_tracker.validation import TransactionValidator


logger = structlog.get_logger(__name__)


class LedgerView(NamedTuple):
    """Everything a screen renders for one (criteria, sort key) pair."""
    transactions: list[Transaction]
    description: str
    summary: Summary
    filtered_summary: Summary


class LedgerQueryFlow:
    """
    Runs a ledger query end to end.

    The overall summary always covers the whole ledger; filtered_summary
    covers only the rows in the view.
    """

    def __init__(
        self,
        store: TransactionStore,
        filter_engine: Optional[FilterSortEngine] = None,
        aggregation_engine: Optional[AggregationEngine] = None,
    ):
        self._store = store
        self._filter_engine = filter_engine or FilterSortEngine()
        self._aggregation_engine = aggregation_engine or AggregationEngine()

    def run(
        self,
        criteria: CriteriaInput = None,
        sort_key: Union[SortKey, str] = SortKey.DATE_DESC,
    ) -> LedgerView:
        criteria = criteria if criteria is not None else FilterCriteria()
        ledger = self._store.list()
        view = self._filter_engine.apply(ledger, criteria, sort_key)
        return LedgerView(
            transactions=view,
            description=describe_criteria(criteria),
            summary=self._aggregation_engine.summarize(ledger),
            filtered_summary=self._aggregation_engine.summarize(view),
        )


class LedgerComponents(NamedTuple):
    store: TransactionStore
    query_flow: LedgerQueryFlow
    catalog: CategoryCatalog
    audit_logger: AuditLogger


def create_storage(settings: Optional[Settings] = None) -> LedgerStorageInterface:
    """Build the configured snapshot backend."""
    storage_settings = (settings or get_settings()).storage
    return JsonFileStorage(
        data_dir=storage_settings.data_dir,
        retry_attempts=storage_settings.write_retry_attempts,
    )


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[LedgerStorageInterface] = None,
    catalog: Optional[CategoryCatalog] = None,
) -> LedgerComponents:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use; defaults to get_settings().
        storage: Snapshot backend. If None, the configured JSON file
                 storage is used, falling back to in-memory storage
                 when the configuration is unusable.
        catalog: Category catalog; defaults to the built-in one.
    """
    settings = settings or get_settings()
    catalog = catalog or DEFAULT_CATALOG
    audit_logger = AuditLogger()

    if storage is None:
        try:
            storage = create_storage(settings)
        except ValueError as e:
            # pydantic-settings raises ValidationError (a ValueError) on bad env
            logger.warning("storage_not_configured", error=str(e))
            storage = InMemoryStorage()

    snapshot_key = _snapshot_key(settings)
    store = TransactionStore(
        storage=storage,
        storage_key=snapshot_key,
        validator=TransactionValidator(catalog),
        audit_logger=audit_logger,
    )
    query_flow = LedgerQueryFlow(
        store=store,
        aggregation_engine=AggregationEngine(catalog),
    )
    return LedgerComponents(
        store=store,
        query_flow=query_flow,
        catalog=catalog,
        audit_logger=audit_logger,
    )


def _snapshot_key(settings: Settings) -> str:
    try:
        return settings.storage.snapshot_key
    except ValueError:
        return "transactions"
