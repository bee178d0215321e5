"""Query package: ledger views and summaries."""

from finance_tracker.queries.filters import (
    FilterSortEngine,
    apply_filters,
    describe_criteria,
)
from finance_tracker.queries.formatting import format_amount, format_signed_amount
from finance_tracker.queries.summary import AggregationEngine, round_money, summarize

__all__ = [
    "AggregationEngine",
    "FilterSortEngine",
    "apply_filters",
    "describe_criteria",
    "format_amount",
    "format_signed_amount",
    "round_money",
    "summarize",
]
