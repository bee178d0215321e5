"""
Filter and Sort Engine

DESIGN DECISION: Views are computed on demand by a pure function.
Nothing is cached; the caller re-runs apply() whenever the ledger or the
criteria change. The input sequence is never modified.

Predicates run in a fixed order (type, category, date from, date to,
amount min, amount max). Each is skipped when its criterion is "match
all". Sorting is stable, so ties keep the filtered order.
"""

from collections.abc import Callable, Iterable, Mapping
from datetime import date
from typing import Any, Optional, Union

from finance_tracker.models.transaction import (
    ALL,
    FilterCriteria,
    SortKey,
    Transaction,
)


Predicate = Callable[[Transaction], bool]
CriteriaInput = Union[FilterCriteria, Mapping[str, Any], None]


def _coerce_criteria(criteria: CriteriaInput) -> FilterCriteria:
    if criteria is None:
        return FilterCriteria()
    if isinstance(criteria, FilterCriteria):
        return criteria
    return FilterCriteria.model_validate(dict(criteria))


def _sort_date(transaction: Transaction) -> date:
    # Malformed dates order before every real date.
    return transaction.calendar_date or date.min


class FilterSortEngine:
    """
    Evaluates ledger views: (transactions, criteria, sort key) → list.

    GUARANTEES:
    - Every returned transaction satisfies all active predicates
    - Every transaction satisfying them is returned exactly once
    - Identical input yields identical order
    """

    def apply(
        self,
        transactions: Iterable[Transaction],
        criteria: CriteriaInput = None,
        sort_key: Union[SortKey, str] = SortKey.DATE_DESC,
    ) -> list[Transaction]:
        """
        Filter then sort a ledger view.

        Raises:
            pydantic.ValidationError: If a criteria mapping has an unknown
                key or a bound that is not a calendar date or a number
                (e.g. "2024-13-01").
            ValueError: If sort_key is not a SortKey value.
        """
        criteria = _coerce_criteria(criteria)
        sort_key = SortKey(sort_key)

        result = list(transactions)
        for predicate in self.predicates(criteria):
            result = [transaction for transaction in result if predicate(transaction)]
        return self._sort(result, sort_key)

    def predicates(self, criteria: FilterCriteria) -> list[Predicate]:
        """Active predicates for the criteria, in evaluation order."""
        predicates: list[Predicate] = []

        if criteria.type != ALL:
            wanted_type = criteria.type
            predicates.append(lambda t: t.type == wanted_type)

        if criteria.category != ALL:
            wanted_category = criteria.category
            predicates.append(lambda t: t.category == wanted_category)

        if criteria.date_from is not None:
            date_from = criteria.date_from
            predicates.append(
                lambda t: t.calendar_date is not None and t.calendar_date >= date_from
            )

        if criteria.date_to is not None:
            date_to = criteria.date_to
            predicates.append(
                lambda t: t.calendar_date is not None and t.calendar_date <= date_to
            )

        if criteria.amount_min is not None:
            amount_min = criteria.amount_min
            predicates.append(lambda t: t.amount >= amount_min)

        if criteria.amount_max is not None:
            amount_max = criteria.amount_max
            predicates.append(lambda t: t.amount <= amount_max)

        return predicates

    def _sort(self, transactions: list[Transaction], sort_key: SortKey) -> list[Transaction]:
        # sorted() is stable, and stays stable with reverse=True.
        if sort_key == SortKey.DATE_DESC:
            return sorted(transactions, key=_sort_date, reverse=True)
        if sort_key == SortKey.DATE_ASC:
            return sorted(transactions, key=_sort_date)
        if sort_key == SortKey.AMOUNT_DESC:
            return sorted(transactions, key=lambda t: t.amount, reverse=True)
        return sorted(transactions, key=lambda t: t.amount)


_DEFAULT_ENGINE = FilterSortEngine()


def apply_filters(
    transactions: Iterable[Transaction],
    criteria: CriteriaInput = None,
    sort_key: Union[SortKey, str] = SortKey.DATE_DESC,
) -> list[Transaction]:
    """Module-level shortcut for FilterSortEngine().apply."""
    return _DEFAULT_ENGINE.apply(transactions, criteria, sort_key)


def describe_criteria(criteria: CriteriaInput) -> str:
    """Human-readable summary of the active filters, for captions."""
    criteria = _coerce_criteria(criteria)
    if not criteria.is_active:
        return "All transactions"

    desc_parts = []
    if criteria.type != ALL:
        desc_parts.append(f"type: {criteria.type.value}")
    if criteria.category != ALL:
        desc_parts.append(f"category: {criteria.category}")
    if criteria.date_from or criteria.date_to:
        desc_parts.append(_date_range_str(criteria.date_from, criteria.date_to))
    if criteria.amount_min is not None or criteria.amount_max is not None:
        desc_parts.append(_amount_range_str(criteria))
    return " | ".join(desc_parts)


def _date_range_str(date_from: Optional[date], date_to: Optional[date]) -> str:
    """Format date range for description."""
    if date_from and date_to:
        if date_from == date_to:
            return f"on {date_from.strftime('%d %b %Y')}"
        elif date_from.month == date_to.month and date_from.year == date_to.year:
            return f"from {date_from.strftime('%d')} to {date_to.strftime('%d %b %Y')}"
        return f"from {date_from.strftime('%d %b %Y')} to {date_to.strftime('%d %b %Y')}"
    elif date_from:
        return f"from {date_from.strftime('%d %b %Y')}"
    elif date_to:
        return f"until {date_to.strftime('%d %b %Y')}"
    return ""


def _amount_range_str(criteria: FilterCriteria) -> str:
    if criteria.amount_min is not None and criteria.amount_max is not None:
        return f"amount {criteria.amount_min} to {criteria.amount_max}"
    if criteria.amount_min is not None:
        return f"amount at least {criteria.amount_min}"
    return f"amount at most {criteria.amount_max}"
