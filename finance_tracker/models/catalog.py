"""
Category Catalog

Static configuration: the categories offered for each transaction type.
Tuple order is display order.

DESIGN DECISION: The catalog is advisory. The store only requires a
non-empty category, so transactions imported with other category names
are kept as-is.
"""

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models.transaction import ALL, TransactionType


EXPENSE_CATEGORIES = (
    "Food",
    "Travel",
    "Bills",
    "Entertainment",
    "Shopping",
    "Health",
    "Education",
    "Others",
)

INCOME_CATEGORIES = (
    "Salary",
    "Freelance",
    "Investments",
    "Gift",
    "Refund",
    "Others",
)


class CategoryCatalog(BaseModel):
    """Ordered category names per transaction type."""
    model_config = ConfigDict(frozen=True)

    expense: tuple[str, ...] = Field(
        default=EXPENSE_CATEGORIES,
        min_length=1,
    )
    income: tuple[str, ...] = Field(
        default=INCOME_CATEGORIES,
        min_length=1,
    )

    def categories_for(self, type: TransactionType | str) -> tuple[str, ...]:
        """Categories offered for a transaction type."""
        if TransactionType(type) == TransactionType.INCOME:
            return self.income
        return self.expense

    def default_category(self, type: TransactionType | str) -> str:
        """The category an entry form resets to (first in display order)."""
        return self.categories_for(type)[0]

    def filter_options(self, type_filter: TransactionType | str = ALL) -> tuple[str, ...]:
        """
        Choices for a category filter given the current type filter.

        Income categories are offered only when filtering on income;
        "All" and expense both fall back to the expense list.
        """
        if type_filter != ALL and TransactionType(type_filter) == TransactionType.INCOME:
            return (ALL, *self.income)
        return (ALL, *self.expense)

    def contains(self, type: TransactionType | str, category: str) -> bool:
        return category in self.categories_for(type)


DEFAULT_CATALOG = CategoryCatalog()
