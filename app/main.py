"""
Streamlit Frontend for Finance Tracker

The UI is a collaborator of the ledger engine: it collects input, calls
TransactionStore.add/remove, and renders whatever LedgerQueryFlow.run
returns. It holds no business logic of its own.

Run with:
    streamlit run app/main.py
"""

import logging

import streamlit as st

from finance_tracker.config import get_settings
from finance_tracker.models import ALL, SortKey, TransactionType
from finance_tracker.orchestrator import LedgerComponents, create_app_components
from finance_tracker.queries import format_amount, format_signed_amount
from finance_tracker.validation import ValidationError


# Page configuration
st.set_page_config(
    page_title="Finance Tracker",
    page_icon="💰",
    layout="wide",
)

SORT_LABELS = {
    SortKey.DATE_DESC: "Date (newest first)",
    SortKey.DATE_ASC: "Date (oldest first)",
    SortKey.AMOUNT_DESC: "Amount (highest first)",
    SortKey.AMOUNT_ASC: "Amount (lowest first)",
}

FILTER_DEFAULTS = {
    "filter_type": ALL,
    "filter_category": ALL,
    "filter_date_from": None,
    "filter_date_to": None,
    "filter_amount_min": "",
    "filter_amount_max": "",
    "sort_key": SortKey.DATE_DESC,
}


@st.cache_resource
def get_components() -> LedgerComponents:
    """Get or create application components (cached for the session)."""
    settings = get_settings()
    logging.basicConfig(level=settings.app.log_level, format="%(message)s")
    return create_app_components(settings)


def render_entry_form(components: LedgerComponents, type: TransactionType, symbol: str):
    """Add-expense / add-income form."""
    catalog = components.catalog
    title = "Add New Expense" if type == TransactionType.EXPENSE else "Add New Income"
    st.subheader(title)

    with st.form(f"add_{type.value}", clear_on_submit=True):
        amount = st.text_input(f"Amount ({symbol})", placeholder="e.g., 50.75")
        categories = catalog.categories_for(type)
        category = st.selectbox(
            "Category",
            categories,
            index=categories.index(catalog.default_category(type)),
        )
        entry_date = st.date_input("Date", value=None)
        note = st.text_input("Note (Optional)")
        submitted = st.form_submit_button(f"Add {type.value.title()}", type="primary")

    if submitted:
        try:
            components.store.add(
                amount=amount,
                category=category,
                date=entry_date or "",
                note=note,
                type=type,
            )
        except ValidationError as e:
            for issue in e.issues:
                if issue.severity == "error":
                    st.error(issue.message)
            return
        st.rerun()


def reset_filters():
    for key, value in FILTER_DEFAULTS.items():
        st.session_state[key] = value


def render_filters(components: LedgerComponents) -> dict:
    """Filter and sort controls. Returns raw criteria for the engine."""
    for key, value in FILTER_DEFAULTS.items():
        st.session_state.setdefault(key, value)

    st.subheader("Filter & Sort")
    col1, col2 = st.columns(2)
    with col1:
        type_filter = st.selectbox(
            "Type", [ALL, TransactionType.EXPENSE.value, TransactionType.INCOME.value],
            key="filter_type",
        )
        date_from = st.date_input("From", key="filter_date_from")
        amount_min = st.text_input("Min amount", key="filter_amount_min")
    with col2:
        options = components.catalog.filter_options(type_filter)
        if st.session_state.filter_category not in options:
            st.session_state.filter_category = ALL
        category = st.selectbox("Category", options, key="filter_category")
        date_to = st.date_input("To", key="filter_date_to")
        amount_max = st.text_input("Max amount", key="filter_amount_max")

    st.selectbox(
        "Sort by",
        list(SORT_LABELS),
        format_func=SORT_LABELS.get,
        key="sort_key",
    )

    st.button("Clear Filters", on_click=reset_filters)

    return {
        "type": type_filter,
        "category": category,
        "date_from": date_from,
        "date_to": date_to,
        "amount_min": amount_min,
        "amount_max": amount_max,
    }


def render_transactions(components: LedgerComponents, view, symbol: str):
    st.subheader("Transactions")
    st.caption(view.description)
    if not view.transactions:
        st.info("No transactions to display. Try adding some or adjusting your filters.")
        return

    for transaction in view.transactions:
        col1, col2 = st.columns([5, 1])
        with col1:
            colour = "red" if transaction.is_expense else "green"
            st.markdown(
                f":{colour}[**{format_signed_amount(transaction, symbol)}**]  \n"
                f"{transaction.category} ({transaction.date})"
                + (f"  \n*{transaction.note}*" if transaction.note else "")
            )
        with col2:
            if st.button("Delete", key=f"delete_{transaction.id}"):
                components.store.remove(transaction.id)
                st.rerun()


def _chart_rows(points) -> list[dict]:
    return [{"label": point.label, "value": float(point.value)} for point in points]


def render_summary(view, symbol: str):
    summary = view.summary
    st.subheader("Financial Summary")
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Income", format_amount(summary.total_income, symbol))
    col2.metric("Total Expenses", format_amount(summary.total_expenses, symbol))
    col3.metric("Net Balance", format_amount(summary.net_balance, symbol))

    st.bar_chart(_chart_rows(summary.income_vs_expense_series), x="label", y="value")
    if summary.per_category_totals:
        st.markdown("**Spending by category**")
        st.bar_chart(_chart_rows(summary.category_series), x="label", y="value")


def main():
    """Main application entry point."""
    components = get_components()
    symbol = get_settings().app.currency_symbol

    st.title("💰 Finance Tracker")
    if components.store.load_error:
        st.warning("Your saved transactions could not be read. Starting with an empty ledger.")
    if components.store.last_persist_error:
        st.warning("Changes are kept for this session, but the last save to disk failed.")

    left, right = st.columns(2)
    with left:
        render_entry_form(components, TransactionType.EXPENSE, symbol)
        render_entry_form(components, TransactionType.INCOME, symbol)
    with right:
        criteria = render_filters(components)

    try:
        view = components.query_flow.run(criteria, st.session_state.sort_key)
    except ValueError as e:
        st.error(f"Invalid filter: {e}")
        view = components.query_flow.run(None, st.session_state.sort_key)

    render_summary(view, symbol)
    render_transactions(components, view, symbol)


if __name__ == "__main__":
    main()
