"""Streamlit page for the Income and Expense Tracker.

The page is a thin layer over :mod:`expense_tracker.ledger`.  Handlers
take the ledger state explicitly, return the new state and persist it,
so they can be exercised without a running Streamlit server.  The
session keeps the state under :data:`STATE_KEY`.

To run the tracker from the command line::

    streamlit run expense_tracker/app.py
"""

from __future__ import annotations

import os
import sys
from typing import Any, Mapping, MutableMapping, Optional

import streamlit as st

# Support ``streamlit run expense_tracker/app.py``, where the file is
# executed as a script rather than as part of the package.
if __package__:
    from . import config
    from .dates import Clock, display_day, display_month, month_key_of, system_clock
    from .formatting import describe_breakdown_line, format_amount
    from .ledger import (
        LedgerState,
        category_breakdown,
        list_months,
        record_entry,
        select_month,
        summaries_for,
        upsert_month,
    )
    from .logging_setup import configure_logging, get_logger
    from .storage import JsonFileStore, clear_state, load_state, save_state
    from .visualization import create_breakdown_bar_chart, create_summary_line_chart
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from expense_tracker import config  # type: ignore
    from expense_tracker.dates import Clock, display_day, display_month, month_key_of, system_clock  # type: ignore
    from expense_tracker.formatting import describe_breakdown_line, format_amount  # type: ignore
    from expense_tracker.ledger import (  # type: ignore
        LedgerState,
        category_breakdown,
        list_months,
        record_entry,
        select_month,
        summaries_for,
        upsert_month,
    )
    from expense_tracker.logging_setup import configure_logging, get_logger  # type: ignore
    from expense_tracker.storage import JsonFileStore, clear_state, load_state, save_state  # type: ignore
    from expense_tracker.visualization import create_breakdown_bar_chart, create_summary_line_chart  # type: ignore

logger = get_logger(__name__)

STATE_KEY = "ledger_state"
FORM_FIELDS = (
    ("income", "Income"),
    ("bills", "Bills"),
    ("food", "Food"),
    ("other", "Other"),
)
BREAKDOWN_LABELS = (("bills", "Bills"), ("food", "Food"), ("other", "Other"))


def handle_submit(
    state: LedgerState,
    values: Mapping[str, Any],
    store,
    clock: Clock = system_clock,
) -> LedgerState:
    """Record a form submission for the current month and persist it."""
    moment = clock()
    totals, summary = record_entry(state.totals, values, clock=lambda: moment)
    month_key = month_key_of(moment)
    new_state = LedgerState(
        totals=totals,
        summaries_by_month=upsert_month(state.summaries_by_month, month_key, summary),
        selected_month=state.selected_month,
    )
    save_state(store, new_state)
    logger.info(
        "entry_recorded",
        month_key=month_key,
        date=summary.date,
        total_expenses=summary.total_expenses,
        savings=summary.savings,
    )
    return new_state


def handle_clear(store) -> LedgerState:
    """Erase persisted data and start over."""
    state = clear_state(store)
    logger.info("ledger_cleared")
    return state


def handle_select(state: LedgerState, month_key: Optional[str]) -> LedgerState:
    return select_month(state, month_key)


def get_state(session: MutableMapping[str, Any], store) -> LedgerState:
    """Load the ledger once per session and keep it in ``session``."""
    if STATE_KEY not in session:
        session[STATE_KEY] = load_state(store)
    return session[STATE_KEY]


def _rerun() -> None:
    if hasattr(st, 'rerun'):
        st.rerun()
    elif hasattr(st, 'experimental_rerun'):  # pragma: no cover - older Streamlit
        st.experimental_rerun()


def render_entry_form(state: LedgerState, store) -> LedgerState:
    """Four amount fields plus the save and clear actions."""
    with st.form("entry_form", clear_on_submit=True):
        values = {
            name: st.text_input(label, key=f"form_{name}", placeholder="0.00")
            for name, label in FORM_FIELDS
        }
        submitted = st.form_submit_button("Save Summary", type="primary")
    clear_clicked = st.button("Clear Data", type="secondary")

    try:
        if submitted:
            state = handle_submit(state, values, store)
        if clear_clicked:
            state = handle_clear(store)
    except OSError as exc:
        logger.error("storage_write_failed", error=str(exc))
        st.error(f"Could not save your data: {exc}")
    return state


def render_summaries(state: LedgerState) -> None:
    st.header("Monthly Summaries")
    summaries = summaries_for(state)
    if not summaries:
        return
    for summary in summaries:
        with st.container(border=True):
            st.write(f"Date: {display_day(summary.date)}")
            st.write(f"Income: {format_amount(summary.income)}")
            st.write(f"Total Expenses: {format_amount(summary.total_expenses)}")
            st.write(f"Savings: {format_amount(summary.savings)}")

    breakdown = category_breakdown(summaries)
    st.subheader("Category Breakdown")
    for name, label in BREAKDOWN_LABELS:
        st.text(describe_breakdown_line(label, breakdown[name]))
    st.plotly_chart(create_breakdown_bar_chart(breakdown), use_container_width=True)


def render_chart(state: LedgerState) -> None:
    label = display_month(state.selected_month) if state.selected_month else ""
    st.header(f"Summary Chart for {label}")
    st.plotly_chart(
        create_summary_line_chart(summaries_for(state), title=label or None),
        use_container_width=True,
    )


def render_month_list(state: LedgerState) -> LedgerState:
    """One button per recorded month; clicking selects it."""
    st.header("Recorded Months")
    for month_key in list_months(state.summaries_by_month):
        if st.button(display_month(month_key), key=f"month_{month_key}"):
            state = handle_select(state, month_key)
    return state


def main() -> None:
    """Entry point for the Streamlit app."""
    configure_logging()
    st.set_page_config(page_title="Income and Expense Tracker", page_icon="💰", layout="centered")
    st.title("Income and Expense Tracker")

    config.ensure_data_directories()
    store = JsonFileStore(config.STORAGE_PATH)
    state = get_state(st.session_state, store)

    _commit(render_entry_form(state, store))
    state = st.session_state[STATE_KEY]

    logger.debug(
        "render_state",
        summaries_by_month={k: [s.to_dict() for s in v] for k, v in state.summaries_by_month.items()},
        selected_month=state.selected_month,
    )
    render_summaries(state)
    render_chart(state)
    _commit(render_month_list(state))


def _commit(state: LedgerState) -> None:
    """Store a changed state in the session and rerun so the page reflects it."""
    if state is not st.session_state[STATE_KEY]:
        st.session_state[STATE_KEY] = state
        _rerun()


if __name__ == "__main__":
    main()
