"""Unit tests for expense_tracker.ledger."""

from __future__ import annotations

from datetime import datetime

import pytest
from structlog.testing import capture_logs

from expense_tracker import ledger
from expense_tracker.ledger import CategoryTotals, LedgerState, MonthlySummary


def fixed_clock():
    return datetime(2024, 7, 15, 9, 30)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.5", 12.5),
        ("  7", 7.0),
        ("3.25kg", 3.25),
        (".5", 0.5),
        ("-4", -4.0),
        ("1e3", 1000.0),
        ("", 0.0),
        ("abc", 0.0),
        (None, 0.0),
        ("nan", 0.0),
        (8, 8.0),
        ("Infinity", 0.0),
        ("1e999", 0.0),
    ],
)
def test_parse_amount(raw, expected) -> None:
    assert ledger.parse_amount(raw) == expected


def test_record_entry_adds_contributions_to_totals() -> None:
    current = CategoryTotals(income=1000, bills=200, food=50, other=25)
    totals, _ = ledger.record_entry(
        current, {"income": "500", "bills": "100", "food": "30", "other": "5"}, clock=fixed_clock
    )
    assert totals == CategoryTotals(income=1500, bills=300, food=80, other=30)


def test_record_entry_summary_uses_cumulative_totals() -> None:
    current = CategoryTotals(income=1000, bills=200, food=50, other=25)
    _, summary = ledger.record_entry(
        current, {"income": "500", "bills": "100", "food": "30", "other": "5"}, clock=fixed_clock
    )
    assert summary.income == 1500
    assert summary.total_expenses == 410
    assert summary.savings == 1090
    assert summary.date == "07/15/2024"


def test_record_entry_malformed_input_counts_as_zero() -> None:
    totals, summary = ledger.record_entry(
        CategoryTotals(), {"income": "abc", "bills": "10", "food": "", "other": "5.5"}, clock=fixed_clock
    )
    assert totals.to_dict() == {"income": 0, "bills": 10, "food": 0, "other": 5.5}
    assert summary.to_dict()["totalExpenses"] == 15.5
    assert summary.to_dict()["savings"] == -15.5


def test_record_entry_accepts_negative_and_missing_fields() -> None:
    totals, _ = ledger.record_entry(CategoryTotals(bills=50), {"bills": "-20"}, clock=fixed_clock)
    assert totals == CategoryTotals(bills=30)


def test_summary_derived_fields_ignore_stored_values() -> None:
    summary = MonthlySummary.from_dict(
        {"income": 100, "bills": 10, "food": 20, "other": 30, "totalExpenses": 999, "savings": 999, "date": "01/02/2024"}
    )
    assert summary.total_expenses == 60
    assert summary.savings == 40


def test_summary_from_dict_requires_date() -> None:
    with pytest.raises(ValueError):
        MonthlySummary.from_dict({"income": 1})


def test_upsert_month_overwrites_previous_entry() -> None:
    first = MonthlySummary(100, 10, 0, 0, "07/01/2024")
    second = MonthlySummary(200, 20, 0, 0, "07/20/2024")
    store = ledger.upsert_month({}, "07/2024", first)
    store = ledger.upsert_month(store, "07/2024", second)
    assert store == {"07/2024": [second]}


def test_upsert_month_does_not_mutate_input() -> None:
    original = {"06/2024": [MonthlySummary(1, 0, 0, 0, "06/01/2024")]}
    updated = ledger.upsert_month(original, "07/2024", MonthlySummary(2, 0, 0, 0, "07/01/2024"))
    assert list(original) == ["06/2024"]
    assert sorted(updated) == ["06/2024", "07/2024"]


def test_list_months_is_chronological() -> None:
    store = {"03/2024": [], "01/2024": [], "02/2024": []}
    assert ledger.list_months(store) == ["01/2024", "02/2024", "03/2024"]


def test_list_months_orders_across_years() -> None:
    store = {"01/2025": [], "12/2024": [], "06/2023": []}
    assert ledger.list_months(store) == ["06/2023", "12/2024", "01/2025"]


def test_list_months_puts_invalid_keys_last_and_logs() -> None:
    store = {"bogus": [], "02/2024": [], "13/2024": [], "01/2024": []}
    with capture_logs() as logs:
        months = ledger.list_months(store)
    assert months == ["01/2024", "02/2024", "bogus", "13/2024"]
    flagged = [entry["month_key"] for entry in logs if entry["event"] == "invalid_month_key"]
    assert flagged == ["bogus", "13/2024"]


def test_category_breakdown_empty() -> None:
    assert ledger.category_breakdown([]) == {
        "bills": {"total": 0, "count": 0},
        "food": {"total": 0, "count": 0},
        "other": {"total": 0, "count": 0},
    }


def test_category_breakdown_counts_positive_values_only() -> None:
    summaries = [
        MonthlySummary(100, 40, 0, -5, "07/01/2024"),
        MonthlySummary(100, 60, 15, 0, "07/02/2024"),
    ]
    breakdown = ledger.category_breakdown(summaries)
    assert breakdown["bills"] == {"total": 100, "count": 2}
    assert breakdown["food"] == {"total": 15, "count": 1}
    assert breakdown["other"] == {"total": -5, "count": 0}


def test_summaries_for_selected_month() -> None:
    summary = MonthlySummary(1, 0, 0, 0, "07/01/2024")
    state = LedgerState(summaries_by_month={"07/2024": [summary]})
    assert ledger.summaries_for(state) == []
    assert ledger.summaries_for(ledger.select_month(state, "07/2024")) == [summary]
    assert ledger.summaries_for(state, "08/2024") == []


def test_clear_ledger_resets_everything() -> None:
    state = ledger.clear_ledger()
    assert ledger.list_months(state.summaries_by_month) == []
    assert state.totals == CategoryTotals()
    assert state.selected_month is None
    assert ledger.clear_ledger() == state
