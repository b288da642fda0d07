"""Running totals, monthly summaries and category breakdowns.

All functions here are pure: they take the current state and return a
new one.  Persisting the result is the caller's job (see
:mod:`expense_tracker.storage`).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from . import config
from .dates import Clock, day_stamp_of, parse_month_key, system_clock
from .logging_setup import get_logger

logger = get_logger(__name__)

# Leading numeric prefix, the way a browser's parseFloat reads form text
_NUMBER_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(value: Any) -> float:
    """Read a form value as a float, treating anything unreadable as 0.

    ``"12.5"`` -> 12.5, ``" 7kg"`` -> 7.0, ``""``/``"abc"``/``None`` -> 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMBER_PREFIX_RE.match(str(value)) if value is not None else None
        if not match:
            return 0.0
        try:
            number = float(match.group(1))
        except ValueError:
            return 0.0
    # Totals stay finite so the JSON snapshot stays standard JSON.
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


@dataclass(frozen=True)
class CategoryTotals:
    """Lifetime totals per category."""

    income: float = 0.0
    bills: float = 0.0
    food: float = 0.0
    other: float = 0.0

    def plus(self, contribution: "CategoryTotals") -> "CategoryTotals":
        return CategoryTotals(
            income=self.income + contribution.income,
            bills=self.bills + contribution.bills,
            food=self.food + contribution.food,
            other=self.other + contribution.other,
        )

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in config.CATEGORIES}

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> "CategoryTotals":
        """Build totals from raw form or JSON values, leniently."""
        return cls(**{name: parse_amount(values.get(name)) for name in config.CATEGORIES})


@dataclass(frozen=True)
class MonthlySummary:
    """Snapshot of the cumulative totals at the time of a submission."""

    income: float
    bills: float
    food: float
    other: float
    date: str

    @property
    def total_expenses(self) -> float:
        return self.bills + self.food + self.other

    @property
    def savings(self) -> float:
        return self.income - self.total_expenses

    def to_dict(self) -> Dict[str, Any]:
        return {
            "income": self.income,
            "bills": self.bills,
            "food": self.food,
            "other": self.other,
            "totalExpenses": self.total_expenses,
            "savings": self.savings,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MonthlySummary":
        # Derived fields in the payload are ignored and recomputed.
        date = data.get("date")
        if not isinstance(date, str):
            raise ValueError(f"summary date must be a string, got {date!r}")
        totals = CategoryTotals.from_values(data)
        return cls(date=date, **totals.to_dict())

    @classmethod
    def from_totals(cls, totals: CategoryTotals, date: str) -> "MonthlySummary":
        return cls(date=date, **totals.to_dict())


SummaryStore = Dict[str, List[MonthlySummary]]


@dataclass
class LedgerState:
    """Everything the page needs: totals, recorded months and the cursor."""

    totals: CategoryTotals = field(default_factory=CategoryTotals)
    summaries_by_month: SummaryStore = field(default_factory=dict)
    selected_month: Optional[str] = None


def record_entry(
    current: CategoryTotals,
    values: Mapping[str, Any],
    clock: Clock = system_clock,
) -> Tuple[CategoryTotals, MonthlySummary]:
    """Fold a form submission into the totals and summarise the result.

    The summary carries the new cumulative totals, not the submitted
    amounts, and is stamped with today's date.
    """
    contribution = CategoryTotals.from_values(values)
    totals = current.plus(contribution)
    summary = MonthlySummary.from_totals(totals, day_stamp_of(clock()))
    return totals, summary


def upsert_month(store: Mapping[str, List[MonthlySummary]], month_key: str, summary: MonthlySummary) -> SummaryStore:
    """Return a copy of ``store`` where ``month_key`` holds only ``summary``."""
    updated: SummaryStore = {key: list(items) for key, items in store.items()}
    updated[month_key] = [summary]
    return updated


def list_months(store: Mapping[str, Any]) -> List[str]:
    """Month keys in calendar order; keys that fail to parse go last."""
    valid: List[Tuple[Any, str]] = []
    invalid: List[str] = []
    for key in store:
        parsed = parse_month_key(key)
        if parsed is None:
            logger.warning("invalid_month_key", month_key=key)
            invalid.append(key)
        else:
            valid.append((parsed, key))
    valid.sort(key=lambda item: item[0])
    return [key for _, key in valid] + invalid


def category_breakdown(summaries: Sequence[MonthlySummary]) -> Dict[str, Dict[str, float]]:
    """Sum each expense category and count the summaries where it is positive."""
    breakdown: Dict[str, Dict[str, float]] = {
        name: {"total": 0.0, "count": 0} for name in config.EXPENSE_CATEGORIES
    }
    for summary in summaries:
        for name in config.EXPENSE_CATEGORIES:
            amount = getattr(summary, name)
            breakdown[name]["total"] += amount
            if amount > 0:
                breakdown[name]["count"] += 1
    return breakdown


def summaries_for(state: LedgerState, month_key: Optional[str] = None) -> List[MonthlySummary]:
    """Summaries of ``month_key`` (default: the selected month), or ``[]``."""
    key = month_key if month_key is not None else state.selected_month
    if key is None:
        return []
    return list(state.summaries_by_month.get(key, []))


def select_month(state: LedgerState, month_key: Optional[str]) -> LedgerState:
    return replace(state, selected_month=month_key)


def clear_ledger() -> LedgerState:
    """Fresh state: no months, zero totals, nothing selected."""
    return LedgerState()
