"""Formatting utilities for amounts and breakdown lines."""

from __future__ import annotations

from typing import Any, Mapping


def format_amount(value: Any) -> str:
    """Two decimals for a summary field; zero or missing shows as ``0``."""
    if not value:
        return "0"
    return f"{float(value):.2f}"


def describe_breakdown_line(label: str, entry: Mapping[str, float]) -> str:
    """One line of the category breakdown panel.

    Example:
        >>> describe_breakdown_line("Bills", {"total": 10, "count": 1})
        'Bills: $10.00 from 1 entries'
    """
    return f"{label}: ${float(entry.get('total', 0)):.2f} from {int(entry.get('count', 0))} entries"
