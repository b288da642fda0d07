"""Month and day identifiers for keys, labels and chart ticks.

Month keys look like ``07/2024`` and day stamps like ``07/15/2024``.
Parsing never raises: anything that does not match the expected
pattern yields ``None`` and renders as ``Invalid Date``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from . import config

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now()


def month_key_of(moment: datetime) -> str:
    """Return the ``MM/yyyy`` key of the month containing ``moment``."""
    return moment.replace(day=1).strftime(config.MONTH_KEY_FORMAT)


def day_stamp_of(moment: datetime) -> str:
    return moment.strftime(config.DAY_FORMAT)


def _strptime(value: object, fmt: str) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), fmt)
    except ValueError:
        return None


def parse_month_key(key: object) -> Optional[datetime]:
    """Parse ``MM/yyyy`` into the first day of that month, or ``None``.

    One-digit months (``7/2024``) are accepted as well.
    """
    return _strptime(key, config.MONTH_KEY_FORMAT)


def parse_day(value: object) -> Optional[datetime]:
    """Parse a ``MM/dd/yyyy`` day stamp, or ``None``."""
    return _strptime(value, config.DAY_FORMAT)


def display_month(key: object) -> str:
    """Render a month key as ``July 2024``."""
    parsed = parse_month_key(key)
    if parsed is None:
        return config.INVALID_DATE_LABEL
    return parsed.strftime(config.MONTH_LABEL_FORMAT)


def display_day(value: object) -> str:
    """Render a day stamp in the short date form used on chart ticks."""
    parsed = parse_day(value)
    if parsed is None:
        return config.INVALID_DATE_LABEL
    return parsed.strftime(config.SHORT_DATE_FORMAT)
