"""Local key/value persistence for the ledger.

The tracker keeps two string values, ``summariesByMonth`` and ``fields``,
each a JSON snapshot.  :class:`JsonFileStore` stores every key in a single
JSON file so both snapshots are replaced in one write.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from . import config
from .ledger import CategoryTotals, LedgerState, MonthlySummary, SummaryStore, clear_ledger
from .logging_setup import get_logger

logger = get_logger(__name__)


class MemoryStore:
    """Dict-backed store, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_items(self, items: Mapping[str, str]) -> None:
        self._items.update(items)

    def remove_items(self, *keys: str) -> None:
        for key in keys:
            self._items.pop(key, None)


class JsonFileStore:
    """All keys live in one JSON object on disk.

    A missing file reads as empty.  A file that cannot be read or decoded
    also reads as empty, and the next write replaces it.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else config.STORAGE_PATH

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            logger.warning("storage_read_failed", path=str(self.path), error=str(exc))
            return {}
        if not isinstance(data, dict):
            logger.warning("storage_read_failed", path=str(self.path), error="root is not an object")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: Mapping[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=self.path.name, suffix='.tmp', dir=self.path.parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as handle:
                json.dump(dict(items), handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_items(self, items: Mapping[str, str]) -> None:
        current = self._read_all()
        current.update(items)
        self._write_all(current)

    def remove_items(self, *keys: str) -> None:
        current = self._read_all()
        if not any(key in current for key in keys):
            return
        for key in keys:
            current.pop(key, None)
        self._write_all(current)


def _decode(raw: Optional[str], key: str) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("state_snapshot_invalid", key=key, error=str(exc))
        return None


def _load_summaries(data: Any) -> SummaryStore:
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("state_snapshot_invalid", key=config.SUMMARIES_KEY, error="expected an object")
        return {}
    store: SummaryStore = {}
    for month_key, records in data.items():
        if not isinstance(records, list):
            logger.warning("summary_record_dropped", month_key=month_key, reason="expected a list")
            continue
        summaries = []
        for record in records:
            if not isinstance(record, dict):
                logger.warning("summary_record_dropped", month_key=month_key, reason="expected an object")
                continue
            try:
                summaries.append(MonthlySummary.from_dict(record))
            except ValueError as exc:
                logger.warning("summary_record_dropped", month_key=month_key, reason=str(exc))
        store[str(month_key)] = summaries
    return store


def _load_totals(data: Any) -> CategoryTotals:
    if data is None:
        return CategoryTotals()
    if not isinstance(data, dict):
        logger.warning("state_snapshot_invalid", key=config.FIELDS_KEY, error="expected an object")
        return CategoryTotals()
    return CategoryTotals.from_values(data)


def load_state(store) -> LedgerState:
    """Read totals and summaries, falling back to defaults for anything unusable."""
    summaries = _load_summaries(_decode(store.get_item(config.SUMMARIES_KEY), config.SUMMARIES_KEY))
    totals = _load_totals(_decode(store.get_item(config.FIELDS_KEY), config.FIELDS_KEY))
    return LedgerState(totals=totals, summaries_by_month=summaries)


def save_state(store, state: LedgerState) -> None:
    """Write both snapshots together."""
    summaries = {
        month_key: [summary.to_dict() for summary in items]
        for month_key, items in state.summaries_by_month.items()
    }
    store.set_items({
        config.SUMMARIES_KEY: json.dumps(summaries),
        config.FIELDS_KEY: json.dumps(state.totals.to_dict()),
    })


def clear_state(store) -> LedgerState:
    """Erase both snapshots and hand back a fresh state."""
    store.remove_items(config.SUMMARIES_KEY, config.FIELDS_KEY)
    return clear_ledger()
