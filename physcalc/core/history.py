"""Calculation history log for PhysCalc.

A passive, in-memory sink for ``(expression, result)`` pairs.  Nothing is
persisted; the log lives as long as the session that owns it.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


class HistoryRecorder(Protocol):
    """Anything that accepts finished calculations."""

    def record(self, expression: str, result: str) -> None: ...


@dataclass(frozen=True)
class HistoryItem:
    """One recorded calculation."""

    expression: str
    result: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class HistoryLog:
    """Newest-first calculation history with a fixed capacity.

    Usage::

        history = HistoryLog(limit=50)
        history.record("Hydrostatic Pressure (...)", "98066.50 Pa")
        latest = history.items()[0]
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit <= 0:
            raise ValueError(f"History limit must be positive, got {limit}")
        self.limit = limit
        self._items: list[HistoryItem] = []

    def record(self, expression: str, result: str) -> None:
        item = HistoryItem(expression=expression, result=result)
        self._items.insert(0, item)
        del self._items[self.limit :]
        logger.debug("Recorded %s = %s", expression, result)

    def items(self) -> list[HistoryItem]:
        """Return a copy of the log, newest first."""
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))
