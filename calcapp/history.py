"""
In-memory calculation history, most recent first.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class HistoryEntry:
    """One completed calculation or conversion"""
    expression: str
    result: str
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expression": self.expression,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
        }


class CalculationHistory:
    """Ephemeral history list owned by the presentation layer"""

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max_entries
        self._entries: List[HistoryEntry] = []

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def add_to_history(self, entry: HistoryEntry) -> None:
        self._entries.insert(0, entry)
        self._truncate()
        logger.debug(f"History: {entry.expression} = {entry.result}")

    def clear_history(self) -> None:
        self._entries = []

    def _truncate(self):
        """Drop the oldest entries beyond max_entries"""
        if self.max_entries is not None and len(self._entries) > self.max_entries:
            self._entries = self._entries[:self.max_entries]

    def to_list(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
