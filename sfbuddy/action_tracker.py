"""Per-symbol action history (copied, exported, favorited, re-searched)."""

import logging
import threading
from collections import defaultdict

from sfbuddy.models import SymbolAction, SymbolActionRecord

logger = logging.getLogger(__name__)


class SymbolActionTracker:

    def __init__(self):
        self._lock = threading.Lock()
        self._records: dict[str, list[SymbolActionRecord]] = defaultdict(list)

    def track(self, symbol_name: str, action: SymbolAction, search_term: str = "") -> SymbolActionRecord:
        record = SymbolActionRecord(
            symbol_name=symbol_name,
            action=SymbolAction(action),
            search_term=search_term,
        )
        with self._lock:
            self._records[symbol_name].append(record)
        logger.info(f"Tracked {record.action.value} for {symbol_name} (search: '{search_term}')")
        return record

    def history(self, symbol_name: str) -> list[SymbolActionRecord]:
        with self._lock:
            return list(self._records.get(symbol_name, []))

    def count(self, symbol_name: str, action: SymbolAction) -> int:
        return sum(1 for r in self.history(symbol_name) if r.action is SymbolAction(action))
