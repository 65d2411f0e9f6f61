"""Clipboard collaborator.

The platform pasteboard lives outside this package; the picker only needs
something that accepts a plain string.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20


class Clipboard(ABC):

    @abstractmethod
    def set_text(self, text: str) -> None:
        ...


class MemoryClipboard(Clipboard):
    """Keeps the most recent copied strings in memory. Used headless and in tests."""

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._history: deque[str] = deque(maxlen=history_limit)

    def set_text(self, text: str) -> None:
        self._history.append(text)

    @property
    def history(self) -> list[str]:
        """Copied strings, oldest first, at most `history_limit` of them."""
        return list(self._history)

    @property
    def current(self) -> Optional[str]:
        return self._history[-1] if self._history else None
