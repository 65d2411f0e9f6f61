"""
Icon catalog: enumeration of known symbol names and an existence check.

The real catalog is Apple's SF Symbols set. The picker only consumes two
capabilities from it, so any source that can list names in a stable order
and answer "does this name exist" can stand in for it.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Union

logger = logging.getLogger(__name__)


class SymbolCatalog(ABC):

    @abstractmethod
    def all_symbols(self) -> list[str]:
        """All symbol names in the catalog's enumeration order."""
        ...

    @abstractmethod
    def exists(self, name: str) -> bool:
        """Exact-match existence check. No partial matches."""
        ...

    def __len__(self) -> int:
        return len(self.all_symbols())


class InMemorySymbolCatalog(SymbolCatalog):
    """Catalog backed by an ordered list of names.

    Duplicates are dropped, keeping the first occurrence.
    """

    def __init__(self, names: Iterable[str]):
        ordered: list[str] = []
        seen: set[str] = set()
        for name in names:
            if name and name not in seen:
                seen.add(name)
                ordered.append(name)
        self._names = ordered
        self._index = frozenset(seen)

    def all_symbols(self) -> list[str]:
        return list(self._names)

    def exists(self, name: str) -> bool:
        if not name or not name.strip():
            return False
        return name in self._index

    def __len__(self) -> int:
        return len(self._names)


def load_catalog(path: Union[str, Path]) -> InMemorySymbolCatalog:
    """Load a catalog file.

    `.json` files hold a list of names; anything else is read as one name per
    line, with blank lines and `#` comments skipped.
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix == ".json":
            names = json.load(f)
            if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
                raise ValueError(f"Catalog {path} must contain a JSON list of names")
        else:
            names = [
                line.strip() for line in f
                if line.strip() and not line.lstrip().startswith("#")
            ]

    catalog = InMemorySymbolCatalog(n.strip() for n in names)
    logger.info(f"Loaded {len(catalog)} symbols from {path}")
    return catalog
