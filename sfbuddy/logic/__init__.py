"""Logic module for symbol categorization and filtering."""

from .categories import (
    SymbolCategory,
    FilterResult,
    symbol_belongs_to_category,
    categories_for_symbol,
    filter_symbols,
)

__all__ = [
    'SymbolCategory',
    'FilterResult',
    'symbol_belongs_to_category',
    'categories_for_symbol',
    'filter_symbols',
]
