"""Browser filtering: category, case-insensitive search and result caps."""

from sfbuddy.logic.categories import SymbolCategory, filter_symbols


def _catalog(n: int) -> list[str]:
    return [f"symbol{i}.circle" for i in range(n)]


class TestResultCaps:
    def test_browse_caps_at_400_in_catalog_order(self):
        names = _catalog(1000)
        result = filter_symbols(names, SymbolCategory.ALL, "")
        assert result.symbols == names[:400]
        assert result.total_matches == 1000
        assert result.result_cap == 400
        assert result.truncated

    def test_search_caps_at_800(self):
        names = _catalog(1000)
        result = filter_symbols(names, SymbolCategory.ALL, "SYMBOL")
        assert len(result.symbols) == 800
        assert all("symbol" in n.lower() for n in result.symbols)
        assert result.result_cap == 800

    def test_small_catalog_not_truncated(self):
        names = _catalog(10)
        result = filter_symbols(names)
        assert result.symbols == names
        assert not result.truncated

    def test_custom_caps(self):
        names = _catalog(50)
        assert len(filter_symbols(names, default_cap=5).symbols) == 5
        assert len(filter_symbols(names, search_text="symbol", search_cap=7).symbols) == 7

    def test_none_search_treated_as_empty(self):
        names = _catalog(500)
        assert filter_symbols(names, search_text=None).result_cap == 400


class TestSearchAndCategory:
    NAMES = ["car.fill", "creditcard.fill", "Cloud.Custom", "cloud.sun", "house.fill", "bus"]

    def test_search_is_case_insensitive(self):
        result = filter_symbols(self.NAMES, SymbolCategory.ALL, "CLOUD")
        assert result.symbols == ["Cloud.Custom", "cloud.sun"]

    def test_category_then_search(self):
        result = filter_symbols(self.NAMES, SymbolCategory.TRANSPORTATION, "fill")
        assert result.symbols == ["car.fill", "creditcard.fill"]

    def test_category_keeps_catalog_order(self):
        result = filter_symbols(self.NAMES, SymbolCategory.TRANSPORTATION)
        assert result.symbols == ["car.fill", "creditcard.fill", "bus"]

    def test_category_uses_case_sensitive_rules(self):
        # Weather matches "cloud" case-sensitively, so "Cloud.Custom" is out
        result = filter_symbols(self.NAMES, SymbolCategory.WEATHER)
        assert result.symbols == ["cloud.sun"]

    def test_no_matches(self):
        result = filter_symbols(self.NAMES, SymbolCategory.ALL, "zzz")
        assert result.symbols == []
        assert result.total_matches == 0
