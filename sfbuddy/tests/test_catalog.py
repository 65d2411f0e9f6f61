"""Icon catalog loading and existence checks."""

import json

import pytest

from sfbuddy.catalog import InMemorySymbolCatalog, load_catalog


class TestInMemoryCatalog:
    def test_keeps_order_and_drops_duplicates(self):
        catalog = InMemorySymbolCatalog(["b", "a", "b", "", "c"])
        assert catalog.all_symbols() == ["b", "a", "c"]
        assert len(catalog) == 3

    def test_exact_existence(self):
        catalog = InMemorySymbolCatalog(["house.fill"])
        assert catalog.exists("house.fill")
        assert not catalog.exists("house")
        assert not catalog.exists("House.fill")
        assert not catalog.exists("")
        assert not catalog.exists("  ")

    def test_all_symbols_returns_copy(self):
        catalog = InMemorySymbolCatalog(["a"])
        catalog.all_symbols().append("b")
        assert catalog.all_symbols() == ["a"]


class TestLoadCatalog:
    def test_text_file(self, tmp_path):
        path = tmp_path / "symbols.txt"
        path.write_text("# header\nhouse.fill\n\n  gearshape.fill  \n")
        assert load_catalog(path).all_symbols() == ["house.fill", "gearshape.fill"]

    def test_json_file(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps(["a.circle", "b.circle"]))
        assert load_catalog(path).all_symbols() == ["a.circle", "b.circle"]

    def test_json_must_be_list(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps({"a": 1}))
        with pytest.raises(ValueError):
            load_catalog(path)

    @pytest.mark.parametrize("entries", [["a.circle", None], ["a.circle", 42], [["nested"]]])
    def test_json_entries_must_be_strings(self, tmp_path, entries):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps(entries))
        with pytest.raises(ValueError):
            load_catalog(path)
