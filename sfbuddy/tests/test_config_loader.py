"""Pin PickerConfig loading and settings updates."""

import pytest
from pydantic import ValidationError

from sfbuddy.config_loader import (
    CatalogNotConfiguredError,
    PickerConfig,
    apply_settings_update,
    get_settings_summary,
    load_picker_config,
)
from sfbuddy.models import ClaudeModel, GridSize, RenderingMode, SettingsUpdate


class TestDefaults:
    def test_bundled_config_matches_defaults(self, monkeypatch):
        monkeypatch.delenv("SFBUDDY_CONFIG", raising=False)
        config = load_picker_config()
        assert config.symbol_count == 12
        assert config.selected_model == ClaudeModel.SONNET
        assert config.browser.default_result_cap == 400
        assert config.browser.search_result_cap == 800
        assert config.completion.max_tokens == 200
        assert config.completion.anthropic_version == "2023-06-01"

    def test_missing_file_returns_defaults(self, tmp_path):
        config = load_picker_config(str(tmp_path / "nope.yaml"))
        assert config == PickerConfig()

    def test_empty_file_returns_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_picker_config(str(path)) == PickerConfig()


class TestYamlLoading:
    def test_values_from_file(self, tmp_path):
        path = tmp_path / "picker.yaml"
        path.write_text(
            "symbol_count: 20\n"
            "selected_model: claude-3-opus-20240229\n"
            "browser:\n"
            "  default_result_cap: 100\n"
            "  grid_size: small\n"
        )
        config = load_picker_config(str(path))
        assert config.symbol_count == 20
        assert config.selected_model == ClaudeModel.OPUS
        assert config.browser.default_result_cap == 100
        assert config.browser.search_result_cap == 800
        assert config.browser.grid_size == GridSize.SMALL

    def test_env_var_selects_file(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("symbol_count: 4\n")
        monkeypatch.setenv("SFBUDDY_CONFIG", str(path))
        assert load_picker_config().symbol_count == 4

    @pytest.mark.parametrize("count", [3, 25, 0])
    def test_symbol_count_out_of_range(self, tmp_path, count):
        path = tmp_path / "bad.yaml"
        path.write_text(f"symbol_count: {count}\n")
        with pytest.raises(ValidationError):
            load_picker_config(str(path))

    def test_unknown_model_rejected(self):
        with pytest.raises(ValidationError):
            PickerConfig(selected_model="gpt-5")


class TestCatalogPath:
    def test_unset_catalog_is_an_error(self, monkeypatch):
        monkeypatch.delenv("SFBUDDY_CATALOG", raising=False)
        with pytest.raises(CatalogNotConfiguredError):
            PickerConfig().resolved_catalog_path()

    def test_config_value_used_without_env(self, monkeypatch):
        monkeypatch.delenv("SFBUDDY_CATALOG", raising=False)
        config = PickerConfig(catalog_path="/data/all_symbols.txt")
        assert str(config.resolved_catalog_path()) == "/data/all_symbols.txt"

    def test_env_overrides_config(self, monkeypatch):
        monkeypatch.setenv("SFBUDDY_CATALOG", "/tmp/all_symbols.txt")
        config = PickerConfig(catalog_path="/elsewhere.txt")
        assert str(config.resolved_catalog_path()) == "/tmp/all_symbols.txt"


class TestSettingsUpdate:
    def test_partial_update(self):
        config = PickerConfig()
        updated = apply_settings_update(config, SettingsUpdate(symbol_count=24, grid_size=GridSize.LARGE))
        assert updated.symbol_count == 24
        assert updated.browser.grid_size == GridSize.LARGE
        assert updated.selected_model == config.selected_model
        # Input config is untouched
        assert config.symbol_count == 12

    def test_update_validates_range(self):
        with pytest.raises(ValidationError):
            apply_settings_update(PickerConfig(), SettingsUpdate(symbol_count=30))

    def test_summary_shape(self):
        summary = get_settings_summary(PickerConfig())
        assert summary["symbol_count"] == 12
        assert summary["symbol_count_range"] == [4, 24]
        assert summary["selected_model"]["label"] == "Claude 3.5 Sonnet"
        assert summary["rendering_mode"] == RenderingMode.MULTICOLOR.value
        assert summary["result_caps"] == {"browse": 400, "search": 800}
