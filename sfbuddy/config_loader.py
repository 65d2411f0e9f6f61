"""Configuration loader for the symbol picker.

Settings are kept in a YAML file and validated with pydantic. A missing file
yields the defaults, so the picker runs with no configuration at all.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from sfbuddy.models import ClaudeModel, GridSize, RenderingMode, SettingsUpdate


MIN_SYMBOL_COUNT = 4
MAX_SYMBOL_COUNT = 24

_PACKAGE_DIR = Path(__file__).parent
DEFAULT_CONFIG_PATH = _PACKAGE_DIR / "picker_config.yaml"


class CatalogNotConfiguredError(RuntimeError):
    """No symbol catalog file was named in the environment or the config."""


# =============================================================================
# PYDANTIC MODELS FOR CONFIGURATION VALIDATION
# =============================================================================

class CompletionServiceConfig(BaseModel):
    """Where and how to reach the completion service."""
    api_url: str = "https://api.anthropic.com/v1/messages"
    anthropic_version: str = "2023-06-01"
    max_tokens: int = Field(200, gt=0)
    timeout_s: float = Field(30.0, gt=0)


class BrowserConfig(BaseModel):
    """Result caps and presentation defaults for the symbol browser."""
    default_result_cap: int = Field(400, gt=0)
    search_result_cap: int = Field(800, gt=0)
    grid_size: GridSize = GridSize.MEDIUM
    rendering_mode: RenderingMode = RenderingMode.MULTICOLOR


class PickerConfig(BaseModel):
    """Complete picker configuration container."""
    symbol_count: int = 12
    selected_model: ClaudeModel = ClaudeModel.SONNET
    catalog_path: Optional[str] = None
    completion: CompletionServiceConfig = Field(default_factory=CompletionServiceConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)

    @field_validator("symbol_count")
    @classmethod
    def _check_symbol_count(cls, value: int) -> int:
        if not MIN_SYMBOL_COUNT <= value <= MAX_SYMBOL_COUNT:
            raise ValueError(
                f"symbol_count must be between {MIN_SYMBOL_COUNT} and {MAX_SYMBOL_COUNT}, got {value}"
            )
        return value

    def resolved_catalog_path(self) -> Path:
        """Catalog file: SFBUDDY_CATALOG, then the config value.

        Suggestions are validated against this file, so it must be a full
        SF Symbols name export. There is no bundled fallback.

        Raises:
            CatalogNotConfiguredError: If neither source names a file.
        """
        env_path = os.environ.get("SFBUDDY_CATALOG")
        if env_path:
            return Path(env_path)
        if self.catalog_path:
            return Path(self.catalog_path)
        raise CatalogNotConfiguredError(
            "No symbol catalog configured. Set SFBUDDY_CATALOG or catalog_path "
            "to a file listing every SF Symbol name."
        )


# =============================================================================
# CONFIGURATION LOADER
# =============================================================================

def _resolve_config_path(config_path: Optional[str] = None) -> Path:
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get("SFBUDDY_CONFIG")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_picker_config(config_path: Optional[str] = None) -> PickerConfig:
    """Load and validate picker configuration from a YAML file.

    Args:
        config_path: Path to config file. Defaults to SFBUDDY_CONFIG or the
            bundled picker_config.yaml.

    Returns:
        Validated PickerConfig object
    """
    path = _resolve_config_path(config_path)

    if not path.exists():
        # Return default config if file doesn't exist
        return PickerConfig()

    with open(path, 'r', encoding='utf-8') as f:
        raw = yaml.safe_load(f)

    if not raw:
        return PickerConfig()

    return PickerConfig(**raw)


def apply_settings_update(config: PickerConfig, update: SettingsUpdate) -> PickerConfig:
    """Return a new validated config with the non-empty fields of `update` applied.

    Raises:
        pydantic.ValidationError: If the result is not a valid PickerConfig.
    """
    raw = config.model_dump()
    if update.symbol_count is not None:
        raw["symbol_count"] = update.symbol_count
    if update.selected_model is not None:
        raw["selected_model"] = update.selected_model
    if update.rendering_mode is not None:
        raw["browser"]["rendering_mode"] = update.rendering_mode
    if update.grid_size is not None:
        raw["browser"]["grid_size"] = update.grid_size
    return PickerConfig.model_validate(raw)


def get_settings_summary(config: PickerConfig) -> dict:
    """Summary of the active settings for the settings screen."""
    return {
        "symbol_count": config.symbol_count,
        "symbol_count_range": [MIN_SYMBOL_COUNT, MAX_SYMBOL_COUNT],
        "selected_model": {
            "id": config.selected_model.value,
            "label": config.selected_model.display_name,
            "description": config.selected_model.description,
        },
        "rendering_mode": config.browser.rendering_mode.value,
        "grid_size": config.browser.grid_size.value,
        "result_caps": {
            "browse": config.browser.default_result_cap,
            "search": config.browser.search_result_cap,
        },
    }
