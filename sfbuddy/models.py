"""Pydantic schemas and enums for the SF Buddy symbol picker."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ========================================
# Completion Models
# ========================================

class ClaudeModel(str, Enum):
    SONNET = "claude-3-5-sonnet-20240620"
    OPUS = "claude-3-opus-20240229"
    CLAUDE_4 = "claude-4-20241120"

    @property
    def display_name(self) -> str:
        return _MODEL_DISPLAY[self][0]

    @property
    def description(self) -> str:
        return _MODEL_DISPLAY[self][1]


_MODEL_DISPLAY = {
    ClaudeModel.SONNET: ("Claude 3.5 Sonnet", "Fast and intelligent (recommended)"),
    ClaudeModel.OPUS: ("Claude 3 Opus", "Most capable, slower"),
    ClaudeModel.CLAUDE_4: ("Claude 4", "Latest and most advanced (experimental)"),
}


# ========================================
# Presentation Settings
# ========================================

class RenderingMode(str, Enum):
    MONOCHROME = "monochrome"
    HIERARCHICAL = "hierarchical"
    PALETTE = "palette"
    MULTICOLOR = "multicolor"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def icon_name(self) -> str:
        return {
            RenderingMode.MONOCHROME: "circle",
            RenderingMode.HIERARCHICAL: "circle.lefthalf.striped.horizontal",
            RenderingMode.PALETTE: "paintpalette",
            RenderingMode.MULTICOLOR: "circle.hexagongrid",
        }[self]


class GridSize(str, Enum):
    """Grid density for the symbol browser.

    Each size fixes the column count, the point size of the rendered symbol
    and the (min width, max width, height) of a grid button.
    """
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extraLarge"

    @property
    def display_name(self) -> str:
        return _GRID_LAYOUT[self]["display_name"]

    @property
    def column_count(self) -> int:
        return _GRID_LAYOUT[self]["columns"]

    @property
    def icon_name(self) -> str:
        return _GRID_LAYOUT[self]["icon"]

    @property
    def symbol_size(self) -> float:
        return _GRID_LAYOUT[self]["symbol_size"]

    @property
    def button_size(self) -> tuple[float, float, float]:
        return _GRID_LAYOUT[self]["button"]

    @property
    def show_names(self) -> bool:
        return self is not GridSize.SMALL


_GRID_LAYOUT = {
    GridSize.SMALL: {
        "display_name": "Small", "columns": 8, "icon": "grid",
        "symbol_size": 12, "button": (40, 50, 50),
    },
    GridSize.MEDIUM: {
        "display_name": "Medium", "columns": 4, "icon": "square.grid.2x2",
        "symbol_size": 24, "button": (70, 85, 75),
    },
    GridSize.LARGE: {
        "display_name": "Large", "columns": 3, "icon": "rectangle.grid.1x2",
        "symbol_size": 32, "button": (90, 110, 90),
    },
    GridSize.EXTRA_LARGE: {
        "display_name": "Extra Large", "columns": 1, "icon": "square.fill",
        "symbol_size": 64, "button": (300, 350, 140),
    },
}


# ========================================
# Symbol Actions
# ========================================

class SymbolAction(str, Enum):
    COPIED = "copied"
    EXPORTED = "exported"
    FAVORITED = "favorited"
    RE_SEARCHED = "reSearched"

    @property
    def display_name(self) -> str:
        return {
            SymbolAction.COPIED: "Copied",
            SymbolAction.EXPORTED: "Exported",
            SymbolAction.FAVORITED: "Favorited",
            SymbolAction.RE_SEARCHED: "Re-searched",
        }[self]

    @property
    def system_image(self) -> str:
        return {
            SymbolAction.COPIED: "doc.on.clipboard",
            SymbolAction.EXPORTED: "square.and.arrow.up",
            SymbolAction.FAVORITED: "heart.fill",
            SymbolAction.RE_SEARCHED: "arrow.clockwise",
        }[self]


class SymbolActionRecord(BaseModel):
    """A single action taken on a symbol, with the search that led to it."""
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    symbol_name: str
    action: SymbolAction
    search_term: str = ""
    date: datetime = Field(default_factory=datetime.now)


# ========================================
# Suggestion Schemas
# ========================================

class SuggestionSource(str, Enum):
    LIVE = "live"
    MOCK = "mock"
    NONE = "none"


class SymbolSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str


class SuggestionBatch(BaseModel):
    """One complete result of the suggestion pipeline.

    A batch is never mutated after it is built; a newer batch replaces it.
    """
    model_config = ConfigDict(frozen=True)

    query: str = ""
    suggestions: list[SymbolSuggestion] = Field(default_factory=list)
    invalid_names: list[str] = Field(default_factory=list)
    api_key_missing_or_invalid: bool = False
    source: SuggestionSource = SuggestionSource.NONE
    generation: int = 0
    superseded: bool = False

    @property
    def names(self) -> list[str]:
        return [s.name for s in self.suggestions]


# ========================================
# Messages API Wire Schemas
# ========================================

class ClaudeContentBlock(BaseModel):
    type: str
    text: Optional[str] = None


class ClaudeResponse(BaseModel):
    content: list[ClaudeContentBlock] = Field(default_factory=list)
    model: Optional[str] = None
    role: Optional[str] = None
    stop_reason: Optional[str] = None


class ClaudeErrorDetail(BaseModel):
    type: str
    message: str = ""


class ClaudeErrorResponse(BaseModel):
    error: ClaudeErrorDetail


# ========================================
# HTTP API Schemas
# ========================================

class CategoryInfo(BaseModel):
    id: str
    display_name: str
    system_image: str


class SymbolListResponse(BaseModel):
    category: str
    search: str = ""
    symbols: list[str]
    total_matches: int
    result_cap: int


class SuggestRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Free-form text to find symbols for")


class CopyRequest(BaseModel):
    symbol_name: str = Field(..., min_length=1)
    search_term: str = ""


class SettingsUpdate(BaseModel):
    symbol_count: Optional[int] = None
    selected_model: Optional[ClaudeModel] = None
    rendering_mode: Optional[RenderingMode] = None
    grid_size: Optional[GridSize] = None


class ApiKeyUpdate(BaseModel):
    api_key: str = ""


class ApiKeyStatus(BaseModel):
    provider: str
    label: str
    configured: bool
    masked_key: Optional[str] = None
    missing_or_invalid: bool = False
