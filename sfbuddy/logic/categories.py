"""Symbol categorization and filtering.

Categories are assigned by substring heuristics over the symbol name, not by
a formal taxonomy. Matching is case-sensitive and looks for plain substrings
("car" matches "car.fill" and "scarf"), so the keyword lists below must stay
exactly as they are: changing them changes which symbols users see under
each tab.

A name can belong to several categories ("car.fill" is both Automotive and
Transportation). Classification is pure: the same name and category always
give the same answer.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional


class SymbolCategory(str, Enum):
    ALL = "all"
    COMMUNICATION = "communication"
    WEATHER = "weather"
    OBJECTS_TOOLS = "objects_tools"
    DEVICES = "devices"
    GAMING = "gaming"
    CONNECTIVITY = "connectivity"
    TRANSPORTATION = "transportation"
    AUTOMOTIVE = "automotive"
    ACCESSIBILITY = "accessibility"
    PRIVACY = "privacy"
    HUMAN = "human"
    HOME = "home"
    FITNESS = "fitness"
    NATURE = "nature"
    EDITING = "editing"
    TEXT_FORMATTING = "text_formatting"
    MEDIA = "media"
    KEYBOARD = "keyboard"
    COMMERCE = "commerce"
    TIME = "time"
    HEALTH = "health"
    SHAPES = "shapes"
    ARROWS = "arrows"
    INDICES = "indices"
    MATH = "math"

    @property
    def display_name(self) -> str:
        return _CATEGORY_META[self][0]

    @property
    def system_image(self) -> str:
        return _CATEGORY_META[self][1]


_CATEGORY_META = {
    SymbolCategory.ALL: ("All", "square.grid.3x3"),
    SymbolCategory.COMMUNICATION: ("Communication", "bubble.left.and.bubble.right"),
    SymbolCategory.WEATHER: ("Weather", "cloud.sun"),
    SymbolCategory.OBJECTS_TOOLS: ("Objects & Tools", "wrench.and.screwdriver"),
    SymbolCategory.DEVICES: ("Devices", "laptopcomputer"),
    SymbolCategory.GAMING: ("Gaming", "gamecontroller"),
    SymbolCategory.CONNECTIVITY: ("Connectivity", "wifi"),
    SymbolCategory.TRANSPORTATION: ("Transportation", "car"),
    SymbolCategory.AUTOMOTIVE: ("Automotive", "car.front.waves.up"),
    SymbolCategory.ACCESSIBILITY: ("Accessibility", "accessibility"),
    SymbolCategory.PRIVACY: ("Privacy & Security", "lock.shield"),
    SymbolCategory.HUMAN: ("Human", "person"),
    SymbolCategory.HOME: ("Home", "house"),
    SymbolCategory.FITNESS: ("Fitness", "figure.run"),
    SymbolCategory.NATURE: ("Nature", "leaf"),
    SymbolCategory.EDITING: ("Editing", "pencil"),
    SymbolCategory.TEXT_FORMATTING: ("Text Formatting", "textformat"),
    SymbolCategory.MEDIA: ("Media", "play.rectangle"),
    SymbolCategory.KEYBOARD: ("Keyboard", "keyboard"),
    SymbolCategory.COMMERCE: ("Commerce", "cart"),
    SymbolCategory.TIME: ("Time", "clock"),
    SymbolCategory.HEALTH: ("Health", "heart"),
    SymbolCategory.SHAPES: ("Shapes", "circle.square"),
    SymbolCategory.ARROWS: ("Arrows", "arrow.right"),
    SymbolCategory.INDICES: ("Indices", "a.circle"),
    SymbolCategory.MATH: ("Math", "plus.forwardslash.minus"),
}


@dataclass(frozen=True)
class KeywordRule:
    """Matches when any keyword is a substring and no exclusion is."""
    keywords: tuple[str, ...]
    excludes: tuple[str, ...] = field(default_factory=tuple)

    def matches(self, name: str) -> bool:
        if not any(k in name for k in self.keywords):
            return False
        return not any(x in name for x in self.excludes)


_KEYWORD_RULES: dict[SymbolCategory, KeywordRule] = {
    SymbolCategory.COMMUNICATION: KeywordRule(("message", "phone", "mail", "bubble", "text", "chat")),
    SymbolCategory.WEATHER: KeywordRule(("cloud", "sun", "rain", "snow", "wind", "moon")),
    SymbolCategory.OBJECTS_TOOLS: KeywordRule(("wrench", "hammer", "screwdriver", "gear", "tool")),
    SymbolCategory.DEVICES: KeywordRule(("iphone", "ipad", "mac", "laptop", "display", "tv")),
    SymbolCategory.GAMING: KeywordRule(("gamecontroller", "dice", "joystick")),
    SymbolCategory.CONNECTIVITY: KeywordRule(("wifi", "bluetooth", "antenna", "network")),
    SymbolCategory.TRANSPORTATION: KeywordRule(("car", "bus", "airplane", "bicycle", "train", "boat")),
    SymbolCategory.AUTOMOTIVE: KeywordRule(("car",), excludes=("card",)),
    SymbolCategory.ACCESSIBILITY: KeywordRule(("accessibility", "ear", "eye")),
    SymbolCategory.PRIVACY: KeywordRule(("lock", "key", "shield", "security")),
    SymbolCategory.HUMAN: KeywordRule(("person", "figure", "hand", "face")),
    SymbolCategory.HOME: KeywordRule(("house", "home", "door", "bed")),
    SymbolCategory.NATURE: KeywordRule(("leaf", "tree", "flower", "mountain", "water")),
    SymbolCategory.EDITING: KeywordRule(("pencil", "paintbrush", "crop", "scissors")),
    SymbolCategory.TEXT_FORMATTING: KeywordRule(("textformat", "bold", "italic", "underline")),
    SymbolCategory.MEDIA: KeywordRule(("play", "pause", "stop", "music", "video", "camera")),
    SymbolCategory.KEYBOARD: KeywordRule(("keyboard", "command", "option", "shift")),
    SymbolCategory.COMMERCE: KeywordRule(("cart", "bag", "creditcard", "dollar", "purchase")),
    SymbolCategory.TIME: KeywordRule(("clock", "timer", "calendar", "alarm")),
    SymbolCategory.HEALTH: KeywordRule(("heart", "cross", "pill", "medical")),
    SymbolCategory.SHAPES: KeywordRule(
        ("circle", "square", "triangle", "diamond"),
        excludes=("person", "figure"),
    ),
    SymbolCategory.ARROWS: KeywordRule(("arrow", "chevron")),
    SymbolCategory.MATH: KeywordRule(("plus", "minus", "multiply", "divide", "equal", "percent")),
}

_FITNESS_MOTIONS = ("run", "walk", "bike")
_INDEX_PATTERNS = (re.compile(r"^[a-z]\.circle"), re.compile(r"^[0-9]\.circle"))


def _is_fitness(name: str) -> bool:
    if "figure" in name and any(m in name for m in _FITNESS_MOTIONS):
        return True
    return "dumbbell" in name


def _is_index(name: str) -> bool:
    return any(p.match(name) for p in _INDEX_PATTERNS)


def symbol_belongs_to_category(symbol_name: str, category: SymbolCategory) -> bool:
    """Return True if `symbol_name` is classified under `category`."""
    category = SymbolCategory(category)
    if category is SymbolCategory.ALL:
        return True
    if category is SymbolCategory.FITNESS:
        return _is_fitness(symbol_name)
    if category is SymbolCategory.INDICES:
        return _is_index(symbol_name)
    return _KEYWORD_RULES[category].matches(symbol_name)


def categories_for_symbol(symbol_name: str) -> list[SymbolCategory]:
    """Every category except All that the name falls under, in enum order."""
    return [
        c for c in SymbolCategory
        if c is not SymbolCategory.ALL and symbol_belongs_to_category(symbol_name, c)
    ]


# =============================================================================
# FILTERING
# =============================================================================

DEFAULT_RESULT_CAP = 400
SEARCH_RESULT_CAP = 800


@dataclass
class FilterResult:
    symbols: list[str]
    total_matches: int
    result_cap: int

    @property
    def truncated(self) -> bool:
        return self.total_matches > len(self.symbols)


def filter_symbols(
    all_symbols: Iterable[str],
    category: SymbolCategory = SymbolCategory.ALL,
    search_text: Optional[str] = None,
    default_cap: int = DEFAULT_RESULT_CAP,
    search_cap: int = SEARCH_RESULT_CAP,
) -> FilterResult:
    """Filter the catalog for the browser grid.

    Category first, then a case-insensitive substring search, then the
    result cap. Browsing without a search is capped lower than searching.
    Catalog order is kept.
    """
    category = SymbolCategory(category)
    search_text = search_text or ""
    needle = search_text.casefold()

    matches = []
    for name in all_symbols:
        if category is not SymbolCategory.ALL and not symbol_belongs_to_category(name, category):
            continue
        if needle and needle not in name.casefold():
            continue
        matches.append(name)

    cap = search_cap if search_text else default_cap
    return FilterResult(symbols=matches[:cap], total_matches=len(matches), result_cap=cap)
