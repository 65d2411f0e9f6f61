"""SF Buddy: SF Symbols picker core (categories, search, AI suggestions)."""
