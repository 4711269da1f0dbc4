"""
Category normalization.

Maps free-text category labels from heterogeneous sources onto a small
canonical taxonomy, and gives each canonical category an icon identifier.

TUNING GUIDE:
- Edit ALIAS_TO_CANONICAL to route another source's label onto an existing category
- Edit CANONICAL_TO_ICON to add a canonical category (it gets seeded on import)
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional

# =============================================================================
# CONFIGURATION - EDIT THESE TO TUNE MAPPINGS
# =============================================================================

# Lowercased raw label -> canonical category name
ALIAS_TO_CANONICAL: Dict[str, str] = {
    "science": "Science & Nature",
    "science & nature": "Science & Nature",
    "nature": "Science & Nature",
    "animals": "Science & Nature",
    "science - computers": "Technology",
    "science - gadgets": "Technology",
    "technology": "Technology",
    "mathematics": "Mathematics",
    "science - mathematics": "Mathematics",
    "history": "History",
    "geography": "Geography",
    "politics": "Politics",
    "sports": "Sports",
    "sport_and_leisure": "Sports",
    "music": "Music",
    "musicals & theatres": "Music",
    "literature": "Literature",
    "books": "Literature",
    "arts_and_literature": "Arts & Literature",
    "arts and literature": "Arts & Literature",
    "art": "Arts & Literature",
    "movies": "Film & TV",
    "film": "Film & TV",
    "film_and_tv": "Film & TV",
    "television": "Film & TV",
    "cartoon & animations": "Film & TV",
    "japanese anime & manga": "Film & TV",
    "video games": "Video Games",
    "board games": "Board Games",
    "comics": "Comics",
    "food & drink": "Food & Drink",
    "food_and_drink": "Food & Drink",
    "pop culture": "Pop Culture",
    "celebrities": "Pop Culture",
    "mythology": "Mythology",
    "society_and_culture": "Society & Culture",
    "society and culture": "Society & Culture",
    "general_knowledge": "General Knowledge",
    "general knowledge": "General Knowledge",
    "vehicles": "Vehicles",
}

# Canonical category name -> icon identifier
CANONICAL_TO_ICON: Dict[str, str] = {
    "Science & Nature": "atom",
    "Technology": "desktopcomputer",
    "Mathematics": "number",
    "History": "clock",
    "Geography": "globe.americas",
    "Politics": "building.columns",
    "Sports": "sportscourt",
    "Music": "music.note",
    "Literature": "book",
    "Arts & Literature": "paintbrush",
    "Film & TV": "film",
    "Video Games": "gamecontroller",
    "Board Games": "gamecontroller",
    "Comics": "text.bubble",
    "Food & Drink": "fork.knife",
    "Pop Culture": "star",
    "Mythology": "sparkles",
    "Society & Culture": "person.3",
    "General Knowledge": "questionmark.circle",
    "Vehicles": "car",
}

UNKNOWN_ICON = "questionmark.circle"


def normalize_label(label: str) -> str:
    """Lowercase and trim a label for alias lookups."""
    return label.lower().strip()


class CategoryNormalizer:
    """Resolves raw labels to canonical category names and icons."""

    def __init__(
        self,
        aliases: Optional[Mapping[str, str]] = None,
        icons: Optional[Mapping[str, str]] = None,
        unknown_icon: str = UNKNOWN_ICON,
    ):
        self.aliases = MappingProxyType(dict(ALIAS_TO_CANONICAL if aliases is None else aliases))
        self.icons = MappingProxyType(dict(CANONICAL_TO_ICON if icons is None else icons))
        self.unknown_icon = unknown_icon

    def normalize(self, raw_label: str) -> str:
        """
        Return the canonical name for a raw label.

        Unknown labels pass through unchanged and become their own
        canonical category rather than being rejected.
        """
        canonical = self.aliases.get(normalize_label(raw_label))
        if canonical is None:
            return raw_label
        return canonical

    def icon_for(self, canonical_name: str) -> str:
        return self.icons.get(canonical_name, self.unknown_icon)

    def seed(self, store) -> None:
        """
        Ensure every canonical category and every alias exists in the store.

        Aliases whose canonical category is missing are skipped by the store.
        """
        for canonical, icon in self.icons.items():
            store.get_or_create_category(canonical, icon)
        for alias, canonical in self.aliases.items():
            store.add_alias(alias, canonical)


# Singleton instance
_category_normalizer: Optional[CategoryNormalizer] = None


def get_category_normalizer() -> CategoryNormalizer:
    """Get the normalizer built from the default taxonomy."""
    global _category_normalizer
    if _category_normalizer is None:
        _category_normalizer = CategoryNormalizer()
    return _category_normalizer
