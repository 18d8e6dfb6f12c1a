"""Canonical taxonomy definitions for wardrobe items.

This module centralises the canonical labels for categories, seasons, times of
day and the neutral color list. Helper functions keep normalisation logic
consistent across the filter, generator and scorer.
"""

from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace("_", "-")


class Category(str, Enum):
    """Closed set of garment categories understood by the engine."""

    TOPS = "tops"
    BOTTOMS = "bottoms"
    DRESSES = "dresses"
    OUTERWEAR = "outerwear"
    SHOES = "shoes"
    ACCESSORIES = "accessories"
    JEWELRY = "jewelry"
    BAGS = "bags"

    @classmethod
    def parse(cls, value: str | None) -> Optional["Category"]:
        """Resolve a raw category string, returning ``None`` when unknown."""

        if not value:
            return None
        key = _normalize_key(str(value))
        return CATEGORY_ALIASES.get(key)


CATEGORY_ALIASES: Dict[str, Category] = {
    "tops": Category.TOPS,
    "top": Category.TOPS,
    "shirts": Category.TOPS,
    "shirt": Category.TOPS,
    "blouses": Category.TOPS,
    "blouse": Category.TOPS,
    "sweaters": Category.TOPS,
    "sweater": Category.TOPS,
    "t-shirts": Category.TOPS,
    "t-shirt": Category.TOPS,
    "bottoms": Category.BOTTOMS,
    "bottom": Category.BOTTOMS,
    "pants": Category.BOTTOMS,
    "jeans": Category.BOTTOMS,
    "skirts": Category.BOTTOMS,
    "skirt": Category.BOTTOMS,
    "shorts": Category.BOTTOMS,
    "trousers": Category.BOTTOMS,
    "dresses": Category.DRESSES,
    "dress": Category.DRESSES,
    "outerwear": Category.OUTERWEAR,
    "jackets": Category.OUTERWEAR,
    "jacket": Category.OUTERWEAR,
    "coats": Category.OUTERWEAR,
    "coat": Category.OUTERWEAR,
    "blazers": Category.OUTERWEAR,
    "blazer": Category.OUTERWEAR,
    "shoes": Category.SHOES,
    "shoe": Category.SHOES,
    "footwear": Category.SHOES,
    "boots": Category.SHOES,
    "sneakers": Category.SHOES,
    "heels": Category.SHOES,
    "accessories": Category.ACCESSORIES,
    "accessory": Category.ACCESSORIES,
    "scarves": Category.ACCESSORIES,
    "hats": Category.ACCESSORIES,
    "belts": Category.ACCESSORIES,
    "jewelry": Category.JEWELRY,
    "jewellery": Category.JEWELRY,
    "necklaces": Category.JEWELRY,
    "earrings": Category.JEWELRY,
    "bracelets": Category.JEWELRY,
    "bags": Category.BAGS,
    "bag": Category.BAGS,
    "purses": Category.BAGS,
    "handbags": Category.BAGS,
}

# Categories that pair naturally with a piece of the key category, most
# natural partner first. Used when building around a statement piece.
COMPATIBLE_NEXT_CATEGORIES: Dict[Category, Tuple[Category, ...]] = {
    Category.TOPS: (Category.BOTTOMS, Category.OUTERWEAR),
    Category.BOTTOMS: (Category.TOPS, Category.SHOES),
    Category.DRESSES: (Category.OUTERWEAR, Category.SHOES),
    Category.OUTERWEAR: (Category.TOPS, Category.DRESSES),
    Category.SHOES: (Category.BOTTOMS, Category.DRESSES),
    Category.ACCESSORIES: (Category.TOPS, Category.DRESSES),
    Category.JEWELRY: (Category.DRESSES, Category.TOPS),
    Category.BAGS: (Category.DRESSES, Category.TOPS),
}

ACCESSORY_CATEGORIES: Tuple[Category, ...] = (Category.ACCESSORIES, Category.JEWELRY, Category.BAGS)

NEUTRAL_COLORS: List[str] = [
    "black",
    "white",
    "gray",
    "beige",
    "navy",
    "brown",
    "cream",
    "tan",
    "khaki",
]

COLOR_MAP = {
    "grey": "gray",
    "charcoal": "gray",
    "off white": "white",
    "off-white": "white",
    "ivory": "cream",
    "navy blue": "navy",
    "camel": "tan",
}

SEASONS = ["spring", "summer", "fall", "winter"]
SEASON_ALIASES = {"autumn": "fall"}
ALL_SEASON_SENTINELS = {"all", "year-round"}
VERSATILE_OCCASIONS = {"versatile", "everyday"}


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"

    @classmethod
    def parse(cls, value: "str | TimeOfDay | None") -> "TimeOfDay":
        if isinstance(value, TimeOfDay):
            return value
        key = (value or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        return cls.AFTERNOON


def normalize_color_name(raw_string: str) -> str:
    """Map a raw color string to a canonical color name."""

    key = " ".join(str(raw_string).strip().lower().split())
    return COLOR_MAP.get(key, key)


def color_tokens(color: str) -> List[str]:
    """Split a compound color such as ``forest green`` into its words."""

    return [token for token in re.split(r"[\s\-_/]+", color) if token]


def color_matches(color: str, key: str) -> bool:
    """Return True when ``key`` names the color or one of its words."""

    return color == key or key in color_tokens(color)


def is_neutral(color: str) -> bool:
    normalized = normalize_color_name(color)
    return any(color_matches(normalized, neutral) for neutral in NEUTRAL_COLORS)


def normalise_season(value: str) -> str:
    key = _normalize_key(value)
    return SEASON_ALIASES.get(key, key)


def season_for_month(month: int) -> str:
    """Return the northern-hemisphere season for a calendar month (1-12)."""

    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    if 9 <= month <= 11:
        return "fall"
    return "winter"


def current_season(today: date | None = None) -> str:
    return season_for_month((today or date.today()).month)


def normalise_tags(values: Iterable[str]) -> List[str]:
    """Normalise and deduplicate free-form tags, preserving order."""

    normalised = []
    seen = set()
    for value in values:
        if value is None:
            continue
        key = _normalize_key(str(value))
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


__all__ = [
    "Category",
    "CATEGORY_ALIASES",
    "COMPATIBLE_NEXT_CATEGORIES",
    "ACCESSORY_CATEGORIES",
    "NEUTRAL_COLORS",
    "SEASONS",
    "ALL_SEASON_SENTINELS",
    "VERSATILE_OCCASIONS",
    "TimeOfDay",
    "normalize_color_name",
    "color_tokens",
    "color_matches",
    "is_neutral",
    "normalise_season",
    "season_for_month",
    "current_season",
    "normalise_tags",
]
