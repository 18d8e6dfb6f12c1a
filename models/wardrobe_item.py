"""Wardrobe item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from models.taxonomy import (
    Category,
    normalize_color_name,
    normalise_season,
    normalise_tags,
)


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _normalise_colors(values: Iterable[str]) -> List[str]:
    """Normalise color names using the canonical taxonomy mapping."""

    normalised = []
    seen = set()
    for value in values:
        if value is None:
            continue
        key = normalize_color_name(str(value))
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


@dataclass
class WardrobeItem:
    """Represents an item in the user's wardrobe.

    Items are produced by the upload and tagging pipeline; the recommendation
    engine only reads them.
    """

    item_id: str
    category: str
    colors: List[str] = field(default_factory=list)
    style: str = ""
    occasions: List[str] = field(default_factory=list)
    seasons: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    name: str = ""
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        self.item_id = str(self.item_id)
        self.category = str(self.category or "").strip().lower()
        self.colors = _normalise_colors(_ensure_list(self.colors))
        self.style = str(self.style or "").strip().lower()
        self.occasions = normalise_tags(_ensure_list(self.occasions))
        self.seasons = [normalise_season(season) for season in normalise_tags(_ensure_list(self.seasons))]
        self.tags = normalise_tags(_ensure_list(self.tags))

    @property
    def category_enum(self) -> Optional[Category]:
        return Category.parse(self.category)

    def has_tag(self, *tags: str) -> bool:
        return any(tag in self.tags for tag in tags)


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from loose tagging metadata.

    Accepts the keys produced by the tagging service (``color``/``occasion``/
    ``season``/``photo_url``) as well as the model's own field names.
    """

    item_id = metadata.get("item_id") or metadata.get("id")
    required = {"item_id": item_id, "category": metadata.get("category")}
    missing = [key for key, value in required.items() if not value]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    return WardrobeItem(
        item_id=str(item_id),
        category=str(metadata["category"]),
        colors=_ensure_list(metadata.get("colors", metadata.get("color"))),
        style=str(metadata.get("style") or ""),
        occasions=_ensure_list(metadata.get("occasions", metadata.get("occasion"))),
        seasons=_ensure_list(metadata.get("seasons", metadata.get("season"))),
        tags=_ensure_list(metadata.get("tags")),
        name=str(metadata.get("name") or ""),
        image_url=metadata.get("image_url") or metadata.get("photo_url"),
    )


__all__ = ["WardrobeItem", "from_raw_metadata"]
