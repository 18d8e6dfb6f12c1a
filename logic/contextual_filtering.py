"""Deterministic admission gates for occasion, season and weather."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from logic.outfit_scoring import occasion_fit
from models.context import RequestContext, WeatherSnapshot
from models.taxonomy import ALL_SEASON_SENTINELS, VERSATILE_OCCASIONS, Category
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

OCCASION_FIT_THRESHOLD = 0.3
HOT_TEMPERATURE = 30.0
FREEZING_TEMPERATURE = 0.0
COLD_TEMPERATURE = 10.0


class FilterMode(str, Enum):
    HARD = "hard"
    SOFT = "soft"

    @classmethod
    def parse(cls, value: "str | FilterMode | None") -> "FilterMode":
        if isinstance(value, FilterMode):
            return value
        key = (value or "").strip().lower()
        if key == cls.SOFT.value:
            return cls.SOFT
        return cls.HARD


@dataclass(frozen=True)
class FilteringResult:
    """Captures the outcome of a filtering pass."""

    items: List[WardrobeItem]
    removed: Dict[str, str]
    debug: Dict[str, object]


def _needs_outerwear(weather: Optional[WeatherSnapshot]) -> bool:
    if weather is None:
        return False
    return weather.temperature < COLD_TEMPERATURE or weather.has_condition("snow") or weather.has_condition("rain")


def occasion_gate(item: WardrobeItem, context: RequestContext) -> bool:
    """Hard occasion rule.

    Outerwear is admitted regardless of its occasion tags when the weather
    calls for a coat (below 10°C, rain or snow).
    """

    occasions = set(item.occasions)
    if context.occasion in occasions:
        return True
    if occasions & VERSATILE_OCCASIONS:
        return True
    if context.occasion == "casual" and "everyday" in occasions:
        return True
    return item.category_enum is Category.OUTERWEAR and _needs_outerwear(context.weather)


def soft_occasion_gate(item: WardrobeItem, context: RequestContext) -> bool:
    if occasion_gate(item, context):
        return True
    return occasion_fit(item, context.occasion) >= OCCASION_FIT_THRESHOLD


def season_gate(item: WardrobeItem, context: RequestContext) -> bool:
    if not context.season:
        return True
    seasons = set(item.seasons)
    return context.season in seasons or bool(seasons & ALL_SEASON_SENTINELS)


def weather_rejection(item: WardrobeItem, weather: Optional[WeatherSnapshot]) -> Optional[str]:
    """Return a rejection reason for extreme weather, or ``None``."""

    if weather is None:
        return None
    if weather.temperature > HOT_TEMPERATURE and item.category_enum is Category.OUTERWEAR:
        return "outerwear excluded above 30C"
    if weather.temperature < FREEZING_TEMPERATURE and item.has_tag("shorts"):
        return "shorts excluded below freezing"
    if weather.has_condition("rain") and item.has_tag("delicate"):
        return "delicate item excluded in rain"
    return None


def filter_items(
    items: Sequence[WardrobeItem],
    context: RequestContext,
    mode: FilterMode | str = FilterMode.HARD,
) -> FilteringResult:
    """Return the admissible items in input order along with removal reasons."""

    filter_mode = FilterMode.parse(mode)
    gate = soft_occasion_gate if filter_mode is FilterMode.SOFT else occasion_gate
    removed: Dict[str, str] = {}
    kept: List[WardrobeItem] = []

    for item in items:
        reason = None
        if not gate(item, context):
            reason = f"not suitable for {context.occasion}"
        elif not season_gate(item, context):
            reason = f"not worn in {context.season}"
        else:
            reason = weather_rejection(item, context.weather)
        if reason:
            removed[item.item_id] = reason
        else:
            kept.append(item)

    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "mode": filter_mode.value,
        "occasion": context.occasion,
        "season": context.season,
        "weather": context.weather is not None,
    }
    logger.debug("Filtered %s -> %s items (%s mode)", len(items), len(kept), filter_mode.value)
    return FilteringResult(items=kept, removed=removed, debug=debug)


__all__ = [
    "FilterMode",
    "FilteringResult",
    "filter_items",
    "occasion_gate",
    "soft_occasion_gate",
    "season_gate",
    "weather_rejection",
    "OCCASION_FIT_THRESHOLD",
]
