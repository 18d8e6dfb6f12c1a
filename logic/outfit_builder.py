"""Deterministic outfit assembly helpers with transparent diagnostics."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

from models.color_theory import HARMONIOUS_THRESHOLD, evaluate_pair
from models.context import RequestContext
from models.outfit import CandidateOutfit
from models.taxonomy import ACCESSORY_CATEGORIES, COMPATIBLE_NEXT_CATEGORIES, Category, TimeOfDay, is_neutral
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

COMPATIBILITY_THRESHOLD = 0.4
MAX_TOPS = 8
MAX_BOTTOMS = 6
OUTERWEAR_BELOW = 20.0
LAYERING_BELOW = 15.0
ALTERNATIVES_PER_PIECE = 2
MAX_LAYERING_OPTIONS = 3
MAX_ACCESSORY_PAIRINGS = 4


@dataclass(frozen=True)
class GroupingResult:
    groups: Dict[Category, List[WardrobeItem]]
    skipped: Dict[str, str]


@dataclass(frozen=True)
class CombinationResult:
    outfits: List[CandidateOutfit]
    diagnostics: Dict[str, object]


def group_by_category(items: Sequence[WardrobeItem]) -> GroupingResult:
    """Bucket items by the closed category set, skipping malformed entries."""

    groups: Dict[Category, List[WardrobeItem]] = {category: [] for category in Category}
    skipped: Dict[str, str] = {}
    for item in items:
        category = item.category_enum
        if category is None:
            skipped[item.item_id] = f"unknown category '{item.category}'"
            logger.warning("Skipping item with unknown category '%s'", item.category)
            continue
        if not item.colors:
            skipped[item.item_id] = "no colors"
            logger.warning("Skipping item without colors")
            continue
        groups[category].append(item)
    return GroupingResult(groups=groups, skipped=skipped)


def _threshold(context: RequestContext) -> float:
    return HARMONIOUS_THRESHOLD if context.color_theory_mode else COMPATIBILITY_THRESHOLD


def _colors(items: Sequence[WardrobeItem]) -> List[str]:
    return [color for item in items for color in item.colors]


def best_match(
    base: Sequence[WardrobeItem], candidates: Sequence[WardrobeItem], threshold: float
) -> Optional[WardrobeItem]:
    """Return the candidate whose colors best fit ``base`` above ``threshold``.

    Ties keep the earliest candidate.
    """

    base_colors = _colors(base)
    taken = {item.item_id for item in base}
    best: Optional[WardrobeItem] = None
    best_confidence = threshold
    for candidate in candidates:
        if candidate.item_id in taken:
            continue
        confidence = evaluate_pair(base_colors, candidate.colors).confidence
        if confidence > best_confidence:
            best, best_confidence = candidate, confidence
    return best


def _accessory_pool(groups: Dict[Category, List[WardrobeItem]]) -> List[WardrobeItem]:
    return [item for category in ACCESSORY_CATEGORIES for item in groups.get(category, [])]


def _is_layering_piece(item: WardrobeItem) -> bool:
    return item.has_tag("layering") or item.style == "cardigan"


def _wants_layer(context: RequestContext) -> bool:
    if context.time_of_day in (TimeOfDay.EVENING, TimeOfDay.NIGHT):
        return True
    return context.weather is not None and context.weather.temperature < LAYERING_BELOW


def _layering_piece(
    outfit: Sequence[WardrobeItem], outerwear: Sequence[WardrobeItem], context: RequestContext, threshold: float
) -> Optional[WardrobeItem]:
    layer = best_match(outfit, [item for item in outerwear if _is_layering_piece(item)], threshold)
    if layer is None and context.weather is not None and context.weather.temperature < LAYERING_BELOW:
        layer = best_match(outfit, outerwear, threshold)
    return layer


def _dress_outfits(
    groups: Dict[Category, List[WardrobeItem]], context: RequestContext, include_accessories: bool
) -> Iterator[List[WardrobeItem]]:
    threshold = _threshold(context)
    add_outerwear = context.weather is None or context.weather.temperature < OUTERWEAR_BELOW
    for dress in groups[Category.DRESSES]:
        outfit = [dress]
        shoe = best_match(outfit, groups[Category.SHOES], threshold)
        if shoe:
            outfit.append(shoe)
        if add_outerwear:
            outer = best_match(outfit, groups[Category.OUTERWEAR], threshold)
            if outer:
                outfit.append(outer)
        if include_accessories:
            accessory = best_match(outfit, _accessory_pool(groups), threshold)
            if accessory:
                outfit.append(accessory)
        if len(outfit) >= 2:
            yield outfit


def _separates_outfits(
    groups: Dict[Category, List[WardrobeItem]], context: RequestContext, include_accessories: bool
) -> Iterator[List[WardrobeItem]]:
    threshold = _threshold(context)
    # A wardrobe without any shoes can still form top + bottom outfits.
    min_size = 3 if groups[Category.SHOES] else 2
    for top in groups[Category.TOPS][:MAX_TOPS]:
        for bottom in groups[Category.BOTTOMS][:MAX_BOTTOMS]:
            if evaluate_pair(top.colors, bottom.colors).confidence <= threshold:
                continue
            outfit = [top, bottom]
            shoe = best_match(outfit, groups[Category.SHOES], threshold)
            if shoe:
                outfit.append(shoe)
            if _wants_layer(context):
                layer = _layering_piece(outfit, groups[Category.OUTERWEAR], context, threshold)
                if layer:
                    outfit.append(layer)
            if include_accessories:
                accessory = best_match(outfit, _accessory_pool(groups), threshold)
                if accessory:
                    outfit.append(accessory)
            if len(outfit) >= min_size:
                yield outfit


def _is_statement(item: WardrobeItem) -> bool:
    return item.has_tag("statement", "bold")


def _is_neutral_basic(item: WardrobeItem) -> bool:
    if _is_statement(item) or not item.colors:
        return False
    basic = item.has_tag("basic") or item.style == "minimalist"
    return basic and all(is_neutral(color) for color in item.colors)


def _statement_outfits(
    groups: Dict[Category, List[WardrobeItem]], context: RequestContext, include_accessories: bool
) -> Iterator[List[WardrobeItem]]:
    statements = [item for category in Category for item in groups[category] if _is_statement(item)]
    for piece in statements:
        category = piece.category_enum
        search = COMPATIBLE_NEXT_CATEGORIES.get(category, ()) + (category,)
        basic = next(
            (
                item
                for next_category in search
                for item in groups[next_category]
                if item.item_id != piece.item_id and _is_neutral_basic(item)
            ),
            None,
        )
        if basic is None:
            continue
        outfit = [piece, basic]
        if include_accessories:
            minimal = [
                item
                for item in _accessory_pool(groups)
                if item.style == "minimalist" or item.has_tag("minimalist", "simple")
            ]
            accessory = best_match(outfit, minimal, _threshold(context))
            if accessory:
                outfit.append(accessory)
        yield outfit


STRATEGIES = (
    ("dress", _dress_outfits),
    ("separates", _separates_outfits),
    ("statement", _statement_outfits),
)


def generate_combinations(
    items_by_category: Dict[Category, List[WardrobeItem]],
    context: RequestContext,
    include_accessories: bool = True,
    max_combinations: int = 50,
) -> CombinationResult:
    """Concatenate dress, separates and statement candidates up to ``max_combinations``.

    Later strategies are truncated first; candidates repeating an item set
    already produced are dropped.
    """

    groups = {category: list(items_by_category.get(category, [])) for category in Category}
    outfits: List[CandidateOutfit] = []
    seen = set()
    per_strategy: Dict[str, int] = {name: 0 for name, _ in STRATEGIES}
    duplicates = 0

    for name, strategy in STRATEGIES:
        if len(outfits) >= max_combinations:
            break
        for items in strategy(groups, context, include_accessories):
            candidate = CandidateOutfit(items=items, strategy=name)
            if candidate.key in seen:
                duplicates += 1
                continue
            seen.add(candidate.key)
            outfits.append(candidate)
            per_strategy[name] += 1
            if len(outfits) >= max_combinations:
                break

    diagnostics: Dict[str, object] = {
        "generated": len(outfits),
        "per_strategy": per_strategy,
        "duplicates_dropped": duplicates,
        "capped": len(outfits) >= max_combinations,
        "threshold": _threshold(context),
    }
    logger.info("Generated %s candidate outfits %s", len(outfits), per_strategy)
    return CombinationResult(outfits=outfits, diagnostics=diagnostics)


def alternative_items(
    outfit: Sequence[WardrobeItem], admissible: Sequence[WardrobeItem], per_piece: int = ALTERNATIVES_PER_PIECE
) -> List[WardrobeItem]:
    """Same-category swaps for each piece, excluding anything already worn."""

    used = {item.item_id for item in outfit}
    alternatives: List[WardrobeItem] = []
    for piece in outfit:
        swaps = [
            item
            for item in admissible
            if item.item_id not in used and item.category_enum is piece.category_enum
        ][:per_piece]
        for swap in swaps:
            used.add(swap.item_id)
            alternatives.append(swap)
    return alternatives


def layering_options(
    outfit: Sequence[WardrobeItem], admissible: Sequence[WardrobeItem], limit: int = MAX_LAYERING_OPTIONS
) -> List[WardrobeItem]:
    used = {item.item_id for item in outfit}
    return [
        item
        for item in admissible
        if item.item_id not in used and item.category_enum is Category.OUTERWEAR and _is_layering_piece(item)
    ][:limit]


def accessory_pairings(
    outfit: Sequence[WardrobeItem], admissible: Sequence[WardrobeItem], limit: int = MAX_ACCESSORY_PAIRINGS
) -> List[WardrobeItem]:
    used = {item.item_id for item in outfit}
    outfit_colors = _colors(outfit)
    return [
        item
        for item in admissible
        if item.item_id not in used
        and item.category_enum in ACCESSORY_CATEGORIES
        and evaluate_pair(outfit_colors, item.colors).is_harmonious
    ][:limit]


__all__ = [
    "GroupingResult",
    "CombinationResult",
    "group_by_category",
    "best_match",
    "generate_combinations",
    "alternative_items",
    "layering_options",
    "accessory_pairings",
    "COMPATIBILITY_THRESHOLD",
]
