"""Rule-table color harmony evaluation for outfit selection.

Harmony type priority when several rules fire: ``neutral`` (short-circuits)
then ``complementary`` then ``analogous``; within one rule family the first
matching row of the fixed table names the result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from models.taxonomy import color_matches, is_neutral, normalize_color_name

logger = logging.getLogger(__name__)

NEUTRAL_BASELINE = 0.8
COMPLEMENTARY_INCREMENT = 0.7
ANALOGOUS_INCREMENT = 0.6
BUSY_PALETTE_PENALTY = 0.2
BUSY_PALETTE_SIZE = 4
HARMONIOUS_THRESHOLD = 0.6

_COMPLEMENTARY_PAIRS: List[Tuple[str, str]] = [
    ("red", "green"),
    ("blue", "orange"),
    ("yellow", "purple"),
    ("pink", "mint"),
    ("coral", "teal"),
    ("burgundy", "forest"),
    ("lavender", "sage"),
]

_ANALOGOUS_GROUPS: List[Sequence[str]] = [
    ("red", "orange", "pink"),
    ("blue", "purple", "teal"),
    ("green", "yellow", "lime"),
    ("brown", "tan", "beige"),
    ("navy", "blue", "teal"),
]


@dataclass(frozen=True)
class HarmonyResult:
    """Represents the outcome of a harmony evaluation."""

    is_harmonious: bool
    harmony_type: str
    confidence: float


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _distinct_colors(colors: Iterable[str]) -> List[str]:
    distinct: List[str] = []
    for color in colors:
        if color is None:
            continue
        key = normalize_color_name(str(color))
        if key and key not in distinct:
            distinct.append(key)
    return distinct


def _present(colors: Sequence[str], key: str) -> bool:
    return any(color_matches(color, key) for color in colors)


def monochrome(colors: Iterable[str]) -> bool:
    """Return True when all provided colors collapse to a single tone."""

    return len(_distinct_colors(colors)) <= 1


def complementary(color1: str, color2: str) -> bool:
    """Return True when the two colors form a complementary pair."""

    c1, c2 = normalize_color_name(color1), normalize_color_name(color2)
    if c1 == c2:
        return False
    for first, second in _COMPLEMENTARY_PAIRS:
        if color_matches(c1, first) and color_matches(c2, second):
            return True
        if color_matches(c1, second) and color_matches(c2, first):
            return True
    return False


def analogous_group(colors: Iterable[str]) -> Optional[Sequence[str]]:
    """Return the first analogous family with at least two of the colors present."""

    distinct = _distinct_colors(colors)
    for group in _ANALOGOUS_GROUPS:
        matching = [color for color in distinct if any(color_matches(color, key) for key in group)]
        if len(matching) >= 2:
            return group
    return None


def evaluate_colors(colors: Iterable[str]) -> HarmonyResult:
    """Classify a merged color set and score its harmony in ``[0, 1]``."""

    distinct = _distinct_colors(colors)
    if len(distinct) < 2:
        return HarmonyResult(is_harmonious=True, harmony_type="monochrome", confidence=1.0)

    neutral_count = sum(1 for color in distinct if is_neutral(color))
    if neutral_count >= len(distinct) - 1:
        logger.debug("neutral-dominant palette %s", distinct)
        return HarmonyResult(
            is_harmonious=NEUTRAL_BASELINE > HARMONIOUS_THRESHOLD,
            harmony_type="neutral",
            confidence=NEUTRAL_BASELINE,
        )

    accumulator = 0.0
    comparisons = 0
    harmony_type = "none"

    for first, second in _COMPLEMENTARY_PAIRS:
        if _present(distinct, first) and _present(distinct, second):
            accumulator += COMPLEMENTARY_INCREMENT
            comparisons += 1
            if harmony_type == "none":
                harmony_type = "complementary"

    for group in _ANALOGOUS_GROUPS:
        matching = [color for color in distinct if any(color_matches(color, key) for key in group)]
        if len(matching) >= 2:
            accumulator += ANALOGOUS_INCREMENT
            comparisons += 1
            if harmony_type == "none":
                harmony_type = "analogous"

    if len(distinct) > BUSY_PALETTE_SIZE:
        accumulator -= BUSY_PALETTE_PENALTY

    confidence = _clamp(accumulator / max(1, comparisons))
    logger.debug("harmony %s for %s -> %.2f", harmony_type, distinct, confidence)
    return HarmonyResult(
        is_harmonious=confidence > HARMONIOUS_THRESHOLD,
        harmony_type=harmony_type,
        confidence=confidence,
    )


def evaluate_pair(colors_a: Iterable[str], colors_b: Iterable[str]) -> HarmonyResult:
    """Evaluate two color sets (e.g. two garments) as one combined palette."""

    return evaluate_colors(list(colors_a) + list(colors_b))


__all__ = [
    "HarmonyResult",
    "monochrome",
    "complementary",
    "analogous_group",
    "evaluate_colors",
    "evaluate_pair",
    "NEUTRAL_BASELINE",
    "HARMONIOUS_THRESHOLD",
]
