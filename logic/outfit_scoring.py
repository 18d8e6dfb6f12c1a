"""Deterministic multi-criteria scoring for candidate outfits.

Canonical weight table (renormalised over the dimensions that apply to the
request, so the applied weights always sum to 1):

==================  ======  ========================================================
dimension           weight  applies
==================  ======  ========================================================
color_harmony       0.20    always
occasion_fit        0.25    always
time_of_day_fit     0.15    always
weather             0.15    only when the request carries weather
style_coherence     0.20    always
personal_alignment  0.25    only when the profile has a style, favorites or palette
versatility         0.10    always
trend_relevance     0.10    always
seasonal            0.10    only when seasonal preference is switched on
==================  ======  ========================================================

``occasion_fit`` keeps its weight for occasions missing from the profile
table: items tagged with the occasion score 1.0 and every other item scores a
flat 0.5.

Reasoning lists color, occasion, style and weather notes in that order, then a
seasonal note when seasonal preference is on, capped at three entries.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence

from models.color_theory import HarmonyResult, evaluate_colors, evaluate_pair
from models.context import RequestContext, WeatherSnapshot
from models.occasion_profiles import get_occasion_profile
from models.outfit import CandidateOutfit, OutfitAnalysis
from models.style_profile import StyleProfile
from models.taxonomy import ALL_SEASON_SENTINELS, Category, TimeOfDay, color_matches
from models.wardrobe_item import WardrobeItem

WEIGHTS: Dict[str, float] = {
    "color_harmony": 0.20,
    "occasion_fit": 0.25,
    "time_of_day_fit": 0.15,
    "weather": 0.15,
    "style_coherence": 0.20,
    "personal_alignment": 0.25,
    "versatility": 0.10,
    "trend_relevance": 0.10,
    "seasonal": 0.10,
}

COMPATIBLE_STYLE_COMBOS = [
    {"casual", "smart-casual"},
    {"business", "formal"},
    {"bohemian", "casual"},
    {"minimalist", "modern"},
    {"vintage", "classic"},
]

WEATHER_FIT_THRESHOLD = 0.3
MAX_REASONS = 3


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _style_matches(style: str, candidate: str) -> bool:
    return bool(style) and color_matches(style, candidate)


def color_harmony(items: Sequence[WardrobeItem]) -> HarmonyResult:
    return evaluate_colors(color for item in items for color in item.colors)


def style_coherence(items: Sequence[WardrobeItem]) -> float:
    unique_styles = {item.style for item in items}
    if len(unique_styles) <= 1:
        return 1.0
    if len(unique_styles) == 2 and any(unique_styles <= combo for combo in COMPATIBLE_STYLE_COMBOS):
        return 0.8
    return max(0.3, 1 - 0.2 * (len(unique_styles) - 1))


def occasion_fit(item: WardrobeItem, occasion: str) -> float:
    """Score one item against an occasion.

    Direct occasion tag 1.0, preferred style 0.8, preferred color 0.6,
    nothing in common 0.2. Occasions without a profile score 0.5 unless
    tagged directly.
    """

    if occasion in item.occasions:
        return 1.0
    profile = get_occasion_profile(occasion)
    if profile is None:
        return 0.5
    if any(_style_matches(item.style, style) for style in profile.preferred_styles):
        return 0.8
    if any(color_matches(color, preferred) for color in item.colors for preferred in profile.preferred_colors):
        return 0.6
    return 0.2


def outfit_occasion_fit(items: Sequence[WardrobeItem], occasion: str) -> float:
    return _mean([occasion_fit(item, occasion) for item in items])


def time_of_day_fit(item: WardrobeItem, time_of_day: TimeOfDay) -> float:
    if time_of_day in (TimeOfDay.EVENING, TimeOfDay.NIGHT):
        if item.style in {"formal", "elegant"}:
            return 1.0
        if item.style == "sporty" or item.has_tag("casual-only"):
            return 0.2
    if time_of_day is TimeOfDay.MORNING:
        if item.style in {"casual", "business"}:
            return 0.9
        if item.style == "formal":
            return 0.4
    return 0.7


def outfit_time_of_day_fit(items: Sequence[WardrobeItem], time_of_day: TimeOfDay) -> float:
    return _mean([time_of_day_fit(item, time_of_day) for item in items])


def weather_fit(item: WardrobeItem, weather: WeatherSnapshot) -> float:
    is_outerwear = item.category_enum is Category.OUTERWEAR
    score = 0.8
    if weather.temperature < 10:
        if is_outerwear or item.has_tag("warm", "insulated", "wool", "fleece"):
            score = 1.0
        elif item.has_tag("light", "summer", "shorts", "tank"):
            score = 0.2
    elif weather.temperature > 25:
        if is_outerwear:
            score = 0.1
        elif item.has_tag("light", "breathable", "linen"):
            score = 1.0
        elif item.has_tag("heavy", "wool"):
            score = 0.2

    if weather.has_condition("rain"):
        if item.has_tag("waterproof", "water-resistant"):
            score = 1.0
        elif item.has_tag("delicate", "suede"):
            score = min(score, 0.3)
    if weather.has_condition("snow"):
        if is_outerwear or item.has_tag("warm", "insulated", "boots"):
            score = 1.0
        elif item.has_tag("open-toe"):
            score = min(score, 0.2)
    return score


def weather_appropriate(items: Sequence[WardrobeItem], weather: Optional[WeatherSnapshot]) -> bool:
    if weather is None:
        return True
    return all(weather_fit(item, weather) > WEATHER_FIT_THRESHOLD for item in items)


def seasonal_appropriate(items: Sequence[WardrobeItem], season: str) -> bool:
    return any(season in item.seasons or set(item.seasons) & ALL_SEASON_SENTINELS for item in items)


def has_personal_terms(profile: StyleProfile) -> bool:
    return bool(profile.preferred_style or profile.favorite_colors or profile.color_palette_colors)


def personal_alignment(items: Sequence[WardrobeItem], profile: StyleProfile) -> Optional[float]:
    """Blend style, favorite-color and palette matches, renormalised over present terms.

    Returns ``None`` when the profile has none of the three terms.
    """

    if not has_personal_terms(profile):
        return None
    if not items:
        return 0.0
    count = len(items)
    score = 0.0
    factors = 0.0

    if profile.preferred_style:
        matches = sum(1 for item in items if item.style == profile.preferred_style)
        score += (matches / count) * 0.4
        factors += 0.4

    if profile.favorite_colors:
        matches = sum(
            1
            for item in items
            if any(color_matches(color, favorite) for color in item.colors for favorite in profile.favorite_colors)
        )
        score += (matches / count) * 0.3
        factors += 0.3

    if profile.color_palette_colors:
        matches = sum(
            1
            for item in items
            if any(
                evaluate_pair([color], [palette]).is_harmonious
                for color in item.colors
                for palette in profile.color_palette_colors
            )
        )
        score += (matches / count) * 0.3
        factors += 0.3

    return _clamp(score / factors)


def versatility(items: Sequence[WardrobeItem]) -> float:
    if not items:
        return 0.0
    versatile = [
        item
        for item in items
        if "versatile" in item.occasions
        or item.has_tag("versatile")
        or item.style == "versatile"
        or len(item.occasions) > 2
        or len(item.seasons) > 2
    ]
    return len(versatile) / len(items)


def trend_relevance(items: Sequence[WardrobeItem]) -> float:
    if not items:
        return 0.0
    trendy = [item for item in items if item.style == "contemporary" or item.has_tag("trending", "modern")]
    return len(trendy) / len(items)


def applicable_weights(context: RequestContext, profile: Optional[StyleProfile] = None) -> Dict[str, float]:
    """Return the weight table restricted to this request and renormalised to 1."""

    weights = dict(WEIGHTS)
    if context.weather is None:
        weights.pop("weather")
    if not context.seasonal_preference:
        weights.pop("seasonal")
    if profile is not None and not has_personal_terms(profile):
        weights.pop("personal_alignment")
    total = sum(weights.values())
    return {name: weight / total for name, weight in weights.items()}


def combine_scores(dimensions: Dict[str, float], weights: Dict[str, float]) -> float:
    return _clamp(sum(dimensions[name] * weight for name, weight in weights.items()))


def overall_style(items: Sequence[WardrobeItem]) -> str:
    styles = [item.style for item in items if item.style]
    if not styles:
        return "casual"
    return Counter(styles).most_common(1)[0][0]


def color_story(harmony: HarmonyResult) -> str:
    if harmony.confidence > 0.8:
        return f"Exceptional {harmony.harmony_type} color harmony creates visual sophistication"
    if harmony.confidence > 0.6:
        return f"Beautiful {harmony.harmony_type} color coordination enhances the overall look"
    if harmony.confidence > 0.4:
        return f"Subtle {harmony.harmony_type} color relationship provides gentle visual interest"
    return f"{harmony.harmony_type.capitalize()} color scheme"


def generate_reasoning(analysis: OutfitAnalysis, context: RequestContext) -> List[str]:
    """Pick up to three short reasons in color, occasion, style, weather order."""

    reasons: List[str] = []
    if analysis.color_harmony > 0.8:
        reasons.append(f"Exceptional color coordination using {analysis.color_harmony_type} harmony")
    elif analysis.color_harmony < 0.4:
        reasons.append("Consider adjusting color combinations for better visual harmony")

    if analysis.occasion_fit > 0.8:
        reasons.append(f"Perfect formality level for {context.occasion} occasions")
    elif analysis.occasion_fit < 0.5:
        reasons.append(f"May be too formal or too casual for {context.occasion} events")

    if analysis.style_coherence > 0.8:
        reasons.append("Excellent style consistency across all pieces")
    elif analysis.style_coherence > 0.6:
        reasons.append("Well-matched style elements")

    if context.weather is not None:
        if analysis.weather_appropriate:
            reasons.append(
                f"Suited to {context.weather.condition_key} weather at {context.weather.temperature:g}°C"
            )
        else:
            reasons.append("Consider the weather conditions before wearing this outfit")

    if context.seasonal_preference and analysis.seasonal_appropriate:
        reasons.append(f"Seasonally appropriate pieces for {context.resolved_season()}")

    return reasons[:MAX_REASONS]


def improvement_recommendations(analysis: OutfitAnalysis) -> List[str]:
    suggestions: List[str] = []
    if analysis.color_harmony < 0.6:
        suggestions.append("Try adding a neutral accessory to balance the color palette")
    if analysis.style_coherence < 0.6:
        suggestions.append("Consider swapping one piece for better style consistency")
    if analysis.versatility < 0.5:
        suggestions.append("Add versatile accessories to increase outfit adaptability")
    return suggestions


def style_narrative(items: Sequence[WardrobeItem], analysis: OutfitAnalysis, context: RequestContext) -> str:
    narrative = f"A {overall_style(items)} ensemble"
    if analysis.color_harmony > 0.7:
        narrative += f" featuring {analysis.color_harmony_type} color coordination"
    narrative += f" designed for {context.occasion} occasions"
    if context.time_of_day in (TimeOfDay.EVENING, TimeOfDay.NIGHT):
        narrative += ", perfect for evening sophistication"
    elif context.time_of_day is TimeOfDay.MORNING:
        narrative += ", ideal for starting the day with confidence"
    if context.seasonal_preference and analysis.seasonal_appropriate:
        narrative += ". The pieces suit the season"
    return narrative + "."


def describe_outfit(items: Sequence[WardrobeItem], context: RequestContext) -> str:
    categories = {item.category_enum for item in items}
    style = overall_style(items)
    if Category.DRESSES in categories:
        description = f"Elegant {style} dress ensemble"
    elif Category.TOPS in categories and Category.BOTTOMS in categories:
        description = f"Stylish {style} combination"
    else:
        description = f"Coordinated {style} outfit"
    description += f" perfect for {context.occasion}"
    if context.weather is not None:
        if context.weather.temperature < 10:
            description += " with cozy layers"
        elif context.weather.temperature > 25:
            description += " in breathable fabrics"
    return description


def score_outfit(outfit: CandidateOutfit, profile: StyleProfile, context: RequestContext) -> OutfitAnalysis:
    """Compute every dimension score and the weighted overall confidence."""

    items = outfit.items
    harmony = color_harmony(items)
    season = context.resolved_season()
    is_weather_ok = weather_appropriate(items, context.weather)
    is_seasonal = seasonal_appropriate(items, season)

    dimensions = {
        "color_harmony": harmony.confidence,
        "occasion_fit": outfit_occasion_fit(items, context.occasion),
        "time_of_day_fit": outfit_time_of_day_fit(items, context.time_of_day),
        "weather": 1.0 if is_weather_ok else 0.0,
        "style_coherence": style_coherence(items),
        "personal_alignment": personal_alignment(items, profile),
        "versatility": versatility(items),
        "trend_relevance": trend_relevance(items),
        "seasonal": 1.0 if is_seasonal else 0.0,
    }
    weights = applicable_weights(context, profile)

    analysis = OutfitAnalysis(
        color_harmony=dimensions["color_harmony"],
        color_harmony_type=harmony.harmony_type,
        style_coherence=dimensions["style_coherence"],
        occasion_fit=dimensions["occasion_fit"],
        time_of_day_fit=dimensions["time_of_day_fit"],
        weather_appropriate=is_weather_ok,
        seasonal_appropriate=is_seasonal,
        personal_alignment=dimensions["personal_alignment"],
        versatility=dimensions["versatility"],
        trend_relevance=dimensions["trend_relevance"],
        overall_score=combine_scores(dimensions, weights),
        weights=weights,
        color_story=color_story(harmony),
    )
    analysis.reasoning = generate_reasoning(analysis, context)
    analysis.recommendations = improvement_recommendations(analysis)
    analysis.style_narrative = style_narrative(items, analysis, context)
    return analysis


__all__ = [
    "WEIGHTS",
    "color_harmony",
    "style_coherence",
    "occasion_fit",
    "outfit_occasion_fit",
    "time_of_day_fit",
    "outfit_time_of_day_fit",
    "weather_fit",
    "weather_appropriate",
    "seasonal_appropriate",
    "has_personal_terms",
    "personal_alignment",
    "versatility",
    "trend_relevance",
    "applicable_weights",
    "combine_scores",
    "overall_style",
    "color_story",
    "generate_reasoning",
    "improvement_recommendations",
    "style_narrative",
    "describe_outfit",
    "score_outfit",
]
