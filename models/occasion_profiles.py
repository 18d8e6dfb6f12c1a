"""Named occasion profiles with formality, color and style guidance."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from models.taxonomy import normalize_color_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OccasionProfile:
    """Represents styling expectations for a given occasion."""

    name: str
    formality: int
    preferred_colors: List[str]
    avoided_colors: List[str]
    preferred_styles: List[str]
    time_preference: List[str]
    accessory_level: str


_OCCASION_PROFILES: Dict[str, OccasionProfile] = {
    "work": OccasionProfile(
        name="work",
        formality=4,
        preferred_colors=["navy", "black", "white", "gray", "burgundy"],
        avoided_colors=["neon", "bright pink", "lime"],
        preferred_styles=["business", "classic", "minimalist"],
        time_preference=["morning", "afternoon"],
        accessory_level="minimal",
    ),
    "casual": OccasionProfile(
        name="casual",
        formality=2,
        preferred_colors=["blue", "white", "gray", "denim"],
        avoided_colors=[],
        preferred_styles=["casual", "relaxed", "contemporary"],
        time_preference=["morning", "afternoon", "evening"],
        accessory_level="moderate",
    ),
    "formal": OccasionProfile(
        name="formal",
        formality=5,
        preferred_colors=["black", "navy", "white", "emerald", "burgundy"],
        avoided_colors=["neon", "orange"],
        preferred_styles=["formal", "elegant", "sophisticated"],
        time_preference=["evening", "night"],
        accessory_level="elevated",
    ),
    "date": OccasionProfile(
        name="date",
        formality=3,
        preferred_colors=["red", "burgundy", "pink", "black", "blush"],
        avoided_colors=["neon"],
        preferred_styles=["romantic", "chic", "feminine", "sophisticated"],
        time_preference=["evening", "night"],
        accessory_level="thoughtful",
    ),
    "creative": OccasionProfile(
        name="creative",
        formality=2,
        preferred_colors=["yellow", "orange", "teal", "purple", "green"],
        avoided_colors=[],
        preferred_styles=["artistic", "bohemian", "eclectic", "avant-garde"],
        time_preference=["morning", "afternoon", "evening"],
        accessory_level="expressive",
    ),
    "social": OccasionProfile(
        name="social",
        formality=3,
        preferred_colors=["blue", "green", "coral", "white", "pink"],
        avoided_colors=[],
        preferred_styles=["social", "approachable", "smart-casual", "casual"],
        time_preference=["afternoon", "evening"],
        accessory_level="social",
    ),
}

OCCASIONS = sorted(_OCCASION_PROFILES)


def get_occasion_profile(occasion: str | None) -> Optional[OccasionProfile]:
    """Return the :class:`OccasionProfile` for ``occasion``.

    Unknown occasions have no profile; callers fall back to a neutral score.
    """

    normalized = (occasion or "").strip().lower()
    profile = _OCCASION_PROFILES.get(normalized)
    if profile is None:
        logger.debug("No occasion profile for '%s'", occasion)
        return None
    return OccasionProfile(
        name=profile.name,
        formality=profile.formality,
        preferred_colors=[normalize_color_name(color) for color in profile.preferred_colors],
        avoided_colors=list(profile.avoided_colors),
        preferred_styles=list(profile.preferred_styles),
        time_preference=list(profile.time_preference),
        accessory_level=profile.accessory_level,
    )


__all__ = ["OccasionProfile", "get_occasion_profile", "OCCASIONS"]
