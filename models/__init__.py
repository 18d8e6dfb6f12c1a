"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.context import RequestContext, WeatherSnapshot
from models.outfit import CandidateOutfit, OutfitAnalysis, Recommendation, ScoredOutfit
from models.style_profile import StyleProfile
from models.wardrobe_item import WardrobeItem, from_raw_metadata

__all__ = [
    "WardrobeItem",
    "from_raw_metadata",
    "StyleProfile",
    "RequestContext",
    "WeatherSnapshot",
    "CandidateOutfit",
    "OutfitAnalysis",
    "ScoredOutfit",
    "Recommendation",
]
