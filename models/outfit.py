"""Outfit, analysis and recommendation schemas."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional

from models.wardrobe_item import WardrobeItem


@dataclass(frozen=True)
class CandidateOutfit:
    """Unscored grouping of distinct wardrobe items produced by the generator."""

    items: List[WardrobeItem]
    strategy: str = "separates"

    def __post_init__(self) -> None:
        ids = [item.item_id for item in self.items]
        if not ids:
            raise ValueError("CandidateOutfit requires at least one item")
        if len(ids) != len(set(ids)):
            raise ValueError(f"CandidateOutfit contains duplicate items: {ids}")

    @property
    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items]

    @property
    def key(self) -> FrozenSet[str]:
        return frozenset(self.item_ids)

    @property
    def outfit_id(self) -> str:
        return "-".join(sorted(self.item_ids))

    @property
    def colors(self) -> List[str]:
        return [color for item in self.items for color in item.colors]


@dataclass
class OutfitAnalysis:
    color_harmony: float
    color_harmony_type: str
    style_coherence: float
    occasion_fit: float
    time_of_day_fit: float
    weather_appropriate: bool
    seasonal_appropriate: bool
    personal_alignment: Optional[float]
    versatility: float
    trend_relevance: float
    overall_score: float
    weights: Dict[str, float] = field(default_factory=dict)
    reasoning: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    color_story: str = ""
    style_narrative: str = ""


@dataclass
class ScoredOutfit:
    outfit: CandidateOutfit
    analysis: OutfitAnalysis


@dataclass
class Recommendation:
    outfit_id: str
    items: List[WardrobeItem]
    analysis: OutfitAnalysis
    description: str
    reasoning: List[str]
    overall_style: str
    color_palette: List[str] = field(default_factory=list)
    inspiration_tags: List[str] = field(default_factory=list)
    alternative_items: List[WardrobeItem] = field(default_factory=list)
    layering_options: List[WardrobeItem] = field(default_factory=list)
    accessory_pairings: List[WardrobeItem] = field(default_factory=list)

    @property
    def confidence(self) -> float:
        return self.analysis.overall_score
