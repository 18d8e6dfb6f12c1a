"""Evaluation scenarios exercising occasion, weather and wardrobe-size edge cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class EvaluationScenario:
    name: str
    description: str
    context: Dict[str, object]
    wardrobe_items: List[Dict[str, object]]
    expectations: Dict[str, object]
    options: Dict[str, object] = field(default_factory=dict)


def _base_wardrobe() -> List[Dict[str, object]]:
    return [
        {
            "item_id": "white-tshirt",
            "category": "tops",
            "colors": ["white"],
            "style": "casual",
            "occasions": ["casual", "everyday"],
            "seasons": ["spring", "summer"],
        },
        {
            "item_id": "blue-jeans",
            "category": "bottoms",
            "colors": ["blue"],
            "style": "casual",
            "occasions": ["casual", "everyday"],
            "seasons": ["all"],
        },
    ]


def _winter_coat() -> Dict[str, object]:
    return {
        "item_id": "winter-coat",
        "category": "outerwear",
        "colors": ["black"],
        "style": "casual",
        "occasions": ["outdoor"],
        "seasons": ["winter"],
    }


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="casual_basics",
        description="Two neutral-friendly basics form at least one casual outfit.",
        context={"occasion": "casual"},
        wardrobe_items=_base_wardrobe(),
        expectations={"min_outfits": 1, "contains_items": ["white-tshirt", "blue-jeans"], "min_color_harmony": 0.4},
    ),
    EvaluationScenario(
        name="snowy_layering",
        description="Cold snowy weather admits the winter coat despite its occasion tags.",
        context={"occasion": "casual", "weather": {"temperature": 5, "condition": "snow"}},
        wardrobe_items=_base_wardrobe() + [_winter_coat()],
        expectations={"min_outfits": 1, "requires_outerwear": True, "weather_appropriate": True},
    ),
    EvaluationScenario(
        name="hot_day",
        description="Outerwear never appears in recommendations on a 30C day.",
        context={"occasion": "casual", "weather": {"temperature": 30, "condition": "clear"}},
        wardrobe_items=_base_wardrobe() + [_winter_coat()],
        expectations={"min_outfits": 1, "forbids_outerwear": True},
    ),
    EvaluationScenario(
        name="insufficient_wardrobe",
        description="Fewer than two admissible items yields an empty result without errors.",
        context={"occasion": "casual"},
        wardrobe_items=[
            _base_wardrobe()[0],
            {
                "item_id": "silk-gown",
                "category": "dresses",
                "colors": ["emerald"],
                "style": "formal",
                "occasions": ["formal"],
                "seasons": ["all"],
            },
        ],
        expectations={"max_outfits": 0},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
