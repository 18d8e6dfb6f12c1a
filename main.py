"""Simple entrypoint to run the outfit recommendation engine locally."""

import json

from models.style_profile import StyleProfile
from stylist_app.config import EngineConfig
from stylist_app.engine import RecommendationEngine
from stylist_app.logging_config import configure_logging

DEMO_WARDROBE = [
    {"item_id": "white-shirt", "category": "tops", "colors": ["white"], "style": "business",
     "occasions": ["work", "versatile"], "seasons": ["all"], "tags": ["basic"]},
    {"item_id": "striped-tee", "category": "tops", "colors": ["navy", "white"], "style": "casual",
     "occasions": ["casual", "everyday"], "seasons": ["spring", "summer"]},
    {"item_id": "navy-trousers", "category": "bottoms", "colors": ["navy"], "style": "business",
     "occasions": ["work"], "seasons": ["all"]},
    {"item_id": "dark-jeans", "category": "jeans", "colors": ["blue"], "style": "casual",
     "occasions": ["casual", "everyday"], "seasons": ["all"]},
    {"item_id": "red-wrap-dress", "category": "dress", "colors": ["red"], "style": "elegant",
     "occasions": ["date", "work"], "seasons": ["spring", "summer", "fall"], "tags": ["statement"]},
    {"item_id": "black-loafers", "category": "shoes", "colors": ["black"], "style": "classic",
     "occasions": ["work", "casual", "date"], "seasons": ["all"]},
    {"item_id": "camel-cardigan", "category": "outerwear", "colors": ["camel"], "style": "cardigan",
     "occasions": ["work", "casual"], "seasons": ["fall", "winter"], "tags": ["layering", "warm"]},
    {"item_id": "gold-hoops", "category": "jewelry", "colors": ["gold"], "style": "minimalist",
     "occasions": ["versatile"], "seasons": ["all"], "tags": ["simple"]},
]


def main() -> None:
    config = EngineConfig.from_env()
    configure_logging(config.log_level)
    engine = RecommendationEngine(config=config)
    profile = StyleProfile(preferred_style="business", favorite_colors=["navy"], color_palette_colors=["white"])
    response = engine.recommend_payload(
        DEMO_WARDROBE,
        profile,
        {"occasion": "work", "time_of_day": "morning", "weather": {"temperature": 12, "condition": "cloudy"}},
        {"max_recommendations": 3},
    )
    print(json.dumps(response, indent=2, default=str))


if __name__ == "__main__":
    main()
