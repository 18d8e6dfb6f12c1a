"""End-to-end tests for the recommendation engine facade."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.contextual_filtering import FilterMode
from memory.preference_store import JSONPreferenceStore
from models.context import RequestContext, WeatherSnapshot
from models.style_profile import StyleProfile
from models.taxonomy import Category
from stylist_app.config import EngineConfig
from stylist_app.engine import RecommendationEngine, recommendation_to_dict


def _basics():
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


def _coat():
    return {
        "item_id": "winter-coat",
        "category": "outerwear",
        "colors": ["black"],
        "style": "casual",
        "occasions": ["outdoor"],
        "seasons": ["winter"],
    }


def _capsule():
    return _basics() + [
        {"item_id": "striped-tee", "category": "tops", "colors": ["navy", "white"], "style": "casual",
         "occasions": ["casual"], "seasons": ["all"]},
        {"item_id": "black-tee", "category": "tops", "colors": ["black"], "style": "casual",
         "occasions": ["casual"], "seasons": ["all"], "tags": ["versatile"]},
        {"item_id": "khaki-chinos", "category": "bottoms", "colors": ["khaki"], "style": "smart-casual",
         "occasions": ["casual", "work"], "seasons": ["all"]},
        {"item_id": "white-sneakers", "category": "shoes", "colors": ["white"], "style": "casual",
         "occasions": ["casual"], "seasons": ["all"]},
        {"item_id": "gray-cardigan", "category": "outerwear", "colors": ["gray"], "style": "cardigan",
         "occasions": ["casual"], "seasons": ["fall", "winter"], "tags": ["layering"]},
        {"item_id": "brown-belt", "category": "accessories", "colors": ["brown"], "style": "classic",
         "occasions": ["versatile"], "seasons": ["all"]},
    ]


@pytest.fixture
def engine():
    return RecommendationEngine(config=EngineConfig())


def _has_outerwear(recommendation):
    return any(item.category_enum is Category.OUTERWEAR for item in recommendation.items)


def test_basic_casual_wardrobe_yields_a_recommendation(engine):
    recommendations = engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"})
    assert len(recommendations) >= 1
    first = recommendations[0]
    assert {item.item_id for item in first.items} == {"white-tshirt", "blue-jeans"}
    assert first.analysis.color_harmony >= 0.4
    assert first.description == "Stylish casual combination perfect for casual"
    assert first.overall_style == "casual"
    assert first.color_palette == ["white", "blue"]
    assert "minimalist palette" in first.inspiration_tags
    assert 0.0 <= first.confidence <= 1.0


def test_snow_brings_the_winter_coat(engine):
    context = RequestContext(occasion="casual", weather=WeatherSnapshot(temperature=5, condition="snow"))
    recommendations = engine.recommend(_basics() + [_coat()], StyleProfile(), context)
    with_coat = [rec for rec in recommendations if _has_outerwear(rec)]
    assert with_coat
    assert all(rec.analysis.weather_appropriate for rec in with_coat)


def test_hot_day_never_recommends_outerwear(engine):
    context = {"occasion": "casual", "weather": {"temperature": 30, "condition": "clear"}}
    recommendations = engine.recommend(_basics() + [_coat()], StyleProfile(), context)
    assert recommendations
    assert not any(_has_outerwear(rec) for rec in recommendations)


def test_insufficient_wardrobe_returns_empty_list(engine, caplog):
    caplog.set_level(logging.INFO)
    recommendations = engine.recommend(_basics()[:1], StyleProfile(), {"occasion": "casual"})
    assert recommendations == []
    assert "insufficient_wardrobe" in [getattr(record, "event", None) for record in caplog.records]


def test_no_viable_combinations_returns_empty_list(engine):
    items = [
        {"item_id": "red-top", "category": "tops", "colors": ["red"], "occasions": ["casual"]},
        {"item_id": "blue-skirt", "category": "bottoms", "colors": ["blue"], "occasions": ["casual"]},
    ]
    assert engine.recommend(items, StyleProfile(), {"occasion": "casual"}) == []


def test_malformed_items_are_skipped(engine):
    items = _basics() + [
        {"category": "tops", "colors": ["red"]},
        {"item_id": "gizmo", "category": "gadgets", "colors": ["red"], "occasions": ["casual"]},
        {"item_id": "ghost", "category": "tops", "colors": [], "occasions": ["casual"]},
    ]
    recommendations = engine.recommend(items, StyleProfile(), {"occasion": "casual"})
    assert len(recommendations) == 1


def test_selection_respects_max_recommendations_and_unique_item_sets(engine):
    recommendations = engine.recommend(
        _capsule(), StyleProfile(preferred_style="casual"), {"occasion": "casual"}, {"max_recommendations": 3, "diversity_factor": 0.0}
    )
    assert 1 <= len(recommendations) <= 3
    keys = [frozenset(item.item_id for item in rec.items) for rec in recommendations]
    assert len(keys) == len(set(keys))
    scores = [rec.confidence for rec in recommendations]
    assert scores == sorted(scores, reverse=True)


def test_recommendations_carry_alternatives(engine):
    recommendations = engine.recommend(_capsule(), StyleProfile(), {"occasion": "casual"}, {"diversity_factor": 0.0})
    first = recommendations[0]
    outfit_ids = {item.item_id for item in first.items}
    for extra in first.alternative_items + first.layering_options + first.accessory_pairings:
        assert extra.item_id not in outfit_ids
    assert len(first.layering_options) <= 3
    assert len(first.accessory_pairings) <= 4


def test_repeated_requests_hit_the_cache(engine):
    first = engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"})
    second = engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"})
    assert [rec.outfit_id for rec in first] == [rec.outfit_id for rec in second]
    assert engine.cache.hits == 1


def test_cache_hits_are_unaffected_by_caller_edits(engine):
    first = engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"})
    reasoning = list(first[0].analysis.reasoning)
    score = first[0].analysis.overall_score
    first[0].analysis.reasoning.clear()
    first[0].analysis.overall_score = 0.0

    second = engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"})
    assert engine.cache.hits == 1
    assert second[0].analysis.reasoning == reasoning
    assert second[0].analysis.overall_score == score


def test_parallel_scoring_matches_sequential():
    sequential = RecommendationEngine(config=EngineConfig())
    parallel = RecommendationEngine(config=EngineConfig(scoring_workers=4))
    args = (_capsule(), StyleProfile(preferred_style="casual"), {"occasion": "casual"})
    assert [rec.outfit_id for rec in sequential.recommend(*args)] == [rec.outfit_id for rec in parallel.recommend(*args)]


def test_soft_filter_mode_admits_close_matches():
    items = _basics() + [
        {"item_id": "khaki-chinos", "category": "bottoms", "colors": ["khaki"], "style": "casual",
         "occasions": ["work"], "seasons": ["all"]},
    ]
    hard = RecommendationEngine(config=EngineConfig()).recommend(items, StyleProfile(), {"occasion": "casual"}, {"diversity_factor": 0.0})
    soft = RecommendationEngine(config=EngineConfig(filter_mode=FilterMode.SOFT)).recommend(
        items, StyleProfile(), {"occasion": "casual"}, {"diversity_factor": 0.0}
    )
    used_hard = {item.item_id for rec in hard for item in rec.items}
    used_soft = {item.item_id for rec in soft for item in rec.items}
    assert "khaki-chinos" not in used_hard
    assert "khaki-chinos" in used_soft


def test_disliked_outfit_is_not_recommended_again(tmp_path):
    engine = RecommendationEngine(
        config=EngineConfig(), preference_store=JSONPreferenceStore(str(tmp_path / "prefs"))
    )
    first = engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"}, user_id="alice")
    assert len(first) == 1
    preferences = engine.add_feedback(
        "alice",
        {"outfit_id": first[0].outfit_id, "item_ids": [item.item_id for item in first[0].items], "rating": 1},
    )
    assert preferences.avoided_combinations == [["blue-jeans", "white-tshirt"]]
    assert engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"}, user_id="alice") == []
    assert len(engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"})) == 1


def test_liked_feedback_updates_preferences(engine):
    engine.add_feedback(
        "bob",
        {"outfit_id": "a-b", "item_ids": ["a", "b"], "rating": 5, "styles": ["casual"], "colors": ["navy"]},
    )
    preferences = engine.get_preferences("bob")
    assert preferences.preferred_styles == ["casual"]
    assert preferences.preferred_colors == ["navy"]


def test_invalid_inputs_raise_validation_errors(engine):
    with pytest.raises(ValidationError):
        engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"}, {"diversity_factor": 1.5})
    with pytest.raises(ValidationError):
        engine.recommend(_basics(), StyleProfile(), {"occasion": ""})
    with pytest.raises(ValidationError):
        engine.add_feedback("bob", {"outfit_id": "a", "item_ids": ["a"], "rating": 9})


def test_recommend_payload_reports_validation_failures(engine):
    response = engine.recommend_payload(_basics(), StyleProfile(), {"occasion": "casual"}, {"max_recommendations": 0})
    assert response["status"] == "needs_review"
    assert response["details"]

    ok = engine.recommend_payload(_basics(), StyleProfile(), {"occasion": "casual", "time_of_day": "Morning"})
    assert ok["status"] == "ok"
    assert ok["recommendations"][0]["confidence"] == ok["recommendations"][0]["analysis"]["overall_score"]


def test_recommendation_to_dict_is_json_friendly(engine):
    recommendation = engine.recommend(_basics(), StyleProfile(), {"occasion": "casual"})[0]
    payload = recommendation_to_dict(recommendation)
    assert payload["items"][0]["item_id"] in {"white-tshirt", "blue-jeans"}
    assert isinstance(payload["analysis"]["weights"], dict)


def test_unsafe_user_id_never_leaves_the_store_directory(tmp_path):
    engine = RecommendationEngine(
        config=EngineConfig(), preference_store=JSONPreferenceStore(str(tmp_path / "prefs"))
    )
    with pytest.raises(ValueError):
        engine.add_feedback("../escaped", {"outfit_id": "x", "item_ids": ["white-tshirt"], "rating": 1})
    assert not (tmp_path / "escaped.json").exists()
