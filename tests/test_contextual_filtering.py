"""Tests for the occasion, season and weather admission gates."""
from __future__ import annotations

import copy
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.contextual_filtering import FilterMode, filter_items
from models.context import RequestContext, WeatherSnapshot
from models.wardrobe_item import WardrobeItem


def _wardrobe():
    return [
        WardrobeItem("white-tshirt", "tops", ["white"], "casual", ["casual", "everyday"], ["spring", "summer"]),
        WardrobeItem("blue-jeans", "bottoms", ["blue"], "casual", ["casual", "everyday"], ["all"]),
        WardrobeItem("winter-coat", "outerwear", ["black"], "casual", ["outdoor"], ["winter"]),
    ]


def _ids(result):
    return [item.item_id for item in result.items]


def test_occasion_gate_rejects_unrelated_items():
    result = filter_items(_wardrobe(), RequestContext(occasion="casual"))
    assert _ids(result) == ["white-tshirt", "blue-jeans"]
    assert result.removed == {"winter-coat": "not suitable for casual"}


def test_versatile_sentinel_passes_any_occasion():
    items = [WardrobeItem("scarf", "accessories", ["gray"], occasions=["versatile"])]
    assert _ids(filter_items(items, RequestContext(occasion="formal"))) == ["scarf"]


def test_everyday_items_pass_other_occasions():
    result = filter_items(_wardrobe(), RequestContext(occasion="work"))
    assert _ids(result) == ["white-tshirt", "blue-jeans"]


def test_cold_or_wet_weather_admits_outerwear():
    snowy = RequestContext(occasion="casual", weather=WeatherSnapshot(temperature=5, condition="snow"))
    assert "winter-coat" in _ids(filter_items(_wardrobe(), snowy))
    rainy = RequestContext(occasion="casual", weather=WeatherSnapshot(temperature=18, condition="light rain"))
    assert "winter-coat" in _ids(filter_items(_wardrobe(), rainy))


def test_outerwear_rejected_above_thirty_degrees():
    items = _wardrobe()
    items[2].occasions.append("casual")
    hot = RequestContext(occasion="casual", weather=WeatherSnapshot(temperature=31))
    result = filter_items(items, hot)
    assert "winter-coat" not in _ids(result)
    assert "30C" in result.removed["winter-coat"]


def test_season_gate_only_applies_when_requested():
    winter = RequestContext(occasion="casual", season="winter")
    assert _ids(filter_items(_wardrobe(), winter)) == ["blue-jeans"]
    assert _ids(filter_items(_wardrobe(), RequestContext(occasion="casual"))) == ["white-tshirt", "blue-jeans"]


def test_weather_tags_reject_shorts_and_delicates():
    items = [
        WardrobeItem("cutoffs", "bottoms", ["blue"], "casual", ["casual"], ["summer"], tags=["shorts"]),
        WardrobeItem("silk-blouse", "tops", ["cream"], "elegant", ["casual"], ["all"], tags=["delicate"]),
    ]
    freezing = RequestContext(occasion="casual", weather=WeatherSnapshot(temperature=-2))
    assert _ids(filter_items(items, freezing)) == ["silk-blouse"]
    rainy = RequestContext(occasion="casual", weather=WeatherSnapshot(temperature=15, condition="Rain"))
    assert _ids(filter_items(items, rainy)) == ["cutoffs"]


def test_soft_mode_uses_continuous_occasion_fit():
    items = [
        WardrobeItem("chinos", "bottoms", ["khaki"], "casual", ["work"], ["all"]),
        WardrobeItem("gown", "dresses", ["emerald"], "formal", ["gala"], ["all"]),
    ]
    context = RequestContext(occasion="casual")
    assert _ids(filter_items(items, context)) == []
    soft = filter_items(items, context, mode="soft")
    assert _ids(soft) == ["chinos"]
    assert soft.debug["mode"] == "soft"


def test_filter_mode_parse():
    assert FilterMode.parse("SOFT") is FilterMode.SOFT
    assert FilterMode.parse("bogus") is FilterMode.HARD
    assert FilterMode.parse(None) is FilterMode.HARD


def test_filter_preserves_order_and_does_not_mutate():
    items = _wardrobe()
    before = copy.deepcopy(items)
    result = filter_items(list(reversed(items)), RequestContext(occasion="casual"))
    assert _ids(result) == ["blue-jeans", "white-tshirt"]
    assert items == before
    assert result.debug["input_count"] == 3
    assert result.debug["kept_count"] == 2


def test_filtering_twice_changes_nothing():
    items = _wardrobe() + [
        WardrobeItem("wool-sweater", "tops", ["gray"], "casual", ["casual"], ["fall", "winter"], tags=["warm"]),
        WardrobeItem("cutoffs", "bottoms", ["blue"], "casual", ["casual"], ["summer"], tags=["shorts"]),
        WardrobeItem("silk-blouse", "tops", ["cream"], "elegant", ["date"], ["all"], tags=["delicate"]),
        WardrobeItem("boots", "shoes", ["brown"], "casual", ["versatile"], ["winter"], tags=["waterproof"]),
    ]
    contexts = [
        RequestContext(occasion="casual", season="winter", weather=WeatherSnapshot(temperature=4, condition="snow")),
        RequestContext(occasion="casual", season="summer", weather=WeatherSnapshot(temperature=31)),
    ]
    for context in contexts:
        for mode in (FilterMode.HARD, FilterMode.SOFT):
            once = filter_items(items, context, mode=mode)
            twice = filter_items(once.items, context, mode=mode)
            assert _ids(twice) == _ids(once)
            assert twice.removed == {}
