"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

from typing import Dict, List

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from models.outfit import Recommendation
from models.style_profile import StyleProfile
from models.taxonomy import Category
from stylist_app.config import EngineConfig
from stylist_app.engine import RecommendationEngine


def _has_outerwear(recommendation: Recommendation) -> bool:
    return any(item.category_enum is Category.OUTERWEAR for item in recommendation.items)


def _evaluate_expectations(expectations: Dict[str, object], recommendations: List[Recommendation]) -> Dict[str, object]:
    checks: Dict[str, bool] = {}
    if "min_outfits" in expectations:
        checks["min_outfits"] = len(recommendations) >= int(expectations["min_outfits"])
    if "max_outfits" in expectations:
        checks["max_outfits"] = len(recommendations) <= int(expectations["max_outfits"])
    if expectations.get("contains_items"):
        wanted = set(expectations["contains_items"])
        checks["contains_items"] = any(wanted <= {item.item_id for item in rec.items} for rec in recommendations)
    if "min_color_harmony" in expectations:
        checks["min_color_harmony"] = all(
            rec.analysis.color_harmony >= float(expectations["min_color_harmony"]) for rec in recommendations
        )
    if expectations.get("requires_outerwear"):
        outerwear = [rec for rec in recommendations if _has_outerwear(rec)]
        checks["requires_outerwear"] = bool(outerwear)
        if expectations.get("weather_appropriate"):
            checks["weather_appropriate"] = all(rec.analysis.weather_appropriate for rec in outerwear)
    if expectations.get("forbids_outerwear"):
        checks["forbids_outerwear"] = not any(_has_outerwear(rec) for rec in recommendations)
    return {"passed": all(checks.values()), "checks": checks}


def run_scenario(scenario: EvaluationScenario, engine: RecommendationEngine | None = None) -> Dict[str, object]:
    engine = engine or RecommendationEngine(config=EngineConfig())
    recommendations = engine.recommend(
        scenario.wardrobe_items,
        StyleProfile(),
        scenario.context,
        scenario.options or None,
    )
    evaluation = _evaluate_expectations(scenario.expectations, recommendations)
    return {
        "scenario": scenario.name,
        "passed": evaluation["passed"],
        "checks": evaluation["checks"],
        "outfit_count": len(recommendations),
        "outfit_ids": [rec.outfit_id for rec in recommendations],
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]
