import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from evaluation.harness import run_evaluation_suite, run_smoke_checks


def test_evaluation_scenarios_pass():
    results = run_evaluation_suite()
    assert len(results) == 4, "Expected evaluation scenarios to run"
    for result in results:
        assert result["passed"], f"Scenario {result['scenario']} failed checks: {result['checks']}"


def test_insufficient_wardrobe_scenario_returns_nothing():
    results = {result["scenario"]: result for result in run_evaluation_suite()}
    assert results["insufficient_wardrobe"]["outfit_count"] == 0
    assert results["snowy_layering"]["outfit_count"] >= 1


def test_smoke_checks_summarise_each_scenario():
    assert run_smoke_checks() == [
        "casual_basics: passed",
        "snowy_layering: passed",
        "hot_day: passed",
        "insufficient_wardrobe: passed",
    ]
