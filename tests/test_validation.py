import sys
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.validation import (
    FeedbackPayload,
    RecommendationOptions,
    RequestContextPayload,
    validation_failure,
)
from models.taxonomy import TimeOfDay


def test_recommendation_options_defaults():
    options = RecommendationOptions()
    assert options.max_recommendations == 6
    assert options.include_accessories is True
    assert options.diversity_factor == pytest.approx(0.7)


@pytest.mark.parametrize("payload", [{"max_recommendations": 0}, {"diversity_factor": -0.1}, {"diversity_factor": 1.01}])
def test_recommendation_options_bounds(payload):
    with pytest.raises(ValidationError):
        RecommendationOptions.model_validate(payload)


def test_request_context_payload_converts_to_domain_context():
    payload = RequestContextPayload.model_validate(
        {
            "occasion": "Date",
            "time_of_day": "Evening",
            "weather": {"temperature": 8, "condition": "rain"},
            "on_date": "2024-12-01",
        }
    )
    context = payload.to_context()
    assert context.occasion == "date"
    assert context.time_of_day is TimeOfDay.EVENING
    assert context.weather.temperature == 8
    assert context.on_date == date(2024, 12, 1)
    assert context.resolved_season() == "winter"


def test_request_context_payload_rejects_unknown_time_of_day():
    with pytest.raises(ValidationError):
        RequestContextPayload.model_validate({"occasion": "work", "time_of_day": "brunch"})


def test_feedback_rating_range_and_failure_payload():
    with pytest.raises(ValidationError) as excinfo:
        FeedbackPayload.model_validate({"outfit_id": "o1", "item_ids": ["a"], "rating": 0})
    payload = validation_failure("Invalid feedback", excinfo.value)
    assert payload["status"] == "needs_review"
    assert payload["message"] == "Invalid feedback"
    assert list(payload["details"][0]["loc"]) == ["rating"]
