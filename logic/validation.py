"""Pydantic schemas and helpers for validating engine inputs at the boundary."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.context import RequestContext, WeatherSnapshot
from models.taxonomy import TimeOfDay


class RecommendationOptions(BaseModel):
    """Per-request knobs supplied by the calling application."""

    max_recommendations: int = Field(default=6, ge=1)
    include_accessories: bool = True
    diversity_factor: float = Field(default=0.7, ge=0.0, le=1.0)


class WeatherPayload(BaseModel):
    temperature: float
    condition: str = "clear"
    humidity: Optional[float] = Field(default=None, ge=0, le=100)

    def to_snapshot(self) -> WeatherSnapshot:
        return WeatherSnapshot(temperature=self.temperature, condition=self.condition, humidity=self.humidity)


class RequestContextPayload(BaseModel):
    """Loose request context as it arrives from a UI or API layer."""

    occasion: str = Field(min_length=1)
    time_of_day: str = TimeOfDay.AFTERNOON.value
    weather: Optional[WeatherPayload] = None
    season: Optional[str] = None
    seasonal_preference: bool = False
    color_theory_mode: bool = False
    on_date: Optional[date] = None

    @field_validator("time_of_day")
    @classmethod
    def _validate_time_of_day(cls, value: str) -> str:
        key = value.strip().lower()
        if key not in {member.value for member in TimeOfDay}:
            raise ValueError(f"time_of_day must be one of {[member.value for member in TimeOfDay]}")
        return key

    def to_context(self) -> RequestContext:
        return RequestContext(
            occasion=self.occasion,
            time_of_day=TimeOfDay.parse(self.time_of_day),
            weather=self.weather.to_snapshot() if self.weather else None,
            season=self.season,
            seasonal_preference=self.seasonal_preference,
            color_theory_mode=self.color_theory_mode,
            on_date=self.on_date,
        )


class FeedbackPayload(BaseModel):
    """User rating of a recommended outfit."""

    outfit_id: str = Field(min_length=1)
    item_ids: List[str] = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    styles: List[str] = []
    colors: List[str] = []
    categories: List[str] = []
    notes: Optional[str] = None


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    details = exc.errors(include_url=False, include_context=False)
    return ValidationResult(message=message, details=details).model_dump()


__all__ = [
    "RecommendationOptions",
    "WeatherPayload",
    "RequestContextPayload",
    "FeedbackPayload",
    "ValidationResult",
    "validation_failure",
]
