"""Per-request context: occasion, time of day, weather and season."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional

from models.taxonomy import TimeOfDay, current_season, normalise_season


@dataclass(frozen=True)
class WeatherSnapshot:
    """Weather at the time and place the outfit will be worn."""

    temperature: float
    condition: str = "clear"
    humidity: Optional[float] = None

    @property
    def condition_key(self) -> str:
        return (self.condition or "").strip().lower()

    def has_condition(self, keyword: str) -> bool:
        return keyword in self.condition_key


@dataclass(frozen=True)
class RequestContext:
    """Constructed per recommendation request and never persisted."""

    occasion: str
    time_of_day: TimeOfDay = TimeOfDay.AFTERNOON
    weather: Optional[WeatherSnapshot] = None
    season: Optional[str] = None
    seasonal_preference: bool = False
    color_theory_mode: bool = False
    on_date: Optional[date] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "occasion", str(self.occasion or "").strip().lower())
        object.__setattr__(self, "time_of_day", TimeOfDay.parse(self.time_of_day))
        if self.season:
            object.__setattr__(self, "season", normalise_season(self.season))

    def resolved_season(self) -> str:
        """Requested season, or the calendar season of ``on_date`` (today by default)."""

        return self.season or current_season(self.on_date)

    def signature(self) -> Dict[str, Any]:
        weather = None
        if self.weather is not None:
            weather = {
                "temperature": self.weather.temperature,
                "condition": self.weather.condition_key,
                "humidity": self.weather.humidity,
            }
        return {
            "occasion": self.occasion,
            "time_of_day": self.time_of_day.value,
            "weather": weather,
            "season": self.resolved_season(),
            "seasonal_preference": self.seasonal_preference,
            "color_theory_mode": self.color_theory_mode,
        }


__all__ = ["WeatherSnapshot", "RequestContext"]
