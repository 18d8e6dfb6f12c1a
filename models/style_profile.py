"""User style profile consumed read-only by the recommendation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.taxonomy import normalize_color_name, normalise_tags


@dataclass
class StyleProfile:
    """Preferred style, favorite colors and goals for a single user.

    ``color_palette_colors`` comes from the personal color analysis and may be
    empty when the user has not run it.
    """

    preferred_style: str = ""
    favorite_colors: List[str] = field(default_factory=list)
    color_palette_colors: List[str] = field(default_factory=list)
    goals: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.preferred_style = str(self.preferred_style or "").strip().lower()
        self.favorite_colors = [normalize_color_name(c) for c in self.favorite_colors or [] if c]
        self.color_palette_colors = [normalize_color_name(c) for c in self.color_palette_colors or [] if c]
        self.goals = normalise_tags(self.goals or [])

    def signature(self) -> Dict[str, Any]:
        """Stable, order-insensitive description used in cache keys."""

        return {
            "preferred_style": self.preferred_style,
            "favorite_colors": sorted(self.favorite_colors),
            "color_palette_colors": sorted(self.color_palette_colors),
            "goals": sorted(self.goals),
        }


__all__ = ["StyleProfile"]
