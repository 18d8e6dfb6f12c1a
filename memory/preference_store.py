"""Outfit feedback persistence and learned user preferences."""
from __future__ import annotations

import json
import re
import threading
import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

LIKED_RATING = 4
DISLIKED_RATING = 2
SAFE_USER_ID = re.compile(r"[\w\-]+")


@dataclass
class OutfitFeedback:
    """One rating of a recommended outfit."""

    outfit_id: str
    item_ids: List[str]
    rating: int
    styles: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    notes: Optional[str] = None
    created_at: float = field(default_factory=lambda: time.time())

    @property
    def liked(self) -> bool:
        return self.rating >= LIKED_RATING

    @property
    def disliked(self) -> bool:
        return self.rating <= DISLIKED_RATING


@dataclass
class UserPreferences:
    preferred_styles: List[str] = field(default_factory=list)
    preferred_colors: List[str] = field(default_factory=list)
    preferred_categories: List[str] = field(default_factory=list)
    avoided_combinations: List[List[str]] = field(default_factory=list)
    feedback_count: int = 0

    def avoids(self, item_ids) -> bool:
        key = frozenset(item_ids)
        return any(frozenset(combo) == key for combo in self.avoided_combinations)


def _ranked(values: List[str]) -> List[str]:
    return [value for value, _ in Counter(values).most_common()]


def derive_preferences(feedback: List[OutfitFeedback]) -> UserPreferences:
    """Rank styles, colors and categories from liked outfits; collect disliked item sets."""

    liked = [entry for entry in feedback if entry.liked]
    avoided: List[List[str]] = []
    for entry in feedback:
        combo = sorted(entry.item_ids)
        if entry.disliked and combo not in avoided:
            avoided.append(combo)
    return UserPreferences(
        preferred_styles=_ranked([style for entry in liked for style in entry.styles]),
        preferred_colors=_ranked([color for entry in liked for color in entry.colors]),
        preferred_categories=_ranked([category for entry in liked for category in entry.categories]),
        avoided_combinations=avoided,
        feedback_count=len(feedback),
    )


class UserPreferenceStore:
    """Interface for feedback persistence."""

    def add_feedback(self, user_id: str, feedback: OutfitFeedback) -> None:
        raise NotImplementedError

    def list_feedback(self, user_id: str) -> List[OutfitFeedback]:
        raise NotImplementedError

    def get_preferences(self, user_id: str) -> UserPreferences:
        return derive_preferences(self.list_feedback(user_id))


class InMemoryPreferenceStore(UserPreferenceStore):
    """Process-local store for tests and single-run sessions."""

    def __init__(self) -> None:
        self._feedback: Dict[str, List[OutfitFeedback]] = {}
        self._lock = threading.Lock()

    def add_feedback(self, user_id: str, feedback: OutfitFeedback) -> None:
        with self._lock:
            self._feedback.setdefault(user_id, []).append(feedback)

    def list_feedback(self, user_id: str) -> List[OutfitFeedback]:
        with self._lock:
            return list(self._feedback.get(user_id, []))


class JSONPreferenceStore(UserPreferenceStore):
    """JSON-file-backed store, one file per user."""

    def __init__(self, base_dir: str = "data/preferences") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, user_id: str) -> Path:
        if not SAFE_USER_ID.fullmatch(user_id or ""):
            raise ValueError(f"user_id {user_id!r} is not a valid file name")
        return self.base_dir / f"{user_id}.json"

    def _load(self, user_id: str) -> Dict[str, Any]:
        path = self._path(user_id)
        if not path.exists():
            return {"user_id": user_id, "feedback": []}
        return json.loads(path.read_text())

    def _save(self, user_id: str, payload: Dict[str, Any]) -> None:
        self._path(user_id).write_text(json.dumps(payload, indent=2))

    def add_feedback(self, user_id: str, feedback: OutfitFeedback) -> None:
        with self._lock:
            record = self._load(user_id)
            record["feedback"].append(asdict(feedback))
            self._save(user_id, record)

    def list_feedback(self, user_id: str) -> List[OutfitFeedback]:
        with self._lock:
            record = self._load(user_id)
        return [OutfitFeedback(**entry) for entry in record.get("feedback", [])]


__all__ = [
    "OutfitFeedback",
    "UserPreferences",
    "UserPreferenceStore",
    "InMemoryPreferenceStore",
    "JSONPreferenceStore",
    "derive_preferences",
]
