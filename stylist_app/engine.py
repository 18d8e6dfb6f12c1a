"""Recommendation engine facade: filter, generate, score and select."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from logic.contextual_filtering import FilteringResult, filter_items
from logic.outfit_builder import (
    CombinationResult,
    accessory_pairings,
    alternative_items,
    generate_combinations,
    group_by_category,
    layering_options,
)
from logic.outfit_scoring import describe_outfit, overall_style, score_outfit
from logic.selection import SelectionResult, select_diverse
from logic.validation import (
    FeedbackPayload,
    RecommendationOptions,
    RequestContextPayload,
    validation_failure,
)
from memory.preference_store import (
    InMemoryPreferenceStore,
    JSONPreferenceStore,
    OutfitFeedback,
    UserPreferences,
    UserPreferenceStore,
)
from memory.recommendation_cache import RecommendationCache, cache_key
from models.context import RequestContext
from models.outfit import CandidateOutfit, Recommendation, ScoredOutfit
from models.style_profile import StyleProfile
from models.wardrobe_item import WardrobeItem, from_raw_metadata
from stylist_app.config import EngineConfig
from stylist_app.logging_config import get_logger, log_event, operation_context
from stylist_app.observability import instrument_stage

LOGGER = get_logger(__name__)

MIN_WARDROBE = 2
MINIMAL_PALETTE = 2
RICH_PALETTE = 4


def _palette(items: Sequence[WardrobeItem]) -> List[str]:
    palette: List[str] = []
    for item in items:
        for color in item.colors:
            if color not in palette:
                palette.append(color)
    return palette


def _inspiration_tags(items: Sequence[WardrobeItem], context: RequestContext, palette: Sequence[str]) -> List[str]:
    tags: List[str] = []
    for tag in [item.style for item in items] + [context.occasion, context.time_of_day.value]:
        if tag and tag not in tags:
            tags.append(tag)
    if len(palette) <= MINIMAL_PALETTE:
        tags.append("minimalist palette")
    elif len(palette) >= RICH_PALETTE:
        tags.append("rich palette")
    return tags


def recommendation_to_dict(recommendation: Recommendation) -> Dict[str, Any]:
    payload = asdict(recommendation)
    payload["confidence"] = recommendation.confidence
    return payload


class RecommendationEngine:
    """Wires the contextual filter, generator, scorer and selector together.

    The engine never mutates the wardrobe it is given and never persists
    anything except user feedback through its preference store.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        preference_store: UserPreferenceStore | None = None,
        cache: RecommendationCache | None = None,
    ) -> None:
        self.config = config or EngineConfig.from_env()
        self.preference_store = preference_store or self._build_preference_store()
        self.cache = cache or RecommendationCache(
            ttl_seconds=self.config.cache_ttl_seconds,
            max_entries=self.config.cache_max_entries,
        )

    def _build_preference_store(self) -> UserPreferenceStore:
        if self.config.preference_store_path:
            return JSONPreferenceStore(self.config.preference_store_path)
        return InMemoryPreferenceStore()

    @staticmethod
    def _coerce_items(items: Iterable[WardrobeItem | Mapping[str, Any]]) -> List[WardrobeItem]:
        wardrobe: List[WardrobeItem] = []
        seen = set()
        for raw in items:
            if isinstance(raw, WardrobeItem):
                item = raw
            else:
                try:
                    item = from_raw_metadata(dict(raw))
                except (ValueError, TypeError) as exc:
                    log_event(LOGGER, logging.WARNING, "wardrobe_item_skipped", reason=str(exc))
                    continue
            if item.item_id in seen:
                log_event(LOGGER, logging.WARNING, "wardrobe_item_skipped", reason="duplicate item_id")
                continue
            seen.add(item.item_id)
            wardrobe.append(item)
        return wardrobe

    @staticmethod
    def _coerce_context(context: RequestContext | RequestContextPayload | Mapping[str, Any]) -> RequestContext:
        if isinstance(context, RequestContext):
            return context
        if isinstance(context, RequestContextPayload):
            return context.to_context()
        return RequestContextPayload.model_validate(dict(context)).to_context()

    @staticmethod
    def _coerce_options(options: RecommendationOptions | Mapping[str, Any] | None) -> RecommendationOptions:
        if options is None:
            return RecommendationOptions()
        if isinstance(options, RecommendationOptions):
            return options
        return RecommendationOptions.model_validate(dict(options))

    @instrument_stage("filter")
    def _filter(self, items: List[WardrobeItem], context: RequestContext) -> FilteringResult:
        return filter_items(items, context, mode=self.config.filter_mode)

    @instrument_stage("generate")
    def _generate(
        self, groups: Dict, context: RequestContext, options: RecommendationOptions
    ) -> CombinationResult:
        return generate_combinations(
            groups,
            context,
            include_accessories=options.include_accessories,
            max_combinations=self.config.max_combinations,
        )

    @instrument_stage("score")
    def _score(
        self, candidates: List[CandidateOutfit], profile: StyleProfile, context: RequestContext
    ) -> List[ScoredOutfit]:
        def score(candidate: CandidateOutfit) -> ScoredOutfit:
            return ScoredOutfit(outfit=candidate, analysis=score_outfit(candidate, profile, context))

        if self.config.scoring_workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=self.config.scoring_workers) as executor:
                return list(executor.map(score, candidates))
        return [score(candidate) for candidate in candidates]

    @instrument_stage("select")
    def _select(self, scored: List[ScoredOutfit], options: RecommendationOptions) -> SelectionResult:
        return select_diverse(scored, options.max_recommendations, options.diversity_factor)

    def _build_recommendation(
        self, entry: ScoredOutfit, context: RequestContext, admissible: Sequence[WardrobeItem]
    ) -> Recommendation:
        items = list(entry.outfit.items)
        palette = _palette(items)
        return Recommendation(
            outfit_id=entry.outfit.outfit_id,
            items=items,
            analysis=entry.analysis,
            description=describe_outfit(items, context),
            reasoning=list(entry.analysis.reasoning),
            overall_style=overall_style(items),
            color_palette=palette,
            inspiration_tags=_inspiration_tags(items, context, palette),
            alternative_items=alternative_items(items, admissible),
            layering_options=layering_options(items, admissible),
            accessory_pairings=accessory_pairings(items, admissible),
        )

    def recommend(
        self,
        items: Iterable[WardrobeItem | Mapping[str, Any]],
        profile: StyleProfile | None,
        context: RequestContext | RequestContextPayload | Mapping[str, Any],
        options: RecommendationOptions | Mapping[str, Any] | None = None,
        user_id: str | None = None,
    ) -> List[Recommendation]:
        """Return ranked, diverse outfit recommendations for one request.

        An empty list signals either an insufficient wardrobe or no viable
        combinations. Invalid ``context`` or ``options`` payloads raise
        :class:`pydantic.ValidationError`.
        """

        with operation_context("engine:recommend") as correlation_id:
            wardrobe = self._coerce_items(items)
            request_context = self._coerce_context(context)
            request_options = self._coerce_options(options)
            style_profile = profile or StyleProfile()
            preferences: Optional[UserPreferences] = None
            if user_id and self.preference_store is not None:
                preferences = self.preference_store.get_preferences(user_id)

            key = cache_key(
                [item.item_id for item in wardrobe],
                style_profile.signature(),
                request_context.signature(),
                {
                    **request_options.model_dump(),
                    "filter_mode": self.config.filter_mode.value,
                    "max_combinations": self.config.max_combinations,
                    "avoided": preferences.avoided_combinations if preferences else [],
                },
            )
            cached = self.cache.get(key)
            if cached is not None:
                log_event(LOGGER, logging.INFO, "recommendation_cache_hit", correlation_id=correlation_id)
                return list(cached)

            filtered = self._filter(wardrobe, request_context)
            grouping = group_by_category(filtered.items)
            admissible = [item for item in filtered.items if item.item_id not in grouping.skipped]
            if len(admissible) < MIN_WARDROBE:
                log_event(
                    LOGGER,
                    logging.INFO,
                    "insufficient_wardrobe",
                    admissible=len(admissible),
                    removed=len(filtered.removed),
                    skipped=len(grouping.skipped),
                )
                self.cache.set(key, [])
                return []

            combinations = self._generate(grouping.groups, request_context, request_options)
            candidates = combinations.outfits
            if preferences and preferences.avoided_combinations:
                candidates = [c for c in candidates if not preferences.avoids(c.item_ids)]
                log_event(
                    LOGGER,
                    logging.DEBUG,
                    "avoided_combinations_dropped",
                    dropped=len(combinations.outfits) - len(candidates),
                )
            if not candidates:
                log_event(
                    LOGGER,
                    logging.INFO,
                    "no_viable_combinations",
                    admissible=len(admissible),
                    diagnostics=combinations.diagnostics,
                )
                self.cache.set(key, [])
                return []

            scored = self._score(candidates, style_profile, request_context)
            selection = self._select(scored, request_options)
            recommendations = [
                self._build_recommendation(entry, request_context, admissible) for entry in selection.selected
            ]
            self.cache.set(key, recommendations)
            log_event(
                LOGGER,
                logging.INFO,
                "recommendation_completed",
                candidates=len(candidates),
                returned=len(recommendations),
                top_score=recommendations[0].confidence if recommendations else None,
            )
            return list(recommendations)

    def recommend_payload(
        self,
        items: Iterable[WardrobeItem | Mapping[str, Any]],
        profile: StyleProfile | None,
        context: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
        user_id: str | None = None,
    ) -> Dict[str, Any]:
        """Dict-in, dict-out variant that reports invalid payloads instead of raising."""

        try:
            request_context = RequestContextPayload.model_validate(dict(context))
            request_options = RecommendationOptions.model_validate(dict(options or {}))
        except ValidationError as exc:
            log_event(LOGGER, logging.WARNING, "recommendation_request_invalid", details=str(exc))
            return validation_failure("Invalid recommendation request", exc)
        recommendations = self.recommend(items, profile, request_context, request_options, user_id=user_id)
        return {
            "status": "ok",
            "recommendations": [recommendation_to_dict(rec) for rec in recommendations],
        }

    def add_feedback(self, user_id: str, feedback: OutfitFeedback | FeedbackPayload | Mapping[str, Any]) -> UserPreferences:
        """Record a rating and return the updated preferences."""

        if not isinstance(feedback, OutfitFeedback):
            payload = feedback if isinstance(feedback, FeedbackPayload) else FeedbackPayload.model_validate(dict(feedback))
            feedback = OutfitFeedback(**payload.model_dump())
        self.preference_store.add_feedback(user_id, feedback)
        log_event(
            LOGGER,
            logging.INFO,
            "feedback_recorded",
            user_id=user_id,
            rating=feedback.rating,
            items=len(feedback.item_ids),
        )
        return self.get_preferences(user_id)

    def get_preferences(self, user_id: str) -> UserPreferences:
        return self.preference_store.get_preferences(user_id)


__all__ = ["RecommendationEngine", "recommendation_to_dict"]
