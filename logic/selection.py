"""Diversity-aware selection of the final ranked recommendations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Set

from models.outfit import ScoredOutfit

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE = 0.9


@dataclass(frozen=True)
class SelectionResult:
    selected: List[ScoredOutfit]
    diagnostics: Dict[str, object]


def overlap_ratio(item_ids: Sequence[str], used: Set[str]) -> float:
    if not item_ids:
        return 0.0
    return sum(1 for item_id in item_ids if item_id in used) / len(item_ids)


def select_diverse(
    scored: Sequence[ScoredOutfit], max_recommendations: int, diversity_factor: float
) -> SelectionResult:
    """Single forward pass over candidates ranked by overall score.

    A candidate is accepted when its share of already-used items is below
    ``1 - diversity_factor`` or its score exceeds 0.9. The best candidate is
    always accepted. Candidates repeating an accepted item set are skipped.
    """

    ranked = sorted(scored, key=lambda entry: entry.analysis.overall_score, reverse=True)
    limit = max(0, max_recommendations)
    used: Set[str] = set()
    accepted_keys = set()
    selected: List[ScoredOutfit] = []
    skipped = 0

    for entry in ranked:
        if len(selected) >= limit:
            break
        if entry.outfit.key in accepted_keys:
            skipped += 1
            continue
        ratio = overlap_ratio(entry.outfit.item_ids, used)
        accept = (
            not selected
            or ratio < (1 - diversity_factor)
            or entry.analysis.overall_score > HIGH_CONFIDENCE
        )
        if not accept:
            skipped += 1
            continue
        selected.append(entry)
        accepted_keys.add(entry.outfit.key)
        used.update(entry.outfit.item_ids)

    logger.info("Selected %s of %s candidates (skipped %s)", len(selected), len(ranked), skipped)
    return SelectionResult(
        selected=selected,
        diagnostics={
            "candidates": len(ranked),
            "selected": len(selected),
            "skipped_for_diversity": skipped,
            "diversity_factor": diversity_factor,
        },
    )


__all__ = ["SelectionResult", "select_diverse", "overlap_ratio", "HIGH_CONFIDENCE"]
