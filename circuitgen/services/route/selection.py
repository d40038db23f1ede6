"""Candidate filtering and difficulty-balanced selection of the final route set."""
from __future__ import annotations

import logging
from typing import List

from circuitgen.models.response import EnhancedRoute

logger = logging.getLogger(__name__)

MAX_DISTANCE_ERROR = 0.40
MAX_BACKTRACK_RATIO = 0.50
MIN_LOOP_QUALITY = 0.5

DIFFICULTY_ORDER = ("easy", "moderate", "hard")
# Preferred mix of the final set, per difficulty
DIFFICULTY_QUOTAS = {"easy": 2, "moderate": 2, "hard": 1}
MAX_SELECTED_ROUTES = 5


def distance_error(actual_km: float, target_km: float) -> float:
    return abs(actual_km - target_km) / target_km


def passes_quality_filter(
    actual_km: float, target_km: float, backtrack_ratio: float, loop_quality: float
) -> bool:
    """Return True if an executed circuit is close enough to target and loop-shaped."""
    return (
        distance_error(actual_km, target_km) < MAX_DISTANCE_ERROR
        and backtrack_ratio < MAX_BACKTRACK_RATIO
        and loop_quality > MIN_LOOP_QUALITY
    )


def select_top_routes_with_variety(
    routes: List[EnhancedRoute], limit: int = MAX_SELECTED_ROUTES
) -> List[EnhancedRoute]:
    """
    Select up to `limit` routes balanced across difficulty.

    Takes the shortest 2 easy, 2 moderate and 1 hard route, backfills any
    empty slots with the shortest leftovers regardless of difficulty, then
    orders the result easy -> moderate -> hard, each group by distance.
    """
    by_difficulty = {
        difficulty: sorted(
            (r for r in routes if r.difficulty == difficulty), key=lambda r: r.distance
        )
        for difficulty in DIFFICULTY_ORDER
    }

    selected: List[EnhancedRoute] = []
    for difficulty in DIFFICULTY_ORDER:
        selected.extend(by_difficulty[difficulty][: DIFFICULTY_QUOTAS[difficulty]])

    if len(selected) < limit:
        chosen_ids = {id(r) for r in selected}
        remaining = sorted(
            (r for r in routes if id(r) not in chosen_ids), key=lambda r: r.distance
        )
        selected.extend(remaining[: limit - len(selected)])

    counts = {d: sum(1 for r in selected if r.difficulty == d) for d in DIFFICULTY_ORDER}
    logger.info(
        "✨ Selected: %d easy, %d moderate, %d hard",
        counts["easy"],
        counts["moderate"],
        counts["hard"],
    )

    rank = {difficulty: i for i, difficulty in enumerate(DIFFICULTY_ORDER)}
    final_order = sorted(
        selected, key=lambda r: (rank.get(r.difficulty, len(rank)), r.distance)
    )
    return final_order[:limit]
