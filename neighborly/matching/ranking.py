from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from ..catalog.models import Neighborhood
from .constants import (
    COMPATIBILITY_DENOMINATOR,
    DEFAULT_MATCH_LIMIT,
    FEATURE_HIGHLIGHT_COUNT,
    MAX_MATCH_REASONS,
    MAX_SCORES,
    REASON_THRESHOLDS,
)
from .models import MatchResult, ScoreBreakdown, UserPreferences
from .scoring import matched_lifestyles, round_half_up, score

logger = logging.getLogger(__name__)


def _display_number(value: float) -> str:
    """Render whole numbers without a trailing ``.0``."""
    return str(int(value)) if float(value).is_integer() else str(value)


def _above(breakdown: ScoreBreakdown, category: str) -> bool:
    return getattr(breakdown, category) > MAX_SCORES[category] * REASON_THRESHOLDS[category]


def compatibility_percentage(total: float) -> int:
    """Map a weighted total onto 0-100 against the fixed denominator."""
    percentage = round_half_up(total / COMPATIBILITY_DENOMINATOR * 100)
    return max(0, min(percentage, 100))


def match_reasons(
    neighborhood: Neighborhood,
    preferences: UserPreferences,
    breakdown: ScoreBreakdown,
) -> list[str]:
    """Build up to three reasons, in fixed order: budget, lifestyle, safety, walkability, features."""
    reasons: list[str] = []

    if _above(breakdown, "budget"):
        reasons.append(f"Great value at ${_display_number(neighborhood.average_rent)}/month")

    if _above(breakdown, "lifestyle") and preferences.lifestyle:
        matched = matched_lifestyles(neighborhood, preferences.lifestyle)
        if matched:
            reasons.append(f"Perfect for {', '.join(matched)} lifestyle")

    if _above(breakdown, "safety"):
        reasons.append(f"High safety rating of {_display_number(neighborhood.safety_rating)}/5")

    if _above(breakdown, "walkability"):
        reasons.append(f"Excellent walkability score of {_display_number(neighborhood.walk_score)}")

    if neighborhood.features:
        highlights = neighborhood.features[:FEATURE_HIGHLIGHT_COUNT]
        reasons.append(f"Features: {', '.join(highlights)}")

    return reasons[:MAX_MATCH_REASONS]


def evaluate(neighborhood: Neighborhood, preferences: UserPreferences) -> MatchResult:
    """Score, explain and normalise a single neighborhood."""
    breakdown = score(neighborhood, preferences)
    total = int(breakdown.total)
    return MatchResult(
        neighborhood=neighborhood,
        score=total,
        score_breakdown=breakdown,
        match_reasons=match_reasons(neighborhood, preferences, breakdown),
        compatibility_percentage=compatibility_percentage(total),
    )


def rank(
    catalog: Sequence[Neighborhood],
    preferences: UserPreferences | None = None,
    limit: int = DEFAULT_MATCH_LIMIT,
    workers: int | None = None,
) -> list[MatchResult]:
    """Rank a catalog snapshot against ``preferences`` and keep the top ``limit``.

    Results are sorted by weighted total, highest first. The sort is stable,
    so ties keep catalog order. With ``workers`` > 1 scoring fans out over a
    thread pool; ``executor.map`` hands results back in catalog order, so the
    output is identical to the sequential path.
    """
    start_time = time.perf_counter()
    prefs = preferences or UserPreferences()
    neighborhoods = tuple(catalog)

    if workers and workers > 1 and len(neighborhoods) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda n: evaluate(n, prefs), neighborhoods))
    else:
        results = [evaluate(n, prefs) for n in neighborhoods]

    ranked = sorted(results, key=lambda r: r.score, reverse=True)[: max(limit, 0)]

    elapsed_ms = round((time.perf_counter() - start_time) * 1000, 1)
    logger.info(
        "Ranked %d neighborhoods in %.1fms, returning %d",
        len(neighborhoods), elapsed_ms, len(ranked),
    )
    return ranked
