"""
Per-category scoring for a single neighborhood.

Every category is worth at most ``CATEGORY_MAX`` points. When the user gave no
preference relevant to a category, the category gets the neutral default
(half of its max) instead of zero, so unstated opinions never penalise a
neighborhood. Categories driven purely by neighborhood data (safety,
walkability, amenities) always compute from the record.
"""
from __future__ import annotations

import math
from typing import Iterable, Mapping

from ..catalog.models import Neighborhood
from .constants import (
    AMENITY_PRIORITY_FEATURE_TARGET,
    AMENITY_TERMS,
    BUDGET_FLOOR_FRACTION,
    BUDGET_TIERS,
    COMMUTE_BIKE_SHARE,
    COMMUTE_PRIORITY_FRACTION,
    COMMUTE_TRANSIT_SHARE,
    COMMUTE_WALK_SHARE,
    CRIME_PENALTY_CAP_FRACTION,
    CRIME_PENALTY_PER_UNIT,
    LIFESTYLE_SYNONYMS,
    MAX_SCORES,
    NEUTRAL_FRACTION,
    PEDESTRIAN_BONUS_FRACTION,
    PEDESTRIAN_TERMS,
    WEIGHTS,
)
from .models import ScoreBreakdown, UserPreferences


def _clamp(value: float, maximum: float) -> float:
    return max(0.0, min(value, maximum))


def _lowered(features: Iterable[str]) -> list[str]:
    return [f.lower() for f in features if f]


def _contains(features_lower: list[str], term: str) -> bool:
    """True when ``term`` is a case-insensitive substring of any feature."""
    needle = term.lower()
    return any(needle in feature for feature in features_lower)


def lifestyle_synonyms(tag: str) -> tuple[str, ...]:
    """Keywords matched for a lifestyle tag; unknown tags match themselves."""
    return LIFESTYLE_SYNONYMS.get(tag.strip().lower(), (tag,))


def matched_lifestyles(neighborhood: Neighborhood, lifestyle: Iterable[str]) -> list[str]:
    """Return the requested tags found as a case-insensitive substring of a feature.

    Synonyms count towards the lifestyle score but not here: a tag is only
    named in a match reason when the feature text itself mentions it.
    """
    features_lower = _lowered(neighborhood.features)
    return [tag for tag in lifestyle if tag and _contains(features_lower, tag)]


def budget_percentage_diff(rent: float, target: float) -> float:
    if target <= 0:
        return 0.0 if rent == target else float("inf")
    return abs(rent - target) / target * 100


def budget_score(neighborhood: Neighborhood, preferences: UserPreferences) -> float:
    maximum = MAX_SCORES["budget"]
    target = preferences.target_budget
    if target is None:
        return maximum * NEUTRAL_FRACTION

    diff = budget_percentage_diff(neighborhood.average_rent, target)
    for bound, fraction in BUDGET_TIERS:
        if diff <= bound:
            return maximum * fraction
    return maximum * BUDGET_FLOOR_FRACTION


def lifestyle_score(neighborhood: Neighborhood, preferences: UserPreferences) -> float:
    maximum = MAX_SCORES["lifestyle"]
    tags = preferences.lifestyle or []
    if not tags:
        return maximum * NEUTRAL_FRACTION

    features_lower = _lowered(neighborhood.features)
    share = maximum / len(tags)
    total = 0.0
    for tag in tags:
        synonyms = lifestyle_synonyms(tag)
        matches = sum(1 for s in synonyms if _contains(features_lower, s))
        total += share * (matches / len(synonyms))
    return _clamp(total, maximum)


def priorities_score(neighborhood: Neighborhood, preferences: UserPreferences) -> float:
    maximum = MAX_SCORES["priorities"]
    priorities = preferences.priorities or []
    if not priorities:
        return maximum * NEUTRAL_FRACTION

    share = maximum / len(priorities)
    target = preferences.target_budget
    total = 0.0
    for priority in priorities:
        key = priority.strip().lower()
        if key == "walkability":
            total += neighborhood.walk_score / 100 * share
        elif key == "safety":
            total += neighborhood.safety_rating / 5 * share
        elif key == "affordability":
            if target is not None and neighborhood.average_rent <= target:
                total += share
        elif key == "commute":
            # No travel-time data in the catalog; flat half share.
            total += share * COMMUTE_PRIORITY_FRACTION
        elif key == "schools":
            if neighborhood.school_rating is not None:
                total += neighborhood.school_rating / 10 * share
        elif key == "amenities":
            coverage = len(neighborhood.features) / AMENITY_PRIORITY_FEATURE_TARGET
            total += min(1.0, coverage) * share
    return _clamp(total, maximum)


def commute_score(neighborhood: Neighborhood, preferences: UserPreferences) -> float:
    """Proxy built from walk / transit / bike scores.

    The stated commute ceiling only switches the category on; its value is
    not consulted because the catalog carries no travel times.
    """
    maximum = MAX_SCORES["commute"]
    if preferences.commute_ceiling is None:
        return maximum * NEUTRAL_FRACTION

    score = neighborhood.walk_score / 100 * (maximum * COMMUTE_WALK_SHARE)
    if neighborhood.transit_score is not None:
        score += neighborhood.transit_score / 100 * (maximum * COMMUTE_TRANSIT_SHARE)
    if neighborhood.bike_score is not None:
        score += neighborhood.bike_score / 100 * (maximum * COMMUTE_BIKE_SHARE)
    return _clamp(score, maximum)


def safety_score(neighborhood: Neighborhood, preferences: UserPreferences) -> float:
    maximum = MAX_SCORES["safety"]
    score = neighborhood.safety_rating / 5 * maximum
    if neighborhood.crime_rate is not None:
        penalty = min(
            neighborhood.crime_rate * CRIME_PENALTY_PER_UNIT,
            maximum * CRIME_PENALTY_CAP_FRACTION,
        )
        score -= penalty
    return _clamp(score, maximum)


def walkability_score(neighborhood: Neighborhood, preferences: UserPreferences) -> float:
    maximum = MAX_SCORES["walkability"]
    score = neighborhood.walk_score / 100 * maximum
    features_lower = _lowered(neighborhood.features)
    if any(_contains(features_lower, term) for term in PEDESTRIAN_TERMS):
        score += maximum * PEDESTRIAN_BONUS_FRACTION
    return _clamp(score, maximum)


def amenities_score(neighborhood: Neighborhood, preferences: UserPreferences) -> float:
    maximum = MAX_SCORES["amenities"]
    features_lower = _lowered(neighborhood.features)
    found = sum(1 for term in AMENITY_TERMS if _contains(features_lower, term))
    return _clamp(found / len(AMENITY_TERMS) * maximum, maximum)


_CATEGORY_SCORERS = (
    ("budget", budget_score),
    ("lifestyle", lifestyle_score),
    ("priorities", priorities_score),
    ("commute", commute_score),
    ("safety", safety_score),
    ("walkability", walkability_score),
    ("amenities", amenities_score),
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weighted_total(categories: Mapping[str, float]) -> int:
    """Weighted sum of the category scores, rounded half up."""
    return round_half_up(sum(categories[c] * w for c, w in WEIGHTS.items()))


def score(
    neighborhood: Neighborhood,
    preferences: UserPreferences | None = None,
) -> ScoreBreakdown:
    """Compute the seven category scores and their weighted total for one neighborhood."""
    prefs = preferences or UserPreferences()
    categories = {
        category: scorer(neighborhood, prefs) for category, scorer in _CATEGORY_SCORERS
    }
    return ScoreBreakdown(**categories, total=weighted_total(categories))
