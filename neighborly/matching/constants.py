from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

CATEGORIES: tuple[str, ...] = (
    "budget",
    "lifestyle",
    "priorities",
    "commute",
    "safety",
    "walkability",
    "amenities",
)

CATEGORY_MAX = 1000.0
NEUTRAL_FRACTION = 0.5

MAX_SCORES: Mapping[str, float] = MappingProxyType(
    {category: CATEGORY_MAX for category in CATEGORIES}
)

WEIGHTS: Mapping[str, float] = MappingProxyType({
    "budget": 0.25,
    "lifestyle": 0.20,
    "priorities": 0.20,
    "commute": 0.15,
    "safety": 0.10,
    "walkability": 0.05,
    "amenities": 0.05,
})

# (upper bound on % difference from target budget, fraction of max awarded)
BUDGET_TIERS: tuple[tuple[float, float], ...] = (
    (5.0, 1.0),
    (10.0, 0.9),
    (20.0, 0.7),
    (30.0, 0.5),
    (50.0, 0.3),
)
BUDGET_FLOOR_FRACTION = 0.1

LIFESTYLE_SYNONYMS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "nightlife": ("nightlife", "restaurants", "bars", "entertainment"),
    "family": ("family-friendly", "schools", "parks", "quiet"),
    "fitness": ("parks", "gym", "hiking", "outdoor"),
    "culture": ("art galleries", "museums", "theaters", "historic"),
    "food": ("restaurants", "cafes", "food scene", "dining"),
    "quiet": ("quiet", "peaceful", "suburban", "residential"),
})

PEDESTRIAN_TERMS: tuple[str, ...] = ("walkable", "sidewalks", "pedestrian", "walking")

AMENITY_TERMS: tuple[str, ...] = (
    "restaurants",
    "cafes",
    "shopping",
    "grocery",
    "pharmacy",
    "bank",
    "post office",
    "library",
    "park",
    "gym",
    "hospital",
    "school",
)

# Commute proxy split between walk / transit / bike scores.
COMMUTE_WALK_SHARE = 0.4
COMMUTE_TRANSIT_SHARE = 0.3
COMMUTE_BIKE_SHARE = 0.3

CRIME_PENALTY_PER_UNIT = 10.0
CRIME_PENALTY_CAP_FRACTION = 0.3
PEDESTRIAN_BONUS_FRACTION = 0.2
COMMUTE_PRIORITY_FRACTION = 0.5
AMENITY_PRIORITY_FEATURE_TARGET = 10

# Match reasons fire when a category score is strictly above this share of its max.
REASON_THRESHOLDS: Mapping[str, float] = MappingProxyType({
    "budget": 0.8,
    "lifestyle": 0.7,
    "safety": 0.8,
    "walkability": 0.7,
})
MAX_MATCH_REASONS = 3
FEATURE_HIGHLIGHT_COUNT = 3

DEFAULT_MATCH_LIMIT = 5

# Fixed at import: sum of category maxes times the mean weight.
COMPATIBILITY_DENOMINATOR: float = sum(MAX_SCORES.values()) * (
    sum(WEIGHTS.values()) / len(WEIGHTS)
)
