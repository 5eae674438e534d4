from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Sequence

import pandas as pd
from pydantic import TypeAdapter

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import Neighborhood, NeighborhoodPage
from .quality import to_frame
from .validation import validate_catalog

logger = logging.getLogger(__name__)

Catalog = tuple[Neighborhood, ...]

TEXT_SORT_FIELDS = ("name", "city", "state")
NUMERIC_SORT_FIELDS = (
    "id",
    "average_rent",
    "walk_score",
    "safety_rating",
    "transit_score",
    "bike_score",
    "crime_rate",
    "school_rating",
)

_records = TypeAdapter(list[Neighborhood])
_catalog: Catalog | None = None


def load_catalog(path: Path) -> Catalog:
    """Read a JSON array of neighborhood records into an immutable snapshot."""
    if not path.is_file():
        raise FileNotFoundError(f"Neighborhood data file not found: {path}")

    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    catalog = tuple(_records.validate_python(raw))

    validation = validate_catalog(catalog)
    logger.info(
        "Loaded %d neighborhoods from %s (%d errors, %d warnings)",
        len(catalog), path, len(validation.errors), len(validation.warnings),
    )
    for error in validation.errors:
        logger.warning("Catalog validation: %s", error)
    return catalog


def get_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> Catalog:
    """Return the current catalog snapshot, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog(config.catalog_path)
    return _catalog


def set_catalog(neighborhoods: Sequence[Neighborhood]) -> Catalog:
    """Swap in a new snapshot. Readers holding the old tuple are unaffected."""
    global _catalog
    _catalog = tuple(neighborhoods)
    return _catalog


def reload_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> Catalog:
    return set_catalog(load_catalog(config.catalog_path))


def clear_catalog() -> None:
    global _catalog
    _catalog = None


def find_neighborhood(catalog: Sequence[Neighborhood], neighborhood_id: int) -> Neighborhood | None:
    for neighborhood in catalog:
        if neighborhood.id == neighborhood_id:
            return neighborhood
    return None


def search_catalog(
    catalog: Sequence[Neighborhood],
    *,
    city: str | None = None,
    min_rent: float | None = None,
    max_rent: float | None = None,
    features: list[str] | None = None,
    min_walk_score: float | None = None,
    min_safety_rating: float | None = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = "name",
    sort_order: str = "asc",
) -> NeighborhoodPage:
    """Filter, sort and paginate the catalog for browsing."""
    df = to_frame(catalog)

    if df.empty:
        return NeighborhoodPage(neighborhoods=[], total=0, page=page, limit=limit, total_pages=0)

    # --- Filters ---
    mask = pd.Series(True, index=df.index)
    if city:
        mask &= df["city"].fillna("").str.lower().str.contains(city.strip().lower(), regex=False)
    if min_rent is not None:
        mask &= df["average_rent"] >= min_rent
    if max_rent is not None:
        mask &= df["average_rent"] <= max_rent
    if features:
        wanted = [f.strip().lower() for f in features if f.strip()]
        mask &= df["features"].apply(
            lambda fl: any(w in f.lower() for w in wanted for f in fl)
        )
    if min_walk_score is not None:
        mask &= df["walk_score"] >= min_walk_score
    if min_safety_rating is not None:
        mask &= df["safety_rating"] >= min_safety_rating

    matched = df.loc[mask]

    # --- Sorting ---
    ascending = sort_order != "desc"
    if sort_by in TEXT_SORT_FIELDS:
        matched = matched.sort_values(
            sort_by,
            ascending=ascending,
            kind="stable",
            key=lambda s: s.fillna("").str.lower(),
        )
    elif sort_by in NUMERIC_SORT_FIELDS:
        matched = matched.sort_values(
            sort_by, ascending=ascending, kind="stable", na_position="last",
        )

    # --- Pagination ---
    total = len(matched)
    start = (page - 1) * limit
    page_index = matched.index[start:start + limit]

    return NeighborhoodPage(
        neighborhoods=[catalog[i] for i in page_index],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit) if limit else 0,
    )
