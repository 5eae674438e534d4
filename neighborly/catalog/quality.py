from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import DataQualityReport, Neighborhood
from .validation import validate_catalog

RECORD_FIELDS: list[str] = list(Neighborhood.model_fields)

BASE_ACCURACY = 95.0
MISSING_CRITICAL_PENALTY = 10.0
RENT_OUTLIER_PENALTY = 5.0


def to_frame(catalog: Sequence[Neighborhood]) -> pd.DataFrame:
    """One row per neighborhood, one column per record field."""
    return pd.DataFrame(
        [n.model_dump() for n in catalog],
        columns=RECORD_FIELDS,
    )


def _completeness(df: pd.DataFrame) -> tuple[float, list[str]]:
    if df.empty:
        return 0.0, []
    blank = df.isna() | df.eq("")
    filled = int((~blank).to_numpy().sum())
    total = df.shape[0] * df.shape[1]
    missing = sorted(df.columns[blank.any()].tolist())
    return round(filled / total * 100, 2), missing


def _accuracy(catalog: Sequence[Neighborhood], config: CatalogConfig) -> int:
    if not catalog:
        return 0
    count = len(catalog)

    missing_critical = sum(
        1 for n in catalog if not n.name or not n.city or not n.average_rent
    )
    rent_outliers = sum(
        1
        for n in catalog
        if n.average_rent < config.rent_outlier_min or n.average_rent > config.rent_outlier_max
    )

    accuracy = BASE_ACCURACY
    accuracy -= missing_critical / count * MISSING_CRITICAL_PENALTY
    accuracy -= rent_outliers / count * RENT_OUTLIER_PENALTY
    return max(0, int(round(accuracy)))


def compute_data_quality(
    catalog: Sequence[Neighborhood],
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
) -> DataQualityReport:
    """
    Summarise how complete and trustworthy the catalog is.

    - completeness: share of non-empty field values across all records (0-100).
    - accuracy: base 95, reduced for records missing name/city/rent and for
      rents outside the configured outlier band.
    - missing_fields: every field that is empty on at least one record.
    - invalid_record_ids: records failing the validation range/identity rules.
    """
    completeness, missing = _completeness(to_frame(catalog))
    validation = validate_catalog(catalog)

    return DataQualityReport(
        completeness=completeness,
        accuracy=_accuracy(catalog, config),
        missing_fields=missing,
        invalid_record_ids=validation.invalid_ids,
        record_count=len(catalog),
        last_updated=datetime.now(timezone.utc),
    )
