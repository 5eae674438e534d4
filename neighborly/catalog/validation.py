from __future__ import annotations

from collections import Counter
from typing import Sequence

from .models import Neighborhood, ValidationResult

# field -> (lower, upper); None means unbounded on that side
OPTIONAL_RANGES: dict[str, tuple[float | None, float | None]] = {
    "transit_score": (0.0, 100.0),
    "bike_score": (0.0, 100.0),
    "school_rating": (0.0, 10.0),
    "crime_rate": (0.0, None),
}


def _label(index: int, neighborhood: Neighborhood) -> str:
    if neighborhood.id is not None:
        return f"Neighborhood {neighborhood.id}"
    return f"Neighborhood at index {index}"


def _in_range(value: float, lower: float | None, upper: float | None) -> bool:
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True


def record_errors(neighborhood: Neighborhood, index: int = 0) -> list[str]:
    """Return identity and range violations for a single record."""
    label = _label(index, neighborhood)
    errors: list[str] = []

    if neighborhood.id is None:
        errors.append(f"{label}: Missing ID")
    if not neighborhood.name:
        errors.append(f"{label}: Missing name")
    if not neighborhood.city:
        errors.append(f"{label}: Missing city")

    if neighborhood.average_rent <= 0:
        errors.append(f"{label}: Invalid rent value")
    if not _in_range(neighborhood.walk_score, 0.0, 100.0):
        errors.append(f"{label}: Invalid walk score")
    if not _in_range(neighborhood.safety_rating, 0.0, 5.0):
        errors.append(f"{label}: Invalid safety rating")

    for field, (lower, upper) in OPTIONAL_RANGES.items():
        value = getattr(neighborhood, field)
        if value is not None and not _in_range(value, lower, upper):
            errors.append(f"{label}: Invalid {field.replace('_', ' ')}")

    return errors


def record_warnings(neighborhood: Neighborhood, index: int = 0) -> list[str]:
    label = _label(index, neighborhood)
    warnings: list[str] = []
    if not neighborhood.features:
        warnings.append(f"{label}: No features listed")
    if not neighborhood.description:
        warnings.append(f"{label}: No description")
    if not neighborhood.image:
        warnings.append(f"{label}: No image")
    return warnings


def validate_catalog(catalog: Sequence[Neighborhood]) -> ValidationResult:
    """Check every record plus catalog-wide id uniqueness.

    Invalid records are reported, never removed: scoring tolerates them.
    """
    errors: list[str] = []
    warnings: list[str] = []
    invalid_ids: list[int | None] = []

    for index, neighborhood in enumerate(catalog):
        problems = record_errors(neighborhood, index)
        if problems:
            errors.extend(problems)
            invalid_ids.append(neighborhood.id)
        warnings.extend(record_warnings(neighborhood, index))

    id_counts = Counter(n.id for n in catalog if n.id is not None)
    duplicates = sorted(i for i, count in id_counts.items() if count > 1)
    if duplicates:
        errors.append(f"Duplicate IDs found: {', '.join(str(i) for i in duplicates)}")
        invalid_ids.extend(i for i in duplicates if i not in invalid_ids)

    return ValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        invalid_ids=invalid_ids,
    )
