from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Neighborhood(BaseModel):
    """A catalog record. Ranges are checked by validation, never enforced here."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | None = None
    name: str | None = None
    city: str | None = None
    state: str | None = None
    features: list[str] = Field(default_factory=list)
    average_rent: float
    walk_score: float
    safety_rating: float
    transit_score: float | None = None
    bike_score: float | None = None
    crime_rate: float | None = None
    school_rating: float | None = None
    description: str | None = None
    image: str | None = None
    pet_friendly: bool | None = None


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    invalid_ids: list[int | None] = Field(default_factory=list)


class DataQualityReport(BaseModel):
    completeness: float = Field(ge=0.0, le=100.0)
    accuracy: int = Field(ge=0, le=100)
    missing_fields: list[str] = Field(default_factory=list)
    invalid_record_ids: list[int | None] = Field(default_factory=list)
    record_count: int = 0
    last_updated: datetime


class NeighborhoodPage(BaseModel):
    neighborhoods: list[Neighborhood]
    total: int
    page: int
    limit: int
    total_pages: int


class CatalogStats(BaseModel):
    total_neighborhoods: int
    cities: int
    average_rent: int
    average_walk_score: int
    average_safety_rating: float
    feature_count: int
    pet_friendly_count: int
