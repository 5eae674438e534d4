from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..catalog.models import Neighborhood


class UserPreferences(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    budget_range: list[float] | None = Field(
        default=None,
        alias="budgetRange",
        description="Monthly budget; only the first value is used as the target",
    )
    max_commute: list[float] | None = Field(
        default=None,
        alias="maxCommute",
        description="Commute ceiling in minutes; only the first value is used",
    )
    lifestyle: list[str] | None = Field(
        default=None,
        description='Lifestyle tags, e.g. ["nightlife", "food"]',
    )
    priorities: list[str] | None = Field(
        default=None,
        description='Priority keys, e.g. ["walkability", "safety"]',
    )

    @property
    def target_budget(self) -> float | None:
        return self.budget_range[0] if self.budget_range else None

    @property
    def commute_ceiling(self) -> float | None:
        return self.max_commute[0] if self.max_commute else None

    def is_empty(self) -> bool:
        """True when no preference key was sent; empty lists still count as sent."""
        return not self.model_fields_set


class ScoreBreakdown(BaseModel):
    budget: float = 0.0
    lifestyle: float = 0.0
    priorities: float = 0.0
    commute: float = 0.0
    safety: float = 0.0
    walkability: float = 0.0
    amenities: float = 0.0
    total: float = 0.0


class MatchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    neighborhood: Neighborhood
    score: int
    score_breakdown: ScoreBreakdown = Field(alias="scoreBreakdown")
    match_reasons: list[str] = Field(default_factory=list, alias="matchReasons")
    compatibility_percentage: int = Field(alias="compatibilityPercentage")


class MatchResponse(BaseModel):
    matches: list[MatchResult]
    total_neighborhoods: int
    response_time_ms: float
    algorithm_version: str
