from __future__ import annotations

import logging
import os
import time

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.config import DEFAULT_ANALYTICS_CONFIG
from .analytics.store import get_events, record_event, save_snapshot
from .auth.dependencies import require_admin, require_user
from .auth.models import LoginRequest, SignupRequest
from .auth.users import authenticate, register
from .catalog.models import CatalogStats, DataQualityReport, Neighborhood, NeighborhoodPage
from .catalog.quality import compute_data_quality, to_frame
from .catalog.store import find_neighborhood, get_catalog, search_catalog
from .matching.constants import DEFAULT_MATCH_LIMIT
from .matching.models import MatchResponse, UserPreferences
from .matching.ranking import rank

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Neighborly Matching API", version="2.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "neighborly-secret-change-in-production"),
)

_ANALYTICS_CONFIG = DEFAULT_ANALYTICS_CONFIG


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "neighborhood_count": len(get_catalog())}


@app.get("/neighborhoods", response_model=NeighborhoodPage)
def list_neighborhoods(
    city: str | None = None,
    min_rent: float | None = Query(default=None, ge=0),
    max_rent: float | None = Query(default=None, ge=0),
    features: str | None = Query(default=None, description="Comma-separated feature keywords"),
    min_walk_score: float | None = None,
    min_safety_rating: float | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    sort_by: str = "name",
    sort_order: str = Query(default="asc", pattern="^(asc|desc)$"),
) -> NeighborhoodPage:
    return search_catalog(
        get_catalog(),
        city=city,
        min_rent=min_rent,
        max_rent=max_rent,
        features=features.split(",") if features else None,
        min_walk_score=min_walk_score,
        min_safety_rating=min_safety_rating,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@app.get("/neighborhoods/{neighborhood_id}", response_model=Neighborhood)
def get_neighborhood(neighborhood_id: int) -> Neighborhood:
    neighborhood = find_neighborhood(get_catalog(), neighborhood_id)
    if neighborhood is None:
        raise HTTPException(status_code=404, detail="Neighborhood not found")
    return neighborhood


@app.get("/stats", response_model=CatalogStats)
def stats() -> CatalogStats:
    df = to_frame(get_catalog())
    if df.empty:
        return CatalogStats(
            total_neighborhoods=0, cities=0, average_rent=0, average_walk_score=0,
            average_safety_rating=0.0, feature_count=0, pet_friendly_count=0,
        )
    return CatalogStats(
        total_neighborhoods=len(df),
        cities=int(df["city"].nunique()),
        average_rent=int(round(float(df["average_rent"].mean()))),
        average_walk_score=int(round(float(df["walk_score"].mean()))),
        average_safety_rating=round(float(df["safety_rating"].mean()), 1),
        feature_count=int(df["features"].map(len).sum()),
        pet_friendly_count=int(df["pet_friendly"].eq(True).sum()),
    )


@app.get("/data/quality", response_model=DataQualityReport)
def data_quality() -> DataQualityReport:
    return compute_data_quality(get_catalog())


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/signup", status_code=201)
def signup(body: SignupRequest) -> dict:
    user = register(body.email, body.password, name=body.name)
    if not user:
        raise HTTPException(status_code=409, detail="User already exists")
    return {"status": "created", "user": user}


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── User endpoints ───────────────────────────────────────────────────────


@app.post("/match", response_model=MatchResponse)
def match(
    preferences: UserPreferences | None = None,
    limit: int = Query(default=DEFAULT_MATCH_LIMIT, ge=1, le=50),
    user: dict = Depends(require_user),
) -> MatchResponse:
    if preferences is None or preferences.is_empty():
        raise HTTPException(status_code=400, detail="User preferences are required")

    start_time = time.time()
    catalog = get_catalog()
    matches = rank(catalog, preferences, limit)
    elapsed_ms = round((time.time() - start_time) * 1000, 1)

    record_event("match", {
        "budget": preferences.target_budget,
        "max_commute": preferences.commute_ceiling,
        "lifestyle": preferences.lifestyle,
        "priorities": preferences.priorities,
        "limit": limit,
        "total_neighborhoods": len(catalog),
        "results_returned": len(matches),
        "top_score": matches[0].score if matches else None,
        "response_time_ms": elapsed_ms,
    }, _ANALYTICS_CONFIG)

    return MatchResponse(
        matches=matches,
        total_neighborhoods=len(catalog),
        response_time_ms=elapsed_ms,
        algorithm_version=_ANALYTICS_CONFIG.algorithm_version,
    )


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(
        get_events(), compute_data_quality(get_catalog()), _ANALYTICS_CONFIG,
    )


@app.post("/analytics/snapshot")
def analytics_snapshot(user: dict = Depends(require_admin)) -> dict:
    report = compute_analytics(
        get_events(), compute_data_quality(get_catalog()), _ANALYTICS_CONFIG,
    )
    path = save_snapshot(_ANALYTICS_CONFIG.snapshot_path, report)
    return {"status": "saved", "path": str(path), "events": len(get_events())}
