from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from neighborly.catalog.config import CatalogConfig
from neighborly.catalog.models import Neighborhood
from neighborly.catalog.store import (
    clear_catalog,
    get_catalog,
    load_catalog,
    reload_catalog,
    search_catalog,
    set_catalog,
)
from neighborly.catalog.validation import validate_catalog


@pytest.fixture
def isolated_catalog():
    clear_catalog()
    yield
    clear_catalog()


def _write(path: Path, records: list[dict]) -> Path:
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_bundled_catalog_loads_and_validates():
    catalog = load_catalog(CatalogConfig().catalog_path)
    assert len(catalog) == 10
    assert len({n.id for n in catalog}) == 10
    assert validate_catalog(catalog).valid


def test_load_catalog_from_file(tmp_path: Path):
    path = _write(tmp_path / "hoods.json", [
        {"id": 1, "name": "A", "city": "X", "features": ["parks"],
         "average_rent": 1500, "walk_score": 70, "safety_rating": 4, "unknown_field": 1},
        {"id": 2, "name": "B", "city": "X",
         "average_rent": 1700, "walk_score": 60, "safety_rating": 3.5},
    ])
    catalog = load_catalog(path)
    assert isinstance(catalog, tuple)
    assert [n.id for n in catalog] == [1, 2]
    assert catalog[1].features == []


def test_load_catalog_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "nope.json")


def test_load_catalog_rejects_malformed_records(tmp_path: Path):
    path = _write(tmp_path / "bad.json", [{"id": 1, "name": "No numbers"}])
    with pytest.raises(ValidationError):
        load_catalog(path)


def test_load_catalog_keeps_out_of_range_records(tmp_path: Path):
    path = _write(tmp_path / "odd.json", [
        {"id": 1, "name": "Odd", "city": "X",
         "average_rent": 1500, "walk_score": 140, "safety_rating": 9},
    ])
    catalog = load_catalog(path)
    assert catalog[0].walk_score == 140


def test_set_catalog_swaps_snapshot(isolated_catalog):
    first = set_catalog([Neighborhood(id=1, average_rent=1000, walk_score=50, safety_rating=3)])
    held = get_catalog()
    set_catalog([Neighborhood(id=2, average_rent=2000, walk_score=60, safety_rating=4)])
    assert held is first
    assert [n.id for n in held] == [1]
    assert [n.id for n in get_catalog()] == [2]


def test_reload_catalog_reads_config_path(isolated_catalog, tmp_path: Path):
    path = _write(tmp_path / "hoods.json", [
        {"id": 9, "name": "Solo", "city": "Y",
         "average_rent": 1200, "walk_score": 40, "safety_rating": 4},
    ])
    catalog = reload_catalog(CatalogConfig(catalog_path=path))
    assert [n.id for n in catalog] == [9]
    assert get_catalog() is catalog


# ── Browsing ─────────────────────────────────────────────────────────────


def _bundled() -> tuple[Neighborhood, ...]:
    return load_catalog(CatalogConfig().catalog_path)


def test_search_filters_by_city_case_insensitive():
    page = search_catalog(_bundled(), city="springfield")
    assert page.total == 3
    assert all(n.city == "Springfield" for n in page.neighborhoods)


def test_search_filters_by_feature_keyword():
    page = search_catalog(_bundled(), features=["GYM"])
    assert sorted(n.id for n in page.neighborhoods) == [5, 8]


def test_search_rent_and_scores():
    page = search_catalog(_bundled(), max_rent=1600, min_safety_rating=4.4)
    assert sorted(n.id for n in page.neighborhoods) == [4, 9]


def test_search_sorts_numeric_descending():
    page = search_catalog(_bundled(), min_walk_score=80, sort_by="walk_score", sort_order="desc")
    walk_scores = [n.walk_score for n in page.neighborhoods]
    assert walk_scores == sorted(walk_scores, reverse=True)
    assert page.neighborhoods[0].id == 1


def test_search_sorts_by_name_by_default():
    names = [n.name for n in search_catalog(_bundled(), limit=100).neighborhoods]
    assert names == sorted(names, key=str.lower)


def test_search_paginates():
    page = search_catalog(_bundled(), page=4, limit=3)
    assert page.total == 10
    assert page.total_pages == 4
    assert len(page.neighborhoods) == 1


def test_search_empty_catalog():
    page = search_catalog((), city="anywhere")
    assert page.total == 0
    assert page.neighborhoods == []
