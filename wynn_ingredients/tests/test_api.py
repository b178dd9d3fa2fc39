from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from wynn_ingredients.app import app
from wynn_ingredients.catalog import data_store
from wynn_ingredients.catalog.data_store import load_catalog
from wynn_ingredients.catalog.query import catalog_metadata, search_ingredients
from wynn_ingredients.data_refresh.config import RefreshConfig
from wynn_ingredients.data_refresh.history import clear_runs
from wynn_ingredients.data_refresh.models import NearestPlace, PlacesResult
from wynn_ingredients.data_refresh.normalizer import normalize_ingredient
from wynn_ingredients.data_refresh.persistence import write_catalog
from wynn_ingredients.data_refresh.pipeline import build_catalog
from wynn_ingredients.data_refresh.sources import ItemSourceError

from .sample_data import INGREDIENT_NAMES, SAMPLE_ITEMS, SAMPLE_PLACES

client = TestClient(app)


def _login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


@pytest.fixture(autouse=True)
def sample_catalog(tmp_path: Path):
    path = write_catalog(build_catalog(SAMPLE_ITEMS, SAMPLE_PLACES), tmp_path / "ingredients.json")
    load_catalog(path)
    clear_runs()
    yield path
    load_catalog(tmp_path / "missing.json")


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_list_ingredients_in_catalog_order():
    resp = client.get("/ingredients")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 3
    assert [i["internalName"] for i in body["ingredients"]] == INGREDIENT_NAMES


def test_list_uses_catalog_field_names():
    body = client.get("/ingredients", params={"name": "rotten"}).json()
    entry = body["ingredients"][0]
    assert entry["consumableOnlyIDs"] == {"duration": 60, "charges": 0}
    assert entry["nearestPlace"] == {"name": "Ragni", "distance": 41}
    assert entry["tier"] == "Normal"


def test_filter_by_skill():
    body = client.get("/ingredients", params={"skill": "Tailoring"}).json()
    assert [i["internalName"] for i in body["ingredients"]] == ["Wybel Fluff"]


def test_filter_by_tier():
    body = client.get("/ingredients", params={"tier": "1"}).json()
    assert [i["internalName"] for i in body["ingredients"]] == ["Ancient Coin"]


def test_filter_by_location():
    with_place = client.get("/ingredients", params={"has_location": True}).json()
    without_place = client.get("/ingredients", params={"has_location": False}).json()
    assert with_place["total"] == 2
    assert [i["internalName"] for i in without_place["ingredients"]] == ["Ancient Coin"]


def test_pagination():
    body = client.get("/ingredients", params={"limit": 1, "offset": 1}).json()
    assert body["total"] == 3
    assert [i["internalName"] for i in body["ingredients"]] == ["Wybel Fluff"]


def test_pagination_validation():
    assert client.get("/ingredients", params={"limit": 0}).status_code == 422
    assert client.get("/ingredients", params={"offset": -1}).status_code == 422


def test_ingredient_detail():
    resp = client.get("/ingredients/Ancient Coin")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Ancient Coin"
    assert body["dropMeta"] is None
    assert body["icon"] is None


def test_ingredient_detail_unknown():
    assert client.get("/ingredients/Nepta Floodbringer").status_code == 404


def test_metadata():
    body = client.get("/metadata").json()
    assert body["total"] == 3
    assert body["tiers"] == ["1", "2", "Normal"]
    assert body["skills"] == ["alchemism", "cooking", "tailoring"]
    assert body["places"] == ["Legacy Marker", "Ragni"]


def test_empty_catalog(tmp_path: Path):
    load_catalog(tmp_path / "nothing-here.json")
    assert client.get("/ingredients").json()["total"] == 0
    assert client.get("/metadata").json() == {"total": 0, "tiers": [], "skills": [], "places": []}


# ── Auth / admin ─────────────────────────────────────────────────────────


def test_login_wrong_password():
    resp = client.post("/auth/login", json={"username": "admin", "password": "wrong"})
    assert resp.status_code == 401


def test_refresh_requires_login():
    c = TestClient(app)  # fresh client, no session
    assert c.post("/admin/refresh").status_code == 401
    assert c.get("/admin/refresh/history").status_code == 401


@patch("wynn_ingredients.data_refresh.pipeline.fetch_places")
@patch("wynn_ingredients.data_refresh.pipeline.fetch_items")
def test_refresh_rebuilds_and_reloads(mock_items, mock_places, tmp_path: Path):
    mock_items.return_value = {"Ancient Coin": SAMPLE_ITEMS["Ancient Coin"]}
    mock_places.return_value = PlacesResult.unavailable("offline")
    cfg = RefreshConfig(output_dir=tmp_path / "fresh")

    with patch("wynn_ingredients.app.DEFAULT_REFRESH_CONFIG", cfg):
        _login_admin(client)
        resp = client.post("/admin/refresh")

    assert resp.status_code == 200
    body = resp.json()
    assert body["ingredient_count"] == 1
    assert body["enrichment_available"] is False
    assert cfg.catalog_path.is_file()
    assert client.get("/ingredients").json()["total"] == 1

    history = client.get("/admin/refresh/history").json()
    assert history["total"] == 1
    assert history["runs"][0]["status"] == "ok"


@patch("wynn_ingredients.data_refresh.pipeline.fetch_items")
def test_refresh_source_failure(mock_items, tmp_path: Path):
    mock_items.side_effect = ItemSourceError("Item database request failed: 503")
    cfg = RefreshConfig(output_dir=tmp_path / "fresh")

    with patch("wynn_ingredients.app.DEFAULT_REFRESH_CONFIG", cfg):
        _login_admin(client)
        resp = client.post("/admin/refresh")

    assert resp.status_code == 502
    assert not cfg.catalog_path.exists()
    assert client.get("/ingredients").json()["total"] == 3

    runs = client.get("/admin/refresh/history").json()["runs"]
    assert runs[-1]["status"] == "failed"


@patch("wynn_ingredients.app.run_refresh")
def test_refresh_unexpected_error_is_recorded(mock_run):
    mock_run.side_effect = PermissionError("catalog directory is read-only")
    c = TestClient(app, raise_server_exceptions=False)
    _login_admin(c)

    resp = c.post("/admin/refresh")

    assert resp.status_code == 500
    runs = c.get("/admin/refresh/history").json()["runs"]
    assert len(runs) == 1
    assert runs[0]["status"] == "failed"
    assert "PermissionError" in runs[0]["error"]
    assert runs[0]["duration_ms"] >= 0
    assert client.get("/ingredients").json()["total"] == 3


# ── Catalog store ────────────────────────────────────────────────────────


def test_reader_during_reload_sees_a_consistent_catalog(tmp_path: Path):
    real_build_frame = data_store._build_frame
    seen: list[tuple[int, int]] = []

    def build_frame_with_concurrent_reader(records):
        page, total = search_ingredients(limit=500)
        seen.append((len(page), total))
        seen.append((catalog_metadata()["total"], len(data_store.get_records())))
        return real_build_frame(records)

    with patch.object(data_store, "_build_frame", side_effect=build_frame_with_concurrent_reader):
        load_catalog(tmp_path / "empty-after-refresh.json")

    assert seen == [(3, 3), (3, 3)]
    assert search_ingredients() == ([], 0)


def test_nameless_place_counts_as_location_but_not_as_metadata(tmp_path: Path):
    entry = normalize_ingredient(
        "Unmarked Shard",
        {"consumableOnlyIDs": {}},
        NearestPlace(name="", distance=4),
    )
    load_catalog(write_catalog([entry], tmp_path / "nameless.json"))

    assert client.get("/metadata").json()["places"] == []
    body = client.get("/ingredients", params={"has_location": True}).json()
    assert [i["internalName"] for i in body["ingredients"]] == ["Unmarked Shard"]
