import dataclasses

import pytest

from levelgen.routes.layout_api import _layout_cache


def test_generate_endpoint_shape(client):
    r = client.get("/api/layout/generate?rooms=6&types=3&seed=9")
    assert r.status_code == 200
    data = r.get_json()
    assert data["seed"] == 9
    assert len(data["rooms"]) == 7
    assert data["rooms"][0]["coordinate"] == [0, 0]
    assert len(data["grid"]) == data["height"]
    assert all(len(row) == data["width"] for row in data["grid"])
    assert set(data["rooms"][0]["open_directions"]) == {"north", "east", "south", "west"}
    assert "metrics" in data


def test_generate_endpoint_post_body(client):
    r = client.post("/api/layout/generate", json={"rooms": 4, "types": 2, "seed": 5, "world": True, "grid": False})
    assert r.status_code == 200
    data = r.get_json()
    assert "grid" not in data
    assert all("world_position" in room for room in data["rooms"])


def test_generate_is_deterministic_and_cached(client):
    a = client.get("/api/layout/generate?rooms=20&types=4&seed=1234").get_json()
    assert (20, 4, 1234) in _layout_cache
    b = client.get("/api/layout/generate?rooms=20&types=4&seed=1234").get_json()
    assert a["grid"] == b["grid"]
    assert a["rooms"] == b["rooms"]


def test_cache_bypass(client, monkeypatch):
    monkeypatch.setenv("LEVELGEN_DISABLE_CACHE", "1")
    r = client.get("/api/layout/generate?rooms=3&seed=2")
    assert r.status_code == 200
    assert not _layout_cache


def test_cache_size_capped(client, test_app, monkeypatch):
    monkeypatch.setitem(test_app.config, "LEVELGEN_CACHE_SIZE", 2)
    for seed in (1, 2, 3):
        client.get(f"/api/layout/generate?rooms=2&seed={seed}")
    assert len(_layout_cache) == 2
    assert (2, 2, 1) not in _layout_cache


def test_invalid_type_count_is_400(client):
    r = client.get("/api/layout/generate?rooms=3&types=0")
    assert r.status_code == 400
    assert r.get_json()["field"] == "room_type_count"


def test_non_integer_param_is_400(client):
    r = client.get("/api/layout/generate?rooms=lots")
    assert r.status_code == 400
    assert r.get_json()["field"] == "room_count"


def test_room_limit_is_400(client, test_app, monkeypatch):
    monkeypatch.setitem(test_app.config, "LEVELGEN_MAX_ROOMS", 10)
    r = client.get("/api/layout/generate?rooms=11&seed=1")
    assert r.status_code == 400
    assert "exceed" in r.get_json()["error"]


def test_env_defaults_apply(client, monkeypatch):
    monkeypatch.setenv("LEVELGEN_ROOM_COUNT", "3")
    data = client.get("/api/layout/generate?seed=8").get_json()
    assert len(data["rooms"]) == 4


def test_metrics_endpoint(client):
    r = client.get("/api/layout/metrics?rooms=15&types=3&seed=12345")
    assert r.status_code == 200
    data = r.get_json()
    assert data["seed"] == 12345
    for k in ["rooms_placed", "walks", "walk_steps", "corridors_carved", "open_doors", "runtime_ms", "phase_ms"]:
        assert k in data["metrics"]
    assert data["metrics"]["rooms_placed"] == 15


def test_session_seed_used_when_no_seed_param(client):
    client.post("/api/layout/seed", json={"seed": 4242})
    a = client.get("/api/layout/generate?rooms=10").get_json()
    assert a["seed"] == 4242
    b = client.get("/api/layout/generate?rooms=10&seed=4242").get_json()
    assert a["grid"] == b["grid"]


def test_internal_error_is_500(client, monkeypatch):
    from levelgen.layout import InternalConsistencyError
    from levelgen.routes import layout_api

    def broken(cfg):
        raise InternalConsistencyError("boom")

    monkeypatch.setattr(layout_api, "generate", broken)
    monkeypatch.setenv("LEVELGEN_DISABLE_CACHE", "1")
    r = client.get("/api/layout/generate?rooms=2&seed=1")
    assert r.status_code == 500
    body = r.get_json()
    assert body["error"] == "layout generation failed"
    assert len(body["error_id"]) == 8


def test_non_object_json_body_is_400(client):
    r = client.post("/api/layout/generate", data="[1, 2]", content_type="application/json")
    assert r.status_code == 400
    body = r.get_json()
    assert body["error"] == "request body must be a JSON object"
    assert body["field"] is None


def test_fractional_room_count_is_400(client):
    r = client.post("/api/layout/generate", json={"rooms": 2.9, "seed": 1})
    assert r.status_code == 400
    assert r.get_json()["field"] == "room_count"


def test_integral_float_room_count_accepted(client):
    r = client.post("/api/layout/generate", json={"rooms": 3.0, "seed": 1})
    assert r.status_code == 200
    assert len(r.get_json()["rooms"]) == 4


def test_infinite_room_count_is_400(client):
    r = client.post("/api/layout/generate", data='{"rooms": Infinity}', content_type="application/json")
    assert r.status_code == 400
    assert r.get_json()["field"] == "room_count"


def test_cache_hit_refreshes_entry(client, test_app, monkeypatch):
    monkeypatch.setitem(test_app.config, "LEVELGEN_CACHE_SIZE", 2)
    client.get("/api/layout/generate?rooms=2&seed=1")
    client.get("/api/layout/generate?rooms=2&seed=2")
    # touching seed 1 makes seed 2 the least recently used
    client.get("/api/layout/generate?rooms=2&seed=1")
    client.get("/api/layout/generate?rooms=2&seed=3")
    assert list(_layout_cache) == [(2, 2, 1), (2, 2, 3)]


def test_cached_rooms_are_read_only(client):
    client.get("/api/layout/generate?rooms=3&seed=6")
    result = _layout_cache[(3, 2, 6)]
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.rooms[0].visited = False
