from labyrinth import create_app
from tests.maze_test_utils import open_grid


def _create(client, **payload):
    resp = client.post("/api/maze", json=payload)
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


def test_create_and_fetch_linear_maze(client):
    data = _create(client, width=6, height=4, seed=12345)
    assert data["seed"] == 12345
    assert data["behavior"] is None
    maze = data["maze"]
    assert (maze["width"], maze["height"]) == (6, 4)
    assert maze["entrance"] == [0, 0] and maze["exit"] == [5, 3]
    assert len(maze["grid"]) == 4 and len(maze["grid"][0]) == 6
    assert maze["metrics"]["passages_carved"] == 23

    got = client.get(f"/api/maze/{data['id']}")
    assert got.status_code == 200
    body = got.get_json()
    assert body["solvable"] is True
    assert body["maze"]["grid"] == maze["grid"]


def test_same_seed_same_walls(client):
    a = _create(client, width=8, height=8, seed=99)
    b = _create(client, width=8, height=8, seed=99)
    assert a["id"] != b["id"]
    assert a["maze"]["grid"] == b["maze"]["grid"]


def test_string_seed_is_hashed_deterministically(client):
    a = _create(client, width=4, height=4, seed="alpha")
    b = _create(client, width=4, height=4, seed="alpha")
    assert isinstance(a["seed"], int)
    assert a["seed"] == b["seed"]
    assert _create(client, width=4, height=4, seed="42")["seed"] == 42


def test_bad_payloads_are_400(client):
    for payload in (
        {"type": "SPIRAL"},
        {"width": "wide"},
        {"width": 0},
        {"layers": 0},
        {"layers": 17},
        {"type": "MULTI_LAYERED", "width": 200, "height": 200, "layers": 100000},
        {"seed": True},
        {"seed": [1, 2]},
        {"width": 5000},
        {"difficulty": "hard"},
        {"difficulty": "inf"},
        {"template": {"grid": []}},
    ):
        resp = client.post("/api/maze", json=payload)
        assert resp.status_code == 400, payload
        assert "error" in resp.get_json()


def test_unknown_maze_is_404(client):
    assert client.get("/api/maze/nope").status_code == 404
    assert client.post("/api/maze/nope/tick", json={}).status_code == 404
    assert client.post("/api/maze/nope/transition", json={}).status_code == 404
    assert client.get("/api/maze/nope/path").status_code == 404
    assert client.get("/api/maze/nope/report").status_code == 404


def test_shadow_tick_reports_visible_diamond(client):
    data = _create(client, type="SHADOW", width=10, height=10, seed=3)
    assert data["behavior"]["kind"] == "SHADOW"
    resp = client.post(f"/api/maze/{data['id']}/tick", json={"pos": [0, 0], "elapsed_ms": 16})
    assert resp.status_code == 200
    visible = {tuple(p) for p in resp.get_json()["visible"]}
    assert visible == {(x, y) for x in range(4) for y in range(4) if x + y <= 3}


def test_tick_rejects_non_numeric_elapsed(client):
    data = _create(client, type="MEMORY", width=5, height=5, seed=3)
    resp = client.post(f"/api/maze/{data['id']}/tick", json={"elapsed_ms": "later"})
    assert resp.status_code == 400


def test_memory_tick_advances_clock(client):
    data = _create(client, type="MEMORY", width=5, height=5, seed=3)
    client.post(f"/api/maze/{data['id']}/tick", json={"pos": [2, 2], "elapsed_ms": 100})
    body = client.post(f"/api/maze/{data['id']}/tick", json={"elapsed_ms": 50}).get_json()
    assert body["behavior"]["current_time"] == 150
    assert [2, 2] in body["visible"]


def test_transition_switches_layers(client):
    data = _create(client, type="MULTI_LAYERED", width=6, height=6, layers=2, seed=11)
    transitions = data["behavior"]["transitions"]
    assert len(transitions) == 2
    up = next(t for t in transitions if t["from_layer"] == 0)
    resp = client.post(f"/api/maze/{data['id']}/transition", json={"pos": up["position"]})
    assert resp.get_json() == {"ok": True, "current_layer": 1}


def test_transition_on_flat_maze_is_400(client):
    data = _create(client, width=4, height=4, seed=1)
    resp = client.post(f"/api/maze/{data['id']}/transition", json={"pos": [0, 0]})
    assert resp.status_code == 400


def test_path_runs_entrance_to_exit(client):
    data = _create(client, width=7, height=5, seed=21)
    body = client.get(f"/api/maze/{data['id']}/path").get_json()
    assert body["solvable"] is True
    path = body["path"]
    assert path[0] == [0, 0] and path[-1] == [6, 4]
    for a, b in zip(path, path[1:]):
        assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def test_report_includes_validation_and_complexity(client):
    data = _create(client, width=10, height=10, seed=5, layers=1, obstacle_count=2, difficulty=2)
    body = client.get(f"/api/maze/{data['id']}/report").get_json()
    assert body["is_valid"] is True
    assert body["errors"] == []
    assert body["open_passages"] == 99
    # (10 + 10 + 10) * 2
    assert body["complexity"]["configured"] == 60
    assert body["complexity"]["actual"] == 20


def test_template_payload_builds_hybrid_maze(client):
    rows = [[cell.to_dict() for cell in row] for row in open_grid(3, 2)]
    data = _create(client, template={"id": "room", "grid": rows}, seed=1)
    maze = data["maze"]
    assert (maze["width"], maze["height"]) == (3, 2)
    assert maze["grid"] == rows
    assert maze["metrics"]["passages_carved"] == 7


def test_registry_is_capped():
    app = create_app({"TESTING": True, "LABYRINTH_MAZE_CACHE_MAX": 2})
    client = app.test_client()
    ids = [_create(client, width=3, height=3, seed=i)["id"] for i in range(3)]
    assert client.get(f"/api/maze/{ids[0]}").status_code == 404
    assert client.get(f"/api/maze/{ids[1]}").status_code == 200
    assert client.get(f"/api/maze/{ids[2]}").status_code == 200


def test_non_object_bodies_are_400(client):
    for body in ([1, 2], 3, "maze", False):
        resp = client.post("/api/maze", json=body)
        assert resp.status_code == 400, body
        assert resp.get_json()["error"] == "request body must be a JSON object"
    data = _create(client, type="MULTI_LAYERED", width=4, height=4, layers=2, seed=1)
    assert client.post(f"/api/maze/{data['id']}/tick", json=[0, 0]).status_code == 400
    assert client.post(f"/api/maze/{data['id']}/transition", json=[0, 0]).status_code == 400


def test_tick_rejects_non_finite_elapsed(client):
    data = _create(client, type="MEMORY", width=5, height=5, seed=3)
    client.post(f"/api/maze/{data['id']}/tick", json={"pos": [0, 0], "elapsed_ms": 10})
    for bad in ("inf", "-inf", "nan"):
        resp = client.post(f"/api/maze/{data['id']}/tick", json={"elapsed_ms": bad})
        assert resp.status_code == 400, bad
    state = client.get(f"/api/maze/{data['id']}").get_json()["behavior"]
    assert state["current_time"] == 10


def test_layer_cap_follows_app_config():
    app = create_app({"TESTING": True, "LABYRINTH_MAX_LAYERS": 3})
    client = app.test_client()
    assert client.post("/api/maze", json={"type": "MULTI_LAYERED", "layers": 3, "seed": 1}).status_code == 200
    resp = client.post("/api/maze", json={"type": "MULTI_LAYERED", "layers": 4, "seed": 1})
    assert resp.status_code == 400
    assert "layers" in resp.get_json()["error"]


def test_missing_or_blank_seed_gets_one_from_config(client):
    for payload in ({}, {"seed": ""}, {"seed": "   "}):
        seed = _create(client, width=3, height=3, **payload)["seed"]
        assert isinstance(seed, int)


def test_bad_app_config_override_is_400():
    app = create_app({"TESTING": True, "LABYRINTH_FADE_DELAY_MS": "soon"})
    resp = app.test_client().post("/api/maze", json={"type": "MEMORY", "seed": 1})
    assert resp.status_code == 400
    assert "LABYRINTH_FADE_DELAY_MS" in resp.get_json()["error"]
