def test_graph_endpoint(client):
    response = client.get("/graph/")
    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["total_apis"] == len(body["nodes"]) == 6
    for edge in body["edges"]:
        assert edge["weight"] > 0.3
        assert edge["from"] != edge["to"]


def test_graph_stats(client):
    response = client.get("/graph/stats")
    assert response.status_code == 200
    body = response.json()
    assert body["nodes"] == 6
    assert body["components"] >= 1


def test_similar_endpoint(client):
    response = client.get("/embeddings/openai/similar", params={"threshold": -1.0})
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 5
    assert all(r["api1"] == "openai" for r in body)


def test_flow_lifecycle(client):
    created = client.post("/flows/", json={"name": "demo", "apis": ["openai"]})
    assert created.status_code == 201
    flow = created.json()
    assert flow["status"] == "pending"

    step = client.post(
        f"/flows/{flow['id']}/steps",
        json={"action": "query", "api_id": "openai", "payload": {"query": "hi"}, "order": 1},
    )
    assert step.status_code == 201

    executed = client.post(f"/flows/{flow['id']}/execute")
    assert executed.status_code == 200
    assert executed.json()["status"] == "completed"

    again = client.post(f"/flows/{flow['id']}/execute")
    assert again.status_code == 409

    assert client.delete(f"/flows/{flow['id']}").status_code == 204
    assert client.get(f"/flows/{flow['id']}").status_code == 404


def test_unknown_action_rejected_at_construction(client):
    flow = client.post("/flows/", json={"name": "demo"}).json()
    response = client.post(
        f"/flows/{flow['id']}/steps",
        json={"action": "teleport", "api_id": "openai"},
    )
    assert response.status_code == 422


def test_unknown_flow_is_404(client):
    assert client.post("/flows/flow-missing/execute").status_code == 404


def test_suggest_and_route(client):
    suggested = client.post("/flows/suggest", json={"requirement": "write text and save it"})
    assert suggested.status_code == 201
    steps = suggested.json()["steps"]
    assert [(s["action"], s["api_id"], s["order"]) for s in steps] == [
        ("query", "openai", 1),
        ("forward", "github", 2),
    ]

    route = client.get(
        "/flows/route",
        params={"source": "openai", "target": "github", "capability": "embeddings"},
    )
    assert route.status_code == 200
    assert route.json()["route"] == ["openai", "hugging-face", "github"]


def test_symbols(client):
    listed = client.get("/symbols/")
    assert len(listed.json()) == 6

    executed = client.post("/symbols/execute", json={"symbol": "#", "payload": {}})
    assert executed.json()["success"] is True

    history = client.get("/symbols/history").json()
    assert history[-1]["symbol"] == "#"
