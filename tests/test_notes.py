def note(**overrides):
    body = {"subject": "Polity", "topic": "Federalism", "content": "Art. 246 and the three lists", "tags": ["gs2"]}
    body.update(overrides)
    return body


def test_create_list_and_delete(client):
    first = client.post("/api/notes", json=note(topic="Federalism")).json()
    second = client.post("/api/notes", json=note(topic="Emergency provisions", tags=[])).json()

    rows = client.get("/api/notes").json()["data"]
    assert [r["id"] for r in rows] == [second["id"], first["id"]]
    assert rows[1]["tags"] == ["gs2"]

    assert client.delete(f"/api/notes?id={first['id']}").json() == {"success": True}
    assert [r["topic"] for r in client.get("/api/notes").json()["data"]] == ["Emergency provisions"]


def test_delete_unknown_note_is_404(client):
    response = client.delete("/api/notes?id=999")
    assert response.status_code == 404
    assert response.json() == {"error": "Note not found"}


def test_note_requires_subject_and_topic(client):
    assert client.post("/api/notes", json=note(subject="")).status_code == 400


def test_generated_notes_can_be_read_back(client):
    client.post("/api/ai/smart-features", json={
        "action": "generate_notes", "data": {"subject": "Economy", "topic": "Inflation"},
    })
    client.post("/api/ai/smart-features", json={
        "action": "generate_notes", "data": {"subject": "Polity", "topic": "Federalism"},
    })

    everything = client.get("/api/notes/smart").json()["data"]
    polity = client.get("/api/notes/smart?subject=Polity").json()["data"]

    assert [n["topic"] for n in everything] == ["Federalism", "Inflation"]
    assert [n["topic"] for n in polity] == ["Federalism"]
    assert polity[0]["difficulty_level"] == "basic"
    assert "Federalism" in polity[0]["content"]
