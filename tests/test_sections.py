def test_optional_upsert_uses_default_total(client):
    client.put("/api/optional", json={"section_name": "Paper 1 Section A", "completed_items": 20})
    client.put("/api/optional", json={"section_name": "Paper 1 Section A", "completed_items": 35})

    rows = client.get("/api/optional").json()

    assert len(rows) == 1
    assert rows[0]["completed_items"] == 35
    assert rows[0]["total_items"] == 140


def test_psir_default_totals_depend_on_section(client):
    for name in ("Lectures", "Tests", "Paper 2"):
        client.put("/api/psir", json={"section_name": name, "completed_items": 1})

    totals = {r["section_name"]: r["total_items"] for r in client.get("/api/psir").json()}

    assert totals == {"Lectures": 250, "Tests": 500, "Paper 2": 150}


def test_negative_completed_items_rejected(client):
    response = client.put("/api/psir", json={"section_name": "Lectures", "completed_items": -3})
    assert response.status_code == 400


def test_current_affairs_defaults_then_upsert(client):
    assert client.get("/api/current-affairs").json() == {"completed_topics": 0, "total_topics": 300}

    client.put("/api/current-affairs", json={"completed_topics": 45})
    client.put("/api/current-affairs", json={"completed_topics": 60})

    row = client.get("/api/current-affairs").json()
    assert row["completed_topics"] == 60
    assert row["total_topics"] == 300


def test_essay_progress_defaults_then_partial_update(client):
    defaults = client.get("/api/essay").json()
    assert defaults == {"lectures_completed": 0, "essays_written": 0, "total_lectures": 10, "total_essays": 100}

    client.put("/api/essay", json={"lectures_completed": 4, "essays_written": 2})
    client.put("/api/essay", json={"essays_written": 5})

    row = client.get("/api/essay").json()
    assert row["lectures_completed"] == 4
    assert row["essays_written"] == 5
