from logic import assistant


def add_subject(client, name):
    client.post("/api/subjects", json={"subject": name, "category": "GS1", "total_lectures": 10, "total_dpps": 5})


def test_advanced_analytics_cached_until_refresh(client):
    add_subject(client, "Geography")
    first = client.get("/api/analytics/advanced").json()

    add_subject(client, "Society")
    cached = client.get("/api/analytics/advanced").json()
    refreshed = client.get("/api/analytics/advanced?refresh=true").json()

    assert first["overall_progress"]["total_subjects"] == 1
    assert cached["overall_progress"]["total_subjects"] == 1
    assert refreshed["overall_progress"]["total_subjects"] == 2


def test_advanced_analytics_cached_per_user(client, db_session):
    from models.user import User

    db_session.add(User(id=2, email="second@example.com", name="Second"))
    db_session.commit()
    add_subject(client, "Geography")
    client.get("/api/analytics/advanced")

    other = client.get("/api/analytics/advanced", headers={"X-User-Id": "2"}).json()

    assert other["overall_progress"]["total_subjects"] == 0


def test_detailed_analysis_includes_mood_insight(client):
    client.post("/api/goals", json={"date": "2025-01-01", "subject": "Polity", "hours_studied": 3, "questions_solved": 25})
    client.post("/api/mood", json={"date": "2025-01-01", "mood": "stressed"})

    data = client.get("/api/analysis/detailed").json()

    assert data["total_questions"] == 25
    assert data["total_hours"] == 3.0
    assert data["avg_mood_percent"] == 30
    assert data["mood_insight"] == assistant.FALLBACK_MOOD_INSIGHT


def test_detailed_analysis_passes_recent_moods_to_llm(client, llm_reply):
    client.post("/api/mood", json={"date": "2025-01-01", "mood": "tired"})
    seen = llm_reply("Rest more on weekends.")

    data = client.get("/api/analysis/detailed").json()

    assert data["mood_insight"] == "Rest more on weekends."
    assert "tired" in seen[0][1]["content"]
