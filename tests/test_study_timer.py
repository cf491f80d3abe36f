def test_focus_session_is_listed_for_today(client):
    created = client.post("/api/study-timer", json={"subject": "Polity", "duration": 25, "type": "focus"}).json()

    rows = client.get("/api/study-timer").json()["data"]

    assert created["success"] is True
    assert [r["id"] for r in rows] == [created["id"]]
    assert rows[0]["duration_minutes"] == 25
    assert rows[0]["session_type"] == "focus"


def test_subject_defaults_to_general_study(client):
    client.post("/api/study-timer", json={"duration": 5, "type": "break"})
    assert client.get("/api/study-timer").json()["data"][0]["subject"] == "General Study"


def test_unknown_session_type_is_rejected(client):
    assert client.post("/api/study-timer", json={"duration": 25, "type": "nap"}).status_code == 400
    assert client.post("/api/study-timer", json={"duration": 0}).status_code == 400


def test_user_stats_before_any_activity(client):
    data = client.get("/api/user-stats").json()["data"]

    assert data == {
        "total_points": 0,
        "current_level": "Iron",
        "streak_days": 0,
        "questions_solved": 0,
        "study_hours": 0,
        "tests_completed": 0,
    }


def test_user_stats_count_study_time_points_and_tests(client):
    client.post("/api/study-timer", json={"subject": "Economy", "duration": 90, "type": "focus"})
    client.post("/api/study-timer", json={"duration": 30, "type": "pomodoro"})
    client.post("/api/study-timer", json={"duration": 15, "type": "break"})
    client.put("/api/gamification", json={"prelims_questions": 40, "mains_questions": 5})
    client.post("/api/tests", json={
        "test_type": "prelims", "test_category": "mock", "subject": "GS1",
        "total_marks": 200, "scored_marks": 98, "attempt_date": "2025-03-02",
    })

    data = client.get("/api/user-stats").json()["data"]

    # 120 study minutes plus 45 questions; breaks earn nothing
    assert data["total_points"] == 165
    assert data["study_hours"] == 2
    assert data["questions_solved"] == 45
    assert data["streak_days"] == 1
    assert data["tests_completed"] == 1


def test_study_sessions_count_towards_daily_hours(client, monkeypatch):
    from logic import assistant

    seen_hours = []

    def capture(weak_areas, study_hours):
        seen_hours.append(study_hours)
        return []

    monkeypatch.setattr(assistant, "generate_study_suggestions", capture)
    client.post("/api/study-timer", json={"duration": 120, "type": "focus"})
    client.post("/api/study-timer", json={"duration": 30, "type": "break"})

    client.post("/api/ai/suggestions", json={"weak_areas": []})

    assert seen_hours == [2.0]
