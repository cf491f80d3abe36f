import json
from datetime import datetime, timedelta, timezone

from logic import assistant, prediction
from models.ai_log import ChatHistory, MotivationQuote, SmartNote
from models.evaluation import AnswerEvaluation, EssayEvaluation
from routers import ai


def seed_progress(client):
    client.post("/api/subjects", json={"subject": "Polity", "category": "GS2", "total_lectures": 10, "total_dpps": 5})
    client.post("/api/subjects", json={"subject": "Economy", "category": "GS3", "total_lectures": 10, "total_dpps": 5})
    subject_id = client.get("/api/subjects").json()[0]["id"]
    client.put("/api/subjects/update-count", json={"id": subject_id, "field": "completed_lectures", "count": 8})
    client.post("/api/goals", json={"date": "2025-01-01", "subject": "Polity", "hours_studied": 4})
    client.post("/api/tests", json={
        "test_type": "prelims", "test_category": "mock", "subject": "GS1",
        "total_marks": 200, "scored_marks": 120, "attempt_date": "2025-01-02",
    })


def test_prediction_is_reproducible_with_seed(client):
    seed_progress(client)

    first = client.get("/api/ai/prediction?seed=11").json()
    second = client.get("/api/ai/prediction?seed=11").json()

    assert first == second
    assert first["fallback"] is False


def test_prediction_falls_back_on_failure(client, monkeypatch):
    def broken(db, user_id):
        raise RuntimeError("boom")

    monkeypatch.setattr(ai, "load_user_data", broken)

    data = client.get("/api/ai/prediction").json()

    assert data["fallback"] is True
    assert data["overall_rank"] == prediction.FALLBACK_PREDICTION["overall_rank"]


def test_suggestions_derive_weak_subjects(client, llm_reply):
    seed_progress(client)
    seen = llm_reply("no json here")

    data = client.post("/api/ai/suggestions", json={}).json()

    assert data["suggestions"] == assistant.FALLBACK_SUGGESTIONS
    assert "Weak areas: Economy." in seen[0][1]["content"]


def test_generate_questions_endpoint_uses_fallback_offline(client):
    data = client.post("/api/ai/generate-questions", json={"topic": "polity"}).json()
    assert data["questions"] == assistant.FALLBACK_QUESTIONS


def test_unknown_smart_action_is_400(client):
    response = client.post("/api/ai/smart-features", json={"action": "teleport", "data": {}})
    assert response.status_code == 400


def test_generate_notes_picks_difficulty_and_stores_note(client, db_session):
    seed_progress(client)

    data = client.post("/api/ai/smart-features", json={
        "action": "generate_notes", "data": {"subject": "Polity", "topic": "Federalism"},
    }).json()

    # Polity: 8 of 10 lectures done
    assert data["difficulty"] == "advanced"
    assert data["progress"] == 80.0
    note = db_session.query(SmartNote).one()
    assert note.topic == "Federalism"
    assert note.content == data["notes"]


def test_generate_notes_requires_subject_and_topic(client):
    response = client.post("/api/ai/smart-features", json={"action": "generate_notes", "data": {"subject": "Polity"}})
    assert response.status_code == 400


def test_evaluate_answer_stored(client, db_session, llm_reply):
    llm_reply('{"score": 8, "feedback": "Well argued"}')

    data = client.post("/api/ai/smart-features", json={
        "action": "evaluate_answer", "data": {"question": "Discuss federalism.", "answer": "India is a union..."},
    }).json()

    assert data["score"] == 8
    row = db_session.query(AnswerEvaluation).one()
    assert row.score == 8
    assert row.feedback == "Well argued"


def test_chat_query_includes_progress_and_is_logged(client, db_session, llm_reply):
    seed_progress(client)
    seen = llm_reply("Revise Polity twice a week.")

    data = client.post("/api/ai/smart-features", json={"action": "chat_query", "data": {"query": "How to revise?"}}).json()

    assert data["response"] == "Revise Polity twice a week."
    assert "Polity: 80%" in seen[0][0]["content"]
    assert db_session.query(ChatHistory).count() == 1


def test_storage_failure_does_not_change_result(client, monkeypatch, llm_reply):
    from sqlalchemy.exc import OperationalError

    llm_reply("Stay consistent.")

    def failing_commit(self):
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr("sqlalchemy.orm.Session.commit", failing_commit)

    data = client.post("/api/ai/smart-features", json={"action": "chat_query", "data": {"query": "Tips?"}}).json()

    assert data == {"success": True, "response": "Stay consistent."}


def test_predict_performance_and_revision_schedule(client):
    seed_progress(client)

    perf = client.post("/api/ai/smart-features", json={"action": "predict_performance", "data": {}}).json()
    schedule = client.post("/api/ai/smart-features", json={"action": "get_revision_schedule", "data": {}}).json()

    # lectures 40% average, tests 60%
    assert perf["prediction"]["predicted_score"] == 50
    assert perf["prediction"]["key_factors"] == ["Completion: 40.0%", "Test avg: 60.0%"]
    assert [s["priority"] for s in schedule["schedule"]] == ["Low", "High"]


def test_motivation_reuses_recent_quote(client, db_session, llm_reply):
    llm_reply("Consistency beats intensity.")
    first = client.get("/api/motivation").json()

    llm_reply("A different quote.")
    second = client.get("/api/motivation").json()

    assert first == second == {"quote": "Consistency beats intensity."}
    assert db_session.query(MotivationQuote).count() == 1


def test_motivation_regenerates_stale_quote(client, db_session, llm_reply):
    db_session.add(MotivationQuote(
        user_id=1, quote="Old quote", generated_at=datetime.now(timezone.utc) - timedelta(hours=4),
    ))
    db_session.commit()
    llm_reply("Fresh quote.")

    assert client.get("/api/motivation").json() == {"quote": "Fresh quote."}


def test_essay_evaluation_endpoint_persists(client, db_session, llm_reply):
    llm_reply(json.dumps({
        "overall_score": 70, "content_score": 70, "structure_score": 70, "language_score": 70,
        "coherence_score": 70, "feedback": "Solid", "strengths": [], "weaknesses": [], "suggestions": [],
    }))

    data = client.post("/api/essay/evaluate", json={"topic": "Water security", "essay": "word " * 900}).json()

    assert data["success"] is True
    assert data["word_count"] == 900
    row = db_session.query(EssayEvaluation).one()
    assert row.overall_score == 70
    assert row.word_count == 900


def test_essay_evaluation_requires_topic(client):
    assert client.post("/api/essay/evaluate", json={"topic": "", "essay": "text"}).status_code == 400
