from setup_db import SEED_QUESTIONS


def test_seeded_questions_are_listed(client):
    data = client.get("/api/questions").json()["data"]

    assert len(data) == len(SEED_QUESTIONS)
    assert all(len(q["options"]) == 4 for q in data)


def test_add_question(client):
    response = client.post("/api/questions", json={
        "subject": "Geography",
        "topic": "Rivers",
        "question": "Which river is known as the Dakshin Ganga?",
        "options": ["Godavari", "Krishna", "Kaveri", "Narmada"],
        "correct_answer": "A",
    })

    assert response.status_code == 200
    assert len(client.get("/api/questions").json()["data"]) == len(SEED_QUESTIONS) + 1


def test_attempt_correctness_derived_from_answer_key(client):
    question = client.get("/api/questions").json()["data"][0]
    wrong = "B" if question["correct_answer"] != "B" else "C"

    right = client.post("/api/questions/attempts", json={
        "question_id": question["id"], "selected_answer": question["correct_answer"].lower(), "time_taken": 60,
    }).json()
    missed = client.post("/api/questions/attempts", json={
        "question_id": question["id"], "selected_answer": wrong, "time_taken": 90,
    }).json()

    assert right["is_correct"] is True
    assert missed["is_correct"] is False
    attempts = client.get("/api/questions/attempts").json()["data"]
    assert len(attempts) == 2
    assert attempts[0]["id"] == missed["id"]


def test_attempt_on_unknown_question_is_404(client):
    response = client.post("/api/questions/attempts", json={"question_id": 999, "selected_answer": "A"})
    assert response.status_code == 404
