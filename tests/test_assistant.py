import json

from logic import assistant


def essay_reply(**overrides):
    payload = {
        "overall_score": 72,
        "content_score": 70,
        "structure_score": 75,
        "language_score": 80,
        "coherence_score": 68,
        "feedback": "Balanced essay.",
        "strengths": ["Clear thesis"],
        "weaknesses": ["Few data points"],
        "suggestions": ["Cite a recent report"],
    }
    payload.update(overrides)
    return "Here is the evaluation:\n```json\n" + json.dumps(payload) + "\n```"


def words(n):
    return " ".join(["governance"] * n)


def test_suggestions_fall_back_when_provider_is_down():
    assert assistant.generate_study_suggestions(["Economy"], 4) == assistant.FALLBACK_SUGGESTIONS


def test_suggestions_parsed_from_json_array(llm_reply):
    seen = llm_reply(json.dumps([{
        "type": "strategy",
        "priority": "high",
        "title": "Daily answer writing",
        "description": "Write two answers a day.",
        "action_items": ["Pick a GS2 question"],
        "estimated_time": "1 hour",
        "difficulty": "medium",
    }]))

    suggestions = assistant.generate_study_suggestions(["Economy", "Ethics"], 5)

    assert suggestions[0]["title"] == "Daily answer writing"
    assert "Economy, Ethics" in seen[0][1]["content"]


def test_suggestions_with_wrong_shape_fall_back(llm_reply):
    llm_reply('[{"type": "nonsense", "priority": "urgent"}]')
    assert assistant.generate_study_suggestions([], 3) == assistant.FALLBACK_SUGGESTIONS


def test_generated_questions_need_four_options(llm_reply):
    llm_reply(json.dumps([{
        "id": "1",
        "question": "Q?",
        "options": ["a", "b"],
        "correct_answer": 0,
        "explanation": "e",
        "difficulty": "easy",
        "topic": "Indian Polity and Governance",
    }]))
    assert assistant.generate_questions("polity") == assistant.FALLBACK_QUESTIONS


def test_unknown_topic_maps_to_general_studies(llm_reply):
    seen = llm_reply("not json")
    assistant.generate_questions("astronomy", count=3)
    assert "General Studies" in seen[0][1]["content"]


def test_short_essay_penalised_with_floor(llm_reply):
    llm_reply(essay_reply(overall_score=35))

    result = assistant.evaluate_essay("Federalism", words(300))

    assert result["word_count"] == 300
    assert result["evaluation"]["overall_score"] == 30
    assert result["evaluation"]["suggestions"][0].startswith("Increase word count")


def test_long_essay_penalised_with_floor(llm_reply):
    llm_reply(essay_reply(overall_score=42))
    result = assistant.evaluate_essay("Federalism", words(1600))
    assert result["evaluation"]["overall_score"] == 40


def test_essay_in_range_keeps_model_score(llm_reply):
    llm_reply(essay_reply())
    result = assistant.evaluate_essay("Federalism", words(1000))
    assert result["evaluation"]["overall_score"] == 72
    assert result["evaluation"]["suggestions"] == ["Cite a recent report"]


def test_essay_fallback_scores():
    short = assistant.evaluate_essay("Federalism", words(100))
    mid = assistant.evaluate_essay("Federalism", words(1000))
    long = assistant.evaluate_essay("Federalism", words(1600))

    assert short["evaluation"]["overall_score"] == 55
    assert mid["evaluation"]["overall_score"] == 75
    assert long["evaluation"]["overall_score"] == 60


def test_answer_score_out_of_range_falls_back(llm_reply):
    llm_reply('{"score": 14, "feedback": "Great"}')
    assert assistant.evaluate_answer("Q", "A")["score"] == 6.5


def test_answer_evaluation_parsed(llm_reply):
    llm_reply('{"score": 7.5, "feedback": "Good structure", "strengths": ["Examples"]}')

    result = assistant.evaluate_answer("Q", "A")

    assert result["score"] == 7.5
    assert result["improvements"] == []


def test_text_generators_fall_back():
    assert assistant.motivation_quote() == assistant.FALLBACK_QUOTE
    assert assistant.chat_reply("How to revise?", "") == assistant.FALLBACK_CHAT_REPLY
    assert assistant.mood_insight(["tired"], 3.0) == assistant.FALLBACK_MOOD_INSIGHT
    assert "Important for Polity" in assistant.generate_notes("Polity", "Federalism", "basic")


def test_blank_reply_treated_as_missing(llm_reply):
    llm_reply("   ")
    assert assistant.motivation_quote() == assistant.FALLBACK_QUOTE
