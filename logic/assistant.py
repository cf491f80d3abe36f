"""
LLM-backed study helpers.

Every generator builds a prompt, asks the chat-completion API once,
validates whatever JSON comes back against a Pydantic model and falls
back to a static payload of the same shape when anything goes wrong.
Callers never see provider errors.
"""
import logging
from typing import List, Literal

import requests
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from groq_generate import chat_completion, extract_json

logger = logging.getLogger(__name__)

LLM_ERRORS = (requests.RequestException, KeyError, IndexError, TypeError, ValueError, ValidationError)

TOPIC_NAMES = {
    "current-affairs": "Current Affairs and Recent Developments",
    "polity": "Indian Polity and Governance",
    "geography": "Indian and World Geography",
    "history": "Indian History and Culture",
    "economics": "Indian Economy and Economic Development",
    "environment": "Environment and Ecology",
}


# --------- Response schemas ---------
class StudySuggestion(BaseModel):
    type: Literal["topic", "schedule", "resource", "strategy"]
    priority: Literal["high", "medium", "low"]
    title: str
    description: str
    action_items: List[str] = Field(default_factory=list)
    estimated_time: str
    difficulty: Literal["easy", "medium", "hard"]


class GeneratedQuestion(BaseModel):
    id: str
    question: str
    options: List[str] = Field(..., min_length=4, max_length=4)
    correct_answer: int = Field(..., ge=0, le=3)
    explanation: str
    difficulty: Literal["easy", "medium", "hard"]
    topic: str


class EssayScores(BaseModel):
    overall_score: int = Field(..., ge=0, le=100)
    content_score: int = Field(..., ge=0, le=100)
    structure_score: int = Field(..., ge=0, le=100)
    language_score: int = Field(..., ge=0, le=100)
    coherence_score: int = Field(..., ge=0, le=100)
    feedback: str
    strengths: List[str]
    weaknesses: List[str]
    suggestions: List[str]


class AnswerScore(BaseModel):
    score: float = Field(..., ge=0, le=10)
    feedback: str
    improvements: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)


suggestion_list = TypeAdapter(List[StudySuggestion])
question_list = TypeAdapter(List[GeneratedQuestion])


# --------- Static fallbacks ---------
FALLBACK_SUGGESTIONS = [
    {
        "type": "topic",
        "priority": "high",
        "title": "Focus on Current Affairs",
        "description": "Your current affairs coverage needs improvement. Dedicate more time to daily news analysis.",
        "action_items": [
            "Read the newspaper daily for 45 minutes",
            "Make notes of important events",
            "Practice current affairs MCQs",
        ],
        "estimated_time": "1.5 hours daily",
        "difficulty": "medium",
    },
    {
        "type": "schedule",
        "priority": "medium",
        "title": "Optimize Morning Study",
        "description": "Allocate the most difficult subjects to the first study block of the day.",
        "action_items": [
            "Wake up 30 minutes earlier",
            "Study the most challenging subject first",
            "Take short breaks every 45 minutes",
        ],
        "estimated_time": "2-3 hours",
        "difficulty": "easy",
    },
]

FALLBACK_QUESTIONS = [
    {
        "id": "1",
        "question": "Which of the following is the constitutional body responsible for conducting elections in India?",
        "options": ["Election Commission of India", "Central Election Committee", "National Election Board", "Supreme Court of India"],
        "correct_answer": 0,
        "explanation": "The Election Commission of India is established under Article 324 of the Constitution.",
        "difficulty": "easy",
        "topic": "Indian Polity",
    },
    {
        "id": "2",
        "question": "The term 'Blue Revolution' in India is related to:",
        "options": ["Milk production", "Fish production", "Wheat production", "Cotton production"],
        "correct_answer": 1,
        "explanation": "Blue Revolution refers to the rapid increase in fish production through modern methods.",
        "difficulty": "medium",
        "topic": "Indian Economy",
    },
]

FALLBACK_CHAT_REPLY = "I can help with your preparation. Ask about subjects, strategies, or exam tips."
FALLBACK_QUOTE = "Every expert was once a beginner. Keep going!"
FALLBACK_MOOD_INSIGHT = (
    "Your mood patterns indicate the importance of maintaining emotional well-being during preparation. "
    "Consider stress management techniques and regular breaks to keep your study performance steady."
)


def _ask(system, prompt, temperature, max_tokens):
    return chat_completion(
        [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ],
        temperature=temperature,
        max_tokens=max_tokens,
    )


def generate_study_suggestions(weak_areas: List[str], study_hours: float) -> List[dict]:
    prompt = (
        "Generate exactly 4 study suggestions as a JSON array. No additional text.\n"
        f"Weak areas: {', '.join(weak_areas) or 'none reported'}. Daily study: {study_hours}h.\n"
        'Each item: {"type": "topic|schedule|resource|strategy", "priority": "high|medium|low", '
        '"title": "...", "description": "...", "action_items": ["..."], '
        '"estimated_time": "...", "difficulty": "easy|medium|hard"}'
    )
    try:
        reply = _ask("You are a UPSC expert. Return only valid JSON arrays.", prompt, 0.3, 800)
        return [s.model_dump() for s in suggestion_list.validate_python(extract_json(reply, "["))]
    except LLM_ERRORS as e:
        logger.warning("Study suggestions fell back to defaults: %s", e)
        return FALLBACK_SUGGESTIONS


def generate_questions(topic: str, count: int = 5, difficulty: str = "mixed") -> List[dict]:
    topic_name = TOPIC_NAMES.get(topic, "General Studies")
    prompt = (
        f"Generate {count} multiple choice questions for UPSC CSE Prelims on: {topic_name}.\n"
        f"Difficulty mix: {difficulty}. Each question has exactly 4 options and a detailed explanation.\n"
        "Return a JSON array of objects with keys id, question, options, correct_answer (index 0-3), "
        f'explanation, difficulty (easy|medium|hard), topic ("{topic_name}").'
    )
    try:
        reply = _ask(
            "You are an expert UPSC CSE question generator. Create accurate, exam-relevant questions.",
            prompt, 0.7, 2000,
        )
        return [q.model_dump() for q in question_list.validate_python(extract_json(reply, "["))]
    except LLM_ERRORS as e:
        logger.warning("Question generation fell back to defaults: %s", e)
        return FALLBACK_QUESTIONS


def fallback_essay_scores(topic: str, word_count: int) -> dict:
    return {
        "overall_score": max(40, min(85, 60 + (10 if word_count > 800 else 0) + (5 if word_count < 1500 else -5))),
        "content_score": 65,
        "structure_score": 60,
        "language_score": 70,
        "coherence_score": 65,
        "feedback": (
            f'Your essay on "{topic}" shows a good understanding of the topic in {word_count} words. '
            "Develop stronger arguments with more examples and a clearer introduction, body and conclusion."
        ),
        "strengths": ["Good grasp of the topic", "Relevant content included"],
        "weaknesses": ["Could benefit from more concrete examples", "Structure could be more organized"],
        "suggestions": [
            "Include more current examples and case studies",
            "Strengthen the conclusion with actionable solutions",
            "Improve paragraph transitions for better flow",
        ],
    }


def evaluate_essay(topic: str, essay: str) -> dict:
    word_count = len(essay.split())
    prompt = (
        "Evaluate this UPSC Mains essay on content, structure, language and coherence (each out of 100).\n\n"
        f"TOPIC: {topic}\n\nESSAY:\n{essay}\n\nWORD COUNT: {word_count}\n\n"
        "Respond with JSON: {\"overall_score\": 0, \"content_score\": 0, \"structure_score\": 0, "
        "\"language_score\": 0, \"coherence_score\": 0, \"feedback\": \"...\", "
        "\"strengths\": [\"...\"], \"weaknesses\": [\"...\"], \"suggestions\": [\"...\"]}"
    )
    try:
        reply = _ask(
            "You are an expert UPSC Mains essay evaluator. Give constructive, standards-based feedback.",
            prompt, 0.3, 2000,
        )
        evaluation = EssayScores.model_validate(extract_json(reply)).model_dump()
    except LLM_ERRORS as e:
        logger.warning("Essay evaluation fell back to defaults: %s", e)
        evaluation = fallback_essay_scores(topic, word_count)

    if word_count < 800:
        evaluation["overall_score"] = max(evaluation["overall_score"] - 10, 30)
        evaluation["suggestions"].insert(0, "Increase word count to meet the 1000-1200 word standard")
    elif word_count > 1500:
        evaluation["overall_score"] = max(evaluation["overall_score"] - 5, 40)
        evaluation["suggestions"].insert(0, "Consider reducing word count for better conciseness")

    return {"evaluation": evaluation, "word_count": word_count}


def evaluate_answer(question: str, answer: str) -> dict:
    prompt = (
        f"Question: {question}\nAnswer: {answer}\n\n"
        "Evaluate content accuracy, structure, examples and analytical depth. Respond with JSON: "
        '{"score": 0-10, "feedback": "...", "improvements": ["..."], "strengths": ["..."]}'
    )
    try:
        reply = _ask("Evaluate UPSC mains answers with a score (0-10) and feedback.", prompt, 0.4, 600)
        return AnswerScore.model_validate(extract_json(reply)).model_dump()
    except LLM_ERRORS as e:
        logger.warning("Answer evaluation fell back to defaults: %s", e)
        return {
            "score": 6.5,
            "feedback": "Good attempt. Add more examples and improve structure for better scores.",
            "improvements": ["Add more relevant examples", "Use a clear introduction and conclusion"],
            "strengths": ["Good conceptual understanding"],
        }


def generate_notes(subject: str, topic: str, difficulty: str) -> str:
    try:
        return _ask(
            "Create concise UPSC study notes with key concepts, facts, and practice questions.",
            f"Subject: {subject}, Topic: {topic}, Level: {difficulty}",
            0.3, 800,
        ).strip()
    except LLM_ERRORS as e:
        logger.warning("Notes generation fell back to template: %s", e)
        return f"# {topic}\n\n## Key Points\n- Core concept 1\n- Core concept 2\n\n## Relevance\nImportant for {subject}"


def chat_reply(query: str, progress_context: str) -> str:
    try:
        reply = _ask(f"You are a UPSC mentor. Student progress: {progress_context}", query, 0.6, 500).strip()
        return reply or FALLBACK_CHAT_REPLY
    except LLM_ERRORS as e:
        logger.warning("Chat reply fell back to default: %s", e)
        return FALLBACK_CHAT_REPLY


def motivation_quote() -> str:
    try:
        quote = _ask(
            "Generate a short, powerful motivational quote for UPSC CSE aspirants. Keep it under 100 characters.",
            "Give me a motivational quote for UPSC preparation",
            0.8, 50,
        ).strip()
        return quote or FALLBACK_QUOTE
    except LLM_ERRORS as e:
        logger.warning("Motivation quote fell back to default: %s", e)
        return FALLBACK_QUOTE


def mood_insight(recent_moods: List[str], avg_study_hours: float) -> str:
    prompt = (
        f"Analyze mood patterns and study correlation: Recent moods: {', '.join(recent_moods) or 'none'}. "
        f"Average study hours: {avg_study_hours:.1f}h. Give insights on the mood-study relationship and "
        "recommendations. Keep the response under 150 words."
    )
    try:
        reply = _ask("You are an empathetic mentor who analyzes mood patterns.", prompt, 0.7, 200).strip()
        return reply or FALLBACK_MOOD_INSIGHT
    except LLM_ERRORS as e:
        logger.warning("Mood insight fell back to default: %s", e)
        return FALLBACK_MOOD_INSIGHT
