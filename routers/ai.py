# backend/routers/ai.py
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from logic import assistant, prediction, scoring
from models.ai_log import ChatHistory, MotivationQuote, SmartNote
from models.evaluation import AnswerEvaluation
from models.subject_progress import SubjectProgress
from models.test_record import TestRecord
from routers.analytics import load_user_data, metrics_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ai"])

QUOTE_MAX_AGE = timedelta(hours=3)
WEAK_SUBJECT_THRESHOLD = 30
RECENT_TESTS = 10
REVISION_SUBJECTS = 5


# --------- Pydantic Models ---------
class SuggestionRequest(BaseModel):
    weak_areas: Optional[List[str]] = Field(None, examples=[["Economy", "Current Affairs"]])
    study_hours: Optional[float] = Field(None, ge=0, le=24, examples=[6])


class QuestionRequest(BaseModel):
    topic: str = Field(..., examples=["polity"])
    count: int = Field(5, ge=1, le=20)
    difficulty: str = Field("mixed", examples=["mixed"])


class SmartFeatureRequest(BaseModel):
    action: str = Field(..., examples=["generate_notes"])
    data: Dict[str, Any] = Field(default_factory=dict, examples=[{"subject": "Polity", "topic": "Federalism"}])


# --------- Prediction ---------
@router.get("/ai/prediction")
def get_prediction(seed: Optional[int] = None, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    try:
        metrics = metrics_for(load_user_data(db, user_id))
        return prediction.predict(metrics, seed=seed)
    except Exception:
        logger.exception("Prediction failed for user %s, serving fallback", user_id)
        return dict(prediction.FALLBACK_PREDICTION, seed=seed)


@router.post("/ai/suggestions")
def study_suggestions(data: SuggestionRequest, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    weak_areas = data.weak_areas
    study_hours = data.study_hours

    if weak_areas is None or study_hours is None:
        user_data = load_user_data(db, user_id)
        if weak_areas is None:
            weak_areas = [
                s["subject"] for s in user_data["subjects"]
                if scoring.subject_completion(s) < WEAK_SUBJECT_THRESHOLD
            ]
        if study_hours is None:
            study_hours = round(metrics_for(user_data)["avg_daily_hours"], 1)

    return {"suggestions": assistant.generate_study_suggestions(weak_areas, study_hours)}


@router.post("/ai/generate-questions")
def generate_questions(data: QuestionRequest):
    return {"questions": assistant.generate_questions(data.topic, data.count, data.difficulty)}


# --------- Smart Features ---------
def _store(db: Session, row):
    """Persist an audit row; a failure is logged and never reaches the caller."""
    try:
        db.add(row)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not store %s", type(row).__name__)


def _lecture_completion(subject) -> float:
    return scoring.percent(subject.completed_lectures, max(subject.total_lectures or 0, 1))


def notes_difficulty(completion: float) -> str:
    if completion < 30:
        return "basic"
    if completion < 70:
        return "intermediate"
    return "advanced"


def _generate_notes(db, user_id, data):
    subject_name = data.get("subject")
    topic = data.get("topic")
    if not subject_name or not topic:
        raise HTTPException(status_code=400, detail="subject and topic are required")

    subject = db.query(SubjectProgress).filter_by(user_id=user_id, subject=subject_name).first()
    completion = _lecture_completion(subject) if subject else 0.0
    difficulty = notes_difficulty(completion)

    notes = assistant.generate_notes(subject_name, topic, difficulty)
    _store(db, SmartNote(user_id=user_id, subject=subject_name, topic=topic, content=notes, difficulty_level=difficulty))
    return {"success": True, "notes": notes, "difficulty": difficulty, "progress": round(completion, 1)}


def _evaluate_answer(db, user_id, data):
    question = data.get("question")
    answer = data.get("answer")
    if not question or not answer:
        raise HTTPException(status_code=400, detail="question and answer are required")

    result = assistant.evaluate_answer(question, answer)
    _store(db, AnswerEvaluation(
        user_id=user_id, question=question, answer=answer, score=result["score"], feedback=result["feedback"]
    ))
    return {"success": True, **result}


def _chat_query(db, user_id, data):
    query = data.get("query")
    if not query:
        raise HTTPException(status_code=400, detail="query is required")

    subjects = db.query(SubjectProgress).filter_by(user_id=user_id).all()
    context = ", ".join(f"{s.subject}: {round(_lecture_completion(s))}%" for s in subjects)

    response = assistant.chat_reply(query, context)
    _store(db, ChatHistory(user_id=user_id, query=query, response=response))
    return {"success": True, "response": response}


def _predict_performance(db, user_id, data):
    subjects = db.query(SubjectProgress).filter_by(user_id=user_id).all()
    tests = [
        as_dict(t) for t in
        db.query(TestRecord).filter_by(user_id=user_id).order_by(TestRecord.attempt_date.desc()).limit(RECENT_TESTS)
    ]

    completion = sum(_lecture_completion(s) for s in subjects) / max(len(subjects), 1)
    test_score = scoring.average_test_score(tests)

    return {
        "success": True,
        "prediction": {
            "predicted_score": round(scoring.clip(completion * 0.6 + test_score * 0.4, 50, 200), 1),
            "confidence_level": scoring.clip(len(subjects) * 15, 60, 95),
            "key_factors": [f"Completion: {completion:.1f}%", f"Test avg: {test_score:.1f}%"],
            "recommendations": [
                "Complete more lectures" if completion < 70 else "Good progress",
                "Practice more tests" if test_score < 60 else "Maintain test practice",
            ],
        },
    }


def _revision_schedule(db, user_id, data):
    subjects = (
        db.query(SubjectProgress)
        .filter_by(user_id=user_id)
        .order_by(SubjectProgress.id)
        .limit(REVISION_SUBJECTS)
        .all()
    )
    today = date.today()

    schedule = []
    for index, subject in enumerate(subjects):
        completion = _lecture_completion(subject)
        if completion < 50:
            priority = "High"
        elif completion < 80:
            priority = "Medium"
        else:
            priority = "Low"
        schedule.append({
            "subject": subject.subject,
            "date": (today + timedelta(days=index * 2 + 1)).isoformat(),
            "priority": priority,
            "completion": round(completion, 1),
            "focus_areas": "Basic concepts" if completion < 30 else "Practice questions",
        })
    return {"success": True, "schedule": schedule}


SMART_ACTIONS = {
    "generate_notes": _generate_notes,
    "evaluate_answer": _evaluate_answer,
    "chat_query": _chat_query,
    "predict_performance": _predict_performance,
    "get_revision_schedule": _revision_schedule,
}


@router.post("/ai/smart-features")
def smart_features(data: SmartFeatureRequest, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    handler = SMART_ACTIONS.get(data.action)
    if handler is None:
        raise HTTPException(status_code=400, detail=f"Invalid action: {data.action}")
    return handler(db, user_id, data.data)


# --------- Motivation ---------
def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive timestamps, stored in UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@router.get("/motivation")
def motivation(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    latest = (
        db.query(MotivationQuote)
        .filter_by(user_id=user_id)
        .order_by(MotivationQuote.generated_at.desc(), MotivationQuote.id.desc())
        .first()
    )
    now = datetime.now(timezone.utc)
    if latest is not None and latest.generated_at and now - _as_utc(latest.generated_at) < QUOTE_MAX_AGE:
        return {"quote": latest.quote}

    quote = assistant.motivation_quote()
    _store(db, MotivationQuote(user_id=user_id, quote=quote, generated_at=now))
    return {"quote": quote}
