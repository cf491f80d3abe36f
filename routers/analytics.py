# backend/routers/analytics.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config import ANALYTICS_CACHE_TTL
from db import as_dict, get_db
from dependencies import get_current_user
from logic import analytics, assistant, scoring
from logic.cache import TTLCache
from models.current_affairs import CurrentAffairs
from models.daily_goal import DailyGoal
from models.essay_progress import EssayProgress
from models.mood_entry import MoodEntry
from models.question import QuestionAttempt
from models.section_progress import OptionalProgress, PsirProgress
from models.study_session import StudySession
from models.subject_progress import SubjectProgress
from models.test_record import TestRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analytics"])

analytics_cache = TTLCache(ANALYTICS_CACHE_TTL)

RECENT_MOODS = 7


def _rows(query):
    return [as_dict(r) for r in query.all()]


def load_user_data(db: Session, user_id: int) -> dict:
    """Every progress row the scoring functions read, as plain dicts."""
    current_affairs = db.query(CurrentAffairs).filter_by(user_id=user_id).first()
    essay = db.query(EssayProgress).filter_by(user_id=user_id).first()

    return {
        "subjects": _rows(db.query(SubjectProgress).filter_by(user_id=user_id)),
        "attempts": _rows(
            db.query(QuestionAttempt)
            .filter_by(user_id=user_id)
            .order_by(QuestionAttempt.attempted_at.desc(), QuestionAttempt.id.desc())
        ),
        "goals": _rows(db.query(DailyGoal).filter_by(user_id=user_id).order_by(DailyGoal.date)),
        "tests": _rows(db.query(TestRecord).filter_by(user_id=user_id).order_by(TestRecord.attempt_date.desc())),
        "moods": _rows(db.query(MoodEntry).filter_by(user_id=user_id).order_by(MoodEntry.date.desc())),
        "optional_sections": _rows(db.query(OptionalProgress).filter_by(user_id=user_id)),
        "psir_sections": _rows(db.query(PsirProgress).filter_by(user_id=user_id)),
        "current_affairs": as_dict(current_affairs) if current_affairs else None,
        "essay": as_dict(essay) if essay else None,
        "sessions": _rows(db.query(StudySession).filter_by(user_id=user_id).order_by(StudySession.start_time)),
    }


def metrics_for(data: dict) -> dict:
    return scoring.collect_metrics(**data)


# --------- Endpoints ---------
@router.get("/analytics/advanced")
def advanced_analytics(refresh: bool = False, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    key = f"advanced:{user_id}"
    if not refresh:
        cached = analytics_cache.get(key)
        if cached is not None:
            return cached

    data = load_user_data(db, user_id)
    result = analytics.comprehensive(
        data["subjects"], data["goals"], data["tests"], data["moods"], metrics_for(data)
    )
    analytics_cache.set(key, result)
    return result


@router.get("/analysis/detailed")
def detailed_analysis(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    data = load_user_data(db, user_id)
    result = analytics.detailed(data["goals"], data["moods"], data["tests"])

    study_days = len(scoring.daily_hours(data["goals"]))
    avg_hours = result["total_hours"] / study_days if study_days else 0.0
    recent = [m["mood"] for m in data["moods"][:RECENT_MOODS]]
    result["mood_insight"] = assistant.mood_insight(recent, avg_hours)
    return result
