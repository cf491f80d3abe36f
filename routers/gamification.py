# backend/routers/gamification.py
import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import func
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from models.study_session import STUDY_SESSION_TYPES, StudySession
from models.test_record import TestRecord
from models.user_progress import UserProgress

router = APIRouter(prefix="/api/gamification", tags=["gamification"])
stats_router = APIRouter(prefix="/api/user-stats", tags=["gamification"])

# a level is reached once both question counts meet its thresholds
LEVELS = [
    {"name": "Iron", "prelims": 0, "mains": 0},
    {"name": "Bronze", "prelims": 3000, "mains": 500},
    {"name": "Silver", "prelims": 6000, "mains": 1000},
    {"name": "Gold", "prelims": 12000, "mains": 2000},
    {"name": "Platinum", "prelims": 18000, "mains": 3000},
    {"name": "Diamond", "prelims": 24000, "mains": 4000},
    {"name": "Master", "prelims": 30000, "mains": 5000},
]

POINTS_PER_QUESTION = 1
POINTS_PER_STUDY_MINUTE = 1


class ProgressUpdate(BaseModel):
    prelims_questions: int = Field(0, ge=0, examples=[3200])
    mains_questions: int = Field(0, ge=0, examples=[450])


def level_for(prelims, mains):
    for level in reversed(LEVELS):
        if prelims >= level["prelims"] and mains >= level["mains"]:
            return level
    return LEVELS[0]


def get_or_create_progress(db: Session, user_id: int) -> UserProgress:
    """The user's progress row; a new one is added to the session, not committed."""
    progress = db.query(UserProgress).filter_by(user_id=user_id).first()
    if progress is None:
        progress = UserProgress(
            user_id=user_id,
            prelims_questions=0,
            mains_questions=0,
            current_level=LEVELS[0]["name"],
            total_points=0,
            streak_days=0,
        )
        db.add(progress)
    return progress


def record_activity(progress: UserProgress, today: datetime.date, points: int = 0):
    """Add points and extend the daily streak; a missed day restarts it at 1."""
    last = progress.last_activity
    if last != today:
        if last is not None and last == today - datetime.timedelta(days=1):
            progress.streak_days = (progress.streak_days or 0) + 1
        else:
            progress.streak_days = 1
        progress.last_activity = today
    progress.total_points = (progress.total_points or 0) + max(points, 0)


def current_streak(progress: UserProgress, today: datetime.date) -> int:
    # a streak not extended today or yesterday is already broken
    if progress.last_activity is None or progress.last_activity < today - datetime.timedelta(days=1):
        return 0
    return progress.streak_days or 0


@router.get("")
def get_progress(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    progress = get_or_create_progress(db, user_id)
    if progress.id is None:
        db.commit()
        db.refresh(progress)

    data = as_dict(progress)
    data["level"] = level_for(progress.prelims_questions or 0, progress.mains_questions or 0)
    data["levels"] = LEVELS
    return data


@router.put("")
def update_progress(data: ProgressUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    level = level_for(data.prelims_questions, data.mains_questions)

    progress = get_or_create_progress(db, user_id)
    solved_before = (progress.prelims_questions or 0) + (progress.mains_questions or 0)
    solved_now = data.prelims_questions + data.mains_questions

    progress.prelims_questions = data.prelims_questions
    progress.mains_questions = data.mains_questions
    progress.current_level = level["name"]
    record_activity(progress, datetime.date.today(), (solved_now - solved_before) * POINTS_PER_QUESTION)
    db.commit()
    return {"success": True, "level": level, "total_points": progress.total_points, "streak_days": progress.streak_days}


@stats_router.get("")
def user_stats(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    progress = db.query(UserProgress).filter_by(user_id=user_id).first()
    study_minutes = (
        db.query(func.coalesce(func.sum(StudySession.duration_minutes), 0))
        .filter(StudySession.user_id == user_id, StudySession.session_type.in_(STUDY_SESSION_TYPES))
        .scalar()
    )
    tests_completed = db.query(TestRecord).filter_by(user_id=user_id).count()

    if progress is None:
        points, level, streak, solved = 0, LEVELS[0]["name"], 0, 0
    else:
        points = progress.total_points or 0
        level = progress.current_level or LEVELS[0]["name"]
        streak = current_streak(progress, datetime.date.today())
        solved = (progress.prelims_questions or 0) + (progress.mains_questions or 0)

    return {
        "data": {
            "total_points": points,
            "current_level": level,
            "streak_days": streak,
            "questions_solved": solved,
            "study_hours": round((study_minutes or 0) / 60),
            "tests_completed": tests_completed,
        }
    }
