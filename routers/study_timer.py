# backend/routers/study_timer.py
import datetime
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from models.study_session import SESSION_TYPES, STUDY_SESSION_TYPES, StudySession
from routers.gamification import POINTS_PER_STUDY_MINUTE, get_or_create_progress, record_activity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/study-timer", tags=["study-timer"])


class SessionInput(BaseModel):
    subject: Optional[str] = Field(None, examples=["Polity"])
    # minutes
    duration: int = Field(..., gt=0, le=720, examples=[25])
    type: Literal[SESSION_TYPES] = Field("focus", examples=["focus"])


@router.post("")
def save_session(data: SessionInput, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    start = datetime.datetime.now(datetime.timezone.utc)
    session = StudySession(
        user_id=user_id,
        subject=data.subject or "General Study",
        start_time=start,
        end_time=start + datetime.timedelta(minutes=data.duration),
        duration_minutes=data.duration,
        session_type=data.type,
    )
    db.add(session)

    if data.type in STUDY_SESSION_TYPES:
        progress = get_or_create_progress(db, user_id)
        record_activity(progress, datetime.date.today(), data.duration * POINTS_PER_STUDY_MINUTE)

    db.commit()
    logger.info("Recorded %d min %s session for user %s", data.duration, data.type, user_id)
    return {"success": True, "id": session.id}


@router.get("")
def todays_sessions(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    """Sessions started since midnight UTC, newest first."""
    midnight = datetime.datetime.combine(
        datetime.datetime.now(datetime.timezone.utc).date(), datetime.time.min, tzinfo=datetime.timezone.utc
    )
    rows = (
        db.query(StudySession)
        .filter(StudySession.user_id == user_id, StudySession.start_time >= midnight)
        .order_by(StudySession.start_time.desc(), StudySession.id.desc())
        .all()
    )
    return {"data": [as_dict(r) for r in rows]}
