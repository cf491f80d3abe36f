# backend/routers/mood.py
import datetime
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from models.mood_entry import MOOD_SCORES, MoodEntry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/mood", tags=["mood"])


class MoodInput(BaseModel):
    date: datetime.date = Field(..., examples=["2025-01-01"])
    mood: str = Field(..., examples=["motivated"])
    note: Optional[str] = Field(None, examples=["Good revision day"])

    @field_validator("mood")
    @classmethod
    def known_mood(cls, value):
        value = value.strip().lower()
        if value not in MOOD_SCORES:
            raise ValueError(f"mood must be one of: {', '.join(MOOD_SCORES)}")
        return value


def _find_entry(db: Session, user_id: int, day: datetime.date):
    return db.query(MoodEntry).filter_by(user_id=user_id, date=day).first()


def _apply(entry: MoodEntry, data: MoodInput):
    entry.mood = data.mood
    entry.note = data.note or None


@router.get("")
def list_moods(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    rows = db.query(MoodEntry).filter_by(user_id=user_id).order_by(MoodEntry.date.desc()).all()
    return {"data": [as_dict(r) for r in rows]}


@router.post("")
def save_mood(data: MoodInput, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    """One entry per day: a second post for the same date overwrites it."""
    entry = _find_entry(db, user_id, data.date)
    if entry is not None:
        _apply(entry, data)
        db.commit()
        return {"success": True, "id": entry.id}

    entry = MoodEntry(user_id=user_id, date=data.date)
    _apply(entry, data)
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        # another request inserted this day first; overwrite it instead
        db.rollback()
        logger.info("Mood for user %s on %s written concurrently, updating", user_id, data.date)
        entry = _find_entry(db, user_id, data.date)
        _apply(entry, data)
        db.commit()
    return {"success": True, "id": entry.id}
