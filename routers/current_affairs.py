# backend/routers/current_affairs.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from models.current_affairs import CurrentAffairs

router = APIRouter(prefix="/api/current-affairs", tags=["current-affairs"])

DEFAULT_TOTAL_TOPICS = 300


class CurrentAffairsUpdate(BaseModel):
    completed_topics: int = Field(..., ge=0, examples=[120])


@router.get("")
def get_current_affairs(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    row = db.query(CurrentAffairs).filter_by(user_id=user_id).first()
    if row is None:
        return {"completed_topics": 0, "total_topics": DEFAULT_TOTAL_TOPICS}
    return as_dict(row)


@router.put("")
def update_current_affairs(data: CurrentAffairsUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    row = db.query(CurrentAffairs).filter_by(user_id=user_id).first()
    if row is None:
        row = CurrentAffairs(user_id=user_id, total_topics=DEFAULT_TOTAL_TOPICS)
        db.add(row)
    row.completed_topics = data.completed_topics
    db.commit()
    return {"success": True}
