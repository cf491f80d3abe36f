# backend/routers/goals.py
import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from logic import analytics
from models.daily_goal import DailyGoal

router = APIRouter(prefix="/api/goals", tags=["goals"])


# --------- Pydantic Models ---------
class GoalInput(BaseModel):
    date: datetime.date = Field(..., examples=["2025-01-01"])
    subject: str = Field(..., examples=["Polity"])
    hours_studied: float = Field(0, ge=0, le=24, examples=[3.5])
    topics_covered: int = Field(0, ge=0, examples=[2])
    questions_solved: int = Field(0, ge=0, examples=[40])
    notes: str = Field("", examples=["Finished fundamental rights"])


class GoalUpdate(BaseModel):
    id: int
    subject: Optional[str] = None
    hours_studied: Optional[float] = Field(None, ge=0, le=24)
    topics_covered: Optional[int] = Field(None, ge=0)
    questions_solved: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


def _get_goal(db: Session, goal_id: int, user_id: int) -> DailyGoal:
    goal = db.query(DailyGoal).filter_by(id=goal_id, user_id=user_id).first()
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get("")
def list_goals(date: Optional[datetime.date] = None, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    day = date or datetime.date.today()
    rows = (
        db.query(DailyGoal)
        .filter_by(user_id=user_id, date=day)
        .order_by(DailyGoal.created_at.desc(), DailyGoal.id.desc())
        .all()
    )
    return [as_dict(r) for r in rows]


@router.post("")
def create_goal(data: GoalInput, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    goal = DailyGoal(user_id=user_id, **data.model_dump())
    db.add(goal)
    db.commit()
    return {"success": True, "id": goal.id}


@router.put("")
def update_goal(data: GoalUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    goal = _get_goal(db, data.id, user_id)
    for key, value in data.model_dump(exclude={"id"}, exclude_unset=True).items():
        setattr(goal, key, value)
    db.commit()
    return {"success": True}


@router.delete("")
def delete_goal(id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    db.delete(_get_goal(db, id, user_id))
    db.commit()
    return {"success": True}


@router.get("/analytics")
def goal_analytics(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    rows = db.query(DailyGoal).filter_by(user_id=user_id).order_by(DailyGoal.date).all()
    return analytics.goal_rollups([as_dict(r) for r in rows])
