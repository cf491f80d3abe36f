# backend/routers/subjects.py
import logging
import random
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from models.subject_progress import SubjectProgress

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/subjects", tags=["subjects"])

UPDATABLE_FIELDS = ("total_lectures", "completed_lectures", "total_dpps", "completed_dpps", "revisions")
COUNT_FIELDS = UPDATABLE_FIELDS + ("questions_count",)
LIST_FIELDS = ("completed_lectures_list", "completed_dpps_list")

# questions credited per newly completed DPP, and removed per un-ticked one
DPP_QUESTIONS_MIN = 5
DPP_QUESTIONS_MAX = 30
DPP_QUESTIONS_REMOVED = 15

DEFAULT_SUBJECTS = [
    ("Ancient History", "GS1"),
    ("Modern History", "GS1"),
    ("World History", "GS1"),
    ("Geography", "GS1"),
    ("Society", "GS1"),
    ("Art & Culture", "GS1"),
    ("Polity", "GS2"),
    ("Governance", "GS2"),
    ("International Relations", "GS2"),
    ("Internal Security", "GS2"),
    ("Economy", "GS3"),
    ("Disaster Management", "GS3"),
    ("Environment", "GS3"),
    ("Science & Tech", "GS3"),
    ("Ethics", "GS4"),
    ("Quantitative Aptitude", "CSAT"),
    ("Logical Reasoning", "CSAT"),
    ("Reading Comprehension", "CSAT"),
]
DEFAULT_LECTURES = 10
DEFAULT_DPPS = 5


# --------- Pydantic Models ---------
class SubjectInput(BaseModel):
    subject: str = Field(..., examples=["Polity"])
    category: str = Field(..., examples=["GS2"])
    total_lectures: int = Field(0, ge=0, examples=[40])
    total_dpps: int = Field(0, ge=0, examples=[20])


class FieldUpdate(BaseModel):
    id: int
    field: str = Field(..., examples=["completed_lectures"])
    value: int = Field(..., ge=0, examples=[12])


class CountUpdate(BaseModel):
    id: int
    field: str = Field(..., examples=["questions_count"])
    count: int = Field(..., ge=0, examples=[150])


class BatchUpdate(BaseModel):
    id: int
    updates: Dict[str, Any] = Field(..., examples=[{"completed_lectures": 5, "completed_lectures_list": "1,2,3,4,5"}])


def _get_subject(db: Session, subject_id: int, user_id: int) -> SubjectProgress:
    subject = db.query(SubjectProgress).filter_by(id=subject_id, user_id=user_id).first()
    if subject is None:
        raise HTTPException(status_code=404, detail="Subject not found")
    return subject


def questions_delta(old_dpps: int, new_dpps: int) -> int:
    """Change in solved questions when the completed DPP count moves."""
    diff = new_dpps - (old_dpps or 0)
    if diff > 0:
        return sum(random.randint(DPP_QUESTIONS_MIN, DPP_QUESTIONS_MAX) for _ in range(diff))
    return diff * DPP_QUESTIONS_REMOVED


# --------- Endpoints ---------
@router.get("")
def list_subjects(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    rows = (
        db.query(SubjectProgress)
        .filter_by(user_id=user_id)
        .order_by(SubjectProgress.category, SubjectProgress.subject)
        .all()
    )
    return [as_dict(r) for r in rows]


@router.post("")
def create_subject(data: SubjectInput, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    subject = SubjectProgress(user_id=user_id, **data.model_dump())
    db.add(subject)
    db.commit()
    return {"success": True, "id": subject.id}


@router.put("")
def update_subject(data: FieldUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    if data.field not in UPDATABLE_FIELDS:
        raise HTTPException(status_code=400, detail=f"Invalid field: {data.field}")

    subject = _get_subject(db, data.id, user_id)

    if data.field == "completed_dpps":
        delta = questions_delta(subject.completed_dpps, data.value)
        subject.questions_count = max(0, (subject.questions_count or 0) + delta)

    setattr(subject, data.field, data.value)
    db.commit()
    return {"success": True}


@router.put("/update-count")
def update_count(data: CountUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    if data.field not in COUNT_FIELDS:
        raise HTTPException(status_code=400, detail=f"Invalid field: {data.field}")

    subject = _get_subject(db, data.id, user_id)
    setattr(subject, data.field, data.count)
    db.commit()
    return {"success": True}


@router.put("/update/batch")
def update_batch(data: BatchUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    subject = _get_subject(db, data.id, user_id)

    applied = {k: v for k, v in data.updates.items() if k in UPDATABLE_FIELDS + LIST_FIELDS}
    if not applied:
        raise HTTPException(status_code=400, detail="No updatable fields supplied")

    for key, value in applied.items():
        if key in UPDATABLE_FIELDS:
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise HTTPException(status_code=400, detail=f"{key} must be a non-negative integer")
        elif value is not None and not isinstance(value, str):
            raise HTTPException(status_code=400, detail=f"{key} must be a string")

    for key, value in applied.items():
        setattr(subject, key, value)
    db.commit()
    db.refresh(subject)
    return {"message": "Subject updated successfully", "data": as_dict(subject)}


@router.delete("")
def delete_subject(id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    subject = _get_subject(db, id, user_id)
    db.delete(subject)
    db.commit()
    return {"success": True}


@router.post("/init")
def init_subjects(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    if db.query(SubjectProgress).filter_by(user_id=user_id).count() > 0:
        return {"message": "Subjects already initialized", "created": 0}

    for name, category in DEFAULT_SUBJECTS:
        db.add(SubjectProgress(
            user_id=user_id,
            subject=name,
            category=category,
            total_lectures=DEFAULT_LECTURES,
            total_dpps=DEFAULT_DPPS,
        ))
    db.commit()
    logger.info("Initialized %d default subjects for user %s", len(DEFAULT_SUBJECTS), user_id)
    return {"message": "Subjects initialized successfully", "created": len(DEFAULT_SUBJECTS)}
