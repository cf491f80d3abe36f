# backend/routers/essay.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from logic import assistant
from models.essay_progress import EssayProgress
from models.evaluation import EssayEvaluation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/essay", tags=["essay"])

DEFAULT_TOTAL_LECTURES = 10
DEFAULT_TOTAL_ESSAYS = 100


# --------- Pydantic Models ---------
class EssayProgressUpdate(BaseModel):
    lectures_completed: Optional[int] = Field(None, ge=0, examples=[4])
    essays_written: Optional[int] = Field(None, ge=0, examples=[12])


class EssaySubmission(BaseModel):
    topic: str = Field(..., min_length=1, examples=["Technology as the great equaliser"])
    essay: str = Field(..., min_length=1)


@router.get("")
def get_essay_progress(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    row = db.query(EssayProgress).filter_by(user_id=user_id).first()
    if row is None:
        return {
            "lectures_completed": 0,
            "essays_written": 0,
            "total_lectures": DEFAULT_TOTAL_LECTURES,
            "total_essays": DEFAULT_TOTAL_ESSAYS,
        }
    return as_dict(row)


@router.put("")
def update_essay_progress(data: EssayProgressUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    row = db.query(EssayProgress).filter_by(user_id=user_id).first()
    if row is None:
        row = EssayProgress(
            user_id=user_id,
            lectures_completed=0,
            essays_written=0,
            total_lectures=DEFAULT_TOTAL_LECTURES,
            total_essays=DEFAULT_TOTAL_ESSAYS,
        )
        db.add(row)
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(row, key, value)
    db.commit()
    return {"success": True}


# --------- Evaluation Endpoint ---------
@router.post("/evaluate")
def evaluate_essay(data: EssaySubmission, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    result = assistant.evaluate_essay(data.topic, data.essay)
    evaluation = result["evaluation"]

    try:
        db.add(EssayEvaluation(
            user_id=user_id,
            topic=data.topic,
            essay=data.essay,
            word_count=result["word_count"],
            overall_score=evaluation["overall_score"],
            feedback=evaluation["feedback"],
        ))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not store essay evaluation for user %s", user_id)

    return {"success": True, "evaluation": evaluation, "word_count": result["word_count"]}
