# backend/routers/questions.py
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from models.question import Question, QuestionAttempt

router = APIRouter(prefix="/api/questions", tags=["questions"])


# --------- Pydantic Models ---------
class QuestionInput(BaseModel):
    subject: str = Field(..., examples=["Polity & Governance"])
    topic: str = Field("", examples=["Constitutional Bodies"])
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2, examples=[["A", "B", "C", "D"]])
    correct_answer: str = Field(..., max_length=10, examples=["A"])
    explanation: str = ""
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    year: int = 2024
    exam_type: Literal["prelims", "mains"] = "prelims"


class AttemptInput(BaseModel):
    question_id: int
    selected_answer: str = Field(..., max_length=10, examples=["B"])
    # derived from the question's answer key when omitted
    is_correct: Optional[bool] = None
    time_taken: Optional[int] = Field(None, ge=0, examples=[65])


@router.get("")
def list_questions(db: Session = Depends(get_db)):
    rows = db.query(Question).order_by(Question.created_at.desc(), Question.id.desc()).all()
    return {"data": [as_dict(r) for r in rows]}


@router.post("")
def create_question(data: QuestionInput, db: Session = Depends(get_db)):
    question = Question(**data.model_dump())
    db.add(question)
    db.commit()
    return {"success": True, "id": question.id}


@router.get("/attempts")
def list_attempts(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    rows = (
        db.query(QuestionAttempt)
        .filter_by(user_id=user_id)
        .order_by(QuestionAttempt.attempted_at.desc(), QuestionAttempt.id.desc())
        .all()
    )
    return {"data": [as_dict(r) for r in rows]}


@router.post("/attempts")
def record_attempt(data: AttemptInput, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    question = db.get(Question, data.question_id)
    if question is None:
        raise HTTPException(status_code=404, detail="Question not found")

    is_correct = data.is_correct
    if is_correct is None:
        is_correct = data.selected_answer.strip().upper() == (question.correct_answer or "").strip().upper()

    attempt = QuestionAttempt(
        user_id=user_id,
        question_id=question.id,
        selected_answer=data.selected_answer,
        is_correct=is_correct,
        time_taken=data.time_taken,
    )
    db.add(attempt)
    db.commit()
    return {"success": True, "id": attempt.id, "is_correct": is_correct}
