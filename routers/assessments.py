# backend/routers/assessments.py
import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from models.test_record import TEST_CATEGORIES, TEST_TYPES, TestRecord

router = APIRouter(prefix="/api/tests", tags=["tests"])

TestType = Literal[TEST_TYPES]
TestCategory = Literal[TEST_CATEGORIES]


# --------- Pydantic Models ---------
class TestInput(BaseModel):
    test_type: TestType = Field(..., examples=["prelims"])
    test_category: TestCategory = Field(..., examples=["full-length"])
    subject: str = Field(..., examples=["GS Paper 1"])
    total_marks: int = Field(..., gt=0, examples=[200])
    # scored may exceed total (bonus / negative-marking corrections)
    scored_marks: float = Field(..., examples=[112.66])
    attempt_date: datetime.date = Field(..., examples=["2025-03-02"])


class TestUpdate(BaseModel):
    id: int
    test_type: Optional[TestType] = None
    test_category: Optional[TestCategory] = None
    subject: Optional[str] = None
    total_marks: Optional[int] = Field(None, gt=0)
    scored_marks: Optional[float] = None
    attempt_date: Optional[datetime.date] = None


def _get_record(db: Session, record_id: int, user_id: int) -> TestRecord:
    record = db.query(TestRecord).filter_by(id=record_id, user_id=user_id).first()
    if record is None:
        raise HTTPException(status_code=404, detail="Test record not found")
    return record


@router.get("")
def list_tests(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    rows = (
        db.query(TestRecord)
        .filter_by(user_id=user_id)
        .order_by(TestRecord.attempt_date.desc(), TestRecord.id.desc())
        .all()
    )
    return [as_dict(r) for r in rows]


@router.post("")
def create_test(data: TestInput, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    record = TestRecord(user_id=user_id, **data.model_dump())
    db.add(record)
    db.commit()
    return {"success": True, "id": record.id}


@router.put("")
def update_test(data: TestUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    record = _get_record(db, data.id, user_id)
    for key, value in data.model_dump(exclude={"id"}, exclude_unset=True).items():
        setattr(record, key, value)
    db.commit()
    return {"success": True}


@router.delete("")
def delete_test(id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    db.delete(_get_record(db, id, user_id))
    db.commit()
    return {"success": True}
