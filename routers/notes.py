# backend/routers/notes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from models.ai_log import SmartNote
from models.study_note import StudyNote

router = APIRouter(prefix="/api/notes", tags=["notes"])


class NoteInput(BaseModel):
    subject: str = Field(..., min_length=1, examples=["Polity"])
    topic: str = Field(..., min_length=1, examples=["Federalism"])
    content: str = Field(..., examples=["Quasi-federal structure, Art. 246 and the three lists"])
    tags: List[str] = Field(default_factory=list, examples=[["gs2", "revision"]])


@router.get("")
def list_notes(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    rows = (
        db.query(StudyNote)
        .filter_by(user_id=user_id)
        .order_by(StudyNote.created_at.desc(), StudyNote.id.desc())
        .all()
    )
    return {"data": [as_dict(r) for r in rows]}


@router.post("")
def create_note(data: NoteInput, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    note = StudyNote(user_id=user_id, **data.model_dump())
    db.add(note)
    db.commit()
    return {"success": True, "id": note.id}


@router.delete("")
def delete_note(id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    note = db.query(StudyNote).filter_by(id=id, user_id=user_id).first()
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    db.delete(note)
    db.commit()
    return {"success": True}


@router.get("/smart")
def list_smart_notes(subject: Optional[str] = None, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    """Notes generated by the smart-features assistant, newest first."""
    query = db.query(SmartNote).filter_by(user_id=user_id)
    if subject:
        query = query.filter_by(subject=subject)
    rows = query.order_by(SmartNote.created_at.desc(), SmartNote.id.desc()).all()
    return {"data": [as_dict(r) for r in rows]}
