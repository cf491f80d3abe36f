# backend/routers/sections.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import as_dict, get_db
from dependencies import get_current_user
from models.section_progress import OptionalProgress, PsirProgress


class SectionUpdate(BaseModel):
    section_name: str = Field(..., min_length=1, examples=["Paper 1 Section A"])
    completed_items: int = Field(..., ge=0, examples=[35])


def section_router(prefix, model, tag):
    """CRUD for per-section optional-subject progress, one row per (user, section)."""
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("")
    def list_sections(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
        rows = db.query(model).filter_by(user_id=user_id).order_by(model.id).all()
        return [as_dict(r) for r in rows]

    @router.put("")
    def update_section(data: SectionUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
        row = db.query(model).filter_by(user_id=user_id, section_name=data.section_name).first()
        if row is None:
            row = model(
                user_id=user_id,
                section_name=data.section_name,
                total_items=model.default_total(data.section_name),
            )
            db.add(row)
        row.completed_items = data.completed_items
        db.commit()
        return {"success": True}

    return router


optional_router = section_router("/api/optional", OptionalProgress, "optional")
psir_router = section_router("/api/psir", PsirProgress, "psir")
