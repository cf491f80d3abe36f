# backend/models/study_note.py
from sqlalchemy import Column, String, Integer, Text, JSON, DateTime, ForeignKey, func
from db import Base

class StudyNote(Base):
    __tablename__ = "study_notes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    subject = Column(String(200))
    topic = Column(String(300))
    content = Column(Text)
    tags = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
