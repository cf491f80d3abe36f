# backend/models/essay_progress.py
from sqlalchemy import Column, Integer, DateTime, ForeignKey, func
from db import Base

class EssayProgress(Base):
    __tablename__ = "essay_progress"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    lectures_completed = Column(Integer, default=0)
    essays_written = Column(Integer, default=0)
    total_lectures = Column(Integer, default=10)
    total_essays = Column(Integer, default=100)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
