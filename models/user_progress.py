# backend/models/user_progress.py

from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, func
from db import Base

class UserProgress(Base):
    __tablename__ = "user_progress"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, index=True, nullable=False)
    prelims_questions = Column(Integer, default=0)
    mains_questions = Column(Integer, default=0)
    current_level = Column(String(50), default="Iron")
    total_points = Column(Integer, default=0)
    streak_days = Column(Integer, default=0)
    last_activity = Column(Date, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
