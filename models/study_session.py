# backend/models/study_session.py
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, func
from db import Base

SESSION_TYPES = ("focus", "break", "pomodoro")
# session types that count as study time
STUDY_SESSION_TYPES = ("focus", "pomodoro")

class StudySession(Base):
    __tablename__ = "study_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    subject = Column(String(200), default="General Study")
    start_time = Column(DateTime(timezone=True), index=True)
    end_time = Column(DateTime(timezone=True))
    duration_minutes = Column(Integer, default=0)
    session_type = Column(String(20), default="focus")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
