# backend/models/daily_goal.py
from sqlalchemy import Column, String, Integer, Numeric, Text, Date, DateTime, ForeignKey, func
from db import Base

class DailyGoal(Base):
    __tablename__ = "daily_goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    date = Column(Date, index=True)
    subject = Column(String(100))
    hours_studied = Column(Numeric(4, 1, asdecimal=False), default=0)
    topics_covered = Column(Integer, default=0)
    questions_solved = Column(Integer, default=0)
    notes = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
