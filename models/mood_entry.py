# backend/models/mood_entry.py
from sqlalchemy import Column, String, Integer, Text, Date, DateTime, ForeignKey, UniqueConstraint, func
from db import Base

# mood label -> wellbeing score (0-100)
MOOD_SCORES = {
    "happy": 100,
    "excited": 95,
    "motivated": 90,
    "confident": 85,
    "neutral": 50,
    "tired": 40,
    "stressed": 30,
    "frustrated": 25,
    "sad": 20,
    "anxious": 15,
    "overwhelmed": 10,
    "bored": 35,
}

class MoodEntry(Base):
    __tablename__ = "mood_entries"
    __table_args__ = (UniqueConstraint("user_id", "date", name="unique_user_date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    date = Column(Date, nullable=False)
    mood = Column(String(50), nullable=False)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
